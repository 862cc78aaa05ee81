# formatters.py — Number formatting presets referenced by the dataset registry
from __future__ import annotations
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from types import MappingProxyType

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}

# enough digits for any finite float (max ~1.8e308) plus fraction digits
_PRECISION = 400


@dataclass(frozen=True)
class NumberFormatter:
    """en-US style grouping ("1,234,567"); `style` is "currency" or "decimal"."""
    style: str = "decimal"
    currency: str = "USD"
    max_fraction_digits: int = 0

    def _body(self, v: float) -> str:
        if math.isinf(v):
            return "∞"
        with localcontext() as ctx:
            ctx.prec = _PRECISION
            q = Decimal(1).scaleb(-self.max_fraction_digits)
            d = Decimal(repr(v)).quantize(q, rounding=ROUND_HALF_UP)
            return f"{d:,.{self.max_fraction_digits}f}"

    def format(self, value) -> str:
        v = float(value)
        if math.isnan(v):
            return "NaN"
        body = self._body(abs(v))
        # -0.4 rounds to "0", not "-0"
        sign = "-" if v < 0 and body.strip("0.,") else ""
        if self.style == "currency":
            return f"{sign}{CURRENCY_SYMBOLS.get(self.currency, self.currency + ' ')}{body}"
        return f"{sign}{body}"

    __call__ = format


CURRENCY = NumberFormatter(style="currency", currency="USD")
DECIMAL = NumberFormatter(style="decimal")

FORMATTERS = MappingProxyType({"currency": CURRENCY, "decimal": DECIMAL})


def get_formatter(name: str) -> NumberFormatter:
    return FORMATTERS[name]
