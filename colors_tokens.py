# colors_tokens.py —— Single Source of Truth for colors
from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

from plotly.colors import colorbrewer, qualitative

from hierarchy import Node, categories

# Categorical palette: ColorBrewer "Paired" followed by "Set3" (24 swatches)
PALETTE: Tuple[str, ...] = tuple(colorbrewer.Paired) + tuple(qualitative.Set3)

# Chart chrome
TOKENS = {
    "background": "#FFFFFF",
    "tile_stroke": "#FFFFFF",
    "label": "#1F1F1F",
    "title": "#111111",
    "subtitle": "#444444",
    "tooltip_bg": "rgba(255,255,224,0.9)",
}


class OrdinalScale:
    """
    Category → color. Domain keeps first-seen order; range cycles when the
    domain is longer than the palette. Unknown categories are appended.
    """

    def __init__(self, domain: Iterable[str] = (), range_: Sequence[str] = PALETTE):
        if not range_:
            raise ValueError("Color range must not be empty.")
        self._range = tuple(range_)
        self._domain: List[str] = []
        self._index = {}
        for d in domain:
            self._add(d)

    def _add(self, value: str) -> int:
        if value not in self._index:
            self._index[value] = len(self._domain)
            self._domain.append(value)
        return self._index[value]

    def __call__(self, value: str) -> str:
        return self._range[self._add(value) % len(self._range)]

    @property
    def domain(self) -> Tuple[str, ...]:
        return tuple(self._domain)

    @property
    def range(self) -> Tuple[str, ...]:
        return self._range

    def items(self) -> List[Tuple[str, str]]:
        return [(d, self(d)) for d in self.domain]


def category_scale(tree: Node, range_: Sequence[str] = PALETTE) -> OrdinalScale:
    return OrdinalScale(categories(tree), range_)
