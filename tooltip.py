# tooltip.py — Hover tooltip: hidden ⇄ shown
"""
Tooltip is the single description of the hover box: its text, where it
sits relative to the pointer and how each state looks. The Python state
machine is used for hit-test inspection (svg_export --inspect); script()
hands the same states and offset to the browser so the live chart shows
the identical box next to the pointer.
"""
from __future__ import annotations
import html
import json
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from colors_tokens import TOKENS
from formatters import NumberFormatter

HIDDEN, SHOWN = "hidden", "shown"

# CSS applied per state
STYLES: Dict[str, Dict[str, str]] = {
    SHOWN: {"opacity": "0.9", "display": "inline-block"},
    HIDDEN: {"opacity": "0", "display": "none"},
}

_BOX_CSS = {
    "position": "absolute",
    "pointerEvents": "none",
    "padding": "6px 8px",
    "borderRadius": "4px",
    "background": TOKENS["tooltip_bg"],
    "color": "#000000",
    "font": "12px Helvetica, Arial, sans-serif",
    "lineHeight": "1.4",
    "transition": "opacity 0.2s",
}

# {plot_id} is filled in by plotly's to_html(post_script=...)
_SCRIPT = """
(function () {
  var cfg = __CONFIG__;
  var gd = document.getElementById('{plot_id}');
  var tip = document.createElement('div');
  tip.id = 'tooltip';
  Object.assign(tip.style, cfg.box, cfg.hidden);
  document.body.appendChild(tip);
  gd.on('plotly_hover', function (ev) {
    var p = ev.points && ev.points[0];
    if (!p || !p.data.meta) { return; }
    tip.innerHTML = p.data.text;
    tip.setAttribute('data-value', p.data.meta.value);
    Object.assign(tip.style, cfg.shown);
    tip.style.left = (ev.event.pageX + cfg.offset[0]) + 'px';
    tip.style.top = (ev.event.pageY + cfg.offset[1]) + 'px';
  });
  gd.on('plotly_unhover', function () {
    Object.assign(tip.style, cfg.hidden);
  });
})();
"""


def tooltip_html(name: str, category: str, value: float, formatter: NumberFormatter) -> str:
    return (
        f"Name: {html.escape(str(name))}<br>"
        f"Category: {html.escape(str(category))}<br>"
        f"Value: {formatter.format(value)}"
    )


def raw_value(value: float) -> str:
    """data-value attribute text: integral floats without the trailing .0"""
    v = float(value)
    return str(int(v)) if v.is_integer() else repr(v)


@dataclass
class Tooltip:
    formatter: NumberFormatter
    offset: Tuple[float, float] = (10, -70)
    state: str = HIDDEN
    opacity: float = 0.0
    display: str = "none"
    content: str = ""
    left: float = 0.0
    top: float = 0.0
    data_value: Optional[str] = None

    def _apply(self, state: str) -> None:
        self.state = state
        self.opacity = float(STYLES[state]["opacity"])
        self.display = STYLES[state]["display"]

    def on_pointer_move(self, tile, x: float, y: float) -> None:
        """`tile` is anything with name / category / value (a scene Tile)."""
        self._apply(SHOWN)
        self.content = tooltip_html(tile.name, tile.category, tile.value, self.formatter)
        self.left = x + self.offset[0]
        self.top = y + self.offset[1]
        self.data_value = raw_value(tile.value)

    def on_pointer_out(self) -> None:
        self._apply(HIDDEN)

    def reset(self) -> None:
        self.on_pointer_out()
        self.content = ""
        self.data_value = None

    @property
    def visible(self) -> bool:
        return self.state == SHOWN

    def text(self) -> str:
        """Plain-text rendition of the content (one field per line)."""
        return html.unescape(self.content.replace("<br>", "\n"))

    def script(self) -> str:
        """Browser-side handler for the chart: same offset, same state styles."""
        cfg = {
            "offset": list(self.offset),
            "box": _BOX_CSS,
            "shown": STYLES[SHOWN],
            "hidden": STYLES[HIDDEN],
        }
        return _SCRIPT.replace("__CONFIG__", json.dumps(cfg))
