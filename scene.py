# scene.py — Declarative scene description for one treemap render
"""
build_scene() turns a parsed tree plus its dataset metadata into a Scene:
tiles (plot-local rectangles with fill, label lines and tooltip text),
title / subtitle, a vertical legend and the dataset nav links. Drawing
layers (treemap_tab.figure_from_scene, svg_export.scene_to_svg) consume
the Scene and never look at the tree or the layout again.
"""
from __future__ import annotations
import textwrap
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from colors_tokens import category_scale
from datasets import DatasetRegistry, DatasetSpec
from hierarchy import Node, categories
from tooltip import raw_value, tooltip_html
from treemap_layout import Margins, layout_treemap, plot_area, tile_at

LABEL_FONT_SIZE = 10
LABEL_LINE_HEIGHT = 12
LABEL_PAD = 4
CHAR_WIDTH = 0.6  # average glyph width as a fraction of the font size

SWATCH_SIZE = 20
SWATCH_PADDING = 2
LEGEND_LABEL_OFFSET = 10
LEGEND_FONT_SIZE = 12


@dataclass(frozen=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass(frozen=True)
class TextItem:
    text: str
    x: float
    y: float
    element_id: str
    css_class: str


@dataclass(frozen=True)
class Tile:
    name: str
    category: str
    value: float
    x0: float
    y0: float
    x1: float
    y1: float
    fill: str
    label_lines: Tuple[str, ...]
    tooltip_html: str

    @property
    def area(self) -> float:
        return (self.x1 - self.x0) * (self.y1 - self.y0)

    @property
    def data_value(self) -> str:
        return raw_value(self.value)


@dataclass(frozen=True)
class LegendItem:
    category: str
    color: str
    x: float
    y: float


@dataclass(frozen=True)
class Legend:
    x: float
    y: float
    width: float
    height: float
    items: Tuple[LegendItem, ...]


@dataclass(frozen=True)
class NavLink:
    key: str
    label: str
    href: str
    active: bool


@dataclass(frozen=True)
class Scene:
    dataset_key: str
    width: float
    height: float
    margins: Margins
    plot: Rect
    title: TextItem
    subtitle: TextItem
    tiles: Tuple[Tile, ...]
    legend: Legend
    nav: Tuple[NavLink, ...]

    def tile_area_total(self) -> float:
        return sum(t.area for t in self.tiles)

    def active_links(self) -> List[NavLink]:
        return [n for n in self.nav if n.active]

    def tile_at(self, x: float, y: float) -> Optional[Tile]:
        """Tile under surface point (x, y), or None outside every tile."""
        return tile_at(self.tiles, x - self.plot.x0, y - self.plot.y0)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def label_lines(name: str, width: float, height: float) -> Tuple[str, ...]:
    """Word-wrap `name` to the tile width and drop lines below the tile bottom."""
    max_chars = int((width - 2 * LABEL_PAD) // (LABEL_FONT_SIZE * CHAR_WIDTH))
    max_lines = int((height - LABEL_PAD) // LABEL_LINE_HEIGHT)
    if max_chars < 1 or max_lines < 1 or not name:
        return ()
    lines = textwrap.wrap(name, width=max_chars, break_long_words=True, break_on_hyphens=False)
    return tuple(lines[:max_lines])


def _legend(scale_items, plot_w: float, plot_h: float, margins: Margins) -> Legend:
    n = len(scale_items)
    longest = max((len(c) for c, _ in scale_items), default=0)
    width = SWATCH_SIZE + LEGEND_LABEL_OFFSET + longest * LEGEND_FONT_SIZE * CHAR_WIDTH
    height = n * SWATCH_SIZE + max(n - 1, 0) * SWATCH_PADDING

    # centered in the right margin, vertically centered on the plot
    x = margins.left + plot_w + (margins.right - width) / 2
    y = (plot_h - height) / 2 + margins.top
    step = SWATCH_SIZE + SWATCH_PADDING
    items = tuple(LegendItem(c, col, x, y + i * step) for i, (c, col) in enumerate(scale_items))
    return Legend(x=x, y=y, width=width, height=height, items=items)


def nav_links(registry: DatasetRegistry, active_key: str) -> Tuple[NavLink, ...]:
    return tuple(
        NavLink(key=s.key, label=s.title, href=s.href, active=(s.key == active_key))
        for s in registry.specs()
    )


def build_scene(
    tree: Node,
    dataset: DatasetSpec,
    registry: DatasetRegistry,
    width: float,
    height: float,
    margins: Margins = Margins(),
) -> Scene:
    cats = categories(tree)
    w, h = plot_area(width, height, margins)
    root = layout_treemap(tree, w, h)

    scale = category_scale(tree)
    tiles = []
    for leaf in root.leaves():
        n = leaf.node
        tiles.append(Tile(
            name=n.name,
            category=n.category,
            value=n.value,
            x0=leaf.x0, y0=leaf.y0, x1=leaf.x1, y1=leaf.y1,
            fill=scale(n.category),
            label_lines=label_lines(n.name, leaf.x1 - leaf.x0, leaf.y1 - leaf.y0),
            tooltip_html=tooltip_html(n.name, n.category, n.value, dataset.formatter),
        ))

    # legend lists the top-level categories only, in first-seen order
    legend = _legend([(c, scale(c)) for c in cats], w, h, margins)

    title = TextItem(dataset.title, margins.left + w / 2, margins.top / 2, "title", "title")
    subtitle = TextItem(dataset.description, margins.left + w / 2, margins.top - 20, "description", "subtitle")

    return Scene(
        dataset_key=dataset.key,
        width=width,
        height=height,
        margins=margins,
        plot=Rect(margins.left, margins.top, margins.left + w, margins.top + h),
        title=title,
        subtitle=subtitle,
        tiles=tuple(tiles),
        legend=legend,
        nav=nav_links(registry, dataset.key),
    )
