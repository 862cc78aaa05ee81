# treemap_layout.py — Margins, plotting area and squarified treemap layout
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Tuple

import numpy as np
import squarify  # pip install squarify

from hierarchy import Node


@dataclass(frozen=True)
class Margins:
    left: float = 50
    right: float = 200
    top: float = 100
    bottom: float = 50


def plot_area(width: float, height: float, margins: Margins = Margins()) -> Tuple[float, float]:
    """Active plotting size = surface size minus the fixed margins."""
    w = width - margins.left - margins.right
    h = height - margins.top - margins.bottom
    if w <= 0 or h <= 0:
        raise ValueError(f"Surface {width}x{height} is smaller than its margins {margins}.")
    return w, h


@dataclass(frozen=True)
class LayoutNode:
    node: Node
    value: float
    depth: int
    x0: float
    y0: float
    x1: float
    y1: float
    children: Tuple["LayoutNode", ...] = field(default_factory=tuple)

    @property
    def area(self) -> float:
        return (self.x1 - self.x0) * (self.y1 - self.y0)

    def leaves(self) -> Iterator["LayoutNode"]:
        if not self.children:
            if self.node.is_leaf and self.value > 0:
                yield self
            return
        for c in self.children:
            yield from c.leaves()


def _weight(node: Node) -> float:
    # only positive leaves take up space
    if node.is_leaf:
        return node.value if node.value > 0 else 0.0
    return sum(_weight(c) for c in node.children)


def _layout(node: Node, value: float, x0, y0, x1, y1, depth: int) -> LayoutNode:
    dx, dy = x1 - x0, y1 - y0
    kids = [(c, _weight(c)) for c in node.children]
    kids = [kv for kv in kids if kv[1] > 0]
    if not kids or dx <= 0 or dy <= 0:
        return LayoutNode(node, value, depth, x0, y0, x1, y1)

    # squarify expects descending sizes; sort is stable so ties keep document order
    kids.sort(key=lambda kv: kv[1], reverse=True)
    sizes = squarify.normalize_sizes([v for _, v in kids], dx, dy)
    rects = squarify.squarify(sizes, x0, y0, dx, dy)

    children = tuple(
        _layout(c, v, r["x"], r["y"], r["x"] + r["dx"], r["y"] + r["dy"], depth + 1)
        for (c, v), r in zip(kids, rects)
    )
    return LayoutNode(node, value, depth, x0, y0, x1, y1, children)


def layout_treemap(tree: Node, width: float, height: float) -> LayoutNode:
    """
    Lay the tree out over [0, width] x [0, height].
    Leaves partition the rectangle, area proportional to value, no overlaps.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Layout area must be positive, got {width}x{height}.")
    return _layout(tree, _weight(tree), 0.0, 0.0, float(width), float(height), 0)


def tile_at(leaves: Sequence, x: float, y: float):
    """Hit test over anything with x0/y0/x1/y1: the last rectangle containing (x, y)."""
    if not leaves:
        return None
    b = np.array([[l.x0, l.y0, l.x1, l.y1] for l in leaves], dtype=float)
    hit = (b[:, 0] <= x) & (x <= b[:, 2]) & (b[:, 1] <= y) & (y <= b[:, 3])
    idx = np.flatnonzero(hit)
    return leaves[int(idx[-1])] if idx.size else None
