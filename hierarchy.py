# hierarchy.py — Parsed data tree: {name, category, value, children}
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Tuple


class DatasetFormatError(ValueError):
    """The fetched document does not have the {name, children: [...]} shape."""


@dataclass(frozen=True)
class Node:
    name: str
    category: str = ""
    value: float = 0.0
    children: Tuple["Node", ...] = field(default_factory=tuple)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def leaves(self) -> Iterator["Node"]:
        """Depth-first, document order."""
        if self.is_leaf:
            yield self
            return
        for c in self.children:
            yield from c.leaves()

    def total(self) -> float:
        """Sum of descendant leaf values (the node's own value for a leaf)."""
        if self.is_leaf:
            return self.value
        return sum(c.total() for c in self.children)


def _to_number(raw: Any, where: str) -> float:
    if raw is None or raw == "":
        return 0.0
    if isinstance(raw, bool):
        raise DatasetFormatError(f"Non-numeric value at {where}: {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise DatasetFormatError(f"Non-numeric value at {where}: {raw!r}") from None


def _build(d: Any, path: str) -> Node:
    if not isinstance(d, dict):
        raise DatasetFormatError(f"Expected an object at {path}, got {type(d).__name__}")
    name = "" if d.get("name") is None else str(d.get("name"))
    kids = d.get("children")
    if kids is not None and not isinstance(kids, list):
        raise DatasetFormatError(f"'children' must be a list at {path}/{name}")
    if not kids and path:
        # an empty children list is a leaf too; it keeps its own value
        return Node(
            name=name,
            category="" if d.get("category") is None else str(d.get("category")),
            value=_to_number(d.get("value"), f"{path}/{name}"),
        )
    return Node(
        name=name,
        category="" if d.get("category") is None else str(d.get("category")),
        children=tuple(_build(k, f"{path}/{name}") for k in kids),
    )


def parse_tree(doc: Any) -> Node:
    """Build a Node tree from the decoded JSON document."""
    if not isinstance(doc, dict) or not isinstance(doc.get("children"), list):
        raise DatasetFormatError("Document must be an object with a 'children' list.")
    return _build(doc, "")


def categories(tree: Node) -> List[str]:
    """Names of the tree's immediate children, first-seen order, no duplicates."""
    seen, out = set(), []
    for c in tree.children:
        if c.name not in seen:
            seen.add(c.name)
            out.append(c.name)
    return out
