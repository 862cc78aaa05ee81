# datasets.py — Static dataset registry (key → title / description / source / formatter)
from __future__ import annotations
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping
from typing import Iterator, Optional

from formatters import NumberFormatter, get_formatter

CDN_BASE = "https://cdn.rawgit.com/freeCodeCamp/testable-projects-fcc/a80ce8f9/src/data/tree_map"
DEFAULT_KEY = "kickstarter"


@dataclass(frozen=True)
class DatasetSpec:
    key: str
    title: str
    description: str
    url: str
    formatter: NumberFormatter

    @property
    def filename(self) -> str:
        return self.url.rsplit("/", 1)[-1]

    @property
    def fragment(self) -> str:
        return f"#{self.key}"

    @property
    def href(self) -> str:
        return f"?view={self.key}"


class DatasetRegistry(Mapping):
    """Read-only, declaration-ordered mapping of key → DatasetSpec."""

    def __init__(self, specs, default_key: str = DEFAULT_KEY):
        items = {s.key: s for s in specs}
        if default_key not in items:
            raise ValueError(f"Default dataset '{default_key}' is not registered.")
        self._items = MappingProxyType(items)
        self._default_key = default_key

    def __getitem__(self, key: str) -> DatasetSpec:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def default(self) -> DatasetSpec:
        return self._items[self._default_key]

    def specs(self) -> tuple:
        return tuple(self._items.values())


_SPECS = (
    DatasetSpec(
        key="videogames",
        title="Video Game Sales",
        description="Top 100 Most Sold Video Games Grouped by Platform",
        url=f"{CDN_BASE}/video-game-sales-data.json",
        formatter=get_formatter("decimal"),
    ),
    DatasetSpec(
        key="movies",
        title="Movie Sales",
        description="Top 100 Highest Grossing Movies Grouped By Genre",
        url=f"{CDN_BASE}/movie-data.json",
        formatter=get_formatter("currency"),
    ),
    DatasetSpec(
        key="kickstarter",
        title="Kickstarter Pledges",
        description="Top 100 Most Pledged Kickstarter Campaigns Grouped By Category",
        url=f"{CDN_BASE}/kickstarter-funding-data.json",
        formatter=get_formatter("currency"),
    ),
)

DEFAULT_REGISTRY = DatasetRegistry(_SPECS)


def build_registry(base_url: Optional[str] = None, data_dir: Optional[str | Path] = None) -> DatasetRegistry:
    """Re-point every source URL at another base URL or at local copies (dev mode)."""
    if data_dir:
        root = Path(data_dir).expanduser().resolve()
        specs = [replace(s, url=(root / s.filename).as_uri()) for s in _SPECS]
    elif base_url:
        specs = [replace(s, url=f"{base_url.rstrip('/')}/{s.filename}") for s in _SPECS]
    else:
        return DEFAULT_REGISTRY
    return DatasetRegistry(specs)
