# data_io.py — Fetch one dataset per navigation; tabular views of the tree
from __future__ import annotations
import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import urlparse
from urllib.request import url2pathname

import pandas as pd
import requests

from datasets import DatasetSpec
from hierarchy import Node, parse_tree

logger = logging.getLogger("treemap.data")

T = TypeVar("T")

LOAD_ERRORS = (requests.RequestException, OSError, ValueError)


def fetch_json(url: str, timeout: Optional[float] = None, session=None) -> Any:
    """GET and decode one JSON document. file:// URLs and bare paths are read from disk."""
    if url.startswith("file://"):
        p = Path(url2pathname(urlparse(url).path))
        return json.loads(p.read_text(encoding="utf-8"))
    if "://" not in url:
        return json.loads(Path(url).read_text(encoding="utf-8"))

    http = session or requests
    resp = http.get(url, timeout=timeout)
    resp.raise_for_status()
    return resp.json()


class DatasetLoader:
    """
    One fetch per navigation. Every load takes a ticket from a generation
    counter; a response whose ticket is no longer the newest is dropped,
    so a slow earlier fetch can never overwrite a later render.
    """

    def __init__(self, timeout: Optional[float] = None, session=None):
        self.timeout = timeout
        self.session = session
        self._generation = 0
        self._lock = threading.RLock()

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._generation

    def fetch(self, dataset: DatasetSpec) -> Node:
        return parse_tree(fetch_json(dataset.url, timeout=self.timeout, session=self.session))

    def load(self, dataset: DatasetSpec, render: Callable[[Node, DatasetSpec], T]) -> Optional[T]:
        ticket = self.begin()
        try:
            tree = self.fetch(dataset)
        except LOAD_ERRORS as exc:
            logger.warning("Error loading %s: %s", dataset.key, exc)
            return None

        with self._lock:
            if ticket != self._generation:
                logger.debug("Dropping stale response for %s (ticket %d < %d)",
                             dataset.key, ticket, self._generation)
                return None
            return render(tree, dataset)


# ---- Tabular views (exports / captions) ----
def leaves_frame(tree: Node) -> pd.DataFrame:
    rows = [{"name": n.name, "category": n.category, "value": n.value} for n in tree.leaves()]
    return pd.DataFrame(rows, columns=["name", "category", "value"])


def category_totals(tree: Node) -> pd.DataFrame:
    df = leaves_frame(tree)
    agg = df.groupby("category", as_index=False, sort=False)["value"].sum()
    return agg.sort_values("value", ascending=False, kind="stable").reset_index(drop=True)
