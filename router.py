# router.py — URL ⇄ active dataset (navigation handler)
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

import streamlit as st

from datasets import DatasetRegistry, DatasetSpec

logger = logging.getLogger("treemap.router")

PARAM = "view"


@dataclass(frozen=True)
class Resolution:
    dataset: DatasetSpec
    corrected: bool


def _clean(raw: Optional[str]) -> str:
    s = "" if raw is None else str(raw).strip()
    return s[1:] if s.startswith("#") else s


def resolve_key(raw: Optional[str], registry: DatasetRegistry) -> Resolution:
    """'#movies' / 'movies' → movies; anything unknown or empty → the registry default."""
    key = _clean(raw)
    if key in registry:
        return Resolution(registry[key], corrected=False)
    return Resolution(registry.default, corrected=True)


class History(Protocol):
    def current(self) -> Optional[str]: ...

    def push(self, key: str) -> None: ...

    def replace(self, key: str) -> None: ...


class MemoryHistory:
    """In-process history stack; `entries[-1]` is the visible URL key."""

    def __init__(self, initial: Optional[str] = None):
        self.entries: List[Optional[str]] = [initial]

    def current(self) -> Optional[str]:
        return self.entries[-1]

    def push(self, key: Optional[str]) -> None:
        self.entries.append(key)

    def replace(self, key: str) -> None:
        self.entries[-1] = key

    @property
    def fragment(self) -> str:
        cur = _clean(self.current())
        return f"#{cur}" if cur else ""


class QueryParamHistory:
    """Streamlit binding: the active key lives in ?view=<key>."""

    def __init__(self, param: str = PARAM):
        self.param = param

    def current(self) -> Optional[str]:
        v = st.query_params.get(self.param)
        if isinstance(v, list):
            v = v[0] if v else None
        return v

    def push(self, key: str) -> None:
        # called from a widget callback; the rerun that follows picks it up
        st.query_params[self.param] = key

    def replace(self, key: str) -> None:
        # assigning inside a script run updates the URL without starting a new run
        st.query_params[self.param] = key


class Navigator:
    def __init__(self, registry: DatasetRegistry, history: History):
        self.registry = registry
        self.history = history

    def navigate(self) -> DatasetSpec:
        raw = self.history.current()
        res = resolve_key(raw, self.registry)
        if res.corrected:
            logger.info("Unknown view %r, showing '%s'", raw, res.dataset.key)
            self.history.replace(res.dataset.key)
        return res.dataset
