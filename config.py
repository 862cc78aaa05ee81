# config.py — Settings (env vars / Streamlit secrets) and logging setup
from __future__ import annotations
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

import streamlit as st

from treemap_layout import Margins

TRUTHY = ("1", "true", "yes", "y", "on")

LOG_FORMAT = "%(levelname)s | %(message)s"
LOG_FORMAT_VERBOSE = "%(levelname)s | %(filename)s:%(lineno)d | %(message)s"


@dataclass(frozen=True)
class Settings:
    width: int = 1200        # drawing surface, px
    height: int = 720
    margins: Margins = field(default_factory=Margins)
    timeout: Optional[float] = None  # None = wait for the server
    data_dir: Optional[str] = None   # dev: read <data_dir>/<dataset file> instead of the CDN
    dev: bool = False
    log_level: str = "INFO"


def _secret(name: str) -> Any:
    try:
        return st.secrets.get("treemap", {}).get(name)
    except Exception:
        return None  # no secrets.toml


def _raw(name: str, env: str) -> Any:
    v = os.getenv(env)
    if v is not None and v.strip() != "":
        return v.strip()
    return _secret(name)


def _num(name: str, env: str, default, cast):
    v = _raw(name, env)
    if v is None:
        return default
    try:
        return cast(v)
    except (TypeError, ValueError):
        logging.getLogger("treemap").warning("Ignoring %s=%r (not a number)", env, v)
        return default


def _dev_mode() -> bool:
    v = _raw("dev_mode", "DEV_MODE")
    if isinstance(v, bool):
        return v
    return str(v or "").strip().lower() in TRUTHY


def load_settings() -> Settings:
    d = Settings()
    return Settings(
        width=_num("width", "TREEMAP_WIDTH", d.width, int),
        height=_num("height", "TREEMAP_HEIGHT", d.height, int),
        timeout=_num("timeout", "TREEMAP_TIMEOUT", d.timeout, float),
        data_dir=_raw("data_dir", "TREEMAP_DATA_DIR") or None,
        dev=_dev_mode(),
        log_level=str(_raw("log_level", "TREEMAP_LOG_LEVEL") or d.log_level).upper(),
    )


_handler: Optional[logging.Handler] = None


def configure_logging(level: str = "INFO", verbose: bool = False) -> logging.Logger:
    """One stderr handler on the 'treemap' logger; safe to call on every rerun."""
    global _handler
    logger = logging.getLogger("treemap")
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        logger.addHandler(_handler)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT_VERBOSE if verbose else LOG_FORMAT))
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    logger.setLevel(level)
    return logger
