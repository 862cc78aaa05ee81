# common_header.py
from typing import Callable, List, Optional, Tuple

import streamlit as st


def page_setup(hide_sidebar=True, page_title="Treemap Explorer"):
    st.set_page_config(page_title=page_title, layout="wide",
                       initial_sidebar_state="collapsed")
    if hide_sidebar:
        st.markdown("<style>[data-testid='stSidebar']{display:none;}</style>", unsafe_allow_html=True)

    st.markdown("""
    <style>
      .block-container { max-width:1280px; padding: 1.9rem .8rem 1rem; }
      .st-key-toplinks [data-testid="stHorizontalBlock"] { gap:.5rem !important; }
      .st-key-toplinks button { border-radius:10px; }
    </style>
    """, unsafe_allow_html=True)


def nav_items(links) -> List[Tuple[str, str, str]]:
    """(key, label, button type) per dataset; only the active one is "primary"."""
    return [(ln.key, ln.label, "primary" if ln.active else "secondary") for ln in links]


def top_nav(links, on_select: Callable[[str], None], slot=None):
    """
    One button per dataset. Clicking runs `on_select(key)` as a callback and
    Streamlit reruns in the same session, so session_state survives.
    """
    items = nav_items(links)
    host = (slot or st).container(key="toplinks")
    cols = host.columns(len(items) + 1, gap="small")
    for col, (key, label, kind) in zip(cols, items):
        with col:
            st.button(label, key=f"nav_{key}", type=kind, on_click=on_select, args=(key,),
                      use_container_width=True)
