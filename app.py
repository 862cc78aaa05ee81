# app.py — Treemap Explorer: one page, dataset picked by ?view=videogames|movies|kickstarter
import streamlit as st
import streamlit.components.v1 as components

from common_header import page_setup, top_nav
from config import configure_logging, load_settings
from data_io import DatasetLoader, category_totals
from datasets import build_registry
from router import Navigator, QueryParamHistory
from scene import nav_links
from tooltip import Tooltip
from treemap_tab import figure_html, treemap_exports, treemap_render

page_setup()

settings = load_settings()
configure_logging(settings.log_level, verbose=settings.dev)
registry = build_registry(data_dir=settings.data_dir if settings.dev else None)
history = QueryParamHistory()

# Links go on top but are filled in after the render (active marker)
nav_slot = st.empty()

dataset = Navigator(registry, history).navigate()

if "loader" not in st.session_state:
    st.session_state["loader"] = DatasetLoader(timeout=settings.timeout)
loader: DatasetLoader = st.session_state["loader"]


def _render(tree, ds):
    fig, scene = treemap_render(tree, ds, registry, settings)
    page = figure_html(fig, Tooltip(ds.formatter))
    st.session_state["last_render"] = {"html": page, "key": ds.key}
    return page, scene, tree


def _show(page: str):
    components.html(page, width=settings.width, height=settings.height + 16, scrolling=False)


with st.spinner(f"Loading {dataset.title}…"):
    result = loader.load(dataset, _render)

# ---- Fetch failed: keep whatever was on screen before ----
if result is None:
    last = st.session_state.get("last_render")
    if last is None:
        top_nav(nav_links(registry, ""), history.push, slot=nav_slot)
        st.stop()
    top_nav(nav_links(registry, last["key"]), history.push, slot=nav_slot)
    _show(last["html"])
    st.stop()

page, scene, tree = result
top_nav(scene.nav, history.push, slot=nav_slot)
_show(page)

export_host = st.expander("Export", expanded=False)
treemap_exports(export_host, tree, scene, page)

if settings.dev:
    totals = category_totals(tree)
    st.caption(f"{len(scene.tiles)} tiles · {len(totals)} categories · "
               f"total {dataset.formatter.format(totals['value'].sum())}")
    st.dataframe(totals, hide_index=True)
