# treemap_tab.py — Treemap drawing layer: Scene → Plotly figure, plus export buttons
from __future__ import annotations
import html
import json
from typing import Any, Dict, Tuple

import plotly.graph_objects as go
import streamlit as st

from colors_tokens import TOKENS
from config import Settings
from data_io import leaves_frame
from datasets import DatasetRegistry, DatasetSpec
from hierarchy import Node
from scene import LABEL_FONT_SIZE, LABEL_PAD, Scene, build_scene
from svg_export import scene_to_svg
from tooltip import Tooltip

_TITLE_FONT_SIZE = 28
_SUBTITLE_FONT_SIZE = 16
_LEGEND_FONT_SIZE = 12


def _tile_trace(t, ox: float, oy: float) -> go.Scatter:
    x0, y0, x1, y1 = t.x0 + ox, t.y0 + oy, t.x1 + ox, t.y1 + oy
    return go.Scatter(
        x=[x0, x1, x1, x0, x0],
        y=[y0, y0, y1, y1, y0],
        mode="lines",
        fill="toself",
        fillcolor=t.fill,
        line=dict(color=TOKENS["tile_stroke"], width=1),
        hoveron="fills",
        hoverinfo="none",  # events still fire; the tooltip script draws the box
        text=t.tooltip_html,
        name=t.category,
        legendgroup=t.category,
        showlegend=False,
        meta={"name": t.name, "category": t.category, "value": t.data_value},
    )


def _legend_trace(category: str, color: str) -> go.Scatter:
    # legend-only swatch; toggling it hides every tile in the category
    return go.Scatter(
        x=[None],
        y=[None],
        mode="markers",
        marker=dict(symbol="square", size=18, color=color),
        name=category,
        legendgroup=category,
        showlegend=True,
        hoverinfo="skip",
    )


def _apply_chrome(fig: go.Figure, scene: Scene) -> None:
    """Title / subtitle / tile labels as annotations in surface pixels."""
    notes = [
        dict(text=html.escape(scene.title.text), x=scene.title.x, y=scene.title.y,
             font=dict(size=_TITLE_FONT_SIZE, color=TOKENS["title"])),
        # subtitle keeps its inline markup (<b>, <i>, <br> …)
        dict(text=scene.subtitle.text, x=scene.subtitle.x, y=scene.subtitle.y,
             font=dict(size=_SUBTITLE_FONT_SIZE, color=TOKENS["subtitle"])),
    ]
    for n in notes:
        fig.add_annotation(xref="x", yref="y", showarrow=False, xanchor="center", yanchor="middle", **n)

    ox, oy = scene.plot.x0, scene.plot.y0
    for t in scene.tiles:
        if not t.label_lines:
            continue
        fig.add_annotation(
            text="<br>".join(html.escape(s) for s in t.label_lines),
            x=t.x0 + ox + LABEL_PAD,
            y=t.y0 + oy + LABEL_PAD,
            xref="x", yref="y",
            xanchor="left", yanchor="top", align="left",
            showarrow=False,
            font=dict(size=LABEL_FONT_SIZE, color=TOKENS["label"]),
            captureevents=False,
        )


# ===================== Render =====================
def figure_from_scene(scene: Scene) -> go.Figure:
    fig = go.Figure()
    ox, oy = scene.plot.x0, scene.plot.y0
    for t in scene.tiles:
        fig.add_trace(_tile_trace(t, ox, oy))
    for item in scene.legend.items:
        fig.add_trace(_legend_trace(item.category, item.color))

    _apply_chrome(fig, scene)

    W, H = scene.width, scene.height
    fig.update_xaxes(range=[0, W], visible=False, fixedrange=True)
    fig.update_yaxes(range=[H, 0], visible=False, fixedrange=True)  # y grows downward like SVG
    fig.update_layout(
        width=W,
        height=H,
        autosize=False,
        margin=dict(l=0, r=0, t=0, b=0, pad=0),
        paper_bgcolor=TOKENS["background"],
        plot_bgcolor=TOKENS["background"],
        hovermode="closest",
        showlegend=True,
        legend=dict(
            x=scene.legend.x / W,
            y=1 - scene.legend.y / H,
            xanchor="left",
            yanchor="top",
            orientation="v",
            traceorder="normal",
            itemsizing="constant",
            font=dict(size=_LEGEND_FONT_SIZE),
            bgcolor="rgba(0,0,0,0)",
        ),
    )
    return fig


def treemap_render(
    tree: Node,
    dataset: DatasetSpec,
    registry: DatasetRegistry,
    settings: Settings,
) -> Tuple[go.Figure, Scene]:
    """Full redraw: a fresh scene and figure every time, nothing reused."""
    scene = build_scene(tree, dataset, registry, settings.width, settings.height, settings.margins)
    return figure_from_scene(scene), scene


def figure_html(fig: go.Figure, tooltip: Tooltip) -> str:
    """Standalone page for the figure with the pointer-following tooltip attached."""
    return fig.to_html(
        full_html=True,
        include_plotlyjs="cdn",
        div_id="treemap",
        config={"displayModeBar": False, "responsive": False},
        post_script=tooltip.script(),
    )


# ===================== Exports =====================
def scene_json(scene: Scene) -> str:
    d: Dict[str, Any] = scene.to_dict()
    return json.dumps(d, indent=2)


def treemap_exports(host, tree: Node, scene: Scene, page_html: str, key_prefix: str = "tm") -> None:
    """CSV of leaves / JSON scene / static SVG / interactive HTML, side by side."""
    k = lambda n: f"{key_prefix}_{scene.dataset_key}_{n}"
    c1, c2, c3, c4, _ = host.columns([1, 1, 1, 1, 2], gap="small")
    with c1:
        st.download_button(
            "Download CSV",
            leaves_frame(tree).to_csv(index=False).encode("utf-8"),
            file_name=f"{scene.dataset_key}.csv",
            mime="text/csv",
            key=k("csv"),
        )
    with c2:
        st.download_button(
            "Download scene (JSON)",
            scene_json(scene).encode("utf-8"),
            file_name=f"{scene.dataset_key}_scene.json",
            mime="application/json",
            key=k("json"),
        )
    with c3:
        st.download_button(
            "Download SVG",
            scene_to_svg(scene).encode("utf-8"),
            file_name=f"{scene.dataset_key}.svg",
            mime="image/svg+xml",
            key=k("svg"),
        )
    with c4:
        st.download_button(
            "Download HTML",
            page_html.encode("utf-8"),
            file_name=f"{scene.dataset_key}.html",
            mime="text/html",
            key=k("html"),
        )
