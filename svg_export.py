# svg_export.py — Static SVG writer for a Scene (+ a small CLI)
"""
Self-contained SVG following the page's DOM contract: #title,
#description, rect.tile with data-name / data-category / data-value,
labels clipped to their tile, #legend with rect.legend-item swatches.
No script, no hover.
"""
from __future__ import annotations
import html
import logging

from colors_tokens import TOKENS
from scene import LABEL_FONT_SIZE, LABEL_LINE_HEIGHT, LABEL_PAD, LEGEND_LABEL_OFFSET, SWATCH_SIZE, Scene

logger = logging.getLogger("treemap.svg")


def _attr(v) -> str:
    return html.escape(str(v), quote=True)


def _num(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def render_tiles(scene: Scene):
    """Return (clip_defs, body) for the tile layer."""
    clip_parts, body_parts = [], []
    for i, t in enumerate(scene.tiles):
        clip_id = f"c{i}"
        w, h = t.x1 - t.x0, t.y1 - t.y0
        clip_parts.append(
            f'    <clipPath id="{clip_id}">'
            f'<rect x="{_num(t.x0)}" y="{_num(t.y0)}" width="{_num(w)}" height="{_num(h)}"/>'
            f'</clipPath>'
        )
        body_parts.append(
            f'    <g>\n'
            f'      <rect class="tile" x="{_num(t.x0)}" y="{_num(t.y0)}" width="{_num(w)}" height="{_num(h)}"'
            f' fill="{_attr(t.fill)}" data-name="{_attr(t.name)}" data-category="{_attr(t.category)}"'
            f' data-value="{_attr(t.data_value)}"/>'
        )
        if t.label_lines:
            spans = "".join(
                f'<tspan x="{_num(t.x0 + LABEL_PAD)}" dy="{LABEL_LINE_HEIGHT if k else LABEL_FONT_SIZE}">'
                f'{html.escape(line)}</tspan>'
                for k, line in enumerate(t.label_lines)
            )
            body_parts.append(
                f'      <text class="tile_text" x="{_num(t.x0 + LABEL_PAD)}" y="{_num(t.y0 + LABEL_PAD)}"'
                f' clip-path="url(#{clip_id})">{spans}</text>'
            )
        body_parts.append("    </g>")
    return "\n".join(clip_parts), "\n".join(body_parts)


def render_legend(scene: Scene) -> str:
    lg = scene.legend
    parts = [f'  <g class="legend" id="legend" transform="translate({_num(lg.x)},{_num(lg.y)})">']
    for it in lg.items:
        dy = it.y - lg.y
        parts.append(
            f'    <g class="cell" transform="translate(0,{_num(dy)})">'
            f'<rect class="swatch legend-item" width="{SWATCH_SIZE}" height="{SWATCH_SIZE}" fill="{_attr(it.color)}"/>'
            f'<text class="label" x="{SWATCH_SIZE + LEGEND_LABEL_OFFSET}" y="{SWATCH_SIZE / 2}"'
            f' dominant-baseline="middle">{html.escape(it.category)}</text></g>'
        )
    parts.append("  </g>")
    return "\n".join(parts)


def scene_to_svg(scene: Scene) -> str:
    clip_defs, tiles = render_tiles(scene)
    W, H = _num(scene.width), _num(scene.height)
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg"
     width="{W}" height="{H}" viewBox="0 0 {W} {H}"
     style="background-color: {TOKENS['background']};">
  <defs>
    <style type="text/css">
      rect.tile {{ stroke: {TOKENS['tile_stroke']}; stroke-width: 1; }}
      text {{ font-family: Helvetica, Arial, sans-serif; }}
      .tile_text {{ font-size: {LABEL_FONT_SIZE}px; fill: {TOKENS['label']}; pointer-events: none; }}
      .title {{ font-size: 28px; text-anchor: middle; fill: {TOKENS['title']}; }}
      .subtitle {{ font-size: 16px; text-anchor: middle; fill: {TOKENS['subtitle']}; }}
      .legend text {{ font-size: 12px; }}
    </style>
{clip_defs}
  </defs>
  <text id="{scene.title.element_id}" class="{scene.title.css_class}" x="{_num(scene.title.x)}" y="{_num(scene.title.y)}">{html.escape(scene.title.text)}</text>
  <text id="{scene.subtitle.element_id}" class="{scene.subtitle.css_class}" x="{_num(scene.subtitle.x)}" y="{_num(scene.subtitle.y)}">{html.escape(scene.subtitle.text)}</text>
  <svg x="{_num(scene.plot.x0)}" y="{_num(scene.plot.y0)}">
{tiles}
  </svg>
{render_legend(scene)}
</svg>'''


def main(argv=None) -> int:
    import argparse
    from pathlib import Path

    from config import configure_logging
    from data_io import DatasetLoader
    from datasets import build_registry
    from router import MemoryHistory, Navigator
    from scene import build_scene
    from tooltip import Tooltip

    p = argparse.ArgumentParser(description="Render one dataset to a static SVG treemap.")
    p.add_argument("view", nargs="?", default="", help="videogames | movies | kickstarter")
    p.add_argument("--out", default=None, help="output file (default: <view>.svg)")
    p.add_argument("--width", type=int, default=1200)
    p.add_argument("--height", type=int, default=720)
    p.add_argument("--data-dir", default=None, help="read dataset JSON from this folder")
    p.add_argument("--timeout", type=float, default=None)
    p.add_argument("--inspect", nargs=2, type=float, metavar=("X", "Y"),
                   help="print the tooltip of the tile under surface point X,Y")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "INFO", verbose=args.verbose)
    registry = build_registry(data_dir=args.data_dir)
    dataset = Navigator(registry, MemoryHistory(args.view)).navigate()

    def _write(tree, ds):
        scene = build_scene(tree, ds, registry, args.width, args.height)
        out = Path(args.out or f"{ds.key}.svg")
        out.write_text(scene_to_svg(scene), encoding="utf-8")
        logger.info("SVG saved to: %s", out)
        if args.inspect:
            x, y = args.inspect
            tip = Tooltip(ds.formatter)
            tile = scene.tile_at(x, y)
            if tile is None:
                print(f"No tile at ({x:g}, {y:g})")
            else:
                tip.on_pointer_move(tile, x, y)
                print(tip.text())
                print(f"data-value={tip.data_value} at ({tip.left:g}, {tip.top:g})")
        return out

    written = DatasetLoader(timeout=args.timeout).load(dataset, _write)
    return 0 if written is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
