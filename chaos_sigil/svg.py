"""SVG output for sigil draw lists."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union
from xml.sax.saxutils import escape

from .render import DrawList
from .tikz_codegen.utils import format_float

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RE = re.compile(r"[^A-Za-z0-9]+")


def _xy(point: Tuple[float, float]) -> Tuple[str, str]:
    return format_float(point[0]), format_float(point[1])


def generate_svg(frame: DrawList) -> str:
    """Return a standalone SVG document for ``frame`` (same coordinates, y down)."""

    w, h = format_float(frame.width), format_float(frame.height)
    palette = frame.palette
    out: List[str] = [
        '<?xml version="1.0" encoding="UTF-8" standalone="no"?>',
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" xmlns="http://www.w3.org/2000/svg">',
        f'  <rect width="100%" height="100%" fill="{palette["background"]}"/>',
    ]
    for emb in frame.embellishments:
        if emb.kind == "guide":
            cx, cy = _xy(emb.center)
            out.append(
                f'  <circle cx="{cx}" cy="{cy}" r="{format_float(emb.size)}" '
                f'fill="none" stroke="{palette["guide"]}" stroke-width="1"/>'
            )
    for line in frame.lines:
        x1, y1 = _xy(line.start)
        x2, y2 = _xy(line.end)
        color = palette["closing"] if line.role == "closing" else palette["stroke"]
        dash = ' stroke-dasharray="8 4"' if line.role == "closing" else ""
        out.append(
            f'  <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" stroke="{color}" '
            f'stroke-width="{format_float(line.width)}" stroke-linecap="round"{dash}/>'
        )
    for marker in frame.markers:
        cx, cy = _xy(marker.center)
        out.append(
            f'  <circle cx="{cx}" cy="{cy}" r="{format_float(marker.radius)}" fill="{palette["marker"]}"/>'
        )
    for emb in frame.embellishments:
        if emb.kind == "ring":
            cx, cy = _xy(emb.center)
            out.append(
                f'  <circle cx="{cx}" cy="{cy}" r="{format_float(emb.size)}" '
                f'fill="none" stroke="{palette["accent"]}" stroke-width="1.5"/>'
            )
        elif emb.kind == "tick" and emb.start is not None and emb.end is not None:
            x1, y1 = _xy(emb.start)
            x2, y2 = _xy(emb.end)
            out.append(
                f'  <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
                f'stroke="{palette["accent"]}" stroke-width="1.5"/>'
            )
    for marker in frame.markers:
        if marker.label:
            cx, cy = _xy((marker.center[0] + 1.6 * marker.radius, marker.center[1] - 1.6 * marker.radius))
            out.append(
                f'  <text x="{cx}" y="{cy}" fill="{palette["label"]}" font-size="12" '
                f'font-family="serif">{escape(marker.label)}</text>'
            )
    out.append("</svg>")
    return "\n".join(out) + "\n"


def sigil_filename(intent: str, timestamp: Optional[datetime] = None) -> str:
    """``sigil_<YYYYmmdd_HHMMSS>_<intent>.svg`` with the intent reduced to ASCII letters and digits."""

    timestamp = timestamp or datetime.now()
    safe = _UNSAFE_NAME_RE.sub("", intent)
    stem = f"sigil_{timestamp.strftime('%Y%m%d_%H%M%S')}"
    if safe:
        stem += f"_{safe}"
    return stem + ".svg"


def write_svg(frame: DrawList, path: Union[str, Path]) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_svg(frame), encoding="utf-8")
    logger.info("Wrote SVG to %s", output_path)
    return output_path


def save_sigil_svg(
    frame: DrawList,
    intent: str,
    directory: Union[str, Path] = "sigils",
    *,
    timestamp: Optional[datetime] = None,
) -> Path:
    """Write ``frame`` under ``directory`` with a timestamped file name."""

    return write_svg(frame, Path(directory) / sigil_filename(intent, timestamp))


__all__ = ["generate_svg", "save_sigil_svg", "sigil_filename", "write_svg"]
