"""Per-frame draw lists for a built sigil.

The adapter owns no generation state: it reads an immutable :class:`Sigil`
and a seed and returns plain primitives in canvas coordinates (origin at the
top-left corner, y pointing down). Whatever draws them, a window or a file
writer, never needs to know how the sigil was made.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .alphabet import AlphabetMapping
from .path import Sigil
from .variation import SeedLike, variation

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

DEFAULT_PALETTE: Dict[str, str] = {
    "background": "#0b0b12",
    "stroke": "#e8d9a8",
    "closing": "#b89c5c",
    "marker": "#f4ecd0",
    "accent": "#c0392b",
    "guide": "#3a3550",
    "label": "#9c94b8",
}


@dataclass(frozen=True)
class LinePrimitive:
    start: Point
    end: Point
    role: str = "stroke"  # 'stroke' | 'closing'
    width: float = 2.0


@dataclass(frozen=True)
class MarkerPrimitive:
    center: Point
    radius: float
    label: Optional[str] = None
    role: str = "vertex"  # 'vertex' | 'dot'


@dataclass(frozen=True)
class Embellishment:
    kind: str  # 'ring' | 'tick' | 'guide'
    center: Point
    size: float
    start: Optional[Point] = None
    end: Optional[Point] = None


@dataclass
class DrawList:
    width: float
    height: float
    lines: List[LinePrimitive] = field(default_factory=list)
    markers: List[MarkerPrimitive] = field(default_factory=list)
    embellishments: List[Embellishment] = field(default_factory=list)
    palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PALETTE))

    @property
    def is_empty(self) -> bool:
        return not (self.lines or self.markers or self.embellishments)

    def summary(self) -> str:
        return (
            f"DrawList(lines={len(self.lines)}, markers={len(self.markers)}, "
            f"embellishments={len(self.embellishments)})"
        )


@dataclass
class RenderOptions:
    canvas_size: Tuple[float, float] = (800.0, 600.0)
    scale: float = 1.0
    line_width: float = 2.0
    marker_radius: float = 5.0
    # Displacement applied to the vertices themselves; 0 keeps strokes exact.
    line_jitter: float = 0.0
    embellish: bool = True
    embellish_jitter: float = 6.0
    ring_radius: float = 10.0
    tick_length: float = 26.0
    point_rings: bool = False
    labels: bool = False
    layout_guide: bool = True
    palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PALETTE))


def _to_canvas(
    x: float, y: float, origin: Point, canvas_center: Point, scale: float
) -> Point:
    return (
        canvas_center[0] + (x - origin[0]) * scale,
        canvas_center[1] + (y - origin[1]) * scale,
    )


def _offset(seed: SeedLike, index: int, scale: float) -> Point:
    if scale <= 0:
        return (0.0, 0.0)
    dx, dy = variation(seed, index, scale)
    return (float(dx), float(dy))


def _lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def _end_tick(start: Point, end: Point, length: float, shift: Point) -> Optional[Embellishment]:
    dx, dy = end[0] - start[0], end[1] - start[1]
    norm = math.hypot(dx, dy)
    if norm <= 1e-12:
        return None
    px, py = -dy / norm, dx / norm
    cx, cy = end[0] + shift[0], end[1] + shift[1]
    half = 0.5 * length
    return Embellishment(
        kind="tick",
        center=(cx, cy),
        size=length,
        start=(cx - px * half, cy - py * half),
        end=(cx + px * half, cy + py * half),
    )


def render_frame(
    sigil: Sigil,
    seed: SeedLike,
    options: Optional[RenderOptions] = None,
    *,
    mapping: Optional[AlphabetMapping] = None,
    progress: Optional[float] = None,
    pulse: float = 0.0,
) -> DrawList:
    """Return the primitives for one frame of ``sigil``.

    ``progress`` counts drawn segments (``1.5`` is the first stroke plus half
    of the second); ``None`` draws everything. ``pulse`` in ``[0, 1]``
    inflates marker radii and should come from the UI clock only.
    """

    options = options or RenderOptions()
    width, height = options.canvas_size
    frame = DrawList(width=width, height=height, palette=dict(options.palette))
    if sigil.is_empty:
        return frame

    origin: Point = mapping.config.center if mapping is not None else (0.0, 0.0)
    canvas_center: Point = (0.5 * width, 0.5 * height)
    count = len(sigil.points)
    pulse = min(max(pulse, 0.0), 1.0)
    marker_radius = options.marker_radius * (1.0 + 0.25 * pulse)

    vertices: List[Point] = []
    for idx, pt in enumerate(sigil.points):
        jx, jy = _offset(seed, idx, options.line_jitter)
        vertices.append(
            _to_canvas(pt.x + jx, pt.y + jy, origin, canvas_center, options.scale)
        )

    if sigil.is_dot:
        frame.markers.append(
            MarkerPrimitive(
                vertices[0],
                marker_radius,
                sigil.points[0].symbol.char if options.labels else None,
                role="dot",
            )
        )
        return frame

    segments = sigil.segments
    total = len(segments)
    drawn = float(total) if progress is None else min(max(progress, 0.0), float(total))
    complete = drawn >= total

    if complete and options.layout_guide and mapping is not None and mapping.config.layout == "circle":
        frame.embellishments.append(
            Embellishment(
                kind="guide",
                center=_to_canvas(origin[0], origin[1], origin, canvas_center, options.scale),
                size=mapping.config.radius * options.scale,
            )
        )

    reached = {0}
    for seg in segments:
        if seg.index >= drawn:
            break
        # Closing segments reuse the first vertex, open ones follow the point order.
        a_idx = seg.index if not seg.closing else count - 1
        b_idx = seg.index + 1 if not seg.closing else 0
        a, b = vertices[a_idx], vertices[b_idx]
        fraction = min(1.0, drawn - seg.index)
        if fraction < 1.0:
            b = _lerp(a, b, fraction)
        else:
            reached.add(b_idx)
        frame.lines.append(
            LinePrimitive(
                a,
                b,
                role="closing" if seg.closing else "stroke",
                width=options.line_width,
            )
        )

    for idx in sorted(reached):
        label = sigil.points[idx].symbol.char if options.labels else None
        frame.markers.append(MarkerPrimitive(vertices[idx], marker_radius, label))

    if complete and options.embellish:
        jitter = options.embellish_jitter
        sx, sy = _offset(seed, count, jitter)
        frame.embellishments.append(
            Embellishment(
                kind="ring",
                center=(vertices[0][0] + sx, vertices[0][1] + sy),
                size=options.ring_radius,
            )
        )
        if options.point_rings:
            for idx in range(1, count):
                rx, ry = _offset(seed, count + idx, jitter)
                frame.embellishments.append(
                    Embellishment(
                        kind="ring",
                        center=(vertices[idx][0] + rx, vertices[idx][1] + ry),
                        size=0.5 * options.ring_radius,
                    )
                )
        last_open = sigil.open_segments[-1]
        tick = _end_tick(
            vertices[last_open.index],
            vertices[last_open.index + 1],
            options.tick_length,
            _offset(seed, 2 * count, jitter),
        )
        if tick is not None:
            frame.embellishments.append(tick)

    logger.debug("Rendered frame %s (progress=%s)", frame.summary(), progress)
    return frame


__all__ = [
    "DEFAULT_PALETTE",
    "DrawList",
    "Embellishment",
    "LinePrimitive",
    "MarkerPrimitive",
    "RenderOptions",
    "render_frame",
]
