"""Path building: from a symbol sequence to the points and strokes of a sigil."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .alphabet import AlphabetMapping, LayoutPoint, Symbol
from .logging_utils import apply_debug_logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    start: LayoutPoint
    end: LayoutPoint
    index: int
    closing: bool = False

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)

    @property
    def key(self) -> str:
        return f"{self.start.symbol.char}-{self.end.symbol.char}"


@dataclass(frozen=True)
class Sigil:
    """Immutable glyph: visited points in order plus the strokes joining them.

    ``segments`` already includes the closing stroke (flagged ``closing``)
    whenever one was requested and there are at least two points.
    """

    points: Tuple[LayoutPoint, ...] = field(default_factory=tuple)
    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def is_dot(self) -> bool:
        return len(self.points) == 1

    @property
    def closed(self) -> bool:
        return bool(self.segments) and self.segments[-1].closing

    @property
    def open_segments(self) -> Tuple[Segment, ...]:
        return tuple(seg for seg in self.segments if not seg.closing)

    @property
    def distinct_points(self) -> Tuple[LayoutPoint, ...]:
        seen = set()
        out: List[LayoutPoint] = []
        for pt in self.points:
            if pt.symbol not in seen:
                seen.add(pt.symbol)
                out.append(pt)
        return tuple(out)

    @property
    def text(self) -> str:
        return "".join(pt.symbol.char for pt in self.points)

    @property
    def total_length(self) -> float:
        return sum(seg.length for seg in self.segments)

    def summary(self) -> str:
        return (
            f"Sigil(text={self.text!r}, points={len(self.points)}, "
            f"segments={len(self.segments)}, closed={self.closed}, "
            f"length={self.total_length:.1f})"
        )


@dataclass(frozen=True)
class BuildOptions:
    close: bool = False


def resolve_points(
    symbols: Iterable[Symbol], mapping: AlphabetMapping
) -> List[LayoutPoint]:
    """Map ``symbols`` to layout points, skipping unmapped ones and consecutive repeats."""

    points: List[LayoutPoint] = []
    skipped = 0
    for sym in symbols:
        point = mapping.lookup(sym)
        if point is None:
            skipped += 1
            continue
        if points and points[-1] == point:
            continue
        points.append(point)
    if skipped:
        logger.debug("Skipped %d unmapped symbol(s)", skipped)
    return points


def build(
    symbols: Iterable[Symbol],
    mapping: AlphabetMapping,
    options: BuildOptions = BuildOptions(),
) -> Sigil:
    """Build the :class:`Sigil` visiting ``symbols`` in order.

    Never fails: an empty or single-point result is a valid, degenerate
    sigil with no segments.
    """

    points = resolve_points(symbols, mapping)
    segments: List[Segment] = [
        Segment(points[i], points[i + 1], i) for i in range(len(points) - 1)
    ]

    closing: Optional[Segment] = None
    if options.close and len(points) >= 2:
        closing = Segment(points[-1], points[0], len(segments), closing=True)
        segments.append(closing)

    sigil = Sigil(points=tuple(points), segments=tuple(segments))
    if sigil.is_empty:
        logger.info("Built empty sigil")
    else:
        logger.info(
            "Built sigil %r with %d point(s) and %d segment(s)",
            sigil.text,
            len(sigil.points),
            len(sigil.segments),
        )
    return sigil


def distinct_consecutive(symbols: Iterable[Symbol]) -> List[Symbol]:
    out: List[Symbol] = []
    for sym in symbols:
        if not out or out[-1] != sym:
            out.append(sym)
    return out


__all__ = [
    "BuildOptions",
    "Segment",
    "Sigil",
    "build",
    "distinct_consecutive",
    "resolve_points",
]

apply_debug_logging(globals(), logger=logger)
