"""Alphabet layouts: fixed positions for every recognised symbol."""

from __future__ import annotations

import logging
import math
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

LATIN = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
DIGITS = "0123456789"

ALPHABET_PRESETS: Dict[str, str] = {
    "latin": LATIN,
    "alnum": LATIN + DIGITS,
}

LAYOUT_KINDS = ("circle", "grid")

# Points closer than this are treated as the same coordinate.
COLLISION_EPS = 1e-9


class AlphabetError(ValueError):
    """Raised when an alphabet/layout configuration cannot produce a mapping."""


@dataclass(frozen=True)
class Symbol:
    char: str
    index: int

    def __str__(self) -> str:
        return self.char


@dataclass(frozen=True)
class LayoutPoint:
    symbol: Symbol
    x: float
    y: float
    angle: Optional[float] = None

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class AlphabetConfig:
    """Which characters are recognised and where they sit on the canvas."""

    alphabet: str = "latin"
    layout: str = "circle"
    radius: float = 250.0
    center: Tuple[float, float] = (0.0, 0.0)
    start_angle: float = 0.0
    grid_width: Optional[int] = None
    cell_size: float = 60.0

    def __post_init__(self) -> None:
        # Stored as a tuple so configs stay hashable for the mapping cache.
        try:
            cx, cy = self.center
            center = (float(cx), float(cy))
        except (TypeError, ValueError) as exc:
            raise AlphabetError(f"layout center must be an (x, y) pair (got {self.center!r})") from exc
        object.__setattr__(self, "center", center)

    def characters(self) -> str:
        """Return the ordered characters named by :attr:`alphabet`.

        Preset names match exactly; any other string is a custom alphabet,
        so ``"LATIN"`` means the five letters L, A, T, I, N.
        """

        preset = ALPHABET_PRESETS.get(self.alphabet)
        if preset is not None:
            return preset
        return unicodedata.normalize("NFC", self.alphabet).upper()


class AlphabetMapping:
    """Read-only lookup from characters to their layout points."""

    def __init__(self, config: AlphabetConfig, points: Tuple[LayoutPoint, ...]):
        self.config = config
        self.points = points
        self._by_char: Dict[str, LayoutPoint] = {pt.symbol.char: pt for pt in points}

    @property
    def symbols(self) -> Tuple[Symbol, ...]:
        return tuple(pt.symbol for pt in self.points)

    @property
    def characters(self) -> str:
        return "".join(pt.symbol.char for pt in self.points)

    def symbol_for(self, char: str) -> Optional[Symbol]:
        point = self._by_char.get(char)
        return point.symbol if point is not None else None

    def lookup(self, key: object) -> Optional[LayoutPoint]:
        """Return the point for a character or :class:`Symbol`, ``None`` when unmapped."""

        if isinstance(key, Symbol):
            point = self._by_char.get(key.char)
            if point is None or point.symbol != key:
                return None
            return point
        if isinstance(key, str):
            return self._by_char.get(key)
        return None

    def __contains__(self, key: object) -> bool:
        return self.lookup(key) is not None

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[LayoutPoint]:
        return iter(self.points)

    def __repr__(self) -> str:
        return (
            f"AlphabetMapping(layout={self.config.layout!r}, "
            f"alphabet={self.characters!r})"
        )


def _validate_config(config: AlphabetConfig) -> str:
    chars = config.characters()
    if not chars:
        raise AlphabetError("alphabet must contain at least one character")
    if len(set(chars)) != len(chars):
        raise AlphabetError(f"alphabet characters must be distinct (got {chars!r})")
    if any(ch.isspace() for ch in chars):
        raise AlphabetError("alphabet must not contain whitespace")
    if config.layout not in LAYOUT_KINDS:
        raise AlphabetError(
            f"layout must be one of {', '.join(LAYOUT_KINDS)} (got {config.layout!r})"
        )
    cx, cy = config.center
    if not (math.isfinite(cx) and math.isfinite(cy)):
        raise AlphabetError("layout center must be finite")
    if config.layout == "circle":
        if not math.isfinite(config.radius) or config.radius <= 0:
            raise AlphabetError(f"circle radius must be positive (got {config.radius})")
    else:
        if not math.isfinite(config.cell_size) or config.cell_size <= 0:
            raise AlphabetError(f"grid cell size must be positive (got {config.cell_size})")
        if config.grid_width is not None and config.grid_width <= 0:
            raise AlphabetError(f"grid width must be positive (got {config.grid_width})")
    return chars


def _circle_coords(config: AlphabetConfig, count: int) -> Tuple[np.ndarray, np.ndarray]:
    angles = config.start_angle + 2.0 * math.pi * np.arange(count, dtype=float) / count
    cx, cy = config.center
    xy = np.column_stack(
        (cx + config.radius * np.cos(angles), cy + config.radius * np.sin(angles))
    )
    return xy, angles


def _grid_coords(config: AlphabetConfig, count: int) -> np.ndarray:
    width = config.grid_width or int(math.ceil(math.sqrt(count)))
    rows = int(math.ceil(count / width))
    idx = np.arange(count)
    cols = idx % width
    row_idx = idx // width
    cx, cy = config.center
    # Centre the occupied cell block on the layout centre.
    x0 = cx - 0.5 * (width - 1) * config.cell_size
    y0 = cy - 0.5 * (rows - 1) * config.cell_size
    return np.column_stack((x0 + cols * config.cell_size, y0 + row_idx * config.cell_size))


def _ensure_no_collisions(xy: np.ndarray, chars: str) -> None:
    if len(chars) < 2:
        return
    diff = xy[:, None, :] - xy[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])
    np.fill_diagonal(dist, np.inf)
    i, j = np.unravel_index(int(np.argmin(dist)), dist.shape)
    if dist[i, j] <= COLLISION_EPS:
        raise AlphabetError(
            f"symbols {chars[min(i, j)]!r} and {chars[max(i, j)]!r} collide on the layout"
        )


@lru_cache(maxsize=32)
def map_alphabet(config: AlphabetConfig = AlphabetConfig()) -> AlphabetMapping:
    """Compute the layout point of every symbol in ``config``.

    The result depends on nothing but ``config`` and is cached, so every
    sigil on the same layout shares the same :class:`LayoutPoint` objects.
    """

    chars = _validate_config(config)
    count = len(chars)
    angles: Optional[np.ndarray] = None
    if config.layout == "circle":
        xy, angles = _circle_coords(config, count)
    else:
        xy = _grid_coords(config, count)
    _ensure_no_collisions(xy, chars)

    points = tuple(
        LayoutPoint(
            symbol=Symbol(ch, idx),
            x=float(xy[idx, 0]),
            y=float(xy[idx, 1]),
            angle=float(angles[idx]) if angles is not None else None,
        )
        for idx, ch in enumerate(chars)
    )
    logger.info("Mapped %d symbol(s) onto %s layout", count, config.layout)
    return AlphabetMapping(config, points)


__all__ = [
    "ALPHABET_PRESETS",
    "AlphabetConfig",
    "AlphabetError",
    "AlphabetMapping",
    "DIGITS",
    "LATIN",
    "LAYOUT_KINDS",
    "LayoutPoint",
    "Symbol",
    "map_alphabet",
]
