"""Seeded decorative variation.

Two ways to obtain a seed are kept strictly apart:

* the deterministic path (:func:`seed_from_text`, :func:`resolve_seed`) hashes
  the normalized intent or takes an explicit user seed, so identical input
  always reproduces the identical look;
* the randomize path (:func:`fresh_seed`) draws from a clock or OS entropy
  and is only used when the user explicitly asks for a new variation.

Jitter for a given ``(seed, index)`` comes from its own numpy generator, so
it does not depend on how many other values were drawn before.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

SEED_MASK = (1 << 63) - 1

SEED_SOURCES = ("text", "explicit", "entropy")


@dataclass(frozen=True)
class VariationSeed:
    value: int
    source: str = "text"

    def __post_init__(self) -> None:
        if self.source not in SEED_SOURCES:
            raise ValueError(f"unknown seed source {self.source!r}")
        object.__setattr__(self, "value", int(self.value) & SEED_MASK)

    def __int__(self) -> int:
        return self.value

    @property
    def deterministic(self) -> bool:
        return self.source != "entropy"


SeedLike = Union[VariationSeed, int]


def seed_from_text(text: str) -> int:
    """Stable 63-bit seed for ``text`` (same value in every process)."""

    digest = hashlib.sha256(text.encode("utf8")).digest()
    return int.from_bytes(digest[:8], "big") & SEED_MASK


def resolve_seed(text: str, explicit: Optional[int] = None) -> VariationSeed:
    if explicit is not None:
        return VariationSeed(int(explicit), "explicit")
    return VariationSeed(seed_from_text(text), "text")


def fresh_seed(clock: Optional[Callable[[], float]] = None) -> VariationSeed:
    """Draw a non-deterministic seed for an explicit "randomize" request."""

    if clock is not None:
        value = int(clock() * 1_000_000_000)
    else:
        value = int(np.random.SeedSequence().entropy)
    seed = VariationSeed(value, "entropy")
    logger.info("Drew fresh variation seed %d", seed.value)
    return seed


def variation(seed: SeedLike, index: int, scale: float = 1.0) -> np.ndarray:
    """Return the jitter vector ``(dx, dy)`` for ``index``, uniform in ``[-scale, scale]``."""

    if index < 0:
        raise ValueError(f"variation index must be non-negative (got {index})")
    rng = np.random.default_rng([int(seed) & SEED_MASK, int(index)])
    return rng.uniform(-scale, scale, size=2)


def variation_field(seed: SeedLike, count: int, scale: float = 1.0) -> np.ndarray:
    """Stack :func:`variation` for indices ``0..count-1`` into a ``(count, 2)`` array."""

    if count <= 0:
        return np.zeros((0, 2), dtype=float)
    return np.vstack([variation(seed, idx, scale) for idx in range(count)])


__all__ = [
    "SEED_MASK",
    "SEED_SOURCES",
    "SeedLike",
    "VariationSeed",
    "fresh_seed",
    "resolve_seed",
    "seed_from_text",
    "variation",
    "variation_field",
]
