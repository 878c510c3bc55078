"""Reduce raw intent text to the symbols a sigil visits."""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from .alphabet import AlphabetMapping, Symbol

logger = logging.getLogger(__name__)

VOWELS = frozenset("AEIOU")

COLLAPSE_MODES = ("adjacent", "all", "none")


@dataclass(frozen=True)
class NormalizeOptions:
    strip_vowels: bool = True
    collapse: str = "adjacent"  # 'adjacent', 'all' or 'none'

    def __post_init__(self) -> None:
        if self.collapse not in COLLAPSE_MODES:
            raise ValueError(
                f"collapse must be one of {', '.join(COLLAPSE_MODES)} (got {self.collapse!r})"
            )


@dataclass(frozen=True)
class Intent:
    raw: str
    symbols: Tuple[Symbol, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        return "".join(sym.char for sym in self.symbols)

    @property
    def is_empty(self) -> bool:
        return not self.symbols


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return stripped.upper()


def _candidates(text: str, mapping: AlphabetMapping) -> Iterator[str]:
    # Characters the alphabet maps as written (e.g. a custom "Å") win over
    # their diacritic-free fold.
    for ch in unicodedata.normalize("NFC", text):
        upper = ch.upper()
        if upper in mapping:
            yield upper
        else:
            yield from _fold(ch)


def _collapse(chars: List[str], mode: str) -> List[str]:
    if mode == "none":
        return chars
    out: List[str] = []
    if mode == "all":
        seen = set()
        for ch in chars:
            if ch not in seen:
                seen.add(ch)
                out.append(ch)
        return out
    for ch in chars:
        if not out or out[-1] != ch:
            out.append(ch)
    return out


def normalize_text(
    raw_text: str,
    mapping: AlphabetMapping,
    options: NormalizeOptions = NormalizeOptions(),
) -> str:
    """Return the canonical string of alphabet characters for ``raw_text``.

    Characters outside the alphabet are dropped, vowels are removed when
    ``options.strip_vowels`` is set, then repeats are collapsed. Vowels go
    first so that letters made adjacent by their removal collapse too
    ("HELLO" -> "HLL" -> "HL").
    """

    kept: List[str] = []
    dropped = 0
    for ch in _candidates(raw_text or "", mapping):
        if ch not in mapping:
            dropped += 1
            continue
        if options.strip_vowels and ch in VOWELS:
            continue
        kept.append(ch)
    if dropped:
        logger.debug("Dropped %d unmapped character(s) from %r", dropped, raw_text)
    return "".join(_collapse(kept, options.collapse))


def normalize(
    raw_text: str,
    mapping: AlphabetMapping,
    options: NormalizeOptions = NormalizeOptions(),
) -> List[Symbol]:
    """Return the ordered :class:`Symbol` sequence for ``raw_text``; never raises."""

    symbols: List[Symbol] = []
    for ch in normalize_text(raw_text, mapping, options):
        sym = mapping.symbol_for(ch)
        if sym is not None:
            symbols.append(sym)
    return symbols


def make_intent(
    raw_text: str,
    mapping: AlphabetMapping,
    options: NormalizeOptions = NormalizeOptions(),
) -> Intent:
    return Intent(raw=raw_text, symbols=tuple(normalize(raw_text, mapping, options)))


__all__ = [
    "COLLAPSE_MODES",
    "Intent",
    "NormalizeOptions",
    "VOWELS",
    "make_intent",
    "normalize",
    "normalize_text",
]
