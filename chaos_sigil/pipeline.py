"""Generation façade: text in, sigil and seed out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .alphabet import AlphabetMapping, map_alphabet
from .config import SigilConfig, get_default_config
from .logging_utils import apply_debug_logging
from .normalize import Intent, make_intent
from .path import Sigil, build
from .render import DrawList, render_frame
from .variation import VariationSeed, resolve_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    intent: Intent
    sigil: Sigil
    seed: VariationSeed
    mapping: AlphabetMapping

    def summary(self) -> str:
        return f"GenerationResult({self.sigil.summary()}, seed={self.seed.value})"


def generate_sigil(
    text: str,
    config: Optional[SigilConfig] = None,
    *,
    seed: Optional[VariationSeed] = None,
) -> GenerationResult:
    """Normalize ``text``, build its sigil and settle the variation seed.

    ``seed`` overrides both ``config.seed`` and the text-derived seed; it is
    how a UI keeps an explicitly randomized look while rebuilding. Raises
    :class:`~chaos_sigil.alphabet.AlphabetError` only for a bad layout
    configuration.
    """

    config = config or get_default_config()
    mapping = map_alphabet(config.alphabet)
    intent = make_intent(text, mapping, config.normalize)
    logger.info(
        "Normalized intent %r -> %r (%d symbol(s))", text, intent.text, len(intent.symbols)
    )
    sigil = build(intent.symbols, mapping, config.build)
    if seed is None:
        seed = resolve_seed(intent.text, config.seed)
    logger.info("Using %s variation seed %d", seed.source, seed.value)
    return GenerationResult(intent=intent, sigil=sigil, seed=seed, mapping=mapping)


def render_result(
    result: GenerationResult,
    config: Optional[SigilConfig] = None,
    *,
    progress: Optional[float] = None,
    pulse: float = 0.0,
) -> DrawList:
    config = config or get_default_config()
    return render_frame(
        result.sigil,
        result.seed,
        config.render,
        mapping=result.mapping,
        progress=progress,
        pulse=pulse,
    )


__all__ = ["GenerationResult", "generate_sigil", "render_result"]

apply_debug_logging(globals(), logger=logger, skip={"render_result"})
