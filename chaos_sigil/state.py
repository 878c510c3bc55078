"""Current-sigil store: immutable snapshots published by a single reference swap."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .pipeline import GenerationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigilSnapshot:
    version: int
    result: GenerationResult

    @property
    def sigil(self):
        return self.result.sigil

    @property
    def seed(self):
        return self.result.seed

    @property
    def intent(self):
        return self.result.intent


class SigilStore:
    """Holds the snapshot the render loop reads.

    A new snapshot is fully built before :meth:`publish` swaps it in, so a
    reader always sees either the previous complete sigil or the new one.
    """

    def __init__(self) -> None:
        self._snapshot: Optional[SigilSnapshot] = None
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def current(self) -> Optional[SigilSnapshot]:
        return self._snapshot

    def publish(self, result: GenerationResult) -> SigilSnapshot:
        snapshot = SigilSnapshot(version=self._version + 1, result=result)
        self._snapshot = snapshot
        self._version = snapshot.version
        logger.debug("Published snapshot v%d: %s", snapshot.version, result.summary())
        return snapshot

    def clear(self) -> None:
        self._snapshot = None
        self._version += 1


__all__ = ["SigilSnapshot", "SigilStore"]
