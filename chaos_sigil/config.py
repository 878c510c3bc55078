"""Configuration bundle for sigil generation."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from .alphabet import AlphabetConfig
from .normalize import NormalizeOptions
from .path import BuildOptions
from .render import RenderOptions


@dataclass
class SigilConfig:
    """Everything the CLI or UI can choose, passed unchanged to the core."""

    alphabet: AlphabetConfig = field(default_factory=AlphabetConfig)
    normalize: NormalizeOptions = field(default_factory=NormalizeOptions)
    build: BuildOptions = field(default_factory=BuildOptions)
    render: RenderOptions = field(default_factory=RenderOptions)
    seed: Optional[int] = None


_DEFAULT_CONFIG = SigilConfig()


def get_default_config() -> SigilConfig:
    return copy.deepcopy(_DEFAULT_CONFIG)


def set_default_config(config: SigilConfig) -> None:
    global _DEFAULT_CONFIG
    _DEFAULT_CONFIG = copy.deepcopy(config)


__all__ = ["SigilConfig", "get_default_config", "set_default_config"]
