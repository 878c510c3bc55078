from .alphabet import (
    AlphabetConfig,
    AlphabetError,
    AlphabetMapping,
    LayoutPoint,
    Symbol,
    map_alphabet,
)
from .normalize import Intent, NormalizeOptions, make_intent, normalize, normalize_text
from .path import BuildOptions, Segment, Sigil, build
from .variation import (
    VariationSeed,
    fresh_seed,
    resolve_seed,
    seed_from_text,
    variation,
    variation_field,
)
from .render import DrawList, RenderOptions, render_frame
from .config import SigilConfig, get_default_config, set_default_config
from .pipeline import GenerationResult, generate_sigil, render_result
from .state import SigilSnapshot, SigilStore
from .printer import print_sigil, format_segment
from .tikz_codegen import generate_tikz_code, generate_tikz_document
from .svg import generate_svg, save_sigil_svg, write_svg

__all__ = [
    'AlphabetConfig',
    'AlphabetError',
    'AlphabetMapping',
    'LayoutPoint',
    'Symbol',
    'map_alphabet',
    'Intent',
    'NormalizeOptions',
    'make_intent',
    'normalize',
    'normalize_text',
    'BuildOptions',
    'Segment',
    'Sigil',
    'build',
    'VariationSeed',
    'fresh_seed',
    'resolve_seed',
    'seed_from_text',
    'variation',
    'variation_field',
    'DrawList',
    'RenderOptions',
    'render_frame',
    'SigilConfig',
    'get_default_config',
    'set_default_config',
    'GenerationResult',
    'generate_sigil',
    'render_result',
    'SigilSnapshot',
    'SigilStore',
    'print_sigil',
    'format_segment',
    'generate_tikz_code',
    'generate_tikz_document',
    'generate_svg',
    'save_sigil_svg',
    'write_svg',
]
