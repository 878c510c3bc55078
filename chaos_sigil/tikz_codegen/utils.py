import math
import unicodedata

_LATEX_SPECIALS = {
    '\\': r'\textbackslash{}',
    '&': r'\&',
    '%': r'\%',
    '$': r'\$',
    '#': r'\#',
    '_': r'\_',
    '{': r'\{',
    '}': r'\}',
    '~': r'\textasciitilde{}',
    '^': r'\textasciicircum{}',
}


def _strip_combining(text: str) -> str:
    text = unicodedata.normalize('NFC', text)
    return ''.join(ch for ch in text if unicodedata.category(ch) != 'Mn')


def latex_escape(text: str) -> str:
    """Escape free text (an intent, a caption) for a LaTeX document."""
    return ''.join(_LATEX_SPECIALS.get(c, c) for c in _strip_combining(text))


def format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def html_color(value: str) -> str:
    """``#e8d9a8`` → ``E8D9A8`` for ``\\definecolor{..}{HTML}{..}``."""
    hex_part = value.lstrip('#')
    if len(hex_part) == 3:
        hex_part = ''.join(ch * 2 for ch in hex_part)
    if len(hex_part) != 6:
        raise ValueError(f"expected a #rrggbb colour, got {value!r}")
    int(hex_part, 16)
    return hex_part.upper()
