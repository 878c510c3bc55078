from __future__ import annotations

import pytest

from chaos_sigil.alphabet import AlphabetConfig, map_alphabet
from chaos_sigil.normalize import normalize
from chaos_sigil.path import BuildOptions, Sigil, build
from chaos_sigil.render import DrawList, LinePrimitive, MarkerPrimitive, RenderOptions, render_frame
from chaos_sigil.tikz_codegen import generate_tikz_code, generate_tikz_document, latex_escape
from chaos_sigil.tikz_codegen.utils import format_float, html_color


def _frame(text: str = "HELLO", close: bool = False, **render_kwargs) -> DrawList:
    mapping = map_alphabet(AlphabetConfig())
    sigil = build(normalize(text, mapping), mapping, BuildOptions(close=close))
    return render_frame(sigil, 3, RenderOptions(**render_kwargs), mapping=mapping)


def test_generate_tikz_document_preamble_and_title() -> None:
    document = generate_tikz_document(_frame(), title="Love & Peace")

    assert document.startswith("\\documentclass[border=4pt]{standalone}")
    assert "\\usepackage{tikz}" in document
    assert "\\definecolor{sgstroke}{HTML}{E8D9A8}" in document
    assert "\\textbf{Love \\& Peace}" in document
    assert "\\pgfdeclarelayer{bg}\\pgfdeclarelayer{fg}" in document
    assert document.rstrip().endswith("\\end{document}")


def test_generate_tikz_code_flips_y_and_scales_to_cm() -> None:
    frame = DrawList(
        width=800.0,
        height=600.0,
        lines=[LinePrimitive((400.0, 300.0), (450.0, 200.0))],
        markers=[MarkerPrimitive((400.0, 300.0), 5.0, label="H")],
    )

    tikz = generate_tikz_code(frame)

    assert "\\fill[sgbackground] (0, 0) rectangle (16, 12);" in tikz
    assert "\\draw[stroke] (8, 6) -- (9, 8);" in tikz
    assert "\\fill[marker] (8, 6) circle (0.1);" in tikz
    assert "\\node[ptlabel, above right] at (8, 6) {H};" in tikz


def test_sigil_layers_and_styles() -> None:
    tikz = generate_tikz_code(_frame(close=True))

    assert tikz.startswith("\\begin{tikzpicture}")
    assert "\\begin{pgfonlayer}{main}" in tikz
    assert tikz.count("\\draw[stroke]") == 1
    assert tikz.count("\\draw[closing]") == 1
    assert tikz.count("\\fill[marker]") == 2
    assert "\\draw[guide]" in tikz
    assert tikz.count("\\draw[accent]") == 2


def test_empty_frame_still_compiles_to_background_only() -> None:
    mapping = map_alphabet(AlphabetConfig())
    tikz = generate_tikz_code(render_frame(Sigil(), 1, mapping=mapping))

    assert "\\draw[" not in tikz
    assert "\\fill[marker]" not in tikz
    assert "\\fill[sgbackground]" in tikz


def test_generate_tikz_code_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        generate_tikz_code("not a frame")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "value, expected",
    [(1.0, "1"), (0.12346, "0.1235"), (-0.00001, "0"), (-2.5, "-2.5"), (0.0, "0")],
)
def test_format_float(value: float, expected: str) -> None:
    assert format_float(value) == expected


def test_format_float_rejects_non_finite() -> None:
    with pytest.raises(ValueError):
        format_float(float("nan"))


def test_latex_escape_and_colors() -> None:
    assert latex_escape("50% of #1_fan") == "50\\% of \\#1\\_fan"
    assert html_color("#abc") == "AABBCC"
    assert html_color("#0b0b12") == "0B0B12"
    with pytest.raises(ValueError):
        html_color("#12")
