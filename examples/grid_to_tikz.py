"""Example: grid layout sigil written out as a standalone TikZ document."""

from pathlib import Path

from chaos_sigil import (
    AlphabetConfig,
    SigilConfig,
    generate_sigil,
    generate_tikz_document,
    render_result,
)

TEXT = "I will find peace"


def main() -> None:
    config = SigilConfig(alphabet=AlphabetConfig(layout="grid", cell_size=80.0), seed=123)
    config.render.labels = True
    config.render.point_rings = True
    result = generate_sigil(TEXT, config)
    document = generate_tikz_document(render_result(result, config), title=TEXT)
    out = Path("peace_sigil.tex")
    out.write_text(document, encoding="utf-8")
    print(f"{result.sigil.summary()} written to {out}")


if __name__ == "__main__":
    main()
