"""Example pipeline: normalize an intent, build its sigil and print the strokes."""

from chaos_sigil import BuildOptions, SigilConfig, generate_sigil, print_sigil, render_result

TEXT = "HELLO"


def main() -> None:
    config = SigilConfig(build=BuildOptions(close=True))
    result = generate_sigil(TEXT, config)
    print("Normalized:", result.intent.text)
    print("Seed:", result.seed.value, f"({result.seed.source})")
    print(print_sigil(result.sigil), end="")
    frame = render_result(result, config)
    print("Frame:", frame.summary())


if __name__ == "__main__":
    main()
