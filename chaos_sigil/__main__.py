import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from chaos_sigil import (
    AlphabetConfig,
    AlphabetError,
    BuildOptions,
    NormalizeOptions,
    SigilConfig,
    fresh_seed,
    generate_sigil,
    generate_tikz_document,
    map_alphabet,
    print_sigil,
    render_result,
    write_svg,
)
from chaos_sigil.alphabet import ALPHABET_PRESETS, LAYOUT_KINDS
from chaos_sigil.app import SigilApp
from chaos_sigil.normalize import COLLAPSE_MODES

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_config(args: argparse.Namespace) -> SigilConfig:
    config = SigilConfig(
        alphabet=AlphabetConfig(alphabet=args.alphabet, layout=args.layout),
        normalize=NormalizeOptions(strip_vowels=not args.keep_vowels, collapse=args.collapse),
        build=BuildOptions(close=args.close),
        seed=args.seed,
    )
    config.render.labels = args.labels
    config.render.point_rings = args.point_rings
    return config


def _run_viewer(app: SigilApp) -> None:
    # Imported lazily so headless runs never load a GUI backend.
    from chaos_sigil.viewer import run_viewer

    run_viewer(app)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Generate chaos-magic sigils from an intent word")
    parser.add_argument("intent", nargs="?", help="Intent word or phrase")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--layout",
        choices=list(LAYOUT_KINDS),
        default="circle",
        help="Point layout (default: circle)",
    )
    parser.add_argument(
        "--alphabet",
        choices=sorted(ALPHABET_PRESETS),
        default="latin",
        help="Recognised characters (default: latin)",
    )
    seed_group = parser.add_mutually_exclusive_group()
    seed_group.add_argument(
        "--seed",
        type=int,
        help="Explicit variation seed (default: derived from the intent text)",
    )
    seed_group.add_argument(
        "--randomize",
        action="store_true",
        help="Draw a fresh, non-reproducible variation seed",
    )
    parser.add_argument(
        "--keep-vowels",
        action="store_true",
        help="Do not strip vowels from the intent",
    )
    parser.add_argument(
        "--collapse",
        choices=list(COLLAPSE_MODES),
        default="adjacent",
        help="How repeated letters are collapsed (default: adjacent)",
    )
    parser.add_argument(
        "--close",
        action="store_true",
        help="Add a closing stroke back to the first point",
    )
    parser.add_argument("--labels", action="store_true", help="Label points with their letters")
    parser.add_argument("--point-rings", action="store_true", help="Ring every visited point")
    parser.add_argument(
        "--tikz-output-path",
        help="Write a standalone TikZ document to the given path",
    )
    parser.add_argument(
        "--svg-output-path",
        help="Write an SVG picture to the given path",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open the interactive window",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    config = _build_config(args)
    try:
        map_alphabet(config.alphabet)
    except AlphabetError as exc:
        logger.error("Invalid layout configuration: %s", exc)
        raise SystemExit(2)

    if args.intent is None:
        if not args.show:
            parser.error("an intent is required unless --show is given")
        _run_viewer(SigilApp(config))
        return

    seed = fresh_seed() if args.randomize else None
    result = generate_sigil(args.intent, config, seed=seed)
    sigil = result.sigil

    print(f"Intent: {result.intent.raw}")
    print(f"Normalized: {result.intent.text or '(empty)'}")
    print(f"Seed: {result.seed.value} ({result.seed.source})")
    print(print_sigil(sigil), end="")

    if args.tikz_output_path or args.svg_output_path:
        frame = render_result(result, config)
        if args.tikz_output_path:
            output_path = Path(args.tikz_output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info("Writing TikZ document to %s", output_path)
            document = generate_tikz_document(frame, title=result.intent.raw)
            output_path.write_text(document, encoding="utf-8")
            print(f"TikZ document written to {output_path}")
        if args.svg_output_path:
            svg_path = write_svg(frame, args.svg_output_path)
            print(f"SVG written to {svg_path}")

    if args.show:
        app = SigilApp(config)
        app.intention = args.intent
        app.cursor_pos = len(args.intent)
        app.submit()
        if seed is not None:
            app.store.publish(result)
        _run_viewer(app)


if __name__ == "__main__":
    main(sys.argv[1:])
