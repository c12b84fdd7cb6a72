"""Command line filter: HTML in, educated HTML out.

  punct-educator page.html > page.smart.html
  echo '"fun" -- really...' | punct-educator --preset em_dash
  punct-educator --options qBDe --literal notes.html -o notes.out.html
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from pathlib import Path

from punct_educator.logging_setup import LOG_DATEFMT, LOG_FORMAT
from punct_educator.typography.config import (
    DEFAULT_PRESET,
    TAGS_TO_SKIP_PATTERN,
    Preset,
    TypographyConfig,
    preset_from_name,
)
from punct_educator.typography.educator import educate_html

logger = logging.getLogger(__name__)


def _preset_arg(value: str) -> Preset:
    try:
        return preset_from_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _skip_tags_arg(value: str) -> str:
    if not re.match(TAGS_TO_SKIP_PATTERN, value):
        raise argparse.ArgumentTypeError(f"expected pipe-separated element names, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="punct-educator", description="Smart quotes, dashes and ellipses for HTML.")
    parser.add_argument("input", nargs="?", help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--preset",
        type=_preset_arg,
        help=f"Preset name or number ({', '.join(p.name.lower() for p in Preset)}; default: {DEFAULT_PRESET.name.lower()})",
    )
    mode.add_argument("--options", help="Option letters: q b B d D i e w")
    parser.add_argument(
        "--skip-tags",
        type=_skip_tags_arg,
        help="Pipe-separated elements left untouched (default: pre|code|kbd|script|style|math)",
    )
    parser.add_argument("--literal", action="store_true", help="Emit characters instead of character references")
    parser.add_argument("--stats", action="store_true", help="Print substitution counts to stderr as JSON")
    parser.add_argument("--log-level", default="warning", help="Log level (default: warning)")
    return parser


def config_from_args(args: argparse.Namespace) -> TypographyConfig:
    overrides: dict[str, object] = {}
    if args.skip_tags:
        overrides["tags_to_skip"] = args.skip_tags
    if args.options is not None:
        config = TypographyConfig.from_options(args.options, **overrides)
    else:
        preset = args.preset if args.preset is not None else DEFAULT_PRESET
        config = TypographyConfig.from_preset(preset, **overrides)
    if args.literal:
        config = config.with_literal_glyphs()
    return config


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(level=str(args.log_level).upper(), format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    config = config_from_args(args)

    if args.input:
        try:
            text = Path(args.input).read_text(encoding="utf-8")
        except OSError as e:
            print(f"punct-educator: cannot read {args.input}: {e}", file=sys.stderr)
            return 1
    else:
        text = sys.stdin.read()

    result = educate_html(text, config)
    logger.info("processed %s chars", len(text))

    if args.output:
        Path(args.output).write_text(result.text, encoding="utf-8")
    else:
        sys.stdout.write(result.text)

    if args.stats:
        print(json.dumps(result.stats, sort_keys=True), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
