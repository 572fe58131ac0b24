"""Command line entry point.

Usage:
    ichi-annotate "日本語の勉強"
    echo "日本語の勉強" | ichi-annotate --dictionary JmdictFurigana.json.gz
    ichi-annotate --json "中に入る"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import AppConfig
from .core.ruby import RUBY_STYLES
from .services.client import FetchError
from .services.pipeline import AnalysisPipeline, EmptyInputError

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to analyze text with ichi.moe"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ichi-annotate",
        description="Analyze Japanese text with ichi.moe and print an annotated markdown callout.",
    )
    parser.add_argument("text", nargs="?", help="Text to analyze (defaults to standard input).")
    parser.add_argument(
        "--dictionary",
        type=Path,
        help="JmdictFurigana JSON file (optionally .gz) used for ruby annotations.",
    )
    parser.add_argument("--ruby-style", choices=RUBY_STYLES, help="Ruby markup to emit.")
    parser.add_argument("--json", action="store_true", help="Print the parsed analysis as JSON.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point used by both console scripts and ``python -m``."""

    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    config = AppConfig()
    if args.dictionary is not None:
        config.dictionary.path = args.dictionary
    if args.ruby_style:
        config.render.ruby_style = args.ruby_style

    text = args.text if args.text is not None else sys.stdin.read()

    pipeline = AnalysisPipeline(config)
    if config.dictionary.path is not None:
        print(pipeline.dictionary_status(), file=sys.stderr)

    try:
        result = pipeline.analyze(text)
    except EmptyInputError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except FetchError as exc:
        logger.debug("Analysis failed", exc_info=exc)
        print(FAILURE_MESSAGE, file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.analysis.to_dict(), ensure_ascii=False, indent=2))
    else:
        sys.stdout.write(result.markdown)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
