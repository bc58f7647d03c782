"""Command-line interface for checking a web page (or text file) for grammar issues."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

import requests
from dotenv import load_dotenv

from src.models import OutputFormat, RuleId

from .grammar_check import GrammarChecker
from .grammar_check_config import DEFAULT_LANGUAGE
from .report_utils import write_report
from .run_context import CheckerOptions

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "GRAMMAR_CHECK"


def _env(name: str) -> str | None:
    value = os.environ.get(f"{ENV_PREFIX}_{name}")
    if value is None or not value.strip():
        return None
    return value.strip()


def _split_rules(value: str | None) -> set[str]:
    if not value:
        return set()
    return {item.strip() for item in value.split(",") if item.strip()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check the prose of a web page for incomplete sentences and missing punctuation.",
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="URL of the page to check.",
    )
    parser.add_argument(
        "--text-file",
        type=Path,
        default=None,
        help="Check a local plain-text file instead of fetching a URL (paragraphs separated by blank lines).",
    )
    parser.add_argument(
        "-l",
        "--language",
        default=None,
        help=f"Language code (default: env {ENV_PREFIX}_LANGUAGE or {DEFAULT_LANGUAGE}).",
    )
    parser.add_argument(
        "-f",
        "--output-format",
        choices=OutputFormat.all_values(),
        default=None,
        help=f"Report format (default: env {ENV_PREFIX}_OUTPUT_FORMAT or console).",
    )
    parser.add_argument(
        "-o",
        "--output-path",
        type=Path,
        default=None,
        help="Path to save the report (required for non-console formats).",
    )
    parser.add_argument(
        "-r",
        "--include-raw-text",
        action="store_true",
        help="Include the extracted text in the report.",
    )
    parser.add_argument(
        "--no-incomplete",
        action="store_true",
        help="Disable per-sentence detection of incomplete sentences.",
    )
    parser.add_argument(
        "--disable-rule",
        action="append",
        dest="disabled_rules",
        metavar="RULE",
        help=(
            "Drop findings for a rule (can be specified multiple times). "
            f"Known rules: {', '.join(RuleId.all_values())}. "
            f"Also read from env {ENV_PREFIX}_DISABLED_RULES (comma separated)."
        ),
    )
    return parser


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if not args.url and args.text_file is None:
        parser.error("a URL or --text-file is required")
    return args


def build_options(args: argparse.Namespace) -> CheckerOptions:
    disabled = _split_rules(_env("DISABLED_RULES"))
    disabled.update(args.disabled_rules or [])
    return CheckerOptions(
        detect_incomplete=not args.no_incomplete,
        disabled_rules=disabled,
        language=args.language or _env("LANGUAGE"),
    )


def main(argv: Optional[Iterable[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    load_dotenv()
    args = parse_args(argv)

    output_format = args.output_format or _env("OUTPUT_FORMAT") or OutputFormat.CONSOLE.value
    if output_format not in OutputFormat.all_values():
        LOGGER.error("Unknown output format: %s", output_format)
        return 1
    if output_format != OutputFormat.CONSOLE.value and args.output_path is None:
        LOGGER.error("--output-path is required for %s output format", output_format)
        return 1

    checker = GrammarChecker(build_options(args))

    try:
        if args.text_file is not None:
            text = args.text_file.read_text(encoding="utf-8")
            result = checker.check_text(text, url=args.url or str(args.text_file))
        else:
            LOGGER.info("Starting grammar check for: %s", args.url)
            result = checker.check_page(args.url)
    except requests.RequestException as exc:
        LOGGER.error("Failed to fetch %s: %s", args.url, exc)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Failed to read %s: %s", args.text_file, exc)
        return 1

    try:
        report_path = write_report(
            result,
            output_format,
            args.output_path,
            include_raw_text=args.include_raw_text,
        )
    except OSError:
        LOGGER.exception("Failed to write %s report to %s", output_format, args.output_path)
        return 1

    if report_path is not None:
        print(f"Grammar check report written to {report_path.resolve()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
