"""Utilities for rendering grammar check results.

This module centralises the console, JSON, Markdown and HTML report builders.
Builders return strings so they can be tested independently of the file
system; :func:`write_report` handles directories and file output.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import pystache

from src.models import OutputFormat

if TYPE_CHECKING:  # pragma: no cover - typing only
    from src.models import CheckResult, GrammarError

LOGGER = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
HTML_TEMPLATE = "report.html.mustache"


def _format_suggestions(suggestions: tuple[str, ...]) -> str:
    return ", ".join(suggestions)


def _format_timestamp(generated_at: datetime | None) -> str:
    return (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")


def build_report_console(result: "CheckResult", include_raw_text: bool = False) -> str:
    """Plain-text summary suitable for printing to a terminal."""

    lines: list[str] = []
    lines.append(f"=== Grammar Check Results for {result.url or '<text>'} ===")
    lines.append(f"Found {result.total_errors} issue(s)")
    lines.append("")

    for index, error in enumerate(result.errors, start=1):
        lines.append(f"Issue #{index}: {error.message}")
        lines.append(f'Context: "{error.context}"')
        lines.append(f"Suggestions: {_format_suggestions(error.suggestions)}")
        lines.append(f"Rule ID: {error.rule_id}")
        lines.append("---")

    if include_raw_text:
        lines.append("")
        lines.append("Extracted Text:")
        lines.append(result.raw_text)

    lines.append("")
    lines.append("Check complete!")
    return "\n".join(lines)


def build_report_json(result: "CheckResult", include_raw_text: bool = False) -> str:
    """Serialise ``result`` using the camelCase field names."""

    exclude = None if include_raw_text else {"raw_text"}
    payload = result.model_dump(mode="json", by_alias=True, exclude=exclude)
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _escape_markdown_code(text: str) -> str:
    return text.replace("`", "\\`")


def build_report_markdown(
    result: "CheckResult",
    include_raw_text: bool = False,
    generated_at: datetime | None = None,
) -> str:
    """Convert the check result into Markdown output."""

    lines: list[str] = []
    lines.append(f"# Grammar Check Results for {result.url or '<text>'}")
    lines.append("")
    lines.append(f"- Total issues: {result.total_errors}")
    lines.append(f"- Date: {_format_timestamp(generated_at)}")
    lines.append("")
    lines.append("## Issues Found")

    if not result.errors:
        lines.append("")
        lines.append("_No issues found._")

    for index, error in enumerate(result.errors, start=1):
        lines.append("")
        lines.append(f"### Issue #{index}: {error.message}")
        lines.append("")
        lines.append(f"- **Context:** `{_escape_markdown_code(error.context)}`")
        lines.append(f"- **Suggestions:** {_format_suggestions(error.suggestions)}")
        lines.append(f"- **Rule ID:** `{error.rule_id}`")

    if include_raw_text:
        lines.append("")
        lines.append("## Raw Text Content")
        lines.append("")
        lines.append("```")
        lines.append(result.raw_text)
        lines.append("```")

    return "\n".join(lines) + "\n"


def _error_view(index: int, error: "GrammarError") -> dict[str, object]:
    return {
        "index": index,
        "message": error.message,
        "context": error.context,
        "suggestions": _format_suggestions(error.suggestions),
        "rule_id": error.rule_id,
    }


def build_report_html(
    result: "CheckResult",
    include_raw_text: bool = False,
    generated_at: datetime | None = None,
) -> str:
    """Render the HTML report template; all values are HTML-escaped."""

    template = (TEMPLATES_DIR / HTML_TEMPLATE).read_text(encoding="utf-8")
    context = {
        "url": result.url or "<text>",
        "total_errors": result.total_errors,
        "generated_at": _format_timestamp(generated_at),
        "errors": [_error_view(i, e) for i, e in enumerate(result.errors, start=1)],
        "include_raw_text": include_raw_text,
        "raw_text": result.raw_text,
    }
    return pystache.render(template, context)


def write_report(
    result: "CheckResult",
    output_format: OutputFormat | str = OutputFormat.CONSOLE,
    output_path: Path | str | None = None,
    include_raw_text: bool = False,
) -> Path | None:
    """Emit ``result`` in ``output_format``.

    Console output is printed and ``None`` is returned. Every other format is
    written to ``output_path`` (parent directories are created) and the path
    is returned.

    Raises:
            ValueError: unknown format, or a file format without ``output_path``
            OSError: the report could not be written
    """

    fmt = OutputFormat(output_format)
    if fmt is OutputFormat.CONSOLE:
        print(build_report_console(result, include_raw_text=include_raw_text))
        return None

    if output_path is None:
        raise ValueError(f"Output path is required for {fmt.value} reports")

    if fmt is OutputFormat.JSON:
        content = build_report_json(result, include_raw_text=include_raw_text)
    elif fmt is OutputFormat.HTML:
        content = build_report_html(result, include_raw_text=include_raw_text)
    else:
        content = build_report_markdown(result, include_raw_text=include_raw_text)

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    LOGGER.info("%s report saved to %s", fmt.value.upper(), path)
    return path
