from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.grammar_check import cli
from src.grammar_check.grammar_check import GrammarChecker

SAMPLE = "Contact Us\n\nWe appreciate your business. Please visit our site to\n"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LANGUAGE", "DISABLED_RULES", "OUTPUT_FORMAT"):
        monkeypatch.delenv(f"GRAMMAR_CHECK_{name}", raising=False)
    monkeypatch.setattr(cli, "load_dotenv", lambda *args, **kwargs: False)


def _sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def test_text_file_to_json_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    output = tmp_path / "reports" / "result.json"

    exit_code = cli.main(["--text-file", str(_sample_file(tmp_path)), "-f", "json", "-o", str(output)])

    assert exit_code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["totalErrors"] == 1
    assert payload["errors"][0]["context"] == "Please visit our site to"
    assert "rawText" not in payload
    assert "Grammar check report written to" in capsys.readouterr().out


def test_console_output_with_options(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = cli.main(
        ["--text-file", str(_sample_file(tmp_path)), "--no-incomplete", "-r"]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Rule ID: HANGING_PREPOSITION" in out
    assert "Extracted Text:" in out


def test_disable_rule_flag_and_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAMMAR_CHECK_DISABLED_RULES", "HANGING_PREPOSITION, MISSING_END_PUNCTUATION")
    args = cli.parse_args(["https://example.com", "--disable-rule", "POSSIBLE_INCOMPLETE_SENTENCE", "-l", "en-GB"])

    options = cli.build_options(args)

    assert options.disabled_rules == frozenset(
        {"HANGING_PREPOSITION", "MISSING_END_PUNCTUATION", "POSSIBLE_INCOMPLETE_SENTENCE"}
    )
    assert options.language == "en-GB"
    assert options.detect_incomplete is True


def test_output_format_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAMMAR_CHECK_OUTPUT_FORMAT", "markdown")
    output = tmp_path / "result.md"

    assert cli.main(["--text-file", str(_sample_file(tmp_path)), "-o", str(output)]) == 0
    assert output.read_text(encoding="utf-8").startswith("# Grammar Check Results for")


def test_file_format_requires_output_path(tmp_path: Path) -> None:
    assert cli.main(["--text-file", str(_sample_file(tmp_path)), "-f", "html"]) == 1


def test_source_is_required() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args([])
    assert excinfo.value.code == 2


def test_missing_text_file(tmp_path: Path) -> None:
    assert cli.main(["--text-file", str(tmp_path / "missing.txt")]) == 1


def test_fetch_failure_returns_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_check_page(self, url, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(GrammarChecker, "check_page", fake_check_page)

    assert cli.main(["https://example.invalid"]) == 1


def test_url_is_checked(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    seen: list[str] = []

    def fake_check_page(self, url, **kwargs):
        seen.append(url)
        return self.check_text("Our servers do not recognize.", url=url)

    monkeypatch.setattr(GrammarChecker, "check_page", fake_check_page)

    assert cli.main(["https://example.com/help"]) == 0
    assert seen == ["https://example.com/help"]
    assert "Grammar Check Results for https://example.com/help" in capsys.readouterr().out


def test_report_write_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_write(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(cli, "write_report", failing_write)
    output = tmp_path / "result.json"

    assert cli.main(["--text-file", str(_sample_file(tmp_path)), "-f", "json", "-o", str(output)]) == 1


def test_undecodable_text_file(tmp_path: Path) -> None:
    path = tmp_path / "page.txt"
    path.write_bytes(b"Caf\xff\xfe menu text")

    assert cli.main(["--text-file", str(path)]) == 1
