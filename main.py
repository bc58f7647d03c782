"""Command-line entrypoint for the website grammar checker."""

from __future__ import annotations

from src.grammar_check.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
