"""Public model exports for the project.

Tests and other modules should import
``from src.models import GrammarError, CheckResult``.
"""

from __future__ import annotations

from .check_result import CheckResult
from .enums import OutputFormat, RuleId
from .grammar_error import ErrorPosition, GrammarError

__all__ = ["CheckResult", "ErrorPosition", "GrammarError", "OutputFormat", "RuleId"]
