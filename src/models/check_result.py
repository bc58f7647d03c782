"""Result model returned by a grammar check run."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .grammar_error import GrammarError


class CheckResult(BaseModel):
    """Output of one analysis run.

    ``total_errors`` is derived from ``errors`` and cannot be supplied by the
    caller. Serialising with ``by_alias=True`` produces the camelCase shape
    (``rawText``, ``totalErrors``, ``ruleId``) consumed by report writers.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    url: str = ""
    raw_text: str = Field(default="", alias="rawText")
    errors: Tuple[GrammarError, ...] = ()

    @computed_field(alias="totalErrors")  # type: ignore[prop-decorator]
    @property
    def total_errors(self) -> int:
        return len(self.errors)
