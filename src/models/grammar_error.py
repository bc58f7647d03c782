"""Model for a single flagged grammar or completeness issue."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ErrorPosition(BaseModel):
    """Best-effort location of an issue within the analysed text."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    offset: int = Field(ge=0)
    length: int = Field(ge=0)


class GrammarError(BaseModel):
    """One flagged issue.

    - message: human-readable description
    - context: the offending span, trimmed and never empty
    - suggestions: remediation strings, most specific first (never empty)
    - rule_id: symbolic rule identifier (serialised as ``ruleId``)
    - position: offset/length of the span in the source text
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    message: str
    context: str
    suggestions: Tuple[str, ...]
    rule_id: str = Field(alias="ruleId")
    position: ErrorPosition

    @field_validator("message", "context", "rule_id", mode="before")
    def _strip_required(cls, value: object) -> str:
        if isinstance(value, Enum):
            value = value.value
        result = str(value or "").strip()
        if not result:
            raise ValueError("must not be empty")
        return result

    @field_validator("suggestions", mode="before")
    def _normalise_suggestions(cls, value: object) -> Tuple[str, ...]:
        if value is None:
            items: list[str] = []
        elif isinstance(value, str):
            # allow a single suggestion as a bare string
            items = [value.strip()]
        else:
            items = [str(x).strip() for x in value if str(x).strip()]
        items = [item for item in items if item]
        if not items:
            raise ValueError("suggestions must contain at least one entry")
        return tuple(items)

    @property
    def dedupe_key(self) -> tuple[str, str]:
        return (self.context, self.rule_id)
