from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FailureReason(str, Enum):
    missing_credential = "missing_credential"
    http_error = "http_error"
    empty_output = "empty_output"
    invalid_json = "invalid_json"
    empty_object = "empty_object"
    unexpected_error = "unexpected_error"


@dataclass(frozen=True)
class GenerationFailure:
    reason: FailureReason
    detail: str = ""
    status: int | None = None

    def describe(self, section_type: str) -> str:
        """Human-readable warning text for a section that fell back."""
        if self.reason is FailureReason.missing_credential:
            head = "LLM credential missing"
        elif self.reason is FailureReason.http_error:
            head = f'LLM error for "{section_type}": {self.detail or f"HTTP {self.status}"}'
        elif self.reason is FailureReason.empty_output:
            head = f'Empty LLM output for "{section_type}"'
        elif self.reason is FailureReason.invalid_json:
            head = f'Invalid JSON from LLM for "{section_type}"'
        elif self.reason is FailureReason.empty_object:
            head = f'LLM returned an empty object for "{section_type}"'
        else:
            head = f'Unexpected failure for "{section_type}": {self.detail}'
        return f"{head} -> fallback defaultData"


@dataclass
class RetryState:
    """Per-section attempt counters; discarded once the section settles."""

    requests: int = 0
    http_failures: int = 0
    empty_failures: int = 0
    invalid_json_failures: int = 0


@dataclass(frozen=True)
class GenerationResult:
    section_type: str
    payload: dict[str, Any] | None = None
    failure: GenerationFailure | None = None
    state: RetryState = field(default_factory=RetryState)

    def __post_init__(self) -> None:
        if (self.payload is None) == (self.failure is None):
            raise ValueError("GenerationResult carries exactly one of payload or failure")

    @property
    def ok(self) -> bool:
        return self.failure is None


__all__ = ["FailureReason", "GenerationFailure", "GenerationResult", "RetryState"]
