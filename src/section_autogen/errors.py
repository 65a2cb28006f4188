from __future__ import annotations

from typing import Any, Mapping


class AutogenError(Exception):
    """Base class for errors raised by the generation pipeline."""


class RequestValidationError(AutogenError):
    """The request cannot produce a document; surfaced to the caller as-is."""

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.context:
            payload["debug"] = self.context
        return payload


__all__ = ["AutogenError", "RequestValidationError"]
