from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from .config import AutogenSettings, RetryPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelProfile:
    """Request-shape quirks of one model family."""

    pattern: re.Pattern[str]
    token_limit_field: str = "max_tokens"
    supports_temperature: bool = True

    def matches(self, model: str) -> bool:
        return bool(self.pattern.search(model or ""))


MODEL_PROFILES: Sequence[ModelProfile] = (
    ModelProfile(re.compile(r"^gpt-5", re.I), token_limit_field="max_completion_tokens", supports_temperature=False),
    ModelProfile(re.compile(r"^o[134]\b", re.I), token_limit_field="max_completion_tokens", supports_temperature=False),
    ModelProfile(re.compile(r"^gpt-4o|^gpt-4\.1|^gpt-4\b|^gpt-3\.5", re.I)),
)

DEFAULT_MODEL_PROFILE = ModelProfile(re.compile(r""), supports_temperature=False)


def resolve_model_profile(model: str, profiles: Sequence[ModelProfile] = MODEL_PROFILES) -> ModelProfile:
    for profile in profiles:
        if profile.matches(model):
            return profile
    return DEFAULT_MODEL_PROFILE


@dataclass(frozen=True)
class CompletionResponse:
    """Outcome of a single HTTP attempt; status 0 means no response arrived."""

    status: int
    text: str = ""
    error_message: str | None = None
    usage: dict[str, Any] | None = None
    response_id: str | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def retryable(self) -> bool:
        return self.status == 0 or self.status == 429 or self.status >= 500

    @property
    def fatal(self) -> bool:
        return not self.ok and not self.retryable

    def describe_error(self) -> str:
        return self.error_message or f"LLM HTTP error ({self.status})"


class GenerationClient:
    """Issues one chat-completions request per call with a hard timeout."""

    def __init__(
        self,
        *,
        api_key: str | None,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float | None = 60.0,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        profiles: Sequence[ModelProfile] = MODEL_PROFILES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        # zero disables the per-call deadline
        self.timeout = timeout or None
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.profile = resolve_model_profile(model, profiles)
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: AutogenSettings,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "GenerationClient":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=RetryPolicy.from_settings(settings).timeout,
            temperature=temperature,
            max_tokens=max_tokens,
            transport=transport,
        )

    def _http_client(self) -> httpx.AsyncClient:
        # replaces httpx's 5s default; None waits indefinitely
        return httpx.AsyncClient(transport=self._transport, timeout=httpx.Timeout(self.timeout))

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def build_body(self, *, system: str, user: str) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "response_format": {"type": "json_object"},
            self.profile.token_limit_field: self.max_tokens,
        }
        if self.profile.supports_temperature:
            body["temperature"] = self.temperature
        return body

    async def complete(self, *, system: str, user: str, section_type: str) -> CompletionResponse:
        body = self.build_body(system=system, user=user)
        logger.info(
            "LLM request",
            extra={
                "section_type": section_type,
                "model": self.model,
                "system_chars": len(system),
                "user_chars": len(user),
                "token_limit_field": self.profile.token_limit_field,
                "sends_temperature": self.profile.supports_temperature,
            },
        )

        started = time.monotonic()
        try:
            async with self._http_client() as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": f"Bearer {self.api_key}",
                    },
                    json=body,
                )
        except httpx.TimeoutException:
            message = f"Timeout after {int((self.timeout or 0) * 1000)}ms"
            logger.error("LLM request timed out", extra={"section_type": section_type, "error": message})
            return CompletionResponse(status=0, error_message=message, elapsed_ms=_elapsed(started))
        except httpx.HTTPError as exc:
            logger.error(
                "LLM request failed",
                extra={"section_type": section_type, "error": str(exc)},
            )
            return CompletionResponse(status=0, error_message=str(exc) or type(exc).__name__, elapsed_ms=_elapsed(started))

        payload = _json_or_empty(response)
        text = _message_content(payload)
        result = CompletionResponse(
            status=response.status_code,
            text=text,
            error_message=_error_message(payload),
            usage=payload.get("usage") if isinstance(payload.get("usage"), dict) else None,
            response_id=payload.get("id") if isinstance(payload.get("id"), str) else None,
            elapsed_ms=_elapsed(started),
        )

        logger.info(
            "LLM response",
            extra={
                "section_type": section_type,
                "status": result.status,
                "ms": result.elapsed_ms,
                "output_chars": len(text),
                "raw_preview": snippet(text, 400),
                "usage": result.usage,
                "response_id": result.response_id,
            },
        )
        return result


def snippet(text: str, limit: int = 800) -> str:
    text = text or ""
    return text if len(text) <= limit else text[:limit] + "…(truncated)"


def _elapsed(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _message_content(payload: dict[str, Any]) -> str:
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message") if isinstance(first.get("message"), dict) else {}
    content = message.get("content")
    return content if isinstance(content, str) else ""


def _error_message(payload: dict[str, Any]) -> str | None:
    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


__all__ = [
    "ModelProfile",
    "MODEL_PROFILES",
    "DEFAULT_MODEL_PROFILE",
    "resolve_model_profile",
    "CompletionResponse",
    "GenerationClient",
    "snippet",
]
