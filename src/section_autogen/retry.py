from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from .config import RetryPolicy
from .llm_client import CompletionResponse, GenerationClient, snippet
from .models.generation import FailureReason, GenerationFailure, GenerationResult, RetryState
from .normalizer import extract_json_object

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class RetryOrchestrator:
    """Runs one section's generation under the three-tier retry policy.

    Every attempt is a fresh HTTP request. Its outcome lands in exactly one
    tier: transport/status errors, empty output, or unparsable output. Each
    tier has its own budget and counter; a failure with budget left waits
    ``base_delay * tier_attempt`` and retries, otherwise the section fails
    with that tier's reason. Once empty or unparsable output has triggered
    a re-issue, a retryable HTTP failure on that re-issue counts against the
    recovering tier, not the HTTP budget. Fatal HTTP statuses and a parsed
    ``{}`` fail immediately.
    """

    def __init__(
        self,
        client: GenerationClient,
        policy: RetryPolicy = RetryPolicy(),
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.client = client
        self.policy = policy
        self._sleep = sleep

    async def run(self, *, section_type: str, system: str, user: str) -> GenerationResult:
        state = RetryState()

        if not self.client.has_credential:
            logger.warning("LLM credential missing", extra={"section_type": section_type})
            return _failed(section_type, state, FailureReason.missing_credential)

        recovering: FailureReason | None = None
        while True:
            state.requests += 1
            response = await self.client.complete(system=system, user=user, section_type=section_type)

            if not response.ok:
                if recovering is not None and response.retryable:
                    # a failed re-issue is charged to the tier that requested it
                    failure = await self._on_recovery_error(recovering, section_type, state, response)
                else:
                    failure = await self._on_http_error(section_type, state, response)
            elif not response.text.strip():
                recovering = FailureReason.empty_output
                failure = await self._on_empty(section_type, state)
            else:
                payload = extract_json_object(response.text)
                if payload is None:
                    recovering = FailureReason.invalid_json
                    failure = await self._on_invalid_json(section_type, state, response)
                elif not payload:
                    failure = GenerationFailure(FailureReason.empty_object)
                else:
                    return GenerationResult(section_type=section_type, payload=payload, state=state)

            if failure is not None:
                return GenerationResult(section_type=section_type, failure=failure, state=state)

    async def _on_http_error(
        self,
        section_type: str,
        state: RetryState,
        response: CompletionResponse,
    ) -> GenerationFailure | None:
        message = response.describe_error()
        state.http_failures += 1
        can_retry = response.retryable and state.http_failures <= self.policy.http_retries
        logger.error(
            "LLM HTTP error",
            extra={
                "section_type": section_type,
                "attempt": state.http_failures,
                "status": response.status,
                "error": message,
                "can_retry": can_retry,
            },
        )
        if not can_retry:
            return GenerationFailure(FailureReason.http_error, detail=message, status=response.status)
        await self._backoff(section_type, "http", state.http_failures)
        return None

    async def _on_recovery_error(
        self,
        tier: FailureReason,
        section_type: str,
        state: RetryState,
        response: CompletionResponse,
    ) -> GenerationFailure | None:
        logger.warning(
            "LLM HTTP error during recovery",
            extra={
                "section_type": section_type,
                "tier": tier.value,
                "status": response.status,
                "error": response.describe_error(),
            },
        )
        if tier is FailureReason.empty_output:
            return await self._on_empty(section_type, state)
        return await self._on_invalid_json(section_type, state, response)

    async def _on_empty(self, section_type: str, state: RetryState) -> GenerationFailure | None:
        state.empty_failures += 1
        if state.empty_failures > self.policy.empty_retries:
            return GenerationFailure(FailureReason.empty_output)
        await self._backoff(section_type, "empty_output", state.empty_failures)
        return None

    async def _on_invalid_json(
        self,
        section_type: str,
        state: RetryState,
        response: CompletionResponse,
    ) -> GenerationFailure | None:
        state.invalid_json_failures += 1
        logger.error(
            "LLM output is not a JSON object",
            extra={
                "section_type": section_type,
                "attempt": state.invalid_json_failures,
                "raw_preview": snippet(response.text, 1200),
            },
        )
        if state.invalid_json_failures > self.policy.invalid_json_retries:
            return GenerationFailure(FailureReason.invalid_json)
        await self._backoff(section_type, "invalid_json", state.invalid_json_failures)
        return None

    async def _backoff(self, section_type: str, tier: str, attempt: int) -> None:
        delay = self.policy.delay(attempt)
        logger.warning(
            "Retrying LLM generation",
            extra={"section_type": section_type, "tier": tier, "attempt": attempt, "delay": delay},
        )
        await self._sleep(delay)


def _failed(section_type: str, state: RetryState, reason: FailureReason) -> GenerationResult:
    return GenerationResult(section_type=section_type, failure=GenerationFailure(reason), state=state)


__all__ = ["RetryOrchestrator", "Sleep"]
