"""Bounded attempt/revision loop around the model call"""
import logging
from typing import Optional
from promptify_api.core import quality_gate
from promptify_api.core.model_client import ModelClient
from promptify_api.core.response_sanitizer import sanitize_model_output
from promptify_api.generator.generator_prompt import build_messages
from promptify_api.generator.generator_schemas import ControllerOutcome, ControllerState, GenerationAttempt
from promptify_api.models.schemas import Brief

logger = logging.getLogger(__name__)


class RetryController:
    """
    Runs up to `max_attempts` sequential generations until one passes the quality gate.

    Only content failures are retried. Errors raised by the model client
    (ModelCallError and friends) are not caught here and end the request.
    """

    def __init__(self, model_client: ModelClient, max_attempts: int, max_output_tokens: Optional[int] = None):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.model_client = model_client
        self.max_attempts = max_attempts
        self.max_output_tokens = max_output_tokens

    async def run(self, brief: Brief) -> ControllerOutcome:
        outcome = ControllerOutcome(state=ControllerState.ATTEMPTING)
        previous_reason: Optional[str] = None

        for index in range(1, self.max_attempts + 1):
            messages = build_messages(brief, index, previous_reason)
            attempt = GenerationAttempt(index=index, messages=messages)
            outcome.attempts.append(attempt)

            raw = await self.model_client.complete(messages, max_output_tokens=self.max_output_tokens)
            attempt.raw_output = raw or ""
            attempt.candidate = sanitize_model_output(raw)

            result = quality_gate.evaluate(attempt.candidate)
            attempt.passed = result.passed
            attempt.check = result.check
            attempt.reason = result.reason

            if result.passed:
                logger.info(
                    f"[RetryController] ✓ Attempt {index}/{self.max_attempts} passed the quality gate | "
                    f"length={len(attempt.candidate)} chars"
                )
                outcome.state = ControllerState.PASSED
                outcome.candidate = attempt.candidate
                return outcome

            logger.warning(
                f"[RetryController] ✗ Attempt {index}/{self.max_attempts} rejected | "
                f"check={result.check} | reason={result.reason}"
            )
            previous_reason = result.reason

        outcome.state = ControllerState.EXHAUSTED
        logger.warning(
            f"[RetryController] Exhausted {self.max_attempts} attempts | last_reason={outcome.last_reason}"
        )
        return outcome
