"""
StickyBoard Backend — Google Gemini Service Implementation
===========================================================

What:  Concrete LLM service that summarizes pasted text with Google Gemini.
How:   Sends the text with a summarization prompt, wrapped in tenacity retry
       logic and a circuit breaker.
Who:   Instantiated once at import; called by SummaryService for each
       POST /api/summarize and by the health route.

Resilience Strategy:
    1. Tenacity retry with exponential backoff + jitter for transient failures
    2. Circuit breaker so that a Gemini outage fails fast instead of piling
       up slow requests
    3. Per-call timeout on the generation request
"""

import logging
import time
import uuid
from typing import Optional

import google.generativeai as genai
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
    retry_if_exception_type,
    before_sleep_log,
    RetryError,
)

from app.config import settings
from app.exceptions import LLMServiceError, CircuitBreakerOpenError
from app.services.llm_base import LLMService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Circuit Breaker Implementation
# ══════════════════════════════════════════════════════════════════════════

class CircuitBreaker:
    """
    Circuit breaker around the Gemini API.

    State Machine:
        CLOSED (normal operation)
            → On failure: increment failure_count
            → When failure_count >= threshold: transition to OPEN

        OPEN (rejecting all requests)
            → All calls raise CircuitBreakerOpenError immediately
            → After recovery_timeout seconds: transition to HALF_OPEN

        HALF_OPEN (testing recovery)
            → Allow ONE request through
            → On success: transition to CLOSED (reset failure_count)
            → On failure: transition back to OPEN (reset timer)

    Not thread-safe; shared by the coroutines of a single uvicorn process.
    """

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"

    def __init__(self, failure_threshold: int = 5, recovery_timeout: int = 60):
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time: Optional[float] = None

    def can_execute(self) -> bool:
        """
        Check if a request is allowed through the circuit breaker.

        Raises:
            CircuitBreakerOpenError if circuit is OPEN and recovery timeout hasn't elapsed.
        """
        if self.state == self.CLOSED:
            return True

        if self.state == self.OPEN:
            elapsed = time.time() - (self.last_failure_time or 0)
            if elapsed >= self.recovery_timeout:
                logger.info(
                    "Circuit breaker transitioning to HALF_OPEN after %.1fs",
                    elapsed,
                )
                self.state = self.HALF_OPEN
                return True
            remaining = int(self.recovery_timeout - elapsed)
            raise CircuitBreakerOpenError(recovery_time=remaining)

        return True

    def record_success(self) -> None:
        """Record a successful call; always resets to CLOSED."""
        if self.state == self.HALF_OPEN:
            logger.info("Circuit breaker transitioning to CLOSED (service recovered)")
        self.failure_count = 0
        self.state = self.CLOSED
        self.last_failure_time = None

    def record_failure(self) -> None:
        """Record a failed call. May trigger CLOSED → OPEN transition."""
        self.failure_count += 1
        self.last_failure_time = time.time()

        if self.state == self.HALF_OPEN:
            logger.warning("Circuit breaker returning to OPEN (test request failed)")
            self.state = self.OPEN
        elif self.failure_count >= self.failure_threshold:
            logger.warning(
                "Circuit breaker OPENING after %d consecutive failures",
                self.failure_count,
            )
            self.state = self.OPEN


# ══════════════════════════════════════════════════════════════════════════
# Gemini Service
# ══════════════════════════════════════════════════════════════════════════

class GeminiService(LLMService):
    """
    Google Gemini implementation of the summarization provider.

    Error Handling Chain:
        API call fails → tenacity retries (default 3 attempts with backoff)
        → All retries fail → record circuit breaker failure → LLMServiceError
        → Threshold reached → future calls rejected instantly
        → Recovery timeout → one test call (HALF_OPEN)
    """

    SUMMARY_PROMPT = """Summarize the following text.
List the key points as 3 to 5 short bullet lines.
Answer in the same language as the text and return ONLY the bullet lines.

Text:
{text}"""

    def __init__(self):
        if settings.gemini_api_key and settings.gemini_api_key != "your_gemini_api_key_here":
            genai.configure(api_key=settings.gemini_api_key)

        self.model = genai.GenerativeModel(settings.gemini_model)

        self.circuit_breaker = CircuitBreaker(
            failure_threshold=settings.cb_failure_threshold,
            recovery_timeout=settings.cb_recovery_timeout,
        )

        logger.info(
            "GeminiService initialized with model=%s, "
            "circuit_breaker(threshold=%d, recovery=%ds)",
            settings.gemini_model,
            settings.cb_failure_threshold,
            settings.cb_recovery_timeout,
        )

    async def summarize(self, text: str) -> str:
        """
        Summarize text with Gemini.

        Flow:
            1. Check circuit breaker → may raise CircuitBreakerOpenError
            2. Send prompt with retry logic
            3. Record success/failure in circuit breaker
            4. Return the summary text

        Raises:
            CircuitBreakerOpenError: Circuit is open (too many recent failures)
            LLMServiceError: Gemini failed after all retry attempts
        """
        call_id = str(uuid.uuid4())[:8]

        self.circuit_breaker.can_execute()

        logger.info("[%s] Starting Gemini summary for %d chars", call_id, len(text))

        try:
            result = await self._call_gemini_with_retry(text, call_id)
            self.circuit_breaker.record_success()
            return result

        except CircuitBreakerOpenError:
            raise
        except RetryError as e:
            self.circuit_breaker.record_failure()
            logger.error(
                "[%s] All Gemini retries exhausted: %s",
                call_id,
                str(e.last_attempt.exception()) if e.last_attempt else "Unknown error",
            )
            raise LLMServiceError(
                message="Summarization failed after multiple attempts. Please try again later.",
                retry_after=self.circuit_breaker.recovery_timeout,
                context={"call_id": call_id, "attempts": settings.retry_max_attempts},
            )
        except Exception as e:
            self.circuit_breaker.record_failure()
            logger.error(
                "[%s] Gemini summary failed: %s",
                call_id,
                str(e),
                exc_info=True,
            )
            raise LLMServiceError(
                message="An unexpected error occurred while summarizing the text.",
                context={"call_id": call_id, "error_type": type(e).__name__},
            )

    @retry(
        retry=retry_if_exception_type((
            ConnectionError,
            TimeoutError,
            Exception,  # the Gemini SDK raises generic exceptions for API errors
        )),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            initial=settings.retry_min_wait,
            max=settings.retry_max_wait,
            jitter=1,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call_gemini_with_retry(self, text: str, call_id: str) -> str:
        """
        Makes the actual Gemini API call.

        Kept apart from summarize() so only the API call is retried, never
        the circuit breaker check.
        """
        start_time = time.time()

        try:
            response = await self.model.generate_content_async(
                self.SUMMARY_PROMPT.format(text=text),
                request_options={"timeout": 60},
            )
            duration_ms = (time.time() - start_time) * 1000
            summary = response.text.strip() if response.text else ""

            logger.info(
                "[%s] Gemini summary completed in %.0fms, %d chars",
                call_id,
                duration_ms,
                len(summary),
            )
            return summary

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.warning(
                "[%s] Gemini API call failed after %.0fms: %s",
                call_id,
                duration_ms,
                str(e),
            )
            raise

    async def health_check(self) -> bool:
        """
        Check if Gemini API is reachable by listing models (no token cost).
        """
        try:
            models = genai.list_models()
            model_names = [m.name for m in models]
            target = f"models/{settings.gemini_model}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


# Holds the circuit breaker state shared across requests
gemini_service = GeminiService()
