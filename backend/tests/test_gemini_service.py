"""
StickyBoard Backend — Gemini Service Unit Tests (Mocked)
=========================================================

What:  GeminiService with the Google Generative AI SDK mocked out.
How:   Patches the genai module and the model to simulate success/failure.

What we test:
    ✅ Successful summarization returns the model text
    ✅ Circuit breaker state machine
    ✅ Failures are wrapped in LLMServiceError and counted by the breaker
    ❌ Real API calls
"""

import time

import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from tenacity import RetryError

from app.services.gemini_service import GeminiService, CircuitBreaker
from app.exceptions import CircuitBreakerOpenError, LLMServiceError


class TestCircuitBreaker:

    def test_initial_state_is_closed(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        assert cb.state == "closed"
        assert cb.failure_count == 0

    def test_stays_closed_under_threshold(self):
        cb = CircuitBreaker(failure_threshold=5, recovery_timeout=60)
        for _ in range(4):
            cb.record_failure()
        assert cb.state == "closed"
        assert cb.can_execute() is True

    def test_opens_at_threshold(self):
        cb = CircuitBreaker(failure_threshold=3, recovery_timeout=60)
        for _ in range(3):
            cb.record_failure()
        assert cb.state == "open"

    def test_open_circuit_rejects_calls(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=60)
        cb.record_failure()

        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            cb.can_execute()
        assert 0 < exc_info.value.recovery_time <= 60

    def test_half_open_after_recovery_timeout(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        time.sleep(0.01)

        assert cb.can_execute() is True
        assert cb.state == "half_open"

    def test_failure_in_half_open_reopens(self):
        cb = CircuitBreaker(failure_threshold=3, recovery_timeout=0)
        for _ in range(3):
            cb.record_failure()
        time.sleep(0.01)
        cb.can_execute()

        cb.record_failure()
        assert cb.state == "open"

    def test_success_resets(self):
        cb = CircuitBreaker(failure_threshold=1, recovery_timeout=0)
        cb.record_failure()
        time.sleep(0.01)
        cb.can_execute()

        cb.record_success()
        assert cb.state == "closed"
        assert cb.failure_count == 0


class TestGeminiServiceMocked:

    @pytest.mark.asyncio
    async def test_summarize_success(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_response = MagicMock()
            mock_response.text = "  - one\n- two  "

            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=mock_response)
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            result = await service.summarize("Some long text")

            assert result == "- one\n- two"
            prompt = mock_model.generate_content_async.call_args.args[0]
            assert "Some long text" in prompt
            assert service.circuit_breaker.failure_count == 0

    @pytest.mark.asyncio
    async def test_summarize_empty_response(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_response = MagicMock()
            mock_response.text = ""
            mock_model = MagicMock()
            mock_model.generate_content_async = AsyncMock(return_value=mock_response)
            mock_genai.GenerativeModel.return_value = mock_model

            service = GeminiService()
            assert await service.summarize("text") == ""

    @pytest.mark.asyncio
    async def test_failure_wrapped_and_counted(self):
        with patch("app.services.gemini_service.genai"):
            service = GeminiService()

        # Skip tenacity's backoff; the retry wrapper itself is tenacity's job
        with patch.object(
            service, "_call_gemini_with_retry", AsyncMock(side_effect=RuntimeError("quota"))
        ):
            with pytest.raises(LLMServiceError):
                await service.summarize("text")

        assert service.circuit_breaker.failure_count == 1

    @pytest.mark.asyncio
    async def test_exhausted_retries_set_retry_after(self):
        with patch("app.services.gemini_service.genai"):
            service = GeminiService()

        retry_error = RetryError(last_attempt=MagicMock())
        with patch.object(
            service, "_call_gemini_with_retry", AsyncMock(side_effect=retry_error)
        ):
            with pytest.raises(LLMServiceError) as exc_info:
                await service.summarize("text")

        assert exc_info.value.retry_after == service.circuit_breaker.recovery_timeout

    @pytest.mark.asyncio
    async def test_open_circuit_short_circuits(self):
        with patch("app.services.gemini_service.genai"):
            service = GeminiService()

        for _ in range(service.circuit_breaker.failure_threshold):
            service.circuit_breaker.record_failure()

        with patch.object(service, "_call_gemini_with_retry", AsyncMock()) as mock_call:
            with pytest.raises(CircuitBreakerOpenError):
                await service.summarize("text")
            mock_call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_health_check_returns_bool(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_genai.list_models.return_value = [MagicMock()]

            service = GeminiService()
            assert await service.health_check() is True

    @pytest.mark.asyncio
    async def test_health_check_failure(self):
        with patch("app.services.gemini_service.genai") as mock_genai:
            mock_genai.list_models.side_effect = RuntimeError("no network")

            service = GeminiService()
            assert await service.health_check() is False
