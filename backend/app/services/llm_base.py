"""
StickyBoard Backend — Abstract LLM Service Interface
=====================================================

What:  Abstract base class for the text summarization provider.
How:   Concrete implementations inherit from LLMService and implement
       summarize() and health_check().
Who:   Called by SummaryService (POST /api/summarize) and the health route.
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Abstract interface for AI-powered text summarization.

    Contract:
        - summarize() accepts free text and returns the summary text
        - Implementations handle their own retry logic and error translation
        - All implementation-specific errors are wrapped in LLMServiceError

    Implementations:
        - GeminiService: Google Gemini API (default)
    """

    @abstractmethod
    async def summarize(self, text: str) -> str:
        """
        Summarize a block of text as a few short bullet points.

        Args:
            text: Non-empty input text pasted by the user.

        Returns:
            The summary. Never None; an empty string when the model returned nothing.

        Raises:
            LLMServiceError: When the AI service fails after all retries.
            CircuitBreakerOpenError: When too many consecutive failures have
                occurred and calls are being rejected.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the LLM service is reachable and operational.

        Lightweight; does not consume generation quota.
        """
        ...
