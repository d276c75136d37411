# careerpath/core/errors.py
"""Error kinds raised by the model integration layer.

Every failure of a structured call surfaces as one of these; the routers turn
them into HTTP responses using ``status_code`` and ``user_message``.
"""
from typing import Optional


class CareerServiceError(Exception):
    """Base class for all classified service failures."""

    default_message = "Something went wrong while talking to the AI service."
    retryable = True
    status_code = 502

    def __init__(self, message: Optional[str] = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class ConfigurationError(CareerServiceError):
    default_message = "API Key is missing (missing credential). Please ensure your environment is configured correctly."
    retryable = False
    status_code = 503


class EmptyResponseError(CareerServiceError):
    default_message = "The AI returned an empty response. Please try again."


class ParseError(CareerServiceError):
    default_message = "The AI returned a response that could not be understood. Please try again."


class RateLimitError(CareerServiceError):
    default_message = "The AI service is currently busy (Rate Limit). Please wait a moment and try again."
    status_code = 429


class GenerationError(CareerServiceError):
    """Catch-all for a failed structured generation call."""

    default_message = "Failed to generate your personalized pathway. Please check your connection and try again."

    def __init__(self, message: Optional[str] = None, operation: str = "generation", detail: Optional[str] = None):
        self.operation = operation
        self.detail = detail
        super().__init__(message)


class AdviceError(CareerServiceError):
    default_message = "I had trouble connecting to my knowledge base. Is your internet working?"
