# careerpath/dependencies.py
from typing import Callable

from fastapi import HTTPException

from careerpath.core.client import GeminiClient, get_ai_client
from careerpath.core.errors import CareerServiceError, ConfigurationError
from careerpath.core.session import SessionStore

_session_store = SessionStore()


def get_gemini_client() -> GeminiClient:
    try:
        return get_ai_client()
    except ConfigurationError as e:
        raise HTTPException(status_code=e.status_code, detail=e.user_message)


def get_client_provider() -> Callable[[], GeminiClient]:
    """For endpoints that only sometimes call the model: the client is built on demand."""
    return get_gemini_client


def get_session_store() -> SessionStore:
    return _session_store


def raise_http_error(error: CareerServiceError) -> None:
    """Re-raises a classified service error as the matching HTTP response."""
    raise HTTPException(status_code=error.status_code, detail=error.user_message) from error
