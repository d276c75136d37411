# careerpath/routers/coach.py
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from careerpath.core.ai_core import get_career_advice
from careerpath.core.client import GeminiClient
from careerpath.core.errors import CareerServiceError
from careerpath.core.schemas import ChatMessage, UserProfile
from careerpath.core.session import CoachSession, SessionStore
from careerpath.dependencies import get_client_provider, get_gemini_client, get_session_store, raise_http_error

router = APIRouter()


class AdviceRequest(BaseModel):
    message: str = Field(min_length=1)
    history: List[ChatMessage] = Field(default_factory=list)


class SendMessageRequest(BaseModel):
    text: str = ""


def _get_session(store: SessionStore, session_id: str) -> CoachSession:
    try:
        return store.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found.")


@router.post("/advice")
async def get_advice_endpoint(
    request: AdviceRequest,
    client: GeminiClient = Depends(get_gemini_client)
) -> Dict[str, str]:
    """Stateless coaching call: the caller supplies the conversation so far."""
    try:
        reply = await run_in_threadpool(get_career_advice, request.history, request.message, client)
        return {"response": reply}
    except CareerServiceError as e:
        raise_http_error(e)


@router.post("/sessions", status_code=201)
async def create_session_endpoint(store: SessionStore = Depends(get_session_store)) -> Dict[str, str]:
    session = store.create()
    return {"sessionId": session.id}


@router.get("/sessions/{session_id}")
async def get_session_endpoint(session_id: str, store: SessionStore = Depends(get_session_store)) -> Dict[str, Any]:
    return _get_session(store, session_id).snapshot()


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session_endpoint(session_id: str, store: SessionStore = Depends(get_session_store)) -> Response:
    _get_session(store, session_id)
    store.delete(session_id)
    return Response(status_code=204)


@router.post("/sessions/{session_id}/onboarding")
async def complete_onboarding_endpoint(
    session_id: str,
    profile: UserProfile,
    store: SessionStore = Depends(get_session_store),
    client: GeminiClient = Depends(get_gemini_client)
) -> Dict[str, Any]:
    session = _get_session(store, session_id)
    try:
        await run_in_threadpool(session.complete_onboarding, profile, client)
    except CareerServiceError as e:
        raise_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return session.snapshot()


@router.post("/sessions/{session_id}/messages")
async def send_message_endpoint(
    session_id: str,
    request: SendMessageRequest,
    store: SessionStore = Depends(get_session_store),
    client_provider: Callable[[], GeminiClient] = Depends(get_client_provider)
) -> Dict[str, Optional[Dict[str, Any]]]:
    session = _get_session(store, session_id)
    if not request.text.strip():
        return {"message": None}
    reply = await run_in_threadpool(session.send_message, request.text, client_provider())
    return {"message": reply.model_dump(by_alias=True) if reply else None}
