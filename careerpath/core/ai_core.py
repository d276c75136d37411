# careerpath/core/ai_core.py
import json
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from pydantic import TypeAdapter, ValidationError

from careerpath.core.client import GeminiClient, get_ai_client
from careerpath.core.config import get_coach_temperature, get_model_name
from careerpath.core.errors import (
    AdviceError,
    CareerServiceError,
    EmptyResponseError,
    GenerationError,
    ParseError,
    RateLimitError,
)
from careerpath.core.schemas import (
    PATHWAY_RESPONSE_SCHEMA,
    SKILL_GAP_RESPONSE_SCHEMA,
    CareerPathway,
    ChatMessage,
    Skill,
)

logger = logging.getLogger(__name__)

COACH_SYSTEM_INSTRUCTION = (
    "You are an expert career coach and industry analyst. Provide encouraging, data-driven advice "
    "to help users bridge the gap between education and employment."
)
ADVICE_FALLBACK = "I'm sorry, I couldn't process that. Could you rephrase your question?"
COACH_RATE_LIMIT_MESSAGE = "Whoops! Too many messages. Please take a quick break and I'll be back in a second."
SKILL_GAP_FAILURE_MESSAGE = "Skill gap analysis failed. Please verify the target role and try again."

_SKILL_LIST = TypeAdapter(List[Skill])

HistoryTurn = Union[ChatMessage, Mapping[str, Any]]

# =========================
# Helper Functions
# =========================
def _is_rate_limited(error: Exception) -> bool:
    """True when the provider signalled throttling (HTTP 429 / RESOURCE_EXHAUSTED)."""
    if isinstance(error, google_exceptions.ResourceExhausted):
        return True
    if getattr(error, "code", None) == 429:
        return True
    return "429" in str(error)


def _response_text(response: Any) -> str:
    """Returns the response text, or '' when the SDK has no candidate to read it from."""
    try:
        return response.text or ""
    except ValueError:
        # Raised by the SDK when the candidate was blocked or has no parts.
        return ""


_CODE_FENCE = re.compile(r"^```[A-Za-z]*\s*(.*?)\s*```$", flags=re.DOTALL)


def _strict_json_loads(s: str) -> Any:
    """Loads a JSON payload, tolerating a surrounding markdown code fence."""
    s = s.strip()
    m = _CODE_FENCE.match(s)
    if m: s = m.group(1)
    try:
        return json.loads(s.strip())
    except json.JSONDecodeError as e:
        raise ParseError(f"The AI returned malformed JSON ({e.msg} at position {e.pos}). Please try again.") from e


def _structured_request(client: GeminiClient, model_name: str, prompt: str, schema: Dict[str, Any]) -> Any:
    model = client.generative_model(model_name)
    response = model.generate_content(
        prompt,
        generation_config=genai.types.GenerationConfig(
            response_mime_type="application/json",
            response_schema=schema,
        ),
    )
    text = _response_text(response)
    if not text.strip():
        raise EmptyResponseError()
    logger.info("Structured response received from %s (%d chars).", model_name, len(text))
    return _strict_json_loads(text)


def _history_to_contents(history: Optional[Iterable[HistoryTurn]]) -> List[Dict[str, Any]]:
    """
    Replays prior turns in order as Gemini chat contents. An error turn is dropped
    together with the user turn it failed to answer, so roles keep alternating.
    """
    contents = []
    for turn in history or []:
        if isinstance(turn, ChatMessage):
            role, text, is_error = turn.role, turn.text, turn.is_error
        else:
            role = turn.get("role")
            text = turn.get("text", turn.get("content", ""))
            is_error = bool(turn.get("isError", turn.get("is_error", False)))
        if is_error:
            if contents and contents[-1]["role"] == "user":
                contents.pop()
            continue
        if not text:
            continue
        contents.append({"role": role, "parts": [{"text": text}]})
    return contents


# =========================
# Structured Generation
# =========================
def generate_career_pathway(goal: str, background: str, client: Optional[GeminiClient] = None) -> CareerPathway:
    """
    Asks the model for a learning pathway towards `goal` given the user's background.
    Raises a CareerServiceError subclass on any failure; never returns a partial pathway.
    """
    if not goal or not goal.strip():
        raise ValueError("A career goal is required to generate a pathway.")
    client = client or get_ai_client()
    model_name = get_model_name("pathway")
    prompt = (
        f"Generate a personalized career learning pathway for a user wanting to become a {goal}. "
        f"User background: {background}."
    )
    try:
        data = _structured_request(client, model_name, prompt, PATHWAY_RESPONSE_SCHEMA)
        return CareerPathway.model_validate(data)
    except ValidationError as e:
        logger.error("Gemini API Error (Pathway): response did not match schema: %s", e)
        raise ParseError("The AI returned a pathway in an unexpected shape. Please try again.") from e
    except CareerServiceError as e:
        logger.error("Gemini API Error (Pathway): %s", e)
        raise
    except Exception as e:
        logger.error("Gemini API Error (Pathway): %s", e)
        if _is_rate_limited(e):
            raise RateLimitError() from e
        raise GenerationError(str(e) or None, operation="career pathway generation", detail=str(e)) from e


def analyze_skill_gap(current_skills: Sequence[str], target_role: str, client: Optional[GeminiClient] = None) -> List[Skill]:
    """Scores current vs. target proficiency for the skills a `target_role` needs, in model order."""
    if not target_role or not target_role.strip():
        raise ValueError("A target role is required for skill gap analysis.")
    client = client or get_ai_client()
    model_name = get_model_name("analysis")
    skills_text = ", ".join(current_skills) or "none listed"
    prompt = (
        f"Analyze the skill gap for a {target_role} based on these current skills: {skills_text}. "
        f"Return a list of skills with levels (0-100) and target levels."
    )
    try:
        data = _structured_request(client, model_name, prompt, SKILL_GAP_RESPONSE_SCHEMA)
        return _SKILL_LIST.validate_python(data)
    except ValidationError as e:
        logger.error("Gemini API Error (Skill Gap): response did not match schema: %s", e)
        raise ParseError("The AI returned skills in an unexpected shape. Please try again.") from e
    except CareerServiceError as e:
        logger.error("Gemini API Error (Skill Gap): %s", e)
        raise
    except Exception as e:
        logger.error("Gemini API Error (Skill Gap): %s", e)
        if _is_rate_limited(e):
            raise RateLimitError() from e
        raise GenerationError(SKILL_GAP_FAILURE_MESSAGE, operation="skill gap analysis", detail=str(e)) from e


# =========================
# Conversational Call
# =========================
def get_career_advice(history: Optional[Iterable[HistoryTurn]], message: str, client: Optional[GeminiClient] = None) -> str:
    """
    Single stateless coaching exchange. Prior turns are replayed into a fresh chat;
    an empty reply becomes a fixed fallback string instead of an error.
    """
    try:
        client = client or get_ai_client()
        model = client.generative_model(get_model_name("coach"), system_instruction=COACH_SYSTEM_INSTRUCTION)
        chat_session = model.start_chat(history=_history_to_contents(history))
        response = chat_session.send_message(
            message,
            generation_config=genai.types.GenerationConfig(temperature=get_coach_temperature()),
        )
        return _response_text(response).strip() or ADVICE_FALLBACK
    except CareerServiceError as e:
        logger.error("Gemini API Error (Coach): %s", e)
        raise
    except Exception as e:
        logger.error("Gemini API Error (Coach): %s", e)
        if _is_rate_limited(e):
            raise RateLimitError(COACH_RATE_LIMIT_MESSAGE) from e
        raise AdviceError() from e
