# careerpath/core/session.py
import logging
import threading
import time
import uuid
from typing import Dict, List, Optional

from cachetools import TTLCache

from careerpath.core.ai_core import analyze_skill_gap, generate_career_pathway, get_career_advice
from careerpath.core.client import GeminiClient
from careerpath.core.config import get_max_sessions, get_session_ttl
from careerpath.core.errors import CareerServiceError
from careerpath.core.schemas import CareerPathway, ChatMessage, LoadingState, Skill, UserProfile

logger = logging.getLogger(__name__)


class CoachSession:
    """
    View state for one user session: profile, generated pathway, skill gaps and
    the coach conversation. Lives in memory only and is never persisted.
    """

    def __init__(self, session_id: Optional[str] = None):
        self.id = session_id or uuid.uuid4().hex
        self.profile: Optional[UserProfile] = None
        self.pathway: Optional[CareerPathway] = None
        self.skills: List[Skill] = []
        self.messages: List[ChatMessage] = []
        self.loading = LoadingState()

    def complete_onboarding(self, profile: UserProfile, client: Optional[GeminiClient] = None) -> None:
        """
        Generates the pathway and the skill gap for a freshly onboarded profile.
        On failure the previous profile, pathway and skills are left untouched.
        """
        self.loading = LoadingState(is_active=True, message="Syncing with global job market...")
        try:
            pathway = generate_career_pathway(profile.goal, profile.background(), client=client)
            skills = analyze_skill_gap(profile.current_skills(), profile.goal, client=client)
        except (CareerServiceError, ValueError) as e:
            self.loading = LoadingState(error=getattr(e, "user_message", str(e)))
            raise
        self.profile = profile
        self.pathway = pathway
        self.skills = skills
        self.loading = LoadingState()

    def send_message(self, text: str, client: Optional[GeminiClient] = None) -> Optional[ChatMessage]:
        """
        Sends `text` to the coach and appends both turns to the conversation.
        Blank input is ignored and makes no model call. A failed call is recorded
        as a model turn flagged `is_error` carrying the user-facing message.
        """
        if not text or not text.strip():
            return None
        history = list(self.messages)
        self.messages.append(ChatMessage(role="user", text=text))
        try:
            reply = ChatMessage(role="model", text=get_career_advice(history, text, client=client))
        except CareerServiceError as e:
            logger.warning("Coach reply failed for session %s: %s", self.id, e)
            reply = ChatMessage(role="model", text=e.user_message, is_error=True)
        self.messages.append(reply)
        return reply

    def snapshot(self) -> Dict:
        return {
            "sessionId": self.id,
            "profile": self.profile.model_dump(by_alias=True) if self.profile else None,
            "pathway": self.pathway.model_dump(by_alias=True) if self.pathway else None,
            "skills": [skill.model_dump(by_alias=True) for skill in self.skills],
            "messages": [message.model_dump(by_alias=True) for message in self.messages],
            "loading": self.loading.model_dump(by_alias=True),
        }


class SessionStore:
    """
    Process-local registry of coach sessions.
    Bounded: a session idle for longer than `ttl_seconds` expires, and once
    `max_sessions` is reached the least recently used one is evicted.
    """

    def __init__(self, max_sessions: Optional[int] = None, ttl_seconds: Optional[float] = None, timer=time.monotonic):
        self._sessions: TTLCache = TTLCache(
            maxsize=max_sessions or get_max_sessions(),
            ttl=ttl_seconds or get_session_ttl(),
            timer=timer,
        )
        self._lock = threading.Lock()

    def create(self) -> CoachSession:
        session = CoachSession()
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> CoachSession:
        with self._lock:
            session = self._sessions[session_id]
            # Re-inserting restarts the idle clock.
            self._sessions[session_id] = session
            return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            del self._sessions[session_id]

    def __len__(self) -> int:
        with self._lock:
            self._sessions.expire()
            return len(self._sessions)
