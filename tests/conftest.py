import json

import pytest
from fastapi.testclient import TestClient

from careerpath.core.config import API_KEY_VARIABLES
from careerpath.core.session import SessionStore
from careerpath.dependencies import get_client_provider, get_gemini_client, get_session_store
from careerpath.main import app


class FakeResponse:
    def __init__(self, text):
        self._text = text

    @property
    def text(self):
        if isinstance(self._text, Exception):
            raise self._text
        return self._text


class FakeChat:
    def __init__(self, model, history):
        self.model = model
        self.history = history

    def send_message(self, message, generation_config=None):
        self.model.sent.append({"message": message, "history": self.history, "generation_config": generation_config})
        return self.model._next()


class FakeModel:
    """Stands in for genai.GenerativeModel; replies are consumed in order."""

    def __init__(self, *replies, error=None):
        self.replies = list(replies)
        self.error = error
        self.calls = []
        self.sent = []

    def _next(self):
        if self.error is not None:
            raise self.error
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, (dict, list)):
            reply = json.dumps(reply)
        return FakeResponse(reply)

    def generate_content(self, contents, generation_config=None):
        self.calls.append({"contents": contents, "generation_config": generation_config})
        return self._next()

    def start_chat(self, history=None):
        return FakeChat(self, history)

    @property
    def call_count(self):
        return len(self.calls) + len(self.sent)


class FakeClient:
    def __init__(self, model):
        self.model = model
        self.requested = []

    def generative_model(self, model_name, system_instruction=None):
        self.requested.append({"model_name": model_name, "system_instruction": system_instruction})
        return self.model


def make_pathway(**overrides):
    pathway = {
        "id": "path-1",
        "goal": "Senior Frontend Engineer",
        "marketDemand": "high",
        "estimatedSalary": "$120k - $160k",
        "matchPercentage": 72,
        "modules": [
            {
                "id": "m1",
                "title": "Advanced React Patterns",
                "description": "Hooks, suspense and state management at scale.",
                "duration": "4 weeks",
                "type": "course",
                "skills": ["React", "TypeScript"],
                "status": "not_started",
            },
            {
                "id": "m2",
                "title": "Design System Capstone",
                "description": "Ship a component library with docs and tests.",
                "duration": "6 weeks",
                "type": "project",
                "skills": ["Accessibility", "Storybook"],
                "status": "not_started",
            },
        ],
    }
    pathway.update(overrides)
    return pathway


def make_skills():
    return [
        {"name": "TypeScript", "level": 40, "targetLevel": 85, "category": "technical"},
        {"name": "Communication", "level": 60, "targetLevel": 75, "category": "soft"},
        {"name": "Web Performance", "level": 20, "targetLevel": 70, "category": "domain"},
    ]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in API_KEY_VARIABLES + ("PATHWAY_MODEL", "ANALYSIS_MODEL", "COACH_MODEL", "COACH_TEMPERATURE", "MAX_SESSIONS", "SESSION_TTL_SEC"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def pathway_payload():
    return make_pathway()


@pytest.fixture
def skills_payload():
    return make_skills()


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
def api(session_store):
    """TestClient factory; pass a FakeModel to stand in for Gemini."""
    def _make(model=None):
        if model is not None:
            app.dependency_overrides[get_gemini_client] = lambda: FakeClient(model)
            app.dependency_overrides[get_client_provider] = lambda: (lambda: FakeClient(model))
        app.dependency_overrides[get_session_store] = lambda: session_store
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
