# careerpath/core/schemas.py
import time
import uuid
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _normalize_choice(value: Any) -> Any:
    """Lower-cases enum-like strings so 'High' and ' high' both validate."""
    if isinstance(value, str):
        return value.strip().lower().replace(" ", "_")
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# =========================
# Model-produced contracts
# =========================
class LearningModule(CamelModel):
    id: str
    title: str
    description: str
    duration: str
    type: Literal["course", "project", "certification"]
    skills: List[str]
    status: Literal["not_started", "in_progress", "completed"] = "not_started"
    provider: Optional[str] = None

    @field_validator("type", "status", mode="before")
    @classmethod
    def _normalize(cls, value):
        return _normalize_choice(value)


class CareerPathway(CamelModel):
    id: str
    goal: str
    market_demand: Literal["high", "medium", "low"] = Field(alias="marketDemand")
    estimated_salary: str = Field(alias="estimatedSalary")
    # Not clamped: values outside 0-100 are passed through as the model sent them.
    match_percentage: float = Field(alias="matchPercentage")
    modules: List[LearningModule]

    @field_validator("market_demand", mode="before")
    @classmethod
    def _normalize(cls, value):
        return _normalize_choice(value)


class Skill(CamelModel):
    name: str
    level: float
    target_level: float = Field(alias="targetLevel")
    category: Literal["technical", "soft", "domain"]

    @field_validator("category", mode="before")
    @classmethod
    def _normalize(cls, value):
        return _normalize_choice(value)

    @property
    def gap(self) -> float:
        return self.target_level - self.level


# =========================
# Session-side contracts
# =========================
class ChatMessage(CamelModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Literal["user", "model"]
    text: str
    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))
    is_error: bool = Field(default=False, alias="isError")


class UserProfile(CamelModel):
    name: str = ""
    email: str = ""
    current_role: str = Field(default="", alias="currentRole")
    education: str = ""
    years_of_exp: str = Field(default="", alias="yearsOfExp")
    industry: str = ""
    goal: str = Field(min_length=1)
    experience_level: Literal["entry", "mid", "senior"] = Field(default="entry", alias="experienceLevel")
    time_availability: str = Field(default="10", alias="timeAvailability")
    learning_style: str = Field(default="practical", alias="learningStyle")
    skills_assessment: Dict[str, int] = Field(default_factory=dict, alias="skillsAssessment")

    def background(self) -> str:
        return f"{self.current_role}, {self.industry}"

    def current_skills(self) -> List[str]:
        return list(self.skills_assessment.keys())


class LoadingState(CamelModel):
    is_active: bool = Field(default=False, alias="isActive")
    message: str = ""
    error: Optional[str] = None


# =========================
# Response schemas sent to Gemini
# =========================
LEARNING_MODULE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "id": {"type": "STRING"},
        "title": {"type": "STRING"},
        "description": {"type": "STRING"},
        "duration": {"type": "STRING"},
        "type": {"type": "STRING", "description": "course, project, or certification"},
        "skills": {"type": "ARRAY", "items": {"type": "STRING"}},
        "status": {"type": "STRING", "description": "not_started"},
    },
    "required": ["id", "title", "description", "duration", "type", "skills", "status"],
}

PATHWAY_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "id": {"type": "STRING"},
        "goal": {"type": "STRING"},
        "marketDemand": {"type": "STRING", "description": "high, medium, or low"},
        "estimatedSalary": {"type": "STRING"},
        "matchPercentage": {"type": "NUMBER"},
        "modules": {"type": "ARRAY", "items": LEARNING_MODULE_SCHEMA},
    },
    "required": ["id", "goal", "marketDemand", "estimatedSalary", "matchPercentage", "modules"],
}

SKILL_GAP_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "level": {"type": "NUMBER"},
            "targetLevel": {"type": "NUMBER"},
            "category": {"type": "STRING", "description": "technical, soft, or domain"},
        },
        "required": ["name", "level", "targetLevel", "category"],
    },
}
