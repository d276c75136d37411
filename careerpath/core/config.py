# careerpath/core/config.py
import os
from typing import List, Optional

from dotenv import load_dotenv

# =========================
# Setup
# =========================
load_dotenv()

API_KEY_VARIABLES = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")

DEFAULT_MODELS = {
    "pathway": "gemini-2.5-pro",
    "analysis": "gemini-2.5-flash",
    "coach": "gemini-2.5-flash",
}

DEFAULT_CORS_ORIGINS = [
    "http://localhost", "http://localhost:3000", "http://localhost:5173",
    "http://127.0.0.1", "http://127.0.0.1:3000", "http://127.0.0.1:5173",
]


def get_api_key() -> Optional[str]:
    """Returns the first non-empty credential found in the environment."""
    for name in API_KEY_VARIABLES:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return None


def get_model_name(kind: str) -> str:
    """Model for 'pathway', 'analysis' or 'coach', overridable via <KIND>_MODEL."""
    if kind not in DEFAULT_MODELS:
        raise ValueError(f"Unknown model kind '{kind}'.")
    return (os.getenv(f"{kind.upper()}_MODEL") or "").strip() or DEFAULT_MODELS[kind]


def get_coach_temperature() -> float:
    raw = (os.getenv("COACH_TEMPERATURE") or "").strip()
    return float(raw) if raw else 0.4


def get_cors_origins() -> List[str]:
    raw = (os.getenv("CORS_ORIGINS") or "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_log_level() -> str:
    return (os.getenv("LOG_LEVEL") or "INFO").strip().upper()


def get_max_sessions() -> int:
    return int((os.getenv("MAX_SESSIONS") or "").strip() or 1000)


def get_session_ttl() -> float:
    """Seconds a coach session may sit idle before it expires."""
    return float((os.getenv("SESSION_TTL_SEC") or "").strip() or 3600)
