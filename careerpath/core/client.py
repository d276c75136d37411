# careerpath/core/client.py
from typing import Optional

import google.generativeai as genai

from careerpath.core.config import get_api_key
from careerpath.core.errors import ConfigurationError


class GeminiClient:
    """
    Authenticated handle to the Gemini API.
    Holds the credential only; the SDK is configured when a model is requested.
    """

    def __init__(self, api_key: Optional[str]):
        if not api_key or not api_key.strip():
            raise ConfigurationError()
        self.api_key = api_key.strip()

    def generative_model(self, model_name: str, system_instruction: Optional[str] = None) -> genai.GenerativeModel:
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(model_name, system_instruction=system_instruction)


def get_ai_client(api_key: Optional[str] = None) -> GeminiClient:
    """Builds a client from the given key, or from the environment when none is passed."""
    if api_key is None:
        api_key = get_api_key()
    return GeminiClient(api_key)
