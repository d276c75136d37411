"""Career pathway backend: Gemini-powered pathway, skill-gap and coaching API."""

__version__ = "1.0.0"
