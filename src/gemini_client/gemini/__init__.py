"""Gemini transport built on the google-genai SDK."""

from .client import GeminiClient
from .adapter import GenAIRequestAdapter

__all__ = ["GeminiClient", "GenAIRequestAdapter"]
