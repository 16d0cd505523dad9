"""Generative coach: Gemini client, JSON extraction, template fallbacks."""

from app.coach.gemini import GeminiClient, GenerationError, build_generator
from app.coach.parsing import extract_json_object

__all__ = ["GeminiClient", "GenerationError", "build_generator", "extract_json_object"]
