"""
Google Gemini text generation over the public REST API.
"""
import time
from typing import Optional, Protocol

import httpx

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class GenerationError(Exception):
    """The generative backend failed or returned nothing usable."""


class TextGenerator(Protocol):
    """Anything that turns a prompt into text."""

    model: str

    def generate(self, prompt: str) -> str:
        ...


class GeminiClient:
    """Minimal synchronous client for ``models/{model}:generateContent``."""

    def __init__(self, api_key: str, model: str, base_url: str, temperature: float = 0.7,
                 timeout: float = 60.0, transport: Optional[httpx.BaseTransport] = None):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    def generate(self, prompt: str) -> str:
        endpoint = f"{self.base_url}/models/{self.model}:generateContent"
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.temperature, "maxOutputTokens": 8192},
        }
        started = time.time()
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(endpoint, params={"key": self.api_key}, json=body,
                                       headers={"Content-Type": "application/json"})
        except httpx.HTTPError as exc:
            logger.error("AI call failed", provider="gemini", model=self.model, error_type=type(exc).__name__)
            raise GenerationError(f"Gemini request failed: {type(exc).__name__}") from exc

        if response.status_code != 200:
            try:
                message = response.json().get("error", {}).get("message", "")
            except (ValueError, AttributeError):
                message = ""
            logger.error("AI call failed", provider="gemini", model=self.model, status_code=response.status_code)
            raise GenerationError(f"Gemini API error {response.status_code}: {message}")

        try:
            data = response.json()
            text = ""
            candidates = data.get("candidates", [])
            if candidates:
                for part in candidates[0].get("content", {}).get("parts", []):
                    text += part.get("text", "")
            usage = data.get("usageMetadata") or {}
            prompt_tokens, completion_tokens = usage.get("promptTokenCount"), usage.get("candidatesTokenCount")
        except (ValueError, AttributeError, TypeError) as exc:
            logger.error("AI call failed", provider="gemini", model=self.model, error_type=type(exc).__name__)
            raise GenerationError("Gemini returned a malformed response body") from exc

        logger.info("AI call completed", provider="gemini", model=self.model,
                    duration_ms=round((time.time() - started) * 1000, 2),
                    prompt_tokens=prompt_tokens,
                    completion_tokens=completion_tokens, response_chars=len(text))
        if not text:
            raise GenerationError("Gemini returned an empty response")
        return text


def build_generator(settings: Settings) -> Optional[GeminiClient]:
    """Probe configuration once at startup; ``None`` when no key is set."""
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set, coach will use template responses")
        return None
    logger.info("Gemini client initialised", model=settings.GEMINI_MODEL)
    return GeminiClient(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL,
                        base_url=settings.GEMINI_BASE_URL, temperature=settings.AI_TEMPERATURE,
                        timeout=settings.AI_TIMEOUT_SECONDS, )
