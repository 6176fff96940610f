# app/services/llm.py
"""
Thin client for the generative text API.

The service is reached through the ``openai`` SDK pointed at an
OpenAI-compatible endpoint (Gemini's by default). One prompt in, one
completion out; no retries.
"""
import json
import logging
from typing import List, Optional, Sequence

from openai import OpenAI, OpenAIError

from app.core.config import settings
from app.core.exceptions import FeatureUnavailable

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."
CHAT_HISTORY_TURNS = 5


class GenerationError(Exception):
    """The generative API call failed or returned nothing usable."""


class GenerativeClient:
    def __init__(self, api_key: str = None, base_url: str = None, model: str = None, timeout: float = None):
        self.api_key = api_key if api_key is not None else settings.GENAI_API_KEY
        self.base_url = base_url or settings.GENAI_BASE_URL
        self.model = model or settings.GENAI_MODEL
        self.timeout = timeout or settings.GENAI_TIMEOUT_SECONDS
        self._client: Optional[OpenAI] = None

    @property
    def enabled(self) -> bool:
        return settings.is_configured(self.api_key)

    def _get_client(self) -> OpenAI:
        if not self.enabled:
            raise FeatureUnavailable("AI service is not configured. Set GENAI_API_KEY to enable it.")
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def generate(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as e:
            raise GenerationError(str(e)) from e

        if not response.choices:
            raise GenerationError("Empty completion")
        text = response.choices[0].message.content
        if not text:
            raise GenerationError("Empty completion")
        return text


_default_client: Optional[GenerativeClient] = None


def get_generative_client() -> GenerativeClient:
    """FastAPI dependency; tests override it with a fake."""
    global _default_client
    if _default_client is None:
        _default_client = GenerativeClient()
    return _default_client


def strip_code_fence(text: str) -> str:
    """Removes a surrounding ```json ... ``` fence if the model added one."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()


def generate_chat_response(client: GenerativeClient, user_message: str, history: Sequence[dict] = ()) -> str:
    """
    Chatbot reply. Raises FeatureUnavailable when no key is configured and
    GenerationError on a failed call.
    """
    recent = list(history)[-CHAT_HISTORY_TURNS:]
    if recent:
        context = "\n".join(f"{turn['role'].capitalize()}: {turn['content']}" for turn in recent)
        prompt = f"Context: {context}\n\nUser: {user_message}\n\nAssistant:"
    else:
        prompt = user_message

    try:
        return client.generate(prompt)
    except GenerationError:
        logger.exception("Chat completion failed")
        raise


def generate_smart_suggestions(
    client: GenerativeClient, user_skills: Sequence[str], recent_problems: Sequence[str]
) -> List[str]:
    prompt = f"""
Based on a student's profile:
- Current skills: {', '.join(user_skills)}
- Recent help requests: {', '.join(recent_problems)}

Suggest 3-5 skill areas they should learn next or tutors they might need.
Respond with a JSON array of strings: ["suggestion1", "suggestion2", ...]
"""
    try:
        parsed = json.loads(strip_code_fence(client.generate(prompt)))
    except (FeatureUnavailable, GenerationError, ValueError) as e:
        logger.warning("Smart suggestions unavailable: %s", e)
        return []

    if not isinstance(parsed, list):
        return []
    return [str(item) for item in parsed if isinstance(item, (str, int, float))][:5]
