from __future__ import annotations

from typing import Any, Callable, Optional

from langchain_google_genai import ChatGoogleGenerativeAI

from config.settings import Settings, get_settings
from mentor.core.errors import ConfigurationError, ProviderError


def _content_to_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text") or "")
    return "".join(parts)


class GeminiGenerator:
    """Single-shot text generation against Gemini with fixed parameters."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        if not settings.gemini_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY not set. Please configure it in environment or .env"
            )
        self.model = settings.gemini_model
        self.llm = ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.gemini_api_key,
            max_output_tokens=settings.max_output_tokens,
            temperature=settings.temperature,
            top_p=settings.top_p,
            top_k=settings.top_k,
            # single attempt, no internal retry
            max_retries=1,
        )

    def generate(self, prompt: str) -> str:
        try:
            result = self.llm.invoke(prompt)
        except Exception as exc:
            raise ProviderError(str(exc)) from exc
        return _content_to_text(result.content)


def generator_factory() -> Callable[[Settings], GeminiGenerator]:
    """FastAPI dependency; the endpoint builds the generator only after the
    credential check has passed."""
    return GeminiGenerator
