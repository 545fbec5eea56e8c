from __future__ import annotations

from typing import Optional


FALLBACK_DETAIL = "Failed to generate response"

CONFIG_MESSAGE = "There's an issue with the API configuration. Please contact support."
RATE_LIMIT_MESSAGE = "I'm currently experiencing high demand. Please try again in a moment."
CONNECTIVITY_MESSAGE = (
    "I'm having trouble connecting right now. Please check your internet and try again."
)
GENERIC_MESSAGE = (
    "I apologize, but I'm experiencing technical difficulties. Please try again! 🤖"
)

# Checked in order; the first match wins.
_CATEGORIES = (
    (("API_KEY",), CONFIG_MESSAGE),
    (("quota", "limit"), RATE_LIMIT_MESSAGE),
    (("network", "fetch"), CONNECTIVITY_MESSAGE),
)


class ConfigurationError(RuntimeError):
    """Raised when a required credential is missing from the environment."""


class ProviderError(RuntimeError):
    """Any failure raised by or during the text-generation call."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or FALLBACK_DETAIL
        super().__init__(self.detail)


def classify_error(detail: Optional[str]) -> str:
    """Map a raw provider error message to the text shown to the user."""
    text = detail or ""
    for needles, message in _CATEGORIES:
        if any(needle in text for needle in needles):
            return message
    return GENERIC_MESSAGE
