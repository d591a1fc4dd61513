"""Pure helpers that turn configuration and provider failures into user messages."""

from __future__ import annotations

import re

from naturelens.identify.errors import ConfigurationError

API_KEY_ENV_VAR = "NATURELENS_GEMINI_API_KEY"

GENERIC_FAILURE_MESSAGE = "An unexpected error occurred during identification. Please try again."

INVALID_RESPONSE_MESSAGE = (
    "The AI model did not return a valid response. "
    f"This often means the API key is missing or invalid; check {API_KEY_ENV_VAR}."
)

MISSING_KEY_MESSAGE = (
    "The Gemini API key is not configured. "
    f"Set {API_KEY_ENV_VAR} in your environment or .env file and restart the server."
)

_PLACEHOLDER_KEYS = frozenset(
    {
        "api_key",
        "apikey",
        "changeme",
        "change-me",
        "none",
        "null",
        "placeholder",
        "replace-me",
        "replace_me",
        "todo",
        "xxx",
    }
)
_PLACEHOLDER_RE = re.compile(r"^(<.*>|\{.*\}|your[-_ ].*|x{3,})$", re.IGNORECASE)

# Checked in order; the first group with a matching needle wins.
_PROVIDER_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("api key not valid", "api_key_invalid", "invalid api key", "api key expired"),
        f"The Gemini API key is not valid. Check {API_KEY_ENV_VAR} and restart the server.",
    ),
    (
        ("permission_denied", "permission denied"),
        "The Gemini API key does not have permission to use this model. Check the key's project settings.",
    ),
    (
        ("resource_exhausted", "quota", "rate limit"),
        "The Gemini API quota has been exceeded. Please wait a moment and try again.",
    ),
    (
        ("not_found", "is not found for api version"),
        "The configured Gemini model was not found. Check NATURELENS_GEMINI_MODEL.",
    ),
    (
        ("connecterror", "connecttimeout", "readtimeout", "name or service not known", "connection refused"),
        "Could not reach the Gemini API. Check your network connection and try again.",
    ),
)

_MAX_CHAIN_DEPTH = 10


def is_placeholder_key(api_key: str | None) -> bool:
    """Return True if ``api_key`` is missing, blank, or an obvious placeholder."""
    if api_key is None:
        return True
    key = api_key.strip()
    if not key:
        return True
    return key.lower() in _PLACEHOLDER_KEYS or _PLACEHOLDER_RE.match(key) is not None


def check_credentials(api_key: str | None) -> None:
    """Raise ``ConfigurationError`` unless a usable API key is configured."""
    if is_placeholder_key(api_key):
        raise ConfigurationError(MISSING_KEY_MESSAGE)


def _exception_chain(exc: BaseException) -> list[BaseException]:
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen and len(chain) < _MAX_CHAIN_DEPTH:
        seen.add(id(current))
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def error_text(exc: BaseException) -> str:
    """Collect every message carried by ``exc`` and the exceptions behind it."""
    parts: list[str] = []
    for item in _exception_chain(exc):
        parts.append(type(item).__name__)
        parts.append(str(item))
        for attr in ("message", "status"):
            value = getattr(item, attr, None)
            if isinstance(value, str):
                parts.append(value)
    return " | ".join(part for part in parts if part)


def describe_transport_error(exc: BaseException) -> str:
    """Map a failed model call to a user-actionable message.

    Known provider error strings anywhere in the exception chain select a
    specific message; anything else gets the generic fallback.
    """
    text = error_text(exc).lower()
    for needles, message in _PROVIDER_MESSAGES:
        if any(needle in text for needle in needles):
            return message
    return GENERIC_FAILURE_MESSAGE
