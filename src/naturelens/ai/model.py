"""Structured-generation model client.

The service talks to the hosted model through the ``StructuredModel``
protocol so tests can substitute a fake. ``GeminiModel`` is the real
implementation on top of the google-genai async client.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from google import genai
from google.genai import types

if TYPE_CHECKING:
    from naturelens.config import Settings
    from naturelens.identify.payload import ImagePayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol (kept for test mocking)
# ---------------------------------------------------------------------------


class StructuredModel(Protocol):
    """A model that answers a prompt with JSON matching a given schema."""

    @property
    def model_name(self) -> str:
        """Return the model identifier string."""
        ...

    async def generate_json(
        self,
        prompt: str,
        *,
        schema: dict[str, Any],
        image: ImagePayload | None = None,
    ) -> str | None:
        """Run one generation call and return the raw JSON text.

        Args:
            prompt: The instruction text.
            schema: JSON schema the output is constrained to.
            image: Optional image sent alongside the prompt.

        Returns:
            The model's JSON text, or None if it produced nothing.

        Raises:
            Exception: Whatever the underlying transport raises.
        """
        ...


# ---------------------------------------------------------------------------
# Concrete implementation
# ---------------------------------------------------------------------------


class GeminiModel:
    """Calls a Gemini model through the google-genai SDK."""

    def __init__(self, settings: Settings) -> None:
        self._model_name = settings.gemini_model
        self._api_key = settings.gemini_api_key
        self._client: genai.Client | None = None

    @property
    def model_name(self) -> str:
        return self._model_name

    def _get_client(self) -> genai.Client:
        # Built on first use so a missing key never fails at startup.
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate_json(
        self,
        prompt: str,
        *,
        schema: dict[str, Any],
        image: ImagePayload | None = None,
    ) -> str | None:
        contents: list[Any] = []
        if image is not None:
            contents.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
        contents.append(prompt)

        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_json_schema=schema,
        )

        logger.debug(
            "Calling %s (image=%s bytes)",
            self._model_name,
            image.size if image is not None else 0,
        )
        response = await self._get_client().aio.models.generate_content(
            model=self._model_name,
            contents=contents,
            config=config,
        )
        return response.text
