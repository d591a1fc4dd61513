"""Identification service: one model call per request, failures returned as values.

Flow:
    image payload -> IdentificationRequest -> credential check
    -> StructuredModel.generate_json (single attempt) -> schema validation
    -> not-a-plant policy -> IdentificationResult | IdentificationError
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError

from naturelens.ai.prompts import IDENTIFY_PLANT_PROMPT, describe_plant_prompt
from naturelens.identify.diagnostics import (
    INVALID_RESPONSE_MESSAGE,
    check_credentials,
    describe_transport_error,
)
from naturelens.identify.errors import (
    IdentificationError,
    InvalidRequestError,
    InvalidResponseError,
    NotAPlantError,
    TransportError,
)
from naturelens.identify.payload import ImagePayload, build_identification_request
from naturelens.identify.results import IdentificationResult, PlantDetails

if TYPE_CHECKING:
    from naturelens.ai.model import StructuredModel
    from naturelens.config import Settings
    from naturelens.identify.payload import IdentificationRequest

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

IdentificationOutcome = IdentificationResult | IdentificationError
DescriptionOutcome = PlantDetails | IdentificationError


class IdentificationService:
    """Stateless relay between callers and the structured-generation model.

    Holds only configuration and the model client; no per-request state
    survives a call.
    """

    def __init__(self, settings: Settings, model: StructuredModel) -> None:
        self._api_key = settings.gemini_api_key
        self._max_image_bytes = settings.max_image_bytes
        self._model = model

    @property
    def model_name(self) -> str:
        return self._model.model_name

    async def identify(self, request: IdentificationRequest) -> IdentificationOutcome:
        """Identify the plant in ``request``.

        Never raises: every failure comes back as an ``IdentificationError``.
        """
        try:
            result = await self._generate(
                IDENTIFY_PLANT_PROMPT,
                IdentificationResult,
                image=request.image,
            )
        except IdentificationError as exc:
            return exc

        if not result.is_plant:
            logger.info("Subject is not a plant")
            return NotAPlantError(result.description, result=result.with_sentinels())

        return result

    async def identify_data_uri(self, uri: str | None) -> IdentificationOutcome:
        """Build a request from a data URI and identify it."""
        try:
            request = build_identification_request(
                ImagePayload.from_data_uri(uri),
                max_image_bytes=self._max_image_bytes,
            )
        except IdentificationError as exc:
            return exc
        return await self.identify(request)

    async def identify_bytes(self, data: bytes, mime_type: str | None) -> IdentificationOutcome:
        """Build a request from uploaded file bytes and identify it."""
        try:
            request = build_identification_request(
                ImagePayload(mime_type=(mime_type or "").lower(), data=data),
                max_image_bytes=self._max_image_bytes,
            )
        except IdentificationError as exc:
            return exc
        return await self.identify(request)

    async def describe(self, plant_name: str | None) -> DescriptionOutcome:
        """Look up details for a plant by its common name."""
        if not plant_name or not plant_name.strip():
            return InvalidRequestError("Please provide a plant name.")
        try:
            return await self._generate(describe_plant_prompt(plant_name), PlantDetails)
        except IdentificationError as exc:
            return exc

    async def _generate(
        self,
        prompt: str,
        output_model: type[M],
        *,
        image: ImagePayload | None = None,
    ) -> M:
        check_credentials(self._api_key)

        schema = output_model.model_json_schema(by_alias=True)
        try:
            text = await self._model.generate_json(prompt, schema=schema, image=image)
        except Exception as exc:
            logger.exception("Model call to %s failed", self._model.model_name)
            raise TransportError(describe_transport_error(exc)) from exc

        if not text or not text.strip():
            logger.warning("Model %s returned an empty response", self._model.model_name)
            raise InvalidResponseError(INVALID_RESPONSE_MESSAGE)

        try:
            output = output_model.model_validate_json(text)
        except ValidationError as exc:
            logger.warning("Model %s returned malformed output: %s", self._model.model_name, exc)
            raise InvalidResponseError(INVALID_RESPONSE_MESSAGE) from exc

        return output
