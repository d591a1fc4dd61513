"""Pydantic request/response schemas for the Nature Lens API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IdentifyPlantRequest(_CamelModel):
    """Body for identifying a plant from an inline photo."""

    photo_data_uri: str | None = Field(
        default=None,
        description="A photo as a data URI with a MIME type and base64 encoding: 'data:<mimetype>;base64,<encoded_data>'.",
    )


class DescribePlantRequest(_CamelModel):
    """Body for looking up a plant by name."""

    plant_name: str | None = Field(default=None, description="The common name of the plant.")


class HealthResponse(_CamelModel):
    """Health check response."""

    status: str = "ok"
    model: str
    credentials_configured: bool


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    kind: str = Field(
        description="Failure kind: 'configuration', 'invalid_response', 'not_a_plant', 'transport', "
        "'invalid_image', 'image_too_large', or 'invalid_request'"
    )
    result: dict[str, Any] | None = Field(
        default=None,
        description="For 'not_a_plant': the identification record with every classification field set to 'Unknown'",
    )
