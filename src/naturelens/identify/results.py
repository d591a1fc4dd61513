"""Structured output shapes the model is constrained to produce."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN = "Unknown"

CLASSIFICATION_FIELDS: tuple[str, ...] = (
    "common_name",
    "scientific_name",
    "habitat",
    "species",
    "lifespan",
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class IdentificationResult(_CamelModel):
    """Botanical information about the subject of a photo.

    Classification fields hold ``"Unknown"`` when the subject is not a
    plant or a detail cannot be determined. ``description`` is always
    populated: it describes the plant, or whatever the image shows.
    """

    is_plant: bool = Field(description="Whether the image contains a plant.")
    common_name: str = Field(
        description='The common name of the plant. Returns "Unknown" if not a plant or cannot be identified.'
    )
    scientific_name: str = Field(
        description='The scientific name of the plant. Returns "Unknown" if not a plant or cannot be identified.'
    )
    habitat: str = Field(
        description='The natural environment of the plant. Returns "Unknown" if not a plant or cannot be identified.'
    )
    species: str = Field(
        description='The species of the plant. Returns "Unknown" if not a plant or cannot be identified.'
    )
    lifespan: str = Field(
        description='The typical lifespan of the plant. Returns "Unknown" if not a plant or cannot be identified.'
    )
    description: str = Field(
        min_length=1,
        description="A detailed description. If it is a plant, describe the plant. If not, describe what is in the image.",
    )

    @field_validator(*CLASSIFICATION_FIELDS, mode="before")
    @classmethod
    def _blank_is_unknown(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or UNKNOWN
        return value

    def with_sentinels(self) -> IdentificationResult:
        """Return a copy with every classification field set to ``"Unknown"``."""
        return self.model_copy(update=dict.fromkeys(CLASSIFICATION_FIELDS, UNKNOWN))


class PlantDetails(_CamelModel):
    """Details about a plant looked up by its common name."""

    scientific_name: str = Field(description="The scientific name of the plant.")
    habitat: str = Field(description="The typical habitat of the plant.")
    species: str = Field(description="The species of the plant.")
    lifespan: str = Field(description="The typical lifespan of the plant.")
    description: str = Field(min_length=1, description="A detailed description of the plant.")
