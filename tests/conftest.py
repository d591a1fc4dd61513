"""Shared test doubles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pytest

from naturelens.config import Settings

if TYPE_CHECKING:
    from naturelens.identify.payload import ImagePayload

VALID_KEY = "AIzaSy-test-key-0123456789"

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)

ROSE = {
    "isPlant": True,
    "commonName": "Rose",
    "scientificName": "Rosa rubiginosa",
    "habitat": "Temperate gardens and hedgerows",
    "species": "R. rubiginosa",
    "lifespan": "Perennial, 15-35 years",
    "description": "A thorny flowering shrub with fragrant pink blooms.",
}

CAT = {
    "isPlant": False,
    "commonName": "Unknown",
    "scientificName": "Unknown",
    "habitat": "Unknown",
    "species": "Unknown",
    "lifespan": "Unknown",
    "description": "A grey tabby cat sitting on a windowsill.",
}


@dataclass
class FakeModel:
    """In-memory StructuredModel that replays canned replies."""

    reply: str | None = None
    error: BaseException | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)
    model_name: str = "fake-model"

    async def generate_json(
        self,
        prompt: str,
        *,
        schema: dict[str, Any],
        image: ImagePayload | None = None,
    ) -> str | None:
        self.calls.append({"prompt": prompt, "schema": schema, "image": image})
        if self.error is not None:
            raise self.error
        return self.reply


def make_settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {
        "gemini_api_key": VALID_KEY,
        "gemini_model": "gemini-2.0-flash",
        "api_key": None,
        "max_image_bytes": 1024,
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)  # type: ignore[call-arg]


@pytest.fixture()
def rose_model() -> FakeModel:
    return FakeModel(reply=json.dumps(ROSE))


@pytest.fixture()
def cat_model() -> FakeModel:
    return FakeModel(reply=json.dumps(CAT))
