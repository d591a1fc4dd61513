"""API route definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, UploadFile, status
from fastapi.responses import JSONResponse

from naturelens.api.middleware import verify_api_key
from naturelens.api.schemas import (
    DescribePlantRequest,
    ErrorResponse,
    HealthResponse,
    IdentifyPlantRequest,
)
from naturelens.identify.diagnostics import is_placeholder_key
from naturelens.identify.errors import ErrorKind, IdentificationError
from naturelens.identify.results import IdentificationResult, PlantDetails

if TYPE_CHECKING:
    from pydantic import BaseModel

    from naturelens.config import Settings
    from naturelens.identify.service import IdentificationService

router = APIRouter(prefix="/api/v1", dependencies=[Depends(verify_api_key)])

_ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.INVALID_IMAGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.IMAGE_TOO_LARGE: status.HTTP_413_CONTENT_TOO_LARGE,
    ErrorKind.NOT_A_PLANT: status.HTTP_422_UNPROCESSABLE_CONTENT,
    ErrorKind.CONFIGURATION: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.INVALID_RESPONSE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.TRANSPORT: status.HTTP_502_BAD_GATEWAY,
}

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    code: {"model": ErrorResponse} for code in sorted(set(_ERROR_STATUS.values()))
}


def _get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def _get_service(request: Request) -> IdentificationService:
    service: IdentificationService = request.app.state.service
    return service


def _respond(outcome: BaseModel | IdentificationError) -> BaseModel | JSONResponse:
    if isinstance(outcome, IdentificationError):
        return JSONResponse(status_code=_ERROR_STATUS[outcome.kind], content=outcome.to_dict())
    return outcome


@router.post(
    "/identify",
    response_model=IdentificationResult,
    responses=_ERROR_RESPONSES,
    summary="Identify a plant from a data URI",
)
async def identify_plant(body: IdentifyPlantRequest, request: Request) -> IdentificationResult | JSONResponse:
    """Identify the plant in an inline base64 photo."""
    outcome = await _get_service(request).identify_data_uri(body.photo_data_uri)
    return _respond(outcome)  # type: ignore[return-value]


@router.post(
    "/identify/upload",
    response_model=IdentificationResult,
    responses=_ERROR_RESPONSES,
    summary="Identify a plant from an uploaded image file",
)
async def identify_plant_upload(file: UploadFile, request: Request) -> IdentificationResult | JSONResponse:
    """Identify the plant in an uploaded image file."""
    settings = _get_settings(request)
    # One byte past the limit is enough to reject oversized uploads.
    data = await file.read(settings.max_image_bytes + 1)
    outcome = await _get_service(request).identify_bytes(data, file.content_type)
    return _respond(outcome)  # type: ignore[return-value]


@router.post(
    "/describe",
    response_model=PlantDetails,
    responses=_ERROR_RESPONSES,
    summary="Describe a plant by name",
)
async def describe_plant(body: DescribePlantRequest, request: Request) -> PlantDetails | JSONResponse:
    """Return scientific name, habitat, species, lifespan and a description for a named plant."""
    outcome = await _get_service(request).describe(body.plant_name)
    return _respond(outcome)  # type: ignore[return-value]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health(request: Request) -> HealthResponse:
    """Return service health and whether the model credential is configured."""
    settings = _get_settings(request)
    return HealthResponse(
        status="ok",
        model=settings.gemini_model,
        credentials_configured=not is_placeholder_key(settings.gemini_api_key),
    )
