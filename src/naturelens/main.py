"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from naturelens.ai.model import GeminiModel
from naturelens.api.routes import router
from naturelens.config import get_settings
from naturelens.identify.diagnostics import API_KEY_ENV_VAR, is_placeholder_key
from naturelens.identify.errors import InvalidRequestError
from naturelens.identify.service import IdentificationService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: resolve configuration once and build the service."""
    settings = get_settings()
    app.state.settings = settings

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    logger.info("Starting Nature Lens (model=%s)", settings.gemini_model)
    if is_placeholder_key(settings.gemini_api_key):
        logger.warning("%s is not set; identification requests will fail until it is configured", API_KEY_ENV_VAR)

    app.state.service = IdentificationService(settings, GeminiModel(settings))

    logger.info("Nature Lens ready")
    yield
    logger.info("Nature Lens shutdown complete")


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(problems)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies in the same record shape as identification failures."""
    logger.info("Rejected malformed request to %s", request.url.path)
    error = InvalidRequestError(_describe_validation_error(exc))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error.to_dict())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Nature Lens",
        description="Identify plants from photos with a generative vision model",
        version="0.1.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    application.include_router(router)
    return application


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run("naturelens.main:app", host=settings.host, port=settings.port)
