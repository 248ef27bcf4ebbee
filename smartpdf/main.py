# smartpdf/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from smartpdf.api import routers
from smartpdf.core.config import Settings, get_settings
from smartpdf.core.errors import CompressorError, UnexpectedCompressionError, ValidationError
from smartpdf.core.logging import configure_logging

logger = configure_logging()

# Stats headers have to be exposed for the browser client to read them.
EXPOSE_HEADERS = ["Content-Disposition", "X-Original-Size", "X-Compressed-Size", "X-Size-Reduction"]


# === Error handlers ===
async def compressor_error_handler(request: Request, exc: CompressorError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        logger.warning("Rejected request to %s: %s", request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": ValidationError.public_message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": UnexpectedCompressionError.public_message},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        temp_dir = settings.ensure_temp_dir()
        logger.info("Temporary files directory: %s", temp_dir)
        if not (settings.pdf_services_client_id and settings.pdf_services_client_secret):
            logger.warning("PDF Services credentials are not set; compression requests will fail")
        yield

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings

    # === CORS ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=EXPOSE_HEADERS,
    )

    app.add_exception_handler(CompressorError, compressor_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # === Routers ===
    for router in routers:
        app.include_router(router)

    # === Static front-end ===
    # Mounted last so it never shadows the API routes.
    public_dir = settings.resolved_public_dir()
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="static")

    return app


app = create_app()
