"""FastAPI application factory and its exception handlers.

Failures are answered with ``ErrorResponse``. A scan that finds no registry
packages is not a failure and gets HTTP 200 with ``EmptyResponse``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from package_radar.domain.exceptions import InvalidInputError, NoPackagesFoundError
from package_radar.interface.dependencies import shutdown, startup
from package_radar.interface.routes import router
from package_radar.interface.schemas import EmptyResponse, ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    await startup()
    yield
    await shutdown()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


async def _no_packages(request: Request, exc: NoPackagesFoundError) -> JSONResponse:
    logger.info("%s: %s", request.url.path, exc)
    return JSONResponse(status_code=200, content=EmptyResponse(message=str(exc)).model_dump())


async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning("Rejected %s: %s", request.url.path, exc)
    return _error(422, str(exc))


async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    # "body → paths: List should have at least 1 item"
    messages = [
        f"{' → '.join(str(p) for p in err.get('loc', []))}: {err.get('msg', 'validation error')}"
        for err in exc.errors()
    ]
    return _error(422, "; ".join(messages))


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s", request.url.path)
    return _error(500, "An unexpected error occurred. Please try again later.")


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="PackageRadar",
        version="1.0.0",
        description=(
            "Scans JavaScript and TypeScript sources for npm package imports "
            "and reports how widely each package is used, together with "
            "registry metadata and suggested alternatives."
        ),
        lifespan=_lifespan,
    )

    app.add_exception_handler(NoPackagesFoundError, _no_packages)
    app.add_exception_handler(InvalidInputError, _invalid_input)
    app.add_exception_handler(RequestValidationError, _invalid_body)
    app.add_exception_handler(Exception, _unexpected)

    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
