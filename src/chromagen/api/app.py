"""ASGI entry point: builds the FastAPI app serving palettes and quotas."""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from chromagen.api.routes import color_router, health_router, palette_router, usage_router
from chromagen.config import get_settings
from chromagen.container import get_container, reset_container
from chromagen.exceptions import ChromaGenError
from chromagen.logging_config import bind_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    configure_logging(settings)

    # Open the usage store up front so a bad sqlite path fails at boot.
    container = get_container()
    container.store
    logger.info(
        "chromagen_started",
        version=settings.app_version,
        environment=settings.environment.value,
        store_type=settings.store_type.value,
    )
    try:
        yield
    finally:
        reset_container()
        logger.info("chromagen_stopped")


async def log_request_middleware(request: Request, call_next) -> Response:
    """Bind a short request id plus path and method to every log line."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex[:8]
    bind_context(request_id=request_id, path=request.url.path, method=request.method)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.debug(
            "request_finished",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
    finally:
        clear_context()


async def chromagen_error_handler(request: Request, exc: ChromaGenError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        error_code=exc.error_code,
        status_code=exc.status_code,
        context=exc.context,
    )
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        summary="Image-to-palette generation with shade ramps, dark variants and contrast checks",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.middleware("http")(log_request_middleware)
    app.add_exception_handler(ChromaGenError, chromagen_error_handler)

    for router in (health_router, usage_router, palette_router, color_router):
        app.include_router(router)
    return app


app = create_app()
