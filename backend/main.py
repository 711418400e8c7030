"""
Build Vault API
Stores talent build configurations in a JSON file and removes them after a fixed lifetime.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from api.deps import get_scheduler, get_store
from api.helpers import available_routes, error_response, humanize_ms
from api.routes import data_router, health_router, stats_router
from repositories.errors import BuildStoreError, NotFoundError, ValidationError

settings = get_settings()
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    scheduler = get_scheduler()
    store.ensure_file()
    scheduler.start()
    logger.info("API running on http://%s:%s", settings.HOST, settings.PORT)
    logger.info(
        "Data file: %s | record lifetime: %s | cleanup every %s",
        store.data_file,
        humanize_ms(store.record_lifetime_ms),
        humanize_ms(settings.CLEANUP_INTERVAL_SECONDS * 1000),
    )
    yield
    await scheduler.stop()


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials="*" not in settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(data_router)
    app.include_router(stats_router)

    @app.exception_handler(BuildStoreError)
    async def store_error_handler(request: Request, exc: BuildStoreError):
        extra = {}
        if isinstance(exc, ValidationError) and exc.missing_fields:
            extra["missingFields"] = exc.missing_fields
        if isinstance(exc, NotFoundError):
            extra["id"] = exc.record_id
        return error_response(exc.status_code, exc.message, **extra)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return error_response(
                404,
                "Route not found",
                availableRoutes=available_routes(settings.RECORD_LIFETIME_MS),
            )
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
        return error_response(500, "Internal server error")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
