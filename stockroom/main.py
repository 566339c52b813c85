import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from stockroom.config import Settings, get_settings
from stockroom.core.errors import InventoryError, StoreUnavailableError
from stockroom.core.logging import setup_logging
from stockroom.database import KeyValueStore, create_session_factory, ensure_schema
from stockroom.database.engine import engine as default_engine
from stockroom.repositories.inventory import InventoryRepository
from stockroom.routers import (
    health_router,
    inventory_router,
    notifications_router,
    products_router,
)

logger = logging.getLogger(__name__)


def _cors_origins(settings: Settings) -> list[str]:
    return [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]


async def handle_inventory_error(_request: Request, exc: InventoryError):
    headers = None
    if isinstance(exc, StoreUnavailableError):
        headers = {"Retry-After": "1"}
    if exc.status_code >= 500:
        logger.error("Request failed: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def handle_request_validation_error(_request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Request body must be a JSON object"})


def create_app(settings: Optional[Settings] = None, db_engine: Optional[Engine] = None) -> FastAPI:
    settings = settings or get_settings()
    db_engine = db_engine or default_engine
    store = KeyValueStore(create_session_factory(db_engine))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        ensure_schema(db_engine)
        logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
        yield

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
    app.state.repository = InventoryRepository.from_settings(store, settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(InventoryError, handle_inventory_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(notifications_router)
    app.include_router(inventory_router)
    return app


setup_logging()
app = create_app()


__all__ = ["app", "create_app"]
