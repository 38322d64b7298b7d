# propvest/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from propvest.core.config import Settings, settings as default_settings
from propvest.core.exceptions import PropvestError
from propvest.core.handlers import (
    ErrorHandlerMiddleware,
    ValidationErrorHandler,
    propvest_error_handler,
)
from propvest.routes import admin, auth, cards, investments, profile, properties, wallet
from propvest.storage import DatabaseStorage, Storage, build_storage
from propvest.storage.seed import seed_demo_users

logger = logging.getLogger("propvest.startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Waiting for application startup...")
    config = app.state.settings

    if app.state.storage is None:
        app.state.storage = build_storage(config)
    storage = app.state.storage

    if config.SEED_PROPERTIES:
        storage.initialize_properties()

    if config.SEED_DEMO_USERS:
        seed_demo_users(storage)

    logger.info("Application startup complete.")

    yield

    # injected storage belongs to the caller
    if app.state.owns_storage and isinstance(storage, DatabaseStorage):
        storage.engine.dispose()


def create_app(settings: Settings = None, storage: Storage = None) -> FastAPI:
    """Build the API. ``storage`` overrides the backend named in settings."""
    settings = settings or default_settings

    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    app = FastAPI(
        lifespan=lifespan,
        title=settings.PROJECT_NAME,
        description="Fractional real-estate investment backend",
        version=settings.VERSION,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.owns_storage = storage is None

    prefix = settings.API_PREFIX
    app.include_router(auth.router, prefix=prefix, tags=["auth"])
    app.include_router(properties.router, prefix=prefix, tags=["properties"])
    app.include_router(investments.router, prefix=prefix, tags=["investments"])
    app.include_router(wallet.router, prefix=prefix, tags=["wallet"])
    app.include_router(cards.router, prefix=prefix, tags=["cards"])
    app.include_router(profile.router, prefix=prefix, tags=["profile"])
    app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["admin"])

    @app.get(f"{prefix}/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "service": settings.PROJECT_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.add_exception_handler(PropvestError, propvest_error_handler)
    app.add_exception_handler(RequestValidationError, ValidationErrorHandler())

    app.add_middleware(ErrorHandlerMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("propvest.main:app", host="0.0.0.0", port=8000, reload=True)
