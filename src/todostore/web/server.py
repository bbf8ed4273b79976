from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from todostore.app import App
from todostore.config import Config
from todostore.errors import StoreError, UserError
from todostore.web.error_handlers import (
    general_exception_handler,
    store_error_handler,
    user_error_handler,
    validation_error_handler,
)
from todostore.web.openapi import set_custom_openapi
from todostore.web.routers import todos_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        # Store app instance in app state for the AppDep dependency
        app.state.app = app_instance
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="todostore API",
        lifespan=lifespan,
    )

    # Health check endpoint
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(todos_router)

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    # Mounted last so API routes take precedence over static files
    if config.static_path:
        app.mount("/", StaticFiles(directory=config.static_path, html=True), name="static")

    return app
