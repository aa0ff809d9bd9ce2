"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkwell.interface.api.errors import register_error_handlers
from inkwell.interface.api.routes import categories, comments, health
from inkwell.util.di.container import create_container, setup_di
from inkwell.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; in
    production start_app.py does it.

    Args:
        container: DI container to use, the production container if None
    """
    app_instance = FastAPI(
        title="Inkwell API",
        description="Category hierarchy and threaded comments for the Inkwell blog",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(categories.router)
    app_instance.include_router(comments.router)

    return app_instance
