"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from whistle.config import Settings
from whistle.interface.api.routes import comments, health, votes
from whistle.util.di.container import create_container, setup_di
from whistle.util.observability import instrument_fastapi


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function;
    scripts/start_app.py does it in production.
    """
    settings = settings or Settings()

    app_instance = FastAPI(
        title="Whistle Comments API",
        description="Threaded comments for posts, with votes and moderation",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)

    return app_instance
