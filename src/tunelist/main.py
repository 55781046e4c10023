"""FastAPI application entry point.

Run with: uvicorn tunelist.main:app --reload
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tunelist import __version__
from tunelist.api.exception_handlers import register_exception_handlers
from tunelist.api.routers import api_router, health
from tunelist.config import Settings, get_settings
from tunelist.infrastructure.lifecycle import lifespan
from tunelist.infrastructure.observability import RequestLoggingMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-based ones

    Returns:
        Configured FastAPI app (database is set up by the lifespan)
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Tunelist",
        description="Music track library and ordered playlists",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware added last runs first: CORS wraps request logging
    app.add_middleware(
        RequestLoggingMiddleware,
        log_request_body=settings.observability.log_request_body,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")
    app.include_router(health.router, prefix="/health", tags=["Health"])

    return app


app = create_app()


def main() -> None:
    """Run the development server."""
    settings = get_settings()
    uvicorn.run(
        "tunelist.main:app",
        host=settings.api.host,
        port=settings.api.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
