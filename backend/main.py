"""
Gemini Chat Relay - Backend
FastAPI application that relays browser chat transcripts to Google Gemini.
"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from gemini_relay import __version__
from gemini_relay.api.routers import api_router
from gemini_relay.config.settings import Settings, get_settings
from gemini_relay.middleware.error_handling import ErrorHandlingMiddleware
from gemini_relay.middleware.request_logging import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings: Settings = app.state.settings
    logging.info(f"Starting {settings.app_name} on port {settings.port}")

    # Validate Gemini configuration; the server still starts without a key
    # and /api/ask answers with a diagnostic until one is provided
    if not settings.has_api_key:
        logging.error("Gemini API key missing! Create a .env file with GEMINI_API_KEY=<your key>")
    else:
        logging.info(
            f"Gemini API key found ({len(settings.gemini_api_key)} characters), "
            f"default model {settings.gemini_model}"
        )
    logging.info(f"Diagnostic endpoint: http://localhost:{settings.port}/api/test")

    yield

    logging.info("Shutting down...")


def create_app(settings: Settings = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        description="Relays chat transcripts to the Gemini generateContent API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ErrorHandlingMiddleware, settings=settings)
    if settings.enable_request_logging:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router)

    # Browser client; mounted last so API routes take precedence
    public_dir = settings.public_dir
    if not os.path.isabs(public_dir):
        public_dir = os.path.join(os.path.dirname(__file__), public_dir)
    if os.path.isdir(public_dir):
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    else:
        logging.warning(f"Static client directory not found: {public_dir}")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_local,
    )
