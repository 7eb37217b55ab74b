# kubehook/main.py
"""
kubehook - Main Application

HTTP front for the notification pipeline: events posted to /events are
filtered, reshaped and relayed to the configured webhook.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from . import __version__
from .api import events_router
from .handlers.base import Handler
from .handlers.registry import new_handler
from .logging import configure_logging, get_logger
from .settings import settings

logger = get_logger(__name__)


def create_app(handler: Optional[Handler] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        handler: Pre-initialized handler; when omitted the handler named
            in settings is created and initialized at startup

    Raises:
        ConfigurationError: At startup, if the handler cannot initialize
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if handler is not None:
            app.state.handler = handler
        else:
            # Initialization errors abort startup
            app.state.handler = new_handler(settings.to_config())
        logger.info("kubehook_started", handler=app.state.handler.name)

        yield

        app.state.handler.close()
        logger.info("kubehook_stopped")

    app = FastAPI(
        title="kubehook",
        description="Relays cluster resource change events to an HTTP webhook.",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(events_router)
    return app


app = create_app()


def run():
    """Console entry point: serve the ingest API with uvicorn."""
    import uvicorn

    configure_logging(
        level=settings.log_level,
        json_output=settings.log_json,
        log_file=settings.log_file,
        force=True,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
