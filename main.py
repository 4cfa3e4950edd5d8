import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notifier.config import Settings, configure_logging, get_settings
from notifier.infrastructure.database import Database
from notifier.infrastructure.push import (
    DeliveryChannel,
    FirebasePushChannel,
    PushConfigurationError,
)
from notifier.interfaces.api.routes import register_routes

logger = logging.getLogger("notifier.main")


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    channel: DeliveryChannel | None = None,
) -> FastAPI:
    """Build the FastAPI application around a database handle and a push channel."""

    settings = settings or get_settings()
    database = database or Database(settings.database_url)
    channel = channel or FirebasePushChannel(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings)
        database.open()
        database.create_all()
        try:
            channel.open()
        except PushConfigurationError as exc:
            # Records and preferences keep working; push sends report the error.
            logger.warning("Push channel unavailable: %s", exc.message)
        yield
        channel.close()
        database.close()

    app = FastAPI(title="Notification dispatch engine", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.push_channel = channel

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
