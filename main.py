import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.chat import build_chat_services
from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.realtime import ConnectionRegistry
from app.interfaces.api.routes import register_routes


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and the connection registry; release them on shutdown."""

    initialize_database()
    registry = ConnectionRegistry()
    app.state.chat = build_chat_services(registry)
    yield
    registry.close()
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the main FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Internship Chat", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
