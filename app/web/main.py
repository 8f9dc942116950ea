from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.infrastructure.config import get_settings
from app.infrastructure.db import (
    create_database_engine,
    create_session_factory,
    initialise_database,
)
from app.infrastructure.logging import get_logger
from app.web.routes import api

logger = get_logger(__name__)


def create_application() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app.title,
        version=settings.app.version,
        debug=settings.app.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api.router)

    @app.on_event("startup")
    async def startup_event() -> None:
        config = settings.database
        engine = create_database_engine(config)
        initialise_database(engine)
        app.state.db_config = config
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.session_factory_config = config.model_dump()
        logger.info(f"{settings.app.title} API ready ({settings.app.environment})")

    return app


app = create_application()
