"""FastAPI application wiring for Frostwind."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from frostwind.api import routes
from frostwind.api.runtime import ApiState, build_state
from frostwind.config import get_settings

logger = logging.getLogger(__name__)


def create_app(*, state_factory: Callable[[], ApiState] = build_state) -> FastAPI:
    """Build the HTTP surface around a single game session.

    ``state_factory`` runs once per application lifespan, so tests can hand in
    an engine with a scripted random source.
    """

    settings = get_settings()
    logging.getLogger("frostwind").setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        api_state = state_factory()
        app.state.api_state = api_state
        engine = api_state.session.engine
        logger.info(
            "game ready on day %s (debug mode %s)",
            engine.state.day,
            "on" if api_state.settings.debug_mode else "off",
        )
        try:
            yield
        finally:
            await api_state.shutdown()

    app = FastAPI(
        title="Frostwind API",
        summary="Command surface for a Frostwind Keep game",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    return app


app = create_app()
