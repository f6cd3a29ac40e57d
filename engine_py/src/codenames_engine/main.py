"""FastAPI application for the Codenames room backend"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import game_error_handler, router
from .config import build_store, load_settings
from .errors import GameError
from .store import RoomStateStore
from .ws import ConnectionManager, websocket_endpoint

logger = logging.getLogger(__name__)


def create_app(store: Optional[RoomStateStore] = None) -> FastAPI:
    """
    Build the application around a room store.

    Args:
        store: Store to serve; one is built from the environment when omitted
    """
    app = FastAPI(title="Codenames Room API", version="1.0.0")
    app.state.store = store if store is not None else build_store()
    app.state.connections = ConnectionManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GameError, game_error_handler)
    app.include_router(router)
    app.add_api_websocket_route("/ws", websocket_endpoint)

    @app.get("/")
    async def root():
        return {"message": "Codenames Room API", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "rooms": len(app.state.store.storage.codes()),
            "connections": len(app.state.connections.connection_players),
        }

    return app


def create_default_app() -> FastAPI:
    """Uvicorn factory: configure logging from the environment and build the app."""
    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logger.info(f"Starting with {settings.storage} storage")
    return create_app()
