"""
SwipeFeed API — FastAPI app factory.

Use: uvicorn server.app:app
Or:  from server import app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .routes import register_routes
from .state import AppState, get_state, set_state

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state = get_state()
    logger.info("[startup] SwipeFeed API starting... data_dir=%s", state.config.data_dir)
    await state.start()
    yield
    await state.shutdown()


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """Build FastAPI app with logging, CORS, routes and feed startup."""
    if state is not None:
        set_state(state)
        log_level = state.config.log_level
    else:
        log_level = get_config().log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title="SwipeFeed API",
        description="Personalized swipe-to-like image feed",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app


app = create_app()
