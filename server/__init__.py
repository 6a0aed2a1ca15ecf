"""
SwipeFeed Server

Usage: uvicorn server:app --reload --port 8000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .state import AppState, build_controller, get_state, set_state

__all__ = [
    "app",
    "create_app",
    "ServerConfig",
    "get_config",
    "reload_config",
    "AppState",
    "build_controller",
    "get_state",
    "set_state",
]
