"""
Server Module - Black Box Interface

Purpose: The blue and green demo HTTP services
Interface: create_app(), get_app(), serve()
Hidden: Routing, uvicorn wiring
"""

from .server import (
    BLUE,
    BLUE_MESSAGE,
    GREEN,
    GREEN_MESSAGE,
    HealthResponse,
    blue_app,
    create_app,
    get_app,
    green_app,
    serve,
)

__all__ = [
    "BLUE",
    "GREEN",
    "BLUE_MESSAGE",
    "GREEN_MESSAGE",
    "HealthResponse",
    "blue_app",
    "green_app",
    "create_app",
    "get_app",
    "serve",
]
