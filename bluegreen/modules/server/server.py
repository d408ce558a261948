"""
Blue and green HTTP services.

Both services answer every request on "/" with a fixed string. They differ
only in that string, which is what makes the active/preview switch visible
through the Argo Rollouts Services.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from bluegreen import __version__
from bluegreen.logging_config import get_logging_config

logger = logging.getLogger("bluegreen.server")

BLUE = "blue"
GREEN = "green"

BLUE_MESSAGE = "Hello from Blue!"
GREEN_MESSAGE = "Hello from Green!"

MESSAGES = {
    BLUE: BLUE_MESSAGE,
    GREEN: GREEN_MESSAGE,
}

ROOT_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class HealthResponse(BaseModel):
    """Health probe payload."""

    status: str
    color: str
    version: str


def create_app(color: str, message: str) -> FastAPI:
    """
    Build a single-route service that always answers with message.

    Args:
        color: Service color, reported by /health
        message: Fixed response body for "/"
    """
    app = FastAPI(
        title=f"Bluegreen {color.title()}",
        description=f"{color.title()} side of the blue/green walkthrough",
        version=__version__,
    )

    @app.api_route("/", methods=ROOT_METHODS, response_class=PlainTextResponse)
    async def root() -> PlainTextResponse:
        return PlainTextResponse(message)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Liveness/readiness probe."""
        return HealthResponse(status="healthy", color=color, version=__version__)

    return app


blue_app = create_app(BLUE, BLUE_MESSAGE)
green_app = create_app(GREEN, GREEN_MESSAGE)


def get_app(color: str) -> FastAPI:
    """Return the blue or green service."""
    color = color.lower()
    if color == BLUE:
        return blue_app
    if color == GREEN:
        return green_app
    raise ValueError(f"Unknown color: {color!r} (expected 'blue' or 'green')")


def serve(
    color: str,
    host: str = "0.0.0.0",
    port: int = 8080,
    log_level: str = "INFO",
    reload: Optional[bool] = False,
) -> None:
    """Run the blue or green service with uvicorn."""
    app = get_app(color)
    logger.info(f"Starting {color} service on {host}:{port}")

    if reload:
        # uvicorn only reloads from an import string
        target = f"bluegreen.modules.server.server:{color.lower()}_app"
        uvicorn.run(
            target,
            host=host,
            port=port,
            log_level=log_level.lower(),
            reload=True,
            log_config=get_logging_config(log_level),
        )
        return

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level.lower(),
        log_config=get_logging_config(log_level),
    )
