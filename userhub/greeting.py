"""Stateless greeting and liveness service."""
from __future__ import annotations

from typing import Dict, Iterable

from fastapi import FastAPI

from .middleware import install_cors

GREETING = {"msg": "Hello World"}
HEALTHY = {"status": "OK"}


def create_app(*, cors_origins: Iterable[str] = ("*",)) -> FastAPI:
    """Instantiate the greeting service."""

    app = FastAPI(
        title="userhub greeting service",
        version="1.0.0",
        description="Returns fixed greeting and health payloads.",
    )
    install_cors(app, cors_origins)

    @app.get("/")
    async def root() -> Dict[str, str]:
        return dict(GREETING)

    @app.get("/hello")
    async def hello() -> Dict[str, str]:
        return dict(GREETING)

    @app.get("/health")
    async def healthcheck() -> Dict[str, str]:
        return dict(HEALTHY)

    return app


__all__ = ["GREETING", "HEALTHY", "create_app"]
