"""Middleware shared by both services."""
from __future__ import annotations

from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def install_cors(app: FastAPI, origins: Iterable[str] = ("*",)) -> None:
    """Allow cross-origin calls from ``origins`` (every origin by default)."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins) or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


__all__ = ["install_cors"]
