"""Greeting and user-profile microservices."""

from __future__ import annotations

from typing import Any

from .database import Database, resolve_database_path


def create_greeting_app(*args: Any, **kwargs: Any):
    """Factory function for the stateless greeting service."""

    from .greeting import create_app as _create_app

    return _create_app(*args, **kwargs)


def create_profile_app(*args: Any, **kwargs: Any):
    """Factory function for the user-profile service."""

    from .service import create_app as _create_app

    return _create_app(*args, **kwargs)


__all__ = [
    "Database",
    "resolve_database_path",
    "create_greeting_app",
    "create_profile_app",
]
