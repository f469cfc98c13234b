"""HTTP API for the user-profile service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Dict, Iterable, List, Union

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .config import load_settings
from .database import Database
from .errors import ProfileServiceError
from .greeting import HEALTHY
from .middleware import install_cors
from .models import User
from .profiles import ADD_USER_FAILURE, ProfileService

logger = logging.getLogger("userhub.service")


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    age: Union[int, float]
    created_at: datetime = Field(alias="createdAt")


class MessageResponse(BaseModel):
    msg: str


def user_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, age=user.age, created_at=user.created_at)


async def _read_json_body(request: Request) -> object:
    body = await request.body()
    if not body:
        return {}
    try:
        return await request.json()
    except ValueError:
        logger.debug("Ignoring malformed JSON body on %s", request.url.path)
        return {}


def create_app(
    *,
    database: Database | None = None,
    cors_origins: Iterable[str] = ("*",),
) -> FastAPI:
    """Instantiate the profile service around an injected :class:`Database`.

    Without an explicit ``database`` the store path comes from
    :func:`userhub.config.load_settings`.
    """

    db = database or Database(load_settings().database_path)
    db.initialize()
    profiles = ProfileService(db)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("Profile service using document store at %s", db.path)
        yield
        db.close()

    app = FastAPI(
        title="userhub profile service",
        version="1.0.0",
        description="Create and list user profiles.",
        lifespan=lifespan,
    )
    install_cors(app, cors_origins)
    app.state.database = db
    app.state.profiles = profiles

    @app.get("/health")
    async def healthcheck() -> Dict[str, str]:
        return dict(HEALTHY)

    @app.post(
        "/addUser",
        response_model=MessageResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def add_user(request: Request) -> MessageResponse:
        payload = await _read_json_body(request)
        await profiles.add_user(payload)
        return MessageResponse(msg="User added successfully.")

    @app.get("/fetchUser", response_model=List[UserResponse])
    async def fetch_users() -> List[UserResponse]:
        users = await profiles.fetch_users()
        return [user_to_response(user) for user in users]

    @app.get("/profile", response_model=List[UserResponse])
    async def list_profiles() -> List[UserResponse]:
        users = await profiles.list_users()
        return [user_to_response(user) for user in users]

    @app.exception_handler(ProfileServiceError)
    async def handle_profile_error(_: object, exc: ProfileServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"err": ADD_USER_FAILURE},
        )

    return app


__all__ = ["MessageResponse", "UserResponse", "create_app", "user_to_response"]
