"""Business rules for creating and listing user profiles."""

from __future__ import annotations

import logging
from typing import Any, List

import anyio

from .database import Database, DuplicateUserError
from .errors import ConflictError, InternalError, NotFoundError, ProfileServiceError
from .models import User
from .validation import validate_new_user

logger = logging.getLogger("userhub.profiles")

ADD_USER_FAILURE = "Internal Server Error"
LIST_USERS_FAILURE = "Something went wrong"


class ProfileService:
    """Validate, persist and read users against an injected :class:`Database`.

    Blocking database calls run in a worker thread so request handlers
    never stall the event loop.
    """

    def __init__(self, database: Database) -> None:
        self._database = database

    async def add_user(self, raw: Any) -> User:
        new_user = validate_new_user(raw)

        try:
            existing = await anyio.to_thread.run_sync(self._database.find_user_by_name, new_user.name)
            if existing is not None:
                logger.info("Rejected duplicate user %r", new_user.name)
                raise ConflictError()
            user = await anyio.to_thread.run_sync(self._database.insert_user, new_user)
        except DuplicateUserError as exc:
            # Another request inserted the same name between the check and the insert.
            logger.info("Unique index rejected user %r: %s", new_user.name, exc)
            raise ConflictError() from exc
        except ProfileServiceError:
            raise
        except Exception as exc:
            logger.exception("Failed to store user %r", new_user.name)
            raise InternalError(ADD_USER_FAILURE) from exc

        logger.info("Added user %r (%s)", user.name, user.id)
        return user

    async def list_users(self) -> List[User]:
        try:
            return await anyio.to_thread.run_sync(self._database.list_users)
        except Exception as exc:
            logger.exception("Failed to list users")
            raise InternalError(LIST_USERS_FAILURE, payload_key="msg") from exc

    async def fetch_users(self) -> List[User]:
        """Return every user, raising :class:`NotFoundError` when there are none."""

        users = await self.list_users()
        if not users:
            raise NotFoundError()
        return users


__all__ = ["ADD_USER_FAILURE", "LIST_USERS_FAILURE", "ProfileService"]
