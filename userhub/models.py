"""Domain models for the user-profile collection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Union

Age = Union[int, float]


@dataclass(frozen=True)
class NewUser:
    """Validated input for a user that has not been stored yet."""

    name: str
    age: Age


@dataclass(frozen=True)
class User:
    """Represents a user document stored in the ``users`` collection."""

    id: str
    name: str
    age: Age
    created_at: datetime

    def to_document(self) -> Dict[str, object]:
        return {
            "_id": self.id,
            "name": self.name,
            "age": self.age,
            "createdAt": self.created_at.isoformat(),
        }

    @staticmethod
    def from_document(document: Dict[str, object]) -> "User":
        return User(
            id=str(document["_id"]),
            name=str(document["name"]),
            age=document["age"],  # type: ignore[arg-type]
            created_at=datetime.fromisoformat(str(document["createdAt"])),
        )


__all__ = ["Age", "NewUser", "User"]
