"""Pure validation of raw add-user payloads."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .errors import ValidationError
from .models import Age, NewUser

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 200

MISSING_FIELDS_MESSAGE = "Both name and age are required."

_NUMERIC_STRING = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _coerce_age(value: Any) -> Age:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool):
        raise ValidationError("age must be a number.")
    if isinstance(value, (int, float)):
        number: Age = value
    elif isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_STRING.fullmatch(text):
            raise ValidationError("age must be a number.")
        parsed = float(text)
        number = int(parsed) if parsed.is_integer() else parsed
    else:
        raise ValidationError("age must be a number.")

    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError("age must be a finite number.")
    return number


def validate_new_user(raw: Any) -> NewUser:
    """Turn a decoded request body into a :class:`NewUser`.

    Anything that is not a mapping is treated as an empty body. Falsy
    ``name`` or ``age`` values count as missing, so an age of ``0`` is
    rejected the same way as an absent one.
    """

    payload: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    name = payload.get("name")
    age = payload.get("age")

    if not name or not age:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    if not isinstance(name, str):
        raise ValidationError("name must be a string.")
    if not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        raise ValidationError(
            f"name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
        )

    coerced_age = _coerce_age(age)
    if not coerced_age:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    return NewUser(name=name, age=coerced_age)


__all__ = ["MISSING_FIELDS_MESSAGE", "NAME_MAX_LENGTH", "NAME_MIN_LENGTH", "validate_new_user"]
