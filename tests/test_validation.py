"""Tests for the pure add-user payload validation."""

from __future__ import annotations

import pytest

from userhub.errors import ValidationError
from userhub.models import NewUser
from userhub.validation import MISSING_FIELDS_MESSAGE, NAME_MAX_LENGTH, validate_new_user


def test_valid_payload_produces_new_user() -> None:
    assert validate_new_user({"name": "Alice", "age": 30}) == NewUser(name="Alice", age=30)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"name": "Alice"},
        {"age": 30},
        {"name": "", "age": 30},
        {"name": "Alice", "age": 0},
        {"name": "Alice", "age": None},
        {"name": None, "age": 30},
        None,
        ["Alice", 30],
        "name=Alice",
    ],
)
def test_missing_or_falsy_fields_are_rejected(payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_new_user(payload)
    assert excinfo.value.message == MISSING_FIELDS_MESSAGE
    assert excinfo.value.status_code == 400


def test_zero_age_given_as_string_counts_as_missing() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_new_user({"name": "Alice", "age": "0"})
    assert excinfo.value.message == MISSING_FIELDS_MESSAGE


def test_name_length_limits() -> None:
    assert validate_new_user({"name": "x" * NAME_MAX_LENGTH, "age": 1}).name == "x" * NAME_MAX_LENGTH
    with pytest.raises(ValidationError):
        validate_new_user({"name": "x" * (NAME_MAX_LENGTH + 1), "age": 1})


def test_name_must_be_text() -> None:
    with pytest.raises(ValidationError):
        validate_new_user({"name": 42, "age": 30})


def test_numeric_strings_are_coerced() -> None:
    assert validate_new_user({"name": "Bob", "age": "41"}).age == 41
    assert isinstance(validate_new_user({"name": "Bob", "age": "41"}).age, int)
    assert validate_new_user({"name": "Bob", "age": "41.5"}).age == 41.5


@pytest.mark.parametrize(
    "age",
    ["forty", True, [30], {"years": 30}, float("inf"), "nan", "1_000", "1e400", "infinity", "3 0"],
)
def test_non_numeric_ages_are_rejected(age) -> None:
    with pytest.raises(ValidationError):
        validate_new_user({"name": "Carol", "age": age})


def test_extra_fields_are_ignored() -> None:
    user = validate_new_user({"name": "Dave", "age": 22, "createdAt": "1999-01-01T00:00:00"})
    assert user == NewUser(name="Dave", age=22)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(" 30 ", 30), ("+7", 7), ("2.5e1", 25), (".5", 0.5), ("30.", 30)],
)
def test_plain_decimal_strings_are_accepted(raw, expected) -> None:
    assert validate_new_user({"name": "Erin", "age": raw}).age == expected
