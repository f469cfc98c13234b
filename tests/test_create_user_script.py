"""Tests for the create_user maintenance script."""

from __future__ import annotations

from userhub.database import Database
from scripts import create_user


def test_create_user_stores_document(tmp_path, capsys):
    db_path = tmp_path / "script.sqlite3"

    assert create_user.main(["Alice", "30", "--db", str(db_path)]) == 0
    assert "Created user" in capsys.readouterr().out

    database = Database(db_path)
    stored = database.find_user_by_name("Alice")
    database.close()
    assert stored is not None
    assert stored.age == 30


def test_create_user_reports_duplicates(tmp_path, capsys):
    db_path = tmp_path / "script.sqlite3"

    assert create_user.main(["Alice", "30", "--db", str(db_path)]) == 0
    capsys.readouterr()
    assert create_user.main(["Alice", "31", "--db", str(db_path)]) == 1
    assert "User already exists." in capsys.readouterr().err


def test_create_user_rejects_zero_age(tmp_path, capsys):
    db_path = tmp_path / "script.sqlite3"

    assert create_user.main(["Bob", "0", "--db", str(db_path)]) == 1
    assert "Both name and age are required." in capsys.readouterr().err
