import argparse
import os
import sys
from pathlib import Path

import anyio

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userhub.database import Database, resolve_database_path
from userhub.errors import ProfileServiceError
from userhub.profiles import ProfileService


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Add a user to the userhub profile store")
    parser.add_argument("name", help="Unique name for the user")
    parser.add_argument("age", help="Age of the user")
    parser.add_argument(
        "--db",
        dest="db_path",
        default=None,
        help="Path to the SQLite document store (defaults to USERHUB_DB_PATH or data/userhub.sqlite3)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    db_env = args.db_path or os.getenv("USERHUB_DB_PATH")
    database = Database(resolve_database_path(db_env))
    database.initialize()
    service = ProfileService(database)

    try:
        user = anyio.run(service.add_user, {"name": args.name, "age": args.age})
    except ProfileServiceError as exc:  # validation errors, duplicates, etc.
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        database.close()

    print(f"Created user {user.id}: {user.name} (age {user.age})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
