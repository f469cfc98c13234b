"""Command-line interface for the userhub greeting and profile services."""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Sequence

from userhub.config import Settings, load_settings
from userhub.database import Database

logger = logging.getLogger("userhub.main")

_SERVICES = ("greeting", "profile")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="userhub service utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="profile")

    for service in _SERVICES:
        serve_parser = subparsers.add_parser(service, help=f"Start the HTTP {service} service")
        serve_parser.add_argument("--host", default=None, help="Bind address (default from settings)")
        serve_parser.add_argument(
            "--port",
            type=int,
            default=None,
            help="Listening port (default from settings)",
        )

    subparsers.add_parser("init-db", help="Create the users collection and its indexes")
    subparsers.add_parser("list-users", help="Print every stored user")

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {*_SERVICES, "init-db", "list-users"}

    if not args_list:
        args_list = ["profile"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in known_commands:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["profile", *args_list]

    return parser.parse_args(args_list)


def _initialise_database(settings: Settings) -> Database:
    database = Database(settings.database_path)
    database.initialize()
    logger.info("Document store initialised at %s", settings.database_path)
    return database


def _serve(service: str, *, settings: Settings, host: str | None, port: int | None) -> None:
    import uvicorn

    if service == "greeting":
        from userhub.greeting import create_app as create_greeting_app

        app = create_greeting_app(cors_origins=settings.cors_origins)
    else:
        from userhub.service import create_app as create_profile_app

        app = create_profile_app(
            database=_initialise_database(settings),
            cors_origins=settings.cors_origins,
        )

    bind_host = host or settings.host
    bind_port = port or settings.port_for(service)
    logger.info("Starting %s service on http://%s:%s", service, bind_host, bind_port)
    uvicorn.run(app, host=bind_host, port=bind_port, log_level=settings.log_level.lower())


def _list_users(database: Database) -> None:
    users = database.list_users()
    if not users:
        print("No users are currently stored.")
        return

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':<24}  {'Name':<32}  {'Age':>6}  Created")
    print("-" * 84)
    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S %Z")
        print(f"{user.id:<24}  {user.name[:32]:<32}  {user.age:>6}  {created}")


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.command in _SERVICES:
        _serve(args.command, settings=settings, host=args.host, port=args.port)
    elif args.command == "init-db":
        _initialise_database(settings).close()
        print("Document store initialisation complete.")
    elif args.command == "list-users":
        database = _initialise_database(settings)
        try:
            _list_users(database)
        finally:
            database.close()


if __name__ == "__main__":
    main()
