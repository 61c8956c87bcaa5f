"""
Keystone command line.

Usage:
    keystone serve [--host 0.0.0.0] [--port 3000] [--reload]
    keystone init-db          # create the database if missing, then migrate
    keystone migrate          # apply pending migrations
    keystone create-admin --username admin --email admin@example.com --password ...
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from keystone.core.logging_config import configure_logging
from keystone.core.settings import Settings
from keystone.modules.container import Container
from keystone.modules.users.domain.errors import DomainError
from keystone.modules.users.domain.user import Role
from keystone.services.database.connection_manager import ConnectionManager
from keystone.services.database.database_creator import DatabaseCreator
from keystone.services.database.migration_runner import MigrationRunner

logger = logging.getLogger("keystone.cli")

DATABASE_COMMANDS = ("init-db", "migrate", "create-admin")


async def run_migrations(settings: Settings) -> int:
    manager = ConnectionManager(settings.database_url)
    await manager.connect()
    try:
        applied = await MigrationRunner(manager.database).run_migrations()
    finally:
        await manager.disconnect()
    print(f"✅ {len(applied)} migration(s) applied")
    return 0


async def init_db(settings: Settings) -> int:
    creator = DatabaseCreator(settings.database_url)
    created = await creator.ensure_exists()
    print(f"📦 Database '{creator.database_name}' {'created' if created else 'already exists'}")
    return await run_migrations(settings)


async def create_admin(settings: Settings, username: str, email: str, password: str) -> int:
    container = Container.build(settings)
    await container.connection_manager.connect()
    try:
        user = await container.auth_service.register(username, email, password, role=Role.ADMIN)
    except DomainError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1
    finally:
        await container.connection_manager.disconnect()
    print(f"✅ Admin {user.email} created with id {user.id}")
    return 0


def serve(settings: Settings, host: Optional[str], port: Optional[int], reload: bool) -> int:
    import uvicorn

    uvicorn.run(
        "keystone.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="keystone", description="Keystone API management tool")
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=None, help="Host to bind to (overrides API_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides API_PORT)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    sub.add_parser("init-db", help="Create the database if missing and apply migrations")
    sub.add_parser("migrate", help="Apply pending migrations")

    admin_parser = sub.add_parser("create-admin", help="Register a user with the admin role")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(args.env_file)
    configure_logging(settings.log_level)

    if args.command in DATABASE_COMMANDS and not settings.database_url:
        print(f"❌ DATABASE_URL must be set for {args.command}", file=sys.stderr)
        return 1

    if args.command == "serve":
        return serve(settings, args.host, args.port, args.reload)
    if args.command == "init-db":
        return asyncio.run(init_db(settings))
    if args.command == "migrate":
        return asyncio.run(run_migrations(settings))
    if args.command == "create-admin":
        return asyncio.run(create_admin(settings, args.username, args.email, args.password))
    return 2


if __name__ == "__main__":
    sys.exit(main())
