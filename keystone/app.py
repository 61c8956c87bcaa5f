import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from keystone import __version__
from keystone.core.logging_config import configure_logging
from keystone.core.settings import Settings
from keystone.modules.container import Container
from keystone.modules.errors import register_exception_handlers
from keystone.modules.request_context import REQUEST_ID_HEADER, request_id_middleware
from keystone.modules.system_endpoints import router as system_router
from keystone.modules.users.api import auth_router, user_router
from keystone.services.database.migration_runner import MigrationRunner

logger = logging.getLogger("keystone.app")

ENDPOINTS = [
    "POST /auth/register - Register new user",
    "POST /auth/login    - Login and get JWT",
    "GET  /users         - List users (paginated)",
    "GET  /users/{id}    - Get user by ID",
    "GET  /me            - Get current user (protected)",
    "GET  /health        - Liveness",
]


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """
    Build the application. With no arguments, configuration comes from the
    environment and storage is PostgreSQL.
    """
    if settings is None:
        settings = container.settings if container is not None else Settings.from_env()
    configure_logging(settings.log_level)

    if container is None:
        container = Container.build(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        manager = container.connection_manager
        if manager is not None:
            await manager.connect()
            if settings.run_migrations_on_startup:
                await MigrationRunner(manager.database).run_migrations()
        logger.info("🚀 Keystone API ready")
        for line in ENDPOINTS:
            logger.info(f"   {line}")
        yield
        # Shutdown
        if manager is not None:
            await manager.disconnect()

    app = FastAPI(title="Keystone API", version=__version__, lifespan=lifespan)
    app.state.container = container

    app.middleware("http")(request_id_middleware)

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=3600,
    )

    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(user_router)

    return app
