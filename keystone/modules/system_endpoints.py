"""
System Endpoints

Liveness and readiness checks plus admin-only migration controls.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from keystone.modules.dependencies import get_container
from keystone.modules.request_context import get_request_id
from keystone.modules.users.auth.middleware import require_admin
from keystone.modules.users.auth.permissions import SYSTEM_MIGRATE, require_permission
from keystone.modules.users.domain.errors import InternalError
from keystone.services.database.migration_runner import MigrationRunner

logger = logging.getLogger("keystone.system")

router = APIRouter(tags=["System"])


def _database_or_503(container):
    if container.connection_manager is None:
        raise HTTPException(status_code=503, detail="Database not configured")
    return container.connection_manager.database


@router.get("/health")
async def health_check(request: Request):
    """Liveness check. Always ok while the process serves requests."""
    return {"status": "ok", "request_id": get_request_id(request)}


@router.get("/health/ready")
async def readiness_check(request: Request, container=Depends(get_container)):
    """
    Readiness check: 200 when the database answers, 503 otherwise.
    """
    manager = container.connection_manager
    database_ok = manager is not None and await manager.health_check()
    body = {
        "status": "ok" if database_ok else "unavailable",
        "database": "up" if database_ok else "down",
        "cache": "configured" if container.settings.redis_url else "disabled",
        "request_id": get_request_id(request),
    }
    return JSONResponse(status_code=200 if database_ok else 503, content=body)


@router.get("/system/migrations", dependencies=[Depends(require_admin)])
async def list_pending_migrations(container=Depends(get_container)):
    """
    Pending migration files (admin only).
    """
    runner = MigrationRunner(_database_or_503(container))
    pending = await runner.pending_migrations()
    return {"pending": [m.filename for m in pending], "count": len(pending)}


@router.post("/system/migrate", dependencies=[Depends(require_permission(SYSTEM_MIGRATE))])
async def trigger_migrations(container=Depends(get_container)):
    """
    Runs pending database migrations.
    Useful for production deploy hooks.
    """
    runner = MigrationRunner(_database_or_503(container))
    try:
        applied = await runner.run_migrations()
    except Exception as e:
        raise InternalError(f"Migration failed: {e}")
    return {
        "status": "success",
        "applied": [m.filename for m in applied],
        "message": "Database migrations applied.",
    }
