import json
import logging
from typing import Any, Dict, Optional

from databases import Database

logger = logging.getLogger("keystone.audit")


class AuditManager:
    """
    Centralized Audit System.
    Records authentication events (REGISTER, LOGIN, LOGIN_FAILED) to audit_logs.
    """

    def __init__(self, database: Database):
        self.database = database

    async def log_event(
        self,
        user_id: str,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> None:
        """
        Writes an audit record to the DB.
        """
        try:
            query = """
            INSERT INTO audit_logs
            (user_id, action, resource_type, resource_id, details, ip_address)
            VALUES (:uid, :act, :rtype, :rid, CAST(:det AS JSONB), :ip)
            """

            details_json = json.dumps(details, default=str) if details else "{}"

            await self.database.execute(query, {
                "uid": user_id,
                "act": action,
                "rtype": resource_type,
                "rid": str(resource_id) if resource_id is not None else None,
                "det": details_json,
                "ip": ip_address,
            })

            logger.info(f"AUDIT [{user_id}] {action} {resource_type}:{resource_id}")

        except Exception as e:
            # Audit must never fail the request
            logger.critical(f"AUDIT FAILURE: {e} - Data: {user_id} {action} {resource_type}")


class NullAuditManager:
    """Audit sink used when no database is configured."""

    async def log_event(self, user_id: str, action: str, resource_type: str, **kwargs) -> None:
        logger.debug(f"AUDIT (not persisted) [{user_id}] {action} {resource_type}")
