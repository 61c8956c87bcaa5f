"""
Request ID Middleware

Tags every request with a fresh UUID, exposes it on request.state and in
the X-Request-ID response header, and makes it visible to log records.
"""
import uuid
from typing import Optional

from fastapi import Request

from keystone.core.logging_config import request_id_var
from keystone.modules.errors import unhandled_error_handler

REQUEST_ID_HEADER = "X-Request-ID"


async def request_id_middleware(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    except Exception as e:
        # Render here so the 500 still carries the request id
        response = await unhandled_error_handler(request, e)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def get_request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def get_client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None
