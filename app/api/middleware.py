"""API middleware: correlation ID, identity context, audit trigger."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.core.context import correlation_id_ctx, identity_id_ctx

logger = logging.getLogger(__name__)

IDENTITY_HEADER = "X-Identity-ID"
CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class IdentityContextMiddleware(BaseHTTPMiddleware):
    """Extract X-Identity-ID (set by the upstream auth layer); return 400 if missing."""

    async def dispatch(self, request: Request, call_next) -> Response:
        identity_id = request.headers.get(IDENTITY_HEADER)
        if not identity_id or not identity_id.strip():
            return JSONResponse(
                status_code=400,
                content={"detail": "X-Identity-ID header is required"},
            )
        request.state.identity_id = identity_id.strip()
        identity_id_ctx.set(request.state.identity_id)
        return await call_next(request)


class AuditTriggerMiddleware(BaseHTTPMiddleware):
    """After response: log structured audit event (correlation_id, identity_id, partition_id, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "identity_id": getattr(request.state, "identity_id", None),
            "partition_id": getattr(request.state, "partition_id", None),
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response
