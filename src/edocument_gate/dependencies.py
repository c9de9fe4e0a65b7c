"""
FastAPI dependencies exposing the gate's request context to route handlers
"""

from typing import Optional

from fastapi import Depends
from starlette.requests import HTTPConnection

from .errors import ErrorCode, raise_api_error
from .middleware import GATE_CONTEXT_KEY, IDENTITY_KEY
from .models import IdentityPayload, RequestContext


def get_request_context(connection: HTTPConnection) -> Optional[RequestContext]:
    """Request context attached by AuthGateMiddleware (HTTP or WebSocket), if any"""
    return getattr(connection.state, GATE_CONTEXT_KEY, None)


def get_identity(connection: HTTPConnection) -> Optional[IdentityPayload]:
    """Resolved caller identity, or None when the caller is anonymous"""
    return getattr(connection.state, IDENTITY_KEY, None)


def require_identity(
    identity: Optional[IdentityPayload] = Depends(get_identity)
) -> IdentityPayload:
    """
    Dependency for handlers that only serve authenticated callers

    Raises:
        APIError: 401 when no identity was resolved for the request
    """
    if identity is None:
        raise_api_error(ErrorCode.IDENTITY_UNRESOLVED, headers={"WWW-Authenticate": "Bearer"})
    return identity
