"""
Error taxonomy for the Edocument API gate

Only a transport rejection ever terminates a request. Every identity
resolution failure collapses into "no identity" and is never raised
past the gate.
"""

from enum import Enum
from typing import Dict, Any, Optional
from fastapi import HTTPException, status


TRANSPORT_REJECTED_MESSAGE = "TLS/SSL Requested"


class ErrorCode(str, Enum):
    """Gate error codes"""

    # Terminal: the request never reaches a route handler
    TRANSPORT_REJECTED = "TRANSPORT_REJECTED"

    # Non-terminal: encoded only as identity = None by the gate
    IDENTITY_UNRESOLVED = "IDENTITY_UNRESOLVED"


class GateError(Exception):
    """Base exception for gate errors"""
    pass


class TransportRejected(GateError):
    """Request scheme does not match the approved scheme"""

    def __init__(
        self,
        request_scheme: Optional[str],
        approved_scheme: str,
        status_code: int = status.HTTP_403_FORBIDDEN,
        message: str = TRANSPORT_REJECTED_MESSAGE
    ):
        self.request_scheme = request_scheme
        self.approved_scheme = approved_scheme
        self.status_code = status_code
        self.message = message
        super().__init__(f"{message} (got {request_scheme!r}, expected {approved_scheme!r})")


class TokenVerificationError(GateError):
    """Raised by token verifiers when a credential cannot be verified"""
    pass


class APIError(HTTPException):
    """
    Error raised by route-level helpers that sit behind the gate

    Integrates with FastAPI's HTTPException handling.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}

        detail = {
            "code": code.value,
            "message": message,
            "details": self.details or None
        }

        # Remove None values for cleaner response
        detail = {k: v for k, v in detail.items() if v is not None}

        super().__init__(status_code=status_code, detail=detail, headers=headers)


error_responses: Dict[ErrorCode, Dict[str, Any]] = {
    ErrorCode.TRANSPORT_REJECTED: {
        "status_code": status.HTTP_403_FORBIDDEN,
        "description": TRANSPORT_REJECTED_MESSAGE
    },
    ErrorCode.IDENTITY_UNRESOLVED: {
        "status_code": status.HTTP_401_UNAUTHORIZED,
        "description": "Authentication required"
    },
}


def raise_api_error(
    code: ErrorCode,
    message: Optional[str] = None,
    **kwargs
) -> None:
    """
    Raise the APIError registered for a gate error code

    Status and default message come from error_responses; codes without an
    entry fall back to 400. Extra keyword arguments (details, headers) are
    handed to APIError unchanged.
    """
    registered = error_responses.get(code, {})
    raise APIError(
        code=code,
        message=message or registered.get("description", code.value),
        status_code=registered.get("status_code", status.HTTP_400_BAD_REQUEST),
        **kwargs
    )
