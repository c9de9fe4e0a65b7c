"""
Edocument API Gate

Transport guard and bearer identity resolution that run in front of every
Edocument API route.
"""

from .config import Settings, get_settings
from .errors import ErrorCode, GateError, TransportRejected, TokenVerificationError, APIError
from .models import GateState, Admitted, Rejected, GateDecision, RequestContext, IdentityPayload
from .transport import check_transport, require_secure_transport
from .identity import parse_authorization, is_bearer_scheme, resolve_identity
from .verifier import TokenVerifier, JWTTokenVerifier, build_verifier
from .gate import Gate
from .middleware import AuthGateMiddleware, RequestCorrelationMiddleware
from .dependencies import get_identity, get_request_context, require_identity
from .app import create_app

__all__ = [
    # Configuration
    'Settings',
    'get_settings',

    # Errors
    'ErrorCode',
    'GateError',
    'TransportRejected',
    'TokenVerificationError',
    'APIError',

    # Models
    'GateState',
    'Admitted',
    'Rejected',
    'GateDecision',
    'RequestContext',
    'IdentityPayload',

    # Gate
    'check_transport',
    'require_secure_transport',
    'parse_authorization',
    'is_bearer_scheme',
    'resolve_identity',
    'TokenVerifier',
    'JWTTokenVerifier',
    'build_verifier',
    'Gate',

    # Middleware & dependencies
    'AuthGateMiddleware',
    'RequestCorrelationMiddleware',
    'get_identity',
    'get_request_context',
    'require_identity',
    'create_app',
]

__version__ = '1.0.0'
