"""
Token verification for the Edocument API gate

The gate treats token decoding as an injected capability. Anything with a
``verify(token)`` method (plain or coroutine) that returns a claims mapping
or raises on failure can be plugged in. ``JWTTokenVerifier`` is the default
PyJWT-backed implementation; it verifies tokens and never issues them.
"""

import logging
from typing import Any, Awaitable, Dict, Optional, Protocol, Sequence, Union, runtime_checkable

import jwt

from .config import Settings
from .errors import TokenVerificationError
from .models import IdentityPayload

logger = logging.getLogger(__name__)


@runtime_checkable
class TokenVerifier(Protocol):
    """Protocol for verifying bearer credentials."""

    def verify(self, token: str) -> Union[IdentityPayload, Awaitable[IdentityPayload]]:
        """Return the identity payload for a valid token, raise otherwise."""
        ...


class JWTTokenVerifier:
    """
    Verifies signed JWTs and returns their claims

    Args:
        secret_key: Key used to check the token signature
        algorithms: Accepted signing algorithms
        audience: Expected ``aud`` claim, if any
        issuer: Expected ``iss`` claim, if any
        required_claims: Claims that must be present in every token
        leeway: Clock skew tolerance in seconds for time-based claims
    """

    def __init__(
        self,
        secret_key: Optional[str],
        algorithms: Sequence[str] = ("HS256",),
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
        required_claims: Sequence[str] = (),
        leeway: float = 0
    ):
        self.secret_key = secret_key
        self.algorithms = list(algorithms)
        self.audience = audience
        self.issuer = issuer
        self.required_claims = list(required_claims)
        self.leeway = leeway

    def verify(self, token: str) -> Dict[str, Any]:
        if not self.secret_key:
            raise TokenVerificationError("No token verification key configured")
        if not isinstance(token, str) or not token:
            raise TokenVerificationError("Empty token")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.leeway,
                options={"require": self.required_claims},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenVerificationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise TokenVerificationError(f"Invalid token: {e}") from e

        if not isinstance(payload, dict):
            raise TokenVerificationError("Token payload is not a claims mapping")
        return payload


def build_verifier(settings: Settings) -> JWTTokenVerifier:
    """Create the default verifier from configuration"""
    if not settings.secret_key:
        logger.warning("SECRET_KEY not set, every bearer token will resolve to no identity")
    return JWTTokenVerifier(
        secret_key=settings.secret_key,
        algorithms=[settings.algorithm],
        audience=settings.token_audience,
        issuer=settings.token_issuer,
    )
