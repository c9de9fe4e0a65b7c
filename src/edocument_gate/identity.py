"""
Identity resolver

Turns an ``Authorization: Bearer <token>`` header into an identity payload.
Every failure (missing header, malformed value, other schemes, rejected or
slow verification) resolves to ``None``; nothing is raised to the caller.
"""

import asyncio
import inspect
import logging
import re
from typing import Any, Mapping, Optional, Tuple

from .models import IdentityPayload
from .verifier import TokenVerifier

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "authorization"

_BEARER_SCHEME = re.compile(r"\Abearer\Z", re.IGNORECASE | re.ASCII)


def get_authorization_header(headers: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Case-insensitive lookup of the Authorization header value"""
    if not headers:
        return None
    for name, value in headers.items():
        if isinstance(name, str) and name.lower() == AUTHORIZATION_HEADER:
            return value if isinstance(value, str) else None
    return None


def parse_authorization(value: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Split an Authorization header value into (scheme, credential)

    The value is split on its first whitespace run. A value without a
    credential, or whose credential has further whitespace-separated
    segments, is malformed and yields None.
    """
    if not isinstance(value, str):
        return None

    parts = value.split(None, 1)
    if len(parts) != 2:
        return None

    scheme, credential = parts[0], parts[1].strip()
    if not credential or len(credential.split()) != 1:
        return None
    return scheme, credential


def is_bearer_scheme(scheme: str) -> bool:
    """Whole-token, ASCII case-insensitive match against 'Bearer'"""
    return isinstance(scheme, str) and _BEARER_SCHEME.match(scheme) is not None


async def _call_verifier(verifier: TokenVerifier, token: str) -> Any:
    verify = verifier.verify
    if inspect.iscoroutinefunction(verify):
        return await verify(token)

    # Synchronous verifiers may do crypto or I/O; keep them off the event loop.
    # An executor future is abandoned on timeout instead of waited on.
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, verify, token)
    if inspect.isawaitable(result):
        result = await result
    return result


async def resolve_identity(
    headers: Optional[Mapping[str, Any]],
    verifier: TokenVerifier,
    timeout: Optional[float] = None
) -> Optional[IdentityPayload]:
    """
    Resolve the caller identity carried by a bearer credential

    Args:
        headers: Request headers (any mapping; lookup is case-insensitive)
        verifier: Token verifier used for Bearer credentials
        timeout: Upper bound in seconds for the verifier call

    Returns:
        The verifier's payload, or None when no identity can be resolved
    """
    header_value = get_authorization_header(headers)
    if header_value is None:
        return None

    parsed = parse_authorization(header_value)
    if parsed is None:
        logger.debug("Malformed Authorization header, no identity attached")
        return None

    scheme, credential = parsed
    if not is_bearer_scheme(scheme):
        logger.debug("Non-bearer authorization scheme, no identity attached")
        return None

    try:
        payload = await asyncio.wait_for(_call_verifier(verifier, credential), timeout)
    except asyncio.TimeoutError:
        logger.debug(f"Token verification exceeded {timeout}s, no identity attached")
        return None
    except Exception as e:
        logger.debug(f"Token verification failed ({type(e).__name__}), no identity attached")
        return None

    if not isinstance(payload, Mapping):
        return None
    return payload
