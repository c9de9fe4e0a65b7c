"""
Transport guard

Requests must arrive over the approved scheme before anything else runs.
"""

from typing import Optional

from .errors import TransportRejected


def _normalize_scheme(scheme: Optional[str]) -> Optional[str]:
    if not isinstance(scheme, str):
        return None
    # ASCII-only lowering; schemes are ASCII tokens and must not follow locale rules
    if not scheme.isascii():
        return None
    return scheme.lower()


def check_transport(request_scheme: Optional[str], approved_scheme: str) -> bool:
    """
    Check that a request scheme matches the approved scheme

    Comparison is a case-insensitive exact match. Anything that is not an
    ASCII string never matches.
    """
    normalized = _normalize_scheme(request_scheme)
    approved = _normalize_scheme(approved_scheme)
    if not normalized or not approved:
        return False
    return normalized == approved


def require_secure_transport(request_scheme: Optional[str], approved_scheme: str) -> None:
    """
    Raise TransportRejected unless the request arrived over the approved scheme
    """
    if not check_transport(request_scheme, approved_scheme):
        raise TransportRejected(request_scheme, approved_scheme)
