"""
Gate decision and request context models
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union


IdentityPayload = Mapping[str, Any]


class GateState(str, Enum):
    """Lifecycle of a request passing through the gate"""
    PRE_CHECK = "pre_check"
    ADMITTED = "admitted"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Admitted:
    """The request passed the transport guard and may proceed"""
    identity: Optional[IdentityPayload] = None
    state: GateState = field(default=GateState.ADMITTED, init=False)

    @property
    def authenticated(self) -> bool:
        return self.identity is not None


@dataclass(frozen=True)
class Rejected:
    """The request was stopped before any route handler ran"""
    reason: str
    status_code: int
    state: GateState = field(default=GateState.REJECTED, init=False)


GateDecision = Union[Admitted, Rejected]


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request value handed to downstream routing

    Stored on ``request.state.gate_context``; the identity alone is also
    exposed as ``request.state.identity``.
    """
    identity: Optional[IdentityPayload]
    scheme: str
    path: str
    request_id: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.identity is not None
