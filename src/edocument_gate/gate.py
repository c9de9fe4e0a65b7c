"""
Request gate pipeline

Runs the transport guard and then the identity resolver, producing a
GateDecision. The gate holds no per-request state and can be shared by
concurrent requests.
"""

from typing import Any, Mapping, Optional

from .errors import TransportRejected
from .identity import resolve_identity
from .models import Admitted, GateDecision, Rejected
from .transport import require_secure_transport
from .verifier import TokenVerifier


class Gate:
    """
    Admission pipeline every request passes through

    Args:
        approved_scheme: Scheme requests must arrive over (e.g. "https")
        verifier: Token verifier for bearer credentials
        verifier_timeout: Upper bound in seconds for one verification
    """

    def __init__(
        self,
        approved_scheme: str,
        verifier: TokenVerifier,
        verifier_timeout: Optional[float] = None
    ):
        self.approved_scheme = approved_scheme
        self.verifier = verifier
        self.verifier_timeout = verifier_timeout

    async def evaluate(
        self,
        scheme: Optional[str],
        headers: Optional[Mapping[str, Any]]
    ) -> GateDecision:
        """Decide whether a request is admitted and with which identity"""
        try:
            require_secure_transport(scheme, self.approved_scheme)
        except TransportRejected as e:
            return Rejected(reason=e.message, status_code=e.status_code)

        identity = await resolve_identity(headers, self.verifier, self.verifier_timeout)
        return Admitted(identity=identity)
