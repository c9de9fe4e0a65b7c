"""
ASGI middleware for the Edocument API gate

Both middlewares are plain ASGI callables so they see every connection
type. HTTP requests and WebSocket handshakes pass the same gate; lifespan
and other scopes are forwarded untouched.
"""

import uuid
import time
import logging

from starlette import status
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send
from starlette.websockets import WebSocket, WebSocketClose

from .gate import Gate
from .models import GateState, Rejected, RequestContext
from .response import rejection_response


logger = logging.getLogger(__name__)

GATE_CONTEXT_KEY = "gate_context"
GATE_STATE_KEY = "gate_state"
IDENTITY_KEY = "identity"
REQUEST_ID_KEY = "request_id"

GATED_SCOPES = ("http", "websocket")

# WebSocket handshakes ride on the HTTP transport they were upgraded from
_WEBSOCKET_TRANSPORT = {"ws": "http", "wss": "https"}


def transport_scheme(connection: HTTPConnection) -> str:
    """Scheme of the underlying HTTP transport for a connection"""
    scheme = connection.url.scheme
    if connection.scope["type"] == "websocket":
        return _WEBSOCKET_TRANSPORT.get(scheme, scheme)
    return scheme


class RequestCorrelationMiddleware:
    """
    Give every connection a request ID shared with the gate's RequestContext

    HTTP responses carry ``X-Request-ID`` and ``X-Response-Time``. Admitted
    requests get an INFO completion line; gate rejections only a DEBUG one.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in GATED_SCOPES:
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        request_id = connection.headers.get(self.header_name) or str(uuid.uuid4())
        setattr(connection.state, REQUEST_ID_KEY, request_id)

        start_time = time.time()
        status_code = None

        async def send_with_correlation(message: Message) -> None:
            nonlocal status_code
            if message["type"] in ("http.response.start", "websocket.http.response.start"):
                status_code = message["status"]
                headers = MutableHeaders(scope=message)
                headers[self.header_name] = request_id
                headers["X-Response-Time"] = f"{time.time() - start_time:.3f}s"
            await send(message)

        await self.app(scope, receive, send_with_correlation)

        gate_state = getattr(connection.state, GATE_STATE_KEY, None)
        log = logger.debug if gate_state is GateState.REJECTED else logger.info
        log(
            f"Request {request_id} completed",
            extra={
                "request_id": request_id,
                "connection": scope["type"],
                "path": connection.url.path,
                "status": status_code,
                "gate_state": gate_state.value if gate_state else None,
                "duration": time.time() - start_time
            }
        )


class AuthGateMiddleware:
    """
    Enforce the approved transport scheme and attach the caller identity

    Rejected HTTP requests get the fixed 403 response. Rejected WebSocket
    handshakes get the same 403 as a denial response where the server
    supports it, otherwise the socket is closed with a policy violation.
    Admitted connections carry a RequestContext on ``state.gate_context``
    and the identity (possibly None) on ``state.identity``.
    """

    def __init__(self, app: ASGIApp, gate: Gate):
        self.app = app
        self.gate = gate

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in GATED_SCOPES:
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        scheme = transport_scheme(connection)
        decision = await self.gate.evaluate(scheme, connection.headers)
        setattr(connection.state, GATE_STATE_KEY, decision.state)

        if isinstance(decision, Rejected):
            logger.debug(
                f"Request rejected: {decision.reason}",
                extra={
                    "request_id": getattr(connection.state, REQUEST_ID_KEY, None),
                    "scheme": connection.url.scheme,
                    "path": connection.url.path,
                    "status": decision.status_code
                }
            )
            await self._reject(decision, scope, receive, send)
            return

        context = RequestContext(
            identity=decision.identity,
            scheme=connection.url.scheme,
            path=connection.url.path,
            request_id=getattr(connection.state, REQUEST_ID_KEY, None)
        )
        setattr(connection.state, GATE_CONTEXT_KEY, context)
        setattr(connection.state, IDENTITY_KEY, context.identity)

        await self.app(scope, receive, send)

    async def _reject(self, decision: Rejected, scope: Scope, receive: Receive, send: Send) -> None:
        response = rejection_response(decision)
        if scope["type"] == "http":
            await response(scope, receive, send)
        elif "websocket.http.response" in scope.get("extensions", {}):
            await WebSocket(scope, receive=receive, send=send).send_denial_response(response)
        else:
            await WebSocketClose(code=status.WS_1008_POLICY_VIOLATION, reason=decision.reason)(scope, receive, send)
