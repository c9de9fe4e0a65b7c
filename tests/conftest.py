"""
Pytest configuration and fixtures for the Edocument API gate
"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import jwt
import pytest
from fastapi import APIRouter, Depends, WebSocket
from fastapi.testclient import TestClient

from edocument_gate import create_app
from edocument_gate.config import Settings
from edocument_gate.dependencies import get_identity, get_request_context, require_identity
from edocument_gate.errors import TokenVerificationError

TEST_SECRET_KEY = "test-secret-key-for-unit-tests-only-0123456789"


class FakeVerifier:
    """In-memory verifier that accepts a fixed set of tokens"""

    def __init__(self, tokens: Optional[Dict[str, Dict[str, Any]]] = None):
        self.tokens = tokens or {}
        self.calls: List[str] = []

    def verify(self, token: str) -> Dict[str, Any]:
        self.calls.append(token)
        if token not in self.tokens:
            raise TokenVerificationError("Unknown token")
        return self.tokens[token]


class AsyncFakeVerifier(FakeVerifier):
    async def verify(self, token: str) -> Dict[str, Any]:
        return FakeVerifier.verify(self, token)


class SlowAsyncVerifier:
    """Coroutine verifier that never finishes within a short timeout"""

    def __init__(self, delay: float = 5.0):
        self.delay = delay
        self.cancelled = False

    async def verify(self, token: str) -> Dict[str, Any]:
        try:
            await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return {"account_id": "too-late"}


class ExplodingVerifier:
    """Verifier that fails with an unexpected exception type"""

    def __init__(self):
        self.calls = 0

    def verify(self, token: str) -> Dict[str, Any]:
        self.calls += 1
        raise RuntimeError("key store unavailable")


def create_test_token(
    account_id: str = "acc-001",
    expired: bool = False,
    secret: str = TEST_SECRET_KEY,
    **claims: Any
) -> str:
    """Create test JWT token"""
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {"account_id": account_id, "exp": exp, **claims}
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def good_payload() -> Dict[str, Any]:
    return {"account_id": "acc-001", "username": "alice"}


@pytest.fixture
def fake_verifier(good_payload) -> FakeVerifier:
    return FakeVerifier({"good-token": good_payload})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        secure_scheme="https",
        secret_key=TEST_SECRET_KEY,
        verifier_timeout_seconds=0.5,
    )


@pytest.fixture
def handler_calls() -> List[str]:
    return []


@pytest.fixture
def api_router(handler_calls) -> APIRouter:
    """Downstream routes that report what the gate attached"""
    router = APIRouter()

    @router.get("/whoami")
    async def whoami(identity=Depends(get_identity), context=Depends(get_request_context)):
        handler_calls.append("whoami")
        return {
            "identity": identity,
            "authenticated": context.authenticated if context else None,
            "scheme": context.scheme if context else None,
            "request_id": context.request_id if context else None,
        }

    @router.get("/documents")
    async def documents(identity=Depends(require_identity)):
        handler_calls.append("documents")
        return {"owner": identity["account_id"], "documents": []}

    @router.websocket("/ws")
    async def events(websocket: WebSocket, identity=Depends(get_identity)):
        handler_calls.append("ws")
        await websocket.accept()
        await websocket.send_json({"identity": identity, "scheme": websocket.url.scheme})
        await websocket.close()

    return router


@pytest.fixture
def app(settings, fake_verifier, api_router):
    return create_app(settings=settings, verifier=fake_verifier, routers=[api_router])


@pytest.fixture
def client(app) -> TestClient:
    """HTTPS client; the approved scheme"""
    return TestClient(app, base_url="https://testserver")


@pytest.fixture
def insecure_client(app) -> TestClient:
    """Plain HTTP client; rejected by the transport guard"""
    return TestClient(app, base_url="http://testserver")
