"""
Edocument API - application factory

Every request passes the gate (transport guard + identity resolver) before
routing. Business routes are supplied by the caller and mounted under /api/v1.
"""

import logging
from typing import Iterable, Optional

import uvicorn
from fastapi import APIRouter, FastAPI

from .config import Settings, get_settings
from .gate import Gate
from .logging_config import setup_logging
from .middleware import AuthGateMiddleware, RequestCorrelationMiddleware
from .response import format_message
from .verifier import TokenVerifier, build_verifier

logger = logging.getLogger(__name__)

API_ROOT = "/api/v1"


def create_app(
    settings: Optional[Settings] = None,
    verifier: Optional[TokenVerifier] = None,
    routers: Iterable[APIRouter] = ()
) -> FastAPI:
    """
    Build the Edocument API application

    Args:
        settings: Gate settings (defaults to environment-derived settings)
        verifier: Token verifier (defaults to a JWT verifier from settings)
        routers: Route collections mounted under /api/v1 behind the gate
    """
    if settings is None:
        settings = get_settings()
    if verifier is None:
        verifier = build_verifier(settings)

    gate = Gate(
        approved_scheme=settings.secure_scheme,
        verifier=verifier,
        verifier_timeout=settings.verifier_timeout_seconds
    )

    app = FastAPI(
        title="Edocument API",
        version="1.0.0",
        docs_url="/docs" if settings.environment == "development" else None,
        redoc_url="/redoc" if settings.environment == "development" else None,
        openapi_url="/openapi.json" if settings.environment == "development" else None,
    )
    app.state.settings = settings
    app.state.gate = gate

    # Last added runs first: correlation IDs exist before the gate evaluates
    app.add_middleware(AuthGateMiddleware, gate=gate)
    app.add_middleware(RequestCorrelationMiddleware)

    @app.get("/")
    async def root():
        return format_message(f"EdocumentAPI up at {API_ROOT}")

    for router in routers:
        app.include_router(router, prefix=API_ROOT)

    logger.info(
        "Edocument API created",
        extra={"secure_scheme": settings.secure_scheme, "environment": settings.environment}
    )
    return app


def main() -> None:
    """Run the API under uvicorn"""
    settings = get_settings()
    setup_logging(settings)

    uvicorn.run(
        "edocument_gate.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_config=None,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
