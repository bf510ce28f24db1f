#!/usr/bin/env python3
"""
LifeLine API - HTTP API layer for the LifeLine blood-donation app.

This FastAPI application is the backend-for-frontend for the React client:
- Chat assistant sessions (emergency donor triage)
- Donation camp listing
- Donor results view and availability alerts
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lifeline.auth_middleware import AuthMiddleware, AuthUser, get_current_user
from lifeline.logging_config import configure_logging, get_logger

from .dependencies import authenticate_pb, get_chat_store, reset_chat_store
from .settings import get_settings

# Format: 2026-10-18T09:15:02Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()

    if not settings.skip_pb_auth:
        await authenticate_pb()
    else:
        logger.warning("Skipping PocketBase authentication (SKIP_PB_AUTH=true)")

    yield

    # Cancel pending chat redirects before the loop goes away
    reset_chat_store()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="LifeLine API", description="Blood donation coordination API", lifespan=lifespan)

    @app.exception_handler(401)
    async def unauthorized_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=401, content={"detail": str(exc.detail) if hasattr(exc, "detail") else "Unauthorized"}
        )

    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # Runs after CORS due to reverse order
    app.add_middleware(
        AuthMiddleware,
        auth_mode=settings.get_effective_auth_mode(),
        pocketbase_url=settings.pocketbase_url,
    )

    from .routers import camps, chat, donors

    app.include_router(chat.router)
    app.include_router(camps.router)
    app.include_router(donors.router)

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "lifeline-api", "chat": get_chat_store().get_stats()}

    @app.get("/api/config")
    async def get_client_config() -> dict[str, Any]:
        """Configuration the client needs before the first chat turn."""
        return {
            "auth_mode": settings.get_effective_auth_mode(),
            "pocketbase_url": settings.pocketbase_url,
            "typing_delay_seconds": settings.typing_delay_seconds,
            "redirect_delay_seconds": settings.redirect_delay_seconds,
        }

    @app.get("/api/user/me")
    async def get_current_user_info(user: AuthUser = Depends(get_current_user)) -> dict[str, Any]:
        """Get current user information."""
        return user.to_dict()

    return app


# Create app instance for uvicorn
app = create_app()
