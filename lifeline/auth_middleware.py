"""
Authentication middleware - resolves the signed-in user, if any.

Most of LifeLine is public: anonymous visitors can chat, browse camps and
search donors. The middleware therefore attaches `request.state.user`
(possibly None) to every request and only rejects anonymous requests on
protected path prefixes.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

from fastapi import HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

from .jwt_auth import PocketBaseTokenValidator, extract_bearer_token

logger = logging.getLogger(__name__)

PUBLIC_PATHS = {"/health", "/api/health", "/api/config"}
PROTECTED_PREFIXES = ("/api/watchlist", "/api/user")


def _is_docker_environment() -> bool:
    """Detect if running inside a Docker container."""
    if Path("/.dockerenv").exists():
        return True
    if os.getenv("DOCKER_CONTAINER") == "true":
        return True
    try:
        with open("/proc/1/cgroup") as f:
            return "docker" in f.read()
    except (FileNotFoundError, PermissionError):
        pass
    return False


class AuthUser:
    """Represents an authenticated user."""

    def __init__(self, user_id: str, username: str, email: str, display_name: str):
        self.user_id = user_id
        self.username = username
        self.email = email
        self.display_name = display_name

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "display_name": self.display_name,
        }


DEV_USER = AuthUser(user_id="dev_user", username="DevDonor", email="dev_donor@example.com", display_name="Dev Donor")


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware for resolving the current user.

    Supports two modes:
    - bypass: Every request is DevDonor (development only)
    - production: Validate PocketBase user tokens from the Authorization header
    """

    def __init__(self, app: Any, auth_mode: str, pocketbase_url: str):
        super().__init__(app)
        self.auth_mode = auth_mode.lower()

        if self.auth_mode not in ["bypass", "production"]:
            raise ValueError(f"Invalid AUTH_MODE: {auth_mode}. Must be bypass or production")

        if self.auth_mode == "bypass" and _is_docker_environment():
            raise ValueError(
                "SECURITY ERROR: AUTH_MODE=bypass is not allowed in Docker containers. "
                "Docker deployments must use AUTH_MODE=production."
            )

        self.token_validator: PocketBaseTokenValidator | None = None
        if self.auth_mode == "production":
            self.token_validator = PocketBaseTokenValidator(pocketbase_url)

        logger.info(f"Authentication middleware initialized in {self.auth_mode} mode")

    async def _resolve_user(self, request: Request) -> AuthUser | None:
        if self.auth_mode == "bypass":
            return DEV_USER

        token = extract_bearer_token(request.headers.get("Authorization"))
        if not token or self.token_validator is None:
            return None

        claims = await asyncio.to_thread(self.token_validator.validate_token, token)
        if not claims:
            return None

        username = claims.get("preferred_username") or claims.get("sub", "")
        return AuthUser(
            user_id=claims.get("sub", ""),
            username=username,
            email=claims.get("email", ""),
            display_name=claims.get("name") or username,
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in PUBLIC_PATHS or request.method == "OPTIONS":
            request.state.user = None
            return await call_next(request)

        user = await self._resolve_user(request)
        request.state.user = user

        if user is None and request.url.path.startswith(PROTECTED_PREFIXES):
            logger.warning(f"Unauthenticated request to {request.url.path} in {self.auth_mode} mode")
            # BaseHTTPMiddleware turns raised exceptions into 500s
            return JSONResponse(status_code=401, content={"detail": "Authentication required"})

        if user is not None:
            logger.debug(f"Authenticated request from {user.username} to {request.url.path}")

        return await call_next(request)


def get_optional_user(request: Request) -> AuthUser | None:
    """Dependency returning the current user, or None for anonymous visitors."""
    user: AuthUser | None = getattr(request.state, "user", None)
    return user


def get_current_user(request: Request) -> AuthUser:
    """
    Dependency to require a signed-in user.

    Usage:
        @router.post("/api/watchlist")
        async def add_watch(user: AuthUser = Depends(get_current_user)):
            ...
    """
    user = get_optional_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
