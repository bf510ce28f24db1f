"""
Token validation for PocketBase-issued user tokens.
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Any, cast

import httpx
import jwt
from jwt.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

SUPERUSERS_COLLECTION = "_superusers"


def decode_claims_unverified(token: str) -> dict[str, Any]:
    """Decode JWT claims WITHOUT verification. For inspection only."""
    try:
        return cast(dict[str, Any], jwt.decode(token, options={"verify_signature": False}))
    except InvalidTokenError:
        return {}


class PocketBaseTokenValidator:
    """Validates PocketBase user tokens by calling the auth-refresh endpoint."""

    def __init__(self, pocketbase_url: str, collection: str = "users", cache_ttl: int = 60):
        self.pocketbase_url = pocketbase_url.rstrip("/")
        self.collection = collection
        self._validation_cache: dict[str, tuple[dict[str, Any], float]] = {}  # token_hash -> (claims, expiry)
        self._cache_ttl = cache_ttl

    def validate_token(self, token: str) -> dict[str, Any] | None:
        """
        Validate a PocketBase token.

        Returns user claims if valid, None otherwise.
        """
        # Admin tokens are for the PocketBase dashboard only
        unverified = decode_claims_unverified(token)
        if unverified.get("collectionName") == SUPERUSERS_COLLECTION or unverified.get("collectionId") == (
            SUPERUSERS_COLLECTION
        ):
            logger.warning("SECURITY: Rejecting _superusers token. Admin tokens cannot be used for API access.")
            return None

        cache_key = hashlib.sha256(token.encode()).hexdigest()[:32]
        cached = self._validation_cache.get(cache_key)
        if cached is not None:
            claims, expiry = cached
            if time.time() < expiry:
                logger.debug("Using cached PocketBase token validation")
                return claims
            del self._validation_cache[cache_key]

        try:
            response = httpx.post(
                f"{self.pocketbase_url}/api/collections/{self.collection}/auth-refresh",
                headers={"Authorization": f"Bearer {token}"},
                timeout=5.0,
            )
        except httpx.TimeoutException:
            logger.warning("PocketBase token validation timed out")
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error validating PocketBase token: {type(e).__name__}: {e}")
            return None

        if response.status_code != 200:
            logger.debug(f"PocketBase auth-refresh returned status {response.status_code}")
            return None

        record = response.json().get("record", {})
        claims = {
            "sub": record.get("id", ""),
            "email": record.get("email", ""),
            "name": record.get("name", record.get("username", "")),
            "preferred_username": record.get("username", "") or record.get("email", ""),
            "email_verified": record.get("verified", False),
            "_pb_record": record,
        }

        self._validation_cache[cache_key] = (claims, time.time() + self._cache_ttl)
        logger.info(f"PocketBase token validated for user: {claims.get('preferred_username')}")
        return claims


def extract_bearer_token(authorization_header: str | None) -> str | None:
    """Extract bearer token from Authorization header."""
    if not authorization_header:
        return None

    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]
