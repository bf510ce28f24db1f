#!/usr/bin/env python3
"""
Centralized authentication module for PocketBase.
Uses environment variables for credentials to avoid hardcoding.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# ClientResponseError is not re-exported by the pocketbase package
from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from pocketbase import PocketBase

logger = logging.getLogger(__name__)


def authenticate_pocketbase(pb_url: str | None = None) -> PocketBase:
    """
    Authenticate with PocketBase as admin using environment variables.

    Args:
        pb_url: The PocketBase URL (default: POCKETBASE_URL or http://127.0.0.1:8090)

    Returns:
        Authenticated PocketBase client

    Raises:
        ClientResponseError: If authentication fails
    """
    load_dotenv()
    pb = PocketBase(pb_url or os.getenv("POCKETBASE_URL", "http://127.0.0.1:8090"))

    admin_email = os.getenv("POCKETBASE_ADMIN_EMAIL", "admin@lifeline.local")
    admin_password = os.getenv("POCKETBASE_ADMIN_PASSWORD", "")

    try:
        pb.collection("_superusers").auth_with_password(admin_email, admin_password)
        return pb
    except ClientResponseError as e:
        logger.error(f"Failed to authenticate with PocketBase as {admin_email}: {e}")
        logger.error("Make sure POCKETBASE_ADMIN_EMAIL and POCKETBASE_ADMIN_PASSWORD are set correctly")
        raise
