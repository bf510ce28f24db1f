#!/usr/bin/env python3
"""
Delete donation camps older than the retention window.

The API already runs this housekeeping on every camps listing load; this
script is for cron jobs and one-off cleanups.
"""

from __future__ import annotations

import argparse
import sys

from lifeline.data.repositories import CampRepository
from lifeline.logging_config import configure_logging, get_logger
from scripts.utils.auth import authenticate_pocketbase

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Delete donation camps older than the retention window")
    parser.add_argument("--retention-days", type=int, default=180, help="Keep camps newer than this (default: 180)")
    parser.add_argument("--pocketbase-url", default=None, help="PocketBase URL (default: POCKETBASE_URL)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    configure_logging(source="housekeeping", debug=args.debug)

    if args.retention_days < 0:
        logger.error("--retention-days must not be negative")
        return 2

    pb = authenticate_pocketbase(args.pocketbase_url)
    deleted = CampRepository(pb).delete_old_camps(args.retention_days)
    logger.info(f"Housekeeping finished: {deleted} camp(s) deleted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
