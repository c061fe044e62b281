#!/usr/bin/env python3
"""Delete every record from the database.

Tasks go first since they reference users. A short countdown gives the
operator a chance to cancel with Ctrl+C.

Usage:
    uv run python scripts/clear_all_data.py [--yes]
"""

import asyncio
import logging
import sys

from agenda.core import db_client


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

# Reverse dependency order
DELETION_ORDER = ["tasks", "calendar_events", "novelties", "users"]
CANCEL_WINDOW_SECONDS = 5


async def clear_collection(collection: str) -> int:
    """Delete all records of one collection and return how many were removed."""
    records = await db_client.list_all_records(collection=collection)
    for record in records:
        await db_client.delete_record(collection=collection, record_id=record["id"])
    return len(records)


async def clear_all_data(*, skip_countdown: bool = False) -> None:
    logger.info("WARNING: this deletes ALL agenda data")
    if not skip_countdown:
        logger.info(f"Press Ctrl+C within {CANCEL_WINDOW_SECONDS} seconds to cancel...")
        await asyncio.sleep(CANCEL_WINDOW_SECONDS)

    await db_client.init_db()
    for collection in DELETION_ORDER:
        deleted = await clear_collection(collection)
        logger.info(f"Deleted {deleted} records from {collection}")
    await db_client.close_connection()


if __name__ == "__main__":
    try:
        asyncio.run(clear_all_data(skip_countdown="--yes" in sys.argv[1:]))
    except KeyboardInterrupt:
        logger.info("Cancelled, nothing was deleted")
        sys.exit(1)
