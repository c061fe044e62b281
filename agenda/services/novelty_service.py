"""Novelty (announcement) service."""

import logging
from datetime import UTC, datetime
from typing import Any

from agenda.core import db_client
from agenda.core.logging import span
from agenda.domain.create_models import NoveltyCreate
from agenda.domain.novelty import Novelty
from agenda.domain.update_models import NoveltyUpdate
from agenda.scheduling.novelties import dismiss
from agenda.scheduling.snapshot import Session
from agenda.services.access import require_manager


logger = logging.getLogger(__name__)

COLLECTION = "novelties"


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _to_model(record: dict[str, Any]) -> Novelty:
    return Novelty.model_validate(record)


def _to_record(data: NoveltyCreate) -> dict[str, Any]:
    record = data.model_dump(mode="json", exclude={"id"} if data.id is None else set())
    record["updated_at"] = _now()
    return record


async def get_novelties() -> list[Novelty]:
    """Get all novelties, most recent start first."""
    with span("novelty_service.get_novelties"):
        records = await db_client.list_all_records(
            collection=COLLECTION,
            sort="-start",
        )
        return [_to_model(record) for record in records]


async def get_novelty(*, novelty_id: str) -> Novelty:
    with span("novelty_service.get_novelty"):
        record = await db_client.get_record(collection=COLLECTION, record_id=novelty_id)
        return _to_model(record)


async def create_novelty(*, data: NoveltyCreate, actor: Session) -> Novelty:
    """Publish a novelty (owner/admin only)."""
    with span("novelty_service.create_novelty"):
        require_manager(actor, action="create novelties")
        record = await db_client.create_record(collection=COLLECTION, data=_to_record(data))
        logger.info("Created novelty", extra={"novelty_id": record["id"], "created_by": actor.user_id})
        return _to_model(record)


async def update_novelty(*, novelty_id: str, data: NoveltyUpdate, actor: Session) -> Novelty:
    """Edit a novelty's text or date range (owner/admin only)."""
    with span("novelty_service.update_novelty"):
        require_manager(actor, action="edit novelties")

        changes = data.model_dump(exclude_unset=True)
        existing = await get_novelty(novelty_id=novelty_id)
        merged = NoveltyCreate.model_validate({**existing.model_dump(mode="json"), **changes})

        payload = merged.model_dump(mode="json", exclude={"id"})
        payload["updated_at"] = _now()
        record = await db_client.update_record(collection=COLLECTION, record_id=novelty_id, data=payload)
        logger.info("Updated novelty", extra={"novelty_id": novelty_id, "updated_by": actor.user_id})
        return _to_model(record)


async def delete_novelty(*, novelty_id: str, actor: Session) -> None:
    with span("novelty_service.delete_novelty"):
        require_manager(actor, action="delete novelties")
        await db_client.delete_record(collection=COLLECTION, record_id=novelty_id)
        logger.info("Deleted novelty", extra={"novelty_id": novelty_id, "deleted_by": actor.user_id})


async def mark_as_viewed(*, novelty_id: str, user_id: str) -> Novelty:
    """Record that a user dismissed a novelty. Calling it again is a no-op."""
    with span("novelty_service.mark_as_viewed"):
        novelty = await get_novelty(novelty_id=novelty_id)
        dismissed = dismiss(novelty, user_id)
        if dismissed is novelty:
            logger.debug("Novelty already viewed", extra={"novelty_id": novelty_id, "user_id": user_id})
            return novelty

        record = await db_client.update_record(
            collection=COLLECTION,
            record_id=novelty_id,
            data={"viewed": sorted(dismissed.viewed)},
        )
        logger.info("Novelty dismissed", extra={"novelty_id": novelty_id, "user_id": user_id})
        return _to_model(record)


async def upsert_novelties(*, novelties: list[NoveltyCreate]) -> list[Novelty]:
    """Insert or replace many novelties by ID (used for seeding)."""
    with span("novelty_service.upsert_novelties"):
        records = await db_client.upsert_records(
            collection=COLLECTION,
            records=[_to_record(novelty) for novelty in novelties],
        )
        logger.info("Upserted novelties", extra={"count": len(records)})
        return [_to_model(record) for record in records]
