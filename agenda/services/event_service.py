"""Calendar event service."""

import logging
from typing import Any

from agenda.core import db_client
from agenda.core.logging import span
from agenda.domain.create_models import EventCreate
from agenda.domain.event import CalendarEvent
from agenda.domain.update_models import EventUpdate
from agenda.scheduling.snapshot import Session
from agenda.services.access import require_manager


logger = logging.getLogger(__name__)

COLLECTION = "calendar_events"


def _to_model(record: dict[str, Any]) -> CalendarEvent:
    return CalendarEvent.model_validate(record)


def _to_record(data: EventCreate) -> dict[str, Any]:
    return data.model_dump(mode="json", exclude={"id"} if data.id is None else set())


async def get_events() -> list[CalendarEvent]:
    """Get all calendar events ordered by start date."""
    with span("event_service.get_events"):
        records = await db_client.list_all_records(
            collection=COLLECTION,
            sort="start",
        )
        return [_to_model(record) for record in records]


async def get_event(*, event_id: str) -> CalendarEvent:
    with span("event_service.get_event"):
        record = await db_client.get_record(collection=COLLECTION, record_id=event_id)
        return _to_model(record)


async def create_event(*, data: EventCreate, actor: Session) -> CalendarEvent:
    """Create a calendar event (owner/admin only)."""
    with span("event_service.create_event"):
        require_manager(actor, action="create events")
        record = await db_client.create_record(collection=COLLECTION, data=_to_record(data))
        logger.info("Created event", extra={"event_id": record["id"], "created_by": actor.user_id})
        return _to_model(record)


async def update_event(*, event_id: str, data: EventUpdate, actor: Session) -> CalendarEvent:
    """Edit a calendar event (owner/admin only); the result must keep end >= start."""
    with span("event_service.update_event"):
        require_manager(actor, action="edit events")

        changes = data.model_dump(exclude_unset=True)
        existing = await get_event(event_id=event_id)
        merged = EventCreate.model_validate({**existing.model_dump(mode="json"), **changes})

        record = await db_client.update_record(
            collection=COLLECTION,
            record_id=event_id,
            data=merged.model_dump(mode="json", exclude={"id"}),
        )
        logger.info("Updated event", extra={"event_id": event_id, "updated_by": actor.user_id})
        return _to_model(record)


async def delete_event(*, event_id: str, actor: Session) -> None:
    with span("event_service.delete_event"):
        require_manager(actor, action="delete events")
        await db_client.delete_record(collection=COLLECTION, record_id=event_id)
        logger.info("Deleted event", extra={"event_id": event_id, "deleted_by": actor.user_id})


async def upsert_events(*, events: list[EventCreate]) -> list[CalendarEvent]:
    """Insert or replace many events by ID (used for seeding)."""
    with span("event_service.upsert_events"):
        records = await db_client.upsert_records(collection=COLLECTION, records=[_to_record(e) for e in events])
        logger.info("Upserted events", extra={"count": len(records)})
        return [_to_model(record) for record in records]
