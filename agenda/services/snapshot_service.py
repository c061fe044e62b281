"""Loads the entity snapshot the scheduling engine works on."""

import asyncio
import logging

from agenda.core.logging import span
from agenda.scheduling.snapshot import AgendaSnapshot
from agenda.services import event_service, novelty_service, task_service, user_service


logger = logging.getLogger(__name__)


async def load_snapshot() -> AgendaSnapshot:
    """Fetch users, tasks, events and novelties into one immutable snapshot."""
    with span("snapshot_service.load_snapshot"):
        users, tasks, events, novelties = await asyncio.gather(
            user_service.get_users(),
            task_service.get_tasks(),
            event_service.get_events(),
            novelty_service.get_novelties(),
        )
        logger.debug(
            "Loaded agenda snapshot",
            extra={"users": len(users), "tasks": len(tasks), "events": len(events), "novelties": len(novelties)},
        )
        return AgendaSnapshot(
            users=tuple(users),
            tasks=tuple(tasks),
            events=tuple(events),
            novelties=tuple(novelties),
        )
