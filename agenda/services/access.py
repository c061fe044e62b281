"""Permission guards shared by the write services."""

import logging

from agenda.scheduling.placement import can_manage_tasks
from agenda.scheduling.snapshot import Session


logger = logging.getLogger(__name__)


def require_manager(actor: Session, *, action: str) -> None:
    """Raise PermissionError unless the actor is an owner or admin."""
    if not can_manage_tasks(actor):
        msg = f"User {actor.user_id} is not authorized to {action}"
        logger.warning(msg, extra={"user_id": actor.user_id, "role": actor.role, "action": action})
        raise PermissionError(msg)
