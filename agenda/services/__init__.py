from agenda.services import (
    event_service,
    novelty_service,
    snapshot_service,
    task_service,
    user_service,
)


__all__ = [
    "event_service",
    "novelty_service",
    "snapshot_service",
    "task_service",
    "user_service",
]
