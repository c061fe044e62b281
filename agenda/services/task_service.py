"""Task service for scheduling, status changes and reassignment."""

import logging
from datetime import date
from typing import Any

from agenda.core import db_client
from agenda.core.logging import span
from agenda.domain.create_models import TaskCreate
from agenda.domain.task import SELECTABLE_STATUSES, Task, TaskStatus
from agenda.domain.update_models import TaskUpdate
from agenda.scheduling.placement import can_change_status, reassign_task
from agenda.scheduling.snapshot import Session
from agenda.services.access import require_manager


logger = logging.getLogger(__name__)

COLLECTION = "tasks"


def _to_model(record: dict[str, Any]) -> Task:
    return Task.model_validate(record)


def _to_record(data: TaskCreate) -> dict[str, Any]:
    return data.model_dump(mode="json", exclude={"id"} if data.id is None else set())


async def _ensure_user_exists(user_id: str) -> None:
    # Raises RecordNotFoundError for unknown users
    await db_client.get_record(collection="users", record_id=user_id)


async def get_tasks(*, include_archived: bool = True) -> list[Task]:
    """Get all tasks, optionally leaving out archived ones."""
    with span("task_service.get_tasks"):
        filter_query = "" if include_archived else f'status != "{TaskStatus.ARCHIVED}"'
        records = await db_client.list_all_records(
            collection=COLLECTION,
            filter_query=filter_query,
        )
        return [_to_model(record) for record in records]


async def get_tasks_by_user(*, user_id: str) -> list[Task]:
    """Get all tasks assigned to a user."""
    with span("task_service.get_tasks_by_user"):
        records = await db_client.list_all_records(
            collection=COLLECTION,
            filter_query=f'user_id = "{user_id}"',
        )
        return [_to_model(record) for record in records]


async def get_task(*, task_id: str) -> Task:
    """Get a task by ID.

    Raises:
        db_client.RecordNotFoundError: If the task does not exist
    """
    with span("task_service.get_task"):
        record = await db_client.get_record(collection=COLLECTION, record_id=task_id)
        return _to_model(record)


async def create_task(*, data: TaskCreate, actor: Session) -> Task:
    """Create a task and assign it to a user (owner/admin only).

    Args:
        data: Validated task payload
        actor: Session of the user performing the change

    Returns:
        Created task

    Raises:
        PermissionError: If the actor is not a manager
        db_client.RecordNotFoundError: If the assignee does not exist
    """
    with span("task_service.create_task"):
        require_manager(actor, action="create tasks")
        await _ensure_user_exists(data.user_id)

        record = await db_client.create_record(collection=COLLECTION, data=_to_record(data))
        logger.info(
            "Created task",
            extra={"task_id": record["id"], "user_id": data.user_id, "created_by": actor.user_id},
        )
        return _to_model(record)


async def update_task(*, task_id: str, data: TaskUpdate, actor: Session) -> Task:
    """Edit a task (owner/admin only).

    Only the fields set on `data` change; the merged task must still satisfy
    the creation rules (start date or weekdays, ordered date window).
    """
    with span("task_service.update_task"):
        require_manager(actor, action="edit tasks")

        changes = data.model_dump(exclude_unset=True)
        existing = await get_task(task_id=task_id)
        merged = TaskCreate.model_validate({**existing.model_dump(mode="json"), **changes})
        if "user_id" in changes:
            await _ensure_user_exists(merged.user_id)

        record = await db_client.update_record(
            collection=COLLECTION,
            record_id=task_id,
            data=merged.model_dump(mode="json", exclude={"id"}),
        )
        logger.info("Updated task", extra={"task_id": task_id, "fields": sorted(changes), "updated_by": actor.user_id})
        return _to_model(record)


async def delete_task(*, task_id: str, actor: Session) -> None:
    """Permanently delete a task (owner/admin only)."""
    with span("task_service.delete_task"):
        require_manager(actor, action="delete tasks")
        await db_client.delete_record(collection=COLLECTION, record_id=task_id)
        logger.info("Deleted task", extra={"task_id": task_id, "deleted_by": actor.user_id})


async def archive_task(*, task_id: str, actor: Session) -> Task:
    """Soft-delete a task by moving it to the archived status (owner/admin only)."""
    with span("task_service.archive_task"):
        require_manager(actor, action="archive tasks")
        record = await db_client.update_record(
            collection=COLLECTION,
            record_id=task_id,
            data={"status": TaskStatus.ARCHIVED.value},
        )
        logger.info("Archived task", extra={"task_id": task_id, "archived_by": actor.user_id})
        return _to_model(record)


async def change_status(*, task_id: str, status: TaskStatus, actor: Session) -> Task:
    """Set a task to todo, in-progress or done.

    Allowed for managers and for the user the task is assigned to.

    Raises:
        ValueError: If the status cannot be chosen this way (archived)
        PermissionError: If the actor may not change this task
        db_client.RecordNotFoundError: If the task does not exist
    """
    with span("task_service.change_status"):
        # Guard: archiving goes through archive_task
        if status not in SELECTABLE_STATUSES:
            msg = f"Cannot set status '{status}' on a task directly"
            raise ValueError(msg)

        task = await get_task(task_id=task_id)

        # Guard: only managers or the assignee
        if not can_change_status(actor, task):
            msg = f"User {actor.user_id} is not authorized to change status of task {task_id}"
            logger.warning(msg, extra={"task_id": task_id, "user_id": actor.user_id})
            raise PermissionError(msg)

        record = await db_client.update_record(
            collection=COLLECTION,
            record_id=task_id,
            data={"status": status.value},
        )
        logger.info(
            "Changed task status",
            extra={"task_id": task_id, "from_status": task.status, "to_status": status, "changed_by": actor.user_id},
        )
        return _to_model(record)


async def move_task(
    *,
    task_id: str,
    target_user_id: str,
    target_date: date,
    actor: Session,
    start_time: str | None = None,
) -> Task:
    """Reassign a task to another user and date (owner/admin only).

    Applies the pure reassignment and persists the changed fields.
    """
    with span("task_service.move_task"):
        require_manager(actor, action="move tasks")
        await _ensure_user_exists(target_user_id)

        task = await get_task(task_id=task_id)
        moved = reassign_task(task, target_user_id, target_date, start_time=start_time)

        moved_fields = moved.model_dump(mode="json", include={"user_id", "start_date", "end_date", "start_time"})
        changes = {key: value for key, value in moved_fields.items() if getattr(task, key) != getattr(moved, key)}
        if not changes:
            return task

        record = await db_client.update_record(collection=COLLECTION, record_id=task_id, data=changes)
        logger.info(
            "Moved task",
            extra={
                "task_id": task_id,
                "from_user_id": task.user_id,
                "to_user_id": target_user_id,
                "target_date": target_date.isoformat(),
                "moved_by": actor.user_id,
            },
        )
        return _to_model(record)


async def upsert_tasks(*, tasks: list[TaskCreate]) -> list[Task]:
    """Insert or replace many tasks by ID (used for seeding)."""
    with span("task_service.upsert_tasks"):
        records = await db_client.upsert_records(collection=COLLECTION, records=[_to_record(task) for task in tasks])
        logger.info("Upserted tasks", extra={"count": len(records)})
        return [_to_model(record) for record in records]
