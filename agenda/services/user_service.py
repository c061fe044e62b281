"""User service for team member management."""

import logging
from typing import Any

from agenda.core import db_client
from agenda.core.logging import span
from agenda.domain.create_models import UserCreate
from agenda.domain.update_models import UserUpdate
from agenda.domain.user import User
from agenda.scheduling.snapshot import Session
from agenda.services.access import require_manager


logger = logging.getLogger(__name__)

COLLECTION = "users"


def _to_model(record: dict[str, Any]) -> User:
    return User.model_validate(record)


def _to_record(data: UserCreate) -> dict[str, Any]:
    return data.model_dump(mode="json", exclude={"id"} if data.id is None else set())


async def get_users() -> list[User]:
    """Get all users ordered by name."""
    with span("user_service.get_users"):
        records = await db_client.list_all_records(
            collection=COLLECTION,
            sort="name",
        )
        return [_to_model(record) for record in records]


async def get_user(*, user_id: str) -> User:
    """Get a user by ID.

    Raises:
        db_client.RecordNotFoundError: If the user does not exist
    """
    with span("user_service.get_user"):
        record = await db_client.get_record(collection=COLLECTION, record_id=user_id)
        return _to_model(record)


async def create_user(*, data: UserCreate, actor: Session) -> User:
    """Create a team member (owner/admin only).

    Args:
        data: Validated user payload
        actor: Session of the user performing the change

    Returns:
        Created user

    Raises:
        PermissionError: If the actor is not a manager
        db_client.DatabaseError: If the insert fails
    """
    with span("user_service.create_user"):
        require_manager(actor, action="create users")

        record = await db_client.create_record(collection=COLLECTION, data=_to_record(data))
        logger.info("Created user", extra={"user_id": record["id"], "created_by": actor.user_id})
        return _to_model(record)


async def update_user(*, user_id: str, data: UserUpdate, actor: Session) -> User:
    """Edit a user's profile, including their weekly work hours.

    Managers can edit anyone; other users can edit their own profile but not
    their role. The merged result is validated like a new user.

    Raises:
        PermissionError: If the actor may not edit this user
        db_client.RecordNotFoundError: If the user does not exist
        pydantic.ValidationError: If the merged profile is invalid
    """
    with span("user_service.update_user"):
        changes = data.model_dump(exclude_unset=True)

        # Guard: non-managers may only edit themselves, and never their role
        if not actor.is_manager:
            if actor.user_id != user_id:
                require_manager(actor, action="edit other users")
            if "role" in changes:
                require_manager(actor, action="change roles")

        existing = await get_user(user_id=user_id)
        merged = UserCreate.model_validate({**existing.model_dump(mode="json"), **changes})
        payload = merged.model_dump(mode="json", exclude={"id"})

        record = await db_client.update_record(collection=COLLECTION, record_id=user_id, data=payload)
        logger.info("Updated user", extra={"user_id": user_id, "fields": sorted(changes), "updated_by": actor.user_id})
        return _to_model(record)


async def delete_user(*, user_id: str, actor: Session) -> None:
    """Delete a user together with the tasks assigned to them (owner/admin only)."""
    with span("user_service.delete_user"):
        require_manager(actor, action="delete users")

        # Guard: make sure the user exists before touching their tasks
        await db_client.get_record(collection=COLLECTION, record_id=user_id)

        tasks = await db_client.list_all_records(
            collection="tasks",
            filter_query=f'user_id = "{user_id}"',
        )
        for task in tasks:
            await db_client.delete_record(collection="tasks", record_id=task["id"])

        await db_client.delete_record(collection=COLLECTION, record_id=user_id)
        logger.info(
            "Deleted user",
            extra={"user_id": user_id, "deleted_tasks": len(tasks), "deleted_by": actor.user_id},
        )


async def upsert_users(*, users: list[UserCreate]) -> list[User]:
    """Insert or replace many users by ID (used for seeding)."""
    with span("user_service.upsert_users"):
        records = await db_client.upsert_records(collection=COLLECTION, records=[_to_record(user) for user in users])
        logger.info("Upserted users", extra={"count": len(records)})
        return [_to_model(record) for record in records]
