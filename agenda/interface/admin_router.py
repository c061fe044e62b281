"""Management endpoints for users, tasks, calendar events and novelties.

Writes require an owner or admin session, except status changes which the
assignee of a task may also make. Permission checks live in the services.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from agenda.domain.create_models import EventCreate, NoveltyCreate, TaskCreate, UserCreate
from agenda.domain.event import CalendarEvent
from agenda.domain.novelty import Novelty
from agenda.domain.task import Task
from agenda.domain.update_models import (
    EventUpdate,
    NoveltyUpdate,
    StatusUpdate,
    TaskMove,
    TaskUpdate,
    UserUpdate,
)
from agenda.domain.user import User
from agenda.interface.session import get_session
from agenda.scheduling.snapshot import Session
from agenda.services import event_service, novelty_service, task_service, user_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# Users


@router.get("/users")
async def list_users(_session: Session = Depends(get_session)) -> list[User]:
    return await user_service.get_users()


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, session: Session = Depends(get_session)) -> User:
    return await user_service.create_user(data=payload, actor=session)


@router.get("/users/{user_id}")
async def get_user(user_id: str, _session: Session = Depends(get_session)) -> User:
    return await user_service.get_user(user_id=user_id)


@router.patch("/users/{user_id}")
async def update_user(user_id: str, payload: UserUpdate, session: Session = Depends(get_session)) -> User:
    """Edit a profile; members may edit their own work hours and details."""
    return await user_service.update_user(user_id=user_id, data=payload, actor=session)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, session: Session = Depends(get_session)) -> None:
    await user_service.delete_user(user_id=user_id, actor=session)


# Tasks


@router.get("/tasks")
async def list_tasks(
    user_id: str | None = Query(default=None),
    include_archived: bool = Query(default=True),
    _session: Session = Depends(get_session),
) -> list[Task]:
    if user_id is not None:
        return await task_service.get_tasks_by_user(user_id=user_id)
    return await task_service.get_tasks(include_archived=include_archived)


@router.post("/tasks", status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate, session: Session = Depends(get_session)) -> Task:
    return await task_service.create_task(data=payload, actor=session)


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, _session: Session = Depends(get_session)) -> Task:
    return await task_service.get_task(task_id=task_id)


@router.patch("/tasks/{task_id}")
async def update_task(task_id: str, payload: TaskUpdate, session: Session = Depends(get_session)) -> Task:
    return await task_service.update_task(task_id=task_id, data=payload, actor=session)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, session: Session = Depends(get_session)) -> None:
    await task_service.delete_task(task_id=task_id, actor=session)


@router.post("/tasks/{task_id}/archive")
async def archive_task(task_id: str, session: Session = Depends(get_session)) -> Task:
    return await task_service.archive_task(task_id=task_id, actor=session)


@router.post("/tasks/{task_id}/move")
async def move_task(task_id: str, payload: TaskMove, session: Session = Depends(get_session)) -> Task:
    """Drop a task onto another user's column for a given date."""
    return await task_service.move_task(
        task_id=task_id,
        target_user_id=payload.user_id,
        target_date=payload.start_date,
        start_time=payload.start_time,
        actor=session,
    )


@router.post("/tasks/{task_id}/status")
async def change_task_status(task_id: str, payload: StatusUpdate, session: Session = Depends(get_session)) -> Task:
    return await task_service.change_status(task_id=task_id, status=payload.status, actor=session)


# Calendar events


@router.get("/events")
async def list_events(_session: Session = Depends(get_session)) -> list[CalendarEvent]:
    return await event_service.get_events()


@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(payload: EventCreate, session: Session = Depends(get_session)) -> CalendarEvent:
    return await event_service.create_event(data=payload, actor=session)


@router.patch("/events/{event_id}")
async def update_event(event_id: str, payload: EventUpdate, session: Session = Depends(get_session)) -> CalendarEvent:
    return await event_service.update_event(event_id=event_id, data=payload, actor=session)


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(event_id: str, session: Session = Depends(get_session)) -> None:
    await event_service.delete_event(event_id=event_id, actor=session)


# Novelties


@router.get("/novelties")
async def list_novelties(_session: Session = Depends(get_session)) -> list[Novelty]:
    return await novelty_service.get_novelties()


@router.post("/novelties", status_code=status.HTTP_201_CREATED)
async def create_novelty(payload: NoveltyCreate, session: Session = Depends(get_session)) -> Novelty:
    return await novelty_service.create_novelty(data=payload, actor=session)


@router.patch("/novelties/{novelty_id}")
async def update_novelty(novelty_id: str, payload: NoveltyUpdate, session: Session = Depends(get_session)) -> Novelty:
    return await novelty_service.update_novelty(novelty_id=novelty_id, data=payload, actor=session)


@router.delete("/novelties/{novelty_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_novelty(novelty_id: str, session: Session = Depends(get_session)) -> None:
    await novelty_service.delete_novelty(novelty_id=novelty_id, actor=session)
