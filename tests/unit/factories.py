"""Builders for domain objects used across unit tests."""

from datetime import date
from typing import Any

from agenda.domain.event import CalendarEvent
from agenda.domain.novelty import Novelty
from agenda.domain.task import Task
from agenda.domain.user import User


def build_user(user_id: str = "user-a", **overrides: Any) -> User:
    data: dict[str, Any] = {
        "id": user_id,
        "name": user_id.replace("-", " ").title(),
        "role": "user",
        "positions": [{"full_name": "Analyst", "short_name": "AN"}],
        "work_hours": {},
        "color": "#3b82f6",
    }
    data.update(overrides)
    return User.model_validate(data)


def build_task(task_id: str = "task-1", **overrides: Any) -> Task:
    data: dict[str, Any] = {
        "id": task_id,
        "title": task_id.replace("-", " ").title(),
        "user_id": "user-a",
        "start_date": date(2024, 6, 3),
    }
    data.update(overrides)
    return Task.model_validate(data)


def build_event(
    event_id: str = "event-1",
    start: date = date(2024, 6, 3),
    end: date | None = None,
    **overrides: Any,
) -> CalendarEvent:
    data: dict[str, Any] = {"id": event_id, "title": "Maintenance", "start": start, "end": end or start}
    data.update(overrides)
    return CalendarEvent.model_validate(data)


def build_novelty(
    novelty_id: str = "novelty-1",
    start: date = date(2024, 6, 3),
    end: date | None = None,
    **overrides: Any,
) -> Novelty:
    data: dict[str, Any] = {"id": novelty_id, "title": "Announcement", "start": start, "end": end or start}
    data.update(overrides)
    return Novelty.model_validate(data)
