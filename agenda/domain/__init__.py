"""Domain models and DTOs."""

from agenda.domain.create_models import EventCreate, NoveltyCreate, TaskCreate, UserCreate
from agenda.domain.event import CalendarEvent, EventType
from agenda.domain.novelty import Novelty
from agenda.domain.schedule import Weekday
from agenda.domain.task import Task, TaskPriority, TaskStatus
from agenda.domain.update_models import EventUpdate, NoveltyUpdate, StatusUpdate, TaskMove, TaskUpdate, UserUpdate
from agenda.domain.user import Position, User, UserRole, WorkDay, WorkHours


__all__ = [
    "CalendarEvent",
    "EventCreate",
    "EventType",
    "EventUpdate",
    "Novelty",
    "NoveltyCreate",
    "NoveltyUpdate",
    "Position",
    "StatusUpdate",
    "Task",
    "TaskCreate",
    "TaskMove",
    "TaskPriority",
    "TaskStatus",
    "TaskUpdate",
    "User",
    "UserCreate",
    "UserRole",
    "UserUpdate",
    "Weekday",
    "WorkDay",
    "WorkHours",
]
