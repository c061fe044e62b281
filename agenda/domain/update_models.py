"""Update models for database operations.

Every field is optional; services merge the set fields onto the stored record
and re-validate the result with the matching create model.
"""

from pydantic import BaseModel, ConfigDict, Field

from agenda.domain.event import EventType
from agenda.domain.schedule import CalendarDate, OptionalClock, OptionalDate, Weekday
from agenda.domain.task import TaskPriority, TaskStatus
from agenda.domain.user import Position, UserRole, WorkHours


class UserUpdate(BaseModel):
    """Partial update payload for a user."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    email: str | None = None
    role: UserRole | None = None
    positions: list[Position] | None = None
    work_hours: WorkHours | None = Field(default=None, alias="workHours")
    frequent_tasks: list[str] | None = Field(default=None, alias="frequentTasks")
    color: str | None = None


class TaskUpdate(BaseModel):
    """Partial update payload for a task."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    user_id: str | None = Field(default=None, alias="userId")
    days: list[Weekday] | None = None
    start_date: OptionalDate = Field(default=None, alias="startDate")
    end_date: OptionalDate = Field(default=None, alias="endDate")
    start_time: OptionalClock = Field(default=None, alias="startTime")
    duration: int | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    notes: str | None = None


class TaskMove(BaseModel):
    """Reassign a task to another user and date, optionally at a new start time."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., min_length=1, alias="userId")
    start_date: CalendarDate = Field(..., alias="startDate")
    start_time: OptionalClock = Field(default=None, alias="startTime")


class StatusUpdate(BaseModel):
    """DTO for changing a task's status."""

    status: TaskStatus


class EventUpdate(BaseModel):
    """Partial update payload for a calendar event."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    start: OptionalDate = None
    end: OptionalDate = None
    type: EventType | None = None
    all_day: bool | None = Field(default=None, alias="allDay")


class NoveltyUpdate(BaseModel):
    """Partial update payload for a novelty."""

    title: str | None = None
    description: str | None = None
    start: OptionalDate = None
    end: OptionalDate = None
