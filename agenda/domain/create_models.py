"""Pydantic models for creating records in database."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from agenda.domain.event import EventType
from agenda.domain.schedule import CalendarDate, OptionalClock, OptionalDate, Weekday
from agenda.domain.task import TaskPriority, TaskStatus
from agenda.domain.user import MAX_POSITIONS, Position, UserRole, WorkHours


COLOR_PATTERN = re.compile(r"^#[0-9a-f]{6}$")


class UserCreate(BaseModel):
    """Pydantic model for creating a user record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, description="Optional explicit ID (generated when omitted)")
    name: str = Field(..., min_length=1, max_length=50, description="Display name of the user")
    email: str | None = Field(default=None, description="Contact email")
    role: UserRole = Field(default=UserRole.USER, description="User role in the team")
    positions: list[Position] = Field(..., min_length=1, max_length=MAX_POSITIONS, description="Positions held")
    work_hours: WorkHours = Field(default_factory=lambda: WorkHours({}), alias="workHours")
    frequent_tasks: list[str] = Field(default_factory=list, alias="frequentTasks")
    color: str = Field(default="#3b82f6", description="Hex colour for the user's column")

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate colour is a lowercase #rrggbb hex string."""
        v = v.strip().lower()
        if not COLOR_PATTERN.match(v):
            msg = "Color must be a hex value like #3b82f6"
            raise ValueError(msg)
        return v

    @field_validator("frequent_tasks")
    @classmethod
    def strip_frequent_tasks(cls, v: list[str]) -> list[str]:
        return [title.strip() for title in v if title.strip()]


class TaskCreate(BaseModel):
    """Pydantic model for creating a task record.

    A task needs either a start date (one-off or windowed) or at least one
    recurrence weekday, otherwise it would never appear on the agenda.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, description="Optional explicit ID (generated when omitted)")
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Detailed task description")
    user_id: str = Field(..., min_length=1, alias="userId", description="Assigned user ID")
    days: list[Weekday] = Field(default_factory=list, description="Recurrence weekdays")
    start_date: OptionalDate = Field(default=None, alias="startDate")
    end_date: OptionalDate = Field(default=None, alias="endDate")
    start_time: OptionalClock = Field(default=None, alias="startTime")
    duration: int | None = Field(default=None, gt=0, description="Duration in minutes")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    status: TaskStatus = Field(default=TaskStatus.TODO)
    notes: str | None = Field(default=None)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Title cannot be empty"
            raise ValueError(msg)
        return v

    @field_validator("days")
    @classmethod
    def dedupe_days(cls, v: list[Weekday]) -> list[Weekday]:
        """Drop duplicate weekdays, keeping week order."""
        return [day for day in Weekday if day in v]

    @field_validator("duration", mode="before")
    @classmethod
    def blank_duration(cls, v: object) -> object:
        return None if v in ("", 0) else v

    @model_validator(mode="after")
    def validate_schedule(self) -> "TaskCreate":
        """Require a start date or weekdays, and an ordered date window."""
        if self.start_date is None and not self.days:
            msg = "Task schedule needs a start date or at least one weekday"
            raise ValueError(msg)
        if self.end_date is not None and self.start_date is not None and self.end_date < self.start_date:
            msg = "Task end date must not be before its start date"
            raise ValueError(msg)
        return self


class EventCreate(BaseModel):
    """Pydantic model for creating a calendar event record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None)
    title: str = Field(..., min_length=1)
    description: str = Field(default="")
    start: CalendarDate
    end: CalendarDate
    type: EventType = Field(default=EventType.INFO)
    all_day: bool = Field(default=True, alias="allDay")

    @model_validator(mode="after")
    def validate_range(self) -> "EventCreate":
        if self.end < self.start:
            msg = "Event end date must not be before its start date"
            raise ValueError(msg)
        return self


class NoveltyCreate(BaseModel):
    """Pydantic model for creating a novelty record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None)
    title: str = Field(..., min_length=1)
    description: str | None = Field(default=None)
    start: CalendarDate
    end: CalendarDate
    viewed: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_range(self) -> "NoveltyCreate":
        if self.end < self.start:
            msg = "Novelty end date must not be before its start date"
            raise ValueError(msg)
        return self
