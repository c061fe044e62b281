"""Task domain models and enums."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agenda.domain.schedule import OptionalClock, OptionalDate, Weekday


class TaskPriority(StrEnum):
    """How urgently an untimed task should be picked up."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}


class TaskStatus(StrEnum):
    """Task lifecycle state."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    ARCHIVED = "archived"


# Statuses a user can pick from the status changer; archiving is a management action
SELECTABLE_STATUSES = frozenset({TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE})


class Task(BaseModel):
    """Task data transfer object.

    Snapshot of a stored task. Validation here is lenient on purpose: a task
    lacking both a start date and weekdays still loads, and the scheduler
    treats it as never due. Creation goes through `TaskCreate`, which enforces
    the full invariants.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique task ID")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Detailed task description")
    user_id: str = Field(..., alias="userId", description="Assigned user ID")
    days: frozenset[Weekday] = Field(default=frozenset(), description="Recurrence weekdays")
    start_date: OptionalDate = Field(default=None, alias="startDate", description="First day the task applies")
    end_date: OptionalDate = Field(default=None, alias="endDate", description="Last day the task applies")
    start_time: OptionalClock = Field(default=None, alias="startTime", description="Start time (HH:mm)")
    duration: int | None = Field(default=None, description="Duration in minutes")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(default=TaskStatus.TODO, description="Current lifecycle state")
    notes: str | None = Field(default=None, description="Free-form notes")

    @field_validator("days", mode="before")
    @classmethod
    def normalize_days(cls, v: object) -> object:
        """Treat a missing days list as no recurrence."""
        return frozenset() if v is None else v

    @field_validator("duration", mode="before")
    @classmethod
    def normalize_duration(cls, v: object) -> object:
        """Zero, blank or negative durations mean "no duration"."""
        if v in ("", None):
            return None
        if isinstance(v, int | float | str) and int(v) <= 0:
            return None
        return v

    @property
    def is_timed(self) -> bool:
        return self.start_time is not None
