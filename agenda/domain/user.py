"""User domain models and enums."""

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from agenda.domain.schedule import OptionalClock, Weekday, clock_to_minutes


# Constants for validation
MAX_NAME_LENGTH = 50
MAX_SHORT_NAME_LENGTH = 15
MAX_POSITIONS = 3


class UserRole(StrEnum):
    """User role in the team."""

    OWNER = "owner"
    ADMIN = "admin"
    USER = "user"


MANAGER_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN})


class Position(BaseModel):
    """Job position held by a team member."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    full_name: str = Field(..., min_length=2, alias="fullName")
    short_name: str = Field(..., min_length=1, max_length=MAX_SHORT_NAME_LENGTH, alias="shortName")


class WorkDay(BaseModel):
    """Availability of a user on one weekday.

    An active day either carries both `start` and `end` (with start before end)
    or neither, meaning the user covers the full organisation shift span.
    """

    model_config = ConfigDict(frozen=True)

    active: bool = False
    virtual: bool = False
    start: OptionalClock = None
    end: OptionalClock = None

    @model_validator(mode="after")
    def validate_hours(self) -> "WorkDay":
        """Require start/end together and in order when the day is active."""
        if not self.active:
            return self
        if (self.start is None) != (self.end is None):
            raise ValueError("Work day needs both start and end times, or neither")
        if self.start is not None and self.end is not None:
            if clock_to_minutes(self.start) >= clock_to_minutes(self.end):
                raise ValueError(f"Work day start {self.start} must be before end {self.end}")
        return self


class WorkHours(RootModel[dict[Weekday, WorkDay]]):
    """Seven-entry weekly schedule keyed by canonical weekday."""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def fill_missing_days(cls, data: Any) -> Any:
        """Fill absent weekdays with an inactive day and reject unknown keys."""
        if data is None:
            data = {}
        if isinstance(data, dict):
            days = dict(data)
            unknown = set(days) - {day.value for day in Weekday} - set(Weekday)
            if unknown:
                raise ValueError(f"Unknown weekday keys: {sorted(map(str, unknown))}")
            for day in Weekday:
                days.setdefault(day.value, {})
            data = days
        return data

    def __getitem__(self, day: Weekday) -> WorkDay:
        return self.root[day]


class User(BaseModel):
    """User data transfer object."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique user ID")
    name: str = Field(..., description="Display name of the user")
    email: str | None = Field(default=None, description="Contact email")
    role: UserRole = Field(default=UserRole.USER, description="User role in the team")
    positions: tuple[Position, ...] = Field(default=(), description="Positions held (at most three)")
    work_hours: WorkHours = Field(
        default_factory=lambda: WorkHours({}),
        alias="workHours",
        description="Weekly availability",
    )
    frequent_tasks: tuple[str, ...] = Field(default=(), alias="frequentTasks", description="Suggested task titles")
    color: str = Field(default="#3b82f6", description="Hex colour used for the user's column")

    @field_validator("name")
    @classmethod
    def validate_name_usable(cls, v: str) -> str:
        """Validate name is non-empty and not too long."""
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty")
        if len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Name too long (max {MAX_NAME_LENGTH} characters)")
        return v

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Validate colour is a #rrggbb hex string."""
        if not re.match(r"^#[0-9a-fA-F]{6}$", v):
            raise ValueError("Color must be a hex value like #3b82f6")
        return v.lower()

    @field_validator("positions")
    @classmethod
    def validate_positions(cls, v: tuple[Position, ...]) -> tuple[Position, ...]:
        if len(v) > MAX_POSITIONS:
            raise ValueError(f"At most {MAX_POSITIONS} positions are allowed")
        return v

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES

    def work_day(self, day: Weekday) -> WorkDay:
        return self.work_hours[day]
