"""Calendar event domain models."""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from agenda.domain.schedule import CalendarDate


class EventType(StrEnum):
    """Kind of organisation-wide calendar event."""

    INFO = "info"
    BLOCKER = "blocker"


class CalendarEvent(BaseModel):
    """Calendar event data transfer object."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique event ID")
    title: str = Field(..., min_length=1, description="Event title")
    description: str = Field(default="", description="Event details")
    start: CalendarDate = Field(..., description="First day covered by the event")
    end: CalendarDate = Field(..., description="Last day covered by the event")
    type: EventType = Field(default=EventType.INFO, description="Event kind")
    all_day: bool = Field(default=True, alias="allDay", description="Whether the event spans whole days")

    @model_validator(mode="after")
    def validate_range(self) -> "CalendarEvent":
        if self.end < self.start:
            raise ValueError("Event end date must not be before its start date")
        return self

    def covers(self, day: date) -> bool:
        return self.start <= day <= self.end
