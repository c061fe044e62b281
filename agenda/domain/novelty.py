"""Novelty (team announcement) domain models."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from agenda.domain.schedule import CalendarDate


class Novelty(BaseModel):
    """Announcement shown to every user until they dismiss it.

    `viewed` holds the ids of users who dismissed the novelty.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique novelty ID")
    title: str = Field(..., min_length=1, description="Announcement title")
    description: str | None = Field(default=None, description="Announcement body")
    start: CalendarDate = Field(..., description="First day the novelty is shown")
    end: CalendarDate = Field(..., description="Last day the novelty is shown")
    viewed: frozenset[str] = Field(default=frozenset(), description="IDs of users who dismissed it")
    updated_at: datetime | None = Field(default=None, alias="updatedAt", description="Last modification time")

    @field_validator("viewed", mode="before")
    @classmethod
    def normalize_viewed(cls, v: object) -> object:
        return frozenset() if v is None else v

    @field_validator("updated_at", mode="before")
    @classmethod
    def blank_updated_at(cls, v: object) -> object:
        return None if v == "" else v

    @model_validator(mode="after")
    def validate_range(self) -> "Novelty":
        if self.end < self.start:
            raise ValueError("Novelty end date must not be before its start date")
        return self

    def overlaps(self, first: date, last: date) -> bool:
        """Whether the novelty's date range intersects `[first, last]`."""
        return self.start <= last and self.end >= first

    def viewed_by(self, user_id: str) -> bool:
        return user_id in self.viewed
