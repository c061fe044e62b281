"""Collapsible time-grid geometry for the daily timeline.

The grid is a fixed sequence of slot boundaries between the configured start
and end hour. A slot is expanded when any activity interval contains its
boundary time and collapsed otherwise; pixel offsets are sums of slot heights.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from agenda.core.config import constants, settings
from agenda.domain.schedule import clock_to_minutes, minutes_to_clock


@dataclass(frozen=True)
class GridConfig:
    """Geometry parameters for the time grid."""

    start_hour: int = 7
    end_hour: int = 23
    slot_minutes: int = 30
    slot_height: int = 40
    collapsed_slot_height: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:  # noqa: PLR2004
            msg = f"Invalid grid hours: {self.start_hour}-{self.end_hour}"
            raise ValueError(msg)
        if self.slot_minutes <= 0:
            msg = "Slot length must be positive"
            raise ValueError(msg)
        if self.slot_height < 0 or self.collapsed_slot_height < 0:
            msg = "Slot heights cannot be negative"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls) -> "GridConfig":
        return cls(
            start_hour=settings.timeline_start_hour,
            end_hour=settings.timeline_end_hour,
            slot_minutes=settings.slot_minutes,
            slot_height=settings.slot_height,
            collapsed_slot_height=settings.collapsed_slot_height,
        )


@dataclass(frozen=True)
class Interval:
    """Half-open `[start, end)` span in minutes since midnight."""

    start: int
    end: int

    @classmethod
    def from_clock(cls, start: str, end: str) -> "Interval":
        return cls(clock_to_minutes(start), clock_to_minutes(end))

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end


@dataclass(frozen=True)
class Shift:
    """Organisation-wide shift band such as the morning (TM) shift."""

    name: str
    start: str
    end: str

    @property
    def interval(self) -> Interval:
        return Interval.from_clock(self.start, self.end)


DEFAULT_SHIFTS: tuple[Shift, ...] = tuple(Shift(name, start, end) for name, start, end in constants.DEFAULT_SHIFTS)


def slot_times(config: GridConfig) -> list[int]:
    """Slot boundary minutes from start hour to end hour, both inclusive."""
    first = config.start_hour * 60
    last = config.end_hour * 60
    return list(range(first, last + 1, config.slot_minutes))


@dataclass(frozen=True)
class Slot:
    minute: int
    active: bool
    height: int

    @property
    def label(self) -> str:
        return minutes_to_clock(self.minute)


@dataclass(frozen=True)
class SlotMap:
    """Active/collapsed state for every slot of the grid."""

    config: GridConfig
    active: dict[int, bool] = field(default_factory=dict)

    @property
    def slots(self) -> list[Slot]:
        return [Slot(minute, self.is_active(minute), self.height_of(minute)) for minute in slot_times(self.config)]

    def is_active(self, minute: int) -> bool:
        return self.active.get(minute, False)

    def height_of(self, minute: int) -> int:
        if self.is_active(minute):
            return self.config.slot_height
        return self.config.collapsed_slot_height

    @property
    def total_height(self) -> int:
        return sum(self.height_of(minute) for minute in slot_times(self.config))

    def offset_of(self, minute: int) -> int:
        """Pixel offset of a clock time: heights of all slots strictly before it."""
        return sum(self.height_of(slot) for slot in slot_times(self.config) if slot < minute)

    def block_extent(self, start: int, end: int, *, inclusive_end: bool = False) -> tuple[int, int]:
        """Return `(top, height)` for a block spanning `start`..`end`.

        With `inclusive_end` the slot whose boundary equals `end` is counted
        too, so work-hours bands visually reach their end time.
        """
        top = 0
        height = 0
        for slot in slot_times(self.config):
            if slot < start:
                top += self.height_of(slot)
            elif slot < end or (inclusive_end and slot == end):
                height += self.height_of(slot)
        return top, height


def compute_active_slots(intervals: Iterable[Interval], config: GridConfig | None = None) -> SlotMap:
    """Mark each slot active iff some interval contains its boundary time."""
    config = config or GridConfig.from_settings()
    spans: Sequence[Interval] = list(intervals)
    active = {minute: any(span.contains(minute) for span in spans) for minute in slot_times(config)}
    return SlotMap(config=config, active=active)
