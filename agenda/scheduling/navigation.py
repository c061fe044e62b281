"""Day activity checks and weekend-skipping navigation."""

import logging
from datetime import date, timedelta

from agenda.core.config import constants
from agenda.domain.schedule import Weekday, is_weekend, weekday_of
from agenda.scheduling.recurrence import is_task_due, is_user_working
from agenda.scheduling.snapshot import AgendaSnapshot


logger = logging.getLogger(__name__)


def has_activity(day: date, snapshot: AgendaSnapshot) -> bool:
    """Whether anyone works, any task is due, or any event runs on `day`."""
    weekday = weekday_of(day)
    return (
        any(is_user_working(user, weekday) for user in snapshot.users)
        or any(is_task_due(task, day) for task in snapshot.tasks)
        or any(event.covers(day) for event in snapshot.events)
    )


def _is_skippable(day: date, snapshot: AgendaSnapshot) -> bool:
    return is_weekend(day) and not has_activity(day, snapshot)


def _skip_empty_weekend(day: date, step: int, snapshot: AgendaSnapshot) -> date:
    # Guard: bounded scan; two weekend days can never exceed a week
    for _ in range(constants.MAX_NAVIGATION_SKIP_DAYS):
        if not _is_skippable(day, snapshot):
            return day
        day += timedelta(days=step)
    logger.warning("Navigation skip limit reached", extra={"day": day.isoformat()})
    return day


def next_day(current: date, snapshot: AgendaSnapshot) -> date:
    """Advance one day (Friday jumps to Monday), skipping empty weekend days."""
    stride = 3 if weekday_of(current) == Weekday.FRIDAY else 1
    return _skip_empty_weekend(current + timedelta(days=stride), 1, snapshot)


def prev_day(current: date, snapshot: AgendaSnapshot) -> date:
    """Step back one day (Monday jumps to Friday), skipping empty weekend days."""
    stride = 3 if weekday_of(current) == Weekday.MONDAY else 1
    return _skip_empty_weekend(current - timedelta(days=stride), -1, snapshot)


def initial_day(today: date, snapshot: AgendaSnapshot) -> date:
    """Today, or the following Monday when today is an empty weekend day."""
    if _is_skippable(today, snapshot):
        return today + timedelta(days=7 - today.weekday())
    return today


class DayNavigator:
    """Holds the selected date of the agenda and moves it around.

    The snapshot can be swapped with `refresh` whenever data changes; the
    selected date is kept.
    """

    def __init__(self, snapshot: AgendaSnapshot, today: date) -> None:
        self.snapshot = snapshot
        self._today = today
        self.selected_date = initial_day(today, snapshot)

    def refresh(self, snapshot: AgendaSnapshot) -> None:
        self.snapshot = snapshot

    def next(self) -> date:
        self.selected_date = next_day(self.selected_date, self.snapshot)
        return self.selected_date

    def prev(self) -> date:
        self.selected_date = prev_day(self.selected_date, self.snapshot)
        return self.selected_date

    def select(self, day: date) -> date:
        self.selected_date = day
        return self.selected_date

    def today(self) -> date:
        self.selected_date = self._today
        return self.selected_date
