"""Recurrence and availability rules.

Decides whether a task is due on a calendar date and whether a user is
scheduled on a weekday. All comparisons are on `datetime.date`, never on
timestamps.
"""

from collections.abc import Iterable
from datetime import date

from agenda.domain.event import CalendarEvent
from agenda.domain.schedule import Weekday, clock_to_minutes, weekday_of
from agenda.domain.task import PRIORITY_RANK, Task, TaskStatus
from agenda.domain.user import User


def is_task_due(task: Task, day: date) -> bool:
    """Whether `task` appears on the agenda for `day`.

    Rules, first match wins:
    1. archived tasks are never due
    2. done tasks vanish once their end date has passed
    3. weekday recurrence within the optional start/end window
    4. otherwise the `[start_date, end_date or start_date]` window
    A task with neither start date nor weekdays is never due.
    """
    if task.status == TaskStatus.ARCHIVED:
        return False
    if task.status == TaskStatus.DONE and task.end_date is not None and day > task.end_date:
        return False

    if task.days:
        if weekday_of(day) not in task.days:
            return False
        if task.start_date is not None and day < task.start_date:
            return False
        return not (task.end_date is not None and day > task.end_date)

    if task.start_date is None:
        return False
    last_day = task.end_date or task.start_date
    return task.start_date <= day <= last_day


def is_user_scheduled(user: User, weekday: Weekday) -> bool:
    """A user gets a column on a weekday when working on site or virtually."""
    work_day = user.work_day(weekday)
    return work_day.active or work_day.virtual


def is_user_working(user: User, weekday: Weekday) -> bool:
    return user.work_day(weekday).active


def _start_minutes(user: User, weekday: Weekday) -> int | None:
    start = user.work_day(weekday).start
    return clock_to_minutes(start) if start else None


def sort_users_for_day(users: Iterable[User], weekday: Weekday) -> list[User]:
    """Order users by their work-day start time.

    Users without a start time keep their original position; the users that
    have one are sorted among the positions they occupy.
    """
    ordered = list(users)
    timed_positions = [i for i, user in enumerate(ordered) if _start_minutes(user, weekday) is not None]
    timed_sorted = sorted(
        (ordered[i] for i in timed_positions),
        key=lambda user: _start_minutes(user, weekday) or 0,
    )
    for position, user in zip(timed_positions, timed_sorted, strict=True):
        ordered[position] = user
    return ordered


def _task_sort_key(task: Task) -> tuple[int, int, int]:
    if task.start_time is not None:
        return 0, clock_to_minutes(task.start_time), PRIORITY_RANK[task.priority]
    return 1, PRIORITY_RANK[task.priority], 0


def sort_tasks_for_day(tasks: Iterable[Task]) -> list[Task]:
    """Timed tasks by start time then priority, then untimed tasks high priority first."""
    return sorted(tasks, key=_task_sort_key)


def tasks_for_day(tasks: Iterable[Task], day: date, user_id: str | None = None) -> list[Task]:
    """Due tasks for `day`, optionally restricted to one user, in display order."""
    due = [task for task in tasks if is_task_due(task, day) and (user_id is None or task.user_id == user_id)]
    return sort_tasks_for_day(due)


def users_for_day(users: Iterable[User], weekday: Weekday) -> list[User]:
    """Scheduled users for a weekday, in start-time order."""
    return sort_users_for_day((user for user in users if is_user_scheduled(user, weekday)), weekday)


def events_for_day(events: Iterable[CalendarEvent], day: date) -> list[CalendarEvent]:
    return [event for event in events if event.covers(day)]
