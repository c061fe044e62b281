"""Placement of work bands, shift bands and task cards for agenda views.

Combines the recurrence rules with the time-grid geometry into positioned
blocks for the daily timeline, plus the simpler weekly canvas and monthly
calendar layouts.
"""

import calendar
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, Field, computed_field

from agenda.core.config import constants
from agenda.domain.event import CalendarEvent
from agenda.domain.schedule import Weekday, clock_to_minutes, minutes_to_clock, week_start, weekday_of
from agenda.domain.task import Task
from agenda.domain.user import User
from agenda.scheduling.recurrence import events_for_day, tasks_for_day, users_for_day
from agenda.scheduling.snapshot import AgendaSnapshot, Session
from agenda.scheduling.time_grid import DEFAULT_SHIFTS, GridConfig, Interval, Shift, SlotMap, compute_active_slots


logger = logging.getLogger(__name__)


def can_manage_tasks(session: Session | None) -> bool:
    """Owners and admins may create, move and delete tasks."""
    return session is not None and session.is_manager


def can_change_status(session: Session | None, task: Task) -> bool:
    """Managers, or the user the task is assigned to."""
    if session is None:
        return False
    return session.is_manager or session.user_id == task.user_id


# Layout models


class _Layout(BaseModel):
    model_config = ConfigDict(frozen=True)


class GridSlot(_Layout):
    time: str
    active: bool
    top: int
    height: int


class ShiftBand(_Layout):
    name: str
    start: str
    end: str
    top: int
    height: int


class WorkBand(_Layout):
    start: str
    end: str
    top: int
    height: int
    full_shift: bool = Field(default=False, description="User works the whole shift span without explicit hours")


class TimedCard(_Layout):
    task: Task
    top: int
    height: int
    can_change_status: bool
    draggable: bool


class StackedCard(_Layout):
    task: Task
    stack_index: int
    can_change_status: bool
    draggable: bool


class UserColumn(_Layout):
    user_id: str
    name: str
    color: str
    positions: list[str] = Field(default_factory=list, description="Short position names")
    left: int
    width: int
    virtual: bool
    band: WorkBand | None
    timed_cards: list[TimedCard] = Field(default_factory=list)
    stacked_cards: list[StackedCard] = Field(default_factory=list)
    can_drop: bool


class DayLayout(_Layout):
    day: date
    weekday: Weekday
    grid: list[GridSlot]
    total_height: int
    shift_bands: list[ShiftBand]
    columns: list[UserColumn]
    events: list[CalendarEvent]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        return not self.columns and not self.events


def _full_shift_interval(shifts: Sequence[Shift]) -> Interval | None:
    if not shifts:
        return None
    return Interval(min(s.interval.start for s in shifts), max(s.interval.end for s in shifts))


def _work_interval(user: User, weekday: Weekday, shifts: Sequence[Shift]) -> tuple[Interval | None, bool]:
    """Work interval of a user on a weekday and whether it is the full-shift fallback."""
    work_day = user.work_day(weekday)
    if not work_day.active:
        return None, False
    if work_day.start is not None and work_day.end is not None:
        return Interval.from_clock(work_day.start, work_day.end), False
    return _full_shift_interval(shifts), True


def _task_interval(task: Task, config: GridConfig) -> Interval | None:
    if task.start_time is None:
        return None
    start = clock_to_minutes(task.start_time)
    return Interval(start, start + (task.duration or config.slot_minutes))


def _column_width(user: User, weekday: Weekday, overrides: Mapping[str, int]) -> int:
    default = constants.ACTIVE_COLUMN_WIDTH if user.work_day(weekday).active else constants.INACTIVE_COLUMN_WIDTH
    return max(constants.MIN_COLUMN_WIDTH, overrides.get(user.id, default))


def _grid(slot_map: SlotMap) -> list[GridSlot]:
    rows = []
    top = 0
    for slot in slot_map.slots:
        rows.append(GridSlot(time=slot.label, active=slot.active, top=top, height=slot.height))
        top += slot.height
    return rows


def _column(
    *,
    user: User,
    weekday: Weekday,
    tasks: list[Task],
    slot_map: SlotMap,
    shifts: Sequence[Shift],
    left: int,
    width: int,
    session: Session | None,
) -> UserColumn:
    manager = can_manage_tasks(session)

    band = None
    interval, full_shift = _work_interval(user, weekday, shifts)
    if interval is not None:
        top, height = slot_map.block_extent(interval.start, interval.end, inclusive_end=True)
        if height > 0:
            band = WorkBand(
                start=minutes_to_clock(interval.start),
                end=minutes_to_clock(interval.end),
                top=top,
                height=height,
                full_shift=full_shift,
            )

    timed_cards = []
    stacked_cards = []
    for task in tasks:
        task_span = _task_interval(task, slot_map.config)
        if task_span is not None:
            top, height = slot_map.block_extent(task_span.start, task_span.end)
            timed_cards.append(
                TimedCard(
                    task=task,
                    top=top,
                    height=height,
                    can_change_status=can_change_status(session, task),
                    draggable=manager,
                )
            )
        else:
            stacked_cards.append(
                StackedCard(
                    task=task,
                    stack_index=len(stacked_cards),
                    can_change_status=can_change_status(session, task),
                    draggable=manager,
                )
            )

    return UserColumn(
        user_id=user.id,
        name=user.name,
        color=user.color,
        positions=[position.short_name for position in user.positions],
        left=left,
        width=width,
        virtual=user.work_day(weekday).virtual,
        band=band,
        timed_cards=timed_cards,
        stacked_cards=stacked_cards,
        can_drop=manager,
    )


def compose_day(
    snapshot: AgendaSnapshot,
    day: date,
    session: Session | None,
    column_widths: Mapping[str, int] | None = None,
    config: GridConfig | None = None,
    shifts: Sequence[Shift] | None = None,
) -> DayLayout:
    """Lay out the daily timeline for `day`.

    Columns hold every scheduled user in start-time order, followed by users
    who are not scheduled but still have tasks due that day.
    """
    config = config or GridConfig.from_settings()
    shifts = DEFAULT_SHIFTS if shifts is None else tuple(shifts)
    overrides = column_widths or {}
    weekday = weekday_of(day)

    due = tasks_for_day(snapshot.tasks, day)
    column_users = users_for_day(snapshot.users, weekday)
    scheduled_ids = {user.id for user in column_users}
    owners = {task.user_id for task in due}
    column_users += [user for user in snapshot.users if user.id not in scheduled_ids and user.id in owners]
    column_ids = {user.id for user in column_users}

    # Guard: tasks of users missing from the snapshot get no column and no grid space
    visible_tasks = [task for task in due if task.user_id in column_ids]

    intervals: list[Interval] = [shift.interval for shift in shifts]
    for user in column_users:
        interval, _ = _work_interval(user, weekday, shifts)
        if interval is not None:
            intervals.append(interval)
    intervals += [span for task in visible_tasks if (span := _task_interval(task, config)) is not None]
    slot_map = compute_active_slots(intervals, config)

    shift_bands = []
    for shift in shifts:
        top, height = slot_map.block_extent(shift.interval.start, shift.interval.end)
        if height > 0:
            shift_bands.append(ShiftBand(name=shift.name, start=shift.start, end=shift.end, top=top, height=height))

    columns = []
    left = constants.TIME_RULER_WIDTH + constants.SHIFT_COLUMN_WIDTH
    for user in column_users:
        width = _column_width(user, weekday, overrides)
        columns.append(
            _column(
                user=user,
                weekday=weekday,
                tasks=[task for task in visible_tasks if task.user_id == user.id],
                slot_map=slot_map,
                shifts=shifts,
                left=left,
                width=width,
                session=session,
            )
        )
        left += width

    logger.debug(
        "Composed day layout",
        extra={"day": day.isoformat(), "columns": len(columns), "tasks": len(visible_tasks)},
    )
    return DayLayout(
        day=day,
        weekday=weekday,
        grid=_grid(slot_map),
        total_height=slot_map.total_height,
        shift_bands=shift_bands,
        columns=columns,
        events=events_for_day(snapshot.events, day),
    )


class WeekEntry(_Layout):
    user_id: str
    name: str
    color: str
    positions: list[str]
    start: str | None
    end: str | None
    active: bool
    virtual: bool
    tasks: list[Task]
    available: bool = Field(..., description="On site and nothing assigned yet")
    can_drop: bool


class WeekDayLayout(_Layout):
    day: date
    weekday: Weekday
    events: list[CalendarEvent]
    entries: list[WeekEntry]


class WeekLayout(_Layout):
    week_start: date
    week_end: date
    days: list[WeekDayLayout]
    can_manage: bool


def compose_week(
    snapshot: AgendaSnapshot,
    day: date,
    session: Session | None,
    user_filter: str | None = None,
) -> WeekLayout:
    """Lay out the Monday-to-Friday canvas for the week containing `day`."""
    monday = week_start(day)
    manager = can_manage_tasks(session)
    days = []
    for offset in range(constants.WEEK_VIEW_DAYS):
        current = monday + timedelta(days=offset)
        weekday = weekday_of(current)
        due = tasks_for_day(snapshot.tasks, current)
        entries = []
        for user in users_for_day(snapshot.users, weekday):
            if user_filter is not None and user.id != user_filter:
                continue
            work_day = user.work_day(weekday)
            user_tasks = [task for task in due if task.user_id == user.id]
            entries.append(
                WeekEntry(
                    user_id=user.id,
                    name=user.name,
                    color=user.color,
                    positions=[position.short_name for position in user.positions],
                    start=work_day.start,
                    end=work_day.end,
                    active=work_day.active,
                    virtual=work_day.virtual,
                    tasks=user_tasks,
                    available=work_day.active and not user_tasks,
                    can_drop=manager,
                )
            )
        days.append(
            WeekDayLayout(
                day=current,
                weekday=weekday,
                events=events_for_day(snapshot.events, current),
                entries=entries,
            )
        )
    return WeekLayout(
        week_start=monday,
        week_end=monday + timedelta(days=constants.WEEK_VIEW_DAYS - 1),
        days=days,
        can_manage=manager,
    )


class MonthCell(_Layout):
    day: date
    in_month: bool
    is_today: bool
    events: list[CalendarEvent]


class MonthLayout(_Layout):
    year: int
    month: int
    weeks: list[list[MonthCell]]


def compose_month(snapshot: AgendaSnapshot, year: int, month: int, today: date) -> MonthLayout:
    """Lay out the month grid: whole Monday-to-Sunday weeks covering the month."""
    if not 1 <= month <= 12:  # noqa: PLR2004
        msg = f"Invalid month: {month}"
        raise ValueError(msg)
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    current = week_start(first)
    grid_end = week_start(last) + timedelta(days=6)

    weeks: list[list[MonthCell]] = []
    while current <= grid_end:
        week = []
        for _ in range(7):
            week.append(
                MonthCell(
                    day=current,
                    in_month=current.month == month,
                    is_today=current == today,
                    events=events_for_day(snapshot.events, current),
                )
            )
            current += timedelta(days=1)
        weeks.append(week)
    return MonthLayout(year=year, month=month, weeks=weeks)


def reassign_task(task: Task, target_user_id: str, target_date: date, *, start_time: str | None = None) -> Task:
    """Return a copy of `task` moved to another user and date.

    Only `user_id` and `start_date` change in a plain drag-and-drop move. Here a
    dated window also keeps its length so `end_date` never falls before the new
    start, and an open-start task whose end has passed is stretched to the
    target. A start time is only replaced when given.
    """
    update: dict[str, object] = {"user_id": target_user_id, "start_date": target_date}
    if task.end_date is not None:
        if task.start_date is not None:
            update["end_date"] = task.end_date + (target_date - task.start_date)
        elif task.end_date < target_date:
            update["end_date"] = target_date
    if start_time is not None:
        update["start_time"] = start_time
    return task.model_copy(update=update)


@dataclass
class DragState:
    """Two-phase pick-up/drop of a task card.

    Without a session that can manage tasks both steps are ignored; dropping
    without a prior pick-up does nothing.
    """

    session: Session | None = None
    picked_task_id: str | None = None

    def pick_up(self, task_id: str) -> None:
        if not can_manage_tasks(self.session):
            return
        self.picked_task_id = task_id

    def cancel(self) -> None:
        self.picked_task_id = None

    def drop(self, tasks: Iterable[Task], user_id: str, day: date) -> Task | None:
        task_id, self.picked_task_id = self.picked_task_id, None
        if task_id is None or not can_manage_tasks(self.session):
            return None
        task = next((candidate for candidate in tasks if candidate.id == task_id), None)
        if task is None:
            logger.warning("Dropped task no longer exists", extra={"task_id": task_id})
            return None
        return reassign_task(task, user_id, day)
