"""Scheduling engine: recurrence, time-grid geometry, placement and navigation."""

from agenda.scheduling.navigation import DayNavigator, has_activity, initial_day, next_day, prev_day
from agenda.scheduling.novelties import NoveltyMode, dismiss, visible_novelties, week_bounds
from agenda.scheduling.placement import (
    DayLayout,
    DragState,
    MonthLayout,
    WeekLayout,
    can_change_status,
    can_manage_tasks,
    compose_day,
    compose_month,
    compose_week,
    reassign_task,
)
from agenda.scheduling.recurrence import is_task_due, is_user_scheduled, sort_tasks_for_day, sort_users_for_day
from agenda.scheduling.snapshot import AgendaSnapshot, Session
from agenda.scheduling.time_grid import GridConfig, Interval, SlotMap, compute_active_slots, slot_times


__all__ = [
    "AgendaSnapshot",
    "DayLayout",
    "DayNavigator",
    "DragState",
    "GridConfig",
    "Interval",
    "MonthLayout",
    "NoveltyMode",
    "Session",
    "SlotMap",
    "WeekLayout",
    "can_change_status",
    "can_manage_tasks",
    "compose_day",
    "compose_month",
    "compose_week",
    "compute_active_slots",
    "dismiss",
    "has_activity",
    "initial_day",
    "is_task_due",
    "is_user_scheduled",
    "next_day",
    "prev_day",
    "reassign_task",
    "slot_times",
    "sort_tasks_for_day",
    "sort_users_for_day",
    "visible_novelties",
    "week_bounds",
]
