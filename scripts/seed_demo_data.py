#!/usr/bin/env python3
"""Seed the database with a demo team, tasks, events and novelties.

Records use fixed IDs, so running the script again replaces them instead of
duplicating them. Dates are relative to the current week.

Usage:
    uv run python scripts/seed_demo_data.py
"""

import asyncio
import logging
from datetime import date, timedelta

from agenda.core import db_client
from agenda.domain.create_models import EventCreate, NoveltyCreate, TaskCreate, UserCreate
from agenda.domain.event import EventType
from agenda.domain.schedule import Weekday, week_start
from agenda.domain.task import TaskPriority, TaskStatus
from agenda.services import event_service, novelty_service, task_service, user_service


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


WEEKDAYS = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]


def _hours(days: list[Weekday], start: str | None = None, end: str | None = None, *, virtual: bool = False) -> dict:
    work_day = {"active": not virtual, "virtual": virtual}
    if start and end:
        work_day |= {"start": start, "end": end}
    return {day.value: work_day for day in days}


def demo_users() -> list[UserCreate]:
    return [
        UserCreate(
            id="user-owner",
            name="Alicia",
            role="owner",
            positions=[{"full_name": "Team Lead", "short_name": "Lead"}],
            work_hours=_hours([Weekday.MONDAY, Weekday.WEDNESDAY], "16:00", "20:30")
            | _hours([Weekday.TUESDAY], virtual=True),
            frequent_tasks=["Daily standup", "Code review"],
            color="#3b82f6",
        ),
        UserCreate(
            id="user-admin",
            name="Paula",
            role="admin",
            positions=[{"full_name": "Academic Secretary", "short_name": "Secretary"}],
            work_hours=_hours(WEEKDAYS),
            frequent_tasks=["Client meeting"],
            color="#10b981",
        ),
        UserCreate(
            id="user-qa",
            name="Carla",
            positions=[{"full_name": "QA Analyst", "short_name": "QA"}],
            work_hours=_hours([Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY], "09:00", "13:00"),
            frequent_tasks=["Regression testing", "Bug triage"],
            color="#f97316",
        ),
        UserCreate(
            id="user-backend",
            name="Gabriel",
            positions=[{"full_name": "Backend Developer", "short_name": "Backend"}],
            work_hours=_hours(WEEKDAYS, "07:30", "11:30"),
            frequent_tasks=["Documentation", "Support tickets"],
            color="#8b5cf6",
        ),
        UserCreate(
            id="user-sales",
            name="Mariana",
            positions=[{"full_name": "Sales Executive", "short_name": "Sales"}],
            work_hours=_hours(WEEKDAYS, "18:00", "22:00"),
            frequent_tasks=["Customer outreach"],
            color="#6366f1",
        ),
    ]


def demo_tasks(monday: date) -> list[TaskCreate]:
    return [
        TaskCreate(
            id="task-standup",
            title="Daily standup",
            user_id="user-owner",
            days=[Weekday.MONDAY, Weekday.WEDNESDAY],
            start_date=monday,
            start_time="16:00",
            duration=30,
            priority=TaskPriority.HIGH,
        ),
        TaskCreate(
            id="task-release-notes",
            title="Write release notes",
            user_id="user-backend",
            start_date=monday + timedelta(days=1),
            priority=TaskPriority.MEDIUM,
        ),
        TaskCreate(
            id="task-regression",
            title="Regression testing",
            user_id="user-qa",
            days=[Weekday.TUESDAY, Weekday.THURSDAY],
            start_date=monday,
            end_date=monday + timedelta(days=27),
            start_time="10:00",
            duration=60,
            priority=TaskPriority.HIGH,
            status=TaskStatus.IN_PROGRESS,
        ),
        TaskCreate(
            id="task-invoices",
            title="Reconcile invoices",
            user_id="user-admin",
            start_date=monday + timedelta(days=2),
            end_date=monday + timedelta(days=4),
            priority=TaskPriority.LOW,
        ),
        TaskCreate(
            id="task-outreach",
            title="Customer outreach calls",
            user_id="user-sales",
            days=WEEKDAYS,
            start_time="19:00",
            duration=90,
        ),
    ]


def demo_events(monday: date) -> list[EventCreate]:
    return [
        EventCreate(
            id="event-maintenance",
            title="Server maintenance",
            start=monday + timedelta(days=3),
            end=monday + timedelta(days=3),
            type=EventType.BLOCKER,
        ),
        EventCreate(
            id="event-offsite",
            title="Team offsite",
            start=monday + timedelta(days=14),
            end=monday + timedelta(days=15),
        ),
    ]


def demo_novelties(monday: date) -> list[NoveltyCreate]:
    return [
        NoveltyCreate(
            id="novelty-welcome",
            title="Welcome to the new agenda",
            description="Check the weekly canvas for your assignments.",
            start=monday,
            end=monday + timedelta(days=6),
        ),
    ]


async def seed() -> None:
    """Create the schema and upsert every demo record."""
    await db_client.init_db()
    monday = week_start(date.today())

    users = await user_service.upsert_users(users=demo_users())
    tasks = await task_service.upsert_tasks(tasks=demo_tasks(monday))
    events = await event_service.upsert_events(events=demo_events(monday))
    novelties = await novelty_service.upsert_novelties(novelties=demo_novelties(monday))

    logger.info(
        f"Seeded {len(users)} users, {len(tasks)} tasks, {len(events)} events and {len(novelties)} novelties"
    )
    await db_client.close_connection()


if __name__ == "__main__":
    asyncio.run(seed())
