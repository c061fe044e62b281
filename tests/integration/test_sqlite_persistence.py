"""Integration tests running the services against a real SQLite file."""

from datetime import date

import pytest

from agenda.core import db_client
from agenda.domain.create_models import EventCreate, NoveltyCreate, TaskCreate, UserCreate
from agenda.domain.schedule import Weekday
from agenda.domain.task import TaskStatus
from agenda.domain.update_models import UserUpdate
from agenda.scheduling.placement import compose_day
from agenda.scheduling.time_grid import GridConfig
from agenda.services import event_service, novelty_service, snapshot_service, task_service, user_service


@pytest.fixture
async def seeded(sqlite_db, owner_session):
    """One scheduled user with a timed task, an event and a novelty."""
    (user,) = await user_service.upsert_users(
        users=[
            UserCreate(
                id="user-qa",
                name="Quinn QA",
                positions=[{"fullName": "Quality Assurance", "shortName": "QA"}],
                workHours={"Monday": {"active": True, "start": "09:00", "end": "13:00"}},
            )
        ]
    )
    task = await task_service.create_task(
        data=TaskCreate(
            title="Smoke test",
            userId=user.id,
            days=[Weekday.MONDAY],
            startTime="10:00",
            duration=60,
        ),
        actor=owner_session,
    )
    await event_service.create_event(
        data=EventCreate(title="Release", start="2024-06-03", end="2024-06-03"),
        actor=owner_session,
    )
    await novelty_service.create_novelty(
        data=NoveltyCreate(title="New staging server", start="2024-06-03", end="2024-06-07"),
        actor=owner_session,
    )
    return user, task


@pytest.mark.integration
class TestSQLitePersistence:
    """End-to-end persistence through the service layer."""

    async def test_json_columns_round_trip(self, seeded):
        """Test nested work hours and weekday lists survive storage."""
        user, task = seeded

        stored_user = await user_service.get_user(user_id=user.id)
        stored_task = await task_service.get_task(task_id=task.id)

        assert stored_user.work_day(Weekday.MONDAY).start == "09:00"
        assert stored_user.positions[0].short_name == "QA"
        assert stored_task.days == frozenset({Weekday.MONDAY})
        assert stored_task.duration == 60

    async def test_snapshot_feeds_day_layout(self, seeded, admin_session):
        """Test a loaded snapshot produces a positioned card for the stored task."""
        snapshot = await snapshot_service.load_snapshot()

        layout = compose_day(snapshot, date(2024, 6, 3), admin_session, config=GridConfig())

        (column,) = layout.columns
        assert column.user_id == "user-qa"
        assert [card.task.title for card in column.timed_cards] == ["Smoke test"]
        assert [event.title for event in layout.events] == ["Release"]

    async def test_upsert_does_not_drop_tasks(self, seeded):
        """Test re-seeding a user keeps the tasks that reference it."""
        user, task = seeded

        await user_service.upsert_users(
            users=[
                UserCreate(
                    id=user.id,
                    name="Quinn Q.",
                    positions=[{"fullName": "Quality Assurance", "shortName": "QA"}],
                )
            ]
        )

        assert (await user_service.get_user(user_id=user.id)).name == "Quinn Q."
        assert (await task_service.get_task(task_id=task.id)).title == "Smoke test"

    async def test_status_move_and_delete(self, seeded, owner_session):
        """Test the task lifecycle against the real database."""
        user, task = seeded
        await user_service.upsert_users(
            users=[UserCreate(id="user-be", name="Bo Backend", positions=[{"fullName": "Backend", "shortName": "BE"}])]
        )

        done = await task_service.change_status(task_id=task.id, status=TaskStatus.DONE, actor=owner_session)
        moved = await task_service.move_task(
            task_id=task.id,
            target_user_id="user-be",
            target_date=date(2024, 6, 10),
            actor=owner_session,
        )

        assert done.status == TaskStatus.DONE
        assert (moved.user_id, moved.start_date) == ("user-be", date(2024, 6, 10))

        await user_service.delete_user(user_id="user-be", actor=owner_session)
        assert await task_service.get_tasks() == []
        assert [u.id for u in await user_service.get_users()] == [user.id]

    async def test_profile_update_and_dismissal(self, seeded, owner_session):
        user, _ = seeded

        updated = await user_service.update_user(
            user_id=user.id,
            data=UserUpdate(frequentTasks=["Regression run"]),
            actor=owner_session,
        )
        (novelty,) = await novelty_service.get_novelties()
        await novelty_service.mark_as_viewed(novelty_id=novelty.id, user_id=user.id)
        viewed = await novelty_service.mark_as_viewed(novelty_id=novelty.id, user_id=user.id)

        assert updated.frequent_tasks == ("Regression run",)
        assert viewed.viewed == frozenset({user.id})

    async def test_failed_upsert_keeps_no_rows(self, seeded, owner_session):
        """Test a batch with one bad row leaves nothing behind for a later commit."""
        user, task = seeded

        with pytest.raises(db_client.DatabaseError):
            await task_service.upsert_tasks(
                tasks=[
                    TaskCreate(id="task-ok", title="Written first", userId=user.id, startDate="2024-06-04"),
                    TaskCreate(id="task-bad", title="Unknown owner", userId="user-ghost", startDate="2024-06-04"),
                ]
            )
        await event_service.create_event(
            data=EventCreate(title="Retro", start="2024-06-05", end="2024-06-05"),
            actor=owner_session,
        )

        assert [stored.id for stored in await task_service.get_tasks()] == [task.id]

    async def test_list_all_records_pages_through(self, sqlite_db):
        await db_client.upsert_records(
            collection="calendar_events",
            records=[
                {"id": f"event-{index}", "title": "Standup", "start": "2024-06-03", "end": "2024-06-03"}
                for index in range(5)
            ],
        )

        records = await db_client.list_all_records(collection="calendar_events", per_page=2)

        assert [record["id"] for record in records] == [f"event-{index}" for index in range(5)]

    async def test_missing_record_raises(self, sqlite_db):
        with pytest.raises(db_client.RecordNotFoundError):
            await task_service.get_task(task_id="missing")
