"""Tests for the agenda view endpoints."""

import pytest
from fastapi.testclient import TestClient

from agenda.domain.user import UserRole


USERS = [
    {
        "id": "user-admin",
        "name": "Alex Admin",
        "role": "admin",
        "positions": [{"full_name": "Operations", "short_name": "OPS"}],
        "work_hours": {"Monday": {"active": True, "start": "09:00", "end": "13:00"}},
        "color": "#ef4444",
    },
    {
        "id": "user-member",
        "name": "Mia Member",
        "role": "user",
        "positions": [{"full_name": "Support", "short_name": "SUP"}],
        "work_hours": {"Monday": {"active": True}, "Tuesday": {"virtual": True}},
        "color": "#3b82f6",
    },
]

TASKS = [
    {
        "id": "task-timed",
        "title": "Deploy",
        "user_id": "user-admin",
        "start_date": "2024-06-03",
        "start_time": "10:00",
        "duration": 60,
    },
    {"id": "task-untimed", "title": "Triage inbox", "user_id": "user-member", "days": ["Monday"]},
]


@pytest.fixture
def agenda_db(patched_db):
    patched_db.seed("users", *USERS)
    patched_db.seed("tasks", *TASKS)
    patched_db.seed(
        "calendar_events",
        {"id": "event-1", "title": "Audit", "start": "2024-06-08", "end": "2024-06-08", "type": "blocker"},
    )
    patched_db.seed(
        "novelties",
        {"id": "novelty-1", "title": "New coffee machine", "start": "2024-06-03", "end": "2024-06-05", "viewed": []},
    )
    return patched_db


@pytest.fixture
def member_client(test_client: TestClient, session_cookie) -> TestClient:
    test_client.cookies.update(session_cookie("user-member", UserRole.USER))
    return test_client


@pytest.fixture
def admin_client(test_client: TestClient, session_cookie) -> TestClient:
    test_client.cookies.update(session_cookie("user-admin", UserRole.ADMIN))
    return test_client


def test_views_require_session(test_client: TestClient, agenda_db) -> None:
    assert test_client.get("/agenda/day/2024-06-03").status_code == 401
    assert test_client.get("/agenda/week/2024-06-03").status_code == 401
    assert test_client.get("/agenda/month/2024/6").status_code == 401


def test_day_layout(member_client: TestClient, agenda_db) -> None:
    """Test the daily timeline positions cards and flags them for a member."""
    response = member_client.get("/agenda/day/2024-06-03")

    assert response.status_code == 200
    body = response.json()
    assert body["weekday"] == "Monday"
    assert body["is_empty"] is False
    columns = {column["user_id"]: column for column in body["columns"]}
    assert list(columns) == ["user-admin", "user-member"]

    (card,) = columns["user-admin"]["timed_cards"]
    assert card["task"]["userId"] == "user-admin"
    assert card["task"]["startTime"] == "10:00"
    assert card["height"] == 80
    assert card["can_change_status"] is False
    assert card["draggable"] is False

    (stacked,) = columns["user-member"]["stacked_cards"]
    assert stacked["task"]["id"] == "task-untimed"
    assert stacked["can_change_status"] is True
    assert columns["user-member"]["band"]["full_shift"] is True


def test_day_layout_for_admin_allows_drag(admin_client: TestClient, agenda_db) -> None:
    body = admin_client.get("/agenda/day/2024-06-03").json()

    assert all(column["can_drop"] for column in body["columns"])
    assert body["columns"][0]["timed_cards"][0]["draggable"] is True


def test_invalid_day_is_rejected(member_client: TestClient, agenda_db) -> None:
    assert member_client.get("/agenda/day/not-a-date").status_code == 422


def test_week_layout(member_client: TestClient, agenda_db) -> None:
    """Test the weekly canvas lists scheduled users per weekday."""
    response = member_client.get("/agenda/week/2024-06-05")

    assert response.status_code == 200
    body = response.json()
    assert body["week_start"] == "2024-06-03"
    assert body["week_end"] == "2024-06-07"
    monday, tuesday = body["days"][0], body["days"][1]
    assert [entry["user_id"] for entry in monday["entries"]] == ["user-admin", "user-member"]
    assert [entry["user_id"] for entry in tuesday["entries"]] == ["user-member"]
    assert tuesday["entries"][0]["virtual"] is True
    assert tuesday["entries"][0]["available"] is False


def test_week_layout_user_filter(member_client: TestClient, agenda_db) -> None:
    body = member_client.get("/agenda/week/2024-06-03", params={"user_id": "user-admin"}).json()

    assert [entry["user_id"] for entry in body["days"][0]["entries"]] == ["user-admin"]


def test_month_layout(member_client: TestClient, agenda_db) -> None:
    response = member_client.get("/agenda/month/2024/6", params={"today": "2024-06-08"})

    assert response.status_code == 200
    weeks = response.json()["weeks"]
    assert weeks[0][0]["day"] == "2024-05-27"
    saturday = next(cell for week in weeks for cell in week if cell["day"] == "2024-06-08")
    assert saturday["is_today"] is True
    assert [event["id"] for event in saturday["events"]] == ["event-1"]


def test_invalid_month(member_client: TestClient, agenda_db) -> None:
    response = member_client.get("/agenda/month/2024/13")

    assert response.status_code == 400
    assert "Invalid month" in response.json()["detail"]


def test_navigation(member_client: TestClient, agenda_db) -> None:
    """Test navigation keeps a weekend day that has an event and skips an empty one."""
    assert member_client.get("/agenda/navigation/next", params={"date": "2024-06-07"}).json() == {"day": "2024-06-10"}
    assert member_client.get("/agenda/navigation/prev", params={"date": "2024-06-10"}).json() == {"day": "2024-06-07"}
    assert member_client.get("/agenda/navigation/prev", params={"date": "2024-06-09"}).json() == {"day": "2024-06-08"}
    initial = member_client.get("/agenda/navigation/initial", params={"today": "2024-06-16"}).json()
    assert initial == {"day": "2024-06-17"}


def test_novelties_and_dismiss(member_client: TestClient, agenda_db) -> None:
    """Test a dismissed novelty disappears for that user only."""
    visible = member_client.get("/agenda/novelties", params={"date": "2024-06-04"}).json()
    assert [novelty["id"] for novelty in visible] == ["novelty-1"]

    dismissed = member_client.post("/agenda/novelties/novelty-1/dismiss")
    assert dismissed.status_code == 200
    assert dismissed.json()["viewed"] == ["user-member"]

    assert member_client.get("/agenda/novelties", params={"date": "2024-06-04"}).json() == []
    week = member_client.get("/agenda/novelties", params={"date": "2024-06-07", "mode": "week"}).json()
    assert week == []


def test_dismiss_unknown_novelty(member_client: TestClient, agenda_db) -> None:
    response = member_client.post("/agenda/novelties/missing/dismiss")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ERR_NOVELTY_NOT_FOUND"
