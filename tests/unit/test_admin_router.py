"""Tests for the management endpoints."""

import pytest
from fastapi.testclient import TestClient

from agenda.domain.user import UserRole


@pytest.fixture
def admin_db(patched_db):
    patched_db.seed(
        "users",
        {
            "id": "user-admin",
            "name": "Alex Admin",
            "role": "admin",
            "positions": [{"full_name": "Ops", "short_name": "OPS"}],
        },
        {"id": "user-member", "name": "Mia Member", "positions": [{"full_name": "Support", "short_name": "SUP"}]},
    )
    patched_db.seed(
        "tasks",
        {
            "id": "task-1",
            "title": "Deploy",
            "user_id": "user-member",
            "start_date": "2024-06-03",
            "end_date": "2024-06-04",
        },
    )
    return patched_db


@pytest.fixture
def as_admin(test_client: TestClient, session_cookie) -> TestClient:
    test_client.cookies.update(session_cookie("user-admin", UserRole.ADMIN))
    return test_client


@pytest.fixture
def as_member(test_client: TestClient, session_cookie) -> TestClient:
    test_client.cookies.update(session_cookie("user-member", UserRole.USER))
    return test_client


def test_create_user(as_admin: TestClient, admin_db) -> None:
    """Test that an admin creates a user from an aliased payload."""
    response = as_admin.post(
        "/admin/users",
        json={
            "name": "Nora New",
            "positions": [{"fullName": "Backend Developer", "shortName": "BE"}],
            "workHours": {"Wednesday": {"active": True, "start": "14:00", "end": "18:00"}},
            "color": "#F59E0B",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["color"] == "#f59e0b"
    assert body["workHours"]["Wednesday"] == {"active": True, "virtual": False, "start": "14:00", "end": "18:00"}
    assert body["workHours"]["Monday"]["active"] is False


def test_create_user_invalid_payload(as_admin: TestClient, admin_db) -> None:
    response = as_admin.post("/admin/users", json={"name": "No Positions", "positions": []})

    assert response.status_code == 422


def test_member_cannot_create_user(as_member: TestClient, admin_db) -> None:
    """Test that service permission errors map to 403 with an error code."""
    response = as_member.post(
        "/admin/users",
        json={"name": "Sneaky", "positions": [{"fullName": "Support", "shortName": "SUP"}]},
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ERR_PERMISSION_DENIED"


def test_member_edits_own_work_hours(as_member: TestClient, admin_db) -> None:
    response = as_member.patch(
        "/admin/users/user-member",
        json={"workHours": {"Friday": {"active": True, "start": "08:00", "end": "12:00"}}},
    )

    assert response.status_code == 200
    assert response.json()["workHours"]["Friday"]["start"] == "08:00"


def test_unknown_user_is_404(as_admin: TestClient, admin_db) -> None:
    response = as_admin.get("/admin/users/user-ghost")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ERR_USER_NOT_FOUND"


def test_delete_user_cascades_to_tasks(as_admin: TestClient, admin_db) -> None:
    assert as_admin.delete("/admin/users/user-member").status_code == 204

    assert as_admin.get("/admin/tasks").json() == []


def test_create_task_with_aliases(as_admin: TestClient, admin_db) -> None:
    response = as_admin.post(
        "/admin/tasks",
        json={"title": "Standup", "userId": "user-admin", "days": ["Monday", "Thursday"], "startTime": "9:15"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["userId"] == "user-admin"
    assert body["startTime"] == "09:15"
    assert sorted(body["days"]) == ["Monday", "Thursday"]


def test_create_task_without_schedule(as_admin: TestClient, admin_db) -> None:
    response = as_admin.post("/admin/tasks", json={"title": "Floating", "userId": "user-admin"})

    assert response.status_code == 422


def test_update_task_invalid_merge_is_422(as_admin: TestClient, admin_db) -> None:
    """Test that an update breaking the date window is reported like a request error."""
    response = as_admin.patch("/admin/tasks/task-1", json={"endDate": "2024-06-01"})

    assert response.status_code == 422
    assert response.json()["detail"]


def test_move_task(as_admin: TestClient, admin_db) -> None:
    response = as_admin.post(
        "/admin/tasks/task-1/move",
        json={"userId": "user-admin", "startDate": "2024-06-10", "startTime": "11:00"},
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["userId"], body["startDate"], body["endDate"]) == ("user-admin", "2024-06-10", "2024-06-11")
    assert body["startTime"] == "11:00"


def test_member_changes_own_task_status(as_member: TestClient, admin_db) -> None:
    response = as_member.post("/admin/tasks/task-1/status", json={"status": "in-progress"})

    assert response.status_code == 200
    assert response.json()["status"] == "in-progress"


def test_archive_through_status_is_rejected(as_admin: TestClient, admin_db) -> None:
    response = as_admin.post("/admin/tasks/task-1/status", json={"status": "archived"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "ERR_INVALID_STATUS_TRANSITION"


def test_archive_and_filter(as_admin: TestClient, admin_db) -> None:
    assert as_admin.post("/admin/tasks/task-1/archive").json()["status"] == "archived"

    assert as_admin.get("/admin/tasks", params={"include_archived": False}).json() == []
    assert len(as_admin.get("/admin/tasks").json()) == 1


def test_list_tasks_by_user(as_admin: TestClient, admin_db) -> None:
    tasks = as_admin.get("/admin/tasks", params={"user_id": "user-member"}).json()

    assert [task["id"] for task in tasks] == ["task-1"]


def test_event_crud(as_admin: TestClient, admin_db) -> None:
    created = as_admin.post("/admin/events", json={"title": "Offsite", "start": "2024-06-12", "end": "2024-06-13"})
    assert created.status_code == 201
    event_id = created.json()["id"]
    assert created.json()["allDay"] is True

    updated = as_admin.patch(f"/admin/events/{event_id}", json={"type": "blocker"})
    assert updated.json()["type"] == "blocker"

    assert as_admin.delete(f"/admin/events/{event_id}").status_code == 204
    assert as_admin.get("/admin/events").json() == []


def test_novelty_crud(as_admin: TestClient, admin_db) -> None:
    created = as_admin.post("/admin/novelties", json={"title": "Welcome", "start": "2024-06-03", "end": "2024-06-07"})
    assert created.status_code == 201
    novelty_id = created.json()["id"]
    assert created.json()["updatedAt"] is not None

    updated = as_admin.patch(f"/admin/novelties/{novelty_id}", json={"description": "Say hi to the new team"})
    assert updated.json()["description"] == "Say hi to the new team"

    assert as_admin.delete(f"/admin/novelties/{novelty_id}").status_code == 204
    assert as_admin.get("/admin/novelties").json() == []
