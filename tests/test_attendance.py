from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import false
from sqlalchemy.exc import IntegrityError

from conftest import bearer, login, register
from fitness_api import attendance as attendance_views
from models import storage
from models.attendance import AttendanceRecord, AttendanceStatus


def records(client, headers):
    res = client.get("/user/attendance", headers=headers)
    assert res.status_code == 200
    return res.get_json()


def test_empty_ledger_lists_as_empty_array(client, user_headers):
    assert records(client, user_headers) == []


def test_append_then_list(client, user_headers):
    res = client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-06", "status": "present"})
    assert res.status_code == 201
    assert res.get_json()["message"] == "Attendance added successfully"
    assert records(client, user_headers) == [{"date": "2024-05-06", "status": "present"}]


def test_time_of_day_is_stripped(client, user_headers):
    client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-06T17:30:00", "status": "absent"})
    assert records(client, user_headers) == [{"date": "2024-05-06", "status": "absent"}]


def test_duplicate_date_is_rejected_once_stored(app, client, user_headers):
    body = {"date": "2024-05-06", "status": "present"}
    assert client.post("/user/attendance", headers=user_headers, json=body).status_code == 201

    again = client.post(
        "/user/attendance", headers=user_headers, json={"date": "2024-05-06T09:00:00", "status": "absent"}
    )
    assert again.status_code == 400
    assert again.get_json()["message"] == "Attendance for this day is already logged"

    assert records(client, user_headers) == [{"date": "2024-05-06", "status": "present"}]
    with app.app_context():
        assert storage.count(AttendanceRecord) == 1


def test_invalid_status_is_rejected(client, user_headers):
    res = client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-06", "status": "late"})
    assert res.status_code == 400
    assert res.get_json()["details"]["status"] == ["Invalid status."]
    assert records(client, user_headers) == []


def test_missing_fields_are_rejected(client, user_headers):
    res = client.post("/user/attendance", headers=user_headers, json={"status": "present"})
    assert res.status_code == 400
    assert res.get_json()["details"]["date"] == ["Date and status are required."]


def test_update_changes_only_the_matching_day(client, user_headers):
    for day, status in (("2024-05-01", "present"), ("2024-05-02", "present"), ("2024-05-03", "absent")):
        client.post("/user/attendance", headers=user_headers, json={"date": day, "status": status})

    res = client.put("/user/attendance", headers=user_headers, json={"date": "2024-05-02", "status": "absent"})
    assert res.status_code == 200

    assert records(client, user_headers) == [
        {"date": "2024-05-01", "status": "present"},
        {"date": "2024-05-02", "status": "absent"},
        {"date": "2024-05-03", "status": "absent"},
    ]


def test_update_unknown_day_is_404_and_changes_nothing(client, user_headers):
    client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-01", "status": "present"})

    res = client.put("/user/attendance", headers=user_headers, json={"date": "2024-06-01", "status": "absent"})
    assert res.status_code == 404
    assert res.get_json()["message"] == "No attendance record found for this date"
    assert records(client, user_headers) == [{"date": "2024-05-01", "status": "present"}]


def test_delete_removes_exactly_one_record(client, user_headers):
    for day in ("2024-05-01", "2024-05-02", "2024-05-03"):
        client.post("/user/attendance", headers=user_headers, json={"date": day, "status": "present"})

    res = client.delete("/user/attendance", headers=user_headers, json={"date": "2024-05-02"})
    assert res.status_code == 204
    assert [r["date"] for r in records(client, user_headers)] == ["2024-05-01", "2024-05-03"]


def test_delete_unknown_day_is_404_and_changes_nothing(client, user_headers):
    client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-01", "status": "present"})

    res = client.delete("/user/attendance", headers=user_headers, json={"date": "2024-05-09"})
    assert res.status_code == 404
    assert len(records(client, user_headers)) == 1


def test_delete_requires_date(client, user_headers):
    res = client.delete("/user/attendance", headers=user_headers, json={})
    assert res.status_code == 400
    assert res.get_json()["details"]["date"] == ["Date is required."]


def test_ledgers_are_per_user(client, user_headers):
    client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-01", "status": "present"})

    register(client, name="Bobby", email="bob@example.com")
    bob = bearer(login(client, email="bob@example.com").get_json()["accessToken"])

    assert records(client, bob) == []
    # Same day is free in another user's ledger
    assert client.post("/user/attendance", headers=bob, json={"date": "2024-05-01", "status": "absent"}).status_code == 201
    # And Bob cannot touch Alice's record
    assert client.delete("/user/attendance", headers=bob, json={"date": "2024-05-01"}).status_code == 204
    assert records(client, user_headers) == [{"date": "2024-05-01", "status": "present"}]


def test_attendance_requires_authentication(client):
    assert client.get("/user/attendance").status_code == 401


def test_store_enforces_one_record_per_day(app, client, user_headers):
    user_id = client.get("/user/me", headers=user_headers).get_json()["id"]
    with app.app_context():
        storage.new(AttendanceRecord(user_id=user_id, date=date(2024, 5, 1), status=AttendanceStatus.PRESENT))
        storage.new(AttendanceRecord(user_id=user_id, date=date(2024, 5, 1), status=AttendanceStatus.ABSENT))
        with pytest.raises(IntegrityError):
            storage.save()
        assert storage.count(AttendanceRecord) == 0


def test_append_after_account_deleted_is_404(client, user_headers):
    user_id = client.get("/user/me", headers=user_headers).get_json()["id"]
    assert client.delete(f"/user/{user_id}", headers=user_headers).status_code == 204

    # The access token is still valid, the account is not
    res = client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-01", "status": "present"})
    assert res.status_code == 404
    assert res.get_json()["message"] == "User not found"


def test_append_losing_race_is_rejected_by_store(client, user_headers, monkeypatch):
    real_ledger = attendance_views._ledger
    raced = []

    def ledger_with_concurrent_insert(user_id):
        if not raced:
            # Another request commits the same day right after our duplicate check
            raced.append(user_id)
            storage.new(AttendanceRecord(user_id=user_id, date=date(2024, 5, 1), status=AttendanceStatus.ABSENT))
            storage.save()
            return real_ledger(user_id).filter(false())
        return real_ledger(user_id)

    monkeypatch.setattr(attendance_views, "_ledger", ledger_with_concurrent_insert)

    res = client.post("/user/attendance", headers=user_headers, json={"date": "2024-05-01", "status": "present"})
    assert raced
    assert res.status_code == 400
    assert res.get_json()["message"] == attendance_views.DUPLICATE_MSG
    assert records(client, user_headers) == [{"date": "2024-05-01", "status": "absent"}]
