from __future__ import annotations

import pytest

from conftest import bearer, login, register


@pytest.fixture
def workouts(client, admin_headers):
    for body in (
        {"name": "Run", "muscle": "legs", "sets": 1, "repeats": 1, "calories_burned": 300},
        {"name": "Plank", "muscle": "core", "sets": 3, "repeats": 1},
    ):
        assert client.post("/workout", headers=admin_headers, json=body).status_code == 201


def log(client, headers, *items):
    return client.post("/activity", headers=headers, json={"activities": list(items)})


def test_log_batch_and_list(client, user_headers, workouts):
    res = log(
        client,
        user_headers,
        {"name": "Run", "duration": 30, "date": "2024-05-01"},
        {"name": "Plank", "duration": 5, "date": "2024-05-02", "calories_burned": 40},
    )
    assert res.status_code == 201

    rows = client.get("/activity", headers=user_headers).get_json()
    assert [(r["name"], r["calories_burned"]) for r in rows] == [("Run", 300), ("Plank", 40)]
    assert rows[0]["date"] == "2024-05-01"


def test_batch_with_unknown_workout_stores_nothing(client, user_headers, workouts):
    res = log(
        client,
        user_headers,
        {"name": "Run", "duration": 30, "date": "2024-05-01"},
        {"name": "Juggling", "duration": 10, "date": "2024-05-01"},
    )
    assert res.status_code == 400
    assert res.get_json()["message"] == 'No matching workout found for "Juggling".'
    assert client.get("/activity", headers=user_headers).get_json() == []


def test_batch_must_not_be_empty(client, user_headers):
    res = client.post("/activity", headers=user_headers, json={"activities": []})
    assert res.status_code == 400


def test_batch_items_need_required_fields(client, user_headers, workouts):
    res = log(client, user_headers, {"name": "Run"})
    assert res.status_code == 400


def test_owner_can_read_update_and_delete(client, user_headers, workouts):
    log(client, user_headers, {"name": "Run", "duration": 30, "date": "2024-05-01"})
    activity_id = client.get("/activity", headers=user_headers).get_json()[0]["id"]

    assert client.get(f"/activity/{activity_id}", headers=user_headers).get_json()["duration"] == 30
    assert client.put(f"/activity/{activity_id}", headers=user_headers, json={"duration": 40}).status_code == 200
    assert client.get(f"/activity/{activity_id}", headers=user_headers).get_json()["duration"] == 40
    assert client.delete(f"/activity/{activity_id}", headers=user_headers).status_code == 204
    assert client.get(f"/activity/{activity_id}", headers=user_headers).status_code == 404


def test_other_users_cannot_touch_activity(client, user_headers, workouts):
    log(client, user_headers, {"name": "Run", "duration": 30, "date": "2024-05-01"})
    activity_id = client.get("/activity", headers=user_headers).get_json()[0]["id"]

    register(client, name="Bobby", email="bob@example.com")
    bob = bearer(login(client, email="bob@example.com").get_json()["accessToken"])

    assert client.get(f"/activity/{activity_id}", headers=bob).status_code == 403
    assert client.put(f"/activity/{activity_id}", headers=bob, json={"duration": 1}).status_code == 403
    assert client.delete(f"/activity/{activity_id}", headers=bob).status_code == 403
    assert client.get("/activity", headers=bob).get_json() == []
