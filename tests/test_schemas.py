from __future__ import annotations

from datetime import date

import pytest
from marshmallow import ValidationError

from models.schemas.attendance import AttendanceSchema
from models.schemas.common import to_calendar_day
from models.schemas.user import UserRegisterSchema, UserUpdateSchema

VALID = {"name": "Alice", "email": "alice@example.com", "password": "secret123", "height": 170, "weight": 65}


def _errors(payload):
    with pytest.raises(ValidationError) as exc:
        UserRegisterSchema().load(payload)
    return exc.value.messages


def test_valid_registration_loads():
    data = UserRegisterSchema().load(VALID)
    assert data["name"] == "Alice"
    assert data["height"] == 170.0


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("name", "Al", "Name must be at least 3 characters long."),
        ("email", "not-an-email", "A valid email is required."),
        ("password", "12345", "Password must be at least 6 characters long."),
        ("height", 400, "Height must be between 50 and 300 cm."),
        ("height", "tall", "Height must be between 50 and 300 cm."),
        ("weight", 5, "Weight must be between 10 and 300 kg."),
    ],
)
def test_registration_rule_messages(field, value, message):
    assert _errors({**VALID, field: value})[field] == [message]


def test_height_and_weight_are_optional():
    payload = {k: v for k, v in VALID.items() if k not in ("height", "weight")}
    data = UserRegisterSchema().load(payload)
    assert "height" not in data


@pytest.mark.parametrize("blank", [0, "", None])
def test_blank_height_and_weight_count_as_not_given(blank):
    data = UserRegisterSchema().load({**VALID, "height": blank, "weight": blank})
    assert "height" not in data
    assert "weight" not in data

    update = UserUpdateSchema().load({"height": blank, "city": "Oslo"})
    assert update == {"city": "Oslo"}


def test_all_failures_reported_together():
    errors = _errors({"name": "Al", "email": "x", "password": "1"})
    assert set(errors) == {"name", "email", "password"}


def test_calendar_day_drops_time_of_day():
    assert to_calendar_day("2024-05-06") == date(2024, 5, 6)
    assert to_calendar_day("2024-05-06T18:45:00") == date(2024, 5, 6)
    assert to_calendar_day("2024-05-06T10:00:00Z") == date(2024, 5, 6)


def test_calendar_day_converts_offsets_to_utc():
    assert to_calendar_day("2024-03-01T23:30:00-05:00") == date(2024, 3, 2)


def test_attendance_status_must_be_enumerated():
    with pytest.raises(ValidationError) as exc:
        AttendanceSchema().load({"date": "2024-05-06", "status": "late"})
    assert exc.value.messages == {"status": ["Invalid status."]}


def test_attendance_requires_date_and_status():
    with pytest.raises(ValidationError) as exc:
        AttendanceSchema().load({})
    assert exc.value.messages["date"] == ["Date and status are required."]
    assert exc.value.messages["status"] == ["Date and status are required."]


def test_attendance_rejects_unparseable_date():
    with pytest.raises(ValidationError) as exc:
        AttendanceSchema().load({"date": "yesterday", "status": "present"})
    assert exc.value.messages == {"date": ["Invalid date."]}
