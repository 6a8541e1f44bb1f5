from datetime import date, datetime, timezone

from marshmallow import fields


def to_calendar_day(raw) -> date:
    """
    Normalize a date or ISO date/datetime string to a calendar day.
    Datetimes carrying an offset are converted to UTC before the time of day
    is dropped, so "2024-03-01T23:30:00-05:00" lands on 2024-03-02.
    """
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, date):
        return raw
    elif isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    else:
        raise ValueError("not a date")

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


class CalendarDay(fields.Field):
    """Date field that accepts a date or a full timestamp and keeps only the day."""

    default_error_messages = {"invalid": "Invalid date."}

    def _deserialize(self, value, attr, data, **kwargs):
        try:
            return to_calendar_day(value)
        except (TypeError, ValueError):
            raise self.make_error("invalid")

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return value.isoformat()
