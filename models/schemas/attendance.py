from marshmallow import Schema, fields, validate, EXCLUDE

from models.attendance import AttendanceStatus
from models.schemas.common import CalendarDay

REQUIRED_MSG = "Date and status are required."
STATUSES = [s.value for s in AttendanceStatus]


class AttendanceSchema(Schema):
    """Body of POST and PUT /user/attendance."""

    class Meta:
        unknown = EXCLUDE

    date = CalendarDay(required=True, error_messages={"required": REQUIRED_MSG, "null": REQUIRED_MSG})
    status = fields.String(
        required=True,
        validate=validate.OneOf(STATUSES, error="Invalid status."),
        error_messages={"required": REQUIRED_MSG, "null": REQUIRED_MSG},
    )


class AttendanceDateSchema(Schema):
    """Body of DELETE /user/attendance."""

    class Meta:
        unknown = EXCLUDE

    date = CalendarDay(required=True, error_messages={"required": "Date is required.", "null": "Date is required."})


class AttendanceOutSchema(Schema):
    date = CalendarDay()
    status = fields.Function(lambda rec: AttendanceStatus(rec.status).value)
