from marshmallow import Schema, fields, validate, EXCLUDE

from models.schemas.common import CalendarDay

ITEM_REQUIRED_MSG = "Name, duration, and date are required for each activity."


class ActivityItemSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, error_messages={"required": ITEM_REQUIRED_MSG})
    duration = fields.Integer(
        required=True, validate=validate.Range(min=1), error_messages={"required": ITEM_REQUIRED_MSG}
    )
    date = CalendarDay(required=True, error_messages={"required": ITEM_REQUIRED_MSG})
    calories_burned = fields.Integer(allow_none=True, validate=validate.Range(min=0))


class ActivityBatchSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    activities = fields.List(
        fields.Nested(ActivityItemSchema),
        required=True,
        validate=validate.Length(min=1, error="Activities array is required and cannot be empty."),
        error_messages={"required": "Activities array is required and cannot be empty."},
    )


class ActivityUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=validate.Length(min=1))
    duration = fields.Integer(validate=validate.Range(min=1))
    date = CalendarDay()
    calories_burned = fields.Integer(validate=validate.Range(min=0))


class ActivityOutSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    duration = fields.Integer()
    date = CalendarDay()
    calories_burned = fields.Integer()
