from marshmallow import Schema, fields, validate, EXCLUDE

CREATE_MSG = "Plan name and an array of workout IDs are required."
UPDATE_MSG = "Plan name, new plan name, and an array of workout IDs are required."


class WorkoutPlanCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    planname = fields.String(required=True, validate=validate.Length(min=1, error=CREATE_MSG),
                             error_messages={"required": CREATE_MSG})
    workout_ids = fields.List(
        fields.Integer(),
        required=True,
        validate=validate.Length(min=1, error=CREATE_MSG),
        error_messages={"required": CREATE_MSG},
    )


class WorkoutPlanUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    planname = fields.String(required=True, validate=validate.Length(min=1, error=UPDATE_MSG),
                             error_messages={"required": UPDATE_MSG})
    workout_ids = fields.List(
        fields.Integer(),
        required=True,
        validate=validate.Length(min=1, error=UPDATE_MSG),
        error_messages={"required": UPDATE_MSG},
    )
