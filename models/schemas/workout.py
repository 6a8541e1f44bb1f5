from marshmallow import Schema, fields, validate, EXCLUDE

REQUIRED_MSG = "Name, muscle, sets, and repeats are required."


class WorkoutCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, validate=validate.Length(min=1), error_messages={"required": REQUIRED_MSG})
    muscle = fields.String(required=True, validate=validate.Length(min=1), error_messages={"required": REQUIRED_MSG})
    sets = fields.Integer(required=True, validate=validate.Range(min=1), error_messages={"required": REQUIRED_MSG})
    repeats = fields.Integer(required=True, validate=validate.Range(min=1), error_messages={"required": REQUIRED_MSG})
    calories_burned = fields.Integer(allow_none=True, validate=validate.Range(min=0))
    met_value = fields.Float(allow_none=True, validate=validate.Range(min=0))


class WorkoutUpdateSchema(Schema):
    # All optional, but validate if present
    class Meta:
        unknown = EXCLUDE

    name = fields.String(validate=validate.Length(min=1))
    muscle = fields.String(validate=validate.Length(min=1))
    sets = fields.Integer(validate=validate.Range(min=1))
    repeats = fields.Integer(validate=validate.Range(min=1))
    calories_burned = fields.Integer(allow_none=True, validate=validate.Range(min=0))
    met_value = fields.Float(allow_none=True, validate=validate.Range(min=0))


class WorkoutOutSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    muscle = fields.String()
    sets = fields.Integer()
    repeats = fields.Integer()
    calories_burned = fields.Integer(allow_none=True)
    met_value = fields.Float(allow_none=True)
