import re

from marshmallow import Schema, fields, validate, validates, pre_load, ValidationError, EXCLUDE

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

NAME_MSG = "Name must be at least 3 characters long."
EMAIL_MSG = "A valid email is required."
PASSWORD_MSG = "Password must be at least 6 characters long."
HEIGHT_MSG = "Height must be between 50 and 300 cm."
WEIGHT_MSG = "Weight must be between 10 and 300 kg."


def _check_email(value):
    if not isinstance(value, str) or not EMAIL_RE.search(value):
        raise ValidationError(EMAIL_MSG)


def _drop_blank_measurements(data):
    """0, empty string and null mean 'not given' for height and weight."""
    if not isinstance(data, dict):
        return data
    return {k: v for k, v in data.items() if k not in ("height", "weight") or v}


class UserRegisterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String(required=True, error_messages={"required": NAME_MSG, "null": NAME_MSG})
    email = fields.String(required=True, error_messages={"required": EMAIL_MSG, "null": EMAIL_MSG})
    password = fields.String(
        required=True, load_only=True, error_messages={"required": PASSWORD_MSG, "null": PASSWORD_MSG}
    )
    height = fields.Float(
        allow_none=True,
        validate=validate.Range(min=50, max=300, error=HEIGHT_MSG),
        error_messages={"invalid": HEIGHT_MSG},
    )
    weight = fields.Float(
        allow_none=True,
        validate=validate.Range(min=10, max=300, error=WEIGHT_MSG),
        error_messages={"invalid": WEIGHT_MSG},
    )

    @pre_load
    def skip_blank_measurements(self, data, **kwargs):
        return _drop_blank_measurements(data)

    @validates("name")
    def validate_name(self, value, **kwargs):
        if len(value) < 3:
            raise ValidationError(NAME_MSG)

    @validates("email")
    def validate_email(self, value, **kwargs):
        _check_email(value)

    @validates("password")
    def validate_password(self, value, **kwargs):
        if len(value) < 6:
            raise ValidationError(PASSWORD_MSG)


class UserLoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class UserUpdateSchema(Schema):
    """Profile fields editable through PUT /user/<id>; all optional."""

    class Meta:
        unknown = EXCLUDE

    name = fields.String()
    surname = fields.String(allow_none=True)
    phone = fields.String(allow_none=True)
    address = fields.String(allow_none=True)
    city = fields.String(allow_none=True)
    country = fields.String(allow_none=True)
    height = fields.Float(
        allow_none=True,
        validate=validate.Range(min=50, max=300, error=HEIGHT_MSG),
        error_messages={"invalid": HEIGHT_MSG},
    )
    weight = fields.Float(
        allow_none=True,
        validate=validate.Range(min=10, max=300, error=WEIGHT_MSG),
        error_messages={"invalid": WEIGHT_MSG},
    )

    @pre_load
    def skip_blank_measurements(self, data, **kwargs):
        return _drop_blank_measurements(data)

    @validates("name")
    def validate_name(self, value, **kwargs):
        if len(value) < 3:
            raise ValidationError(NAME_MSG)


class EmailUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.String(required=True, error_messages={"required": "Email is required", "null": "Email is required"})

    @validates("email")
    def validate_email(self, value, **kwargs):
        _check_email(value)


class PasswordUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    password = fields.String(
        required=True,
        load_only=True,
        error_messages={"required": "Password is required", "null": "Password is required"},
    )

    @validates("password")
    def validate_password(self, value, **kwargs):
        if len(value) < 6:
            raise ValidationError(PASSWORD_MSG)


class UserOutSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    surname = fields.String(allow_none=True)
    email = fields.String()
    phone = fields.String(allow_none=True)
    address = fields.String(allow_none=True)
    city = fields.String(allow_none=True)
    country = fields.String(allow_none=True)
    height = fields.Float(allow_none=True)
    weight = fields.Float(allow_none=True)
    isAdmin = fields.Boolean(attribute="is_admin")


class UserListOutSchema(Schema):
    id = fields.Integer()
    name = fields.String()
    email = fields.String()
    height = fields.Float(allow_none=True)
    weight = fields.Float(allow_none=True)
