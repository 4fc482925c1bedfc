"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .user import UserProfileSchema, validate_email_domain


class RegisterSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(
        required=True, validate=[validate.Length(max=254), validate_email_domain]
    )
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    repeat_password = fields.String(
        required=True, data_key="repeatPassword", validate=validate.Length(max=128)
    )
    name = fields.String(load_default="User", validate=validate.Length(min=1, max=100))
    gender = fields.String(load_default="undefined", validate=validate.Length(min=1, max=20))
    daily_norm = fields.Float(
        load_default=2000.0, data_key="dailyNorm", validate=validate.Range(min=0)
    )
    weight = fields.Float(load_default=0.0, validate=validate.Range(min=0))
    time_active = fields.Float(
        load_default=0.0, data_key="timeActive", validate=validate.Range(min=0)
    )


class RegisteredSchema(Schema):
    """Response payload for a created account."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class RefreshSchema(Schema):
    """Input payload carrying the refresh token to rotate."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class TokenPairSchema(Schema):
    """Response payload containing both tokens."""

    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")


class LoginResponseSchema(TokenPairSchema):
    """Token pair plus the authenticated user's profile."""

    user = fields.Nested(UserProfileSchema, required=True)


class MessageSchema(Schema):
    message = fields.String(required=True)
