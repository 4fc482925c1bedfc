"""User profile schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates


def validate_email_domain(value: str) -> None:
    """Reject dotless domains (``user@localhost``), which ``User`` refuses to store."""
    if "." not in value.rpartition("@")[2]:
        raise ValidationError("Email domain must contain a dot.")


class UserProfileSchema(Schema):
    """Public representation of a user (never includes hashes or tokens)."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    name = fields.String(required=True)
    gender = fields.String(required=True)
    daily_norm = fields.Float(required=True, data_key="dailyNorm")
    weight = fields.Float(required=True)
    time_active = fields.Float(required=True, data_key="timeActive")
    avatar_url = fields.String(allow_none=True, data_key="avatarURL")


class ProfileUpdateSchema(Schema):
    """Partial profile update.

    Every field is optional; ``null`` and empty strings are accepted and mean
    "leave unchanged".
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.String(allow_none=True, validate=validate.Length(max=100))
    gender = fields.String(allow_none=True, validate=validate.Length(max=20))
    daily_norm = fields.Float(
        allow_none=True, data_key="dailyNorm", validate=validate.Range(min=0)
    )
    weight = fields.Float(allow_none=True, validate=validate.Range(min=0))
    time_active = fields.Float(
        allow_none=True, data_key="timeActive", validate=validate.Range(min=0)
    )
    email = fields.String(allow_none=True, validate=validate.Length(max=254))
    avatar_url = fields.String(
        allow_none=True, data_key="avatarURL", validate=validate.Length(max=2048)
    )

    @validates("email")
    def _validate_email(self, value: str | None, **kwargs: Any) -> None:
        if value:
            validate.Email()(value)
            validate_email_domain(value)
