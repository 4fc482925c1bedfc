"""Water record schemas."""

from __future__ import annotations

from datetime import datetime

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate

from aquatrack.models.water_record import TIME_FORMAT

TIME_PATTERN = r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"


class CalendarText(validate.Validator):
    """Shape check by regex, then a real calendar check (no month 13, no 25:00)."""

    def __init__(self, pattern: str, fmt: str, example: str) -> None:
        self.shape = validate.Regexp(pattern)
        self.fmt = fmt
        self.error = f"Expected a valid '{example}'."

    def __call__(self, value: str) -> str:
        try:
            self.shape(value)
            datetime.strptime(value, self.fmt)
        except (ValidationError, ValueError):
            raise ValidationError(self.error) from None
        return value


class WaterRecordInSchema(Schema):
    """Payload for creating or replacing a record."""

    class Meta:
        unknown = EXCLUDE

    amount = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))
    time = fields.String(
        load_default=None,
        allow_none=True,
        validate=CalendarText(TIME_PATTERN, TIME_FORMAT, "YYYY-MM-DD HH:MM:SS"),
    )


class DayQuerySchema(Schema):
    """Query string of ``GET /track/day``."""

    class Meta:
        unknown = EXCLUDE

    date = fields.String(
        load_default=None,
        validate=CalendarText(r"^\d{4}-\d{2}-\d{2}$", "%Y-%m-%d", "YYYY-MM-DD"),
    )


class MonthQuerySchema(Schema):
    """Query string of the month endpoints."""

    class Meta:
        unknown = EXCLUDE

    month = fields.String(
        load_default=None,
        validate=CalendarText(r"^\d{4}-\d{2}$", "%Y-%m", "YYYY-MM"),
    )


class WaterRecordSchema(Schema):
    id = fields.Integer(required=True)
    time = fields.String(required=True)
    amount = fields.Integer(required=True)


class DailySchema(Schema):
    """Records of a day plus their total volume."""

    records = fields.List(fields.Nested(WaterRecordSchema), data_key="data")
    water_amount = fields.Integer(data_key="waterAmount")


class DailyStatSchema(Schema):
    date = fields.String(required=True)
    total_amount = fields.Integer(data_key="totalAmount")
    records_count = fields.Integer(data_key="recordsCount")


class MonthlyStatsSchema(Schema):
    """Monthly aggregate response."""

    daily_stats = fields.List(fields.Nested(DailyStatSchema), data_key="dailyStats")
    total_amount = fields.Integer(data_key="totalAmount")
    total_records = fields.Integer(data_key="totalRecords")
    days_tracked = fields.Integer(data_key="daysTracked")
