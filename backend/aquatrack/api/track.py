"""Water intake tracking endpoints (always scoped to the caller)."""

from __future__ import annotations

from flask import Blueprint, request

from aquatrack.api.deps import current_user_id, json_body, json_response, require_auth, timing
from aquatrack.schemas import (
    DailySchema,
    DayQuerySchema,
    MessageSchema,
    MonthlyStatsSchema,
    MonthQuerySchema,
    WaterRecordInSchema,
    WaterRecordSchema,
)
from aquatrack.services import WaterCreateIn, WaterService, WaterUpdateIn

bp = Blueprint("track", __name__)

record_in_schema = WaterRecordInSchema()
record_schema = WaterRecordSchema()
record_list_schema = WaterRecordSchema(many=True)
day_query_schema = DayQuerySchema()
month_query_schema = MonthQuerySchema()
daily_schema = DailySchema()
monthly_stats_schema = MonthlyStatsSchema()
message_schema = MessageSchema()


@bp.post("")
@require_auth
@timing
def create_record():
    """Log a drink; ``time`` defaults to the server's local now."""

    data = record_in_schema.load(json_body())
    record = WaterService().create(WaterCreateIn(owner_id=current_user_id(), **data))
    return json_response(record_schema.dump(record), status=201)


@bp.put("/<int:record_id>")
@require_auth
@timing
def update_record(record_id: int):
    """Replace the amount (and optionally the time) of an owned record."""

    data = record_in_schema.load(json_body())
    record = WaterService().update(
        WaterUpdateIn(record_id=record_id, owner_id=current_user_id(), **data)
    )
    return json_response(record_schema.dump(record))


@bp.delete("/<int:record_id>")
@require_auth
@timing
def delete_record(record_id: int):
    """Remove an owned record."""

    WaterService().delete(record_id, current_user_id())
    return json_response(message_schema.dump({"message": "Water record deleted successfully"}))


@bp.get("/day")
@require_auth
@timing
def by_day():
    """Return the records of ``?date=YYYY-MM-DD`` (today by default) and their total."""

    query = day_query_schema.load(request.args)
    daily = WaterService().get_by_day(current_user_id(), query["date"])
    return json_response(daily_schema.dump(daily))


@bp.get("/month")
@require_auth
@timing
def by_month():
    """Return the records of ``?month=YYYY-MM`` (current month by default)."""

    query = month_query_schema.load(request.args)
    records = WaterService().get_by_month(current_user_id(), query["month"])
    return json_response(record_list_schema.dump(records))


@bp.get("/month/stats")
@require_auth
@timing
def month_stats():
    """Return per-day totals and month aggregates."""

    query = month_query_schema.load(request.args)
    stats = WaterService().get_monthly_stats(current_user_id(), query["month"])
    return json_response(monthly_stats_schema.dump(stats))
