"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginResponseSchema,
    LoginSchema,
    MessageSchema,
    RefreshSchema,
    RegisteredSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .user import ProfileUpdateSchema, UserProfileSchema
from .water import (
    DailySchema,
    DailyStatSchema,
    DayQuerySchema,
    MonthlyStatsSchema,
    MonthQuerySchema,
    WaterRecordInSchema,
    WaterRecordSchema,
)

__all__ = [
    "RegisterSchema",
    "RegisteredSchema",
    "LoginSchema",
    "LoginResponseSchema",
    "RefreshSchema",
    "TokenPairSchema",
    "MessageSchema",
    "UserProfileSchema",
    "ProfileUpdateSchema",
    "WaterRecordInSchema",
    "WaterRecordSchema",
    "DayQuerySchema",
    "MonthQuerySchema",
    "DailySchema",
    "DailyStatSchema",
    "MonthlyStatsSchema",
]
