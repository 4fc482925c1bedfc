"""Service layer public API.

This package exposes the application services so callers can import from
:mod:`aquatrack.services` without knowing the internal structure.

Re-exports
----------
- :class:`BaseService` (from ``aquatrack.services._shared.base``)
- :class:`AuthService` and its DTOs (from ``aquatrack.services.auth``)
- :class:`IdentityService` and its DTOs (from ``aquatrack.services.identity``)
- :class:`WaterService` and its DTOs (from ``aquatrack.services.water``)
"""

from __future__ import annotations

from ._shared.base import BaseService
from .auth.dto import LoginIn, LoginOut, RefreshIn, RegisteredOut, RegisterIn, TokenPairOut
from .auth.service import AuthService
from .identity.dto import ProfileUpdateIn, UserProfileOut
from .identity.service import IdentityService
from .water.dto import (
    DailyOut,
    DailyStatOut,
    MonthlyStatsOut,
    WaterCreateIn,
    WaterRecordOut,
    WaterUpdateIn,
)
from .water.service import WaterService

__all__ = [
    "BaseService",
    # Auth
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "RegisteredOut",
    "LoginOut",
    "TokenPairOut",
    # Identity
    "IdentityService",
    "ProfileUpdateIn",
    "UserProfileOut",
    # Water
    "WaterService",
    "WaterCreateIn",
    "WaterUpdateIn",
    "WaterRecordOut",
    "DailyOut",
    "DailyStatOut",
    "MonthlyStatsOut",
]
