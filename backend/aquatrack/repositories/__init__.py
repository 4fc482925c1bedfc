"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from aquatrack.repositories.base import BaseRepository, OwnedRepository
from aquatrack.repositories.user import UserRepository, hash_token
from aquatrack.repositories.water_record import DailyTotal, WaterRecordRepository

__all__ = [
    # Base
    "BaseRepository",
    "OwnedRepository",
    # Domain
    "UserRepository",
    "WaterRecordRepository",
    "DailyTotal",
    "hash_token",
]
