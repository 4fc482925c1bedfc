from aquatrack.models.user import User
from aquatrack.models.water_record import WaterRecord

__all__ = [
    "User",
    "WaterRecord",
]
