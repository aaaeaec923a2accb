"""Data models for the SoilReport users API."""

from soilreport.models.user import UserRecord

__all__ = [
    "UserRecord",
]
