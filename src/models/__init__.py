"""SQLAlchemy models."""

from src.models.store_record import StoreRecord

__all__ = [
    "StoreRecord",
]
