"""Repositories Package - file-backed stores for zones and reasons."""
from bind_manager.repositories.reason_repository import ReasonRepository
from bind_manager.repositories.transaction import StoreTransaction
from bind_manager.repositories.zone_repository import ZoneRepository

__all__ = [
    "ReasonRepository",
    "ZoneRepository",
    "StoreTransaction",
]
