"""
Storage package exposing the record stores, their configuration and the
persisted entity models.
"""

from .config import StoreSettings, get_store_settings
from .store import InMemoryStore, JsonFileStore, RecordStore

from . import models as models  # noqa: F401

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "RecordStore",
    "StoreSettings",
    "get_store_settings",
    "models",
]
