"""Database module for parkrank."""

from parkrank.db.connection import get_connection
from parkrank.db.memory import MemoryStore
from parkrank.db.repository import SqliteStore
from parkrank.db.store import RankingStore, StoreSession

__all__ = ["MemoryStore", "RankingStore", "SqliteStore", "StoreSession", "get_connection"]
