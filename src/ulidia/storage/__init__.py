"""
Storage - host-side integration of identifiers with SQLite
"""

from ulidia.storage.sqlite import SQLiteUlidStore, register_sqlite_types

__all__ = ["SQLiteUlidStore", "register_sqlite_types"]
