"""
Record store abstraction for memories.

Supported backends:
- SQLite (aiosqlite)
- In-memory (tests, offline demo)
"""
from lifelog.core.record_store.base import RecordStore
from lifelog.core.record_store.memory_store import InMemoryRecordStore
from lifelog.core.record_store.sqlite_store import SQLiteRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
    "SQLiteRecordStore",
]
