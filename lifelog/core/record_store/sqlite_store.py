"""
SQLite record store implementation using aiosqlite.
"""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from lifelog.core.record_store.base import RecordStore
from lifelog.models.memory import AIAnalysis, MediaType, Memory
from lifelog.utils.exceptions import StoreError
from lifelog.utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = (
    "id, created_at, content, media_type, media_blob, media_mime_type, ai_analysis, location"
)


class SQLiteRecordStore(RecordStore):
    """
    SQLite-based store for memories.

    Features:
    - Media stored inline as BLOBs
    - Analysis stored as JSON
    - WAL journal for concurrent readers
    """

    def __init__(self, db_path: str = "data/lifelog.db"):
        """
        Initialize SQLite record store.

        Args:
            db_path: Path to SQLite database file (":memory:" for a private in-memory db)
        """
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        """Establish connection to SQLite."""
        if self.connection is None:
            self.connection = await aiosqlite.connect(self.db_path)
            await self.connection.execute("PRAGMA journal_mode = WAL")
            await self.connection.commit()

    async def initialize(self) -> None:
        """Initialize database schema."""
        await self.connect()

        await self.connection.execute(
            """
            CREATE TABLE IF NOT EXISTS memories (
                id TEXT PRIMARY KEY,
                created_at TEXT NOT NULL,
                content TEXT NOT NULL DEFAULT '',
                media_type TEXT NOT NULL,
                media_blob BLOB,
                media_mime_type TEXT,
                ai_analysis TEXT,
                location TEXT
            )
        """
        )
        await self.connection.execute(
            "CREATE INDEX IF NOT EXISTS idx_memories_created ON memories(created_at)"
        )
        await self.connection.commit()

    async def save(self, memory: Memory) -> None:
        """Insert or replace a memory."""
        await self.connect()

        analysis_json = memory.ai_analysis.model_dump_json() if memory.ai_analysis else None

        try:
            await self.connection.execute(
                f"INSERT OR REPLACE INTO memories ({COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    memory.id,
                    memory.created_at.isoformat(),
                    memory.content,
                    memory.media_type.value,
                    memory.media_blob,
                    memory.media_mime_type,
                    analysis_json,
                    memory.location,
                ),
            )
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error(f"Failed to save memory {memory.id}: {e}")
            raise StoreError(f"Failed to save memory: {e}", context={"id": memory.id}) from e

    async def get(self, memory_id: str) -> Memory | None:
        """Retrieve a memory by ID."""
        await self.connect()

        try:
            cursor = await self.connection.execute(
                f"SELECT {COLUMNS} FROM memories WHERE id = ?", (memory_id,)
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            logger.error(f"Failed to get memory {memory_id}: {e}")
            raise StoreError(f"Failed to get memory: {e}", context={"id": memory_id}) from e

        if not row:
            return None

        return self._row_to_memory(row)

    async def list_all(self) -> list[Memory]:
        """List every memory, newest first."""
        await self.connect()

        try:
            cursor = await self.connection.execute(
                f"SELECT {COLUMNS} FROM memories ORDER BY created_at DESC"
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error(f"Failed to list memories: {e}")
            raise StoreError(f"Failed to list memories: {e}") from e

        return [self._row_to_memory(row) for row in rows]

    async def delete(self, memory_id: str) -> bool:
        """Delete a memory and its media."""
        await self.connect()

        try:
            cursor = await self.connection.execute(
                "DELETE FROM memories WHERE id = ?", (memory_id,)
            )
            await self.connection.commit()
        except aiosqlite.Error as e:
            logger.error(f"Failed to delete memory {memory_id}: {e}")
            raise StoreError(f"Failed to delete memory: {e}", context={"id": memory_id}) from e

        return cursor.rowcount > 0

    async def close(self) -> None:
        """Close the connection."""
        if self.connection is not None:
            await self.connection.close()
            self.connection = None

    def _row_to_memory(self, row: tuple) -> Memory:
        """Convert database row to Memory object."""
        # JSONDecodeError and pydantic ValidationError are both ValueErrors
        try:
            analysis = AIAnalysis(**json.loads(row[6])) if row[6] else None

            return Memory(
                id=row[0],
                created_at=datetime.fromisoformat(row[1]),
                content=row[2] or "",
                media_type=MediaType(row[3]),
                media_blob=bytes(row[4]) if row[4] is not None else None,
                media_mime_type=row[5],
                ai_analysis=analysis,
                location=row[7],
            )
        except (ValueError, TypeError) as e:
            logger.error(f"Corrupt memory row {row[0]}: {e}")
            raise StoreError(f"Corrupt memory row: {e}", context={"id": row[0]}) from e
