"""
In-process record store, used for tests and the offline demo mode.
"""

from lifelog.core.record_store.base import RecordStore
from lifelog.models.memory import Memory


class InMemoryRecordStore(RecordStore):
    """Dictionary-backed record store. Contents are lost on exit."""

    def __init__(self):
        self._records: dict[str, Memory] = {}

    async def initialize(self) -> None:
        pass

    async def save(self, memory: Memory) -> None:
        self._records[memory.id] = memory

    async def get(self, memory_id: str) -> Memory | None:
        return self._records.get(memory_id)

    async def list_all(self) -> list[Memory]:
        return sorted(self._records.values(), key=lambda m: m.created_at, reverse=True)

    async def delete(self, memory_id: str) -> bool:
        return self._records.pop(memory_id, None) is not None
