"""
Base interface for memory record storage.

The orchestration layer treats storage as an opaque async key-value store.
"""

from abc import ABC, abstractmethod

from lifelog.models.memory import Memory


class RecordStore(ABC):
    """Abstract base class for memory record stores."""

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the store (create tables/schema)."""
        pass

    @abstractmethod
    async def save(self, memory: Memory) -> None:
        """
        Insert or replace a memory.

        Args:
            memory: Fully built memory (id and content/media final)
        """
        pass

    @abstractmethod
    async def get(self, memory_id: str) -> Memory | None:
        """
        Retrieve a memory by ID.

        Args:
            memory_id: Memory identifier

        Returns:
            Memory or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Memory]:
        """
        List every memory, newest first.

        Returns:
            Memories ordered by created_at descending
        """
        pass

    @abstractmethod
    async def delete(self, memory_id: str) -> bool:
        """
        Delete a memory and its media.

        Args:
            memory_id: Memory identifier

        Returns:
            True if a memory was deleted
        """
        pass

    async def close(self) -> None:
        """Release resources. Optional to override."""
        pass
