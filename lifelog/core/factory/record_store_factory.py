"""
Factory for creating record store backends.
"""

from lifelog.config import StoreConfig
from lifelog.core.record_store.base import RecordStore
from lifelog.core.record_store.memory_store import InMemoryRecordStore
from lifelog.core.record_store.sqlite_store import SQLiteRecordStore
from lifelog.utils.exceptions import ConfigurationError


class RecordStoreFactory:
    """Factory for creating record stores from configuration."""

    @staticmethod
    def create(config: StoreConfig) -> RecordStore:
        """
        Create record store from configuration.

        Args:
            config: Store configuration

        Returns:
            Record store instance

        Raises:
            ConfigurationError: If backend is not supported
        """
        if config.backend == "sqlite":
            return SQLiteRecordStore(db_path=config.path)
        elif config.backend == "memory":
            return InMemoryRecordStore()
        else:
            raise ConfigurationError(f"Unsupported store backend: {config.backend}")
