"""
Factory modules for creating LifeLog components.

Provides factories for provider transports and record stores.
"""

from lifelog.core.factory.record_store_factory import RecordStoreFactory
from lifelog.core.factory.transport_factory import TransportFactory

__all__ = [
    "TransportFactory",
    "RecordStoreFactory",
]
