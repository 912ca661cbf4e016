"""
Provider resolution and polymorphic handles.
"""
from lifelog.core.providers.handles import (
    GenericProviderHandle,
    NativeProviderHandle,
    ProviderHandle,
    parse_structured,
)
from lifelog.core.providers.registry import ProviderRegistry

__all__ = [
    "ProviderHandle",
    "GenericProviderHandle",
    "NativeProviderHandle",
    "ProviderRegistry",
    "parse_structured",
]
