"""Utility modules for LifeLog."""

from lifelog.utils.exceptions import (
    ConfigurationError,
    EmptyInputError,
    LifeLogError,
    MalformedProviderOutputError,
    MissingCredentialError,
    NotFoundError,
    ProviderError,
    StoreError,
    TransportError,
    ValidationError,
)
from lifelog.utils.id_generator import generate_memory_id, mask_secret
from lifelog.utils.logger import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    # ID Generators
    "generate_memory_id",
    "mask_secret",
    # Exceptions
    "LifeLogError",
    "ConfigurationError",
    "ValidationError",
    "EmptyInputError",
    "MissingCredentialError",
    "ProviderError",
    "TransportError",
    "MalformedProviderOutputError",
    "StoreError",
    "NotFoundError",
]
