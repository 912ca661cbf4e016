"""
Custom exception hierarchy for LifeLog.

Provides structured error types for the orchestration layer.
All exceptions inherit from LifeLogError for easy catching.
"""


class LifeLogError(Exception):
    """
    Base exception for all LifeLog errors.
    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize LifeLog error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConfigurationError(LifeLogError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass


class ValidationError(LifeLogError):
    """
    Validation errors.
    Raised when input validation fails or data is invalid.
    """

    pass


class EmptyInputError(ValidationError):
    """
    Raised when an operation receives a memory or query with nothing to work on.
    Callers are expected to prevent this before invoking the core.
    """

    pass


class MissingCredentialError(LifeLogError):
    """
    No usable API key for the selected model.
    Fatal for the call; there is no automatic fallback to another provider.
    """

    pass


class ProviderError(LifeLogError):
    """
    Base exception for model provider operations.
    """

    pass


class TransportError(ProviderError):
    """
    Provider transport failures (network, auth, quota, timeouts).
    Surfaced to the user as a generic "could not complete" message.
    """

    pass


class MalformedProviderOutputError(ProviderError):
    """
    Provider returned output that does not match the requested shape.
    Never surfaced: handles convert it to a neutral fallback.
    """

    pass


class StoreError(LifeLogError):
    """
    Record store operation errors.
    Raised when saving, listing or deleting memories fails.
    """

    pass


class NotFoundError(LifeLogError):
    """
    Resource not found errors.
    Raised when a requested memory doesn't exist.
    """

    pass
