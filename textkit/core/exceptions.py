"""
Custom exception hierarchy for textkit.

Provides specific exception types for the failure modes of the library:
configuration errors and an unavailable secure random source.
"""


class TextKitError(Exception):
    """Base exception for all textkit errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(TextKitError):
    """Raised when configuration is invalid or missing."""
    pass


class EntropyUnavailableError(TextKitError):
    """Raised when the secure random source cannot supply bytes."""

    def __init__(self, message: str, requested: int = None, details: dict = None):
        """
        Initialize entropy error.

        Args:
            message: Error description.
            requested: Number of random bytes that were requested.
            details: Additional context.
        """
        super().__init__(message, details)
        self.requested = requested


if __name__ == "__main__":
    try:
        raise ConfigurationError("Config file not found", {"path": "/config/config.json"})
    except TextKitError as e:
        print(f"Caught: {e.__class__.__name__}: {e.message}")
        print(f"Details: {e.details}")

    try:
        raise EntropyUnavailableError("No secure random source", requested=16)
    except EntropyUnavailableError as e:
        print(f"Entropy failure for {e.requested} bytes")
