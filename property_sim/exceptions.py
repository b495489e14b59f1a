"""Custom exception hierarchy for property-sim."""


class PropertySimError(Exception):
    """Base exception for all property-sim errors."""


class EntityNotFoundError(PropertySimError):
    """Raised when a referenced property, listing, mortgage or staff member does not exist."""


class InvalidEntityStateError(PropertySimError):
    """Raised when an entity is in an invalid state for the operation."""


class InsufficientFundsError(InvalidEntityStateError):
    """Raised when the player cannot afford the operation."""


class ConfigurationError(PropertySimError):
    """Raised when configuration is invalid or missing."""


class StorageError(PropertySimError):
    """Raised when reading or writing persisted state fails."""


class MigrationError(StorageError):
    """Raised when a persisted snapshot cannot be migrated to the current version."""
