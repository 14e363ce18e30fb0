"""
Centralized user-facing messages for the sneaker service.

Maps SneakerSecure exceptions and operation outcomes to the text shown to the
user, so hosts (the CLI, a UI) present failures consistently.
"""

from ..core.exceptions import (
    MigrationIncompleteError,
    NotFoundError,
    PermissionDeniedError,
    SneakerSecureError,
    StorageIOError,
    ValidationError,
)


class ServiceErrorMessages:
    """Centralized messages for collection and catalog operations."""

    # Collection messages
    COLLECTION_ADDED = "Sneaker added to your collection!"
    COLLECTION_ALREADY_ADDED = "This sneaker is already in your collection."
    COLLECTION_REMOVED = "Sneaker removed from collection"
    COLLECTION_NOT_PRESENT = "This sneaker is not in your collection."
    COLLECTION_CLEARED = "Your collection has been reset"

    # Catalog messages
    CATALOG_UPDATED = "Sneaker details updated successfully!"
    CATALOG_NOT_FOUND = "No sneaker with id '{item_id}' is known."
    CATALOG_REQUIRED_FIELDS = "Name and description are required fields"

    # Generic messages
    STORAGE_RETRY = "Something went wrong saving your data. Please try again."
    VALIDATION_FAILED = "The value for '{field}' is not valid: {reason}"
    PERMISSION_DENIED = "Only administrators can {action}."
    UNEXPECTED = "Unexpected error: {message}"

    @classmethod
    def get_validation_message(cls, error: ValidationError) -> str:
        """Get a field-specific message for a validation failure."""
        if error.field in ("name", "description"):
            return cls.CATALOG_REQUIRED_FIELDS
        return cls.VALIDATION_FAILED.format(
            field=error.field, reason=error.details.get("reason", "")
        )

    @classmethod
    def get_claim_message(cls, added: bool) -> str:
        return cls.COLLECTION_ADDED if added else cls.COLLECTION_ALREADY_ADDED

    @classmethod
    def get_release_message(cls, removed: bool) -> str:
        return cls.COLLECTION_REMOVED if removed else cls.COLLECTION_NOT_PRESENT


def user_message(exc: BaseException) -> str:
    """Translate an exception into the message shown to the user."""
    if isinstance(exc, (StorageIOError, MigrationIncompleteError)):
        return ServiceErrorMessages.STORAGE_RETRY
    if isinstance(exc, ValidationError):
        return ServiceErrorMessages.get_validation_message(exc)
    if isinstance(exc, NotFoundError):
        return ServiceErrorMessages.CATALOG_NOT_FOUND.format(
            item_id=exc.details.get("item_id", "")
        )
    if isinstance(exc, PermissionDeniedError):
        return ServiceErrorMessages.PERMISSION_DENIED.format(
            action=exc.details.get("action", "do that")
        )
    if isinstance(exc, SneakerSecureError):
        return exc.message
    return ServiceErrorMessages.UNEXPECTED.format(message=exc)
