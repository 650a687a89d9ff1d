from __future__ import annotations


class StoreError(RuntimeError):
    """Base class for record store failures."""


class StorageUnavailable(StoreError):
    """Raised when the database cannot be opened or the schema cannot be created."""


class NotInitialized(StoreError):
    """Raised when the store is used before initialize() succeeded."""


class WriteFailed(StoreError):
    """Raised when a record could not be persisted. Nothing was written."""


class ReadFailed(StoreError):
    """Raised when stored records could not be read back."""
