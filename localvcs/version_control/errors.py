"""Exceptions raised by the version control package."""


class VersionControlError(Exception):
    """Base exception for version control errors."""

    pass


class StorageError(VersionControlError):
    """Raised when the backing store cannot be read or written."""

    pass


class CorruptedStoreError(StorageError):
    """Raised when a stored snapshot is corrupted or invalid."""

    pass
