from clipnest.core.exceptions import DependencyError


class DocumentNotFoundError(Exception):
    """Raised when a document is looked up by id and does not exist."""


class DuplicateInsertError(Exception):
    """Raised when a write violates a unique index."""


class StorageUnavailableError(DependencyError):
    """Raised when the storage engine cannot be reached."""
