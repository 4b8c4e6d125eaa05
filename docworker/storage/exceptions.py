class StorageError(Exception):
    """Base exception for blob store errors."""


class InvalidStoragePathError(StorageError, ValueError):
    """Raised when a storage path is not of the form '<bucket>/<object>'."""


class BlobNotFoundError(StorageError, FileNotFoundError):
    """Raised when the bucket or object does not exist."""


class BlobStoreError(StorageError):
    """Raised when the blob store cannot be reached or rejects the request."""
