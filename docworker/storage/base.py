from abc import ABC, abstractmethod

from docworker.storage.exceptions import InvalidStoragePathError


class BaseBlobStore(ABC):
    """Contract for raw file storage backends."""

    @abstractmethod
    def download(self, path: str) -> bytes:
        """Fetch the bytes stored under `path` ("<bucket>/<object>").

        Raises:
            InvalidStoragePathError: if the path is malformed.
            BlobNotFoundError: if the bucket or object does not exist.
            BlobStoreError: on any other storage failure.
        """


def parse_storage_path(path: str) -> tuple[str, str]:
    """Split "<bucket>/<object>" into its parts.

    The path must be colon-free and made of non-empty slash-separated
    segments. The object key may itself contain slashes.

    Raises:
        InvalidStoragePathError: if the path is malformed.
    """
    if not path or not path.strip():
        raise InvalidStoragePathError("Storage path is empty")
    if ":" in path:
        raise InvalidStoragePathError(f"Storage path must not contain ':': {path!r}")
    segments = path.split("/")
    if len(segments) < 2 or any(not segment for segment in segments):
        raise InvalidStoragePathError(
            f"Storage path must look like '<bucket>/<object>': {path!r}"
        )
    bucket, object_name = path.split("/", 1)
    return bucket, object_name
