from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.storage.base import BaseBlobStore, parse_storage_path
from docworker.storage.exceptions import BlobNotFoundError, BlobStoreError

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NoSuchBucket", "NotFound"})


class MinioBlobStore(BaseBlobStore):
    """Reads document files from MinIO through its S3-compatible API."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "MinioBlobStore":
        client = boto3.client(
            "s3",
            endpoint_url=settings.minio_endpoint_url,
            aws_access_key_id=settings.minio_access_key,
            aws_secret_access_key=settings.minio_secret_key,
            region_name=settings.minio_region,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                retries={"max_attempts": 3, "mode": "standard"},
            ),
        )
        return cls(client)

    def download(self, path: str) -> bytes:
        bucket, object_name = parse_storage_path(path)
        Log.info(f"Downloading '{object_name}' from bucket '{bucket}'")
        try:
            response = self._client.get_object(Bucket=bucket, Key=object_name)
            data: bytes = response["Body"].read()
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise BlobNotFoundError(f"Object not found: {path}") from exc
            raise BlobStoreError(f"Storage error downloading {path}: {code or exc}") from exc
        except BotoCoreError as exc:
            raise BlobStoreError(f"Storage unreachable downloading {path}: {exc}") from exc
        Log.info(f"Downloaded {len(data)} bytes from {path}")
        return data
