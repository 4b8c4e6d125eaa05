import io

import boto3
import pytest
from botocore.exceptions import EndpointConnectionError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from docworker.storage.base import parse_storage_path
from docworker.storage.exceptions import (
    BlobNotFoundError,
    BlobStoreError,
    InvalidStoragePathError,
)
from docworker.storage.minio_storage import MinioBlobStore


def _make_client():  # type: ignore[no-untyped-def]
    return boto3.client(
        "s3",
        endpoint_url="http://minio.test:9000",
        aws_access_key_id="minioadmin",
        aws_secret_access_key="minioadmin",
        region_name="us-east-1",
    )


def _body(data: bytes) -> StreamingBody:
    return StreamingBody(io.BytesIO(data), len(data))


class TestParseStoragePath:
    def test_splits_bucket_and_object(self) -> None:
        assert parse_storage_path("documents/report.pdf") == ("documents", "report.pdf")

    def test_object_key_may_contain_slashes(self) -> None:
        assert parse_storage_path("documents/2024/05/report.pdf") == (
            "documents",
            "2024/05/report.pdf",
        )

    @pytest.mark.parametrize(
        "path",
        ["", "   ", "documents", "/report.pdf", "documents/", "docs//file.pdf", "c:/docs/a.pdf"],
    )
    def test_rejects_malformed_paths(self, path: str) -> None:
        with pytest.raises(InvalidStoragePathError):
            parse_storage_path(path)


class TestMinioBlobStore:
    def test_downloads_object_bytes(self) -> None:
        client = _make_client()
        with Stubber(client) as stubber:
            stubber.add_response(
                "get_object",
                {"Body": _body(b"%PDF-1.7 data")},
                {"Bucket": "documents", "Key": "2024/report.pdf"},
            )
            data = MinioBlobStore(client).download("documents/2024/report.pdf")

        assert data == b"%PDF-1.7 data"

    def test_missing_object_raises_not_found(self) -> None:
        client = _make_client()
        with Stubber(client) as stubber:
            stubber.add_client_error(
                "get_object", service_error_code="NoSuchKey", http_status_code=404
            )
            with pytest.raises(BlobNotFoundError):
                MinioBlobStore(client).download("documents/missing.pdf")

    def test_missing_bucket_raises_not_found(self) -> None:
        client = _make_client()
        with Stubber(client) as stubber:
            stubber.add_client_error(
                "get_object", service_error_code="NoSuchBucket", http_status_code=404
            )
            with pytest.raises(FileNotFoundError):
                MinioBlobStore(client).download("nobucket/file.pdf")

    def test_access_denied_raises_store_error(self) -> None:
        client = _make_client()
        with Stubber(client) as stubber:
            stubber.add_client_error(
                "get_object", service_error_code="AccessDenied", http_status_code=403
            )
            with pytest.raises(BlobStoreError, match="AccessDenied"):
                MinioBlobStore(client).download("documents/secret.pdf")

    def test_unreachable_endpoint_raises_store_error(self) -> None:
        class _Unreachable:
            def get_object(self, **kwargs: object) -> None:
                raise EndpointConnectionError(endpoint_url="http://minio.test:9000")

        with pytest.raises(BlobStoreError, match="unreachable"):
            MinioBlobStore(_Unreachable()).download("documents/report.pdf")

    def test_invalid_path_makes_no_call(self) -> None:
        client = _make_client()
        with Stubber(client) as stubber:
            with pytest.raises(InvalidStoragePathError):
                MinioBlobStore(client).download("no-slash")
            stubber.assert_no_pending_responses()
