"""Upload event wire format shared by the publisher and the worker."""

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from docworker.messaging.exceptions import MessageDeserializationError


@dataclass(frozen=True)
class UploadEvent:
    """A newly created document whose bytes may or may not be in blob storage."""

    document_id: uuid.UUID
    file_name: str
    storage_path: str | None
    uploaded_at: datetime

    @property
    def has_storage_path(self) -> bool:
        return bool(self.storage_path)


def encode_upload_event(event: UploadEvent) -> bytes:
    """Serialize an event to the camelCase JSON body consumers expect."""
    payload = {
        "documentId": str(event.document_id),
        "fileName": event.file_name,
        "storagePath": event.storage_path,
        "uploadedAtUtc": event.uploaded_at.isoformat(),
    }
    return json.dumps(payload).encode("utf-8")


def decode_upload_event(body: bytes | str) -> UploadEvent:
    """Parse a message body into an UploadEvent.

    Keys are matched case-insensitively so both camelCase and PascalCase
    producers are accepted.

    Raises:
        MessageDeserializationError: if the body is not a valid upload event.
    """
    try:
        text = body.decode("utf-8") if isinstance(body, bytes) else body
        raw = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MessageDeserializationError(f"Message body is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise MessageDeserializationError("Message body must be a JSON object")

    fields = {str(key).lower(): value for key, value in raw.items()}
    return UploadEvent(
        document_id=_parse_document_id(fields.get("documentid")),
        file_name=_parse_file_name(fields.get("filename")),
        storage_path=_parse_storage_path(fields.get("storagepath")),
        uploaded_at=_parse_uploaded_at(fields.get("uploadedatutc")),
    )


def _parse_document_id(raw: Any) -> uuid.UUID:
    if not isinstance(raw, str) or not raw:
        raise MessageDeserializationError("'documentId' must be a non-empty string")
    try:
        return uuid.UUID(raw)
    except ValueError as exc:
        raise MessageDeserializationError(f"'documentId' is not a UUID: {raw!r}") from exc


def _parse_file_name(raw: Any) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise MessageDeserializationError("'fileName' must be a string")
    return raw


def _parse_storage_path(raw: Any) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise MessageDeserializationError("'storagePath' must be a string or null")
    return raw


def _parse_uploaded_at(raw: Any) -> datetime:
    if raw is None:
        return datetime.now(timezone.utc)
    if not isinstance(raw, str):
        raise MessageDeserializationError("'uploadedAtUtc' must be an ISO-8601 string")
    # .NET emits a trailing 'Z' and up to 7 fractional digits
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    value = _trim_fraction(value)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise MessageDeserializationError(f"'uploadedAtUtc' is not a timestamp: {raw!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _trim_fraction(value: str) -> str:
    dot = value.find(".")
    if dot == -1:
        return value
    end = dot + 1
    while end < len(value) and value[end].isdigit():
        end += 1
    digits = value[dot + 1:end][:6].ljust(6, "0")
    return f"{value[:dot]}.{digits}{value[end:]}"
