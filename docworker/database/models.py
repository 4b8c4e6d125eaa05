import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class MetadataRecord:
    """Represents a row from the document_metadata table."""

    ocr_text: str | None = None
    summary: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class NoteRecord:
    """Represents a row from the notes table."""

    id: uuid.UUID
    text: str
    created_at: datetime | None = None


@dataclass
class DocumentView:
    """A document with its metadata, tag names and notes, ready for indexing."""

    id: uuid.UUID
    file_name: str
    content_type: str
    file_size: int
    created_at: datetime | None = None
    metadata: MetadataRecord | None = None
    tags: list[str] = field(default_factory=list)
    notes: list[NoteRecord] = field(default_factory=list)

    def to_index_payload(self) -> dict[str, Any]:
        """JSON body for the search index, keyed the way the REST API exposes documents."""
        metadata = self.metadata or MetadataRecord()
        return {
            "id": str(self.id),
            "fileName": self.file_name,
            "contentType": self.content_type,
            "fileSize": self.file_size,
            "createdAt": _iso(self.created_at),
            "tags": list(self.tags),
            "notes": [
                {
                    "id": str(note.id),
                    "text": note.text,
                    "createdAt": _iso(note.created_at),
                    "documentId": str(self.id),
                }
                for note in self.notes
            ],
            "metadata": {
                "ocrText": metadata.ocr_text,
                "summary": metadata.summary,
                "createdAt": _iso(metadata.created_at),
                "updatedAt": _iso(metadata.updated_at),
            },
        }
