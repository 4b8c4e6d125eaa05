import uuid

from psycopg.rows import dict_row

from docworker.database.connection import get_connection
from docworker.database.models import DocumentView, MetadataRecord, NoteRecord
from docworker.logging.logger import Log


class DocumentRepository:
    """Database operations for documents and their metadata."""

    def update_with_extraction(self, document_id: uuid.UUID, text: str, summary: str) -> bool:
        """Store OCR text and summary on the document's metadata row.

        Reprocessing overwrites the previous values.

        Returns:
            False if the document has no metadata row, True otherwise.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE document_metadata
                    SET ocr_text = %s,
                        summary = %s,
                        updated_at = NOW()
                    WHERE document_id = %s
                    """,
                    (text, summary, document_id),
                )
                updated = cur.rowcount > 0
            if not updated:
                conn.rollback()
                Log.warning(f"Document or metadata not found for document {document_id}")
                return False
            conn.commit()

        Log.info(
            f"Updated document {document_id} with extracted text ({len(text)} chars) "
            f"and summary ({len(summary)} chars)"
        )
        return True

    def find_with_details(self, document_id: uuid.UUID) -> DocumentView | None:
        """Load a document together with its metadata, tag names and notes."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT d.id, d.file_name, d.content_type, d.file_size, d.created_at,
                           m.document_id AS metadata_document_id,
                           m.ocr_text, m.summary,
                           m.created_at AS metadata_created_at,
                           m.updated_at AS metadata_updated_at
                    FROM documents d
                    LEFT JOIN document_metadata m ON m.document_id = d.id
                    WHERE d.id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()
                if row is None:
                    return None

                cur.execute(
                    """
                    SELECT t.name
                    FROM tags t
                    JOIN document_tags dt ON dt.tag_id = t.id
                    WHERE dt.document_id = %s
                    ORDER BY t.name
                    """,
                    (document_id,),
                )
                tags = [tag_row["name"] for tag_row in cur.fetchall() if tag_row["name"]]

                cur.execute(
                    """
                    SELECT id, text, created_at
                    FROM notes
                    WHERE document_id = %s
                    ORDER BY created_at
                    """,
                    (document_id,),
                )
                notes = [
                    NoteRecord(
                        id=note_row["id"],
                        text=note_row["text"],
                        created_at=note_row["created_at"],
                    )
                    for note_row in cur.fetchall()
                ]

        metadata = None
        if row["metadata_document_id"] is not None:
            metadata = MetadataRecord(
                ocr_text=row["ocr_text"],
                summary=row["summary"],
                created_at=row["metadata_created_at"],
                updated_at=row["metadata_updated_at"],
            )
        return DocumentView(
            id=row["id"],
            file_name=row["file_name"],
            content_type=row["content_type"],
            file_size=row["file_size"],
            created_at=row["created_at"],
            metadata=metadata,
            tags=tags,
            notes=notes,
        )
