import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from docworker.config.settings import Settings
from docworker.database.connection import close_pool, get_connection, init_pool

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS documents (
        id uuid PRIMARY KEY,
        file_name text NOT NULL,
        content_type text NOT NULL,
        file_size bigint NOT NULL,
        created_at timestamptz NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS document_metadata (
        id uuid PRIMARY KEY,
        document_id uuid NOT NULL UNIQUE REFERENCES documents (id) ON DELETE CASCADE,
        ocr_text text,
        summary text,
        created_at timestamptz NOT NULL DEFAULT NOW(),
        updated_at timestamptz
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tags (
        id uuid PRIMARY KEY,
        name text,
        created_at timestamptz NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS document_tags (
        document_id uuid NOT NULL REFERENCES documents (id) ON DELETE CASCADE,
        tag_id uuid NOT NULL REFERENCES tags (id) ON DELETE CASCADE,
        PRIMARY KEY (document_id, tag_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS notes (
        id uuid PRIMARY KEY,
        document_id uuid NOT NULL REFERENCES documents (id) ON DELETE CASCADE,
        text text NOT NULL,
        created_at timestamptz NOT NULL DEFAULT NOW()
    )
    """,
)


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "documentmanagement_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            with conn.cursor() as cur:
                for statement in _SCHEMA:
                    cur.execute(statement)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(
    integration_pool: None,
) -> Generator[list[tuple[str, uuid.UUID]], None, None]:
    cleanup: list[tuple[str, uuid.UUID]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "documents":
                    cur.execute("DELETE FROM documents WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "tags":
                    cur.execute("DELETE FROM tags WHERE id = %s", (row_id,))
        conn.commit()


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, uuid.UUID]],
) -> uuid.UUID:
    """A document with an empty metadata row, one tag and one note."""
    document_id = uuid.uuid4()
    tag_id = uuid.uuid4()
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO documents (id, file_name, content_type, file_size)
            VALUES (%s, %s, %s, %s)
            """,
            (document_id, "statement.pdf", "application/pdf", 1024),
        )
        cur.execute(
            "INSERT INTO document_metadata (id, document_id) VALUES (%s, %s)",
            (uuid.uuid4(), document_id),
        )
        cur.execute("INSERT INTO tags (id, name) VALUES (%s, %s)", (tag_id, "bank"))
        cur.execute(
            "INSERT INTO document_tags (document_id, tag_id) VALUES (%s, %s)",
            (document_id, tag_id),
        )
        cur.execute(
            "INSERT INTO notes (id, document_id, text) VALUES (%s, %s, %s)",
            (uuid.uuid4(), document_id, "Check March fees"),
        )
    db_conn.commit()
    integration_cleanup.append(("documents", document_id))
    integration_cleanup.append(("tags", tag_id))
    return document_id


@pytest.fixture
def seed_document_without_metadata(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, uuid.UUID]],
) -> uuid.UUID:
    document_id = uuid.uuid4()
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO documents (id, file_name, content_type, file_size)
            VALUES (%s, %s, %s, %s)
            """,
            (document_id, "orphan.pdf", "application/pdf", 10),
        )
    db_conn.commit()
    integration_cleanup.append(("documents", document_id))
    return document_id
