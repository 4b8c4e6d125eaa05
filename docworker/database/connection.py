from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from docworker.config.settings import Settings
from docworker.logging.logger import Log

_pool: ConnectionPool | None = None


def init_pool(settings: Settings) -> None:
    """Open the global connection pool and wait for its first connections.

    Raises:
        psycopg_pool.PoolTimeout: if the database is not reachable in time.
    """
    global _pool  # noqa: PLW0603
    conninfo = make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        connect_timeout=settings.db_connect_timeout_seconds,
    )
    pool = ConnectionPool(
        conninfo,
        min_size=settings.db_pool_min_size,
        max_size=max(settings.db_pool_min_size, settings.db_pool_max_size),
        name="docworker",
        check=ConnectionPool.check_connection,
        open=False,
    )
    pool.open(wait=True, timeout=settings.db_connect_timeout_seconds)
    _pool = pool
    Log.info(
        f"Connected to database '{settings.db_database}' on "
        f"{settings.db_host}:{settings.db_port}"
    )


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
