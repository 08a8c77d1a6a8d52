"""
db/connection.py
----------------
Connection factory for the PostgreSQL database.

Every repository call opens its own short-lived connection with
get_connection() and hands it back with release_connection() in a
`finally` block. There is no application-level pool: each request's
connection scope is independent of every other.
"""

import psycopg2

from config import DATABASE_URL, DB_CONNECT_TIMEOUT
from utils.errors import StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


def get_connection():
    """
    Open a new database connection.

    Returns:
        A psycopg2 connection object (autocommit off).

    Raises:
        StorageError: If the database is unreachable.
    """
    try:
        return psycopg2.connect(DATABASE_URL, connect_timeout=DB_CONNECT_TIMEOUT)
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise StorageError(str(e)) from e


def release_connection(conn) -> None:
    """
    Close a connection obtained from get_connection().

    Args:
        conn: The psycopg2 connection to release.
    """
    if conn is not None and not conn.closed:
        conn.close()


def check_connection() -> bool:
    """Return True if a trivial query succeeds against the database."""
    try:
        conn = get_connection()
    except StorageError:
        return False
    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            return cur.fetchone()[0] == 1
    except psycopg2.Error as e:
        logger.error(f"Database health check failed: {e}")
        return False
    finally:
        release_connection(conn)
