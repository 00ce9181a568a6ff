"""Connection helper for the knowledge database."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from .config import get_db_path

BUSY_TIMEOUT_SECONDS = 10


@contextmanager
def get_knowledge_db(
    db_path: Optional[str] = None,
    readonly: bool = False,
) -> Generator[sqlite3.Connection, None, None]:
    """Open the knowledge database as one transaction.

    The transaction is committed when the block exits normally and rolled
    back when it raises. A read-only connection never creates the file, so
    searching a database that was never initialized fails instead of
    silently returning nothing.

    Args:
        db_path: Database path override. Uses get_db_path() if None.
        readonly: Open with SQLite's read-only URI mode

    Yields:
        sqlite3.Connection with row_factory set to sqlite3.Row

    Example:
        with get_knowledge_db(readonly=True) as conn:
            conn.execute("SELECT COUNT(*) FROM knowledge_documents")
    """
    path = Path(db_path) if db_path is not None else get_db_path()

    if readonly:
        conn = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True, timeout=BUSY_TIMEOUT_SECONDS)
    else:
        conn = sqlite3.connect(str(path), timeout=BUSY_TIMEOUT_SECONDS)
    conn.row_factory = sqlite3.Row

    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
