"""Database migrations for the knowledge corpus tables."""

import sqlite3
from pathlib import Path

COLLECTIONS = ("knowledge_documents", "prompt_templates")

_DOCUMENT_TABLE = """
    CREATE TABLE IF NOT EXISTS {table} (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        content TEXT NOT NULL,
        document_type TEXT NOT NULL,
        target_tools JSON NOT NULL,
        categories JSON NOT NULL,
        complexity_level TEXT NOT NULL,
        embedding BLOB NOT NULL,
        content_hash TEXT NOT NULL UNIQUE,
        word_count INTEGER NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
        updated_at TIMESTAMP
    )
"""

MIGRATIONS = [_DOCUMENT_TABLE.format(table=table) for table in COLLECTIONS]

INDEXES = [
    f"CREATE INDEX IF NOT EXISTS idx_{table}_complexity ON {table}(complexity_level)"
    for table in COLLECTIONS
] + [
    f"CREATE INDEX IF NOT EXISTS idx_{table}_type ON {table}(document_type)"
    for table in COLLECTIONS
]


def run_migrations(db_path: Path) -> None:
    """Create all tables and indexes (idempotent)."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    try:
        cursor = conn.cursor()
        for statement in MIGRATIONS + INDEXES:
            cursor.execute(statement)
        conn.commit()
    finally:
        conn.close()
