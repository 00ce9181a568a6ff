"""SQLite-backed knowledge store.

Vectors are stored as numpy .npy BLOBs next to the document row, and
similarity is computed in-process over the rows that pass the SQL filters.
"""

import io
import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

import numpy as np

from prompt_pipeline.db.connection import get_knowledge_db
from prompt_pipeline.db.migrations import COLLECTIONS
from prompt_pipeline.errors import RetrievalError
from prompt_pipeline.models import KnowledgeDocument, RetrievalFilters, RetrievalResult
from prompt_pipeline.retrieval.store import KnowledgeStore, content_hash, make_snippet
from prompt_pipeline.retrieval.vector_store import find_top_k

logger = logging.getLogger(__name__)


def _to_blob(vector: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    np.save(buffer, np.asarray(vector, dtype=np.float32))
    return buffer.getvalue()


def _from_blob(blob: bytes) -> np.ndarray:
    return np.load(io.BytesIO(blob))


class SQLiteKnowledgeStore(KnowledgeStore):
    """Knowledge store persisted in one SQLite table per collection."""

    def __init__(self, db_path: Path, table: str = "knowledge_documents"):
        if table not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {table}")
        self.db_path = db_path
        self.table = table

    def _row_metadata(self, row: sqlite3.Row) -> dict:
        return {
            "title": row["title"],
            "document_type": row["document_type"],
            "target_tools": json.loads(row["target_tools"]),
            "categories": json.loads(row["categories"]),
            "complexity_level": row["complexity_level"],
        }

    def search(
        self,
        vector: np.ndarray,
        filters: RetrievalFilters,
        threshold: float,
        limit: int,
    ) -> list[RetrievalResult]:
        clauses = []
        params: list = []
        if filters.complexity:
            clauses.append("complexity_level = ?")
            params.append(filters.complexity)
        if filters.document_types:
            clauses.append(f"document_type IN ({','.join('?' * len(filters.document_types))})")
            params.extend(filters.document_types)

        sql = f"SELECT id, title, content, document_type, target_tools, categories, complexity_level, embedding FROM {self.table}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY created_at, id"

        try:
            with get_knowledge_db(self.db_path, readonly=True) as conn:
                rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise RetrievalError(f"Knowledge store query failed: {e}", collection=self.table)

        # Array-overlap filters are evaluated in Python on the decoded JSON.
        candidates = [row for row in rows if filters.matches(self._row_metadata(row))]
        if not candidates:
            return []

        matrix = np.vstack([_from_blob(row["embedding"]) for row in candidates])
        hits = find_top_k(np.asarray(vector, dtype=np.float32), matrix, k=limit, min_similarity=threshold)

        return [
            RetrievalResult(
                document_id=candidates[i]["id"],
                score=score,
                snippet=make_snippet(candidates[i]["content"]),
                metadata=self._row_metadata(candidates[i]),
            )
            for i, score in hits
        ]

    def upsert_document(self, doc: KnowledgeDocument, vector: np.ndarray) -> str:
        key = content_hash(doc.content)
        now = datetime.now(timezone.utc).isoformat()

        try:
            with get_knowledge_db(self.db_path) as conn:
                existing = conn.execute(
                    f"SELECT id FROM {self.table} WHERE content_hash = ?", (key,)
                ).fetchone()
                doc_id = existing["id"] if existing else (doc.id or str(uuid.uuid4()))

                conn.execute(
                    f"""
                    INSERT INTO {self.table} (
                        id, title, content, document_type, target_tools, categories,
                        complexity_level, embedding, content_hash, word_count, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        title = excluded.title,
                        content = excluded.content,
                        content_hash = excluded.content_hash,
                        word_count = excluded.word_count,
                        document_type = excluded.document_type,
                        target_tools = excluded.target_tools,
                        categories = excluded.categories,
                        complexity_level = excluded.complexity_level,
                        embedding = excluded.embedding,
                        updated_at = excluded.updated_at
                    """,
                    (
                        doc_id,
                        doc.title,
                        doc.content,
                        doc.document_type,
                        json.dumps(list(doc.target_tools)),
                        json.dumps(list(doc.categories)),
                        doc.complexity_level,
                        _to_blob(vector),
                        key,
                        len(doc.content.split()),
                        now,
                    ),
                )
        except sqlite3.Error as e:
            raise RetrievalError(f"Knowledge store write failed: {e}", collection=self.table)

        doc.id = doc_id
        logger.debug(f"Upserted document {doc_id} into {self.table}")
        return doc_id

    def count(self) -> int:
        try:
            with get_knowledge_db(self.db_path, readonly=True) as conn:
                return conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()[0]
        except sqlite3.Error as e:
            raise RetrievalError(f"Knowledge store count failed: {e}", collection=self.table)
