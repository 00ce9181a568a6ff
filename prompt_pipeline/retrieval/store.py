"""Knowledge store interface and in-memory implementation."""

import hashlib
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from prompt_pipeline.models import KnowledgeDocument, RetrievalFilters, RetrievalResult
from prompt_pipeline.retrieval.vector_store import find_top_k

logger = logging.getLogger(__name__)

SNIPPET_CHARS = 300


def content_hash(content: str) -> str:
    """SHA-256 hash of document content, used for duplicate detection."""
    return hashlib.sha256(content.strip().encode("utf-8")).hexdigest()


def make_snippet(content: str, max_chars: int = SNIPPET_CHARS) -> str:
    """Whitespace-normalised excerpt cut at a word boundary."""
    text = " ".join(content.split())
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars].rsplit(" ", 1)[0]
    return cut + "..."


class KnowledgeStore(ABC):
    """Persisted documents with vectors, supporting filtered similarity search."""

    @abstractmethod
    def search(
        self,
        vector: np.ndarray,
        filters: RetrievalFilters,
        threshold: float,
        limit: int,
    ) -> list[RetrievalResult]:
        """
        Return up to `limit` documents passing `filters` with score >= `threshold`.

        Raises:
            RetrievalError: If the store cannot be reached
        """
        pass

    @abstractmethod
    def upsert_document(self, doc: KnowledgeDocument, vector: np.ndarray) -> str:
        """Insert or update a document and return its id.

        Documents with identical content are the same document.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of stored documents."""
        pass


class InMemoryKnowledgeStore(KnowledgeStore):
    """Knowledge store holding documents and a vector matrix in memory."""

    def __init__(self, name: str = "knowledge"):
        self.name = name
        self._documents: list[KnowledgeDocument] = []
        self._hashes: dict[str, int] = {}
        self._matrix: Optional[np.ndarray] = None

    def upsert_document(self, doc: KnowledgeDocument, vector: np.ndarray) -> str:
        vector = np.asarray(vector, dtype=np.float32)
        key = content_hash(doc.content)

        if key in self._hashes:
            index = self._hashes[key]
            existing = self._documents[index]
            doc.id = existing.id
            doc.vector = vector
            self._documents[index] = doc
            self._matrix[index] = vector
            logger.debug(f"Updated document {doc.id} in {self.name}")
            return doc.id

        doc.id = doc.id or str(uuid.uuid4())
        doc.vector = vector
        self._documents.append(doc)
        self._hashes[key] = len(self._documents) - 1
        row = vector.reshape(1, -1)
        self._matrix = row if self._matrix is None else np.vstack([self._matrix, row])
        logger.debug(f"Inserted document {doc.id} into {self.name}")
        return doc.id

    def search(
        self,
        vector: np.ndarray,
        filters: RetrievalFilters,
        threshold: float,
        limit: int,
    ) -> list[RetrievalResult]:
        if self._matrix is None:
            return []

        candidates = [
            i for i, doc in enumerate(self._documents) if filters.matches(doc.metadata())
        ]
        if not candidates:
            return []

        hits = find_top_k(
            np.asarray(vector, dtype=np.float32),
            self._matrix[candidates],
            k=limit,
            min_similarity=threshold,
        )

        results = []
        for local_index, score in hits:
            doc = self._documents[candidates[local_index]]
            results.append(RetrievalResult(
                document_id=doc.id,
                score=score,
                snippet=make_snippet(doc.content),
                metadata=doc.metadata(),
            ))
        return results

    def count(self) -> int:
        return len(self._documents)
