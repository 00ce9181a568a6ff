"""Offline ingestion of knowledge documents and prompt templates."""

import json
import logging
from pathlib import Path

from prompt_pipeline.models import KnowledgeDocument
from prompt_pipeline.retrieval.embeddings import EmbeddingProvider
from prompt_pipeline.retrieval.store import KnowledgeStore

logger = logging.getLogger(__name__)


class KnowledgeIngestor:
    """Embeds documents and writes them into a knowledge store."""

    def __init__(self, embedder: EmbeddingProvider, store: KnowledgeStore):
        self.embedder = embedder
        self.store = store

    def ingest(self, doc: KnowledgeDocument) -> str:
        """Embed and upsert one document, returning its id."""
        if not doc.content or not doc.content.strip():
            raise ValueError(f"Document has no content: {doc.title}")

        vector = self.embedder.embed(doc.content)
        doc_id = self.store.upsert_document(doc, vector)
        logger.info(f"Ingested '{doc.title}' as {doc_id}")
        return doc_id

    def ingest_file(self, path: Path) -> list[str]:
        """Ingest every document in a JSON file holding a list of documents.

        Returns:
            Document ids in file order (repeated content yields a repeated id)
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON list of documents")

        return [self.ingest(KnowledgeDocument.from_dict(item)) for item in data]
