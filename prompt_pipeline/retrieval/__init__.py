"""Retrieval of knowledge documents and prompt templates."""

from prompt_pipeline.retrieval.embeddings import EmbeddingProvider
from prompt_pipeline.retrieval.gateway import RetrievalGateway, RetrievalOutcome
from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore, KnowledgeStore

__all__ = [
    "EmbeddingProvider",
    "InMemoryKnowledgeStore",
    "KnowledgeStore",
    "RetrievalGateway",
    "RetrievalOutcome",
]
