"""Shared test helpers."""

import hashlib
import re

import numpy as np
import pytest

from prompt_pipeline.models import KnowledgeDocument, ProjectInfo, PromptStage, TaskContext
from prompt_pipeline.retrieval.embeddings import EmbeddingProvider

FAKE_DIMENSION = 256


class FakeEmbeddingProvider(EmbeddingProvider):
    """Deterministic bag-of-words embedder: each word hashes to one bucket."""

    def __init__(self, dimension: int = FAKE_DIMENSION):
        self._dimension = dimension
        self.calls = []

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        vector = np.zeros(self._dimension, dtype=np.float32)
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            bucket = int(hashlib.sha256(word.encode()).hexdigest()[:8], 16) % self._dimension
            vector[bucket] += 1.0
        return vector

    @property
    def dimension(self) -> int:
        return self._dimension


class FailingEmbeddingProvider(EmbeddingProvider):
    """Embedder whose backend is down."""

    def embed(self, text: str) -> np.ndarray:
        raise ConnectionError("embedding service unavailable")

    @property
    def dimension(self) -> int:
        return FAKE_DIMENSION


def make_task(**overrides) -> TaskContext:
    data = {
        "task_type": "app_architecture",
        "project_name": "TaskFlow",
        "description": "A task management dashboard for small teams with real-time updates and responsive design",
        "stage": PromptStage.APP_SKELETON,
        "target_tool": "lovable",
        "technical_requirements": ("Web application development", "Responsive design"),
        "ui_requirements": ("Clean, minimal design", "Mobile-first responsive design"),
        "constraints": ("Web-only implementation",),
    }
    data.update(overrides)
    return TaskContext(**data)


def make_project(**overrides) -> ProjectInfo:
    data = {
        "name": "TaskFlow",
        "description": "Task management for small teams",
        "tech_stack": ("React", "TypeScript", "Supabase"),
        "target_audience": "Small teams",
    }
    data.update(overrides)
    return ProjectInfo(**data)


SAMPLE_KNOWLEDGE = [
    KnowledgeDocument(
        title="Supabase auth patterns",
        content="Use Supabase authentication with row level security for multi-tenant task management apps.",
        document_type="best_practice",
        target_tools=["lovable", "bolt"],
        categories=["authentication", "backend"],
    ),
    KnowledgeDocument(
        title="Dashboard architecture",
        content="Structure a task management dashboard as feature folders with shared data hooks and a database layer.",
        document_type="guide",
        target_tools=["lovable"],
        categories=["architecture", "database"],
    ),
    KnowledgeDocument(
        title="Cursor refactoring",
        content="Reference files with @ mentions when asking Cursor to refactor components.",
        document_type="tip",
        target_tools=["cursor"],
        categories=["debugging"],
    ),
]

SAMPLE_TEMPLATES = [
    KnowledgeDocument(
        title="Lovable skeleton",
        content="Build the app skeleton for a task management dashboard with Supabase tables and auth.",
        document_type="skeleton",
        target_tools=["lovable"],
        categories=["architecture"],
    ),
]


@pytest.fixture
def fake_embedder():
    return FakeEmbeddingProvider()


@pytest.fixture
def registry():
    from prompt_pipeline.profiles.registry import ToolProfileRegistry

    return ToolProfileRegistry.default()


@pytest.fixture
def knowledge_store(fake_embedder):
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    store = InMemoryKnowledgeStore("knowledge")
    for doc in SAMPLE_KNOWLEDGE:
        store.upsert_document(KnowledgeDocument.from_dict(vars(doc)), fake_embedder.embed(doc.content))
    return store


@pytest.fixture
def template_store(fake_embedder):
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    store = InMemoryKnowledgeStore("templates")
    for doc in SAMPLE_TEMPLATES:
        store.upsert_document(KnowledgeDocument.from_dict(vars(doc)), fake_embedder.embed(doc.content))
    return store


@pytest.fixture
def make_orchestrator(registry, fake_embedder, knowledge_store, template_store):
    """Factory for orchestrators over the in-memory sample corpus."""
    from prompt_pipeline.config import PipelineConfig
    from prompt_pipeline.orchestrator import Orchestrator
    from prompt_pipeline.retrieval.gateway import RetrievalGateway

    created = []

    def _make(embedder=None, config=None, enhancer=None, knowledge_gateway=None, template_gateway=None,
              profiles=None):
        embedder = embedder or fake_embedder
        orchestrator = Orchestrator(
            registry=profiles or registry,
            knowledge_gateway=knowledge_gateway or RetrievalGateway(embedder, knowledge_store, "knowledge"),
            template_gateway=template_gateway or RetrievalGateway(embedder, template_store, "templates"),
            config=config or PipelineConfig(db_path=":memory:", similarity_threshold=0.0),
            enhancer=enhancer,
        )
        created.append(orchestrator)
        return orchestrator

    yield _make

    for orchestrator in created:
        orchestrator.close()
