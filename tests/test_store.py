"""Tests for the in-memory knowledge store."""

import numpy as np
import pytest


def _doc(content, **kwargs):
    from prompt_pipeline.models import KnowledgeDocument

    defaults = {"title": content[:20], "document_type": "guide", "target_tools": ["lovable"],
                "categories": ["architecture"]}
    defaults.update(kwargs)
    return KnowledgeDocument(content=content, **defaults)


def test_content_hash_ignores_surrounding_whitespace():
    from prompt_pipeline.retrieval.store import content_hash

    assert content_hash("  hello world\n") == content_hash("hello world")
    assert content_hash("hello") != content_hash("world")


def test_make_snippet_cuts_at_word_boundary():
    from prompt_pipeline.retrieval.store import make_snippet

    assert make_snippet("short   text\nhere") == "short text here"
    snippet = make_snippet("word " * 100, max_chars=22)
    assert snippet.endswith("...")
    assert len(snippet) <= 25
    assert "wor..." not in snippet


def test_upsert_assigns_id_and_counts():
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    store = InMemoryKnowledgeStore()
    doc_id = store.upsert_document(_doc("first document"), np.array([1.0, 0.0]))

    assert doc_id
    assert store.count() == 1


def test_upsert_same_content_updates_in_place():
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    store = InMemoryKnowledgeStore()
    first = store.upsert_document(_doc("same content", title="Old"), np.array([1.0, 0.0]))
    second = store.upsert_document(_doc("same content", title="New"), np.array([0.0, 1.0]))

    assert first == second
    assert store.count() == 1
    results = store.search(np.array([0.0, 1.0]), _filters(), threshold=0.9, limit=5)
    assert results[0].title == "New"


def _filters(**kwargs):
    from prompt_pipeline.models import RetrievalFilters

    return RetrievalFilters(**kwargs)


def test_search_applies_filters_before_ranking():
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    store = InMemoryKnowledgeStore()
    store.upsert_document(_doc("lovable doc", target_tools=["lovable"]), np.array([1.0, 0.0]))
    store.upsert_document(_doc("cursor doc", target_tools=["cursor"]), np.array([1.0, 0.0]))

    results = store.search(np.array([1.0, 0.0]), _filters(target_tools=("cursor",)), 0.0, 5)

    assert len(results) == 1
    assert results[0].metadata["target_tools"] == ["cursor"]
    assert results[0].snippet == "cursor doc"


def test_search_threshold_and_limit():
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    store = InMemoryKnowledgeStore()
    store.upsert_document(_doc("a"), np.array([1.0, 0.0]))
    store.upsert_document(_doc("b"), np.array([0.9, 0.1]))
    store.upsert_document(_doc("c"), np.array([0.0, 1.0]))

    results = store.search(np.array([1.0, 0.0]), _filters(), threshold=0.5, limit=1)

    assert len(results) == 1
    assert results[0].snippet == "a"


def test_search_empty_store():
    from prompt_pipeline.retrieval.store import InMemoryKnowledgeStore

    assert InMemoryKnowledgeStore().search(np.ones(2), _filters(), 0.0, 5) == []
