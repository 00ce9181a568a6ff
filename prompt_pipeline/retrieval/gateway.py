"""Retrieval gateway: query text in, ranked evidence out."""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from prompt_pipeline.errors import RetrievalError
from prompt_pipeline.models import RetrievalQuery, RetrievalResult
from prompt_pipeline.retrieval.embeddings import EmbeddingProvider
from prompt_pipeline.retrieval.store import KnowledgeStore

logger = logging.getLogger(__name__)


@dataclass
class RetrievalOutcome:
    """Results of one gateway call plus how it went."""

    results: list[RetrievalResult] = field(default_factory=list)
    degraded: bool = False
    reason: Optional[str] = None
    elapsed_ms: int = 0


def rank_results(results: list[RetrievalResult], query: RetrievalQuery) -> list[RetrievalResult]:
    """Sort by score descending, drop repeated ids and below-threshold hits, truncate."""
    ordered = sorted(results, key=lambda r: r.score, reverse=True)
    seen = set()
    ranked = []
    for result in ordered:
        if result.document_id in seen or result.score < query.similarity_threshold:
            continue
        seen.add(result.document_id)
        ranked.append(result)
        if len(ranked) == query.max_results:
            break
    return ranked


class RetrievalGateway:
    """Embeds a query and asks a knowledge store for the nearest documents.

    An embedding failure is non-fatal: the call returns no results and is
    marked degraded. Any store failure, including a vector the store cannot
    compare against its rows, is raised as RetrievalError for the caller
    to handle.
    """

    def __init__(self, embedder: EmbeddingProvider, store: KnowledgeStore, name: str = "knowledge"):
        self.embedder = embedder
        self.store = store
        self.name = name

    def search(self, query: RetrievalQuery) -> RetrievalOutcome:
        start = time.monotonic()

        try:
            vector = self.embedder.embed(query.text)
        except Exception as e:
            logger.warning(f"[{self.name}] embedding failed, returning no evidence: {e}")
            return RetrievalOutcome(
                degraded=True,
                reason=f"{self.name}: embedding failed ({type(e).__name__})",
                elapsed_ms=int((time.monotonic() - start) * 1000),
            )

        try:
            raw = self.store.search(
                vector,
                query.filters,
                query.similarity_threshold,
                query.max_results,
            )
        except RetrievalError:
            raise
        except Exception as e:
            raise RetrievalError(
                f"store search failed ({type(e).__name__}: {e})",
                collection=self.name,
            ) from e
        results = rank_results(raw, query)
        elapsed_ms = int((time.monotonic() - start) * 1000)

        logger.debug(f"[{self.name}] {len(results)} results in {elapsed_ms}ms")
        return RetrievalOutcome(results=results, elapsed_ms=elapsed_ms)

    def retrieve(self, query: RetrievalQuery) -> list[RetrievalResult]:
        return self.search(query).results
