"""Cosine similarity ranking over numpy matrices.

Shared by the in-memory and SQLite knowledge stores. Retrieval scores are
cosine similarities clamped into [0, 1].
"""

from typing import List, Tuple

import numpy as np


def _unit(matrix: np.ndarray) -> np.ndarray:
    """Scale rows (or a single vector) to unit length; zero rows stay zero."""
    norms = np.linalg.norm(matrix, axis=-1, keepdims=True)
    return np.divide(matrix, norms, out=np.zeros_like(matrix, dtype=np.float64), where=norms != 0)


def cosine_similarity(vec1: np.ndarray, vec2: np.ndarray) -> float:
    """Cosine similarity of two vectors in [-1, 1]; 0.0 if either is all zeros."""
    if vec1.shape != vec2.shape:
        raise ValueError(f"Vector dimensions don't match: {vec1.shape} vs {vec2.shape}")
    return float(np.dot(_unit(vec1.astype(np.float64)), _unit(vec2.astype(np.float64))))


def batch_cosine_similarity(query_vec: np.ndarray, vectors: np.ndarray) -> np.ndarray:
    """Similarity of one query vector against every row of `vectors`."""
    if query_vec.ndim != 1 or vectors.ndim != 2:
        raise ValueError(
            f"Expected a 1D query and a 2D matrix, got {query_vec.shape} and {vectors.shape}"
        )
    if query_vec.shape[0] != vectors.shape[1]:
        raise ValueError(
            f"Dimension mismatch: query {query_vec.shape[0]} vs vectors {vectors.shape[1]}"
        )
    return _unit(vectors.astype(np.float64)) @ _unit(query_vec.astype(np.float64))


def find_top_k(
    query_vec: np.ndarray,
    vectors: np.ndarray,
    k: int = 10,
    min_similarity: float = 0.0,
) -> List[Tuple[int, float]]:
    """Rank rows of `vectors` against a query.

    Args:
        query_vec: Query vector
        vectors: One stored vector per row
        k: Maximum number of hits
        min_similarity: Hits scoring below this are dropped

    Returns:
        (row index, score) pairs, best first; equal scores keep row order
    """
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    if vectors.shape[0] == 0:
        return []

    scores = np.clip(batch_cosine_similarity(query_vec, vectors), 0.0, 1.0)
    kept = np.flatnonzero(scores >= min_similarity)
    ranked = kept[np.argsort(-scores[kept], kind="stable")][:k]
    return [(int(i), float(scores[i])) for i in ranked]
