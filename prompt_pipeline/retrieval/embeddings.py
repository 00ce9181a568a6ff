"""Embedding providers.

The pipeline treats embedding as an external capability: anything with an
`embed(text) -> ndarray` method and a `dimension` works. The OpenAI provider
wraps the embeddings API with token truncation.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np
import openai
import tiktoken

logger = logging.getLogger(__name__)

MODEL = "text-embedding-3-small"
DIMENSIONS = 1536
MAX_TOKENS = 8191  # per-text token limit

# Lazy-loaded tokenizer
_encoding = None


def _get_encoding():
    global _encoding
    if _encoding is None:
        _encoding = tiktoken.encoding_for_model(MODEL)
    return _encoding


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers."""

    @abstractmethod
    def embed(self, text: str) -> np.ndarray:
        """
        Convert text into a fixed-length vector.

        Args:
            text: Text to embed

        Returns:
            1D float vector of length `dimension`
        """
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this provider returns."""
        pass


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Generate embeddings using the OpenAI embeddings API.

    The API client is created on the first embed call; building a provider
    needs no credentials.
    """

    def __init__(self, model: str = MODEL, dimensions: int = DIMENSIONS):
        self._client = None
        self.model = model
        self._dimensions = dimensions

    @staticmethod
    def _truncate(text: str) -> str:
        """Truncate text to stay within the model's token limit."""
        enc = _get_encoding()
        tokens = enc.encode(text)
        if len(tokens) <= MAX_TOKENS:
            return text
        logger.warning(f"Truncating text from {len(tokens)} to {MAX_TOKENS} tokens")
        return enc.decode(tokens[:MAX_TOKENS])

    def _get_client(self):
        if self._client is None:
            self._client = openai.OpenAI()
        return self._client

    def embed(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        if not text or not text.strip():
            raise ValueError("Cannot generate embedding for empty text")

        client = self._get_client()
        response = client.embeddings.create(
            model=self.model,
            input=[self._truncate(text)],
            dimensions=self._dimensions,
        )
        return np.array(response.data[0].embedding, dtype=np.float32)

    @property
    def dimension(self) -> int:
        return self._dimensions
