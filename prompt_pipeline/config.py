"""Configuration for the prompt pipeline."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from prompt_pipeline.db.config import get_db_path
from prompt_pipeline.models import ScoringMode
from prompt_pipeline.retrieval.embeddings import MODEL as DEFAULT_EMBEDDING_MODEL


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PipelineConfig:
    """Configuration for the orchestrator."""

    # Paths
    db_path: Path = field(default_factory=get_db_path)

    # Retrieval
    similarity_threshold: float = 0.7
    knowledge_max_results: int = 8
    template_max_results: int = 5
    embedding_model: str = DEFAULT_EMBEDDING_MODEL

    # Timeouts (seconds)
    retrieval_timeout: float = 5.0
    enhancement_timeout: float = 20.0

    # Enhancement
    enable_enhancement: bool = False
    enhancement_provider: str = "openai"

    # Scoring
    scoring_mode: ScoringMode = ScoringMode.HEURISTIC

    def __post_init__(self):
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(f"similarity_threshold must be in [0, 1], got {self.similarity_threshold}")
        if self.knowledge_max_results < 1 or self.template_max_results < 1:
            raise ValueError("max results must be >= 1")
        if self.retrieval_timeout <= 0 or self.enhancement_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if isinstance(self.scoring_mode, str):
            self.scoring_mode = ScoringMode(self.scoring_mode.lower())

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Create configuration from environment variables."""
        return cls(
            db_path=get_db_path(),
            similarity_threshold=float(os.environ.get("PROMPT_PIPELINE_SIMILARITY_THRESHOLD", 0.7)),
            knowledge_max_results=int(os.environ.get("PROMPT_PIPELINE_KNOWLEDGE_MAX_RESULTS", 8)),
            template_max_results=int(os.environ.get("PROMPT_PIPELINE_TEMPLATE_MAX_RESULTS", 5)),
            embedding_model=os.environ.get("PROMPT_PIPELINE_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL),
            retrieval_timeout=float(os.environ.get("PROMPT_PIPELINE_RETRIEVAL_TIMEOUT_SECONDS", 5)),
            enhancement_timeout=float(os.environ.get("PROMPT_PIPELINE_ENHANCEMENT_TIMEOUT_SECONDS", 20)),
            enable_enhancement=_env_bool("PROMPT_PIPELINE_ENABLE_ENHANCEMENT", False),
            enhancement_provider=os.environ.get("PROMPT_PIPELINE_ENHANCEMENT_PROVIDER", "openai"),
            scoring_mode=ScoringMode(os.environ.get("PROMPT_PIPELINE_SCORING_MODE", "heuristic").lower()),
        )
