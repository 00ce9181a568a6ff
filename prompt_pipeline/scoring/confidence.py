"""Confidence estimation for generated prompts."""

import logging
from typing import Sequence

from prompt_pipeline.models import RetrievalResult, ScoringMode, TaskContext, ToolProfile

logger = logging.getLogger(__name__)

BASE_SCORE = 0.5
COMPLETE_REQUIREMENTS_BONUS = 0.2
USE_CASE_BONUS = 0.2
CLEAR_DESCRIPTION_BONUS = 0.1
CLEAR_DESCRIPTION_CHARS = 50

# Evidence mode weights
SIMILARITY_WEIGHT = 0.4
COVERAGE_WEIGHT = 0.3
SUCCESS_RATE_WEIGHT = 0.3
FULL_COVERAGE_COUNT = 5


def _clamp(score: float) -> float:
    return round(min(max(score, 0.0), 1.0), 4)


def _normalize(text: str) -> str:
    return text.lower().replace("_", " ")


def matches_use_case(task: TaskContext, profile: ToolProfile) -> bool:
    """True if any preferred use case of the tool appears in the task type or description."""
    haystacks = (_normalize(task.task_type), _normalize(task.description))
    return any(
        _normalize(use_case) in haystack
        for use_case in profile.preferred_use_cases
        for haystack in haystacks
    )


class ConfidenceScorer:
    """Scores a request in [0, 1] using one fixed formula per mode."""

    def __init__(self, mode: ScoringMode = ScoringMode.HEURISTIC):
        self.mode = mode

    def score(
        self,
        task: TaskContext,
        profile: ToolProfile,
        knowledge: Sequence[RetrievalResult] = (),
    ) -> float:
        if self.mode == ScoringMode.EVIDENCE:
            return self.evidence_score(knowledge, profile)
        return self.heuristic_score(task, profile)

    def heuristic_score(self, task: TaskContext, profile: ToolProfile) -> float:
        score = BASE_SCORE
        if task.technical_requirements and task.ui_requirements:
            score += COMPLETE_REQUIREMENTS_BONUS
        if matches_use_case(task, profile):
            score += USE_CASE_BONUS
        if len(task.description) >= CLEAR_DESCRIPTION_CHARS:
            score += CLEAR_DESCRIPTION_BONUS
        return _clamp(score)

    def evidence_score(self, knowledge: Sequence[RetrievalResult], profile: ToolProfile) -> float:
        """Weighted blend of retrieval similarity, evidence volume and tool effectiveness."""
        avg_similarity = sum(r.score for r in knowledge) / len(knowledge) if knowledge else 0.0
        coverage = min(len(knowledge) / FULL_COVERAGE_COUNT, 1.0)
        effectiveness = [s.effectiveness_score for s in profile.strategies]
        success_rate = sum(effectiveness) / len(effectiveness) if effectiveness else 0.0

        score = (
            avg_similarity * SIMILARITY_WEIGHT
            + coverage * COVERAGE_WEIGHT
            + success_rate * SUCCESS_RATE_WEIGHT
        )
        logger.debug(
            f"Evidence score: similarity={avg_similarity:.3f} coverage={coverage:.2f} "
            f"success_rate={success_rate:.2f}"
        )
        return _clamp(score)
