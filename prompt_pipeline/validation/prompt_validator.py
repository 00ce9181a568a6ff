"""Prompt quality validation.

A pure, deterministic score out of 100 built from section keywords, length
and vague wording.
"""

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Scoring rules
# ---------------------------------------------------------------------------

REQUIRED_SECTIONS = ("context", "requirements", "technical", "ui")
SECTION_POINTS = 25

MIN_LENGTH = 200
SHORT_PENALTY = 10
MAX_LENGTH = 2000
LONG_PENALTY = 5

VAGUE_WORDS = ("nice", "good", "better", "improve", "enhance")
MAX_VAGUE_WORDS = 3
VAGUE_PENALTY = 10

PASSING_SCORE = 60

IMPROVEMENT_SUGGESTIONS = (
    "Be more specific about requirements",
    "Include technical stack details",
    "Add UI/UX specifications",
    "Define success criteria",
)


@dataclass
class PromptValidation:
    """Outcome of a prompt quality check."""

    is_valid: bool
    score: int
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "score": self.score,
            "issues": list(self.issues),
            "suggestions": list(self.suggestions),
        }


def count_vague_words(text: str) -> int:
    """Count substring occurrences of the vague words (case-insensitive)."""
    lowered = text.lower()
    return sum(lowered.count(word) for word in VAGUE_WORDS)


def validate_prompt(text: str) -> PromptValidation:
    """Score a prompt out of 100; it is valid at 60 or above."""
    issues = []
    score = 0
    lowered = text.lower()

    for section in REQUIRED_SECTIONS:
        if section in lowered:
            score += SECTION_POINTS
        else:
            issues.append(f"Missing {section} section")

    if len(text) < MIN_LENGTH:
        issues.append("Prompt is too short")
        score -= SHORT_PENALTY
    elif len(text) > MAX_LENGTH:
        issues.append("Prompt might be too long")
        score -= LONG_PENALTY

    if count_vague_words(text) > MAX_VAGUE_WORDS:
        issues.append("Prompt contains vague language")
        score -= VAGUE_PENALTY

    score = max(0, min(100, score))
    is_valid = score >= PASSING_SCORE

    return PromptValidation(
        is_valid=is_valid,
        score=score,
        issues=issues,
        suggestions=[] if is_valid else list(IMPROVEMENT_SUGGESTIONS),
    )
