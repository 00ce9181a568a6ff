"""Data types shared across the prompt pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import numpy as np


class PromptStage(Enum):
    """Phases of the app-building workflow."""

    APP_SKELETON = "app_skeleton"
    PAGE_UI = "page_ui"
    FLOW_CONNECTIONS = "flow_connections"
    FEATURE_SPECIFIC = "feature_specific"
    DEBUGGING = "debugging"
    OPTIMIZATION = "optimization"

    @classmethod
    def from_string(cls, value: str) -> "PromptStage":
        """Convert string to PromptStage. Raises ValueError on unknown stages."""
        value = value.lower().strip().replace("-", "_")
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown stage: {value}")


class StrategyType(Enum):
    """Prompt construction strategies."""

    STRUCTURED = "structured"
    CONVERSATIONAL = "conversational"
    INCREMENTAL = "incremental"


class ToolCategory(Enum):
    """Closed set of downstream tool categories."""

    UI_GENERATOR = "ui_generator"
    CODE_EDITOR = "code_editor"
    WEB_IDE = "web_ide"
    AI_ASSISTANT = "ai_assistant"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> "ToolCategory":
        """Convert string to ToolCategory, defaulting to UNKNOWN."""
        value = (value or "").lower().strip()
        for member in cls:
            if member.value == value:
                return member
        return cls.UNKNOWN


class ScoringMode(Enum):
    """Confidence scoring formulas."""

    HEURISTIC = "heuristic"
    EVIDENCE = "evidence"


def _as_tuple(value) -> tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True)
class TaskContext:
    """What is being asked of the downstream tool for one request."""

    task_type: str
    project_name: str
    description: str
    stage: PromptStage
    target_tool: str
    technical_requirements: tuple = ()
    ui_requirements: tuple = ()
    constraints: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "technical_requirements", _as_tuple(self.technical_requirements))
        object.__setattr__(self, "ui_requirements", _as_tuple(self.ui_requirements))
        object.__setattr__(self, "constraints", _as_tuple(self.constraints))

    @property
    def requirement_count(self) -> int:
        return len(self.technical_requirements) + len(self.ui_requirements)


@dataclass(frozen=True)
class ProjectInfo:
    """Project-level facts shared by every stage."""

    name: str
    description: str
    tech_stack: tuple = ()
    target_audience: str = "General users"
    requirements: tuple = ()
    complexity_level: str = "medium"

    def __post_init__(self):
        object.__setattr__(self, "tech_stack", _as_tuple(self.tech_stack))
        object.__setattr__(self, "requirements", _as_tuple(self.requirements))


@dataclass(frozen=True)
class PromptingStrategy:
    """A strategy a tool profile supports, with its template id."""

    strategy_type: StrategyType
    template: str
    applicable_use_cases: tuple = ()
    effectiveness_score: float = 0.5

    @classmethod
    def from_dict(cls, data: dict) -> "PromptingStrategy":
        return cls(
            strategy_type=StrategyType(data["strategy_type"]),
            template=data["template"],
            applicable_use_cases=_as_tuple(data.get("applicable_use_cases")),
            effectiveness_score=float(data.get("effectiveness_score", 0.5)),
        )


@dataclass(frozen=True)
class ToolProfile:
    """Static descriptor of a downstream code-generation tool."""

    tool_id: str
    display_name: str
    category: ToolCategory
    format: str
    tone: str
    description: str = ""
    guidelines: str = ""
    preferred_use_cases: tuple = ()
    constraints: tuple = ()
    optimization_tips: tuple = ()
    common_pitfalls: tuple = ()
    tech_stack: tuple = ()
    strategies: tuple = ()
    stage_templates: tuple = ()  # ((PromptStage, template_id), ...)

    def strategy_for(self, strategy_type: StrategyType) -> Optional[PromptingStrategy]:
        for strategy in self.strategies:
            if strategy.strategy_type == strategy_type:
                return strategy
        return None

    def stage_template(self, stage: PromptStage) -> Optional[str]:
        for template_stage, template_id in self.stage_templates:
            if template_stage == stage:
                return template_id
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "ToolProfile":
        """Create from a profile configuration dictionary."""
        stage_templates = tuple(
            (PromptStage.from_string(stage), template_id)
            for stage, template_id in sorted(data.get("stage_templates", {}).items())
        )
        return cls(
            tool_id=data["tool_id"],
            display_name=data.get("display_name", data["tool_id"]),
            category=ToolCategory.from_string(data.get("category", "")),
            format=data.get("format", "markdown"),
            tone=data.get("tone", "neutral"),
            description=data.get("description", ""),
            guidelines=data.get("guidelines", ""),
            preferred_use_cases=_as_tuple(data.get("preferred_use_cases")),
            constraints=_as_tuple(data.get("constraints")),
            optimization_tips=_as_tuple(data.get("optimization_tips")),
            common_pitfalls=_as_tuple(data.get("common_pitfalls")),
            tech_stack=_as_tuple(data.get("tech_stack")),
            strategies=tuple(PromptingStrategy.from_dict(s) for s in data.get("strategies", [])),
            stage_templates=stage_templates,
        )


@dataclass
class KnowledgeDocument:
    """A document (or prompt template) in the knowledge corpus."""

    title: str
    content: str
    document_type: str
    target_tools: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    complexity_level: str = "intermediate"
    id: Optional[str] = None
    vector: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    def metadata(self) -> dict:
        return {
            "title": self.title,
            "document_type": self.document_type,
            "target_tools": list(self.target_tools),
            "categories": list(self.categories),
            "complexity_level": self.complexity_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "KnowledgeDocument":
        return cls(
            title=data["title"],
            content=data["content"],
            document_type=data.get("document_type", "reference"),
            target_tools=list(data.get("target_tools", [])),
            categories=list(data.get("categories", [])),
            complexity_level=data.get("complexity_level", "intermediate"),
            id=data.get("id"),
        )


@dataclass(frozen=True)
class RetrievalFilters:
    """Metadata filters applied before similarity ranking."""

    target_tools: Optional[tuple] = None
    categories: Optional[tuple] = None
    complexity: Optional[str] = None
    document_types: Optional[tuple] = None

    def matches(self, metadata: dict) -> bool:
        """Array filters match on overlap, scalar filters on equality."""
        if self.target_tools and not set(self.target_tools) & set(metadata.get("target_tools", [])):
            return False
        if self.categories and not set(self.categories) & set(metadata.get("categories", [])):
            return False
        if self.complexity and metadata.get("complexity_level") != self.complexity:
            return False
        if self.document_types and metadata.get("document_type") not in self.document_types:
            return False
        return True


@dataclass(frozen=True)
class RetrievalQuery:
    """A similarity search request."""

    text: str
    filters: RetrievalFilters = field(default_factory=RetrievalFilters)
    similarity_threshold: float = 0.7
    max_results: int = 10

    def __post_init__(self):
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(f"similarity_threshold must be in [0, 1], got {self.similarity_threshold}")
        if self.max_results < 1:
            raise ValueError(f"max_results must be >= 1, got {self.max_results}")


@dataclass(frozen=True)
class RetrievalResult:
    """One ranked hit from the knowledge store."""

    document_id: str
    score: float
    snippet: str
    metadata: dict = field(default_factory=dict, hash=False, compare=False)

    @property
    def title(self) -> str:
        return self.metadata.get("title", self.document_id)

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "score": round(self.score, 4),
            "snippet": self.snippet,
            "metadata": self.metadata,
        }


@dataclass
class PromptResult:
    """Output of one pipeline run."""

    prompt: str
    stage: PromptStage
    tool: str
    confidence_score: float
    applied_strategy: StrategyType
    sources: list[RetrievalResult] = field(default_factory=list)
    next_suggested_stage: Optional[PromptStage] = None
    enhancement_suggestions: list[str] = field(default_factory=list)
    optimization_tips: list[str] = field(default_factory=list)
    scoring_mode: ScoringMode = ScoringMode.HEURISTIC
    enhanced: bool = False
    degraded: bool = False
    degradation_reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "prompt": self.prompt,
            "stage": self.stage.value,
            "tool": self.tool,
            "confidence_score": self.confidence_score,
            "applied_strategy": self.applied_strategy.value,
            "sources": [s.to_dict() for s in self.sources],
            "next_suggested_stage": self.next_suggested_stage.value if self.next_suggested_stage else None,
            "enhancement_suggestions": list(self.enhancement_suggestions),
            "optimization_tips": list(self.optimization_tips),
            "scoring_mode": self.scoring_mode.value,
            "enhanced": self.enhanced,
            "degraded": self.degraded,
            "degradation_reasons": list(self.degradation_reasons),
        }
