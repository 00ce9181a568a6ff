"""Classification of pipeline stages into retrieval filters.

Every function here returns members of a closed enum and covers every
PromptStage, so each branch can be exercised directly in tests.
"""

from enum import Enum

from prompt_pipeline.models import PromptStage


class KnowledgeCategory(Enum):
    """Categories a knowledge document can be tagged with."""

    ARCHITECTURE = "architecture"
    DATA_MODELING = "data_modeling"
    BACKEND = "backend"
    DATABASE = "database"
    AUTHENTICATION = "authentication"
    API_DESIGN = "api_design"
    UI_DESIGN = "ui_design"
    COMPONENT_PATTERNS = "component_patterns"
    RESPONSIVE_DESIGN = "responsive_design"
    ACCESSIBILITY = "accessibility"
    STYLING = "styling"
    USER_FLOWS = "user_flows"
    NAVIGATION = "navigation"
    STATE_MANAGEMENT = "state_management"
    FEATURES = "features"
    INTEGRATIONS = "integrations"
    DEBUGGING = "debugging"
    ERROR_HANDLING = "error_handling"
    TESTING = "testing"
    PERFORMANCE = "performance"
    SECURITY = "security"
    DEPLOYMENT = "deployment"


class TemplateType(Enum):
    """Kinds of stored prompt templates."""

    SKELETON = "skeleton"
    FEATURE = "feature"
    DEBUGGING = "debugging"
    OPTIMIZATION = "optimization"


STAGE_KNOWLEDGE_CATEGORIES = {
    PromptStage.APP_SKELETON: (
        KnowledgeCategory.ARCHITECTURE,
        KnowledgeCategory.DATA_MODELING,
        KnowledgeCategory.BACKEND,
        KnowledgeCategory.DATABASE,
        KnowledgeCategory.AUTHENTICATION,
        KnowledgeCategory.API_DESIGN,
    ),
    PromptStage.PAGE_UI: (
        KnowledgeCategory.UI_DESIGN,
        KnowledgeCategory.COMPONENT_PATTERNS,
        KnowledgeCategory.RESPONSIVE_DESIGN,
        KnowledgeCategory.ACCESSIBILITY,
        KnowledgeCategory.STYLING,
    ),
    PromptStage.FLOW_CONNECTIONS: (
        KnowledgeCategory.USER_FLOWS,
        KnowledgeCategory.NAVIGATION,
        KnowledgeCategory.STATE_MANAGEMENT,
    ),
    PromptStage.FEATURE_SPECIFIC: (
        KnowledgeCategory.FEATURES,
        KnowledgeCategory.INTEGRATIONS,
        KnowledgeCategory.API_DESIGN,
        KnowledgeCategory.SECURITY,
    ),
    PromptStage.DEBUGGING: (
        KnowledgeCategory.DEBUGGING,
        KnowledgeCategory.ERROR_HANDLING,
        KnowledgeCategory.TESTING,
    ),
    PromptStage.OPTIMIZATION: (
        KnowledgeCategory.PERFORMANCE,
        KnowledgeCategory.SECURITY,
        KnowledgeCategory.DEPLOYMENT,
    ),
}

STAGE_TEMPLATE_TYPES = {
    PromptStage.APP_SKELETON: TemplateType.SKELETON,
    PromptStage.PAGE_UI: TemplateType.FEATURE,
    PromptStage.FLOW_CONNECTIONS: TemplateType.FEATURE,
    PromptStage.FEATURE_SPECIFIC: TemplateType.FEATURE,
    PromptStage.DEBUGGING: TemplateType.DEBUGGING,
    PromptStage.OPTIMIZATION: TemplateType.OPTIMIZATION,
}

# Project complexity -> knowledge document complexity level
PROJECT_COMPLEXITY_LEVELS = {
    "simple": "beginner",
    "medium": "intermediate",
    "complex": "advanced",
}


def stage_knowledge_categories(stage: PromptStage) -> tuple[KnowledgeCategory, ...]:
    """Knowledge categories relevant to a stage."""
    return STAGE_KNOWLEDGE_CATEGORIES[stage]


def template_type_for_stage(stage: PromptStage) -> TemplateType:
    """Stored template type that matches a stage."""
    return STAGE_TEMPLATE_TYPES[stage]


def complexity_for_project(level: str) -> str:
    """Map a project complexity level onto a document complexity level."""
    try:
        return PROJECT_COMPLEXITY_LEVELS[level.lower().strip()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown project complexity: {level}")
