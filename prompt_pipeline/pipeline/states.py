"""Pipeline run states and stage progression."""

from enum import Enum
from typing import Optional

from prompt_pipeline.models import PromptStage


class PipelineState(Enum):
    """States a single prompt generation run moves through."""

    BUILD_CONTEXT = "build_context"
    RETRIEVE = "retrieve"
    SELECT_STRATEGY = "select_strategy"
    RENDER = "render"
    OPTIMIZE = "optimize"
    ENHANCE = "enhance"
    SCORE = "score"
    SUGGEST = "suggest"
    NEXT_STAGE = "next_stage"
    DONE = "done"


# Valid state transitions
TRANSITIONS = {
    PipelineState.BUILD_CONTEXT: {PipelineState.RETRIEVE},
    PipelineState.RETRIEVE: {PipelineState.SELECT_STRATEGY},
    PipelineState.SELECT_STRATEGY: {PipelineState.RENDER},
    PipelineState.RENDER: {PipelineState.OPTIMIZE},
    PipelineState.OPTIMIZE: {PipelineState.ENHANCE, PipelineState.SCORE},
    PipelineState.ENHANCE: {PipelineState.SCORE},
    PipelineState.SCORE: {PipelineState.SUGGEST},
    PipelineState.SUGGEST: {PipelineState.NEXT_STAGE},
    PipelineState.NEXT_STAGE: {PipelineState.DONE},
    PipelineState.DONE: set(),  # Terminal
}

# Stage progression used for next_suggested_stage.
STAGE_PROGRESSION = {
    PromptStage.APP_SKELETON: PromptStage.PAGE_UI,
    PromptStage.PAGE_UI: PromptStage.FLOW_CONNECTIONS,
    PromptStage.FLOW_CONNECTIONS: PromptStage.FEATURE_SPECIFIC,
    PromptStage.FEATURE_SPECIFIC: PromptStage.OPTIMIZATION,
    PromptStage.DEBUGGING: PromptStage.OPTIMIZATION,
    PromptStage.OPTIMIZATION: PromptStage.OPTIMIZATION,  # Fixpoint
}


def can_transition(from_state: PipelineState, to_state: PipelineState) -> bool:
    """Check if a state transition is valid."""
    return to_state in TRANSITIONS.get(from_state, set())


def next_stage(stage: PromptStage) -> Optional[PromptStage]:
    """Return the stage to suggest after `stage`."""
    return STAGE_PROGRESSION.get(stage)
