"""Strategy selection for prompt construction."""

import logging

from prompt_pipeline.models import PromptStage, StrategyType, ToolCategory

logger = logging.getLogger(__name__)

# Above this many requirements the structured strategy wins regardless of stage.
MAX_CONVERSATIONAL_REQUIREMENTS = 5

CONVERSATIONAL_STAGES = frozenset({PromptStage.DEBUGGING, PromptStage.OPTIMIZATION})


class StrategySelector:
    """Selects a prompting strategy from stage, requirement volume and tool category.

    Rules are evaluated in order and the first match wins:

    1. APP_SKELETON stage -> structured
    2. more than five requirements -> structured
    3. DEBUGGING or OPTIMIZATION stage -> conversational
    4. otherwise -> conversational

    Rule 2 takes precedence over rule 3, so a debugging
    request with a long requirement list is still rendered as structured.
    """

    def select(
        self,
        stage: PromptStage,
        requirement_count: int,
        tool_category: ToolCategory = ToolCategory.UNKNOWN,
    ) -> StrategyType:
        """Select the strategy for a request."""
        if stage == PromptStage.APP_SKELETON:
            strategy = StrategyType.STRUCTURED
        elif requirement_count > MAX_CONVERSATIONAL_REQUIREMENTS:
            strategy = StrategyType.STRUCTURED
        elif stage in CONVERSATIONAL_STAGES:
            strategy = StrategyType.CONVERSATIONAL
        else:
            strategy = StrategyType.CONVERSATIONAL

        logger.debug(
            f"Selected {strategy.value} for stage={stage.value} "
            f"requirements={requirement_count} category={tool_category.value}"
        )
        return strategy
