"""MCP tool functions for prompt generation and validation."""

import logging
from typing import Optional

from pydantic import ValidationError

from prompt_pipeline.errors import PromptPipelineError
from prompt_pipeline.models import PromptStage, StrategyType
from prompt_pipeline.pipeline.requests import build_task_context
from prompt_pipeline.schemas import GeneratePromptInput, ValidatePromptInput
from prompt_pipeline.validation import validate_prompt

logger = logging.getLogger(__name__)

_orchestrator = None


def get_orchestrator():
    """Lazily build the shared orchestrator from the environment."""
    global _orchestrator
    if _orchestrator is None:
        from prompt_pipeline.config import PipelineConfig
        from prompt_pipeline.orchestrator import Orchestrator

        _orchestrator = Orchestrator.from_config(PipelineConfig.from_env())
    return _orchestrator


def generate_prompt_tool(
    app_name: str,
    idea_description: str,
    tool_id: str = "lovable",
    stage: str = "app_skeleton",
    platforms: Optional[list] = None,
    design_style: Optional[str] = None,
    style_description: Optional[str] = None,
    target_audience: Optional[str] = None,
    project_complexity: str = "medium",
    technical_experience: Optional[str] = None,
    strategy: Optional[str] = None,
) -> dict:
    """
    Generate a prompt for one stage of an app idea.

    Returns the PromptResult as a dict, or {"error": ...} on invalid input
    or an unsupported tool.
    """
    try:
        validated = GeneratePromptInput(
            app_name=app_name,
            idea_description=idea_description,
            tool_id=tool_id,
            stage=stage,
            platforms=platforms if platforms is not None else ["web"],
            design_style=design_style,
            style_description=style_description,
            target_audience=target_audience,
            project_complexity=project_complexity,
            technical_experience=technical_experience,
            strategy=strategy,
        )
    except ValidationError as e:
        logger.warning(f"Validation error in generate_prompt: {e}")
        return {"error": f"Validation error: {e}"}

    orchestrator = get_orchestrator()
    try:
        profile = orchestrator.registry.get(validated.tool_id)
        task, project = build_task_context(
            validated.app_idea(), PromptStage.from_string(validated.stage), profile
        )
        result = orchestrator.generate_prompt(
            task, project, validated.tool_id,
            strategy=StrategyType(validated.strategy) if validated.strategy else None,
        )
    except PromptPipelineError as e:
        logger.error(f"Prompt generation failed: {e}")
        return {"error": str(e)}

    return result.to_dict()


def validate_prompt_tool(text: str) -> dict:
    """Score a prompt's quality out of 100."""
    try:
        validated = ValidatePromptInput(text=text)
    except ValidationError as e:
        return {"error": f"Validation error: {e}"}
    return validate_prompt(validated.text).to_dict()


def list_tools_tool() -> dict:
    """List supported tools with their category and strategies."""
    registry = get_orchestrator().registry
    tools = []
    for tool_id in registry.tool_ids():
        profile = registry.get(tool_id)
        tools.append({
            "tool_id": tool_id,
            "display_name": profile.display_name,
            "category": profile.category.value,
            "description": profile.description,
            "strategies": [s.strategy_type.value for s in profile.strategies],
            "optimization_tips": list(profile.optimization_tips),
        })
    return {"tools": tools, "count": len(tools)}
