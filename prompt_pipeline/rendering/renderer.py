"""Deterministic template rendering.

Templates use `{field}` placeholders drawn from the closed TEMPLATE_FIELDS
set. Rendering the same template with the same context always produces the
same text.
"""

import logging
import re
from typing import Optional, Sequence

from prompt_pipeline.errors import RenderError
from prompt_pipeline.models import (
    ProjectInfo,
    PromptStage,
    RetrievalResult,
    StrategyType,
    TaskContext,
    ToolProfile,
)
from prompt_pipeline.templates import load_template

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

SCALAR_FIELDS = frozenset({
    "project_name",
    "project_description",
    "description",
    "tool_name",
    "task_type",
    "task_title",
    "stage",
    "tone",
    "format",
    "tech_stack",
    "target_audience",
    "guidelines",
})

LIST_FIELDS = frozenset({
    "technical_requirements",
    "ui_requirements",
    "all_requirements",
    "constraints",
    "optimization_tips",
})

EVIDENCE_FIELDS = frozenset({"relevant_knowledge", "similar_templates"})

TEMPLATE_FIELDS = SCALAR_FIELDS | LIST_FIELDS | EVIDENCE_FIELDS

MANDATORY_FIELDS = ("project_name", "description", "tool_name")

EMPTY_LIST = "- None specified"
EMPTY_EVIDENCE = "- No entries found"


def _bullets(items: Sequence[str], empty: str) -> str:
    items = [str(item).strip() for item in items if str(item).strip()]
    if not items:
        return empty
    return "\n".join(f"- {item}" for item in items)


def format_evidence(results: Sequence[RetrievalResult]) -> list[str]:
    """One line per retrieval result: title, score and snippet."""
    return [f"{r.title} (score {r.score:.2f}): {r.snippet}" for r in results]


def task_title(task_type: str) -> str:
    return task_type.replace("_", " ").strip().title()


def build_render_context(
    task: TaskContext,
    project: ProjectInfo,
    profile: ToolProfile,
    knowledge: Sequence[RetrievalResult] = (),
    templates: Sequence[RetrievalResult] = (),
) -> dict:
    """Collect every template field for one request."""
    tech_stack = project.tech_stack or profile.tech_stack
    return {
        "project_name": task.project_name or project.name,
        "project_description": project.description or task.description,
        "description": task.description,
        "tool_name": profile.display_name,
        "task_type": task.task_type,
        "task_title": task_title(task.task_type),
        "stage": task.stage.value,
        "tone": profile.tone,
        "format": profile.format,
        "tech_stack": ", ".join(tech_stack) if tech_stack else "Not specified",
        "target_audience": project.target_audience,
        "guidelines": profile.guidelines or "Follow best practices for modern web development.",
        "technical_requirements": list(task.technical_requirements),
        "ui_requirements": list(task.ui_requirements),
        "all_requirements": list(task.technical_requirements) + list(task.ui_requirements),
        "constraints": list(task.constraints),
        "optimization_tips": list(profile.optimization_tips),
        "relevant_knowledge": format_evidence(knowledge),
        "similar_templates": format_evidence(templates),
    }


def resolve_template_id(profile: ToolProfile, stage: PromptStage, strategy: StrategyType) -> str:
    """Pick the template for a tool, stage and strategy.

    A stage-specific template on the profile wins, then the profile's
    template for the strategy, then the generic template named after the
    strategy.
    """
    template_id = profile.stage_template(stage)
    if template_id:
        return template_id
    tool_strategy = profile.strategy_for(strategy)
    if tool_strategy is not None:
        return tool_strategy.template
    return strategy.value


class TemplateRenderer:
    """Renders named templates from a field dictionary."""

    def __init__(self, loader=load_template):
        self._load = loader

    def render(self, template_id: str, context: dict) -> str:
        """Render a template.

        Raises:
            RenderError: Unknown template, unknown placeholder, or a
                mandatory field that is absent or blank
        """
        template = self._load(template_id)
        placeholders = PLACEHOLDER.findall(template)

        unknown = sorted({name for name in placeholders if name not in TEMPLATE_FIELDS})
        if unknown:
            raise RenderError(
                f"Template {template_id} uses unknown fields: {', '.join(unknown)}",
                template_id=template_id,
            )

        missing = tuple(
            name for name in MANDATORY_FIELDS
            if not str(context.get(name) or "").strip()
        )
        if missing:
            raise RenderError(
                f"Missing mandatory fields for {template_id}: {', '.join(missing)}",
                template_id=template_id,
                missing=missing,
            )

        def substitute(match: re.Match) -> str:
            return self._format_field(match.group(1), context.get(match.group(1)))

        rendered = PLACEHOLDER.sub(substitute, template)
        logger.debug(f"Rendered {template_id} ({len(rendered)} chars)")
        return rendered.strip() + "\n"

    @staticmethod
    def _format_field(name: str, value: Optional[object]) -> str:
        if name in EVIDENCE_FIELDS:
            return _bullets(value or (), EMPTY_EVIDENCE)
        if name in LIST_FIELDS:
            return _bullets(value or (), EMPTY_LIST)
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)
