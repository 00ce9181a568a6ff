"""Refinement suggestions for a request."""

from typing import Sequence

from prompt_pipeline.models import PromptStage, RetrievalResult, TaskContext, ToolProfile

SHORT_DESCRIPTION_CHARS = 50

NO_TECHNICAL_REQUIREMENTS = "Add specific technical requirements for better results"
NO_UI_REQUIREMENTS = "Describe UI/UX requirements such as layout, styling and responsiveness"
NO_CONSTRAINTS = "Define constraints to avoid scope creep"
SHORT_DESCRIPTION = "Expand the description with the goal, the users and the expected behaviour"
NO_EVIDENCE = "Add reference documents for this tool to the knowledge base to ground future prompts"
LOVABLE_KNOWLEDGE_BASE = "Consider setting up Knowledge Base with project requirements"
BOLT_ENHANCE = "Use the enhance prompt feature for more detailed specifications"
CURSOR_OPEN_FILES = "Open the related files in the editor so Cursor can use them as context"


class SuggestionGenerator:
    """Evaluates a fixed, ordered list of rules; each adds at most one suggestion."""

    def suggest(
        self,
        task: TaskContext,
        profile: ToolProfile,
        knowledge: Sequence[RetrievalResult] = (),
    ) -> list[str]:
        rules = [
            (not task.technical_requirements, NO_TECHNICAL_REQUIREMENTS),
            (not task.ui_requirements, NO_UI_REQUIREMENTS),
            (not task.constraints, NO_CONSTRAINTS),
            (len(task.description) < SHORT_DESCRIPTION_CHARS, SHORT_DESCRIPTION),
            (not knowledge, NO_EVIDENCE),
            (
                profile.tool_id == "lovable" and task.stage == PromptStage.APP_SKELETON,
                LOVABLE_KNOWLEDGE_BASE,
            ),
            (profile.tool_id == "bolt", BOLT_ENHANCE),
            (profile.tool_id == "cursor", CURSOR_OPEN_FILES),
        ]

        suggestions = []
        for matched, text in rules:
            if matched and text not in suggestions:
                suggestions.append(text)
        return suggestions
