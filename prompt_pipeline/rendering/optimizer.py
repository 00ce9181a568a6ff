"""Tool-specific post-processing of rendered prompts.

Each transform only prefixes or appends one fixed block of text, and skips
itself when that text is already present, so applying the layer twice gives
the same prompt as applying it once.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from prompt_pipeline.models import PromptStage, TaskContext, ToolProfile

logger = logging.getLogger(__name__)

PREFIX = "prefix"
SUFFIX = "suffix"

# Above this many technical requirements, tools are nudged towards smaller steps.
MAX_TECHNICAL_REQUIREMENTS = 3


def _always(task: TaskContext) -> bool:
    return True


def _is_stage(stage: PromptStage) -> Callable[[TaskContext], bool]:
    return lambda task: task.stage == stage


def _mentions_responsive(task: TaskContext) -> bool:
    return any("responsive" in req.lower() for req in task.ui_requirements)


def _many_technical_requirements(task: TaskContext) -> bool:
    return len(task.technical_requirements) > MAX_TECHNICAL_REQUIREMENTS


@dataclass(frozen=True)
class Transform:
    """Inserts `text` at one end of a prompt when `applies(task)` holds."""

    name: str
    text: str
    position: str
    applies: Callable[[TaskContext], bool] = _always

    def __call__(self, prompt: str, task: TaskContext) -> str:
        if not self.applies(task) or self.text in prompt:
            return prompt
        if self.position == PREFIX:
            return f"{self.text}\n\n{prompt}"
        return f"{prompt.rstrip()}\n\n{self.text}\n"


CHAT_MODE = Transform(
    "chat_mode",
    "Please use Chat mode to discuss the issue before implementing changes.",
    SUFFIX,
    _is_stage(PromptStage.DEBUGGING),
)
TAILWIND_BREAKPOINTS = Transform(
    "tailwind_breakpoints",
    "Ensure mobile-first responsive design using Tailwind breakpoints (sm:, md:, lg:).",
    SUFFIX,
    _mentions_responsive,
)
KNOWLEDGE_BASE = Transform(
    "knowledge_base",
    "Before starting, please confirm you understand the project requirements from the Knowledge Base.",
    SUFFIX,
    _is_stage(PromptStage.APP_SKELETON),
)
ENHANCE_PROMPT_NOTE = Transform(
    "enhance_prompt_note",
    "[Note: Consider using the Enhance Prompt feature for this request]",
    PREFIX,
)
INCREMENTAL_CHANGES = Transform(
    "incremental_changes",
    "Suggestion: Break this into smaller, incremental changes for better results.",
    SUFFIX,
    _many_technical_requirements,
)
FILE_TARGETING = Transform(
    "file_targeting",
    "Reference the specific files to change with @-mentions and keep edits scoped to those files.",
    SUFFIX,
)
STACK_TRACE = Transform(
    "stack_trace",
    "Include the full error message, the stack trace and the code where the error occurs.",
    SUFFIX,
    _is_stage(PromptStage.DEBUGGING),
)
RESPONSIVE_LAYOUT = Transform(
    "responsive_layout",
    "Make the layout responsive across mobile, tablet and desktop breakpoints.",
    SUFFIX,
    _mentions_responsive,
)
ACCESSIBILITY = Transform(
    "accessibility",
    "Use semantic HTML with ARIA labels and full keyboard navigation.",
    SUFFIX,
)
STEP_BY_STEP = Transform(
    "step_by_step",
    "Work through the requirements step by step and explain each decision before writing code.",
    SUFFIX,
    _many_technical_requirements,
)
TESTING_STRATEGY = Transform(
    "testing_strategy",
    "Describe how the implementation should be tested, including edge cases.",
    SUFFIX,
)

# Transforms run in list order for each tool.
TOOL_TRANSFORMS = {
    "lovable": (CHAT_MODE, TAILWIND_BREAKPOINTS, KNOWLEDGE_BASE),
    "bolt": (ENHANCE_PROMPT_NOTE, INCREMENTAL_CHANGES),
    "cursor": (FILE_TARGETING, STACK_TRACE),
    "v0": (RESPONSIVE_LAYOUT, ACCESSIBILITY),
    "claude": (STEP_BY_STEP, TESTING_STRATEGY),
    "chatgpt": (STEP_BY_STEP, TESTING_STRATEGY),
}


class PromptOptimizer:
    """Applies the registered transforms for a tool to a rendered prompt."""

    def __init__(self, transforms: dict = None):
        self.transforms = TOOL_TRANSFORMS if transforms is None else transforms

    def optimize(self, base_prompt: str, task: TaskContext, profile: ToolProfile) -> str:
        optimized = base_prompt
        for transform in self.transforms.get(profile.tool_id, ()):
            before = optimized
            optimized = transform(optimized, task)
            if optimized != before:
                logger.debug(f"Applied {transform.name} for {profile.tool_id}")
        return optimized
