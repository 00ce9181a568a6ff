"""Tests for tool-specific prompt optimization."""

import pytest

from conftest import make_task

BASE = "Context: build the thing.\n"


def _optimize(registry, tool_id, **task_overrides):
    from prompt_pipeline.rendering.optimizer import PromptOptimizer

    return PromptOptimizer().optimize(BASE, make_task(**task_overrides), registry.get(tool_id))


def test_lovable_debugging_adds_chat_mode(registry):
    from prompt_pipeline.models import PromptStage

    prompt = _optimize(registry, "lovable", stage=PromptStage.DEBUGGING)

    assert "Please use Chat mode to discuss the issue before implementing changes." in prompt
    assert "Knowledge Base" not in prompt


def test_lovable_responsive_ui_adds_breakpoints(registry):
    from prompt_pipeline.models import PromptStage

    prompt = _optimize(registry, "lovable", stage=PromptStage.PAGE_UI, ui_requirements=("Responsive grid",))
    no_ui = _optimize(registry, "lovable", stage=PromptStage.PAGE_UI, ui_requirements=())

    assert "Tailwind breakpoints (sm:, md:, lg:)" in prompt
    assert "Tailwind breakpoints" not in no_ui


def test_lovable_skeleton_asks_for_knowledge_base(registry):
    prompt = _optimize(registry, "lovable")
    assert prompt.rstrip().endswith("requirements from the Knowledge Base.")


def test_bolt_prefix_and_incremental_suggestion(registry):
    prompt = _optimize(registry, "bolt", technical_requirements=("a", "b", "c", "d"))
    few = _optimize(registry, "bolt", technical_requirements=("a", "b", "c"))

    assert prompt.startswith("[Note: Consider using the Enhance Prompt feature for this request]\n\n")
    assert "Break this into smaller, incremental changes" in prompt
    assert "incremental changes" not in few


def test_cursor_debugging_requests_stack_trace(registry):
    from prompt_pipeline.models import PromptStage

    prompt = _optimize(registry, "cursor", stage=PromptStage.DEBUGGING)
    assert "stack trace" in prompt
    assert "@-mentions" in prompt


def test_transform_order_is_fixed(registry):
    from prompt_pipeline.models import PromptStage

    prompt = _optimize(registry, "lovable", stage=PromptStage.DEBUGGING, ui_requirements=("responsive nav",))
    assert prompt.index("Chat mode") < prompt.index("Tailwind breakpoints")


def test_optimize_only_adds_text(registry):
    from prompt_pipeline.models import PromptStage

    for tool_id in registry.tool_ids():
        for stage in PromptStage:
            prompt = _optimize(registry, tool_id, stage=stage)
            assert BASE.strip() in prompt


def test_optimize_is_idempotent(registry):
    from prompt_pipeline.models import PromptStage
    from prompt_pipeline.rendering.optimizer import PromptOptimizer

    optimizer = PromptOptimizer()
    for tool_id in registry.tool_ids():
        profile = registry.get(tool_id)
        for stage in PromptStage:
            task = make_task(
                stage=stage,
                technical_requirements=("a", "b", "c", "d", "e"),
                ui_requirements=("responsive layout",),
            )
            once = optimizer.optimize(BASE, task, profile)
            assert optimizer.optimize(once, task, profile) == once, (tool_id, stage)


def test_tool_without_transforms_is_unchanged():
    from prompt_pipeline.models import ToolProfile
    from prompt_pipeline.rendering.optimizer import PromptOptimizer

    profile = ToolProfile.from_dict({"tool_id": "other"})
    assert PromptOptimizer().optimize(BASE, make_task(), profile) == BASE
