"""Tests for template rendering."""

import pytest

from conftest import make_project, make_task


def _context(registry, tool_id="lovable", knowledge=(), templates=(), **task_overrides):
    from prompt_pipeline.rendering.renderer import build_render_context

    return build_render_context(
        make_task(**task_overrides), make_project(), registry.get(tool_id), knowledge, templates
    )


def test_render_is_deterministic(registry):
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    renderer = TemplateRenderer()
    context = _context(registry)

    assert renderer.render("structured", context) == renderer.render("structured", context)


def test_render_fills_fields(registry):
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    prompt = TemplateRenderer().render("structured", _context(registry))

    assert "# App Architecture - TaskFlow" in prompt
    assert "- Web application development" in prompt
    assert "- Web-only implementation" in prompt
    assert "**Target Tool:** Lovable.dev" in prompt
    assert "React, TypeScript, Supabase" in prompt


def test_empty_lists_and_evidence_have_fixed_text(registry):
    from prompt_pipeline.rendering.renderer import EMPTY_EVIDENCE, EMPTY_LIST, TemplateRenderer

    prompt = TemplateRenderer().render(
        "structured",
        _context(registry, technical_requirements=(), ui_requirements=(), constraints=()),
    )

    assert prompt.count(EMPTY_LIST) == 3
    assert prompt.count(EMPTY_EVIDENCE) == 2


def test_evidence_is_listed(registry):
    from prompt_pipeline.models import RetrievalResult
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    knowledge = [RetrievalResult("k1", 0.8765, "Use RLS policies", {"title": "Auth"})]
    prompt = TemplateRenderer().render("structured", _context(registry, knowledge=knowledge))

    assert "- Auth (score 0.88): Use RLS policies" in prompt


def test_missing_mandatory_field_raises(registry):
    from prompt_pipeline.errors import RenderError
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    context = _context(registry, description="   ")

    with pytest.raises(RenderError) as exc_info:
        TemplateRenderer().render("structured", context)

    assert exc_info.value.missing == ("description",)
    assert exc_info.value.template_id == "structured"


def test_unknown_template_raises(registry):
    from prompt_pipeline.errors import RenderError
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    with pytest.raises(RenderError) as exc_info:
        TemplateRenderer().render("does_not_exist", _context(registry))

    assert exc_info.value.template_id == "does_not_exist"


def test_unknown_placeholder_raises(registry):
    from prompt_pipeline.errors import RenderError
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    renderer = TemplateRenderer(loader=lambda name: "Hello {project_name}, {secret_field}")

    with pytest.raises(RenderError, match="secret_field"):
        renderer.render("custom", _context(registry))


def test_values_with_braces_are_not_reinterpreted(registry):
    from prompt_pipeline.rendering.renderer import TemplateRenderer

    renderer = TemplateRenderer(loader=lambda name: "{project_name}: {description}")
    prompt = renderer.render("custom", _context(registry, description="Render {tool_name} literally"))

    assert prompt == "TaskFlow: Render {tool_name} literally\n"


def test_every_shipped_template_renders(registry):
    from prompt_pipeline.rendering.renderer import PLACEHOLDER, TemplateRenderer
    from prompt_pipeline.templates import list_templates

    renderer = TemplateRenderer()
    for template_id in list_templates():
        prompt = renderer.render(template_id, _context(registry))
        assert not PLACEHOLDER.search(prompt), template_id
        assert "TaskFlow" in prompt


def test_resolve_template_id_precedence(registry):
    from prompt_pipeline.models import PromptStage, StrategyType
    from prompt_pipeline.rendering.renderer import resolve_template_id

    lovable = registry.get("lovable")
    cursor = registry.get("cursor")

    # Stage template wins
    assert resolve_template_id(lovable, PromptStage.APP_SKELETON, StrategyType.STRUCTURED) == "lovable_skeleton"
    # Then the tool's strategy template
    assert resolve_template_id(lovable, PromptStage.DEBUGGING, StrategyType.STRUCTURED) == "lovable_task"
    assert resolve_template_id(cursor, PromptStage.DEBUGGING, StrategyType.STRUCTURED) == "cursor_code"
    # Then the generic template
    assert resolve_template_id(cursor, PromptStage.DEBUGGING, StrategyType.CONVERSATIONAL) == "conversational"
    assert resolve_template_id(lovable, PromptStage.OPTIMIZATION, StrategyType.INCREMENTAL) == "incremental"
