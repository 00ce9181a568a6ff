"""Tests for MCP input schemas."""

import pytest
from pydantic import ValidationError


def test_generate_input_normalizes():
    from prompt_pipeline.schemas import GeneratePromptInput

    data = GeneratePromptInput(
        app_name="  TaskFlow ", idea_description="Tasks", tool_id=" Bolt ", stage="Page-UI"
    )

    assert data.app_name == "TaskFlow"
    assert data.tool_id == "bolt"
    assert data.stage == "page_ui"
    assert data.platforms == ["web"]


def test_generate_input_app_idea():
    from prompt_pipeline.schemas import GeneratePromptInput

    idea = GeneratePromptInput(app_name="TaskFlow", idea_description="Tasks", strategy="incremental").app_idea()

    assert idea["app_name"] == "TaskFlow"
    assert idea["project_complexity"] == "medium"
    assert "tool_id" not in idea
    assert "strategy" not in idea


def test_generate_input_rejects_unknown_stage():
    from prompt_pipeline.schemas import GeneratePromptInput

    with pytest.raises(ValidationError):
        GeneratePromptInput(app_name="TaskFlow", idea_description="Tasks", stage="deploy")


def test_validate_input_requires_text():
    from prompt_pipeline.schemas import ValidatePromptInput

    with pytest.raises(ValidationError):
        ValidatePromptInput(text="")
