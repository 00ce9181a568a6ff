# tests/test_enhancers.py
"""Tests for the LLM prompt enhancers."""

from unittest.mock import Mock, patch

import pytest


def _profile():
    from prompt_pipeline.profiles.registry import ToolProfileRegistry

    return ToolProfileRegistry.default().get("lovable")


def test_enhance_prompt_template():
    from prompt_pipeline.enhancers.prompts import load_prompt

    template = load_prompt("enhance")
    assert "{tool_name}" in template
    assert "{prompt}" in template


def test_load_unknown_prompt_raises():
    from prompt_pipeline.enhancers.prompts import load_prompt

    with pytest.raises(ValueError, match="Prompt not found"):
        load_prompt("does_not_exist")


def test_openai_enhancer_defaults():
    from prompt_pipeline.enhancers import OpenAIEnhancer

    with patch("prompt_pipeline.enhancers.providers.openai_provider.OpenAI"):
        enhancer = OpenAIEnhancer(api_key="test-key")

    assert enhancer.name == "openai"
    assert enhancer.model == "gpt-4.1-mini"


def test_openai_enhancer_returns_content():
    from prompt_pipeline.enhancers import OpenAIEnhancer

    with patch("prompt_pipeline.enhancers.providers.openai_provider.OpenAI"):
        enhancer = OpenAIEnhancer(api_key="test-key")

    mock_response = Mock()
    mock_response.choices = [Mock(message=Mock(content="  Better prompt  "))]
    enhancer._client.chat.completions.create.return_value = mock_response

    assert enhancer.enhance("Build TaskFlow", _profile()) == "Better prompt"

    messages = enhancer._client.chat.completions.create.call_args.kwargs["messages"]
    assert "Lovable" in messages[1]["content"]
    assert "Build TaskFlow" in messages[1]["content"]


def test_openai_enhancer_wraps_api_errors():
    from openai import OpenAIError

    from prompt_pipeline.enhancers import OpenAIEnhancer
    from prompt_pipeline.errors import EnhancementError

    with patch("prompt_pipeline.enhancers.providers.openai_provider.OpenAI"):
        enhancer = OpenAIEnhancer(api_key="test-key")
    enhancer._client.chat.completions.create.side_effect = OpenAIError("rate limited")

    with pytest.raises(EnhancementError) as exc_info:
        enhancer.enhance("Build TaskFlow", _profile())
    assert exc_info.value.provider == "openai"


def test_openai_enhancer_rejects_empty_content():
    from prompt_pipeline.enhancers import OpenAIEnhancer
    from prompt_pipeline.errors import EnhancementError

    with patch("prompt_pipeline.enhancers.providers.openai_provider.OpenAI"):
        enhancer = OpenAIEnhancer(api_key="test-key")
    mock_response = Mock()
    mock_response.choices = [Mock(message=Mock(content=None))]
    enhancer._client.chat.completions.create.return_value = mock_response

    with pytest.raises(EnhancementError, match="empty"):
        enhancer.enhance("Build TaskFlow", _profile())


def test_anthropic_enhancer_returns_content():
    from prompt_pipeline.enhancers import AnthropicEnhancer

    with patch("prompt_pipeline.enhancers.providers.anthropic_provider.Anthropic"):
        enhancer = AnthropicEnhancer(api_key="test-key")

    mock_response = Mock()
    mock_response.content = [Mock(text="Better prompt\n")]
    enhancer._client.messages.create.return_value = mock_response

    assert enhancer.name == "anthropic"
    assert enhancer.enhance("Build TaskFlow", _profile()) == "Better prompt"
    assert "system" in enhancer._client.messages.create.call_args.kwargs


def test_anthropic_enhancer_wraps_api_errors():
    from anthropic import AnthropicError

    from prompt_pipeline.enhancers import AnthropicEnhancer
    from prompt_pipeline.errors import EnhancementError

    with patch("prompt_pipeline.enhancers.providers.anthropic_provider.Anthropic"):
        enhancer = AnthropicEnhancer(api_key="test-key")
    enhancer._client.messages.create.side_effect = AnthropicError("overloaded")

    with pytest.raises(EnhancementError, match="overloaded"):
        enhancer.enhance("Build TaskFlow", _profile())


def test_anthropic_enhancer_rejects_empty_response():
    from prompt_pipeline.enhancers import AnthropicEnhancer
    from prompt_pipeline.errors import EnhancementError

    with patch("prompt_pipeline.enhancers.providers.anthropic_provider.Anthropic"):
        enhancer = AnthropicEnhancer(api_key="test-key")
    mock_response = Mock()
    mock_response.content = []
    enhancer._client.messages.create.return_value = mock_response

    with pytest.raises(EnhancementError):
        enhancer.enhance("Build TaskFlow", _profile())


def test_get_enhancer():
    from prompt_pipeline.enhancers import AnthropicEnhancer, get_enhancer

    with patch("prompt_pipeline.enhancers.providers.anthropic_provider.Anthropic"):
        enhancer = get_enhancer(" Anthropic ")

    assert isinstance(enhancer, AnthropicEnhancer)


def test_get_enhancer_unknown():
    from prompt_pipeline.enhancers import get_enhancer

    with pytest.raises(ValueError, match="Unknown enhancement provider"):
        get_enhancer("cohere")
