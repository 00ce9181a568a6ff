"""LLM providers for prompt enhancement."""

from prompt_pipeline.enhancers.providers.base import PromptEnhancer
from prompt_pipeline.enhancers.providers.openai_provider import OpenAIEnhancer
from prompt_pipeline.enhancers.providers.anthropic_provider import AnthropicEnhancer

PROVIDERS = {
    "openai": OpenAIEnhancer,
    "anthropic": AnthropicEnhancer,
}


def get_enhancer(name: str) -> PromptEnhancer:
    """Create an enhancer by provider name."""
    try:
        return PROVIDERS[name.lower().strip()]()
    except KeyError:
        raise ValueError(f"Unknown enhancement provider: {name}")


__all__ = ["PromptEnhancer", "OpenAIEnhancer", "AnthropicEnhancer", "PROVIDERS", "get_enhancer"]
