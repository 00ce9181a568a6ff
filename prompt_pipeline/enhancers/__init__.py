"""AI enhancement of rendered prompts."""

from prompt_pipeline.enhancers.providers import (
    AnthropicEnhancer,
    OpenAIEnhancer,
    PromptEnhancer,
    get_enhancer,
)

__all__ = ["PromptEnhancer", "OpenAIEnhancer", "AnthropicEnhancer", "get_enhancer"]
