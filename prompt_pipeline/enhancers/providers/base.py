# prompt_pipeline/enhancers/providers/base.py
"""Abstract base class for prompt enhancers."""

from abc import ABC, abstractmethod

from prompt_pipeline.enhancers.prompts import load_prompt
from prompt_pipeline.models import ToolProfile


class PromptEnhancer(ABC):
    """Abstract base class for LLM-backed prompt enhancers."""

    @abstractmethod
    def enhance(self, prompt: str, profile: ToolProfile) -> str:
        """
        Rewrite a prompt to be more specific and actionable.

        Args:
            prompt: Optimized prompt text
            profile: Profile of the tool the prompt is written for

        Returns:
            Enhanced prompt text

        Raises:
            EnhancementError: If the provider fails or returns nothing
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging (e.g., 'openai', 'anthropic')."""
        pass

    def build_request(self, prompt: str, profile: ToolProfile) -> str:
        return load_prompt("enhance").format(tool_name=profile.display_name, prompt=prompt)
