# prompt_pipeline/enhancers/providers/anthropic_provider.py
"""Anthropic Claude prompt enhancer."""

import os
from typing import Optional

from anthropic import Anthropic, AnthropicError

from prompt_pipeline.enhancers.providers.base import PromptEnhancer
from prompt_pipeline.errors import EnhancementError
from prompt_pipeline.models import ToolProfile

SYSTEM_PROMPT = "You improve prompts for AI code-generation tools. Return only the improved prompt."


class AnthropicEnhancer(PromptEnhancer):
    """Anthropic Claude-based prompt enhancer."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-haiku-4-5-20251001",
    ):
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model
        try:
            self._client = Anthropic(api_key=self.api_key)
        except AnthropicError as e:
            raise EnhancementError(f"Anthropic client unavailable: {e}", provider="anthropic") from e

    @property
    def name(self) -> str:
        return "anthropic"

    def enhance(self, prompt: str, profile: ToolProfile) -> str:
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=4096,
                messages=[
                    {"role": "user", "content": self.build_request(prompt, profile)},
                ],
                system=SYSTEM_PROMPT,
                temperature=0.3,
            )
        except AnthropicError as e:
            raise EnhancementError(f"Anthropic enhancement failed: {e}", provider=self.name)

        if not response.content:
            raise EnhancementError("Anthropic returned an empty prompt", provider=self.name)
        content = response.content[0].text.strip()
        if not content:
            raise EnhancementError("Anthropic returned an empty prompt", provider=self.name)
        return content
