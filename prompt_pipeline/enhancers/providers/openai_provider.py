# prompt_pipeline/enhancers/providers/openai_provider.py
"""OpenAI prompt enhancer."""

import os
from typing import Optional

from openai import OpenAI, OpenAIError

from prompt_pipeline.enhancers.providers.base import PromptEnhancer
from prompt_pipeline.errors import EnhancementError
from prompt_pipeline.models import ToolProfile

SYSTEM_PROMPT = "You improve prompts for AI code-generation tools. Return only the improved prompt."


class OpenAIEnhancer(PromptEnhancer):
    """OpenAI-based prompt enhancer."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4.1-mini",
    ):
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        try:
            self._client = OpenAI(api_key=self.api_key)
        except OpenAIError as e:
            raise EnhancementError(f"OpenAI client unavailable: {e}", provider="openai") from e

    @property
    def name(self) -> str:
        return "openai"

    def enhance(self, prompt: str, profile: ToolProfile) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": self.build_request(prompt, profile)},
                ],
                temperature=0.3,
            )
        except OpenAIError as e:
            raise EnhancementError(f"OpenAI enhancement failed: {e}", provider=self.name)

        content = (response.choices[0].message.content or "").strip()
        if not content:
            raise EnhancementError("OpenAI returned an empty prompt", provider=self.name)
        return content
