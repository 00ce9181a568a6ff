"""Prompt quality validation."""

from prompt_pipeline.validation.prompt_validator import PromptValidation, validate_prompt

__all__ = ["PromptValidation", "validate_prompt"]
