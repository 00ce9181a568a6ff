# prompt_pipeline/errors.py
"""Custom error types for the prompt pipeline."""


class PromptPipelineError(Exception):
    """Base error for prompt pipeline operations."""
    pass


class UnsupportedToolError(PromptPipelineError):
    """Requested tool id is not in the profile registry."""

    def __init__(self, tool_id: str, supported: tuple = ()):
        message = f"Unsupported tool: {tool_id}"
        if supported:
            message += f" (supported: {', '.join(supported)})"
        super().__init__(message)
        self.tool_id = tool_id
        self.supported = supported


class RetrievalError(PromptPipelineError):
    """Knowledge store could not be reached or queried."""

    def __init__(self, message: str, collection: str = None):
        super().__init__(message)
        self.collection = collection


class RenderError(PromptPipelineError):
    """Template could not be rendered from the given context."""

    def __init__(self, message: str, template_id: str = None, missing: tuple = ()):
        super().__init__(message)
        self.template_id = template_id
        self.missing = missing


class EnhancementError(PromptPipelineError):
    """AI enhancement of a rendered prompt failed."""

    def __init__(self, message: str, provider: str = None):
        super().__init__(message)
        self.provider = provider
