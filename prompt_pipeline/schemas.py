"""Tool input schemas - centralized validation for the MCP tools.

These schemas:
- Validate all tool inputs in one place
- Provide clear error messages
- Document expected input formats
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prompt_pipeline.models import PromptStage


class GeneratePromptInput(BaseModel):
    """Schema for prompt generation

    Used by: generate_prompt tool
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "app_name": "TaskFlow",
            "idea_description": "A task management dashboard for small teams with real-time updates",
            "tool_id": "lovable",
            "stage": "app_skeleton",
            "platforms": ["web"],
        }
    })

    app_name: str = Field(..., min_length=1, max_length=200, description="App name")
    idea_description: str = Field(..., min_length=1, max_length=5000, description="What the app does")
    tool_id: str = Field(default="lovable", min_length=1, max_length=50, description="Target tool id")
    stage: str = Field(default="app_skeleton", description="Pipeline stage")
    platforms: list[Literal["web", "mobile"]] = Field(default_factory=lambda: ["web"])
    design_style: Optional[Literal["minimal", "playful", "business"]] = None
    style_description: Optional[str] = Field(default=None, max_length=500)
    target_audience: Optional[str] = Field(default=None, max_length=200)
    project_complexity: Literal["simple", "medium", "complex"] = "medium"
    technical_experience: Optional[Literal["beginner", "intermediate", "advanced"]] = None
    strategy: Optional[Literal["structured", "conversational", "incremental"]] = None

    @field_validator('app_name', 'idea_description')
    @classmethod
    def validate_not_blank(cls, v):
        """Ensure text is not just whitespace"""
        if not v.strip():
            raise ValueError("Value cannot be empty or whitespace only")
        return v.strip()

    @field_validator('tool_id')
    @classmethod
    def normalize_tool_id(cls, v):
        return v.strip().lower()

    @field_validator('stage')
    @classmethod
    def validate_stage(cls, v):
        """Stage must be one of the known pipeline stages"""
        return PromptStage.from_string(v).value

    def app_idea(self) -> dict:
        return self.model_dump(exclude={"tool_id", "stage", "strategy"})


class ValidatePromptInput(BaseModel):
    """Schema for prompt validation

    Used by: validate_prompt tool
    """

    text: str = Field(..., min_length=1, max_length=50000, description="Prompt text to score")
