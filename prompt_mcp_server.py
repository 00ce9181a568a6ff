#!/usr/bin/env python3
"""
MCP Server wrapper for the prompt pipeline.

Exposes prompt generation, validation and tool listing via MCP.
"""
from fastmcp import FastMCP

from prompt_pipeline.mcp_server import (
    generate_prompt_tool,
    list_tools_tool,
    validate_prompt_tool,
)
from prompt_pipeline.utils.logging import setup_logging

logger = setup_logging("prompt_pipeline")

# Create MCP server
mcp = FastMCP("prompt-pipeline")


@mcp.tool()
def generate_prompt(
    app_name: str,
    idea_description: str,
    tool_id: str = "lovable",
    stage: str = "app_skeleton",
    platforms: list[str] = None,
    design_style: str = None,
    style_description: str = None,
    target_audience: str = None,
    project_complexity: str = "medium",
    technical_experience: str = None,
    strategy: str = None,
) -> dict:
    """Generate a tool-specific prompt for one stage of an app idea. Returns prompt, confidence and suggestions."""
    return generate_prompt_tool(
        app_name=app_name,
        idea_description=idea_description,
        tool_id=tool_id,
        stage=stage,
        platforms=platforms,
        design_style=design_style,
        style_description=style_description,
        target_audience=target_audience,
        project_complexity=project_complexity,
        technical_experience=technical_experience,
        strategy=strategy,
    )


@mcp.tool()
def validate_prompt(text: str) -> dict:
    """Score a prompt out of 100 with issues and improvement suggestions."""
    return validate_prompt_tool(text)


@mcp.tool()
def list_tools() -> dict:
    """List supported AI coding tools."""
    return list_tools_tool()


if __name__ == "__main__":
    mcp.run()
