"""Pipeline Orchestrator package."""

from prompt_pipeline.orchestrator.orchestrator import Orchestrator

__all__ = ["Orchestrator"]
