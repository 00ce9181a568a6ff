"""Prompt templates for the renderer."""

from pathlib import Path

from prompt_pipeline.errors import RenderError

TEMPLATES_DIR = Path(__file__).parent


def load_template(name: str) -> str:
    """Load a prompt template by name."""
    path = TEMPLATES_DIR / f"{name}.txt"
    if not name or not path.is_file():
        raise RenderError(f"Template not found: {name}", template_id=name)
    return path.read_text(encoding="utf-8")


def list_templates() -> list[str]:
    return sorted(p.stem for p in TEMPLATES_DIR.glob("*.txt"))
