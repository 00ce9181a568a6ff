"""Database configuration."""

import os
from pathlib import Path

DEFAULT_DB_PATH = Path.home() / ".prompt_pipeline" / "knowledge.db"


def get_db_path() -> Path:
    """Get the database path, with environment override support."""
    env_path = os.environ.get("PROMPT_PIPELINE_DB")
    if env_path:
        return Path(env_path)
    return DEFAULT_DB_PATH
