"""Tool profiles for supported downstream code-generation tools."""

from pathlib import Path

PROFILES_DIR = Path(__file__).parent / "data"
