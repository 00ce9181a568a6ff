"""Request prompts sent to enhancement providers."""

from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=None)
def load_prompt(name: str) -> str:
    """Read `<name>.txt` from this package. Raises ValueError if it is missing."""
    path = PROMPTS_DIR / f"{name}.txt"
    if not path.is_file():
        available = sorted(p.stem for p in PROMPTS_DIR.glob("*.txt"))
        raise ValueError(f"Prompt not found: {name} (available: {', '.join(available)})")
    return path.read_text(encoding="utf-8")
