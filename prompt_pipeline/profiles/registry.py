"""Read-only registry of tool profiles.

The registry is built once from the JSON files in profiles/data and passed
to the orchestrator; nothing mutates it afterwards.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional

from prompt_pipeline.errors import UnsupportedToolError
from prompt_pipeline.models import ToolProfile
from prompt_pipeline.profiles import PROFILES_DIR

logger = logging.getLogger(__name__)


class ToolProfileRegistry:
    """Lookup of ToolProfile by tool id."""

    def __init__(self, profiles: Iterable[ToolProfile]):
        by_id = {}
        for profile in profiles:
            if profile.tool_id in by_id:
                raise ValueError(f"Duplicate tool id: {profile.tool_id}")
            by_id[profile.tool_id] = profile
        self._profiles = MappingProxyType(by_id)

    @classmethod
    def from_directory(cls, directory: Path) -> "ToolProfileRegistry":
        """Load every *.json profile in a directory."""
        directory = Path(directory)
        profiles = []
        for path in sorted(directory.glob("*.json")):
            with open(path, encoding="utf-8") as f:
                profiles.append(ToolProfile.from_dict(json.load(f)))
            logger.debug(f"Loaded tool profile from {path.name}")
        return cls(profiles)

    @classmethod
    def default(cls, directory: Optional[Path] = None) -> "ToolProfileRegistry":
        """Registry of the profiles shipped with the package."""
        return cls.from_directory(directory or PROFILES_DIR)

    def get(self, tool_id: str) -> ToolProfile:
        """Return the profile for `tool_id`.

        Raises:
            UnsupportedToolError: If no profile is registered for the id
        """
        try:
            return self._profiles[tool_id]
        except KeyError:
            raise UnsupportedToolError(tool_id, supported=self.tool_ids())

    def tool_ids(self) -> tuple[str, ...]:
        return tuple(sorted(self._profiles))

    def __contains__(self, tool_id: str) -> bool:
        return tool_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
