"""Local tool usage counter.

Counts how often each tool has been used, persisted as a JSON object of
tool id -> count in the data directory (usage.json).
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from .config import get_data_path

logger = logging.getLogger(__name__)

USAGE_FILENAME = "usage.json"
PAY_CALCULATOR_TOOL_ID = "pay-calculator"


class UsageTracker(Protocol):
    """Interface for anything that records tool usage."""

    def increment_usage(self, tool_id: str) -> int: ...

    def get_usage(self, tool_id: str) -> int: ...


class UsageStore:
    """UsageTracker backed by a JSON file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else get_data_path() / USAGE_FILENAME

    def load(self) -> Dict[str, int]:
        """Load all counts. A missing or corrupt file reads as no usage."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                counts = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to load usage counts from {self.path}: {e}")
            return {}
        if not isinstance(counts, dict):
            logger.error(f"Ignoring usage counts in {self.path}: expected a JSON object")
            return {}
        return {k: v for k, v in counts.items() if isinstance(v, int) and not isinstance(v, bool)}

    def get_usage(self, tool_id: str) -> int:
        return self.load().get(tool_id, 0)

    def increment_usage(self, tool_id: str) -> int:
        """Add one use of tool_id and return the new count."""
        counts = self.load()
        counts[tool_id] = counts.get(tool_id, 0) + 1

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(counts, f, indent=2)

        logger.debug(f"Usage of {tool_id} now {counts[tool_id]}")
        return counts[tool_id]
