"""System.json ``versionId`` bookkeeping.

RPG Maker MZ re-reads the project's data files when it notices that
``versionId`` in System.json changed, so every data mutation is followed by
one ``bump()``.
"""

import logging
from pathlib import Path
from typing import Any

from .errors import DocumentValidationError
from .files import read_json_raw, write_json

logger = logging.getLogger(__name__)

VERSION_FIELD = "versionId"


def _version_of(system: Any) -> int | float:
    """Counter value of a parsed ledger document; 0 when absent or not a number."""
    if not isinstance(system, dict):
        return 0
    value = system.get(VERSION_FIELD)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


class VersionLedger:
    def __init__(self, project_path: Path) -> None:
        self.path = Path(project_path) / "data" / "System.json"

    def current(self) -> int | float:
        """Read the counter without changing it."""
        return _version_of(read_json_raw(self.path))

    def bump(self) -> int | float:
        """Increment the counter by one and persist. Returns the new value.

        Other System.json fields are written back untouched.
        """
        system = read_json_raw(self.path)
        if not isinstance(system, dict):
            raise DocumentValidationError(
                f"{self.path.name} must be a JSON object to hold {VERSION_FIELD}", self.path
            )
        current = _version_of(system)
        system[VERSION_FIELD] = current + 1
        write_json(self.path, system)
        logger.info(f"versionId bumped: {current} → {current + 1}")
        return current + 1
