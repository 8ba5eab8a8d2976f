"""RPG Maker MZ project directory: layout checks, statistics, resources."""

import logging
from pathlib import Path

from ..defaults import DEFAULT_FACTORIES
from ..models import ENTITY_TYPES, ProjectInfo
from .database import EntityCollection
from .errors import NotFoundError, StorageError
from .files import exists, list_files, read_json_raw
from .maps import MAP_FILE_RE, MapStore
from .version import VersionLedger

logger = logging.getLogger(__name__)

REQUIRED_DATA_FILES = [
    "Actors.json",
    "Classes.json",
    "CommonEvents.json",
    "Enemies.json",
    "Items.json",
    "MapInfos.json",
    "Skills.json",
    "States.json",
    "System.json",
    "Tilesets.json",
    "Troops.json",
    "Weapons.json",
    "Armors.json",
    "Animations.json",
]

# The editor writes the lowercase name since ~v1.6; older projects use Game.
PROJECT_FILES = ["game.rmmzproject", "Game.rmmzproject"]

RESOURCE_DIRS = [
    "img/characters", "img/faces", "img/parallaxes", "img/pictures",
    "img/sv_actors", "img/sv_enemies", "img/enemies", "img/tilesets",
    "img/titles1", "img/titles2", "img/battlebacks1", "img/battlebacks2",
    "img/animations", "img/system",
    "audio/bgm", "audio/bgs", "audio/me", "audio/se",
]


class ProjectManager:
    def __init__(self, project_path: Path | str) -> None:
        self._path = Path(project_path).resolve()
        self._version = VersionLedger(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def data_path(self) -> Path:
        return self._path / "data"

    @property
    def version(self) -> VersionLedger:
        return self._version

    @classmethod
    def load(cls, project_path: Path | str) -> "ProjectManager":
        """Open a project. Layout problems are logged, not raised."""
        manager = cls(project_path)
        validation = manager.validate()
        if not validation["valid"]:
            logger.warning(f"Project validation warnings: {', '.join(validation['errors'])}")
        logger.info(f"Project loaded: {manager.path}")
        return manager

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def validate(self) -> dict:
        """Check the marker file and required data files. Never raises.

        Returns ``{"valid": bool, "errors": [str, ...]}``.
        """
        errors: list[str] = []

        if not any(exists(self._path / name) for name in PROJECT_FILES):
            errors.append(f"Missing project file: {PROJECT_FILES[0]}")

        if not self.data_path.is_dir():
            errors.append("Missing data/ directory")
            return {"valid": False, "errors": errors}

        for filename in REQUIRED_DATA_FILES:
            if not exists(self.data_path / filename):
                errors.append(f"Missing data file: {filename}")

        return {"valid": not errors, "errors": errors}

    def _count_entities(self, filename: str) -> int:
        """Non-null entries in a database file; 0 if it can't be read."""
        try:
            data = read_json_raw(self.data_path / filename)
        except StorageError:
            return 0
        if not isinstance(data, list):
            return 0
        return sum(1 for entry in data if entry is not None)

    def _version_id(self) -> int | float:
        try:
            return self._version.current()
        except StorageError:
            return 0

    def get_info(self) -> ProjectInfo:
        """Best-effort statistics; unreadable files count as empty."""
        data_files = list_files(self.data_path, ".json")
        return ProjectInfo(
            name=self._path.name,
            path=str(self._path),
            data_files=data_files,
            map_count=sum(1 for f in data_files if MAP_FILE_RE.match(f)),
            actor_count=self._count_entities("Actors.json"),
            item_count=self._count_entities("Items.json"),
            version_id=self._version_id(),
        )

    def list_resources(self, type_filter: str | None = None) -> dict[str, list[str]]:
        """Files per resource directory, e.g. ``{"audio/bgm": ["Battle1.ogg"]}``.

        ``type_filter`` keeps only directories starting with it ("img",
        "audio/se", ...). Empty or missing directories are left out.
        """
        resources: dict[str, list[str]] = {}
        for rel in RESOURCE_DIRS:
            if type_filter and not rel.startswith(type_filter):
                continue
            files = list_files(self._path / rel)
            if files:
                resources[rel] = files
        return resources

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------

    def collection(self, entity_type: str) -> EntityCollection:
        """CRUD manager for one database file ("actors", "items", ...)."""
        config = ENTITY_TYPES.get(entity_type)
        if config is None:
            raise NotFoundError(
                f"Unknown entity type '{entity_type}' (expected one of: {', '.join(ENTITY_TYPES)})"
            )
        return EntityCollection(
            self.data_path / config.filename,
            DEFAULT_FACTORIES[entity_type],
            self._version,
            label=config.label,
            shape=config.shape,
        )

    def maps(self) -> MapStore:
        return MapStore(self._path, self._version)
