"""Lay down the data documents of a brand-new RPG Maker MZ project.

Only the directory tree and JSON documents are created. Engine files
(js/, fonts/) are not copied; opening the project once in the editor
supplies them.
"""

import logging
from pathlib import Path

from .defaults import (
    DEFAULT_FACTORIES,
    default_map,
    default_map_info,
    default_system,
    default_tileset,
)
from .models import ENTITY_TYPES
from .storage import PROJECT_FILES, ProjectExistsError, ensure_dir, exists, map_filename, write_json

logger = logging.getLogger(__name__)

PROJECT_DIRS = [
    "data", "css", "fonts", "icon",
    "img/animations", "img/battlebacks1", "img/battlebacks2",
    "img/characters", "img/enemies", "img/faces", "img/parallaxes",
    "img/pictures", "img/sv_actors", "img/sv_enemies", "img/system",
    "img/tilesets", "img/titles1", "img/titles2",
    "audio/bgm", "audio/bgs", "audio/me", "audio/se",
    "js/plugins", "js/libs", "movies", "effects",
]

EMPTY_ARRAY_FILES = ["CommonEvents.json", "Troops.json", "Animations.json"]


def init_project(project_path: Path | str, game_title: str) -> list[str]:
    """Create the project tree at ``project_path``.

    Returns the data file names written. Refuses to touch a directory that
    already holds a project marker.
    """
    root = Path(project_path)
    for name in PROJECT_FILES:
        if exists(root / name):
            raise ProjectExistsError(f"A project already exists at: {root}")

    for rel in PROJECT_DIRS:
        ensure_dir(root / rel)
    data = root / "data"

    write_json(root / "Game.rmmzproject", {})
    write_json(data / "System.json", default_system(game_title))
    written = ["System.json"]

    # Database files start with their editor default as record 1
    for entity_type, config in ENTITY_TYPES.items():
        write_json(data / config.filename, [None, DEFAULT_FACTORIES[entity_type](1)])
        written.append(config.filename)

    for filename in EMPTY_ARRAY_FILES:
        write_json(data / filename, [None])
        written.append(filename)
    # maps need at least one tileset to render
    write_json(data / "Tilesets.json", [None, default_tileset(1)])
    written.append("Tilesets.json")

    write_json(data / map_filename(1), default_map(17, 13, 1))
    write_json(data / "MapInfos.json", [None, default_map_info(1, "Map001", 1)])
    written += [map_filename(1), "MapInfos.json"]

    logger.info(f"Project created: {root} ({game_title})")
    return written
