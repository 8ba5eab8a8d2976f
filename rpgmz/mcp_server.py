"""FastMCP server exposing RPG Maker MZ project editing as MCP tools.

Tools:
  - load_project / create_project / get_project_info / list_resources
  - list_entities / get_entity / create_entity / update_entity /
    delete_entity / search_entities      (actors, classes, skills, items,
                                          weapons, armors, enemies, states)
  - list_maps / get_map / create_map / update_map / delete_map
  - list_events / create_event / update_event / delete_event

Storage failures are turned into MCP error results, so one failed call
never takes the server down. Logs go to stderr; stdout carries the
JSON-RPC stream.

Usage:
    uv run python -m rpgmz.mcp_server --project /path/to/MyGame
"""

import argparse
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated, Any, Literal

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from .config import get_settings
from .models import ENTITY_TYPES
from .session import Session
from .storage import StorageError

logger = logging.getLogger(__name__)

mcp = FastMCP("rpgmz")

session = Session()

EntityTypeName = Literal["actors", "classes", "skills", "items", "weapons", "armors", "enemies", "states"]
PositiveId = Annotated[int, Field(ge=1, description="Record ID (1 or higher)")]


def set_session(new_session: Session) -> None:
    """Replace the active session (used in tests)."""
    global session
    session = new_session


def get_session() -> Session:
    return session


@contextmanager
def _tool_errors() -> Iterator[None]:
    """Report storage failures to the client as tool errors."""
    try:
        yield
    except StorageError as e:
        logger.warning(f"{type(e).__name__}: {e}")
        raise ToolError(str(e)) from e


def _bullets(lines: list[str]) -> str:
    return "\n".join(f"- {line}" for line in lines)


# ── Project ──────────────────────────────────────────────


@mcp.tool()
def load_project(project_path: str) -> str:
    """Load an existing RPG Maker MZ project. Must be called before using other tools."""
    with _tool_errors():
        project = session.open(project_path)
        validation = project.validate()
        if not validation["valid"]:
            return f"Project loaded with warnings:\n{_bullets(validation['errors'])}\n\nPath: {project.path}"
        info = project.get_info()
        return (
            f"Project loaded successfully!\n\nName: {info.name}\nPath: {info.path}\n"
            f"Maps: {info.map_count}\nActors: {info.actor_count}\nItems: {info.item_count}\n"
            f"Version ID: {info.version_id}"
        )


@mcp.tool()
def create_project(project_path: str, game_title: str) -> str:
    """Create a new RPG Maker MZ project with default data files and load it."""
    with _tool_errors():
        project = session.create(project_path, game_title)
        return (
            f"Project created successfully!\n\nTitle: {game_title}\nPath: {project.path}\n\n"
            "Engine files (js/, fonts/) were not copied; open the project once in "
            "RPG Maker MZ to add them.\n\nThe project is now loaded and ready to use."
        )


@mcp.tool()
def get_project_info() -> dict[str, Any]:
    """Statistics for the loaded project plus any layout warnings."""
    with _tool_errors():
        project = session.require()
        info = project.get_info().model_dump()
        info["warnings"] = project.validate()["errors"]
        return info


@mcp.tool()
def list_resources(resource_type: str | None = None) -> dict[str, list[str]]:
    """List image/audio resource files. Filter by prefix, e.g. "img" or "audio/bgm"."""
    with _tool_errors():
        return session.require().list_resources(resource_type)


# ── Database entities ────────────────────────────────────


@mcp.tool()
def list_entities(entity_type: EntityTypeName) -> str:
    """List all entities of a given type (actors, items, weapons, ...)."""
    with _tool_errors():
        entities = session.require().collection(entity_type).list()
        label = ENTITY_TYPES[entity_type].label
        if not entities:
            return f"No {label}s found."
        lines = [f"[{e['id']}] {e.get('name') or '(unnamed)'}" for e in entities]
        return f"{label}s ({len(entities)}):\n" + "\n".join(lines)


@mcp.tool()
def get_entity(entity_type: EntityTypeName, id: PositiveId) -> dict[str, Any]:
    """Get the full record of one entity by ID."""
    with _tool_errors():
        return session.require().collection(entity_type).get(id)


@mcp.tool()
def create_entity(entity_type: EntityTypeName, data: dict[str, Any]) -> dict[str, Any]:
    """Create a new entity. "name" is required; omitted fields use editor defaults."""
    if not isinstance(data.get("name"), str) or not data["name"]:
        raise ToolError('"name" is required.')
    with _tool_errors():
        return session.require().collection(entity_type).create(data)


@mcp.tool()
def update_entity(entity_type: EntityTypeName, id: PositiveId, data: dict[str, Any]) -> dict[str, Any]:
    """Update an existing entity. Only the provided fields change."""
    with _tool_errors():
        return session.require().collection(entity_type).update(id, data)


@mcp.tool()
def delete_entity(entity_type: EntityTypeName, id: PositiveId) -> str:
    """Delete an entity. ID 1 of actors, classes and states cannot be deleted."""
    with _tool_errors():
        config = ENTITY_TYPES[entity_type]
        session.require().collection(entity_type).delete(id, protect_first=config.protect_first)
        return f"{config.label} ID {id} deleted."


@mcp.tool()
def search_entities(entity_type: EntityTypeName, query: str) -> str:
    """Search entities by keyword across name, note and descriptive fields."""
    with _tool_errors():
        config = ENTITY_TYPES[entity_type]
        results = session.require().collection(entity_type).search(query, config.search_fields)
        if not results:
            return f'No {config.label}s matching "{query}".'
        lines = [f"[{e['id']}] {e.get('name') or '(unnamed)'}" for e in results]
        return f'Search results for "{query}" in {config.label}s ({len(results)}):\n' + "\n".join(lines)


# ── Maps ─────────────────────────────────────────────────


@mcp.tool()
def list_maps() -> str:
    """List all maps in tree order."""
    with _tool_errors():
        maps = session.require().maps().list_maps()
        if not maps:
            return "No maps found."
        lines = [
            f"{'  ' if m['parentId'] > 0 else ''}[{m['id']}] {m['name']} (parent: {m['parentId']})"
            for m in maps
        ]
        return f"Maps ({len(maps)}):\n" + "\n".join(lines)


@mcp.tool()
def get_map(map_id: PositiveId) -> dict[str, Any]:
    """Map properties and a summary of its events (tile data omitted)."""
    with _tool_errors():
        info, data = session.require().maps().get_map(map_id)
        events = [e for e in data["events"] if e is not None]
        return {
            "id": map_id,
            "name": info["name"],
            "width": data.get("width"),
            "height": data.get("height"),
            "tileset_id": data.get("tilesetId"),
            "display_name": data.get("displayName", ""),
            "note": data.get("note", ""),
            "bgm": data["bgm"]["name"] if data.get("autoplayBgm") else None,
            "bgs": data["bgs"]["name"] if data.get("autoplayBgs") else None,
            "events": [{"id": e["id"], "name": e["name"], "x": e["x"], "y": e["y"]} for e in events],
        }


@mcp.tool()
def create_map(
    name: str,
    width: Annotated[int, Field(ge=1, le=256)] = 17,
    height: Annotated[int, Field(ge=1, le=256)] = 13,
    tileset_id: Annotated[int, Field(ge=1)] = 1,
    parent_id: Annotated[int, Field(ge=0)] = 0,
    bgm_name: str | None = None,
) -> dict[str, Any]:
    """Create a new empty map and add it to the map tree."""
    with _tool_errors():
        return session.require().maps().create_map(name, width, height, tileset_id, parent_id, bgm_name)


@mcp.tool()
def update_map(
    map_id: PositiveId,
    name: str | None = None,
    display_name: str | None = None,
    tileset_id: int | None = None,
    note: str | None = None,
    disable_dashing: bool | None = None,
    bgm_name: str | None = None,
    bgs_name: str | None = None,
) -> str:
    """Update map properties. An empty bgm_name/bgs_name turns that audio off."""
    with _tool_errors():
        session.require().maps().update_map(
            map_id,
            name=name,
            display_name=display_name,
            tileset_id=tileset_id,
            note=note,
            disable_dashing=disable_dashing,
            bgm_name=bgm_name,
            bgs_name=bgs_name,
        )
        return f"Map {map_id} updated."


@mcp.tool()
def delete_map(map_id: PositiveId) -> str:
    """Delete a map and its file. Map 1 cannot be deleted."""
    with _tool_errors():
        session.require().maps().delete_map(map_id)
        return f"Map {map_id} deleted."


# ── Events ───────────────────────────────────────────────


@mcp.tool()
def list_events(map_id: PositiveId) -> str:
    """List the events placed on a map."""
    with _tool_errors():
        events = session.require().maps().list_events(map_id)
        if not events:
            return f"No events on map {map_id}."
        lines = [
            f'[{e["id"]}] "{e["name"]}" at ({e["x"]}, {e["y"]}), {len(e.get("pages", []))} page(s)'
            for e in events
        ]
        return f"Events on map {map_id} ({len(events)}):\n" + "\n".join(lines)


@mcp.tool()
def create_event(
    map_id: PositiveId,
    name: str,
    x: Annotated[int, Field(ge=0)],
    y: Annotated[int, Field(ge=0)],
    note: str = "",
    character_name: str | None = None,
    character_index: int = 0,
    trigger: Annotated[int, Field(ge=0, le=4, description="0=Action Button, 1=Player Touch, 2=Event Touch, 3=Autorun, 4=Parallel")] = 0,
) -> dict[str, Any]:
    """Place a new single-page event on a map."""
    with _tool_errors():
        return session.require().maps().create_event(
            map_id, name, x, y, note, character_name, character_index, trigger
        )


@mcp.tool()
def update_event(
    map_id: PositiveId,
    event_id: PositiveId,
    name: str | None = None,
    x: Annotated[int, Field(ge=0)] | None = None,
    y: Annotated[int, Field(ge=0)] | None = None,
    note: str | None = None,
    character_name: str | None = None,
    character_index: int | None = None,
) -> dict[str, Any]:
    """Update an event's name, position, note or sprite."""
    with _tool_errors():
        return session.require().maps().update_event(
            map_id, event_id, name, x, y, note, character_name, character_index
        )


@mcp.tool()
def delete_event(map_id: PositiveId, event_id: PositiveId) -> str:
    """Remove an event from a map."""
    with _tool_errors():
        session.require().maps().delete_event(map_id, event_id)
        return f"Event {event_id} deleted from map {map_id}."


def main() -> None:
    parser = argparse.ArgumentParser(description="RPG Maker MZ MCP server (stdio)")
    parser.add_argument("--project", default=None, help="Project directory to load at startup")
    parser.add_argument("--debug", action="store_true", help="Log debug output to stderr")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        stream=sys.stderr,
        level="DEBUG" if args.debug else settings.log_level,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    project = args.project or settings.project
    if project:
        session.open(project)

    logger.info("Starting RPG Maker MZ MCP server...")
    mcp.run()


if __name__ == "__main__":
    main()
