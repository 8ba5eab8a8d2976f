"""Maps (one MapNNN.json per map, indexed by MapInfos.json) and their events.

MapInfos.json is a null-headed ID-indexed array like the database files.
Each map document carries its own null-headed ``events`` array. Deleting a
map removes its MapNNN.json outright and nulls its MapInfos slot; map IDs
are never reused. Every document written is followed by one version bump.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from ..defaults import default_audio, default_event_page, default_map, default_map_info
from ..models import MapData, MapInfo
from .errors import DocumentValidationError, MissingDocumentError, NotFoundError, ProtectedError
from .files import delete_file, exists, read_json, read_json_raw, write_json
from .version import VersionLedger

logger = logging.getLogger(__name__)

MAP_FILE_RE = re.compile(r"^Map\d{3}\.json$")


def map_filename(map_id: int) -> str:
    """1 → "Map001.json"."""
    return f"Map{map_id:03d}.json"


class MapStore:
    def __init__(self, project_path: Path, ledger: VersionLedger) -> None:
        self.data_path = Path(project_path) / "data"
        self.infos_path = self.data_path / "MapInfos.json"
        self.ledger = ledger

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _map_path(self, map_id: int) -> Path:
        return self.data_path / map_filename(map_id)

    def _read_infos(self) -> list[dict[str, Any] | None]:
        infos = read_json_raw(self.infos_path)
        if not isinstance(infos, list) or not infos or infos[0] is not None:
            raise DocumentValidationError(
                f"{self.infos_path.name} must be a JSON array starting with null", self.infos_path
            )
        return infos

    def _require_info(self, infos: list[dict[str, Any] | None], map_id: int) -> dict[str, Any]:
        if map_id < 1 or map_id >= len(infos) or infos[map_id] is None:
            raise NotFoundError(f"Map ID {map_id} not found")
        return infos[map_id]

    def _read_map(self, map_id: int) -> dict[str, Any]:
        """Validated map document as plain data, unknown fields included."""
        path = self._map_path(map_id)
        try:
            data = read_json(path, MapData).model_dump()
        except MissingDocumentError as e:
            raise NotFoundError(f"Map ID {map_id} not found") from e
        if not data["events"] or data["events"][0] is not None:
            raise DocumentValidationError(f"{path.name} events must be an array starting with null", path)
        return data

    def _write(self, path: Path, data: Any) -> None:
        write_json(path, data)
        self.ledger.bump()

    # ------------------------------------------------------------------
    # Maps
    # ------------------------------------------------------------------

    def list_maps(self) -> list[dict[str, Any]]:
        """Validated MapInfos entries sorted by their tree order."""
        infos = read_json(self.infos_path, list[MapInfo | None])
        maps = [info.model_dump() for info in infos[1:] if info is not None]
        return sorted(maps, key=lambda m: m["order"])

    def get_map(self, map_id: int) -> tuple[dict[str, Any], dict[str, Any]]:
        """(MapInfos entry, map document) for ``map_id``."""
        info = self._require_info(self._read_infos(), map_id)
        return info, self._read_map(map_id)

    def create_map(
        self,
        name: str,
        width: int = 17,
        height: int = 13,
        tileset_id: int = 1,
        parent_id: int = 0,
        bgm_name: str | None = None,
    ) -> dict[str, Any]:
        """Write a blank MapNNN.json and register it. Returns the MapInfos entry."""
        infos = self._read_infos()
        map_id = len(infos)
        order = sum(1 for info in infos if info is not None) + 1

        data = default_map(width, height, tileset_id)
        if bgm_name:
            data["autoplayBgm"] = True
            data["bgm"] = default_audio(bgm_name)
        self._write(self._map_path(map_id), data)

        info = default_map_info(map_id, name, order, parent_id)
        infos.append(info)
        self._write(self.infos_path, infos)
        logger.info(f"Map created: [{map_id}] {name}")
        return info

    def update_map(
        self,
        map_id: int,
        name: str | None = None,
        display_name: str | None = None,
        tileset_id: int | None = None,
        note: str | None = None,
        disable_dashing: bool | None = None,
        bgm_name: str | None = None,
        bgs_name: str | None = None,
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Change map properties. ``""`` for bgm/bgs turns autoplay off.

        Only the documents that actually change are written.
        """
        infos = self._read_infos()
        info = self._require_info(infos, map_id)
        data = self._read_map(map_id)

        changes: dict[str, Any] = {}
        if display_name is not None:
            changes["displayName"] = display_name
        if tileset_id is not None:
            changes["tilesetId"] = tileset_id
        if note is not None:
            changes["note"] = note
        if disable_dashing is not None:
            changes["disableDashing"] = disable_dashing
        for key, audio_name in (("bgm", bgm_name), ("bgs", bgs_name)):
            if audio_name is None:
                continue
            autoplay = "autoplayBgm" if key == "bgm" else "autoplayBgs"
            if audio_name == "":
                changes[autoplay] = False
            else:
                changes[autoplay] = True
                changes[key] = default_audio(audio_name)

        if changes:
            data.update(changes)
            self._write(self._map_path(map_id), data)
        if name is not None:
            info["name"] = name
            self._write(self.infos_path, infos)
        logger.info(f"Map updated: [{map_id}] {info['name']}")
        return info, data

    def delete_map(self, map_id: int) -> None:
        """Remove MapNNN.json and null its MapInfos slot. Map 1 is protected."""
        if map_id == 1:
            raise ProtectedError("Cannot delete Map 1 (system default)")
        infos = self._read_infos()
        name = self._require_info(infos, map_id)["name"]

        path = self._map_path(map_id)
        if exists(path):
            delete_file(path)
            self.ledger.bump()

        infos[map_id] = None
        self._write(self.infos_path, infos)
        logger.info(f"Map deleted: [{map_id}] {name}")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _require_event(self, events: list[dict[str, Any] | None], map_id: int, event_id: int) -> dict[str, Any]:
        if event_id < 1 or event_id >= len(events) or events[event_id] is None:
            raise NotFoundError(f"Event ID {event_id} not found on map {map_id}")
        return events[event_id]

    def list_events(self, map_id: int) -> list[dict[str, Any]]:
        return [event for event in self._read_map(map_id)["events"] if event is not None]

    def get_event(self, map_id: int, event_id: int) -> dict[str, Any]:
        return self._require_event(self._read_map(map_id)["events"], map_id, event_id)

    def create_event(
        self,
        map_id: int,
        name: str,
        x: int,
        y: int,
        note: str = "",
        character_name: str | None = None,
        character_index: int = 0,
        trigger: int = 0,
    ) -> dict[str, Any]:
        """Place a one-page event on the map.

        Unlike database records, event slots freed by deletion are reused,
        matching what the editor does.
        """
        data = self._read_map(map_id)
        events = data["events"]
        holes = [i for i in range(1, len(events)) if events[i] is None]
        event_id = holes[0] if holes else len(events)

        page = default_event_page()
        page["trigger"] = trigger
        if character_name:
            page["image"]["characterName"] = character_name
            page["image"]["characterIndex"] = character_index

        event = {"id": event_id, "name": name, "note": note, "pages": [page], "x": x, "y": y}
        if event_id == len(events):
            events.append(event)
        else:
            events[event_id] = event
        self._write(self._map_path(map_id), data)
        logger.info(f"Event created on map {map_id}: [{event_id}] {name} at ({x}, {y})")
        return event

    def update_event(
        self,
        map_id: int,
        event_id: int,
        name: str | None = None,
        x: int | None = None,
        y: int | None = None,
        note: str | None = None,
        character_name: str | None = None,
        character_index: int | None = None,
    ) -> dict[str, Any]:
        """Change an event's name, position, note or first-page sprite."""
        data = self._read_map(map_id)
        event = self._require_event(data["events"], map_id, event_id)
        for key, value in (("name", name), ("x", x), ("y", y), ("note", note)):
            if value is not None:
                event[key] = value
        if event.get("pages"):
            image = event["pages"][0].setdefault("image", {})
            if character_name is not None:
                image["characterName"] = character_name
            if character_index is not None:
                image["characterIndex"] = character_index
        self._write(self._map_path(map_id), data)
        logger.info(f"Event updated on map {map_id}: [{event_id}] {event.get('name', '')}")
        return event

    def delete_event(self, map_id: int, event_id: int) -> None:
        data = self._read_map(map_id)
        name = self._require_event(data["events"], map_id, event_id).get("name", "")
        data["events"][event_id] = None
        self._write(self._map_path(map_id), data)
        logger.info(f"Event deleted from map {map_id}: [{event_id}] {name}")
