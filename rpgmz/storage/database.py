"""CRUD over one RPG Maker MZ database file (Actors.json, Items.json, ...).

Database files are JSON arrays where a record's ID is its index:

    [null, {"id": 1, ...}, null, {"id": 3, ...}]

Slot 0 is always null. Deleting a record nulls its slot instead of removing
it, and new records are always appended at ``len(array)``, so an ID is
never reused and no other ID ever moves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .errors import DocumentValidationError, NotFoundError, ProtectedError
from .files import read_json_raw, validate, write_json
from .version import VersionLedger

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class EntityCollection:
    def __init__(
        self,
        path: Path,
        default_factory: Callable[[int], Record],
        ledger: VersionLedger,
        label: str = "Entity",
        shape: Any = None,
    ) -> None:
        self.path = Path(path)
        self.default_factory = default_factory
        self.ledger = ledger
        self.label = label
        # records are checked against this before every write when set
        self.shape = shape

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_slots(self) -> list[Record | None]:
        slots = read_json_raw(self.path)
        if not isinstance(slots, list) or not slots or slots[0] is not None:
            raise DocumentValidationError(
                f"{self.path.name} must be a JSON array starting with null", self.path
            )
        for index, slot in enumerate(slots):
            if slot is not None and not isinstance(slot, dict):
                raise DocumentValidationError(
                    f"{self.path.name} slot {index} must be an object or null (got {slot!r})", self.path
                )
        return slots

    def _check(self, record: Record) -> None:
        if self.shape is not None:
            validate(record, self.shape, source=self.path)

    def _write_slots(self, slots: list[Record | None]) -> None:
        """Persist, then signal the editor. No bump if the write failed."""
        write_json(self.path, slots)
        self.ledger.bump()

    def _require(self, slots: list[Record | None], id: int) -> Record:
        if id < 1 or id >= len(slots) or slots[id] is None:
            raise NotFoundError(f"{self.label} with ID {id} not found")
        return slots[id]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list(self) -> list[Record]:
        """All records in ID order, skipping empty slots."""
        return [record for record in self._read_slots() if record is not None]

    def get(self, id: int) -> Record:
        return self._require(self._read_slots(), id)

    def create(self, data: Record) -> dict[str, Any]:
        """Append a new record built from defaults + ``data``.

        Returns ``{"id": id, "entity": record}``. Any ``id`` in ``data`` is
        ignored. A record that does not fit ``shape`` is refused before
        anything is written.
        """
        slots = self._read_slots()
        id = len(slots)
        entity = {**self.default_factory(id), **data, "id": id}
        self._check(entity)
        slots.append(entity)
        self._write_slots(slots)
        logger.info(f"Created {self.label} ID {id}: {entity.get('name', '')}")
        return {"id": id, "entity": entity}

    def update(self, id: int, data: Record) -> Record:
        """Shallow-merge ``data`` over record ``id``. The ID cannot change."""
        slots = self._read_slots()
        existing = self._require(slots, id)
        updated = {**existing, **data, "id": id}
        self._check(updated)
        slots[id] = updated
        self._write_slots(slots)
        logger.info(f"Updated {self.label} ID {id}: {updated.get('name', '')}")
        return updated

    def delete(self, id: int, protect_first: bool = False) -> None:
        """Null out slot ``id``.

        With ``protect_first`` record 1 (the editor's system default) is
        refused before the file is even read.
        """
        if protect_first and id == 1:
            raise ProtectedError(f"Cannot delete system default {self.label} (ID 1)")
        slots = self._read_slots()
        name = self._require(slots, id).get("name", "")
        slots[id] = None
        self._write_slots(slots)
        logger.info(f"Deleted {self.label} ID {id}: {name}")

    def search(self, query: str, fields: Iterable[str]) -> list[Record]:
        """Records where any of ``fields`` contains ``query``, ignoring case.

        Non-string field values never match.
        """
        needle = query.lower()
        fields = list(fields)
        return [
            record
            for record in self.list()
            if any(
                isinstance(record.get(field), str) and needle in record[field].lower()
                for field in fields
            )
        ]
