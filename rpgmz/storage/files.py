"""Durable JSON document primitives.

Writes are backed up and atomic: the current file is copied to
``<name>.bak``, the new content goes to ``<name>.tmp`` and is then
``os.replace``d onto the target, so a reader never sees a half-written
document. Reads either return parsed JSON as-is (``read_json_raw``) or
validate it against a declared shape first (``read_json``).

No raw OSError or JSONDecodeError leaves this module; callers get one of
the typed errors from ``errors.py`` with the offending path attached.
"""

import contextlib
import json
import logging
import os
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Any

import pydantic
from pydantic import TypeAdapter

from .errors import (
    CorruptDocumentError,
    DocumentValidationError,
    MissingDocumentError,
    StorageIOError,
)

logger = logging.getLogger(__name__)


def _sibling(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + suffix)


def backup_path(path: Path) -> Path:
    return _sibling(Path(path), ".bak")


def temp_path(path: Path) -> Path:
    return _sibling(Path(path), ".tmp")


# ------------------------------------------------------------------
# Reads
# ------------------------------------------------------------------


def read_json_raw(path: Path) -> Any:
    """Parse a JSON document without checking its shape."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise MissingDocumentError(f"Document not found: {path}", path) from e
    except UnicodeDecodeError as e:
        raise CorruptDocumentError(f"{path.name} is not UTF-8 text: {e}", path) from e
    except OSError as e:
        raise StorageIOError(f"Cannot read {path}: {e}", path) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptDocumentError(f"{path.name} is not valid JSON: {e}", path) from e


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _describe(errors: list[dict[str, Any]]) -> str:
    parts = []
    for err in errors[:10]:
        loc = err["loc"] or "<root>"
        parts.append(f"{loc}: {err['msg']} (got {err['input']!r})")
    if len(errors) > 10:
        parts.append(f"... and {len(errors) - 10} more")
    return "; ".join(parts)


def validate(data: Any, shape: Any, source: Path | str | None = None) -> Any:
    """Validate already-parsed data against ``shape``.

    ``shape`` is a pydantic model or anything TypeAdapter accepts
    (``list[Actor | None]``, ``dict[str, Any]`` ...).
    """
    try:
        return _adapter(shape).validate_python(data)
    except pydantic.ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(part) for part in err["loc"]),
                "msg": err["msg"],
                "input": err.get("input"),
            }
            for err in e.errors()
        ]
        name = Path(source).name if source is not None else "document"
        raise DocumentValidationError(
            f"Validation failed for {name}: {_describe(errors)}", source, errors
        ) from e


def read_json(path: Path, shape: Any) -> Any:
    """Parse a JSON document and validate it against ``shape``.

    Returns the validated value (model instances for model shapes).
    """
    path = Path(path)
    return validate(read_json_raw(path), shape, source=path)


# ------------------------------------------------------------------
# Writes
# ------------------------------------------------------------------


def write_json(path: Path, data: Any) -> None:
    """Atomically replace ``path`` with ``data`` serialized as pretty JSON.

    The previous content (if any) is kept as ``<path>.bak``. If the backup
    cannot be made nothing is written.
    """
    path = Path(path)
    try:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise DocumentValidationError(f"Cannot serialize {path.name}: {e}", path) from e

    if path.exists():
        bak = backup_path(path)
        try:
            shutil.copyfile(path, bak)
        except OSError as e:
            raise StorageIOError(f"Backup of {path} failed, nothing written: {e}", path) from e
        logger.debug(f"Backup created: {bak}")

    tmp = temp_path(path)
    try:
        tmp.write_text(text, encoding="utf-8")
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise StorageIOError(f"Cannot write {tmp}: {e}", path) from e

    try:
        os.replace(tmp, path)
    except OSError as e:
        raise StorageIOError(f"Cannot move {tmp.name} onto {path}: {e}", path) from e
    logger.debug(f"Written: {path}")


# ------------------------------------------------------------------
# Filesystem helpers
# ------------------------------------------------------------------


def exists(path: Path) -> bool:
    return Path(path).exists()


def ensure_dir(path: Path) -> None:
    """Create a directory and its parents; no-op if it already exists."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageIOError(f"Cannot create directory {path}: {e}", path) from e


def _entries(path: Path) -> list[Path]:
    if not path.is_dir():
        return []
    try:
        return list(path.iterdir())
    except OSError as e:
        raise StorageIOError(f"Cannot list {path}: {e}", path) from e


def list_files(path: Path, ext: str | None = None) -> list[str]:
    """Sorted file names in ``path``, optionally ending with ``ext``.

    An absent directory yields [].
    """
    names = [p.name for p in _entries(Path(path)) if p.is_file()]
    if ext:
        names = [n for n in names if n.endswith(ext)]
    return sorted(names)


def list_dirs(path: Path) -> list[str]:
    """Sorted subdirectory names in ``path``; [] if it is absent."""
    return sorted(p.name for p in _entries(Path(path)) if p.is_dir())


def delete_file(path: Path) -> None:
    path = Path(path)
    try:
        path.unlink()
    except FileNotFoundError as e:
        raise MissingDocumentError(f"Document not found: {path}", path) from e
    except OSError as e:
        raise StorageIOError(f"Cannot delete {path}: {e}", path) from e
    logger.debug(f"Deleted: {path}")


def copy_file(src: Path, dest: Path) -> None:
    src, dest = Path(src), Path(dest)
    try:
        shutil.copyfile(src, dest)
    except FileNotFoundError as e:
        missing = src if not src.exists() else dest
        raise MissingDocumentError(f"Cannot copy {src} to {dest}: {e}", missing) from e
    except OSError as e:
        raise StorageIOError(f"Cannot copy {src} to {dest}: {e}", src) from e
