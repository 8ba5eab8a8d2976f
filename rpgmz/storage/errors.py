"""Typed failures raised by the storage layer.

Everything derives from StorageError so the tool layer can catch one class
at its boundary and turn it into a user-facing error result.
"""

from pathlib import Path
from typing import Any


class StorageError(Exception):
    """Base class for every failure the storage layer raises."""


class StorageIOError(StorageError):
    """A filesystem operation failed (permissions, disk full, ...)."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class MissingDocumentError(StorageIOError):
    """The document (or directory) being read does not exist."""


class CorruptDocumentError(StorageError):
    """A document is not valid JSON at all."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = Path(path)


class DocumentValidationError(StorageError):
    """A document parsed fine but does not match its declared shape.

    ``errors`` holds one dict per problem with ``loc`` (field path),
    ``msg`` (what was expected) and ``input`` (what was found).
    """

    def __init__(
        self, message: str, path: Path | str | None = None, errors: list[dict[str, Any]] | None = None
    ) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
        self.errors = errors or []


class NotFoundError(StorageError):
    """A record ID does not exist or points at an empty slot."""


class ProtectedError(StorageError):
    """The operation would remove a record the project depends on."""


class NoProjectLoadedError(StorageError):
    """A project-scoped operation was called before a project was opened."""


class ProjectExistsError(StorageError):
    """Scaffolding refused to overwrite an existing project."""
