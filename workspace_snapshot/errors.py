"""Exceptions raised while loading or saving a workspace snapshot.

Every error carries the file path it concerns and the underlying cause so a
host application can show a precise message without inspecting tracebacks.
"""

from __future__ import annotations

from typing import Optional


class WorkspaceSnapshotError(Exception):
    """Base class for all snapshot load/save failures."""

    action = "process"

    def __init__(self, path: str, cause: Optional[BaseException | str] = None) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return f"Failed to {self.action} {self.path}: {self.cause}"


class ReadError(WorkspaceSnapshotError):
    """The file could not be read (missing, permission denied, I/O fault)."""

    action = "read"


class ParseError(WorkspaceSnapshotError):
    """The file content is not valid JSON."""

    action = "parse"


class DirCreateError(WorkspaceSnapshotError):
    """The directory holding a target file could not be created."""

    action = "create"


class SerializeError(WorkspaceSnapshotError):
    """A value could not be rendered as valid JSON."""

    action = "serialize JSON for"


class WriteError(WorkspaceSnapshotError):
    """The target file could not be written."""

    action = "write"


class MissingFieldError(WorkspaceSnapshotError):
    """A book reference entry has no usable path field."""

    def __init__(self, path: str, index: int, field: str = "dataPath", key: str = "books") -> None:
        self.index = index
        self.field = field
        self.key = key
        super().__init__(path, f"{key}[{index}].{field} is missing or invalid")

    def _format_message(self) -> str:
        return f"{self.cause} in {self.path}"


class InvalidPayloadError(WorkspaceSnapshotError):
    """A snapshot dictionary does not have the expected wire shape."""

    def __init__(self, field: str, reason: str = "is missing or invalid") -> None:
        self.field = field
        super().__init__(field, reason)

    def _format_message(self) -> str:
        return f"{self.field} {self.cause}"
