"""In-memory representation of a loaded workspace and its books.

A payload pairs a file location with the parsed JSON tree found there. The
location is the payload's identity: two payloads describe the same document
when their ``file_path`` values are equal. Both types are frozen; edits are
expressed by building a new payload or snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import InvalidPayloadError


JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


def _require_file_path(raw: Any, label: str) -> str:
    if not isinstance(raw, dict):
        raise InvalidPayloadError(label, "must be an object")
    file_path = raw.get("filePath")
    if not isinstance(file_path, str) or not file_path:
        raise InvalidPayloadError(f"{label}.filePath")
    return file_path


@dataclass(frozen=True)
class DocumentPayload:
    """A JSON document together with the absolute path it belongs to."""

    file_path: str
    data: JsonValue = None

    def with_data(self, data: JsonValue) -> "DocumentPayload":
        """Return a payload for the same file holding ``data``."""

        return replace(self, data=data)

    def to_dict(self) -> Dict[str, Any]:
        return {"filePath": self.file_path, "data": self.data}

    @classmethod
    def from_dict(cls, raw: Any, label: str = "document") -> "DocumentPayload":
        file_path = _require_file_path(raw, label)
        return cls(file_path=file_path, data=raw.get("data"))


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """One workspace document plus the book documents it references.

    ``books`` follows the order of the references inside the workspace
    document at load time.
    """

    workspace: DocumentPayload
    books: Tuple[DocumentPayload, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable (lists from callers, generators from the resolver).
        object.__setattr__(self, "books", tuple(self.books))

    def book(self, file_path: str) -> Optional[DocumentPayload]:
        for payload in self.books:
            if payload.file_path == file_path:
                return payload
        return None

    def with_workspace_data(self, data: JsonValue) -> "WorkspaceSnapshot":
        return replace(self, workspace=self.workspace.with_data(data))

    def with_book(self, payload: DocumentPayload) -> "WorkspaceSnapshot":
        """Replace the book at ``payload.file_path`` or append it if absent."""

        books = list(self.books)
        for index, existing in enumerate(books):
            if existing.file_path == payload.file_path:
                books[index] = payload
                break
        else:
            books.append(payload)
        return replace(self, books=tuple(books))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workspace": self.workspace.to_dict(),
            "books": [book.to_dict() for book in self.books],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "WorkspaceSnapshot":
        """Build a snapshot from its wire shape, checking every ``filePath``."""

        if not isinstance(raw, dict):
            raise InvalidPayloadError("snapshot", "must be an object")
        workspace = DocumentPayload.from_dict(raw.get("workspace"), label="workspace")

        raw_books = raw.get("books", [])
        if not isinstance(raw_books, list):
            raise InvalidPayloadError("books", "must be a list")
        books = [
            DocumentPayload.from_dict(entry, label=f"books[{index}]")
            for index, entry in enumerate(raw_books)
        ]
        return cls(workspace=workspace, books=tuple(books))
