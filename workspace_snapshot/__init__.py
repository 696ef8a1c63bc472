"""Top-level package for loading and saving workspace/book JSON snapshots."""

from .errors import (
    DirCreateError,
    InvalidPayloadError,
    MissingFieldError,
    ParseError,
    ReadError,
    SerializeError,
    WorkspaceSnapshotError,
    WriteError,
)
from .models import DocumentPayload, JsonValue, WorkspaceSnapshot
from .storage import DocumentStore
from .resolver import ReferenceResolver
from .orchestrator import (
    WorkspaceSnapshotService,
    load_workspace_snapshot,
    resolve_workspace_file_path,
    save_workspace_snapshot,
)

__all__ = [
    "DirCreateError",
    "InvalidPayloadError",
    "MissingFieldError",
    "ParseError",
    "ReadError",
    "SerializeError",
    "WorkspaceSnapshotError",
    "WriteError",
    "DocumentPayload",
    "JsonValue",
    "WorkspaceSnapshot",
    "DocumentStore",
    "ReferenceResolver",
    "WorkspaceSnapshotService",
    "load_workspace_snapshot",
    "resolve_workspace_file_path",
    "save_workspace_snapshot",
]
