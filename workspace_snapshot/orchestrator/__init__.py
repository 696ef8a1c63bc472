"""Snapshot load/save coordination package."""

from .snapshot_service import (
    WorkspaceSnapshotService,
    load_workspace_snapshot,
    resolve_workspace_file_path,
    save_workspace_snapshot,
)

__all__ = [
    "WorkspaceSnapshotService",
    "load_workspace_snapshot",
    "resolve_workspace_file_path",
    "save_workspace_snapshot",
]
