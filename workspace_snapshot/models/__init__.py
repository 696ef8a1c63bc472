"""Data model package for workspace snapshots."""

from .snapshot import DocumentPayload, JsonValue, WorkspaceSnapshot

__all__ = ["DocumentPayload", "JsonValue", "WorkspaceSnapshot"]
