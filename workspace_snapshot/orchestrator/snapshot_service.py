"""Load and save entry points for a workspace and its books.

Loading reads the workspace document, resolves its book references and reads
every book. Saving writes the workspace document and then each book in
sequence order, to the paths recorded in the snapshot.

A failed book write stops the save: books earlier in the sequence stay written
with their new content and later books are left untouched. Nothing is rolled
back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import WorkspaceSnapshotError
from ..models import DocumentPayload, WorkspaceSnapshot
from ..resolver import ReferenceResolver
from ..storage import DocumentStore


logger = logging.getLogger(__name__)

WORKSPACE_FILE_NAME = "workspace.json"


@dataclass
class WorkspaceSnapshotService:
    """Configured pairing of a document store and a reference resolver."""

    store: DocumentStore = field(default_factory=DocumentStore)
    resolver: ReferenceResolver | None = None
    workspace_file_name: str = WORKSPACE_FILE_NAME

    def __post_init__(self) -> None:
        if self.resolver is None:
            self.resolver = ReferenceResolver(store=self.store)

    def resolve_workspace_file_path(self, path: Path | str) -> str:
        """Return the workspace file for ``path``, which may name its folder."""

        text = str(path)
        if text.lower().endswith(self.workspace_file_name.lower()):
            return text
        return str(Path(text) / self.workspace_file_name)

    def load(self, path: Path | str) -> WorkspaceSnapshot:
        """Read the workspace at ``path`` together with all referenced books."""

        workspace_path = str(path)
        workspace_data = self.store.read_document(workspace_path)
        books = self.resolver.resolve(workspace_path, workspace_data)

        snapshot = WorkspaceSnapshot(
            workspace=DocumentPayload(workspace_path, workspace_data),
            books=books,
        )
        logger.info(
            "snapshot.load.complete",
            extra={"workspace": workspace_path, "books": len(snapshot.books)},
        )
        return snapshot

    def save(self, snapshot: WorkspaceSnapshot, save_books: bool = True) -> None:
        """Write the workspace document, then each book in order.

        The first failure is raised as is. Books written before it are not
        restored and books after it are not attempted.
        """

        pending = list(snapshot.books) if save_books else []
        logger.info(
            "snapshot.save.start",
            extra={"workspace": snapshot.workspace.file_path, "books": len(pending)},
        )

        written = 0
        workspace_written = False
        try:
            self.store.write_document(snapshot.workspace.file_path, snapshot.workspace.data)
            workspace_written = True
            for book in pending:
                self.store.write_document(book.file_path, book.data)
                written += 1
        except WorkspaceSnapshotError as exc:
            # The failing book itself counts as attempted, not skipped.
            attempted = written + 1 if workspace_written else 0
            logger.error(
                "snapshot.save.failed",
                extra={
                    "workspace": snapshot.workspace.file_path,
                    "books_written": written,
                    "workspace_written": workspace_written,
                    "books_skipped": len(pending) - attempted,
                    "error": str(exc),
                },
            )
            raise

        logger.info(
            "snapshot.save.complete",
            extra={"workspace": snapshot.workspace.file_path, "books": written},
        )


def resolve_workspace_file_path(path: Path | str) -> str:
    """Map a workspace folder to its ``workspace.json``; file paths pass through."""

    return WorkspaceSnapshotService().resolve_workspace_file_path(path)


def load_workspace_snapshot(path: Path | str, max_workers: int = 1) -> WorkspaceSnapshot:
    """Load the workspace at ``path`` and every book it references."""

    store = DocumentStore()
    service = WorkspaceSnapshotService(
        store=store, resolver=ReferenceResolver(store=store, max_workers=max_workers)
    )
    return service.load(path)


def save_workspace_snapshot(snapshot: WorkspaceSnapshot, save_books: bool = True) -> None:
    """Write ``snapshot`` back to the files it records."""

    WorkspaceSnapshotService().save(snapshot, save_books=save_books)
