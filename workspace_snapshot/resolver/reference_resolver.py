"""Resolution of book references declared inside a workspace document.

The workspace document lists its books under ``books``; each entry names a
``dataPath`` relative to the directory holding the workspace file. Resolution
turns those entries into absolute paths, reads every book through the
:class:`~workspace_snapshot.storage.DocumentStore` and returns the payloads in
reference order. The first problem aborts the whole resolution.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import MissingFieldError
from ..models import DocumentPayload, JsonValue
from ..storage import DocumentStore


logger = logging.getLogger(__name__)


def workspace_directory(workspace_path: Path | str) -> Path:
    """Directory that relative book paths are resolved against."""

    parent = Path(workspace_path).parent
    if parent == Path("."):
        return Path.cwd()
    return parent


@dataclass
class ReferenceResolver:
    """Load every book referenced by a workspace document.

    ``max_workers`` above one reads the books on a thread pool. The returned
    order and the reported error stay the same as for a sequential read: the
    failure of the lowest-index entry wins.
    """

    store: DocumentStore = field(default_factory=DocumentStore)
    books_key: str = "books"
    path_field: str = "dataPath"
    max_workers: int = 1

    def book_references(self, workspace_data: JsonValue) -> list:
        """Return the raw reference entries, or an empty list when there are none."""

        if not isinstance(workspace_data, dict):
            return []
        references = workspace_data.get(self.books_key)
        if not isinstance(references, list):
            return []
        return references

    def resolve_locations(
        self, workspace_path: Path | str, workspace_data: JsonValue
    ) -> Tuple[List[str], Optional[MissingFieldError]]:
        """Absolute book paths in reference order.

        Stops at the first entry without a usable path field and returns the
        matching error alongside the paths collected before it, so the caller
        can load those books before failing.
        """

        base_dir = workspace_directory(workspace_path)
        locations: List[str] = []
        for index, entry in enumerate(self.book_references(workspace_data)):
            data_path = entry.get(self.path_field) if isinstance(entry, dict) else None
            if not isinstance(data_path, str):
                return locations, MissingFieldError(
                    str(workspace_path), index, field=self.path_field, key=self.books_key
                )
            # An absolute data_path replaces base_dir entirely.
            locations.append(os.path.join(base_dir, data_path))
        return locations, None

    def resolve(
        self, workspace_path: Path | str, workspace_data: JsonValue
    ) -> Tuple[DocumentPayload, ...]:
        """Read every referenced book and return the payloads in order.

        Raises:
            MissingFieldError: an entry has no string ``dataPath``.
            ReadError / ParseError: a book file could not be loaded.
        """

        locations, missing = self.resolve_locations(workspace_path, workspace_data)
        logger.info(
            "snapshot.resolve.start",
            extra={
                "workspace": str(workspace_path),
                "books": len(locations),
                "max_workers": self.max_workers,
            },
        )

        if self.max_workers > 1 and len(locations) > 1:
            books = self._read_parallel(locations)
        else:
            books = [DocumentPayload(location, self.store.read_document(location)) for location in locations]

        if missing is not None:
            logger.error(
                "snapshot.resolve.failed",
                extra={"workspace": str(workspace_path), "index": missing.index, "error": str(missing)},
            )
            raise missing

        logger.info(
            "snapshot.resolve.complete",
            extra={"workspace": str(workspace_path), "books": len(books)},
        )
        return tuple(books)

    def _read_parallel(self, locations: List[str]) -> List[DocumentPayload]:
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(locations))) as pool:
            futures = [pool.submit(self.store.read_document, location) for location in locations]
            try:
                # Collecting in submission order surfaces the lowest-index failure.
                return [
                    DocumentPayload(location, future.result())
                    for location, future in zip(locations, futures)
                ]
            except Exception:
                for future in futures:
                    future.cancel()
                raise
