"""JSON document persistence for workspace and book files.

Reads parse UTF-8 JSON text; writes pretty-print the value, add a single
trailing newline and replace the whole file. Writes go through a sibling
``.tmp`` file and ``os.replace`` unless ``atomic_writes`` is disabled, so a
reader never sees a half-written document. The store keeps no state between
calls.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from ..errors import DirCreateError, ParseError, ReadError, SerializeError, WriteError
from ..models import JsonValue


logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    """Refuse ``NaN`` and ``Infinity``, which Python accepts but JSON does not."""

    raise ValueError(f"{name} is not a valid JSON value")


@dataclass
class DocumentStore:
    """Translate between a file location and a parsed JSON value."""

    indent: int = 2
    encoding: str = "utf-8"
    atomic_writes: bool = True

    def read_document(self, location: Path | str) -> JsonValue:
        """Read and parse the JSON document stored at ``location``.

        Raises:
            ReadError: the file is missing, unreadable or not a regular file.
            ParseError: the content is not valid JSON text.
        """

        path = Path(location)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            logger.warning(
                "snapshot.document.failed",
                extra={"path": str(path), "operation": "read", "error": str(exc)},
            )
            raise ReadError(str(path), exc) from exc

        try:
            value = json.loads(raw.decode(self.encoding), parse_constant=_reject_constant)
        except (UnicodeDecodeError, ValueError) as exc:
            logger.warning(
                "snapshot.document.failed",
                extra={"path": str(path), "operation": "parse", "error": str(exc)},
            )
            raise ParseError(str(path), exc) from exc

        logger.debug("snapshot.document.read", extra={"path": str(path), "bytes": len(raw)})
        return value

    def write_document(self, location: Path | str, value: JsonValue) -> None:
        """Serialize ``value`` and replace the file at ``location`` with it.

        Missing parent directories are created first. Nothing touches the disk
        when the value cannot be serialized.

        Raises:
            SerializeError: ``value`` has no valid JSON representation.
            DirCreateError: a parent directory could not be created.
            WriteError: the file itself could not be written.
        """

        path = Path(location)
        text = self.serialize(path, value)

        parent = path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning(
                "snapshot.document.failed",
                extra={"path": str(parent), "operation": "mkdir", "error": str(exc)},
            )
            raise DirCreateError(str(parent), exc) from exc

        try:
            if self.atomic_writes:
                self._replace_atomically(path, text)
            else:
                path.write_text(text, encoding=self.encoding)
        except OSError as exc:
            logger.warning(
                "snapshot.document.failed",
                extra={"path": str(path), "operation": "write", "error": str(exc)},
            )
            raise WriteError(str(path), exc) from exc

        logger.debug("snapshot.document.write", extra={"path": str(path), "chars": len(text)})

    def serialize(self, location: Path | str, value: JsonValue) -> str:
        """Render ``value`` the way it is stored on disk."""

        try:
            text = json.dumps(value, indent=self.indent, ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializeError(str(location), exc) from exc
        return text + "\n"

    def _replace_atomically(self, path: Path, text: str) -> None:
        # Stage next to the real file so symlinked documents are written through.
        target = path.resolve()
        tmp = target.with_name(target.name + ".tmp")
        try:
            tmp.write_text(text, encoding=self.encoding)
            if target.exists():
                shutil.copymode(target, tmp)
            os.replace(tmp, target)
        except OSError:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
