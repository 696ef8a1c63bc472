from __future__ import annotations

import dataclasses

import pytest

from workspace_snapshot.errors import InvalidPayloadError
from workspace_snapshot.models import DocumentPayload, WorkspaceSnapshot


def _snapshot() -> WorkspaceSnapshot:
    return WorkspaceSnapshot(
        workspace=DocumentPayload("/ws/workspace.json", {"books": [{"dataPath": "a.json"}]}),
        books=[DocumentPayload("/ws/a.json", {"sheets": []}), DocumentPayload("/ws/b.json", {"sheets": [1]})],
    )


def test_payload_is_immutable_and_with_data_keeps_identity() -> None:
    payload = DocumentPayload("/ws/a.json", {"v": 1})

    with pytest.raises(dataclasses.FrozenInstanceError):
        payload.data = {"v": 2}  # type: ignore[misc]

    updated = payload.with_data({"v": 2})
    assert updated.file_path == payload.file_path
    assert updated.data == {"v": 2}
    assert payload.data == {"v": 1}


def test_books_are_stored_as_tuple() -> None:
    assert isinstance(_snapshot().books, tuple)
    assert WorkspaceSnapshot(workspace=DocumentPayload("/ws/w.json")).books == ()


def test_with_book_replaces_by_location_or_appends() -> None:
    snapshot = _snapshot()

    replaced = snapshot.with_book(DocumentPayload("/ws/a.json", {"sheets": ["x"]}))
    appended = snapshot.with_book(DocumentPayload("/ws/c.json", {}))

    assert [b.file_path for b in replaced.books] == ["/ws/a.json", "/ws/b.json"]
    assert replaced.book("/ws/a.json").data == {"sheets": ["x"]}
    assert [b.file_path for b in appended.books] == ["/ws/a.json", "/ws/b.json", "/ws/c.json"]
    assert snapshot.book("/ws/a.json").data == {"sheets": []}
    assert snapshot.book("/ws/missing.json") is None


def test_with_workspace_data_keeps_books() -> None:
    snapshot = _snapshot()

    updated = snapshot.with_workspace_data({"books": []})

    assert updated.workspace.file_path == "/ws/workspace.json"
    assert updated.workspace.data == {"books": []}
    assert updated.books == snapshot.books


def test_wire_shape_uses_file_path_and_data_keys() -> None:
    wire = _snapshot().to_dict()

    assert wire == {
        "workspace": {"filePath": "/ws/workspace.json", "data": {"books": [{"dataPath": "a.json"}]}},
        "books": [
            {"filePath": "/ws/a.json", "data": {"sheets": []}},
            {"filePath": "/ws/b.json", "data": {"sheets": [1]}},
        ],
    }
    assert WorkspaceSnapshot.from_dict(wire) == _snapshot()


def test_from_dict_defaults_missing_books_to_empty() -> None:
    snapshot = WorkspaceSnapshot.from_dict({"workspace": {"filePath": "/ws/w.json", "data": None}})

    assert snapshot.books == ()
    assert snapshot.workspace.data is None


@pytest.mark.parametrize(
    "raw, field",
    [
        ([], "snapshot"),
        ({"books": []}, "workspace"),
        ({"workspace": {"data": {}}}, "workspace.filePath"),
        ({"workspace": {"filePath": "", "data": {}}}, "workspace.filePath"),
        ({"workspace": {"filePath": "/w.json"}, "books": {}}, "books"),
        ({"workspace": {"filePath": "/w.json"}, "books": [{"filePath": "/a.json"}, {"filePath": 3}]}, "books[1].filePath"),
    ],
)
def test_from_dict_rejects_malformed_payloads(raw, field: str) -> None:
    with pytest.raises(InvalidPayloadError) as excinfo:
        WorkspaceSnapshot.from_dict(raw)

    assert excinfo.value.field == field
    assert str(excinfo.value).startswith(field)
