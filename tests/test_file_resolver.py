try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json

import httpx
import pytest

from _drive_fake import DOCUMENT_NAME
from drivesync.clients import DriveRequestPipeline, GoogleDriveClient, SQLiteStore
from drivesync.core.errors import RemoteAPIError
from drivesync.services import FileResolver, TokenStore


def _resolver(tmp_path, drive, name: str = DOCUMENT_NAME) -> tuple[FileResolver, TokenStore]:
    session = TokenStore(SQLiteStore(str(tmp_path / "state.sqlite3")))
    session.set_access_token("tok1")
    client = GoogleDriveClient(DriveRequestPipeline(session, transport=drive.transport))
    return FileResolver(client, session, document_name=name), session


@pytest.mark.asyncio
async def test_cached_id_needs_no_network(tmp_path, drive) -> None:
    resolver, session = _resolver(tmp_path, drive)
    session.set_file_id("cached-id")

    assert await resolver.resolve() == "cached-id"
    assert drive.requests == []


@pytest.mark.asyncio
async def test_creates_json_file_when_absent(tmp_path, drive) -> None:
    resolver, session = _resolver(tmp_path, drive)

    file_id = await resolver.resolve()

    assert session.file_id == file_id
    create = drive.calls("POST", "/drive/v3/files")[0]
    assert json.loads(create.content) == {
        "name": DOCUMENT_NAME,
        "mimeType": "application/json",
    }
    search = drive.calls("GET", "/drive/v3/files")[0]
    assert search.url.params["q"] == f"name = '{DOCUMENT_NAME}' and trashed = false"
    assert search.url.params["orderBy"] == "createdTime"


@pytest.mark.asyncio
async def test_prefers_oldest_duplicate(tmp_path, drive) -> None:
    newer = drive.add_file(DOCUMENT_NAME, created="2024-06-01T00:00:00Z")
    older = drive.add_file(DOCUMENT_NAME, created="2023-01-01T00:00:00Z")
    resolver, _ = _resolver(tmp_path, drive)

    assert await resolver.resolve() == older
    assert newer != older
    assert drive.calls("POST", "/drive/v3/files") == []


@pytest.mark.asyncio
async def test_second_resolution_uses_cache(tmp_path, drive) -> None:
    resolver, _ = _resolver(tmp_path, drive)

    first = await resolver.resolve()
    second = await resolver.resolve()

    assert first == second
    assert len(drive.calls("GET", "/drive/v3/files")) == 1
    assert len(drive.calls("POST", "/drive/v3/files")) == 1


@pytest.mark.asyncio
async def test_quotes_in_document_name_are_escaped(tmp_path, drive) -> None:
    existing = drive.add_file("habitat's db.json")
    resolver, _ = _resolver(tmp_path, drive, name="habitat's db.json")

    assert await resolver.resolve() == existing


@pytest.mark.asyncio
async def test_failed_search_leaves_cache_empty_for_retry(tmp_path, drive) -> None:
    resolver, session = _resolver(tmp_path, drive)
    drive.queued_responses.append(
        httpx.Response(500, json={"error": {"message": "backend error"}})
    )

    with pytest.raises(RemoteAPIError):
        await resolver.resolve()
    assert session.file_id is None

    file_id = await resolver.resolve()
    assert session.file_id == file_id
