try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover
    import _bootstrap  # type: ignore # noqa: F401

import copy

import httpx
import pytest

from _drive_fake import DOCUMENT_NAME, build_sync_service
from drivesync.main import app


@pytest.fixture()
def sync_overrides(tmp_path, drive):
    from drivesync import dependencies
    from drivesync.core.config import get_settings

    service = build_sync_service(tmp_path, drive)
    base_settings = copy.deepcopy(get_settings())
    base_settings.frontend_base_url = None

    app.dependency_overrides.update(
        {
            dependencies.get_document_sync_service: lambda: service,
            dependencies.get_app_settings: lambda: base_settings,
        }
    )

    yield service, base_settings

    app.dependency_overrides.clear()


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    )


@pytest.mark.anyio
async def test_status_reports_signed_out_session(sync_overrides):
    async with _client() as client:
        response = await client.get("/api/sync/status")

    assert response.status_code == 200
    assert response.json() == {
        "is_authenticated": False,
        "account_email": None,
        "last_sync": None,
        "file_id": None,
    }


@pytest.mark.anyio
async def test_pull_without_session_returns_unauthenticated(sync_overrides, drive):
    async with _client() as client:
        response = await client.get("/api/sync/document")

    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"
    assert drive.requests == []


@pytest.mark.anyio
async def test_sign_in_push_and_pull(sync_overrides, drive):
    async with _client() as client:
        authorize = await client.get("/api/auth/google/authorize")
        assert authorize.status_code == 200
        state = authorize.json()["state"]

        callback = await client.get(
            "/api/auth/google/callback",
            params={"state": state, "code": "auth-code"},
        )
        assert callback.json()["status"] == "connected"

        empty = await client.get("/api/sync/document")
        assert empty.json() == {"status": "no_data", "reason": "empty", "document": None}

        pushed = await client.put("/api/sync/document", json={"a": 1})
        assert pushed.status_code == 200
        assert pushed.json()["last_sync"]

        pulled = await client.get("/api/sync/document")
        status = await client.get("/api/sync/status")

    assert pulled.json() == {"status": "ok", "reason": None, "document": {"a": 1}}
    assert status.json()["is_authenticated"] is True
    assert status.json()["last_sync"] == pushed.json()["last_sync"]


@pytest.mark.anyio
async def test_authorize_redirects_for_html_accept(sync_overrides):
    async with _client() as client:
        response = await client.get(
            "/api/auth/google/authorize",
            headers={"accept": "text/html"},
        )

    assert response.status_code == 307
    assert response.headers["location"].startswith("https://oauth.example.com/auth")


@pytest.mark.anyio
async def test_callback_redirects_browser_to_frontend(sync_overrides):
    _, settings = sync_overrides
    settings.frontend_base_url = "https://app.example.com/sync"

    async with _client() as client:
        authorize = await client.get("/api/auth/google/authorize")
        callback = await client.get(
            "/api/auth/google/callback",
            params={"state": authorize.json()["state"], "code": "auth-code"},
            headers={"accept": "text/html"},
        )

    assert callback.status_code == 307
    assert callback.headers["location"] == "https://app.example.com/sync"


@pytest.mark.anyio
async def test_denied_consent_returns_bad_request(sync_overrides):
    service, _ = sync_overrides
    async with _client() as client:
        authorize = await client.get("/api/auth/google/authorize")
        callback = await client.get(
            "/api/auth/google/callback",
            params={"state": authorize.json()["state"], "error": "access_denied"},
        )

    assert callback.status_code == 400
    assert callback.json()["error"] == "consent_failed"
    assert service.status().is_authenticated is False


@pytest.mark.anyio
async def test_remote_failure_maps_to_bad_gateway(sync_overrides, drive):
    drive.add_file(DOCUMENT_NAME)

    async with _client() as client:
        state = (await client.get("/api/auth/google/authorize")).json()["state"]
        await client.get("/api/auth/google/callback", params={"state": state, "code": "c"})
        await client.get("/api/sync/document")
        drive.queued_responses.append(
            httpx.Response(500, json={"error": {"message": "quota exceeded"}})
        )
        response = await client.put("/api/sync/document", json=[1, 2, 3])
        status = await client.get("/api/sync/status")

    assert response.status_code == 502
    assert response.json() == {"error": "remote_api_error", "detail": "quota exceeded"}
    assert status.json()["is_authenticated"] is True


@pytest.mark.anyio
async def test_expired_token_maps_to_session_expired(sync_overrides, drive):
    service, _ = sync_overrides
    async with _client() as client:
        state = (await client.get("/api/auth/google/authorize")).json()["state"]
        await client.get("/api/auth/google/callback", params={"state": state, "code": "c"})
        drive.queued_responses.append(httpx.Response(401))
        response = await client.get("/api/sync/document")

    assert response.status_code == 401
    assert response.json()["error"] == "session_expired"
    assert service.status().is_authenticated is False


@pytest.mark.anyio
async def test_sign_out_route_clears_session(sync_overrides):
    service, _ = sync_overrides
    async with _client() as client:
        state = (await client.get("/api/auth/google/authorize")).json()["state"]
        await client.get("/api/auth/google/callback", params={"state": state, "code": "c"})
        response = await client.post("/api/auth/signout")

    assert response.json() == {"status": "signed_out"}
    assert service.status().is_authenticated is False
