"""
FastAPI routes exposing the sync core.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import RedirectResponse

from drivesync.dependencies import get_app_settings, get_document_sync_service
from drivesync.models.document import NoData
from drivesync.schemas import (
    AuthorizationResponse,
    PullResponse,
    PushResponse,
    SyncStatus,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "").lower()


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth/google/authorize", status_code=HTTPStatus.OK)
async def start_google_sign_in(
    request: Request,
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
    redirect_to: Optional[str] = Query(
        default=None,
        description="Optional URL to redirect back to on successful authentication.",
    ),
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the Google consent screen.",
    ),
):
    """
    Kick off the consent flow by generating a signed state and authorization URL.
    """
    authorization_url = sync_service.sign_in(redirect_to=redirect_to)

    if redirect or _wants_html(request):
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    state = _state_from_url(authorization_url)
    return AuthorizationResponse(authorization_url=authorization_url, state=state)


@router.get("/auth/google/callback", status_code=HTTPStatus.OK)
async def handle_google_callback(
    request: Request,
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
    state: str = Query(..., description="OAuth state token."),
    code: Optional[str] = Query(default=None, description="Authorization code returned by Google."),
    error: Optional[str] = Query(default=None, description="Error reported by the consent screen."),
    error_description: Optional[str] = Query(default=None),
    redirect: bool = Query(
        default=False,
        description="When true, redirect browser clients instead of returning JSON.",
    ),
):
    """Complete the consent flow and store the access token."""
    redirect_to = await sync_service.complete_sign_in(
        state=state,
        code=code,
        error=error,
        error_description=error_description,
    )

    target = redirect_to or (
        str(settings.frontend_base_url) if settings.frontend_base_url else None
    )
    if target and (redirect or _wants_html(request)):
        return RedirectResponse(url=target, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return {"status": "connected", "redirect_to": redirect_to}


@router.post("/auth/signout", status_code=HTTPStatus.OK)
async def sign_out(
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
) -> dict:
    sync_service.sign_out()
    return {"status": "signed_out"}


@router.get("/sync/status", response_model=SyncStatus)
async def sync_status(
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
) -> SyncStatus:
    return sync_service.status()


@router.get("/sync/account", status_code=HTTPStatus.OK)
async def sync_account(
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
) -> dict:
    """Look up the account the session belongs to."""
    return {"account_email": await sync_service.identify()}


@router.get("/sync/document", response_model=PullResponse)
async def pull_document(
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
) -> PullResponse:
    """Return the latest snapshot stored on Drive."""
    result = await sync_service.pull()
    if isinstance(result, NoData):
        return PullResponse(status="no_data", reason=result.reason.value)
    return PullResponse(status="ok", document=result)


@router.put("/sync/document", response_model=PushResponse)
async def push_document(
    sync_service: Annotated[Any, Depends(get_document_sync_service)],
    document: Any = Body(..., description="Full application snapshot to store."),
) -> PushResponse:
    """Overwrite the snapshot stored on Drive."""
    last_sync = await sync_service.push(document)
    return PushResponse(last_sync=last_sync)


def _state_from_url(url: str) -> str:
    from urllib.parse import parse_qs, urlsplit

    return parse_qs(urlsplit(url).query).get("state", [""])[0]


__all__ = ["router"]
