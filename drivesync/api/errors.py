"""Translate sync errors into JSON HTTP responses."""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from drivesync.core.errors import (
    ConfigurationError,
    ConsentFlowError,
    DriveSyncError,
    NetworkError,
    RemoteAPIError,
    RequestTimeoutError,
    SessionExpiredError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = {
    UnauthenticatedError: HTTPStatus.UNAUTHORIZED,
    SessionExpiredError: HTTPStatus.UNAUTHORIZED,
    ConsentFlowError: HTTPStatus.BAD_REQUEST,
    ConfigurationError: HTTPStatus.SERVICE_UNAVAILABLE,
    RemoteAPIError: HTTPStatus.BAD_GATEWAY,
    NetworkError: HTTPStatus.BAD_GATEWAY,
    RequestTimeoutError: HTTPStatus.GATEWAY_TIMEOUT,
}


def status_for(error: DriveSyncError) -> HTTPStatus:
    for error_type, status in _STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


async def handle_drive_sync_error(request: Request, exc: DriveSyncError) -> JSONResponse:
    status = status_for(exc)
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, int(status), exc.code)
    return JSONResponse(
        status_code=status,
        content={"error": exc.code, "detail": exc.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DriveSyncError, handle_drive_sync_error)


__all__ = ["handle_drive_sync_error", "register_error_handlers", "status_for"]
