"""Command-line access to the Drive document sync core.

The tool reuses the same session state as the API, so a token obtained through
the web consent flow is visible here and vice versa.

Example usages::

    # Show whether a session is active and when it last pushed.
    python -m scripts.sync_cli status

    # Save the remote snapshot locally, or upload a local snapshot.
    python -m scripts.sync_cli pull --output snapshot.json
    python -m scripts.sync_cli push snapshot.json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Awaitable, Callable

from pydantic import ValidationError

from drivesync.core.errors import (
    ConfigurationError,
    ConsentFlowError,
    DriveSyncError,
    SessionExpiredError,
    UnauthenticatedError,
)
from drivesync.models.document import NoData
from drivesync.services import DocumentSyncService

EXIT_OK = 0
EXIT_NO_DATA = 2
EXIT_AUTH_REQUIRED = 3
EXIT_REMOTE_ERROR = 4
EXIT_RUNTIME_ERROR = 5


def _default_service() -> DocumentSyncService:
    from drivesync.dependencies import get_document_sync_service

    return get_document_sync_service()


def _print_json(value, output: Path | None = None) -> None:
    rendered = json.dumps(value, indent=2, sort_keys=True)
    if output is None:
        print(rendered)
    else:
        output.write_text(rendered + "\n", encoding="utf-8")
        print(f"Wrote {output}")


async def _status(service: DocumentSyncService, args: argparse.Namespace) -> int:
    _print_json(service.status().model_dump())
    return EXIT_OK


async def _pull(service: DocumentSyncService, args: argparse.Namespace) -> int:
    result = await service.pull()
    if isinstance(result, NoData):
        print(f"No data on Drive ({result.reason.value}).", file=sys.stderr)
        return EXIT_NO_DATA
    _print_json(result, args.output)
    return EXIT_OK


async def _push(service: DocumentSyncService, args: argparse.Namespace) -> int:
    source: Path = args.source
    if not source.exists():
        print(f"Snapshot file {source} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    try:
        document = json.loads(source.read_text(encoding="utf-8"))
    except ValueError as exc:
        print(f"Snapshot file {source} is not valid JSON: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    last_sync = await service.push(document)
    if last_sync is None:
        print(f"Pushed {source}; signed out before the sync time was recorded.")
    else:
        print(f"Pushed {source} at {last_sync}.")
    return EXIT_OK


async def _sign_out(service: DocumentSyncService, args: argparse.Namespace) -> int:
    service.sign_out()
    print("Signed out.")
    return EXIT_OK


async def _authorize_url(service: DocumentSyncService, args: argparse.Namespace) -> int:
    print(service.sign_in(redirect_to=args.redirect_to))
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Pull, push and inspect the JSON snapshot stored on Google Drive."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("status", help="Show the local session state.")

    pull_parser = subparsers.add_parser("pull", help="Download the remote snapshot.")
    pull_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the snapshot to this file instead of stdout.",
    )

    push_parser = subparsers.add_parser("push", help="Overwrite the remote snapshot.")
    push_parser.add_argument("source", type=Path, help="JSON file to upload.")

    subparsers.add_parser("sign-out", help="Forget the token and cached file id.")

    authorize_parser = subparsers.add_parser(
        "authorize-url",
        help="Print the Google consent URL; the API callback completes sign-in.",
    )
    authorize_parser.add_argument("--redirect-to", default=None)

    return parser


_HANDLERS: dict[str, Callable[[DocumentSyncService, argparse.Namespace], Awaitable[int]]] = {
    "status": _status,
    "pull": _pull,
    "push": _push,
    "sign-out": _sign_out,
    "authorize-url": _authorize_url,
}


def main(
    argv: list[str] | None = None,
    *,
    service_factory: Callable[[], DocumentSyncService] = _default_service,
) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        service = service_factory()
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        return asyncio.run(_HANDLERS[args.command](service, args))
    except (UnauthenticatedError, SessionExpiredError) as exc:
        print(f"{exc.message} Run 'authorize-url' to sign in.", file=sys.stderr)
        return EXIT_AUTH_REQUIRED
    except (ConfigurationError, ConsentFlowError) as exc:
        print(exc.message, file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except DriveSyncError as exc:
        print(f"Drive request failed: {exc.message}", file=sys.stderr)
        return EXIT_REMOTE_ERROR


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
