"""Tests for the sync command-line tool."""

from __future__ import annotations

import json
from pathlib import Path

import httpx

from _drive_fake import DOCUMENT_NAME, FakeDrive, build_sync_service
from scripts import sync_cli


def _run(argv: list[str], service) -> int:
    return sync_cli.main(argv, service_factory=lambda: service)


def test_status_prints_session_state(tmp_path: Path, drive: FakeDrive, capsys) -> None:
    service = build_sync_service(tmp_path, drive, token="tok1")

    assert _run(["status"], service) == sync_cli.EXIT_OK

    printed = json.loads(capsys.readouterr().out)
    assert printed["is_authenticated"] is True
    assert printed["file_id"] is None


def test_pull_without_session_requires_sign_in(tmp_path: Path, drive: FakeDrive, capsys) -> None:
    service = build_sync_service(tmp_path, drive)

    assert _run(["pull"], service) == sync_cli.EXIT_AUTH_REQUIRED
    assert "authorize-url" in capsys.readouterr().err
    assert drive.requests == []


def test_pull_reports_no_data(tmp_path: Path, drive: FakeDrive, capsys) -> None:
    service = build_sync_service(tmp_path, drive, token="tok1")

    assert _run(["pull"], service) == sync_cli.EXIT_NO_DATA
    assert "empty" in capsys.readouterr().err


def test_push_then_pull_to_file(tmp_path: Path, drive: FakeDrive) -> None:
    service = build_sync_service(tmp_path, drive, token="tok1")
    source = tmp_path / "snapshot.json"
    source.write_text(json.dumps({"invoices": [{"no": "INV-1"}]}), encoding="utf-8")
    output = tmp_path / "pulled.json"

    assert _run(["push", str(source)], service) == sync_cli.EXIT_OK
    assert _run(["pull", "--output", str(output)], service) == sync_cli.EXIT_OK

    assert json.loads(output.read_text(encoding="utf-8")) == {"invoices": [{"no": "INV-1"}]}
    assert service.status().last_sync is not None


def test_push_rejects_invalid_json_file(tmp_path: Path, drive: FakeDrive) -> None:
    service = build_sync_service(tmp_path, drive, token="tok1")
    source = tmp_path / "broken.json"
    source.write_text("{oops", encoding="utf-8")

    assert _run(["push", str(source)], service) == sync_cli.EXIT_RUNTIME_ERROR
    assert drive.requests == []


def test_remote_failure_exit_code(tmp_path: Path, drive: FakeDrive, capsys) -> None:
    drive.add_file(DOCUMENT_NAME)
    drive.queued_responses.append(
        httpx.Response(500, json={"error": {"message": "quota exceeded"}})
    )
    service = build_sync_service(tmp_path, drive, token="tok1")

    assert _run(["pull"], service) == sync_cli.EXIT_REMOTE_ERROR
    assert "quota exceeded" in capsys.readouterr().err


def test_authorize_url_needs_configured_client(tmp_path: Path, drive: FakeDrive) -> None:
    service = build_sync_service(tmp_path, drive, client_id=None)

    assert _run(["authorize-url"], service) == sync_cli.EXIT_RUNTIME_ERROR


def test_sign_out_clears_session(tmp_path: Path, drive: FakeDrive) -> None:
    service = build_sync_service(tmp_path, drive, token="tok1")

    assert _run(["sign-out"], service) == sync_cli.EXIT_OK
    assert service.status().is_authenticated is False


def test_push_rejects_file_that_is_not_utf8(tmp_path: Path, drive: FakeDrive) -> None:
    service = build_sync_service(tmp_path, drive, token="tok1")
    source = tmp_path / "binary.json"
    source.write_bytes(b"\xff\xfe\x00bad")

    assert _run(["push", str(source)], service) == sync_cli.EXIT_RUNTIME_ERROR
    assert drive.requests == []


def test_non_json_drive_response_exit_code(tmp_path: Path, drive: FakeDrive, capsys) -> None:
    drive.queued_responses.append(httpx.Response(200, text="<html>captive portal</html>"))
    service = build_sync_service(tmp_path, drive, token="tok1")

    assert _run(["pull"], service) == sync_cli.EXIT_REMOTE_ERROR
    assert "not valid JSON" in capsys.readouterr().err
