from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from scripts import run_server


def test_main_starts_uvicorn_with_server_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manifest = tmp_path / "dist" / "manifest.json"
    manifest.parent.mkdir()
    manifest.write_text(json.dumps({"src/main.ts": {"file": "main.js"}}), encoding="utf-8")

    monkeypatch.setenv("VITE_MANIFEST_DIR", str(manifest.parent))
    monkeypatch.setenv("SERVER_PORT", "9000")
    monkeypatch.setenv("SERVER_HOST", "0.0.0.0")

    calls: list[tuple[str, dict[str, Any]]] = []

    def fake_run(app: str, **kwargs: Any) -> None:
        calls.append((app, kwargs))

    monkeypatch.setattr(run_server.uvicorn, "run", fake_run)

    run_server.main()

    assert calls == [
        ("vite_manifest.web.main:app", {"host": "0.0.0.0", "port": 9000, "reload": False})
    ]


def test_describe_asset_mode_without_manifest(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("VITE_MANIFEST_DIR", str(tmp_path))
    monkeypatch.setenv("VITE_MANIFEST_ORIGIN", "http://localhost")
    monkeypatch.setenv("VITE_SERVER_PORT", "5173")

    message = run_server.describe_asset_mode()

    assert "dev server at http://localhost:5173" in message


def test_describe_asset_mode_with_manifest(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manifest = tmp_path / ".vite" / "manifest.json"
    manifest.parent.mkdir()
    manifest.write_text("{}", encoding="utf-8")
    monkeypatch.setenv("VITE_MANIFEST_DIR", str(tmp_path))

    assert run_server.describe_asset_mode().endswith(str(manifest.resolve()))
