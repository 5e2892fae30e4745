"""
Tests — CLI Entry Point
========================
Runs ``resource-import`` through Click's :class:`~click.testing.CliRunner`
with Firebase bootstrap and Firestore replaced by in-memory doubles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from src.resource_importer import cli
from src.resource_importer.bootstrap import InlineCredentials
from tests.helpers import HEADER, InMemoryStore


class _FakeHandles:
    def __init__(self) -> None:
        self.firestore = object()
        self.closed = False

    def __enter__(self) -> "_FakeHandles":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.closed = True


@pytest.fixture()
def env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for var in ("GOOGLE_MAPS_API_KEY", "RESOURCE_COLLECTION", "SERVICE_ACCOUNT_FILE"):
        monkeypatch.setenv(var, "placeholder")
        monkeypatch.delenv(var)
    path = tmp_path / "test.env"
    path.write_text("GOOGLE_MAPS_API_KEY=file-key\n", encoding="utf-8")
    return path


@pytest.fixture()
def wiring(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Patch bootstrap and storage; expose what the CLI created."""
    state: dict[str, Any] = {"store": InMemoryStore(), "handles": _FakeHandles()}

    def fake_store(client: Any, collection: str) -> InMemoryStore:
        state["collection"] = collection
        return state["store"]

    def fake_resolve(settings: Any) -> InlineCredentials:
        state["settings"] = settings
        return InlineCredentials({})

    monkeypatch.setattr(cli, "resolve_credential_source", fake_resolve)
    monkeypatch.setattr(cli, "initialize", lambda source, project_id=None: state["handles"])
    monkeypatch.setattr(cli, "FirestoreResourceStore", fake_store)
    return state


@pytest.fixture()
def sheet(tmp_path: Path) -> Path:
    path = tmp_path / "resources.csv"
    path.write_text(
        ",".join(HEADER) + "\n"
        "Clinic,555-1111,Health Co,clinic.org,1 High St,51.5,-0.12,Mon-Fri\n"
        "Shelter,,City,,,,,24/7\n",
        encoding="utf-8",
    )
    return path


class TestCli:
    def test_successful_run(self, sheet: Path, env_file: Path, wiring: dict[str, Any]) -> None:
        result = CliRunner().invoke(
            cli.main, ["--input", str(sheet), "--env-file", str(env_file)]
        )
        assert result.exit_code == 0, result.output
        assert "Processed 2 rows: 1 stored, 1 skipped" in result.output
        assert len(wiring["store"].documents) == 1
        assert wiring["collection"] == "resources"
        assert wiring["handles"].closed

    def test_collection_and_service_account_options(
        self, sheet: Path, env_file: Path, wiring: dict[str, Any], tmp_path: Path
    ) -> None:
        result = CliRunner().invoke(
            cli.main,
            [
                "--input", str(sheet),
                "--env-file", str(env_file),
                "--collection", "listings",
                "--service-account", str(tmp_path / "sa.json"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert wiring["collection"] == "listings"
        assert wiring["settings"].service_account_file == str(tmp_path / "sa.json")

    def test_longitude_column_option(self, tmp_path: Path, env_file: Path, wiring: dict[str, Any]) -> None:
        path = tmp_path / "wide.csv"
        path.write_text(
            ",".join(HEADER + ["Longitude"]) + "\n"
            "Clinic,,Health Co,,,51.5,Walk-ins welcome,Mon-Fri,-0.12\n",
            encoding="utf-8",
        )
        result = CliRunner().invoke(
            cli.main,
            ["--input", str(path), "--env-file", str(env_file), "--longitude-col", "8"],
        )
        assert result.exit_code == 0, result.output
        [doc] = wiring["store"].documents.values()
        assert doc["coordinates"] == {"latitude": 51.5, "longitude": -0.12}
        assert doc["information"] == "Walk-ins welcome"

    def test_missing_api_key_exits_1(self, sheet: Path, tmp_path: Path, env_file: Path, wiring: dict[str, Any]) -> None:
        empty_env = tmp_path / "empty.env"
        empty_env.write_text("", encoding="utf-8")
        result = CliRunner().invoke(cli.main, ["--input", str(sheet), "--env-file", str(empty_env)])
        assert result.exit_code == 1
        assert "GOOGLE_MAPS_API_KEY is not set" in result.output

    def test_missing_input_exits_1(self, tmp_path: Path, env_file: Path, wiring: dict[str, Any]) -> None:
        result = CliRunner().invoke(
            cli.main,
            ["--input", str(tmp_path / "missing.xlsx"), "--env-file", str(env_file)],
        )
        assert result.exit_code == 1
        assert "Spreadsheet not found" in result.output
        assert wiring["store"].save_calls == 0
