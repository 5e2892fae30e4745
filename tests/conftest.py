"""Shared fixtures for the resource importer tests."""

from __future__ import annotations

import itertools
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from shared.python.base_tool import configure_logging
from tests.helpers import InMemoryStore


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def id_factory():
    """Deterministic ids: res-1, res-2, ..."""
    counter = itertools.count(1)
    return lambda: f"res-{next(counter)}"


@pytest.fixture()
def write_sheet(tmp_path: Path):
    """Return a helper that writes *rows* (header first) to an .xlsx file."""

    def _write(rows: list[list[Any]], name: str = "resources.xlsx") -> Path:
        path = tmp_path / name
        pd.DataFrame(rows).to_excel(path, header=False, index=False)
        return path

    return _write


@pytest.fixture(autouse=True, scope="session")
def _console_logging():
    """Attach the importer's console handler once, outside any CliRunner."""
    configure_logging()
