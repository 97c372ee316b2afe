"""Shared fixtures for all package test suites.

Provides the sample FHIR export under ``tests/fixtures/fhir`` and a Typer
CLI runner.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from diga_common import get_settings

FHIR_FIXTURE_DIR = Path(__file__).parent / "tests" / "fixtures" / "fhir"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop logger configuration bound to a previous test's captured streams."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner():
    """Typer CLI runner with stdout and stderr kept apart."""
    return CliRunner()


@pytest.fixture
def fhir_fixture_dir() -> Path:
    """Read-only directory with the four sample FHIR documents."""
    return FHIR_FIXTURE_DIR


@pytest.fixture
def fhir_export_dir(tmp_path) -> Path:
    """Writable copy of the sample FHIR export."""
    export_dir = tmp_path / "export"
    shutil.copytree(FHIR_FIXTURE_DIR, export_dir)
    return export_dir


@pytest.fixture
def open_fixture(fhir_fixture_dir):
    """Open one of the sample documents as a binary stream."""
    opened = []

    def _open(name: str):
        stream = open(fhir_fixture_dir / name, "rb")
        opened.append(stream)
        return stream

    yield _open

    for stream in opened:
        stream.close()
