"""Shared pytest fixtures for converttomd tests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest

from converttomd import logging_config


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop the stdout handler installed by a test.

    ``configure_logging`` binds its handler to whatever ``sys.stdout`` is at
    the time; under ``capsys`` that stream is closed once the test ends.
    """

    logging_config.reset_logging()
    yield
    logging_config.reset_logging()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``CONVERTTOMD_*`` settings out of the test run."""

    for key in list(os.environ):
        if key.startswith("CONVERTTOMD_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the shared fixtures directory."""

    return Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def sample_export(fixtures_dir: Path, tmp_path: Path) -> Path:
    """Copy the sample export into ``tmp_path`` so outputs land there."""

    target = tmp_path / "AI-538.xml"
    target.write_bytes((fixtures_dir / "AI-538.xml").read_bytes())
    return target
