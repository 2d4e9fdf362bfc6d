"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from tests.detector_stubs import ScriptDetector


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear babylonify environment overrides for every test."""
    for name in (
        "BABYLONIFY_BATCH_SIZE",
        "BABYLONIFY_WORKERS",
        "BABYLONIFY_PRELOAD_MODELS",
        "BABYLONIFY_DETECTOR_LANGUAGES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stub_detector(monkeypatch: pytest.MonkeyPatch) -> ScriptDetector:
    """Replace the lingua detector used by pipelines with a script stub."""
    detector = ScriptDetector()
    monkeypatch.setattr("ingest.pipeline.build_detector", lambda config, target: detector)
    return detector
