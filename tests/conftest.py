"""Shared pytest fixtures for KegelBump tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from kegelbump.session.configuration import Configuration, hold_rest_block
from kegelbump.session.engine import SessionEngine

from helpers import ManualScheduler, RecordingHaptics


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Point storage at a throwaway directory so tests never touch ~/Library."""
    monkeypatch.setattr("kegelbump.storage.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr(
        "kegelbump.storage.CONFIG_PATH", tmp_path / "SessionConfiguration.json",
    )
    yield tmp_path


@pytest.fixture
def two_set_config():
    """One block: 2 × (hold 3, rest 2)."""
    return Configuration((hold_rest_block(2, 3, 2),))


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def haptics():
    return RecordingHaptics()


@pytest.fixture
def engine(qapp, two_set_config, scheduler, haptics):
    """Engine on the 2-set routine with a manual tick source."""
    return SessionEngine(
        None,
        configuration=two_set_config,
        scheduler=scheduler,
        haptics=haptics,
    )


@pytest.fixture
def empty_engine(qapp, scheduler, haptics):
    return SessionEngine(
        None,
        configuration=Configuration(),
        scheduler=scheduler,
        haptics=haptics,
    )
