"""Shared fixtures for msgscript tests."""

from pathlib import Path
from typing import Callable, Dict, List, Optional

import orjson
import pytest
from PySide6.QtCore import QSettings

from msgscript.archives import MessageArchive
from msgscript.message_db import MessageIndex, MessageSlot, MessageStore
from msgscript.settings import AppSettings


@pytest.fixture
def base_dlc_archives() -> List[MessageArchive]:
    """Two archives where DLC overrides one key of Base."""
    return [
        MessageArchive("Base", {"K1": "Hello"}),
        MessageArchive("DLC", {"K1": "World", "K2": "Extra"}),
    ]


@pytest.fixture
def store(base_dlc_archives: List[MessageArchive]) -> MessageStore:
    return MessageStore(MessageIndex.build(base_dlc_archives))


@pytest.fixture
def settings_backend(tmp_path: Path) -> QSettings:
    """INI-backed QSettings isolated in the test directory."""
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def app_settings(settings_backend: QSettings) -> AppSettings:
    return AppSettings(backend=settings_backend)


@pytest.fixture
def write_archive(tmp_path: Path) -> Callable[[str, Dict[str, str]], Path]:
    """Write an archive JSON file below tmp_path/project."""

    def _write(name: str, messages: Dict[str, str]) -> Path:
        path = tmp_path / "project" / f"{name}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(messages))
        return path

    return _write


def set_to(value: str) -> Callable[[Optional[MessageSlot]], bool]:
    """Mutator that assigns ``value`` and reports a change."""

    def mutator(slot: Optional[MessageSlot]) -> bool:
        if slot is None:
            return False
        slot.value = value
        return True

    return mutator


class RecordingMutator:
    """Mutator that records the slots it receives and returns a fixed result."""

    def __init__(self, result: bool = False, value: Optional[str] = None):
        self.result = result
        self.value = value
        self.calls: List[Optional[MessageSlot]] = []

    def __call__(self, slot: Optional[MessageSlot]) -> bool:
        self.calls.append(slot)
        if slot is not None and self.value is not None:
            slot.value = self.value
        return self.result
