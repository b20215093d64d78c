"""
Data models for the message database.

Contains the per-key record kept by the aggregate index, the editable slot
handed to update callbacks, and the protocols the index consumes.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, TypeAlias

from ..archives.models import MessageMap


@dataclass
class KeyRecord:
    """Current value of a message key and the archive that owns it.

    ``archive`` is a position in the index's archive list.
    """
    value: str
    archive: int


@dataclass
class MessageSlot:
    """Editable copy of a message value passed to update callbacks."""
    value: str = ""


MessageMutator: TypeAlias = Callable[[Optional[MessageSlot]], bool]
"""Edit callback: receives a slot (or None) and returns whether it changed it."""


class Archive(Protocol):
    """Archive capability consumed by the index."""

    @property
    def name(self) -> str: ...

    def read(self) -> MessageMap: ...

    def write(self, mutator: Callable[[MessageMap], bool]) -> bool: ...


class ArchiveSource(Protocol):
    """Project/session object the index can be built from."""

    def list_archives(self) -> Sequence[str]: ...

    def get_archive(self, name: str) -> Optional[Archive]: ...

    def override_archive_name(self) -> Optional[str]: ...


class MessageDbBusyError(RuntimeError):
    """Raised when the message database is used re-entrantly from an update."""
    pass
