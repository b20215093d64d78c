"""
Message archive: one named string table.

An archive is shared with whatever owns the project, so every access goes
through a lock. Reads hand out a snapshot copy; writes stage a copy of the
whole table, let a mutator edit it and swap it in only on commit.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Dict, Optional

from .models import MessageMap


class MessageArchive:
    """A named key -> string table with scoped read/write access."""

    def __init__(
        self,
        name: str,
        messages: Optional[MessageMap] = None,
        path: Optional[Path] = None,
    ):
        """Create an archive.

        Args:
            name: Logical archive name (e.g. "common/ui")
            messages: Initial table contents, copied
            path: File the archive was opened from, if any
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._name = name
        self._messages: MessageMap = dict(messages or {})
        self._lock = threading.RLock()
        self._dirty = False
        self.path = path

    @property
    def name(self) -> str:
        """Stable logical name of the archive."""
        return self._name

    @property
    def dirty(self) -> bool:
        """Whether a write was committed since the last save."""
        return self._dirty

    def mark_clean(self) -> None:
        """Reset the dirty flag after the archive has been persisted."""
        with self._lock:
            self._dirty = False

    def read(self) -> MessageMap:
        """Return a snapshot of the archive contents."""
        with self._lock:
            return dict(self._messages)

    def write(self, mutator: Callable[[Dict[str, str]], bool]) -> bool:
        """Run a mutation against a staged copy of the table.

        The lock is held for the whole call, so nobody observes the archive
        half-written. The staged copy replaces the table only if the mutator
        returns True.

        Args:
            mutator: Callable receiving the staged table, returns whether to commit

        Returns:
            True if the mutation was committed
        """
        with self._lock:
            staged = dict(self._messages)
            committed = bool(mutator(staged))
            if committed:
                self._messages = staged
                self._dirty = True
                self.logger.debug(f"Committed write to archive '{self._name}'")
            return committed

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __repr__(self) -> str:
        return f"MessageArchive(name={self._name!r}, keys={len(self)})"
