"""
Single-owner handle to the message database for the UI thread.

The wrapper owns the store; widgets receive the wrapper and call into it.
It is not thread-safe and must not be re-entered from an update callback.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, Signal

from ..translation import (
    DEFAULT_ENTITY_KINDS,
    EntityKind,
    EntityTables,
    TranslationResult,
    translate_script_result,
)
from .index import MessageIndex
from .models import ArchiveSource, MessageDbBusyError, MessageMutator
from .store import MessageStore


class MessageDbWrapper(QObject):
    """Qt-facing owner of the message store and translation pass.

    Emits ``message_changed(key, value)`` after every committed edit.
    """

    message_changed = Signal(str, str)

    def __init__(self, store: MessageStore, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._store = store
        self._store.on_commit = self._queue_changed
        self._busy = False
        # Commits are announced once the store is released, so slots may read it
        self._pending: List[Tuple[str, str]] = []
        self.logger.debug(f"MessageDbWrapper initialized with {len(store)} messages")

    @classmethod
    def from_project(
        cls, project: ArchiveSource, parent: Optional[QObject] = None
    ) -> "MessageDbWrapper":
        """Build the index from a project and wrap a store over it."""
        return cls(MessageStore(MessageIndex.from_project(project)), parent)

    @property
    def store(self) -> MessageStore:
        return self._store

    @contextmanager
    def _borrow(self) -> Iterator[MessageStore]:
        if self._busy:
            raise MessageDbBusyError("Message database is already in use by an update")
        self._busy = True
        try:
            yield self._store
        finally:
            self._busy = False

    def _queue_changed(self, key: str, value: str) -> None:
        self._pending.append((key, value))

    def _flush_changed(self) -> None:
        pending, self._pending = self._pending, []
        for key, value in pending:
            self.message_changed.emit(key, value)

    def lookup(self, key: str) -> Optional[str]:
        """Return the text of ``key`` for display."""
        with self._borrow() as store:
            return store.lookup(key)

    def update(self, key: str, fallback_archive: str, mutator: MessageMutator) -> None:
        """Edit a message from an inline editor widget."""
        with self._borrow() as store:
            store.update(key, fallback_archive, mutator)
        self._flush_changed()

    def translate_result(
        self,
        script: str,
        tables: EntityTables,
        kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
    ) -> TranslationResult:
        """Translate a script, reporting parse errors in the result."""
        with self._borrow() as store:
            return translate_script_result(script, tables, store.lookup, kinds)

    def translate(
        self,
        script: str,
        tables: EntityTables,
        kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
    ) -> Optional[str]:
        """Render a human-readable dialogue preview, None if the script is invalid."""
        return self.translate_result(script, tables, kinds).text
