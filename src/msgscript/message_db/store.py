"""
Message store: query and edit operations over the aggregate index.

All edits go through ``update`` so that an archive and the index mirror of
it never disagree.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from .index import MessageIndex
from .models import KeyRecord, MessageMutator, MessageSlot


CommitListener = Callable[[str, str], None]


class MessageStore:
    """Lookup and guarded update of messages across all archives."""

    def __init__(
        self, index: MessageIndex, on_commit: Optional[CommitListener] = None
    ):
        """Initialize the store.

        Args:
            index: Aggregate index to serve from and keep in sync
            on_commit: Called with (key, value) after each committed edit
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.index = index
        self.on_commit = on_commit

    def lookup(self, key: str) -> Optional[str]:
        """Return the current text of ``key`` or None if no archive defines it."""
        record = self.index.messages.get(key)
        return record.value if record else None

    def record(self, key: str) -> Optional[KeyRecord]:
        """Return a copy of the index record for ``key``."""
        record = self.index.messages.get(key)
        return replace(record) if record else None

    def archive_name_of(self, key: str) -> Optional[str]:
        """Return the name of the archive that owns ``key``."""
        record = self.index.messages.get(key)
        return self.index.archive_name(record.archive) if record else None

    def update(self, key: str, fallback_archive: str, mutator: MessageMutator) -> None:
        """Edit a message through a callback, committing only real changes.

        The mutator receives a staged copy of the value (or None when there is
        nothing to edit) and returns True if it changed it. Blank keys and new
        keys without a resolvable archive get None and are never written.

        Args:
            key: Message key to edit
            fallback_archive: Archive for new keys when no override archive applies
            mutator: Edit callback
        """
        if not key:
            mutator(None)
            return

        record = self._stage_record(key, fallback_archive)
        if record is None:
            self.logger.debug(
                f"No archive for new key '{key}' (fallback '{fallback_archive}'), edit dropped"
            )
            mutator(None)
            return

        slot = MessageSlot(record.value)
        if not mutator(slot):
            return

        record.value = slot.value
        self._commit(key, record)

    def _stage_record(self, key: str, fallback_archive: str) -> Optional[KeyRecord]:
        """Copy the existing record or materialize an empty one for a new key."""
        existing = self.index.messages.get(key)
        if existing is not None:
            return replace(existing)

        position = self.index.resolve_new_key_archive(fallback_archive)
        if position is None:
            return None
        return KeyRecord(value="", archive=position)

    def _commit(self, key: str, record: KeyRecord) -> None:
        """Write the record to its archive and mirror it in the index."""
        archive = self.index.archives[record.archive]

        def apply(messages: dict[str, str]) -> bool:
            messages[key] = record.value
            # Index update happens under the archive lock, together with the write
            self.index.messages[key] = record
            return True

        archive.write(apply)
        self.logger.debug(f"Committed '{key}' to archive '{archive.name}'")

        if self.on_commit:
            self.on_commit(key, record.value)

    def __contains__(self, key: object) -> bool:
        return key in self.index.messages

    def __len__(self) -> int:
        return len(self.index.messages)
