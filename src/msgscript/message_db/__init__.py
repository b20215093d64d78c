"""
Module for the message database.

Aggregates message archives into one namespace (later archives override
earlier ones) and routes every edit back to the archive owning the key.
"""

from .index import MessageIndex
from .models import (
    Archive,
    ArchiveSource,
    KeyRecord,
    MessageDbBusyError,
    MessageMutator,
    MessageSlot,
)
from .store import MessageStore
from .wrapper import MessageDbWrapper

__all__ = [
    # Main entry points
    "MessageDbWrapper",
    "MessageStore",
    "MessageIndex",
    # Models
    "KeyRecord",
    "MessageSlot",
    "MessageMutator",
    "MessageDbBusyError",
    # Protocols
    "Archive",
    "ArchiveSource",
]
