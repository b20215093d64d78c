"""
msgscript: message database and dialogue script translation engine

Aggregates localized string archives into one editable namespace and renders
dialogue scripts with entity identifiers replaced by display names.
"""

__version__ = "0.1.0"
__author__ = "msgscript Contributors"

# Core service imports
from .archives import MessageArchive, MessageProject
from .message_db import MessageDbWrapper, MessageIndex, MessageStore, MessageSlot
from .script import ScriptParseError, TokenStream, pack, parse
from .translation import EntityTables, translate_script
from .utils.logging_config import setup_logging

__all__ = [
    # Archives
    "MessageArchive",
    "MessageProject",
    # Message database
    "MessageIndex",
    "MessageStore",
    "MessageSlot",
    "MessageDbWrapper",
    # Script codec
    "parse",
    "pack",
    "TokenStream",
    "ScriptParseError",
    # Translation
    "EntityTables",
    "translate_script",
    # Logging
    "setup_logging",
]
