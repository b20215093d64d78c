"""
Data models for message archives.

Archives are plain string tables; the aliases below keep signatures readable.
"""

from typing import Dict, List, TypeAlias

MessageMap: TypeAlias = Dict[str, str]
"""Contents of a single archive: message key -> text."""

ArchiveNames: TypeAlias = List[str]
"""Ordered archive names as reported by a project."""


# File suffix of archives stored on disk
ARCHIVE_SUFFIX = ".json"
