"""
Module for working with message archives.

Provides the archive capability consumed by the message database, plus the
project object that opens archive files from disk and saves them back.
"""

from .archive import MessageArchive
from .loaders import ArchiveFileLoader
from .models import MessageMap, ArchiveNames, ARCHIVE_SUFFIX
from .project import MessageProject

__all__ = [
    "MessageArchive",
    "MessageProject",
    "ArchiveFileLoader",
    "MessageMap",
    "ArchiveNames",
    "ARCHIVE_SUFFIX",
]
