"""
File loaders for message archives.

Archives live on disk as flat JSON objects mapping message keys to text.
orjson is used for both directions.
"""

import logging
from pathlib import Path
from typing import Any, Optional, cast

import orjson

from .archive import MessageArchive
from .models import MessageMap


class ArchiveFileLoader:
    """Reads and writes archive JSON files."""

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.debug("ArchiveFileLoader initialized")

    @staticmethod
    def read_archive_file(json_file: Path) -> MessageMap:
        """Read a JSON file and return its string table.

        Raises:
            OSError: If the file cannot be read
            orjson.JSONDecodeError: If the file is not valid JSON
            ValueError: If the JSON is not a flat object of strings
        """
        with json_file.open("rb") as f:  # orjson works with bytes
            data: Any = orjson.loads(f.read())

        if not isinstance(data, dict):
            raise ValueError(f"Archive {json_file} is not a JSON object")

        messages: MessageMap = {}
        for key, value in cast(dict[str, Any], data).items():
            if not isinstance(value, str):
                raise ValueError(
                    f"Archive {json_file} has non-string value for key '{key}'"
                )
            messages[key] = value
        return messages

    def open_archive(self, name: str, json_file: Path) -> Optional[MessageArchive]:
        """Open an archive file, returning None if it cannot be loaded."""
        try:
            messages = self.read_archive_file(json_file)
        except (OSError, ValueError) as e:
            # orjson.JSONDecodeError is a ValueError subclass
            self.logger.error(f"Error reading archive file {json_file}: {e}")
            return None

        self.logger.debug(f"Opened archive '{name}' with {len(messages)} messages")
        return MessageArchive(name, messages, path=json_file)

    def save_archive(self, archive: MessageArchive, json_file: Optional[Path] = None) -> Path:
        """Write an archive snapshot to disk and mark it clean.

        Args:
            archive: Archive to persist
            json_file: Target path, defaults to the path the archive came from

        Returns:
            Path that was written

        Raises:
            ValueError: If no target path is known
        """
        target = json_file or archive.path
        if target is None:
            raise ValueError(f"Archive '{archive.name}' has no file path")

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(orjson.dumps(archive.read(), option=orjson.OPT_INDENT_2))
        archive.mark_clean()
        self.logger.debug(f"Saved archive '{archive.name}' to {target}")
        return target
