"""
Message project: the session object that owns the opened archives.

Discovers archive files below a project directory, opens them and saves the
modified ones back. The message database only sees the small interface
``list_archives`` / ``get_archive`` / ``override_archive_name``.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from .archive import MessageArchive
from .loaders import ArchiveFileLoader
from .models import ARCHIVE_SUFFIX, ArchiveNames


class MessageProject:
    """Collection of message archives opened from one directory."""

    def __init__(
        self,
        archives: Optional[List[MessageArchive]] = None,
        override_archive_name: Optional[str] = None,
        root: Optional[Path] = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.root = root
        self.loader = ArchiveFileLoader()
        self._override_archive_name = override_archive_name or None
        self._archives: Dict[str, MessageArchive] = {}
        for archive in archives or []:
            self._archives[archive.name] = archive

    @classmethod
    def open(
        cls, root: str | Path, override_archive_name: Optional[str] = None
    ) -> "MessageProject":
        """Open every archive file below ``root``.

        Archive names are the file paths relative to ``root`` without the
        suffix, using ``/`` as separator. Files that fail to load are logged
        and left out.

        Raises:
            FileNotFoundError: If ``root`` is not a directory
        """
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Project directory not found: {root}")

        project = cls(override_archive_name=override_archive_name, root=root)
        json_files = sorted(root.rglob(f"*{ARCHIVE_SUFFIX}"))
        if not json_files:
            project.logger.warning(f"No archive files found in {root}")

        for json_file in json_files:
            name = json_file.relative_to(root).with_suffix("").as_posix()
            archive = project.loader.open_archive(name, json_file)
            if archive is not None:
                project._archives[name] = archive

        project.logger.info(
            f"Opened project {root} with {len(project._archives)} archives"
        )
        return project

    def list_archives(self) -> ArchiveNames:
        """Return archive names in load order (sorted by name)."""
        return sorted(self._archives)

    def get_archive(self, name: str) -> Optional[MessageArchive]:
        """Return the archive with the given name, if it is open."""
        return self._archives.get(name)

    def override_archive_name(self) -> Optional[str]:
        """Name of the archive new messages should be written to, if any."""
        return self._override_archive_name

    def add_archive(self, archive: MessageArchive) -> None:
        """Register an archive, replacing one with the same name."""
        if archive.path is None and self.root is not None:
            archive.path = self.root / f"{archive.name}{ARCHIVE_SUFFIX}"
        self._archives[archive.name] = archive

    def dirty_archives(self) -> List[MessageArchive]:
        """Return archives with unsaved changes, in load order."""
        return [
            self._archives[name]
            for name in self.list_archives()
            if self._archives[name].dirty
        ]

    def save(self) -> List[str]:
        """Write every modified archive back to disk.

        Returns:
            Names of the archives that were saved
        """
        saved: List[str] = []
        for archive in self.dirty_archives():
            self.loader.save_archive(archive)
            saved.append(archive.name)

        if saved:
            self.logger.info(f"Saved {len(saved)} archives: {', '.join(saved)}")
        else:
            self.logger.debug("No modified archives to save")
        return saved
