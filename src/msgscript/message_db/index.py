"""
Aggregate index over all message archives.

Archives are merged in list order; when several archives define the same
key, the last one wins (same rule as mods overriding core data).
"""

import logging
from typing import Dict, List, Optional, Sequence

from .models import Archive, ArchiveSource, KeyRecord


logger = logging.getLogger(__name__)


class MessageIndex:
    """Merged key -> record view across an ordered list of archives.

    Maintains two indices:
    - messages: message key -> KeyRecord (value and owning archive position)
    - archives_by_name: archive name -> position in ``archives``

    Archive order is fixed at construction, so positions stay valid for the
    lifetime of the index.
    """

    def __init__(
        self,
        messages: Dict[str, KeyRecord],
        archives: List[Archive],
        archives_by_name: Dict[str, int],
        override_archive_name: Optional[str] = None,
    ):
        self.messages = messages
        self.archives = archives
        self.archives_by_name = archives_by_name
        self.override_archive_name = override_archive_name

    @classmethod
    def build(
        cls, archives: Sequence[Archive], override_archive_name: Optional[str] = None
    ) -> "MessageIndex":
        """Build the index from archives in priority order.

        Args:
            archives: Archives to aggregate; later entries shadow earlier ones
            override_archive_name: Archive new keys should prefer, if any

        Returns:
            The built index
        """
        messages: Dict[str, KeyRecord] = {}
        archive_list: List[Archive] = []
        archives_by_name: Dict[str, int] = {}

        for archive in archives:
            position = len(archive_list)
            snapshot = archive.read()
            for key, value in snapshot.items():
                messages[key] = KeyRecord(value=value, archive=position)
            archives_by_name[archive.name] = position
            archive_list.append(archive)
            logger.debug(
                f"Indexed archive '{archive.name}' ({len(snapshot)} messages) at position {position}"
            )

        logger.info(
            f"Message index built: {len(messages)} keys across {len(archive_list)} archives"
        )
        return cls(messages, archive_list, archives_by_name, override_archive_name)

    @classmethod
    def from_project(cls, project: ArchiveSource) -> "MessageIndex":
        """Build the index from a project, skipping archives that did not open."""
        archives: List[Archive] = []
        for name in project.list_archives():
            archive = project.get_archive(name)
            if archive is None:
                logger.warning(f"Archive '{name}' is not available, skipping")
                continue
            archives.append(archive)
        return cls.build(archives, project.override_archive_name())

    def resolve_new_key_archive(self, fallback_archive: str) -> Optional[int]:
        """Pick the archive position a brand-new key should be written to.

        The override archive wins when it is configured and registered;
        otherwise the fallback archive is used if registered.
        """
        if self.override_archive_name:
            position = self.archives_by_name.get(self.override_archive_name)
            if position is not None:
                return position
        return self.archives_by_name.get(fallback_archive)

    def archive_name(self, position: int) -> str:
        """Return the name of the archive at ``position``."""
        return self.archives[position].name
