"""
Path-related settings for msgscript.
"""

from pathlib import Path
from typing import List, Optional, Union

from .base import SettingsSection

MAX_RECENT_PROJECTS = 10


class PathSettings(SettingsSection):
    """Project and entity table locations, plus recently opened projects."""

    @property
    def project_path(self) -> Optional[Path]:
        """Directory holding the message archive files."""
        path_str = self._get_str("paths/project", "")
        return Path(path_str) if path_str else None

    @project_path.setter
    def project_path(self, value: Optional[Path]) -> None:
        self._set("paths/project", str(value) if value else "")

    @property
    def entity_tables_path(self) -> Optional[Path]:
        """JSON export of the person/god tables used for script previews."""
        path_str = self._get_str("paths/entity_tables", "")
        return Path(path_str) if path_str else None

    @entity_tables_path.setter
    def entity_tables_path(self, value: Optional[Path]) -> None:
        self._set("paths/entity_tables", str(value) if value else "")

    @property
    def recent_projects(self) -> List[str]:
        """Recently opened project directories, most recent first."""
        return self._get_list("paths/recent_projects", [])

    def add_recent_project(self, project_path: Union[str, Path]) -> None:
        """Move a project to the front of the recent list."""
        recent = self.recent_projects
        path_str = str(project_path)
        if path_str in recent:
            recent.remove(path_str)
        recent.insert(0, path_str)
        self._set("paths/recent_projects", recent[:MAX_RECENT_PROJECTS])

    def clear_recent_projects(self) -> None:
        self._set("paths/recent_projects", [])
