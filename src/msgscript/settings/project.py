"""
Message project settings: which archives receive new messages.
"""

from typing import Optional

from .base import SettingsSection


class ProjectSettings(SettingsSection):
    """Archive selection for newly created message keys."""

    @property
    def override_archive(self) -> Optional[str]:
        """Archive that new keys go to regardless of the editor's fallback."""
        return self._get_str("project/override_archive", "") or None

    @override_archive.setter
    def override_archive(self, value: Optional[str]) -> None:
        self._set("project/override_archive", value or "")

    @property
    def default_archive(self) -> str:
        """Fallback archive editors pass for new keys."""
        return self._get_str("project/default_archive", "")

    @default_archive.setter
    def default_archive(self, value: str) -> None:
        self._set("project/default_archive", value)
