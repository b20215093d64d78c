"""
Core settings management for msgscript.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from .base import SettingsSection
from .types import ConfigError, ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .project import ProjectSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)

ORGANIZATION = "msgscript"
APPLICATION = "msgscript"


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(self, profile: str = "default", backend: Optional[QSettings] = None):
        """Initialize settings for a profile.

        Args:
            profile: Settings profile name (default: "default")
            backend: QSettings to use instead of the per-user native store
        """
        self.settings = backend if backend is not None else QSettings(ORGANIZATION, APPLICATION)
        self.profile = profile

        # Profile is a group: msgscript/msgscript/<profile>/...
        self.settings.beginGroup(profile)

        self._app = SettingsSection(self.settings)
        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._project = ProjectSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def project(self) -> ProjectSettings:
        """Access project settings subsystem."""
        return self._project

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the application."""
        return self._app._get_bool("app/first_run", True)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._app._get_str("app/version", ConfigVersion.CURRENT.value)

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def project_path(self) -> Optional[Path]:
        """Get message project directory."""
        return self._paths.project_path

    @project_path.setter
    def project_path(self, value: Optional[Path]) -> None:
        self._paths.project_path = value

    def require_project_path(self) -> Path:
        """Return the project directory or raise if it is not configured.

        Raises:
            ConfigError: If no project path is set
        """
        path = self._paths.project_path
        if path is None:
            raise ConfigError("No project path configured")
        return path

    @property
    def entity_tables_path(self) -> Optional[Path]:
        """Get entity tables export path."""
        return self._paths.entity_tables_path

    @entity_tables_path.setter
    def entity_tables_path(self, value: Optional[Path]) -> None:
        self._paths.entity_tables_path = value

    @property
    def recent_projects(self) -> List[str]:
        """Get recently opened project directories."""
        return self._paths.recent_projects

    def add_recent_project(self, project_path: Union[str, Path]) -> None:
        """Add a project to the recent list (max 10 items)."""
        self._paths.add_recent_project(project_path)

    # === PROJECT SETTINGS (DELEGATED) ===

    @property
    def override_archive(self) -> Optional[str]:
        """Archive that receives new message keys, if configured."""
        return self._project.override_archive

    @override_archive.setter
    def override_archive(self, value: Optional[str]) -> None:
        self._project.override_archive = value

    @property
    def default_archive(self) -> str:
        """Fallback archive for new message keys."""
        return self._project.default_archive

    @default_archive.setter
    def default_archive(self, value: str) -> None:
        self._project.default_archive = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    @log_file_path.setter
    def log_file_path(self, value: str) -> None:
        self._logging.log_file_path = value

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()
