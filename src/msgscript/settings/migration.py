"""
Settings migration between stored layout versions.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Stamps the settings version and upgrades older layouts."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Set the version on first run, migrate if an older one is stored."""
        stored_version = str(self.settings.value("app/version", "") or "")

        if not stored_version:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif stored_version != ConfigVersion.CURRENT.value:
            self._migrate_config(stored_version, ConfigVersion.CURRENT.value)

    def _migrate_config(self, from_version: str, to_version: str) -> None:
        logger.info(f"Migrating configuration from {from_version} to {to_version}")

        if from_version == ConfigVersion.V1_0.value:
            self._migrate_1_0_to_1_1()
        else:
            logger.warning(f"Unknown configuration version {from_version}, only restamping")

        self.settings.setValue("app/version", to_version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
        logger.info(f"Migration from {from_version} to {to_version} completed")

    def _migrate_1_0_to_1_1(self) -> None:
        """Rename project/cobalt_archive to project/override_archive."""
        old_value = str(self.settings.value("project/cobalt_archive", "") or "")
        if old_value:
            if not self.settings.value("project/override_archive", ""):
                self.settings.setValue("project/override_archive", old_value)
                logger.info(f"Migrated override archive setting: {old_value}")
            else:
                logger.warning(
                    f"Both old and new override archive set, dropping old value: {old_value}"
                )
        self.settings.remove("project/cobalt_archive")
