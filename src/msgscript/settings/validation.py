"""
Settings validation for msgscript.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from ..archives.models import ARCHIVE_SUFFIX
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        result = ValidationResult()

        project_path = self.settings.project_path
        if project_path:
            if not project_path.is_dir():
                result.errors.append(f"Project path does not exist: {project_path}")
            elif not any(project_path.rglob(f"*{ARCHIVE_SUFFIX}")):
                result.warnings.append(
                    f"Project path contains no archive files: {project_path}"
                )
            else:
                self._check_archive_names(project_path, result)
        else:
            result.warnings.append("Project path not set")

        entity_path = self.settings.entity_tables_path
        if entity_path and not entity_path.is_file():
            result.warnings.append(f"Entity tables file not found: {entity_path}")

        # Drop recent projects that have disappeared
        recent = self.settings.recent_projects
        valid_recent: List[str] = [path for path in recent if Path(path).is_dir()]
        if len(valid_recent) != len(recent):
            for missing in set(recent) - set(valid_recent):
                result.warnings.append(f"Recent project no longer exists: {missing}")
            self.settings.settings.setValue("paths/recent_projects", valid_recent)
            self.settings.settings.sync()

        if result.errors:
            logger.debug(f"Settings validation failed with {len(result.errors)} errors")
        return result

    def _check_archive_names(self, project_path: Path, result: ValidationResult) -> None:
        """Warn when configured archive names do not exist in the project."""
        names = {
            path.relative_to(project_path).with_suffix("").as_posix()
            for path in project_path.rglob(f"*{ARCHIVE_SUFFIX}")
        }
        override = self.settings.override_archive
        if override and override not in names:
            result.warnings.append(
                f"Override archive '{override}' not found, new keys use the fallback archive"
            )
        default = self.settings.default_archive
        if default and default not in names:
            result.warnings.append(f"Default archive '{default}' not found in project")
