"""
Configuration types and exceptions for msgscript settings.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ConfigVersion(Enum):
    """Stored settings layout version, used by the migrator."""
    V1_0 = "1.0"  # project/cobalt_archive
    V1_1 = "1.1"  # project/override_archive
    CURRENT = V1_1


class ConfigError(Exception):
    """Raised when a required setting is missing or unusable."""
    pass


@dataclass
class ValidationResult:
    """Errors and warnings found while validating settings."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
