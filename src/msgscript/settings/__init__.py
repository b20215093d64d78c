"""
Settings package for msgscript.

Type-safe configuration management on top of Qt's QSettings.

Usage:
    from msgscript.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .paths import PathSettings
from .project import ProjectSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "PathSettings",
    "ProjectSettings",
    "LoggingSettings",
]
