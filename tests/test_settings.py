"""Tests for QSettings-backed application settings."""

from pathlib import Path
from typing import Callable, Dict

import pytest
from PySide6.QtCore import QSettings

from msgscript.settings import AppSettings, ConfigError, ConfigVersion

WriteArchive = Callable[[str, Dict[str, str]], Path]


class TestDefaults:
    """Values of a fresh profile."""

    def test_first_run(self, app_settings: AppSettings) -> None:
        assert app_settings.is_first_run
        assert app_settings.version == ConfigVersion.CURRENT.value

        app_settings.set_first_run_complete()
        assert not app_settings.is_first_run

    def test_empty_paths(self, app_settings: AppSettings) -> None:
        assert app_settings.project_path is None
        assert app_settings.entity_tables_path is None
        assert app_settings.recent_projects == []
        with pytest.raises(ConfigError):
            app_settings.require_project_path()

    def test_archive_defaults(self, app_settings: AppSettings) -> None:
        assert app_settings.override_archive is None
        assert app_settings.default_archive == ""

    def test_logging_defaults(self, app_settings: AppSettings) -> None:
        assert app_settings.console_logging
        assert app_settings.console_log_level == "INFO"
        assert not app_settings.file_logging
        assert app_settings.log_file_path == "logs/msgscript.csv"


class TestPersistence:
    """Values written through one instance are seen by the next."""

    def test_round_trip(self, tmp_path: Path, settings_backend: QSettings) -> None:
        settings = AppSettings(backend=settings_backend)
        settings.project_path = tmp_path / "project"
        settings.override_archive = "Cobalt"
        settings.default_archive = "common/ui"
        settings.file_logging = True

        reopened = AppSettings(
            backend=QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
        )
        assert reopened.project_path == tmp_path / "project"
        assert reopened.override_archive == "Cobalt"
        assert reopened.default_archive == "common/ui"
        assert reopened.file_logging

    def test_profiles_are_separate(self, tmp_path: Path) -> None:
        ini = str(tmp_path / "settings.ini")
        work = AppSettings("work", QSettings(ini, QSettings.Format.IniFormat))
        work.override_archive = "Cobalt"

        other = AppSettings("other", QSettings(ini, QSettings.Format.IniFormat))
        assert other.override_archive is None

    def test_clearing_override(self, app_settings: AppSettings) -> None:
        app_settings.override_archive = "Cobalt"
        app_settings.override_archive = None
        assert app_settings.override_archive is None

    def test_invalid_log_level_is_ignored(self, app_settings: AppSettings) -> None:
        app_settings.console_log_level = "debug"
        assert app_settings.console_log_level == "DEBUG"
        app_settings.console_log_level = "LOUD"
        assert app_settings.console_log_level == "DEBUG"


class TestRecentProjects:
    """Most-recent-first list capped at ten entries."""

    def test_single_entry(self, app_settings: AppSettings) -> None:
        app_settings.add_recent_project("/games/one")
        assert app_settings.recent_projects == ["/games/one"]

    def test_move_to_front(self, app_settings: AppSettings) -> None:
        app_settings.add_recent_project("/games/one")
        app_settings.add_recent_project("/games/two")
        app_settings.add_recent_project("/games/one")
        assert app_settings.recent_projects == ["/games/one", "/games/two"]

    def test_cap(self, app_settings: AppSettings) -> None:
        for i in range(12):
            app_settings.add_recent_project(f"/games/{i}")
        recent = app_settings.recent_projects
        assert len(recent) == 10
        assert recent[0] == "/games/11"


class TestMigration:
    """Upgrading settings written by version 1.0."""

    def test_cobalt_archive_is_renamed(self, tmp_path: Path) -> None:
        ini = str(tmp_path / "settings.ini")
        old = QSettings(ini, QSettings.Format.IniFormat)
        old.setValue("default/app/version", "1.0")
        old.setValue("default/project/cobalt_archive", "Cobalt")
        old.sync()

        settings = AppSettings(backend=QSettings(ini, QSettings.Format.IniFormat))

        assert settings.version == ConfigVersion.CURRENT.value
        assert settings.override_archive == "Cobalt"
        assert settings.settings.value("project/cobalt_archive") is None
        assert settings.settings.value("app/migrated_from") == "1.0"

    def test_new_key_wins_over_old(self, tmp_path: Path) -> None:
        ini = str(tmp_path / "settings.ini")
        old = QSettings(ini, QSettings.Format.IniFormat)
        old.setValue("default/app/version", "1.0")
        old.setValue("default/project/cobalt_archive", "Old")
        old.setValue("default/project/override_archive", "New")
        old.sync()

        settings = AppSettings(backend=QSettings(ini, QSettings.Format.IniFormat))
        assert settings.override_archive == "New"


class TestValidation:
    """Checks run against the configured project."""

    def test_unset_project_is_a_warning(self, app_settings: AppSettings) -> None:
        result = app_settings.validate()
        assert result.is_valid
        assert "Project path not set" in result.warnings

    def test_missing_project_is_an_error(self, tmp_path: Path, app_settings: AppSettings) -> None:
        app_settings.project_path = tmp_path / "missing"
        result = app_settings.validate()
        assert not result.is_valid

    def test_unknown_archive_names(
        self, tmp_path: Path, app_settings: AppSettings, write_archive: WriteArchive
    ) -> None:
        write_archive("Base", {"K": "v"})
        app_settings.project_path = tmp_path / "project"
        app_settings.override_archive = "Cobalt"
        app_settings.default_archive = "Base"

        result = app_settings.validate()

        assert result.is_valid
        assert len(result.warnings) == 1
        assert "Cobalt" in result.warnings[0]

    def test_missing_recent_projects_are_pruned(
        self, tmp_path: Path, app_settings: AppSettings
    ) -> None:
        existing = tmp_path / "exists"
        existing.mkdir()
        app_settings.add_recent_project(tmp_path / "gone")
        app_settings.add_recent_project(existing)

        app_settings.validate()

        assert app_settings.recent_projects == [str(existing)]
