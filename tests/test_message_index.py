"""Tests for building the aggregate message index."""

from typing import List, Optional

from msgscript.archives import MessageArchive, MessageProject
from msgscript.message_db import KeyRecord, MessageIndex


class TestIndexBuild:
    """Merging archives with last-write-wins."""

    def test_later_archive_shadows_earlier(self, base_dlc_archives: List[MessageArchive]) -> None:
        index = MessageIndex.build(base_dlc_archives)
        assert index.messages["K1"] == KeyRecord(value="World", archive=1)
        assert index.messages["K2"] == KeyRecord(value="Extra", archive=1)

    def test_order_decides_not_name(self) -> None:
        archives = [
            MessageArchive("zzz", {"K": "first"}),
            MessageArchive("aaa", {"K": "second"}),
        ]
        index = MessageIndex.build(archives)
        assert index.messages["K"].value == "second"
        assert index.archive_name(index.messages["K"].archive) == "aaa"

    def test_archives_by_name_positions(self, base_dlc_archives: List[MessageArchive]) -> None:
        index = MessageIndex.build(base_dlc_archives)
        assert index.archives_by_name == {"Base": 0, "DLC": 1}
        assert [archive.name for archive in index.archives] == ["Base", "DLC"]

    def test_empty_archive_is_registered(self) -> None:
        index = MessageIndex.build([MessageArchive("Empty"), MessageArchive("Main", {"A": "a"})])
        assert index.archives_by_name["Empty"] == 0
        assert index.messages["A"].archive == 1

    def test_build_does_not_mutate_archives(self, base_dlc_archives: List[MessageArchive]) -> None:
        MessageIndex.build(base_dlc_archives)
        assert base_dlc_archives[0].read() == {"K1": "Hello"}
        assert not base_dlc_archives[0].dirty
        assert not base_dlc_archives[1].dirty

    def test_override_name_is_kept(self) -> None:
        index = MessageIndex.build([MessageArchive("Cobalt")], "Cobalt")
        assert index.override_archive_name == "Cobalt"


class TestNewKeyArchive:
    """Archive selection for keys that do not exist yet."""

    def test_override_wins_over_fallback(self) -> None:
        index = MessageIndex.build(
            [MessageArchive("Other"), MessageArchive("Cobalt")], "Cobalt"
        )
        assert index.resolve_new_key_archive("Other") == 1

    def test_unregistered_override_falls_back(self) -> None:
        index = MessageIndex.build([MessageArchive("Other")], "Missing")
        assert index.resolve_new_key_archive("Other") == 0

    def test_nothing_resolves(self) -> None:
        index = MessageIndex.build([MessageArchive("Other")])
        assert index.resolve_new_key_archive("Nope") is None


class _PartialProject:
    """Project where one listed archive failed to open."""

    def __init__(self) -> None:
        self._archives = {
            "a": MessageArchive("a", {"K": "from a"}),
            "c": MessageArchive("c", {"K": "from c"}),
        }

    def list_archives(self) -> List[str]:
        return ["a", "b", "c"]

    def get_archive(self, name: str) -> Optional[MessageArchive]:
        return self._archives.get(name)

    def override_archive_name(self) -> Optional[str]:
        return "c"


class TestIndexFromProject:
    """Building from a project/session object."""

    def test_missing_archives_are_skipped(self) -> None:
        index = MessageIndex.from_project(_PartialProject())
        assert index.archives_by_name == {"a": 0, "c": 1}
        assert index.messages["K"].value == "from c"
        assert index.override_archive_name == "c"

    def test_from_message_project(self) -> None:
        project = MessageProject(
            [MessageArchive("b", {"K": "b"}), MessageArchive("a", {"K": "a"})]
        )
        index = MessageIndex.from_project(project)
        # Projects list archives sorted by name
        assert index.archives_by_name == {"a": 0, "b": 1}
        assert index.messages["K"].value == "b"
        assert index.override_archive_name is None
