"""
Entity tables used to build translation dictionaries.

Entities come from the game's tabular data. Only the two fields the
translation pass needs are kept: the prefixed identifier and the message key
of the display name.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Tuple, cast

import orjson

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonData:
    """A dialogue-capable character."""
    pid: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersonData":
        """Create PersonData from an exported JSON record."""
        return cls(pid=str(data.get("pid", "")), name=str(data.get("name", "")))


@dataclass(frozen=True)
class GodData:
    """A deity/emblem entity."""
    gid: str
    mid: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GodData":
        """Create GodData from an exported JSON record."""
        return cls(gid=str(data.get("gid", "")), mid=str(data.get("mid", "")))


def _freeze(records: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(records))


@dataclass(frozen=True)
class EntityTables:
    """Read-only snapshots of the entity tables, keyed by identifier."""
    persons: Mapping[str, PersonData] = field(default_factory=dict)
    gods: Mapping[str, GodData] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "persons", _freeze(self.persons))
        object.__setattr__(self, "gods", _freeze(self.gods))

    @classmethod
    def from_records(
        cls, persons: Iterable[PersonData] = (), gods: Iterable[GodData] = ()
    ) -> "EntityTables":
        """Build tables from record lists, keying each record by its identifier."""
        return cls(
            persons={person.pid: person for person in persons},
            gods={god.gid: god for god in gods},
        )


@dataclass(frozen=True)
class EntityKind:
    """How one entity table contributes to the translation dictionary.

    Attributes:
        name: Label used in logs
        table: Attribute of EntityTables holding the records
        prefix: Prefix stripped from the identifier to get the bare id
        id_field: Record attribute holding the prefixed identifier
        message_field: Record attribute holding the display name message key
    """
    name: str
    table: str
    prefix: str
    id_field: str
    message_field: str

    def records(self, tables: EntityTables) -> Iterable[Any]:
        """Return the records of this kind from ``tables``."""
        return cast(Mapping[str, Any], getattr(tables, self.table)).values()

    def bare_id(self, record: Any) -> str:
        """Return the identifier without prefix, or "" if the prefix is missing."""
        identifier = str(getattr(record, self.id_field, ""))
        if not identifier.startswith(self.prefix):
            return ""
        return identifier[len(self.prefix):]

    def message_key(self, record: Any) -> str:
        return str(getattr(record, self.message_field, ""))


PERSON_KIND = EntityKind(
    name="person", table="persons", prefix="PID_", id_field="pid", message_field="name"
)
GOD_KIND = EntityKind(
    name="god", table="gods", prefix="GID_", id_field="gid", message_field="mid"
)

# Processing order matters on bare id collisions: later kinds win
DEFAULT_ENTITY_KINDS: Tuple[EntityKind, ...] = (PERSON_KIND, GOD_KIND)


def load_entity_tables(json_file: str | Path) -> EntityTables:
    """Load entity tables from a JSON export.

    Expected layout::

        {"persons": [{"pid": "PID_001", "name": "MPID_001"}, ...],
         "gods": [{"gid": "GID_001", "mid": "MGID_001"}, ...]}

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON or has the wrong layout
    """
    path = Path(json_file)
    data: Any = orjson.loads(path.read_bytes())
    if not isinstance(data, dict):
        raise ValueError(f"Entity file {path} is not a JSON object")

    raw = cast(Dict[str, Any], data)
    persons = [
        PersonData.from_dict(cast(dict[str, Any], item))
        for item in raw.get("persons", [])
        if isinstance(item, dict)
    ]
    gods = [
        GodData.from_dict(cast(dict[str, Any], item))
        for item in raw.get("gods", [])
        if isinstance(item, dict)
    ]
    logger.info(f"Loaded {len(persons)} persons and {len(gods)} gods from {path}")
    return EntityTables.from_records(persons, gods)
