"""
Translation of dialogue scripts into human-readable previews.
"""

from .entities import (
    DEFAULT_ENTITY_KINDS,
    GOD_KIND,
    PERSON_KIND,
    EntityKind,
    EntityTables,
    GodData,
    PersonData,
    load_entity_tables,
)
from .translator import (
    TranslationResult,
    build_qualified_dictionary,
    build_translation_dictionary,
    substitute_identifiers,
    translate_script,
    translate_script_result,
)

__all__ = [
    "translate_script",
    "translate_script_result",
    "TranslationResult",
    "build_translation_dictionary",
    "build_qualified_dictionary",
    "substitute_identifiers",
    "EntityTables",
    "EntityKind",
    "PersonData",
    "GodData",
    "PERSON_KIND",
    "GOD_KIND",
    "DEFAULT_ENTITY_KINDS",
    "load_entity_tables",
]
