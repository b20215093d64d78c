"""
Translation pass for dialogue script previews.

Replaces entity identifiers in Window/Animation/Alias commands with the
localized display names of those entities. Nothing else in the script is
touched.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..script import (
    Alias,
    Animation,
    ScriptParseError,
    Token,
    TokenStream,
    Window,
    pack,
    parse,
)
from .entities import DEFAULT_ENTITY_KINDS, EntityKind, EntityTables

logger = logging.getLogger(__name__)

MessageLookup = Callable[[str], Optional[str]]
TranslationDictionary = Dict[str, str]


@dataclass
class TranslationResult:
    """Outcome of a translation request.

    ``text`` is None exactly when ``error`` is set.
    """
    text: Optional[str] = None
    error: Optional[ScriptParseError] = None
    substitutions: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


def build_translation_dictionary(
    tables: EntityTables,
    lookup: MessageLookup,
    kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
) -> TranslationDictionary:
    """Map bare entity ids to localized display names.

    Entities without the expected prefix, with an empty bare id, or whose
    message key has no text contribute nothing. When two kinds produce the
    same bare id, the kind processed later wins.
    """
    dictionary: TranslationDictionary = {}
    for kind in kinds:
        added = 0
        for record in kind.records(tables):
            bare_id = kind.bare_id(record)
            if not bare_id:
                continue
            message = lookup(kind.message_key(record))
            if message is None:
                continue
            if bare_id in dictionary:
                logger.debug(f"Bare id '{bare_id}' from {kind.name} overrides earlier entry")
            dictionary[bare_id] = message
            added += 1
        logger.debug(f"Translation dictionary: {added} entries from {kind.name} table")
    return dictionary


def build_qualified_dictionary(
    tables: EntityTables,
    lookup: MessageLookup,
    kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
) -> TranslationDictionary:
    """Map full prefixed entity ids (e.g. "PID_001") to display names.

    Unlike the bare id dictionary, ids of different kinds never collide here.
    """
    qualified: TranslationDictionary = {}
    for kind in kinds:
        for record in kind.records(tables):
            bare_id = kind.bare_id(record)
            if not bare_id:
                continue
            message = lookup(kind.message_key(record))
            if message is not None:
                qualified[kind.prefix + bare_id] = message
    return qualified


def _translate_identifier(
    identifier: str,
    dictionary: TranslationDictionary,
    prefixes: Tuple[str, ...],
    qualified: Optional[TranslationDictionary] = None,
) -> Optional[str]:
    """Find the display name for an identifier, bare or still prefixed.

    A prefixed identifier found in ``qualified`` resolves to its own kind.
    Otherwise the bare id dictionary is used, where a later kind may shadow
    an earlier one with the same bare id.
    """
    if qualified:
        translation = qualified.get(identifier)
        if translation is not None:
            return translation
    translation = dictionary.get(identifier)
    if translation is not None:
        return translation
    for prefix in prefixes:
        if identifier.startswith(prefix) and len(identifier) > len(prefix):
            return dictionary.get(identifier[len(prefix):])
    return None


def substitute_identifiers(
    stream: TokenStream,
    dictionary: TranslationDictionary,
    kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
    qualified: Optional[TranslationDictionary] = None,
) -> Tuple[TokenStream, int]:
    """Return a copy of ``stream`` with identifier fields translated.

    ``qualified`` maps full prefixed ids to names, see
    ``build_qualified_dictionary``.

    Returns:
        The new stream and the number of substituted fields
    """
    prefixes = tuple(kind.prefix for kind in kinds)
    substitutions = 0
    result = TokenStream()

    for key, tokens in stream.entries.items():
        translated: List[Token] = []
        for token in tokens:
            if isinstance(token, Window):
                name = _translate_identifier(token.speaker, dictionary, prefixes, qualified)
                if name is not None:
                    token = replace(token, speaker=name)
                    substitutions += 1
            elif isinstance(token, Animation):
                name = _translate_identifier(token.target, dictionary, prefixes, qualified)
                if name is not None:
                    token = replace(token, target=name)
                    substitutions += 1
            elif isinstance(token, Alias):
                name = _translate_identifier(token.actual, dictionary, prefixes, qualified)
                if name is not None:
                    token = replace(token, actual=name)
                    substitutions += 1
            translated.append(token)
        result.entries[key] = translated

    return result, substitutions


def translate_script_result(
    script: str,
    tables: EntityTables,
    lookup: MessageLookup,
    kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
) -> TranslationResult:
    """Translate a script, keeping parse failures distinguishable.

    The translated stream is packed and parsed again; the returned text is
    the packed form of that second parse.
    """
    dictionary = build_translation_dictionary(tables, lookup, kinds)
    qualified = build_qualified_dictionary(tables, lookup, kinds)

    try:
        stream = parse(script)
    except ScriptParseError as e:
        logger.warning(f"Cannot translate script: {e}")
        return TranslationResult(error=e)

    translated, substitutions = substitute_identifiers(stream, dictionary, kinds, qualified)

    try:
        reparsed = parse(pack(translated))
    except ScriptParseError as e:
        logger.error(f"Translated script no longer parses: {e}")
        return TranslationResult(error=e, substitutions=substitutions)

    logger.debug(
        f"Translated script: {len(reparsed)} entries, {substitutions} substitutions"
    )
    return TranslationResult(text=pack(reparsed), substitutions=substitutions)


def translate_script(
    script: str,
    tables: EntityTables,
    lookup: MessageLookup,
    kinds: Sequence[EntityKind] = DEFAULT_ENTITY_KINDS,
) -> Optional[str]:
    """Translate a script for preview; None if the script does not parse."""
    return translate_script_result(script, tables, lookup, kinds).text
