"""
Command line entry point for msgscript.
Usage: python -m msgscript [--project DIR] {lookup,set,translate} ...
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .archives import MessageProject
from .message_db import MessageDbWrapper, MessageSlot
from .settings import AppSettings, ConfigError
from .translation import EntityTables, load_entity_tables
from .utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msgscript", description="Message database and dialogue script tools"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--profile", default="default", help="settings profile")
    parser.add_argument("--project", type=Path, help="project directory with archive files")
    parser.add_argument("--override", help="archive that receives new message keys")

    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="print the text of a message key")
    lookup.add_argument("key")

    set_cmd = sub.add_parser("set", help="set a message and save the owning archive")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")
    set_cmd.add_argument("--archive", help="fallback archive for new keys")

    translate = sub.add_parser("translate", help="print a translated script preview")
    translate.add_argument("script", type=Path)
    translate.add_argument("--entities", type=Path, help="entity tables JSON export")

    return parser


def _run_set(db: MessageDbWrapper, project: MessageProject, key: str, value: str, archive: str) -> int:
    if not key:
        print("Message key must not be blank", file=sys.stderr)
        return 1

    applied = False

    def assign(slot: Optional[MessageSlot]) -> bool:
        nonlocal applied
        if slot is None:
            return False
        applied = True
        if slot.value == value:
            return False
        slot.value = value
        return True

    db.update(key, archive, assign)
    if not applied:
        print(f"No archive available for new key '{key}'", file=sys.stderr)
        return 1

    project.save()
    print(f"{key} -> {db.store.archive_name_of(key) or archive}")
    return 0


def _run_translate(
    db: MessageDbWrapper, script_path: Path, entities_path: Optional[Path]
) -> int:
    tables = load_entity_tables(entities_path) if entities_path else EntityTables()
    result = db.translate_result(script_path.read_text(encoding="utf-8-sig"), tables)
    if not result.ok:
        print(f"Cannot translate {script_path}: {result.error}", file=sys.stderr)
        return 1
    sys.stdout.write(result.text or "")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    settings = AppSettings(profile=args.profile)
    setup_logging(settings)

    try:
        project_path = args.project or settings.require_project_path()
        override = args.override or settings.override_archive
        project = MessageProject.open(project_path, override)
        settings.add_recent_project(project_path)

        db = MessageDbWrapper.from_project(project)

        if args.command == "lookup":
            value = db.lookup(args.key)
            if value is None:
                print(f"Message '{args.key}' not found", file=sys.stderr)
                return 1
            print(value)
            return 0

        if args.command == "set":
            return _run_set(
                db, project, args.key, args.value, args.archive or settings.default_archive
            )

        entities = args.entities or settings.entity_tables_path
        return _run_translate(db, args.script, entities)

    except (ConfigError, OSError, ValueError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
