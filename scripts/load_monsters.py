#!/usr/bin/env python3
"""
Load a directory of *.mon monster files and print a summary of the catalog.

Usage:
    python scripts/load_monsters.py data/monsters
    MONSTER_FILES_DIRECTORY=data/monsters python scripts/load_monsters.py -v
"""

import sys
import logging
from pathlib import Path
from typing import List, Mapping, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from config import get_env
from exceptions import MonsterCatalogError
from logging_config import parse_log_level, setup_logging
from monsters.loader import MonFilesMonsterTypeLoader
from monsters.models import MonsterDefinition
from monsters.options import MonFilesLoaderOptions


def summarize(catalog: Mapping[str, MonsterDefinition]) -> List[str]:
    """One line per monster, ordered by numeric race id where possible."""
    def sort_key(race_id: str):
        return (0, int(race_id), race_id) if race_id.isdigit() else (1, 0, race_id)

    lines = []
    for race_id in sorted(catalog, key=sort_key):
        monster = catalog[race_id]
        flags = ", ".join(sorted(flag.value for flag in monster.creature_flags)) or "-"
        lines.append(
            f"{race_id:>5}  {monster.name:<24} HP {monster.max_hitpoints:>5}  "
            f"XP {monster.base_experience_yield:>6}  speed {monster.base_speed:>4}  "
            f"flags: {flags}"
        )
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description='Load *.mon monster files and print the catalog')
    parser.add_argument(
        'directory',
        nargs='?',
        help='Monster files directory (default: MONSTER_FILES_DIRECTORY or data/monsters)'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Show detailed logging'
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else parse_log_level(get_env("LOG_LEVEL", default="INFO"))
    logger = setup_logging("monsters", level=level)

    try:
        if args.directory:
            options = MonFilesLoaderOptions(monster_files_directory=args.directory)
        else:
            options = MonFilesLoaderOptions.from_env()
        catalog = MonFilesMonsterTypeLoader(options).load_types()
    except MonsterCatalogError as e:
        logger.error(f"Failed to load monster catalog: {e}")
        return 1

    for line in summarize(catalog):
        print(line)
    print(f"\n{len(catalog)} monster types loaded from {options.monster_files_directory}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
