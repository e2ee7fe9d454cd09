"""Decoding of *.mon monster template files into a race-id keyed catalog."""

from monsters.models import (
    Attribute,
    BloodType,
    CreatureFlag,
    Element,
    InventoryEntry,
    MonsterDefinition,
    MonsterDraft,
    Outfit,
    SkillDescriptor,
    SkillType,
    Strategy,
)

from monsters.loader import (
    MonFilesMonsterTypeLoader,
    load_catalog,
    parse_monster_lines,
    read_monster_file,
)

from monsters.options import MonFilesLoaderOptions
from monsters.tokenizer import tokenize_lines

__all__ = [
    # Models
    "Attribute",
    "BloodType",
    "CreatureFlag",
    "Element",
    "InventoryEntry",
    "MonsterDefinition",
    "MonsterDraft",
    "Outfit",
    "SkillDescriptor",
    "SkillType",
    "Strategy",
    # Loading
    "MonFilesLoaderOptions",
    "MonFilesMonsterTypeLoader",
    "load_catalog",
    "parse_monster_lines",
    "read_monster_file",
    "tokenize_lines",
]
