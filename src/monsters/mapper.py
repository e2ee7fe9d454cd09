"""Map tokenized monster file properties onto a MonsterDraft.

Each property has its own handler in PROPERTY_HANDLERS. Handlers raise
ConversionError subclasses for values that cannot be converted (fatal for the
file) and silently keep defaults for well-formed values they do not recognize:

    blood          unknown name          -> BloodType.NONE kept
    flags          non-flag element,
                   unknown flag name     -> element skipped
    skills         unknown skill name    -> entry skipped
    spells, poison                       -> recognized, not translated
    unknown property                     -> ignored
"""

import logging
from typing import Callable, Dict

from exceptions import ConversionError
from monsters import grammar
from monsters.models import (
    FLAG_TRANSLATIONS,
    UINT16_MAX,
    BloodType,
    MonsterDraft,
    MonsterSkillKind,
    SkillDescriptor,
    SkillType,
)

logger = logging.getLogger(__name__)

PropertyHandler = Callable[[MonsterDraft, str], None]


def set_race_id(draft: MonsterDraft, value: str) -> None:
    draft.race_id = value


def set_name(draft: MonsterDraft, value: str) -> None:
    draft.name = grammar.parse_string(value)


def set_article(draft: MonsterDraft, value: str) -> None:
    draft.article = grammar.parse_string(value)


def set_outfit(draft: MonsterDraft, value: str) -> None:
    draft.original_outfit = grammar.parse_outfit(value)


def set_blood_type(draft: MonsterDraft, value: str) -> None:
    draft.blood_type = grammar.parse_enum(value, BloodType, draft.blood_type)


def set_strategy(draft: MonsterDraft, value: str) -> None:
    draft.strategy = grammar.parse_strategy(value)


def _integer_field(field: str, width: str) -> PropertyHandler:
    """Build a handler that stores a fixed-width integer in `field`."""

    def handler(draft: MonsterDraft, value: str) -> None:
        setattr(draft, field, grammar.parse_integer(value, width))

    handler.__name__ = f"set_{field}"
    return handler


def set_flags(draft: MonsterDraft, value: str) -> None:
    """Add every translatable flag element to the draft's creature flags."""
    for element in grammar.parse_set(value):
        if not element.is_flag or not element.attributes:
            logger.debug(f"Skipping non-flag element '{element.name}'")
            continue

        flag_name = element.attributes[0].name or ""
        creature_flag = FLAG_TRANSLATIONS.get(flag_name.lower())
        if creature_flag is None:
            logger.debug(f"Skipping unknown creature flag '{flag_name}'")
            continue

        draft.creature_flags.add(creature_flag)


def set_skills(draft: MonsterDraft, value: str) -> None:
    """
    Apply skill tuples to the draft.

    A negative current level is a sentinel: hit points become unlimited
    (uint16 max) while speed and capacity drop to zero. Fist fighting is only
    registered, as the unarmed-combat skill, when its current level is positive.
    """
    for skill in grammar.parse_skills(value):
        kind = MonsterSkillKind.__members__.get(skill.name.upper())
        if kind is None:
            logger.debug(f"Skipping unknown skill '{skill.name}'")
            continue

        if kind is MonsterSkillKind.HITPOINTS:
            draft.max_hitpoints = (
                UINT16_MAX if skill.current_level < 0
                else grammar.parse_integer(str(skill.default_level), "uint16")
            )
        elif kind is MonsterSkillKind.GOSTRENGTH:
            draft.base_speed = (
                0 if skill.current_level < 0
                else grammar.parse_integer(str(skill.default_level), "uint16")
            )
        elif kind is MonsterSkillKind.CARRYSTRENGTH:
            draft.capacity = (
                0 if skill.current_level < 0
                else grammar.parse_integer(str(skill.default_level), "uint16")
            )
        elif kind is MonsterSkillKind.FISTFIGHTING and skill.current_level > 0:
            draft.skills[SkillType.NO_WEAPON] = SkillDescriptor(
                default_level=skill.default_level,
                current_level=skill.current_level,
                maximum_level=skill.maximum_level,
                target_count=skill.target_count,
                count_increase_factor=skill.count_increase_factor,
                increase_per_level=skill.increase_per_level,
            )


def ignore_spells(draft: MonsterDraft, value: str) -> None:
    """Spell rules are read by the combat subsystem, not stored on the definition."""


def ignore_poison(draft: MonsterDraft, value: str) -> None:
    """Poison strength is read by the combat subsystem, not stored on the definition."""


def set_inventory(draft: MonsterDraft, value: str) -> None:
    draft.inventory = grammar.parse_inventory(value)


def set_phrases(draft: MonsterDraft, value: str) -> None:
    draft.phrases = grammar.parse_phrases(value)


PROPERTY_HANDLERS: Dict[str, PropertyHandler] = {
    "racenumber": set_race_id,
    "name": set_name,
    "article": set_article,
    "outfit": set_outfit,
    "corpse": _integer_field("corpse", "uint16"),
    "blood": set_blood_type,
    "experience": _integer_field("base_experience_yield", "uint32"),
    "summoncost": _integer_field("summon_cost", "uint16"),
    "fleethreshold": _integer_field("hitpoint_flee_threshold", "uint16"),
    "attack": _integer_field("base_attack", "uint16"),
    "defend": _integer_field("base_defense", "uint16"),
    "armor": _integer_field("base_armor_rating", "uint16"),
    "losetarget": _integer_field("lose_target_distance", "uint8"),
    "strategy": set_strategy,
    "flags": set_flags,
    "skills": set_skills,
    "spells": ignore_spells,
    "poison": ignore_poison,
    "inventory": set_inventory,
    "talk": set_phrases,
}


def apply_property(draft: MonsterDraft, name: str, value: str) -> bool:
    """
    Dispatch one tokenized property to its handler.

    Args:
        draft: Record being filled for the current file
        name: Lowercase property name
        value: Raw property value

    Returns:
        True if the property is known, False if it was ignored

    Raises:
        ConversionError: If the handler cannot convert the value; the message
            names the property
    """
    handler = PROPERTY_HANDLERS.get(name)
    if handler is None:
        logger.debug(f"Ignoring unknown property '{name}'")
        return False

    try:
        handler(draft, value)
    except ConversionError as e:
        raise type(e)(f"Property '{name}': {e}", property_name=name) from e

    return True
