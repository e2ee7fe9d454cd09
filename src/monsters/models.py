"""Pydantic models for monster templates read from *.mon files.

A file's parse pass writes into a mutable MonsterDraft; once the file is fully
mapped the draft is validated into a frozen MonsterDefinition, which is what
the catalog holds.
"""

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

UINT8_MAX = 0xFF
UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF
INT32_MIN = -0x80000000
INT32_MAX = 0x7FFFFFFF

UInt8 = Annotated[int, Field(ge=0, le=UINT8_MAX)]
UInt16 = Annotated[int, Field(ge=0, le=UINT16_MAX)]
UInt32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]
Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class BloodType(Enum):
    """Kind of splatter a creature leaves when hit."""
    NONE = "none"
    BLOOD = "blood"
    BONES = "bones"
    FIRE = "fire"
    SLIME = "slime"


class CreatureFlag(Enum):
    """Boolean traits a monster template can carry."""
    KICK_BOXES = "kick_boxes"
    KICK_CREATURES = "kick_creatures"
    SEE_INVISIBLE = "see_invisible"
    UNPUSHABLE = "unpushable"
    DISTANCE_FIGHTING = "distance_fighting"
    NO_SUMMON = "no_summon"
    NO_ILLUSION = "no_illusion"
    NO_CONVINCE = "no_convince"
    NO_BURNING = "no_burning"
    NO_POISON = "no_poison"
    NO_ENERGY = "no_energy"
    NO_HIT = "no_hit"
    NO_LIFE_DRAIN = "no_life_drain"
    NO_PARALYZE = "no_paralyze"


# Flag names as written in monster files (lowercase) -> creature flag
FLAG_TRANSLATIONS: Dict[str, CreatureFlag] = {
    "kickboxes": CreatureFlag.KICK_BOXES,
    "kickcreatures": CreatureFlag.KICK_CREATURES,
    "seeinvisible": CreatureFlag.SEE_INVISIBLE,
    "unpushable": CreatureFlag.UNPUSHABLE,
    "distancefighting": CreatureFlag.DISTANCE_FIGHTING,
    "nosummon": CreatureFlag.NO_SUMMON,
    "noillusion": CreatureFlag.NO_ILLUSION,
    "noconvince": CreatureFlag.NO_CONVINCE,
    "noburning": CreatureFlag.NO_BURNING,
    "nopoison": CreatureFlag.NO_POISON,
    "noenergy": CreatureFlag.NO_ENERGY,
    "nohit": CreatureFlag.NO_HIT,
    "nolifedrain": CreatureFlag.NO_LIFE_DRAIN,
    "noparalyze": CreatureFlag.NO_PARALYZE,
}


class MonsterSkillKind(Enum):
    """Skill names understood in the Skills property of a monster file."""
    HITPOINTS = "hitpoints"
    GOSTRENGTH = "gostrength"
    CARRYSTRENGTH = "carrystrength"
    FISTFIGHTING = "fistfighting"


class SkillType(Enum):
    """Skill kinds stored on a monster definition."""
    NO_WEAPON = "no_weapon"


class Outfit(BaseModel):
    """Look type and the four color channels of a creature."""
    model_config = ConfigDict(frozen=True)

    id: UInt16 = 0
    head: UInt8 = 0
    body: UInt8 = 0
    legs: UInt8 = 0
    feet: UInt8 = 0


class Strategy(BaseModel):
    """Target selection weights, carried through without interpretation."""
    model_config = ConfigDict(frozen=True)

    closest: UInt8 = 100
    weakest: UInt8 = 0
    strongest: UInt8 = 0
    random: UInt8 = 0


class SkillTuple(BaseModel):
    """One (name, default, current, maximum, target, factor, per-level) skill entry."""
    model_config = ConfigDict(frozen=True)

    name: str
    default_level: Int32
    current_level: Int32
    maximum_level: Int32
    target_count: Int32
    count_increase_factor: Int32
    increase_per_level: Int32


class SkillDescriptor(BaseModel):
    """Progression parameters of a skill stored on a monster definition."""
    model_config = ConfigDict(frozen=True)

    default_level: Int32
    current_level: Int32
    maximum_level: Int32
    target_count: Int32
    count_increase_factor: Int32
    increase_per_level: Int32


class InventoryEntry(BaseModel):
    """An item a monster may carry: item type, chance and optional count range."""
    model_config = ConfigDict(frozen=True)

    item_id: UInt16
    chance: UInt16
    count_range: Optional[Tuple[UInt8, UInt8]] = None


class Attribute(BaseModel):
    """A named or positional attribute of an Element."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    value: Optional[str] = None


class Element(BaseModel):
    """One structured item inside a compound property value."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    is_flag: bool = False
    attributes: Tuple[Attribute, ...] = ()


class MonsterDefinition(BaseModel):
    """Immutable monster template, keyed by race id in the catalog."""
    model_config = ConfigDict(frozen=True)

    race_id: str
    name: str = ""
    article: str = ""
    original_outfit: Outfit = Field(default_factory=Outfit)
    corpse: UInt16 = 0
    blood_type: BloodType = BloodType.NONE
    base_experience_yield: UInt32 = 0
    summon_cost: UInt16 = 0
    hitpoint_flee_threshold: UInt16 = 0
    base_attack: UInt16 = 0
    base_defense: UInt16 = 0
    base_armor_rating: UInt16 = 0
    lose_target_distance: UInt8 = 0
    strategy: Strategy = Field(default_factory=Strategy)
    creature_flags: FrozenSet[CreatureFlag] = frozenset()
    skills: Mapping[SkillType, SkillDescriptor] = Field(default_factory=dict, validate_default=True)
    max_hitpoints: UInt16 = 0
    base_speed: UInt16 = 0
    capacity: UInt16 = 0
    inventory: Tuple[InventoryEntry, ...] = ()
    phrases: Tuple[str, ...] = ()

    @field_validator('skills')
    @classmethod
    def freeze_skills(cls, v: Mapping[SkillType, SkillDescriptor]) -> Mapping[SkillType, SkillDescriptor]:
        """Wrap skills in a read-only view so the definition cannot change in place."""
        return MappingProxyType(dict(v))

    @field_serializer('skills')
    def serialize_skills(self, v: Mapping[SkillType, SkillDescriptor]) -> Dict[SkillType, SkillDescriptor]:
        return dict(v)

    def __hash__(self) -> int:
        skills = tuple(sorted(self.skills.items(), key=lambda item: item[0].value))
        return hash(tuple(
            skills if name == "skills" else value
            for name, value in self.__dict__.items()
        ))

    def has_flag(self, flag: CreatureFlag) -> bool:
        """Check whether the monster carries a creature flag."""
        return flag in self.creature_flags


class MonsterDraft(BaseModel):
    """Mutable record filled in while a single monster file is mapped."""
    model_config = ConfigDict(validate_assignment=True)

    race_id: Optional[str] = None
    name: str = ""
    article: str = ""
    original_outfit: Outfit = Field(default_factory=Outfit)
    corpse: UInt16 = 0
    blood_type: BloodType = BloodType.NONE
    base_experience_yield: UInt32 = 0
    summon_cost: UInt16 = 0
    hitpoint_flee_threshold: UInt16 = 0
    base_attack: UInt16 = 0
    base_defense: UInt16 = 0
    base_armor_rating: UInt16 = 0
    lose_target_distance: UInt8 = 0
    strategy: Strategy = Field(default_factory=Strategy)
    creature_flags: Set[CreatureFlag] = Field(default_factory=set)
    skills: Dict[SkillType, SkillDescriptor] = Field(default_factory=dict)
    max_hitpoints: UInt16 = 0
    base_speed: UInt16 = 0
    capacity: UInt16 = 0
    inventory: List[InventoryEntry] = Field(default_factory=list)
    phrases: List[str] = Field(default_factory=list)

    def to_definition(self) -> MonsterDefinition:
        """Validate the draft into a frozen MonsterDefinition.

        Raises:
            pydantic.ValidationError: If race_id was never set
        """
        return MonsterDefinition.model_validate(self.model_dump())
