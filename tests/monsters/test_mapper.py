"""Tests for the property -> field mapper."""

import pytest

from exceptions import ConversionError, MalformedValueError, NumericConversionError
from monsters.mapper import PROPERTY_HANDLERS, apply_property
from monsters.models import (
    BloodType,
    CreatureFlag,
    InventoryEntry,
    MonsterDraft,
    Outfit,
    SkillType,
    Strategy,
)


@pytest.fixture
def draft():
    return MonsterDraft()


@pytest.mark.unit
class TestScalarHandlers:
    """Test handlers for scalar properties."""

    def test_race_id_is_raw_text(self, draft):
        apply_property(draft, "racenumber", "100")
        assert draft.race_id == "100"

    def test_name_and_article(self, draft):
        apply_property(draft, "name", '"rat"')
        apply_property(draft, "article", "a")
        assert draft.name == "rat"
        assert draft.article == "a"

    @pytest.mark.parametrize("prop,field,value", [
        ("corpse", "corpse", 2813),
        ("experience", "base_experience_yield", 100000),
        ("summoncost", "summon_cost", 200),
        ("fleethreshold", "hitpoint_flee_threshold", 15),
        ("attack", "base_attack", 20),
        ("defend", "base_defense", 10),
        ("armor", "base_armor_rating", 8),
        ("losetarget", "lose_target_distance", 4),
    ])
    def test_integer_fields(self, draft, prop, field, value):
        apply_property(draft, prop, str(value))
        assert getattr(draft, field) == value

    def test_uint8_field_rejects_uint16_value(self, draft):
        with pytest.raises(NumericConversionError) as exc_info:
            apply_property(draft, "losetarget", "300")
        assert exc_info.value.property_name == "losetarget"
        assert "Property 'losetarget'" in str(exc_info.value)

    def test_non_numeric_corpse(self, draft):
        with pytest.raises(ConversionError):
            apply_property(draft, "corpse", "abc")

    def test_blood(self, draft):
        apply_property(draft, "blood", "Slime")
        assert draft.blood_type is BloodType.SLIME

    def test_unknown_blood_keeps_default(self, draft):
        apply_property(draft, "blood", "unknownvalue")
        assert draft.blood_type is BloodType.NONE

    def test_outfit_and_strategy(self, draft):
        apply_property(draft, "outfit", "(21, 1-2-3-4)")
        apply_property(draft, "strategy", "(80, 10, 10, 0)")
        assert draft.original_outfit == Outfit(id=21, head=1, body=2, legs=3, feet=4)
        assert draft.strategy == Strategy(closest=80, weakest=10, strongest=10, random=0)

    def test_malformed_outfit(self, draft):
        with pytest.raises(MalformedValueError):
            apply_property(draft, "outfit", "21, 0-0-0-0")


@pytest.mark.unit
class TestFlagsHandler:
    """Test flag translation."""

    def test_known_flags_are_added(self, draft):
        apply_property(draft, "flags", "{KickBoxes, seeinvisible, NOPARALYZE}")
        assert draft.creature_flags == {
            CreatureFlag.KICK_BOXES,
            CreatureFlag.SEE_INVISIBLE,
            CreatureFlag.NO_PARALYZE,
        }

    def test_unknown_and_non_flag_elements_are_skipped(self, draft):
        apply_property(draft, "flags", '{KickBoxes, Flying, (1, 2), "Unpushable"}')
        assert draft.creature_flags == {CreatureFlag.KICK_BOXES}

    def test_flags_accumulate(self, draft):
        apply_property(draft, "flags", "{KickBoxes}")
        apply_property(draft, "flags", "{NoHit}")
        assert draft.creature_flags == {CreatureFlag.KICK_BOXES, CreatureFlag.NO_HIT}


@pytest.mark.unit
class TestSkillsHandler:
    """Test skill application and the negative current level sentinel."""

    def test_hitpoints_sentinel(self, draft):
        apply_property(draft, "skills", "{(HitPoints, 200, -1, 200, 0, 0, 0)}")
        assert draft.max_hitpoints == 65535

    def test_hitpoints_default(self, draft):
        apply_property(draft, "skills", "{(HitPoints, 200, 150, 200, 0, 0, 0)}")
        assert draft.max_hitpoints == 200

    def test_speed_and_capacity(self, draft):
        apply_property(draft, "skills", "{(GoStrength, 74, 74, 74, 0, 0, 0),(CarryStrength, 900, 0, 900, 0, 0, 0)}")
        assert draft.base_speed == 74
        assert draft.capacity == 900

    def test_speed_and_capacity_sentinel(self, draft):
        apply_property(draft, "skills", "{(GoStrength, 74, -1, 74, 0, 0, 0),(CarryStrength, 900, -1, 900, 0, 0, 0)}")
        assert draft.base_speed == 0
        assert draft.capacity == 0

    def test_fist_fighting_registers_unarmed_skill(self, draft):
        apply_property(draft, "skills", "{(FistFighting, 12, 15, 20, 50, 2000, 1000)}")
        skill = draft.skills[SkillType.NO_WEAPON]
        assert skill.default_level == 12
        assert skill.current_level == 15
        assert skill.maximum_level == 20
        assert skill.target_count == 50
        assert skill.count_increase_factor == 2000
        assert skill.increase_per_level == 1000

    def test_fist_fighting_needs_positive_current_level(self, draft):
        apply_property(draft, "skills", "{(FistFighting, 12, 0, 12, 50, 2000, 1000)}")
        assert draft.skills == {}

    def test_unknown_skill_is_skipped(self, draft):
        apply_property(draft, "skills", "{(MagicLevel, 5, 5, 5, 0, 0, 0),(HitPoints, 20, 0, 20, 0, 0, 0)}")
        assert draft.max_hitpoints == 20
        assert draft.skills == {}

    def test_hitpoints_default_must_fit_uint16(self, draft):
        with pytest.raises(NumericConversionError):
            apply_property(draft, "skills", "{(HitPoints, 70000, 0, 70000, 0, 0, 0)}")


@pytest.mark.unit
class TestOtherHandlers:
    """Test inventory, talk, placeholders and unknown properties."""

    def test_inventory(self, draft):
        apply_property(draft, "inventory", "{(3031, 9, 600), (3358, 90)}")
        assert draft.inventory == [
            InventoryEntry(item_id=3031, chance=600, count_range=(1, 9)),
            InventoryEntry(item_id=3358, chance=90),
        ]

    def test_talk(self, draft):
        apply_property(draft, "talk", '{"Grak brrretz!", "Grow truk grrrr."}')
        assert draft.phrases == ["Grak brrretz!", "Grow truk grrrr."]

    @pytest.mark.parametrize("prop,value", [
        ("spells", "{Actor (13) -> Healing (50, 20) : 4}"),
        ("poison", "5"),
    ])
    def test_placeholders_are_no_ops(self, draft, prop, value):
        before = draft.model_dump()
        assert apply_property(draft, prop, value) is True
        assert draft.model_dump() == before

    def test_unknown_property_is_ignored(self, draft):
        before = draft.model_dump()
        assert apply_property(draft, "legacyfield", "5") is False
        assert draft.model_dump() == before

    def test_dispatch_table_covers_known_properties(self):
        assert set(PROPERTY_HANDLERS) == {
            "racenumber", "name", "article", "outfit", "corpse", "blood",
            "experience", "summoncost", "fleethreshold", "attack", "defend",
            "armor", "losetarget", "strategy", "flags", "skills", "spells",
            "poison", "inventory", "talk",
        }
