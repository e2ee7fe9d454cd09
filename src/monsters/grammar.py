"""Value grammar for monster file properties.

Scalar values are decimal integers, enum names or (optionally double-quoted)
strings. Compound values are built from two bracket forms:

    tuple:  (21, 0-0-0-0)
    set:    {KickBoxes, SeeInvisible, (HitPoints, 20, 0, 20, 0, 0, 0), "Meep!"}

Items of a set are parsed into generic Elements which the property parsers
below (outfit, strategy, skills, inventory, talk) specialize.
"""

import re
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Type, TypeVar

from exceptions import MalformedValueError, NumericConversionError
from monsters.models import (
    INT32_MAX,
    INT32_MIN,
    UINT16_MAX,
    UINT32_MAX,
    UINT8_MAX,
    Attribute,
    Element,
    InventoryEntry,
    Outfit,
    SkillTuple,
    Strategy,
)

E = TypeVar("E", bound=Enum)

INTEGER_WIDTHS = {
    "uint8": (0, UINT8_MAX),
    "uint16": (0, UINT16_MAX),
    "uint32": (0, UINT32_MAX),
    "int32": (INT32_MIN, INT32_MAX),
}

_OPENERS = {"(": ")", "{": "}"}
_CLOSERS = {")": "(", "}": "{"}
_ESCAPES = {"n": "\n", '"': '"', "\\": "\\"}

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ASSIGNMENT_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)", re.DOTALL)
_NAMED_TUPLE_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*(\(.*\))", re.DOTALL)

SKILL_TUPLE_SIZE = 7
OUTFIT_SIZE = 5
STRATEGY_SIZE = 4


def parse_integer(text: str, width: str) -> int:
    """
    Parse decimal text into an integer of a fixed width.

    Args:
        text: Decimal text, optionally signed
        width: One of "uint8", "uint16", "uint32", "int32"

    Returns:
        Parsed integer

    Raises:
        NumericConversionError: If text is not a decimal integer or is out of range
    """
    minimum, maximum = INTEGER_WIDTHS[width]
    stripped = text.strip()
    if not _INTEGER_RE.fullmatch(stripped):
        raise NumericConversionError(f"'{stripped}' is not a valid {width}")

    value = int(stripped)
    if not minimum <= value <= maximum:
        raise NumericConversionError(
            f"{value} is out of range for {width} ({minimum}..{maximum})"
        )
    return value


def parse_string(text: str) -> str:
    """Return text with surrounding double quotes and escapes resolved.

    Unquoted text is returned stripped but otherwise unchanged.
    """
    stripped = text.strip()
    if not stripped.startswith('"'):
        return stripped

    chars = []
    escaped = False
    for index in range(1, len(stripped)):
        char = stripped[index]
        if escaped:
            chars.append(_ESCAPES.get(char, char))
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == '"':
            if index != len(stripped) - 1:
                raise MalformedValueError(f"Unexpected text after closing quote in {stripped!r}")
            return "".join(chars)
        else:
            chars.append(char)

    raise MalformedValueError(f"Unterminated string {stripped!r}")


def parse_enum(text: str, enum_cls: Type[E], default: E) -> E:
    """Match text against enum member names (case-insensitive), or return default."""
    name = parse_string(text).upper()
    return enum_cls.__members__.get(name, default)


def _structural_chars(text: str) -> Iterator[Tuple[int, str, int]]:
    """Yield (index, char, depth) for every character outside quoted strings.

    Depth is the bracket nesting level the character sits at; brackets report
    the level outside themselves. Mismatched brackets and unterminated strings
    raise once the scan reaches them, so callers must exhaust the iterator.
    """
    stack: List[str] = []
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in _OPENERS:
            yield index, char, len(stack)
            stack.append(char)
        elif char in _CLOSERS:
            if not stack or stack[-1] != _CLOSERS[char]:
                raise MalformedValueError(f"Unbalanced '{char}' in {text!r}")
            stack.pop()
            yield index, char, len(stack)
        else:
            yield index, char, len(stack)

    if in_string:
        raise MalformedValueError(f"Unterminated string in {text!r}")
    if stack:
        raise MalformedValueError(f"Missing '{_OPENERS[stack[-1]]}' in {text!r}")


def _is_wrapped(text: str, opener: str) -> bool:
    """Check that text is one bracket group opened by `opener`."""
    if not text.startswith(opener):
        return False
    outer_closes = [
        index for index, char, depth in _structural_chars(text)
        if char in _CLOSERS and depth == 0
    ]
    return outer_closes == [len(text) - 1]


def split_items(text: str) -> List[str]:
    """Split text on commas that are outside brackets and quoted strings.

    Raises:
        MalformedValueError: On unbalanced brackets or an empty item
    """
    parts = []
    start = 0
    for index, char, depth in _structural_chars(text):
        if char == "," and depth == 0:
            parts.append(text[start:index])
            start = index + 1
    parts.append(text[start:])

    items = [part.strip() for part in parts]
    if items == [""]:
        return []
    if "" in items:
        raise MalformedValueError(f"Empty item in {text!r}")
    return items


def parse_tuple(text: str) -> List[str]:
    """Return the raw comma-separated atoms of a `( ... )` value."""
    stripped = text.strip()
    if not _is_wrapped(stripped, "("):
        raise MalformedValueError(f"Expected a parenthesized tuple, got {stripped!r}")
    return split_items(stripped[1:-1])


def _tuple_attributes(text: str) -> Tuple[Attribute, ...]:
    attributes = []
    for atom in parse_tuple(text):
        match = _ASSIGNMENT_RE.fullmatch(atom)
        if match:
            attributes.append(Attribute(name=match.group(1), value=parse_string(match.group(2))))
        else:
            attributes.append(Attribute(value=parse_string(atom)))
    return tuple(attributes)


def parse_element(item: str) -> Element:
    """
    Parse one set item into an Element.

    Item forms:
        (a, b, key=c)        -> unnamed element with positional/named attributes
        "text"               -> unnamed element with a single positional attribute
        Name(a, b)           -> element `Name` with the tuple's attributes
        Name / Name=payload  -> flag element whose first attribute is `Name`
        anything else        -> element named by the raw text, no attributes
    """
    stripped = item.strip()

    if stripped.startswith("("):
        return Element(attributes=_tuple_attributes(stripped))

    if stripped.startswith('"'):
        return Element(attributes=(Attribute(value=parse_string(stripped)),))

    match = _NAMED_TUPLE_RE.fullmatch(stripped)
    if match and _is_wrapped(match.group(2), "("):
        return Element(name=match.group(1), attributes=_tuple_attributes(match.group(2)))

    if _IDENTIFIER_RE.fullmatch(stripped):
        return Element(name=stripped, is_flag=True, attributes=(Attribute(name=stripped),))

    match = _ASSIGNMENT_RE.fullmatch(stripped)
    if match:
        name, payload = match.group(1), parse_string(match.group(2))
        return Element(name=name, is_flag=True, attributes=(Attribute(name=name, value=payload),))

    return Element(name=stripped)


def parse_set(text: str) -> List[Element]:
    """Parse a `{ ... }` value into its Elements, in source order."""
    stripped = text.strip()
    if not _is_wrapped(stripped, "{"):
        raise MalformedValueError(f"Expected a braced set, got {stripped!r}")
    return [parse_element(item) for item in split_items(stripped[1:-1])]


def parse_outfit(text: str) -> Outfit:
    """Parse `(lookType, head-body-legs-feet)` or `(lookType, head, body, legs, feet)`."""
    numbers = []
    for atom in parse_tuple(text):
        numbers.extend(atom.split("-"))

    if len(numbers) != OUTFIT_SIZE:
        raise MalformedValueError(
            f"Outfit needs {OUTFIT_SIZE} numbers, got {len(numbers)} in {text.strip()!r}"
        )

    return Outfit(
        id=parse_integer(numbers[0], "uint16"),
        head=parse_integer(numbers[1], "uint8"),
        body=parse_integer(numbers[2], "uint8"),
        legs=parse_integer(numbers[3], "uint8"),
        feet=parse_integer(numbers[4], "uint8"),
    )


def parse_strategy(text: str) -> Strategy:
    """Parse the four target selection weights `(closest, weakest, strongest, random)`."""
    atoms = parse_tuple(text)
    if len(atoms) != STRATEGY_SIZE:
        raise MalformedValueError(
            f"Strategy needs {STRATEGY_SIZE} numbers, got {len(atoms)} in {text.strip()!r}"
        )
    closest, weakest, strongest, random = (parse_integer(atom, "uint8") for atom in atoms)
    return Strategy(closest=closest, weakest=weakest, strongest=strongest, random=random)


def _attribute_text(attribute: Attribute) -> str:
    return attribute.value if attribute.value is not None else (attribute.name or "")


def parse_skills(text: str) -> List[SkillTuple]:
    """
    Parse a Skills set into 7-tuples.

    Each element is `(skillName, defaultLevel, currentLevel, maximumLevel,
    targetCount, countIncreaseFactor, increaserPerLevel)`; attribute names,
    when given, are informational and values are read by position.
    """
    skills = []
    for element in parse_set(text):
        if element.is_flag or len(element.attributes) != SKILL_TUPLE_SIZE:
            raise MalformedValueError(
                f"Skill entry needs {SKILL_TUPLE_SIZE} values, got {len(element.attributes)}"
            )
        name, *levels = (_attribute_text(attribute) for attribute in element.attributes)
        default, current, maximum, target, factor, per_level = (
            parse_integer(level, "int32") for level in levels
        )
        skills.append(SkillTuple(
            name=name,
            default_level=default,
            current_level=current,
            maximum_level=maximum,
            target_count=target,
            count_increase_factor=factor,
            increase_per_level=per_level,
        ))
    return skills


def _parse_count_range(text: str) -> Tuple[int, int]:
    if "-" in text:
        low_text, high_text = text.split("-", 1)
        low, high = parse_integer(low_text, "uint8"), parse_integer(high_text, "uint8")
    else:
        low, high = 1, parse_integer(text, "uint8")
    if low > high:
        raise MalformedValueError(f"Empty count range {text!r}")
    return low, high


def parse_inventory(text: str) -> List[InventoryEntry]:
    """
    Parse an Inventory set.

    Entries are `(itemId, chance)` or `(itemId, count, chance)` where count is a
    maximum (meaning 1..count) or an explicit `min-max` range.
    """
    entries = []
    for element in parse_set(text):
        values = [_attribute_text(attribute) for attribute in element.attributes]
        if element.is_flag or len(values) not in (2, 3):
            raise MalformedValueError(f"Inventory entry needs 2 or 3 values, got {len(values)}")

        count_range: Optional[Tuple[int, int]] = None
        if len(values) == 3:
            count_range = _parse_count_range(values[1])

        entries.append(InventoryEntry(
            item_id=parse_integer(values[0], "uint16"),
            chance=parse_integer(values[-1], "uint16"),
            count_range=count_range,
        ))
    return entries


def parse_phrases(text: str) -> List[str]:
    """Parse a Talk set of quoted strings (bare words are accepted as is)."""
    phrases = []
    for element in parse_set(text):
        if element.is_flag and element.attributes[0].value is None:
            phrases.append(element.name)
        elif not element.name and len(element.attributes) == 1 and element.attributes[0].name is None:
            phrases.append(element.attributes[0].value or "")
        else:
            raise MalformedValueError(f"Talk entries must be strings, got {element.name or 'a tuple'}")
    return phrases
