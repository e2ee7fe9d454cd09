"""Centralized exception hierarchy for the monster catalog loader.

Usage:
    from exceptions import ConversionError, DuplicateKeyError

    raise NumericConversionError("'abc' is not a valid uint16", property_name="corpse")
    raise DuplicateKeyError("Race id '50' defined by both rat.mon and orc.mon")
"""

from pathlib import Path
from typing import Optional


class MonsterCatalogError(Exception):
    """Base exception for all monster catalog errors."""
    pass


class ConfigurationError(MonsterCatalogError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Blank monster files directory
        - MONSTER_FILES_DIRECTORY not set
    """
    pass


class DirectoryNotFoundError(MonsterCatalogError):
    """Raised when the monster files directory does not exist."""
    pass


class ConversionError(MonsterCatalogError):
    """Raised when a monster file value cannot be converted.

    Fatal for the file being parsed, which aborts the whole catalog load.

    Attributes:
        property_name: Lowercase property being converted, when known
        source: Path of the file being parsed, when known
    """

    def __init__(
        self,
        message: str,
        property_name: Optional[str] = None,
        source: Optional[Path] = None
    ):
        super().__init__(message)
        self.property_name = property_name
        self.source = source


class MalformedValueError(ConversionError):
    """Raised when a compound value does not follow the value grammar.

    Examples:
        - Missing closing bracket in a set or tuple
        - Unterminated quoted string
        - Skill tuple without seven attributes
    """
    pass


class MalformedLineError(MalformedValueError):
    """Raised for a property line that cannot be split into name and value.

    The tokenizer splits on the first separator only, so extra separators are
    part of the value and this is never raised for them.
    """
    pass


class NumericConversionError(ConversionError):
    """Raised when text is not a valid fixed-width integer."""
    pass


class ValidationError(MonsterCatalogError):
    """Raised when a parsed monster fails validation.

    Examples:
        - File without a racenumber property
        - Field value rejected by the model
    """
    pass


class DuplicateKeyError(MonsterCatalogError):
    """Raised when two monster files declare the same race id."""
    pass
