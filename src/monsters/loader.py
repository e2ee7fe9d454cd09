"""Build the monster catalog from a directory of *.mon files.

Usage:
    from monsters.loader import MonFilesMonsterTypeLoader
    from monsters.options import MonFilesLoaderOptions

    loader = MonFilesMonsterTypeLoader(MonFilesLoaderOptions(monster_files_directory="data/monsters"))
    catalog = loader.load_types()
    rat = catalog["21"]

The load is all-or-nothing: a file that fails to convert, or two files sharing
a race id, abort it with a single error.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

import pydantic

from exceptions import (
    ConversionError,
    DirectoryNotFoundError,
    DuplicateKeyError,
    ValidationError,
)
from monsters.mapper import apply_property
from monsters.models import MonsterDefinition, MonsterDraft
from monsters.options import MonFilesLoaderOptions
from monsters.tokenizer import tokenize_lines

logger = logging.getLogger(__name__)


def parse_monster_lines(lines: Iterable[str], source: Optional[Path] = None) -> MonsterDefinition:
    """
    Parse the lines of one monster file into a MonsterDefinition.

    Args:
        lines: Monster file lines
        source: File the lines came from, used in error messages

    Returns:
        Frozen MonsterDefinition

    Raises:
        ConversionError: If a property value cannot be converted
        ValidationError: If the file has no racenumber or fails model validation
    """
    label = source.name if source else "<lines>"
    draft = MonsterDraft()

    for name, value in tokenize_lines(lines):
        try:
            apply_property(draft, name, value)
        except ConversionError as e:
            raise type(e)(f"{label}: {e}", property_name=e.property_name, source=source) from e

    if not draft.race_id:
        raise ValidationError(f"{label}: missing 'racenumber' property")

    try:
        return draft.to_definition()
    except pydantic.ValidationError as e:
        raise ValidationError(f"{label}: invalid monster definition: {e}") from e


def read_monster_file(path: Path, encoding: str = "latin-1") -> Optional[MonsterDefinition]:
    """
    Read one monster file.

    Returns:
        The parsed MonsterDefinition, or None if the file no longer exists
    """
    try:
        handle = path.open("r", encoding=encoding)
    except FileNotFoundError:
        logger.warning(f"Monster file disappeared before it could be read: {path}")
        return None

    with handle:
        logger.debug(f"Parsing monster file {path.name}")
        return parse_monster_lines(handle, source=path)


class MonFilesMonsterTypeLoader:
    """
    Loads monster types from the *.mon files of a directory.

    Usage:
        loader = MonFilesMonsterTypeLoader(MonFilesLoaderOptions.from_env())
        catalog = loader.load_types()
    """

    def __init__(self, options: MonFilesLoaderOptions):
        """Initialize the loader with explicit options."""
        self.options = options

    @property
    def directory(self) -> Path:
        return self.options.monster_files_directory

    def monster_files(self) -> List[Path]:
        """List the monster files of the directory, sorted by file name."""
        pattern = f"*.{self.options.file_extension}"
        return sorted(
            (path for path in self.directory.glob(pattern) if not path.is_dir()),
            key=lambda path: path.name
        )

    def load_types(self) -> Mapping[str, MonsterDefinition]:
        """
        Load the monster catalog.

        Returns:
            Read-only mapping of race id to MonsterDefinition

        Raises:
            DirectoryNotFoundError: If the monster files directory does not exist
            ConversionError: If any file has a value that cannot be converted
            ValidationError: If any file has no racenumber
            DuplicateKeyError: If two files declare the same race id
        """
        if not self.directory.is_dir():
            raise DirectoryNotFoundError(
                f"Monster files directory could not be found: {self.directory}"
            )

        logger.info(f"Loading monster types from {self.directory}")
        catalog: Dict[str, MonsterDefinition] = {}
        sources: Dict[str, Path] = {}

        for path in self.monster_files():
            monster = read_monster_file(path, encoding=self.options.encoding)
            if monster is None:
                continue

            if monster.race_id in catalog:
                raise DuplicateKeyError(
                    f"Race id '{monster.race_id}' is defined by both "
                    f"{sources[monster.race_id].name} and {path.name}"
                )

            catalog[monster.race_id] = monster
            sources[monster.race_id] = path

        logger.info(f"Loaded {len(catalog)} monster types")
        return MappingProxyType(catalog)


def load_catalog(
    directory: Union[str, Path],
    file_extension: str = "mon",
    encoding: str = "latin-1"
) -> Mapping[str, MonsterDefinition]:
    """Load the monster catalog of a directory. See MonFilesMonsterTypeLoader.load_types()."""
    options = MonFilesLoaderOptions(
        monster_files_directory=directory,
        file_extension=file_extension,
        encoding=encoding,
    )
    return MonFilesMonsterTypeLoader(options).load_types()
