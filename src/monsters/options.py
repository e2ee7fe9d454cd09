"""Options for the *.mon monster type loader."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from config import get_monster_files_directory, get_monster_files_encoding
from exceptions import ConfigurationError


class MonFilesLoaderOptions(BaseModel):
    """Where to find monster files and how to read them."""
    model_config = ConfigDict(frozen=True)

    monster_files_directory: Path
    file_extension: str = "mon"
    encoding: str = "latin-1"

    @field_validator('monster_files_directory', mode='before')
    @classmethod
    def validate_directory(cls, v):
        """Reject blank directory values before they become Path('.')."""
        if v is None or not str(v).strip():
            raise ConfigurationError("monster_files_directory must not be blank")
        return v

    @field_validator('file_extension')
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Normalize the extension to have no leading dot."""
        extension = v.strip().lstrip(".")
        if not extension:
            raise ConfigurationError("file_extension must not be blank")
        return extension

    @classmethod
    def from_env(cls) -> "MonFilesLoaderOptions":
        """Build options from MONSTER_FILES_DIRECTORY / MONSTER_FILES_ENCODING."""
        return cls(
            monster_files_directory=get_monster_files_directory(),
            encoding=get_monster_files_encoding(),
        )
