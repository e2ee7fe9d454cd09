"""Environment-backed settings for locating and reading monster files.

Settings come from the process environment, with a .env file at the project
root loaded first when one exists. Variables read:
    MONSTER_FILES_DIRECTORY: folder scanned for *.mon files (default data/monsters)
    MONSTER_FILES_ENCODING: text encoding of those files (default latin-1)
    LOG_LEVEL: level name used by scripts/load_monsters.py

Usage:
    from config import get_monster_files_directory, get_monster_files_encoding

    directory = get_monster_files_directory()
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Calculate paths once at import time
SRC_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

DEFAULT_MONSTER_FILES_DIRECTORY = PROJECT_ROOT / "data" / "monsters"

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


def get_env(key: str, default: Optional[str] = None) -> str:
    """Read one setting from the environment (.env already applied).

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def get_monster_files_directory() -> Path:
    """Get the directory holding the *.mon files."""
    return Path(get_env("MONSTER_FILES_DIRECTORY", default=str(DEFAULT_MONSTER_FILES_DIRECTORY)))


def get_monster_files_encoding() -> str:
    """Get the text encoding used to read monster files."""
    return get_env("MONSTER_FILES_ENCODING", default="latin-1")
