"""
Shared pytest fixtures for monster catalog tests.
"""

import textwrap
import pytest
from pathlib import Path


# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Test paths
FIXTURES_DIR = PROJECT_ROOT / "tests" / "fixtures"
MONSTER_FIXTURES_DIR = FIXTURES_DIR / "monsters"


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def monster_fixtures_dir():
    """Return the directory of sample *.mon files (rat, orc, demon)."""
    if not MONSTER_FIXTURES_DIR.exists():
        pytest.skip(f"Monster fixtures not found: {MONSTER_FIXTURES_DIR}")
    return MONSTER_FIXTURES_DIR


@pytest.fixture(scope="function")
def monster_dir(tmp_path):
    """
    Return an empty monster files directory for each test.
    Uses pytest's tmp_path fixture which is automatically cleaned up.
    """
    directory = tmp_path / "monsters"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@pytest.fixture
def write_monster(monster_dir):
    """
    Return a helper that writes a monster file into monster_dir.

    Usage:
        write_monster("rat.mon", '''
            racenumber = 21
            name = "rat"
        ''')
    """
    def _write(filename: str, content: str, encoding: str = "latin-1") -> Path:
        path = monster_dir / filename
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding=encoding)
        return path

    return _write
