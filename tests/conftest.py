"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from oracle_skills.config import ConfigManager, Settings
from oracle_skills.context import AppContext

SKILLS_PATH = "oracle-skills/skills"


@pytest.fixture
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Override home directory for testing."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project directory for local installs."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = tmp_path / ".oracle-skills"
    config_dir.mkdir(parents=True)
    return config_dir


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def sample_skill_content() -> str:
    """Sample SKILL.md content."""
    return """---
name: rrr
description: Session retrospective with AI diary. Use when wrapping up a session.
---

# rrr

Write a retrospective of the current session.
"""


def write_skill(skills_dir: Path, name: str, description: str | None = None) -> Path:
    """Create a skill folder with a SKILL.md and return its path."""
    skill_dir = skills_dir / name
    skill_dir.mkdir(parents=True)
    header = f"name: {name}\n"
    if description is not None:
        header += f"description: {description}\n"
    (skill_dir / "SKILL.md").write_text(f"---\n{header}---\n\n# {name}\n")
    return skill_dir


@pytest.fixture
def make_skill():
    """Factory fixture for creating skill folders."""
    return write_skill


@pytest.fixture
def sample_checkout(tmp_path: Path) -> Path:
    """Create a checkout with a few skills and some non-skill entries."""
    checkout = tmp_path / "checkout"
    skills_dir = checkout / SKILLS_PATH
    skills_dir.mkdir(parents=True)

    write_skill(skills_dir, "rrr", "Session retrospective with AI diary")
    recap = write_skill(skills_dir, "recap", "Fresh-start context summary")
    (recap / "scripts").mkdir()
    (recap / "scripts" / "recap.ts").write_text("console.log('recap');\n")
    write_skill(skills_dir, "feel")  # no description
    write_skill(skills_dir, "_template", "Template for new skills")
    write_skill(skills_dir, ".hidden", "Hidden skill")
    (skills_dir / "no-manifest").mkdir()
    (skills_dir / "no-manifest" / "README.md").write_text("# not a skill\n")
    (skills_dir / "stray-file.md").write_text("not a directory\n")
    return checkout


# ============================================================================
# App Context Fixtures
# ============================================================================


@pytest.fixture
def mock_context(tmp_path: Path, temp_config_dir: Path) -> AppContext:
    """Create an AppContext with mocked services and real settings."""
    return AppContext(
        settings=Settings(temp_root=tmp_path / "tmp"),
        config=ConfigManager(config_dir=temp_config_dir),
        gitops=MagicMock(),
        discovery=MagicMock(),
        installer=MagicMock(),
        filesystem=MagicMock(),
    )


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_dir.return_value = False
    return fs
