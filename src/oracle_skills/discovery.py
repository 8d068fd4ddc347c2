"""Discovery of skills in a repository checkout."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from oracle_skills.config import DEFAULT_SKILLS_PATH
from oracle_skills.validation import extract_description

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Skill:
    """A skill folder found in the repository."""

    name: str
    description: str
    path: Path


class Discovery:
    """Discovers skills under the repository's skills path."""

    SKILL_PATTERN = "SKILL.md"
    TEMPLATE_DIR = "_template"
    HIDDEN_PREFIX = "."

    def __init__(self, skills_path: str = DEFAULT_SKILLS_PATH) -> None:
        """Initialize discovery.

        Args:
            skills_path: Repository-relative directory holding skill folders.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.skills_path = skills_path

    @classmethod
    def create(cls, skills_path: str = DEFAULT_SKILLS_PATH) -> Discovery:
        """Create a discovery instance.

        Args:
            skills_path: Repository-relative directory holding skill folders.

        Returns:
            Configured Discovery instance.
        """
        return cls(skills_path=skills_path)

    def discover(self, checkout_path: Path) -> list[Skill]:
        """Discover skills in a repository checkout.

        A checkout without the skills path yields no skills rather than an
        error. Results are in filesystem order.

        Args:
            checkout_path: Root of the repository checkout.

        Returns:
            List of discovered skills.
        """
        skills_dir = checkout_path / self.skills_path
        if not skills_dir.is_dir():
            logger.debug("No skills directory at %s", skills_dir)
            return []
        return self.discover_dir(skills_dir)

    def discover_sorted(self, checkout_path: Path) -> list[Skill]:
        """Discover skills sorted by name."""
        return sorted(self.discover(checkout_path), key=lambda s: s.name)

    def discover_dir(self, skills_dir: Path) -> list[Skill]:
        """Discover skills directly inside a skills directory.

        Hidden directories and the template directory are skipped, as are
        directories without a SKILL.md.

        Args:
            skills_dir: Directory holding one folder per skill.

        Returns:
            List of discovered skills.
        """
        if not skills_dir.is_dir():
            return []

        skills = []
        for skill_path in skills_dir.iterdir():
            if not skill_path.is_dir() or self._is_excluded(skill_path.name):
                continue
            skill = self._parse_skill_dir(skill_path)
            if skill:
                skills.append(skill)
        return skills

    def _is_excluded(self, name: str) -> bool:
        return name.startswith(self.HIDDEN_PREFIX) or name == self.TEMPLATE_DIR

    def _parse_skill_dir(self, path: Path) -> Skill | None:
        """Parse a skill directory.

        Args:
            path: Path to the skill directory.

        Returns:
            Skill, or None if the directory has no manifest.
        """
        skill_file = path / self.SKILL_PATTERN
        if not skill_file.is_file():
            return None

        try:
            content = skill_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Could not read %s: %s", skill_file, e)
            content = ""

        return Skill(
            name=path.name,
            description=extract_description(content),
            path=path,
        )
