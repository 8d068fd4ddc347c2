"""Shared data types for oracle-skills."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

__all__ = ["InstallResult", "OracleSkillsError"]


class OracleSkillsError(Exception):
    """Base class for errors that abort a command."""

    pass


@dataclass
class InstallResult:
    """Outcome of installing (or removing) skills for one agent.

    Attributes:
        agent: Agent identifier.
        target_dir: Skills directory that was populated.
        installed: Names of skills copied (or removed) successfully.
        failed: Mapping of skill name to error message.
    """

    agent: str
    target_dir: Path
    installed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.agent:
            raise ValueError("agent cannot be empty")
        overlap = set(self.installed) & set(self.failed)
        if overlap:
            raise ValueError(f"skills both installed and failed: {sorted(overlap)}")

    @property
    def success(self) -> bool:
        """True when every skill for this agent was handled."""
        return not self.failed
