"""Catalog of supported AI coding agents.

Each agent is described by a frozen `AgentConfig` record keyed by an
`AgentId` member. Agents only differ in where their skills live and how
we tell whether they are installed, so the variation is data plus a
plain detection function rather than a class per agent.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = [
    "AGENTS",
    "AgentConfig",
    "AgentId",
    "agent_names",
    "detect_installed",
    "detect_installed_agents",
    "get_agent",
    "list_agents",
]


class AgentId(str, Enum):
    """Identifiers of supported agents."""

    AMP = "amp"
    ANTIGRAVITY = "antigravity"
    CLAUDE_CODE = "claude-code"
    CLAWDBOT = "clawdbot"
    CODEX = "codex"
    CURSOR = "cursor"
    DROID = "droid"
    GEMINI_CLI = "gemini-cli"
    GITHUB_COPILOT = "github-copilot"
    GOOSE = "goose"
    KILO = "kilo"
    OPENCODE = "opencode"
    ROO = "roo"
    WINDSURF = "windsurf"


def _home_has(*parts: str) -> bool:
    """Check for a marker path under the user's home directory."""
    return Path.home().joinpath(*parts).exists()


def _project_or_home_has(project_marker: str, *home_parts: str) -> bool:
    """Check for a marker in the current project, then under home."""
    return (Path.cwd() / project_marker).exists() or _home_has(*home_parts)


@dataclass(frozen=True)
class AgentConfig:
    """Static description of one agent.

    Attributes:
        id: Agent identifier.
        display_name: Human-readable name.
        skills_dir: Project-relative skills directory.
        global_home_dir: Skills directory relative to the user's home.
        detect: Zero-argument check returning True if the agent is installed.
    """

    id: AgentId
    display_name: str
    skills_dir: str
    global_home_dir: str
    detect: Callable[[], bool]

    @property
    def global_skills_dir(self) -> Path:
        """Absolute, user-wide skills directory."""
        return Path.home() / self.global_home_dir

    def target_dir(self, global_: bool, project_dir: Path) -> Path:
        """Skills directory to populate for the given scope.

        Args:
            global_: Use the user-wide directory instead of the project one.
            project_dir: Project root for local installs.

        Returns:
            Directory that holds one subdirectory per skill.
        """
        if global_:
            return self.global_skills_dir
        return project_dir / self.skills_dir


AGENTS: dict[AgentId, AgentConfig] = {
    AgentId.AMP: AgentConfig(
        id=AgentId.AMP,
        display_name="Amp",
        skills_dir=".agents/skills",
        global_home_dir=".config/agents/skills",
        detect=partial(_home_has, ".config", "amp"),
    ),
    AgentId.ANTIGRAVITY: AgentConfig(
        id=AgentId.ANTIGRAVITY,
        display_name="Antigravity",
        skills_dir=".agent/skills",
        global_home_dir=".gemini/antigravity/skills",
        detect=partial(_project_or_home_has, ".agent", ".gemini", "antigravity"),
    ),
    AgentId.CLAUDE_CODE: AgentConfig(
        id=AgentId.CLAUDE_CODE,
        display_name="Claude Code",
        skills_dir=".claude/skills",
        global_home_dir=".claude/skills",
        detect=partial(_home_has, ".claude"),
    ),
    AgentId.CLAWDBOT: AgentConfig(
        id=AgentId.CLAWDBOT,
        display_name="Clawdbot",
        skills_dir="skills",
        global_home_dir=".clawdbot/skills",
        detect=partial(_home_has, ".clawdbot"),
    ),
    AgentId.CODEX: AgentConfig(
        id=AgentId.CODEX,
        display_name="Codex",
        skills_dir=".codex/skills",
        global_home_dir=".codex/skills",
        detect=partial(_home_has, ".codex"),
    ),
    AgentId.CURSOR: AgentConfig(
        id=AgentId.CURSOR,
        display_name="Cursor",
        skills_dir=".cursor/skills",
        global_home_dir=".cursor/skills",
        detect=partial(_home_has, ".cursor"),
    ),
    AgentId.DROID: AgentConfig(
        id=AgentId.DROID,
        display_name="Droid",
        skills_dir=".factory/skills",
        global_home_dir=".factory/skills",
        detect=partial(_home_has, ".factory"),
    ),
    AgentId.GEMINI_CLI: AgentConfig(
        id=AgentId.GEMINI_CLI,
        display_name="Gemini CLI",
        skills_dir=".gemini/skills",
        global_home_dir=".gemini/skills",
        detect=partial(_home_has, ".gemini"),
    ),
    AgentId.GITHUB_COPILOT: AgentConfig(
        id=AgentId.GITHUB_COPILOT,
        display_name="GitHub Copilot",
        skills_dir=".github/skills",
        global_home_dir=".copilot/skills",
        detect=partial(_project_or_home_has, ".github", ".copilot"),
    ),
    AgentId.GOOSE: AgentConfig(
        id=AgentId.GOOSE,
        display_name="Goose",
        skills_dir=".goose/skills",
        global_home_dir=".config/goose/skills",
        detect=partial(_home_has, ".config", "goose"),
    ),
    AgentId.KILO: AgentConfig(
        id=AgentId.KILO,
        display_name="Kilo Code",
        skills_dir=".kilocode/skills",
        global_home_dir=".kilocode/skills",
        detect=partial(_home_has, ".kilocode"),
    ),
    AgentId.OPENCODE: AgentConfig(
        id=AgentId.OPENCODE,
        display_name="OpenCode",
        skills_dir=".opencode/skill",
        global_home_dir=".config/opencode/skill",
        detect=partial(_home_has, ".config", "opencode"),
    ),
    AgentId.ROO: AgentConfig(
        id=AgentId.ROO,
        display_name="Roo Code",
        skills_dir=".roo/skills",
        global_home_dir=".roo/skills",
        detect=partial(_home_has, ".roo"),
    ),
    AgentId.WINDSURF: AgentConfig(
        id=AgentId.WINDSURF,
        display_name="Windsurf",
        skills_dir=".windsurf/skills",
        global_home_dir=".codeium/windsurf/skills",
        detect=partial(_home_has, ".codeium", "windsurf"),
    ),
}


def list_agents() -> list[AgentConfig]:
    """Return every known agent in catalog order."""
    return list(AGENTS.values())


def agent_names() -> list[str]:
    """Return the identifiers of every known agent."""
    return [agent_id.value for agent_id in AGENTS]


def get_agent(name: str) -> AgentConfig | None:
    """Look up an agent by identifier.

    Args:
        name: Agent identifier (e.g. "claude-code").

    Returns:
        The agent's config, or None if the identifier is unknown.
    """
    try:
        return AGENTS[AgentId(name)]
    except ValueError:
        return None


def detect_installed(agent: AgentConfig) -> bool:
    """Check whether an agent appears to be installed.

    Filesystem errors count as "not installed".
    """
    try:
        return bool(agent.detect())
    except OSError as e:
        logger.debug("Detection failed for %s: %s", agent.id.value, e)
        return False


def detect_installed_agents() -> list[AgentConfig]:
    """Return the agents that appear to be installed on this system."""
    return [agent for agent in list_agents() if detect_installed(agent)]
