"""Resolution of an install request into a concrete plan."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from oracle_skills.agents import AgentConfig, get_agent
from oracle_skills.discovery import Skill
from oracle_skills.types import OracleSkillsError

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]


class SelectionError(OracleSkillsError):
    """None of the requested skills exist in the repository."""

    def __init__(self, requested: Sequence[str], available: Sequence[str]) -> None:
        self.requested = list(requested)
        self.available = sorted(available)
        super().__init__(
            f"No matching skills found for: {', '.join(self.requested)}. "
            f"Available: {', '.join(self.available) or '(none)'}"
        )


class NoAgentsError(OracleSkillsError):
    """No known agent was selected or detected."""

    pass


class InstallOptions(BaseModel):
    """Options supplied once per install invocation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skills: list[str] | None = None
    global_: bool = Field(default=False, alias="global")
    yes: bool = False


@dataclass
class InstallPlan:
    """Skills and agents an install will touch.

    Attributes:
        skills: Skills to copy.
        agents: Known agents to copy them into.
        unknown_agents: Requested agent identifiers that were skipped.
        global_: Use user-wide skill directories.
    """

    skills: list[Skill]
    agents: list[AgentConfig]
    unknown_agents: list[str] = field(default_factory=list)
    global_: bool = False


def select_skills(discovered: Sequence[Skill], names: Sequence[str] | None) -> list[Skill]:
    """Filter discovered skills to the requested names.

    Args:
        discovered: Skills found in the repository.
        names: Requested skill names. Empty or None selects everything.

    Returns:
        The selected skills, in discovery order.

    Raises:
        SelectionError: If names were given and none of them matched.
    """
    if not names:
        return list(discovered)

    wanted = set(names)
    selected = [skill for skill in discovered if skill.name in wanted]
    if not selected:
        raise SelectionError(names, [skill.name for skill in discovered])

    missing = wanted - {skill.name for skill in selected}
    if missing:
        logger.warning("Skipping unknown skills: %s", ", ".join(sorted(missing)))
    return selected


def split_agents(agent_ids: Sequence[str]) -> tuple[list[AgentConfig], list[str]]:
    """Split requested identifiers into known agents and unknown ids.

    Duplicates are dropped, keeping the first occurrence.

    Args:
        agent_ids: Requested agent identifiers.

    Returns:
        Tuple of (known agent configs, unknown identifiers).
    """
    known: list[AgentConfig] = []
    unknown: list[str] = []
    for agent_id in dict.fromkeys(agent_ids):
        agent = get_agent(agent_id)
        if agent is None:
            logger.info("Unknown agent: %s", agent_id)
            unknown.append(agent_id)
        else:
            known.append(agent)
    return known, unknown


def confirmation_message(skills: Sequence[Skill], agents: Sequence[AgentConfig]) -> str:
    """Build the install confirmation prompt."""
    agent_list = ", ".join(agent.display_name for agent in agents)
    return f"Install {len(skills)} skills to {agent_list}?"


class InstallResolver:
    """Validates an install request and confirms it with the operator."""

    def __init__(self, confirm: ConfirmFn) -> None:
        """Initialize the resolver.

        Args:
            confirm: Callable asking a yes/no question; returns True to proceed.
        """
        self.confirm = confirm

    def resolve(
        self,
        discovered: Sequence[Skill],
        agent_ids: Sequence[str],
        options: InstallOptions,
    ) -> InstallPlan | None:
        """Turn an install request into a plan.

        Nothing is written to disk here. A None return means the operator
        declined and the install must not proceed.

        Args:
            discovered: Skills found in the repository.
            agent_ids: Requested agent identifiers.
            options: Install options.

        Returns:
            The plan, or None if the operator declined.

        Raises:
            SelectionError: If requested skills matched nothing.
            NoAgentsError: If no requested agent is known.
        """
        skills = select_skills(discovered, options.skills)
        agents, unknown = split_agents(agent_ids)
        if not agents:
            raise NoAgentsError(
                f"No known agents selected: {', '.join(agent_ids) or '(none)'}"
            )

        if not options.yes and not self.confirm(confirmation_message(skills, agents)):
            logger.info("Installation cancelled by operator")
            return None

        return InstallPlan(
            skills=skills,
            agents=agents,
            unknown_agents=unknown,
            global_=options.global_,
        )
