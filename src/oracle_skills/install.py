"""Copying skills into agent skill directories."""

from __future__ import annotations

import logging
from pathlib import Path

from oracle_skills.agents import AgentConfig
from oracle_skills.context import RunContext
from oracle_skills.filesystem import RealFileSystem
from oracle_skills.protocols import FileSystem
from oracle_skills.resolve import InstallPlan
from oracle_skills.types import InstallResult

logger = logging.getLogger(__name__)


def is_skill_name(name: str) -> bool:
    """Check that a name denotes a single visible entry inside a skills directory."""
    if not name or name.startswith("."):
        return False
    return "/" not in name and "\\" not in name and Path(name).name == name


class Installer:
    """Places skill folders into agent directories.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    """

    def __init__(self, filesystem: FileSystem) -> None:
        """Initialize installer with required dependencies.

        Args:
            filesystem: Filesystem abstraction (required).
        """
        self.fs = filesystem

    @classmethod
    def create(cls, filesystem: FileSystem | None = None) -> Installer:
        """Factory method for production instantiation.

        Args:
            filesystem: Optional filesystem abstraction (created if not provided).

        Returns:
            Configured Installer instance.
        """
        return cls(filesystem=filesystem or RealFileSystem())

    def install(self, plan: InstallPlan, run: RunContext) -> list[InstallResult]:
        """Copy every planned skill into every planned agent's directory.

        Existing copies are replaced. A failure on one skill is recorded and
        the remaining skills still run; nothing is rolled back.

        Args:
            plan: Resolved skills and agents.
            run: Invocation context; supplies the project directory.

        Returns:
            One InstallResult per agent.
        """
        results = []
        for agent in plan.agents:
            target_dir = agent.target_dir(plan.global_, run.project_dir)
            result = InstallResult(agent=agent.id.value, target_dir=target_dir)
            try:
                self.fs.mkdir(target_dir, parents=True, exist_ok=True)
            except OSError as e:
                logger.exception("Could not create %s for %s", target_dir, agent.id.value)
                result.failed = {skill.name: str(e) for skill in plan.skills}
                results.append(result)
                continue

            for skill in plan.skills:
                try:
                    self._install_skill(skill.path, target_dir / skill.name)
                except OSError as e:
                    logger.exception("Copy of %s to %s failed", skill.name, target_dir)
                    result.failed[skill.name] = str(e)
                else:
                    result.installed.append(skill.name)

            results.append(result)
        return results

    def uninstall(
        self,
        skill_names: list[str],
        agents: list[AgentConfig],
        run: RunContext,
    ) -> list[InstallResult]:
        """Remove skills from each agent's directory.

        Skills that are not present are ignored. Names that are empty, hidden
        or contain a path separator could escape the target directory; they
        are never removed and are reported as failed. `installed` on each
        result lists the skills that were actually removed.

        Args:
            skill_names: Skills to remove.
            agents: Agents to remove them from.
            run: Invocation context; supplies scope and project directory.

        Returns:
            One InstallResult per agent.
        """
        results = []
        for agent in agents:
            target_dir = agent.target_dir(run.global_, run.project_dir)
            result = InstallResult(agent=agent.id.value, target_dir=target_dir)
            for name in skill_names:
                if not is_skill_name(name) or (target_dir / name).parent != target_dir:
                    logger.info("Refusing to remove %r from %s", name, target_dir)
                    result.failed[name] = "Invalid skill name"
                    continue
                path = target_dir / name
                if not self.fs.exists(path):
                    continue
                try:
                    self._remove(path)
                except OSError as e:
                    logger.exception("Removal of %s failed", path)
                    result.failed[name] = str(e)
                else:
                    result.installed.append(name)
            results.append(result)
        return results

    def _install_skill(self, source_path: Path, install_path: Path) -> None:
        """Install a skill directory.

        Args:
            source_path: Source skill directory.
            install_path: Target installation directory.
        """
        # Remove existing if present
        if self.fs.exists(install_path):
            self._remove(install_path)

        self.fs.copytree(source_path, install_path)

    def _remove(self, path: Path) -> None:
        if self.fs.is_dir(path):
            self.fs.rmtree(path)
        else:
            self.fs.unlink(path)
