"""Protocol definitions for core abstractions.

This module defines abstract interfaces (Protocols) for the core services.
Concrete implementations satisfy these protocols structurally, which lets
CLI tests substitute plain mocks.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from oracle_skills.types import InstallResult

if TYPE_CHECKING:
    from oracle_skills.agents import AgentConfig
    from oracle_skills.context import RunContext
    from oracle_skills.discovery import Skill
    from oracle_skills.resolve import InstallPlan


@runtime_checkable
class RepositoryFetcher(Protocol):
    """Protocol for obtaining a temporary checkout of the skills repository."""

    def fetch_repository(self, run: RunContext) -> Path:
        """Clone the repository into the run's checkout path.

        Args:
            run: Invocation context owning the checkout path.

        Returns:
            Path to the local checkout.
        """
        ...

    def release(self, path: Path) -> None:
        """Remove a checkout, ignoring failures.

        Args:
            path: Checkout to remove.
        """
        ...

    def checkout(self, run: RunContext) -> AbstractContextManager[Path]:
        """Fetch the repository and release it when the block exits.

        Args:
            run: Invocation context owning the checkout path.

        Returns:
            Context manager yielding the checkout path.
        """
        ...


@runtime_checkable
class SkillDiscovery(Protocol):
    """Protocol for finding skills in a checkout."""

    def discover(self, checkout_path: Path) -> list[Skill]:
        """Discover skills in filesystem order.

        Args:
            checkout_path: Root of the repository checkout.

        Returns:
            Discovered skills.
        """
        ...

    def discover_sorted(self, checkout_path: Path) -> list[Skill]:
        """Discover skills sorted by name.

        Args:
            checkout_path: Root of the repository checkout.

        Returns:
            Discovered skills.
        """
        ...

    def discover_dir(self, skills_dir: Path) -> list[Skill]:
        """Discover skills directly inside a skills directory.

        Args:
            skills_dir: Directory holding one folder per skill.

        Returns:
            Discovered skills.
        """
        ...


@runtime_checkable
class SkillInstaller(Protocol):
    """Protocol for placing skills into agent directories."""

    def install(self, plan: InstallPlan, run: RunContext) -> list[InstallResult]:
        """Copy the planned skills into every planned agent directory.

        Args:
            plan: Resolved skills and agents.
            run: Invocation context carrying the install scope.

        Returns:
            One InstallResult per agent.
        """
        ...

    def uninstall(
        self,
        skill_names: list[str],
        agents: list[AgentConfig],
        run: RunContext,
    ) -> list[InstallResult]:
        """Remove skills from every given agent directory.

        Args:
            skill_names: Skills to remove.
            agents: Agents to remove them from.
            run: Invocation context carrying the install scope.

        Returns:
            One InstallResult per agent.
        """
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the filesystem operations the installer performs."""

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory.

        Args:
            path: Path to check.

        Returns:
            True if path is a directory, False otherwise.
        """
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...

    def unlink(self, path: Path) -> None:
        """Remove a file.

        Args:
            path: Path to remove.
        """
        ...

    def rmtree(self, path: Path) -> None:
        """Remove a directory tree.

        Args:
            path: Path to remove.
        """
        ...

    def copytree(self, src: Path, dst: Path) -> None:
        """Copy a directory tree.

        Args:
            src: Source directory.
            dst: Destination directory.
        """
        ...
