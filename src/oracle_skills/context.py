"""Application and per-invocation contexts.

`AppContext` separates object creation from object use so CLI commands can
be exercised with test doubles. `RunContext` carries the state owned by a
single command invocation (the temporary checkout and the install scope)
from the fetcher through to the installer.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from oracle_skills.config import ConfigManager, Settings
from oracle_skills.protocols import (
    FileSystem,
    RepositoryFetcher,
    SkillDiscovery,
    SkillInstaller,
)

CHECKOUT_PREFIX = "oracle-skills-"


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from oracle_skills.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass(frozen=True)
class RunContext:
    """State owned by one command invocation.

    Attributes:
        checkout_path: Temporary directory for the repository checkout.
        project_dir: Base directory for project-local skill directories.
        global_: Install into user-wide directories instead.
    """

    checkout_path: Path
    project_dir: Path
    global_: bool = False

    @classmethod
    def create(
        cls,
        temp_root: Path,
        project_dir: Path | None = None,
        global_: bool = False,
    ) -> RunContext:
        """Create a run context with a fresh, time-based checkout path.

        Args:
            temp_root: Directory under which the checkout is created.
            project_dir: Project root. Defaults to the current directory.
            global_: Install into user-wide directories.

        Returns:
            New RunContext. The checkout directory is not created here.
        """
        checkout_path = temp_root / f"{CHECKOUT_PREFIX}{time.time_ns()}"
        return cls(
            checkout_path=checkout_path,
            project_dir=project_dir or Path.cwd(),
            global_=global_,
        )


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    Dependencies are typed using Protocol interfaces, not concrete classes.
    """

    settings: Settings
    config: ConfigManager
    gitops: RepositoryFetcher
    discovery: SkillDiscovery
    installer: SkillInstaller
    filesystem: FileSystem = field(default_factory=_default_filesystem)

    def new_run(self, global_: bool = False, project_dir: Path | None = None) -> RunContext:
        """Create the run context for one command invocation."""
        return RunContext.create(self.settings.temp_root, project_dir, global_)


def create_context(
    config_dir: Path | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        config_dir: Override configuration directory (for testing).

    Returns:
        Configured AppContext with all dependencies.
    """
    from oracle_skills.discovery import Discovery
    from oracle_skills.filesystem import RealFileSystem
    from oracle_skills.gitops import GitOps
    from oracle_skills.install import Installer

    config = ConfigManager.create(config_dir) if config_dir else ConfigManager.create_default()
    settings = config.load_effective()
    gitops = GitOps.create(settings.repository, settings.skills_path)
    discovery = Discovery.create(settings.skills_path)
    filesystem = RealFileSystem()
    installer = Installer.create(filesystem=filesystem)

    return AppContext(
        settings=settings,
        config=config,
        gitops=gitops,
        discovery=discovery,
        installer=installer,
        filesystem=filesystem,
    )
