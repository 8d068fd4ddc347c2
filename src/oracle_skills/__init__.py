"""Install Oracle skills into AI coding agents."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from oracle_skills.protocols import (
    FileSystem,
    RepositoryFetcher,
    SkillDiscovery,
    SkillInstaller,
)

__all__ = [
    "__version__",
    "FileSystem",
    "RepositoryFetcher",
    "SkillDiscovery",
    "SkillInstaller",
]
