"""User configuration for oracle-skills."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from oracle_skills.types import OracleSkillsError

# Default configuration location
CONFIG_DIR = Path.home() / ".oracle-skills"

DEFAULT_REPOSITORY = "https://github.com/Soul-Brews-Studio/plugin-marketplace.git"
DEFAULT_SKILLS_PATH = "oracle-skills/skills"

ENV_PREFIX = "ORACLE_SKILLS_"

# CLI key -> model field
SETTABLE_KEYS = {
    "repository": "repository",
    "skills-path": "skills_path",
    "temp-root": "temp_root",
    "default-agents": "default_agents",
}


def _split_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class ConfigError(OracleSkillsError):
    """The configuration file could not be read."""

    pass


class Settings(BaseModel):
    """Persisted settings, stored as camelCase JSON."""

    model_config = ConfigDict(populate_by_name=True)

    version: str = "1.0"
    repository: str = DEFAULT_REPOSITORY
    skills_path: str = Field(default=DEFAULT_SKILLS_PATH, alias="skillsPath")
    temp_root: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()), alias="tempRoot")
    default_agents: list[str] = Field(default_factory=list, alias="defaultAgents")

    def with_env(self, environ: Mapping[str, str] | None = None) -> Settings:
        """Return a copy with ORACLE_SKILLS_* environment overrides applied.

        Args:
            environ: Environment mapping. Defaults to os.environ.

        Returns:
            New Settings instance.
        """
        env = os.environ if environ is None else environ
        updates: dict[str, object] = {}
        if env.get(f"{ENV_PREFIX}REPOSITORY"):
            updates["repository"] = env[f"{ENV_PREFIX}REPOSITORY"]
        if env.get(f"{ENV_PREFIX}SKILLS_PATH"):
            updates["skills_path"] = env[f"{ENV_PREFIX}SKILLS_PATH"]
        if env.get(f"{ENV_PREFIX}TEMP_ROOT"):
            updates["temp_root"] = Path(env[f"{ENV_PREFIX}TEMP_ROOT"])
        if env.get(f"{ENV_PREFIX}DEFAULT_AGENTS"):
            updates["default_agents"] = _split_list(env[f"{ENV_PREFIX}DEFAULT_AGENTS"])
        return self.model_copy(update=updates)


class ConfigManager:
    """Loads and saves the settings file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Directory for the config file. Defaults to ~/.oracle-skills.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.config_dir = config_dir or CONFIG_DIR
        self.config_file = self.config_dir / "config.json"

    @classmethod
    def create(cls, config_dir: Path) -> ConfigManager:
        """Create a config manager with a custom directory."""
        return cls(config_dir=config_dir)

    @classmethod
    def create_default(cls) -> ConfigManager:
        """Create a config manager using ~/.oracle-skills."""
        return cls()

    def ensure_config_dir(self) -> None:
        """Create config directory if it doesn't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> Settings:
        """Load settings from disk, without environment overrides.

        Returns:
            Stored settings, or defaults if no file exists.

        Raises:
            ConfigError: If the file is not valid settings JSON.
        """
        if not self.config_file.exists():
            return Settings()

        try:
            data = json.loads(self.config_file.read_text())
            return Settings.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigError(f"Invalid configuration file {self.config_file}: {e}") from e

    def load_effective(self, environ: Mapping[str, str] | None = None) -> Settings:
        """Load settings from disk and apply environment overrides."""
        return self.load().with_env(environ)

    def save(self, settings: Settings) -> None:
        """Save settings to disk.

        Args:
            settings: Settings to save.
        """
        self.ensure_config_dir()
        data = settings.model_dump(by_alias=True, exclude_none=True, mode="json")
        self.config_file.write_text(json.dumps(data, indent=2))

    def set_value(self, key: str, value: str) -> Settings:
        """Update a single setting and persist it.

        Args:
            key: CLI key (repository, skills-path, temp-root, default-agents).
            value: New value. Lists are comma-separated.

        Returns:
            The updated settings.

        Raises:
            ValueError: If the key is unknown.
        """
        if key not in SETTABLE_KEYS:
            raise ValueError(
                f"Unknown configuration key: {key}. Supported: {', '.join(SETTABLE_KEYS)}"
            )

        field_name = SETTABLE_KEYS[key]
        parsed: object = _split_list(value) if field_name == "default_agents" else value
        settings = self.load().model_copy(update={field_name: parsed})
        # Round-trip through validation so temp_root becomes a Path
        settings = Settings.model_validate(settings.model_dump())
        self.save(settings)
        return settings
