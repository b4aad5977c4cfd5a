"""Configuration data structures and persistence.

One YAML document per user holds a default ProjectConfig plus per-project
overrides keyed by repository root directory name:

    version: '1'
    default:
      primary_branch: master
      primary_remote: origin
      tasks: []
    projects:
      webapp:
        primary_branch: main
        tasks:
        - type: CopyPath
          source: node_modules
          symlink: true
        - type: CopyPath
          source: .env
          missing_okay: true
        - type: Shell
          cmd: npm run build
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Literal

import yaml
from platformdirs import user_config_dir
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from supertree.core.errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "supertree"
CONFIG_FILENAME = "config.yaml"
CONFIG_PATH_ENV_VAR = "SUPERTREE_CONFIG"
SUPPORTED_VERSIONS = ("1",)


class CopyPathTask(BaseModel):
    """Copy or symlink a path from the template checkout into the new worktree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["CopyPath"] = "CopyPath"
    source: Path
    symlink: bool = False
    missing_okay: bool = False

    def describe(self) -> str:
        verb = "symlink" if self.symlink else "copy"
        return f"{verb} {self.source}"


class ShellTask(BaseModel):
    """Run a shell command inside the new worktree."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["Shell"] = "Shell"
    cmd: str

    def describe(self) -> str:
        return f"shell `{self.cmd}`"


Task = Annotated[CopyPathTask | ShellTask, Field(discriminator="type")]


class ProjectConfig(BaseModel):
    """Settings applied to every worktree created for one project."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary_branch: str = "master"
    primary_remote: str = "origin"
    tasks: tuple[Task, ...] = ()


class RootConfig(BaseModel):
    """The whole configuration file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: str = "1"
    default: ProjectConfig = Field(default_factory=ProjectConfig)
    projects: dict[str, ProjectConfig] = Field(default_factory=dict)

    def project_for(self, name: str) -> ProjectConfig:
        """Config for the project whose repository root is named name."""
        return self.projects.get(name, self.default)


def default_config_path(env: Mapping[str, str]) -> Path:
    """Location of the config file, honoring the SUPERTREE_CONFIG override."""
    override = env.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME


def parse_config(text: str, *, source: str) -> RootConfig:
    """Parse and validate YAML config text.

    Raises:
        ConfigError: If the text is not valid YAML, has unknown fields or bad values
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file {source}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse config file {source}: expected a mapping at top level")

    try:
        config = RootConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {source}:\n{e}") from e

    if config.version not in SUPPORTED_VERSIONS:
        raise ConfigError(
            f"Unsupported config version '{config.version}' in {source} "
            f"(supported: {', '.join(SUPPORTED_VERSIONS)})"
        )
    return config


def render_config(config: RootConfig) -> str:
    """Serialize config to YAML text."""
    return yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)


class ConfigStore(ABC):
    """Abstract interface for config persistence.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if the config file exists."""
        ...

    @abstractmethod
    def load(self) -> RootConfig:
        """Load the config file.

        Raises:
            ConfigError: If the file is missing or invalid
        """
        ...

    @abstractmethod
    def save(self, config: RootConfig) -> None:
        """Write config, creating parent directories as needed."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Path to the config file (for messages and debugging)."""
        ...

    def load_or_create(self) -> RootConfig:
        """Load the config, materializing defaults to disk first if it is missing."""
        if not self.exists():
            config = RootConfig()
            self.save(config)
            logger.debug("Wrote default config to %s", self.path())
            return config
        return self.load()


class RealConfigStore(ConfigStore):
    """Production implementation backed by a YAML file."""

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self._config_path.exists()

    def load(self) -> RootConfig:
        try:
            text = self._config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self._config_path}: {e}") from e
        return parse_config(text, source=str(self._config_path))

    def save(self, config: RootConfig) -> None:
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            self._config_path.write_text(render_config(config), encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to save config file {self._config_path}: {e}") from e

    def path(self) -> Path:
        return self._config_path


class FakeConfigStore(ConfigStore):
    """In-memory implementation for tests.

    config=None simulates a missing config file.
    """

    def __init__(
        self, *, config: RootConfig | None, config_path: Path = Path("/test/supertree/config.yaml")
    ) -> None:
        self._config = config
        self._config_path = config_path
        self._saved_configs: list[RootConfig] = []

    @property
    def saved_configs(self) -> list[RootConfig]:
        """Read-only access to configs passed to save(), for test assertions."""
        return self._saved_configs

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> RootConfig:
        if self._config is None:
            raise ConfigError(f"Config file not found at {self._config_path}")
        return self._config

    def save(self, config: RootConfig) -> None:
        self._config = config
        self._saved_configs.append(config)

    def path(self) -> Path:
        return self._config_path
