"""Configuration data structures and loading.

Provides immutable configuration loaded from ~/.rclonekit/config.toml, or
from the file named by RCLONEKIT_CONFIG. A missing file means defaults:

    tool = "rclone"
    warn = []
"""

import os
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import tomlkit

from rclonekit.classify import ErrorKind
from rclonekit.command import DEFAULT_TOOL

CONFIG_ENV_VAR = "RCLONEKIT_CONFIG"

CONFIG_KEYS = ("tool", "warn")


@dataclass(frozen=True)
class RcloneKitConfig:
    """Immutable configuration data.

    Attributes:
        tool: Executable name prefixed to every command line
        warn: Error identifiers downgraded to warnings on every call
    """

    tool: str = DEFAULT_TOOL
    warn: tuple[str, ...] = ()


def _known_identifier(entry: str) -> bool:
    lowered = entry.lower()
    return any(
        lowered in (kind.identifier.lower(), kind.short_name.lower())
        for kind in ErrorKind
        if kind is not ErrorKind.NONE
    )


def parse_config(data: dict, source: Path) -> RcloneKitConfig:
    """Build a config from decoded TOML data.

    Raises:
        ValueError: If a value has the wrong type or names an unknown error kind
    """
    tool = data.get("tool", DEFAULT_TOOL)
    if not isinstance(tool, str) or not tool.strip():
        raise ValueError(f"'tool' must be a non-empty string in {source}")

    warn = data.get("warn", [])
    if isinstance(warn, str):
        warn = [warn]
    if not isinstance(warn, list) or not all(isinstance(entry, str) for entry in warn):
        raise ValueError(f"'warn' must be a string or a list of strings in {source}")

    unknown = [entry for entry in warn if not _known_identifier(entry)]
    if unknown:
        raise ValueError(f"Unknown error identifier(s) {', '.join(unknown)} in {source}")

    return RcloneKitConfig(tool=tool.strip(), warn=tuple(warn))


class ConfigStore(ABC):
    """Abstract interface for config operations.

    Provides dependency injection for config access, enabling in-memory
    implementations for tests without touching filesystem.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Check if config exists."""
        ...

    @abstractmethod
    def load(self) -> RcloneKitConfig:
        """Load config, falling back to defaults when none exists.

        Raises:
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: RcloneKitConfig) -> None:
        """Save config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the config file (for error messages and debugging)."""
        ...


class FilesystemConfigStore(ConfigStore):
    """Production implementation that reads/writes the TOML config file."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> RcloneKitConfig:
        """Load config from disk.

        Returns:
            RcloneKitConfig with defaults for anything not set

        Raises:
            ValueError: If the file is not valid TOML or has invalid values
        """
        config_path = self.path()
        if not config_path.exists():
            return RcloneKitConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e
        return parse_config(data, config_path)

    def save(self, config: RcloneKitConfig) -> None:
        """Save config, preserving existing formatting and comments.

        Raises:
            PermissionError: If directory or file cannot be written
        """
        config_path = self.path()
        parent = config_path.parent

        if parent.exists() and not os.access(parent, os.W_OK):
            raise PermissionError(
                f"Cannot write to directory: {parent}\n"
                f"The directory exists but is not writable."
            )
        parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            with config_path.open(encoding="utf-8") as f:
                doc = tomlkit.load(f)
        else:
            doc = tomlkit.document()
            doc.add(tomlkit.comment("rclonekit configuration"))

        doc["tool"] = config.tool
        doc["warn"] = list(config.warn)

        with config_path.open("w", encoding="utf-8") as f:
            tomlkit.dump(doc, f)

    def path(self) -> Path:
        """Get the config file path.

        Returns:
            Explicit path if given, else $RCLONEKIT_CONFIG, else
            ~/.rclonekit/config.toml
        """
        if self._config_path is not None:
            return self._config_path
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / ".rclonekit" / "config.toml"


class InMemoryConfigStore(ConfigStore):
    """Test implementation that stores config in memory without touching filesystem."""

    def __init__(self, config: RcloneKitConfig | None = None) -> None:
        """Initialize in-memory config store.

        Args:
            config: Initial config state (None = config doesn't exist)
        """
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> RcloneKitConfig:
        if self._config is None:
            return RcloneKitConfig()
        return self._config

    def save(self, config: RcloneKitConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/rclonekit/config.toml")
