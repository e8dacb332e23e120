"""Tool-cache path configuration.

A build host caches the tools it needs in a directory of its own. The
location is read, in order of precedence, from:

1. The ``NPM_RESOLVER_PATHS_TOOLS`` environment variable
2. ``paths.tools`` in the project settings file
3. ``paths.tools`` in the user settings file
4. The default, ``tools``

Relative locations are taken relative to the working directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .environment import Environment
from .exceptions import ConfigFileError
from .utils import deep_merge

logger = logging.getLogger(__name__)

TOOLS_PATH_VARIABLE = "NPM_RESOLVER_PATHS_TOOLS"
DEFAULT_TOOLS_PATH = "tools"


@dataclass(frozen=True)
class ConfigPaths:
    """Paths to the settings files consulted for the tool-cache location.

    Attributes:
        user: User-global settings file (optional)
        project: Project settings file (optional, overrides user)
    """

    user: Path | None = None
    project: Path | None = None


class ToolPathConfig:
    """Resolves the host's tool-cache directory.

    Args:
        paths: Settings files to read (default: none, environment and default only)
    """

    def __init__(self, paths: ConfigPaths | None = None):
        self.paths = paths or ConfigPaths()

    def get_tool_path(self, working_directory: Path, environment: Environment) -> Path:
        """Get the absolute tool-cache directory.

        Args:
            working_directory: Base for relative locations
            environment: Source of the override variable

        Returns:
            Tool-cache directory; not guaranteed to exist
        """
        configured = environment.get_environment_variable(TOOLS_PATH_VARIABLE)
        if configured and configured.strip():
            logger.debug(f"Tool path from {TOOLS_PATH_VARIABLE}: {configured}")
        else:
            configured = self._settings_tool_path() or DEFAULT_TOOLS_PATH

        tool_path = Path(configured.strip()).expanduser()
        if not tool_path.is_absolute():
            tool_path = Path(working_directory) / tool_path
        return tool_path

    def set_tool_path(self, path: str, scope: str = "project") -> None:
        """Persist a tool-cache location in a settings file.

        Args:
            path: Location to store (absolute or relative to the working directory)
            scope: "user" or "project" (default: project)

        Raises:
            ConfigFileError: If the scope has no settings file or the write fails
        """
        target = {"user": self.paths.user, "project": self.paths.project}.get(scope)
        if target is None:
            raise ConfigFileError(f"No settings file configured for {scope} scope")

        existing = self._read_yaml(target) or {}
        self._write_yaml(target, deep_merge(existing, {"paths": {"tools": path}}))
        logger.info(f"Set tool path to '{path}' in {scope} scope")

    def get_merged_settings(self) -> dict[str, Any]:
        """Get user settings overlaid with project settings."""
        merged: dict[str, Any] = {}
        for path in (self.paths.user, self.paths.project):
            if path is None:
                continue
            settings = self._read_yaml(path)
            if settings:
                merged = deep_merge(merged, settings)
        return merged

    def _settings_tool_path(self) -> str | None:
        paths = self.get_merged_settings().get("paths")
        if not isinstance(paths, dict):
            return None
        value = paths.get("tools")
        if value is None or not str(value).strip():
            return None
        return str(value)

    def _read_yaml(self, path: Path) -> dict[str, Any] | None:
        """Read a settings file.

        Returns:
            Settings mapping, or None if the file is missing or unusable
        """
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
            return None
        return data

    def _write_yaml(self, path: Path, data: dict[str, Any]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigFileError(f"Failed to write settings to {path}: {e}") from e
