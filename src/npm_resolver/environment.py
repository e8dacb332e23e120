"""Filesystem and environment collaborators.

The resolver never touches ``os`` or ``pathlib`` I/O directly. Hosts hand it
objects satisfying the protocols below; the local implementations cover the
common case of resolving against the real machine.
"""

import logging
import os
import sys
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Protocol

from .models import FileHandle
from .models import PlatformFamily

logger = logging.getLogger(__name__)


class DirectoryHandle(Protocol):
    """A directory that may or may not exist yet."""

    path: Path

    @property
    def exists(self) -> bool: ...

    def create(self) -> None: ...

    def list_files(self, recursive: bool = True) -> list[FileHandle]: ...

    def list_subdirectories(self, pattern: str = "*", recursive: bool = False) -> Iterator["DirectoryHandle"]: ...


class FileSystem(Protocol):
    """Filesystem operations the resolver relies on."""

    def directory_exists(self, path: Path) -> bool: ...

    def get_directory(self, path: Path) -> DirectoryHandle: ...

    def file_exists(self, path: Path) -> bool: ...

    def read_lines(self, path: Path, encoding: str = "utf-8") -> list[str]: ...


class Environment(Protocol):
    """Process environment the resolver relies on."""

    @property
    def working_directory(self) -> Path: ...

    @property
    def platform_family(self) -> PlatformFamily: ...

    def get_environment_variable(self, name: str) -> str | None: ...


class ToolPathProvider(Protocol):
    """Host convention for where its own tools are cached."""

    def get_tool_path(self, working_directory: Path, environment: Environment) -> Path: ...


class LocalDirectory:
    """DirectoryHandle backed by pathlib."""

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    def create(self) -> None:
        self.path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured directory {self.path}")

    def list_files(self, recursive: bool = True) -> list[FileHandle]:
        """List files below this directory.

        Args:
            recursive: Descend into subdirectories (default: True)

        Returns:
            File handles in filesystem enumeration order
        """
        entries = self.path.rglob("*") if recursive else self.path.iterdir()
        return [FileHandle(entry) for entry in entries if entry.is_file()]

    def list_subdirectories(self, pattern: str = "*", recursive: bool = False) -> Iterator["LocalDirectory"]:
        """Yield subdirectories whose name matches a glob pattern.

        Entries are yielded lazily in filesystem enumeration order.
        """
        entries = self.path.rglob(pattern) if recursive else self.path.glob(pattern)
        for entry in entries:
            if entry.is_dir():
                yield LocalDirectory(entry)

    def __repr__(self) -> str:
        return f"LocalDirectory({str(self.path)!r})"


class LocalFileSystem:
    """FileSystem backed by the local disk."""

    def directory_exists(self, path: Path) -> bool:
        return Path(path).is_dir()

    def get_directory(self, path: Path) -> LocalDirectory:
        return LocalDirectory(path)

    def file_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_lines(self, path: Path, encoding: str = "utf-8") -> list[str]:
        with open(path, encoding=encoding) as f:
            return f.read().splitlines()


def detect_platform_family(platform: str | None = None) -> PlatformFamily:
    """Map a ``sys.platform`` string to a PlatformFamily.

    Args:
        platform: Platform string (default: ``sys.platform``)
    """
    platform = platform if platform is not None else sys.platform
    if platform.startswith("linux"):
        return PlatformFamily.LINUX
    if platform == "darwin":
        return PlatformFamily.OSX
    if platform in ("win32", "cygwin"):
        return PlatformFamily.WINDOWS
    return PlatformFamily.OTHER


class ProcessEnvironment:
    """Environment of the running process."""

    @property
    def working_directory(self) -> Path:
        return Path.cwd()

    @property
    def platform_family(self) -> PlatformFamily:
        return detect_platform_family()

    def get_environment_variable(self, name: str) -> str | None:
        return os.environ.get(name)


@dataclass(frozen=True)
class StaticEnvironment:
    """Explicit environment, for hosts that sandbox their builds.

    Attributes:
        working_directory: Directory treated as the project root
        platform_family: Platform conventions to apply
        variables: Environment variables visible to the resolver
    """

    working_directory: Path
    platform_family: PlatformFamily = PlatformFamily.LINUX
    variables: Mapping[str, str] = field(default_factory=dict)

    def get_environment_variable(self, name: str) -> str | None:
        return self.variables.get(name)
