"""Data models for npm-resolver."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class PackageKind(Enum):
    """Kind of package a host asks to resolve."""

    TOOL = "tool"
    ADDIN = "addin"


class InstallScope(Enum):
    """Installation scope enumeration.

    Determines which root directory convention is used to locate the
    files npm installed for a package.
    """

    GLOBAL = "global"
    WORKING_DIRECTORY = "workdir"
    TOOLS_DIRECTORY = "tools"


class PlatformFamily(Enum):
    """Operating system family of the host."""

    LINUX = "linux"
    OSX = "osx"
    WINDOWS = "windows"
    OTHER = "other"


@dataclass(frozen=True)
class PackageReference:
    """Identifier of an npm package.

    Attributes:
        name: Package name, either bare (``typescript``) or scoped (``@types/node``)
        version: Version or source specifier; identity only, never used for resolution
    """

    name: str
    version: str | None = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Package name must not be empty")

    @property
    def is_scoped(self) -> bool:
        return self.name.startswith("@") and "/" in self.name

    @property
    def scope(self) -> str | None:
        """Scope part of a scoped name (``@types``), or None."""
        if not self.is_scoped:
            return None
        return self.name.split("/", 1)[0]

    @property
    def bare_name(self) -> str:
        if not self.is_scoped:
            return self.name
        return self.name.split("/", 1)[1]

    def __str__(self) -> str:
        if self.version:
            return f"{self.name}@{self.version}"
        return self.name


@dataclass(frozen=True)
class FileHandle:
    """A single file below a resolved installation directory."""

    path: Path

    @property
    def exists(self) -> bool:
        return self.path.is_file()

    @property
    def is_readable(self) -> bool:
        return self.exists and os.access(self.path, os.R_OK)
