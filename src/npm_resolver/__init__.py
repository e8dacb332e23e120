"""npm-resolver: locate the files npm installed for a package.

A build host installs npm packages and then needs the executables and
assets that came with them. This library computes where npm put a package
for one of three installation scopes:
- Global (npm's global prefix, e.g. /usr/local/bin)
- Working directory (./node_modules)
- Tools directory (node_modules under the host's tool cache)

Scoped packages (``@scope/name``) are found whether the caller passes the
full scoped name or only the bare name.

Public API:
    InstallationLocationResolver: Main class for resolution
    PackageReference: Identifier of the package to resolve
    PackageKind: Enum for TOOL/ADDIN packages
    InstallScope: Enum for GLOBAL/WORKING_DIRECTORY/TOOLS_DIRECTORY scopes
    ToolPathConfig, ConfigPaths: Tool-cache location settings
    LocalFileSystem, ProcessEnvironment, StaticEnvironment: Collaborators
    ResolverError and subclasses: Exception types

Example:
    ```python
    from npm_resolver import InstallationLocationResolver
    from npm_resolver import InstallScope
    from npm_resolver import PackageKind
    from npm_resolver import PackageReference

    resolver = InstallationLocationResolver()
    files = resolver.resolve(
        PackageReference("typescript", "5.4.5"),
        PackageKind.TOOL,
        InstallScope.WORKING_DIRECTORY,
    )
    tsc = next(f.path for f in files if f.path.name == "tsc")
    ```
"""

from .config import ConfigPaths
from .config import ToolPathConfig
from .environment import DirectoryHandle
from .environment import Environment
from .environment import FileSystem
from .environment import LocalDirectory
from .environment import LocalFileSystem
from .environment import ProcessEnvironment
from .environment import StaticEnvironment
from .environment import ToolPathProvider
from .exceptions import ConfigFileError
from .exceptions import DirectoryNotFoundError
from .exceptions import InvalidScopeError
from .exceptions import ResolverError
from .exceptions import UnknownPackageKindError
from .exceptions import UnsupportedPackageKindError
from .models import FileHandle
from .models import InstallScope
from .models import PackageKind
from .models import PackageReference
from .models import PlatformFamily
from .resolver import InstallationLocationResolver

__version__ = "0.1.0"

__all__ = [
    "InstallationLocationResolver",
    "PackageReference",
    "PackageKind",
    "InstallScope",
    "PlatformFamily",
    "FileHandle",
    "ConfigPaths",
    "ToolPathConfig",
    "DirectoryHandle",
    "Environment",
    "FileSystem",
    "ToolPathProvider",
    "LocalDirectory",
    "LocalFileSystem",
    "ProcessEnvironment",
    "StaticEnvironment",
    "ResolverError",
    "UnsupportedPackageKindError",
    "UnknownPackageKindError",
    "InvalidScopeError",
    "DirectoryNotFoundError",
    "ConfigFileError",
]
