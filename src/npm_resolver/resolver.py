"""Resolution of the files npm installed for a package."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from .config import ToolPathConfig
from .environment import Environment
from .environment import FileSystem
from .environment import LocalFileSystem
from .environment import ProcessEnvironment
from .environment import ToolPathProvider
from .exceptions import DirectoryNotFoundError
from .exceptions import InvalidScopeError
from .exceptions import UnknownPackageKindError
from .exceptions import UnsupportedPackageKindError
from .models import FileHandle
from .models import InstallScope
from .models import PackageKind
from .models import PackageReference
from .platforms import PlatformPolicy
from .platforms import policy_for
from .utils import expand_env_vars
from .utils import find_npmrc_prefix

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules"
PREFIX_VARIABLES = ("npm_config_prefix", "NPM_CONFIG_PREFIX")
USERCONFIG_VARIABLES = ("npm_config_userconfig", "NPM_CONFIG_USERCONFIG")


class InstallationLocationResolver:
    """Locates the files npm installed for a package.

    Three installation scopes are understood:
    1. Global: the ``bin`` directory under npm's global prefix
    2. Working directory: ``node_modules`` of the current project
    3. Tools directory: ``node_modules`` under the host's tool cache

    The location is recomputed on every call; nothing is cached.

    Args:
        file_system: Filesystem collaborator (default: local disk)
        environment: Environment collaborator (default: running process)
        configuration: Tool-cache convention (default: ToolPathConfig())
    """

    def __init__(
        self,
        file_system: FileSystem | None = None,
        environment: Environment | None = None,
        configuration: ToolPathProvider | None = None,
    ):
        self.file_system = file_system or LocalFileSystem()
        self.environment = environment or ProcessEnvironment()
        self.configuration = configuration or ToolPathConfig()

    def resolve(self, package: PackageReference, kind: PackageKind, scope: InstallScope) -> list[FileHandle]:
        """Return the files installed for a package.

        Args:
            package: Package to look up
            kind: Package kind; only tools are supported
            scope: Where the package was installed

        Returns:
            Every file under the installation directory, recursively. On
            Windows the global prefix doubles as the shim directory and also
            holds node_modules, so only its top-level files are returned.

        Raises:
            UnsupportedPackageKindError: For addin packages
            UnknownPackageKindError: If kind is not a PackageKind
            InvalidScopeError: If scope is not an InstallScope
            DirectoryNotFoundError: If the installation directory does not exist
        """
        if kind is PackageKind.ADDIN:
            raise UnsupportedPackageKindError("npm resolver does not support addins")
        if kind is not PackageKind.TOOL:
            raise UnknownPackageKindError(f"Unknown package kind: {kind!r}")

        directory = self.resolve_directory(package, scope)
        recursive = scope is not InstallScope.GLOBAL or self._policy().binary_subdir is not None
        return self.file_system.get_directory(directory).list_files(recursive=recursive)

    def resolve_directory(self, package: PackageReference, scope: InstallScope) -> Path:
        """Return the existing installation directory for a package.

        Raises:
            InvalidScopeError: If scope is not an InstallScope
            DirectoryNotFoundError: If the directory cannot be found
        """
        # Global installs only expose their binaries
        if scope is InstallScope.GLOBAL:
            path = self._global_binaries_path()
            logger.debug(f"Using global npm binaries folder: {path}")
            logger.debug("Global installs may succeed without placing binaries")
        elif scope is InstallScope.WORKING_DIRECTORY:
            path = self.find_package_directory(self.get_modules_root(scope), package)
            logger.debug(f"Using local install path: {path}")
        elif scope is InstallScope.TOOLS_DIRECTORY:
            path = self.find_package_directory(self.get_modules_root(scope), package)
            logger.debug(f"Using tools install path: {path}")
        else:
            raise InvalidScopeError(f"Not a known installation scope: {scope!r}")

        # Nothing is returned unless the directory really exists
        if path is None or not self.file_system.directory_exists(path):
            raise DirectoryNotFoundError(package, scope, path)
        return path

    def get_modules_root(self, scope: InstallScope) -> Path:
        """Return the ``node_modules`` directory for a local scope.

        The tool cache is created when it does not exist yet.

        Raises:
            InvalidScopeError: For GLOBAL or unknown scopes
        """
        if scope is InstallScope.WORKING_DIRECTORY:
            return self.environment.working_directory / NODE_MODULES
        if scope is InstallScope.TOOLS_DIRECTORY:
            tools = self.file_system.get_directory(
                self.configuration.get_tool_path(self.environment.working_directory, self.environment)
            )
            if not tools.exists:
                tools.create()
            return tools.path / NODE_MODULES
        raise InvalidScopeError(f"Scope has no node_modules root: {scope!r}")

    def find_package_directory(self, modules_root: Path, package: PackageReference) -> Path | None:
        """Find a package inside a ``node_modules`` directory.

        Looks for ``<modules_root>/<name>`` first. For bare names it then
        searches every ``@scope`` directory, in enumeration order, for a
        child of the same name.

        Returns:
            Package directory, or None if there is no match
        """
        # Direct match covers bare names and full @scope/name references
        direct = _contained(modules_root, package.name)
        if direct is not None and self.file_system.directory_exists(direct):
            return direct

        if package.is_scoped:
            return None

        # Bare name: first @scope directory holding it, in enumeration order
        match = next(
            (candidate for candidate in self._scoped_candidates(modules_root, package.name)
             if self.file_system.directory_exists(candidate)),
            None,
        )
        if match is not None:
            logger.debug(f"Found '{package.name}' in scope directory {match.parent.name}")
        return match

    def get_global_prefix(self) -> Path:
        """Return npm's global prefix.

        Tried in order, first hit wins:
        1. ``npm_config_prefix`` environment variable
        2. ``prefix=`` line of the user's .npmrc
        3. Platform default

        Never raises.
        """
        policy = self._policy()

        # Explicit environment override (highest priority)
        prefix = self._try_environment_prefix()

        # Per-user npm config file
        if prefix is None:
            prefix = self._try_npmrc_prefix(policy)

        # Platform default (always produces a path)
        if prefix is None:
            prefix = self._default_prefix(policy)
            logger.debug(f"Using default global npm prefix: {prefix}")
        return prefix

    def _global_binaries_path(self) -> Path:
        policy = self._policy()
        prefix = self.get_global_prefix()
        logger.debug(f"Found global npm path at: {prefix}")
        if policy.binary_subdir is None:
            return prefix
        return prefix / policy.binary_subdir

    def _scoped_candidates(self, modules_root: Path, name: str) -> Iterator[Path]:
        root = self.file_system.get_directory(modules_root)
        if not root.exists:
            return
        for scope_directory in root.list_subdirectories("@*", recursive=False):
            candidate = _contained(scope_directory.path, name)
            if candidate is not None:
                yield candidate

    def _try_environment_prefix(self) -> Path | None:
        try:
            for name in PREFIX_VARIABLES:
                value = self.environment.get_environment_variable(name)
                if value and value.strip():
                    logger.debug(f"Global npm prefix from {name}: {value}")
                    return Path(value)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read npm prefix from the environment: {e}")
        return None

    def _try_npmrc_prefix(self, policy: PlatformPolicy) -> Path | None:
        npmrc = None
        try:
            npmrc = self._npmrc_path(policy)
            if not self.file_system.file_exists(npmrc):
                return None
            value = find_npmrc_prefix(self.file_system.read_lines(npmrc, encoding="utf-8"))
            if value is not None:
                value = expand_env_vars(value, self.environment.get_environment_variable)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read npm config {npmrc or '.npmrc'}: {e}")
            return None

        if value is None or not value.strip():
            return None
        logger.debug(f"Global npm prefix from {npmrc}: {value}")
        return Path(value)

    def _npmrc_path(self, policy: PlatformPolicy) -> Path:
        # An explicit userconfig location beats the platform convention
        for name in USERCONFIG_VARIABLES:
            value = self.environment.get_environment_variable(name)
            if value and value.strip():
                return Path(value)
        return policy.locate_user_config(self.environment)

    def _default_prefix(self, policy: PlatformPolicy) -> Path:
        try:
            return policy.resolve_default_prefix(self.environment)
        except OSError as e:
            # Working directory gone; fall back to a relative prefix
            logger.warning(f"Could not determine default npm prefix: {e}")
            return Path(os.curdir)

    def _policy(self) -> PlatformPolicy:
        return policy_for(self.environment.platform_family)


def _contained(root: Path, name: str) -> Path | None:
    """Join name onto root, or None if the result would leave root."""
    candidate = Path(os.path.normpath(root / name))
    if candidate == Path(os.path.normpath(root)) or not candidate.is_relative_to(os.path.normpath(root)):
        return None
    return candidate
