"""Exceptions for npm-resolver."""


class ResolverError(Exception):
    """Base exception for resolution errors."""

    pass


class UnsupportedPackageKindError(ResolverError):
    """Package kind is known but not serviced by the npm resolver."""

    pass


class UnknownPackageKindError(ResolverError):
    """Package kind is not a PackageKind value."""

    pass


class InvalidScopeError(ResolverError):
    """Installation scope is not an InstallScope value."""

    pass


class DirectoryNotFoundError(ResolverError):
    """Installation directory for a package does not exist."""

    def __init__(self, package, scope, path=None):
        self.package = package
        self.scope = scope
        self.path = path
        location = f" (looked in {path})" if path is not None else ""
        super().__init__(f"Could not find install path for '{package}' in {scope.value} scope{location}")


class ConfigFileError(ResolverError):
    """Error writing a settings file."""

    pass
