"""Per-platform npm conventions.

One table drives both the default global prefix and the location of the
per-user ``.npmrc``, so the two never disagree about a platform.
"""

from dataclasses import dataclass
from pathlib import Path

from .environment import Environment
from .models import PlatformFamily

NPMRC_FILENAME = ".npmrc"


@dataclass(frozen=True)
class PlatformPolicy:
    """npm conventions for one platform family.

    Attributes:
        binary_subdir: Directory under the global prefix holding executables,
            or None when npm puts them in the prefix itself
        home_variables: Environment variables naming the user's home, in order
        default_prefix: Global prefix used when nothing is configured; None
            means the working directory
    """

    binary_subdir: str | None
    home_variables: tuple[str, ...]
    default_prefix: Path | None

    def locate_user_config(self, environment: Environment) -> Path:
        """Return where npm keeps the per-user config file."""
        for name in self.home_variables:
            home = environment.get_environment_variable(name)
            if home and home.strip():
                return Path(home) / NPMRC_FILENAME
        return environment.working_directory / NPMRC_FILENAME

    def resolve_default_prefix(self, environment: Environment) -> Path:
        return self.default_prefix if self.default_prefix is not None else environment.working_directory


_POSIX = PlatformPolicy(binary_subdir="bin", home_variables=("HOME",), default_prefix=Path("/usr/local"))

PLATFORM_POLICIES: dict[PlatformFamily, PlatformPolicy] = {
    PlatformFamily.LINUX: _POSIX,
    PlatformFamily.OSX: _POSIX,
    PlatformFamily.WINDOWS: PlatformPolicy(
        binary_subdir=None,
        home_variables=("USERPROFILE", "HOMEPATH"),
        default_prefix=Path("C:\\Program Files\\nodejs"),
    ),
    PlatformFamily.OTHER: PlatformPolicy(binary_subdir="bin", home_variables=(), default_prefix=None),
}


def policy_for(family: PlatformFamily) -> PlatformPolicy:
    return PLATFORM_POLICIES.get(family, PLATFORM_POLICIES[PlatformFamily.OTHER])
