"""Utility functions for npm-resolver."""

import re
from collections.abc import Callable
from collections.abc import Iterable
from typing import Any

_ENV_REFERENCE = re.compile(r"(\\*)\$\{([^${}]+)\}")


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Merge settings dictionaries, overlay values winning.

    Nested dictionaries are merged key by key; any other overlay value
    replaces the base value outright. Neither argument is modified.

    Examples:
        >>> deep_merge({"paths": {"tools": "tools", "addins": "addins"}}, {"paths": {"tools": "cache"}})
        {'paths': {'tools': 'cache', 'addins': 'addins'}}

        >>> deep_merge({"paths": {"tools": "tools"}}, {"paths": None})
        {'paths': None}
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def expand_env_vars(value: str, lookup: Callable[[str], str | None]) -> str:
    """Expand ``${NAME}`` references the way npm does in .npmrc values.

    Unknown variables expand to an empty string. A reference preceded by
    an odd number of backslashes is kept literally, minus one backslash.

    Examples:
        >>> expand_env_vars("${HOME}/.npm-global", {"HOME": "/home/dev"}.get)
        '/home/dev/.npm-global'

        >>> expand_env_vars("\\\\${HOME}", {"HOME": "/home/dev"}.get)
        '${HOME}'
    """

    def _replace(match: re.Match) -> str:
        escapes, name = match.group(1), match.group(2)
        if len(escapes) % 2:
            return escapes[:-1] + "${" + name + "}"
        return escapes + (lookup(name) or "")

    return _ENV_REFERENCE.sub(_replace, value)


def find_npmrc_prefix(lines: Iterable[str]) -> str | None:
    """Return the value of the first ``prefix=`` line of an npmrc file.

    The value is everything after the first ``=``, stripped. Comment
    lines and lines without a value are skipped.

    Examples:
        >>> find_npmrc_prefix(["; global settings", "prefix=/opt/npm", "prefix=/other"])
        '/opt/npm'

        >>> find_npmrc_prefix(["registry=https://registry.npmjs.org/"]) is None
        True
    """
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped[0] in "#;":
            continue
        key, sep, value = stripped.partition("=")
        if not sep or key.strip() != "prefix":
            continue
        value = value.strip()
        if value:
            return value
    return None
