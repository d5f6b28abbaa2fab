"""Build version information and scaffold version deduction."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

UNKNOWN = "unknown"
MODULE_PATH = "helmoperator"

GIT_VERSION = UNKNOWN
GIT_COMMIT = UNKNOWN
SCAFFOLD_VERSION = UNKNOWN

_SEMVER = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass
class Module:
    """A dependency entry from build information."""

    path: str
    version: str = ""
    replace: Module | None = None


def get_most_recent_tag(module: Module) -> str:
    """Return the tag at, or preceding, the commit named by the module's version.

    Pseudo-versions have their patch number decremented to get back to the
    previous tag. Returns ``UNKNOWN`` when no tag can be deduced.
    """
    while module.replace is not None:
        module = module.replace

    segments = module.version.split("-")
    first = segments[0]
    if first.startswith("v"):
        first = first[1:]
    match = _SEMVER.match(first)
    if match is None:
        return UNKNOWN

    major, minor, patch = (int(match.group(i)) for i in (1, 2, 3))
    if len(segments) > 1 and patch > 0:
        patch -= 1
    return f"v{major}.{minor}.{patch}"


def get_scaffold_version(deps: Iterable[Module | None] | None) -> str:
    """Find this module among ``deps`` and return its most recent tag."""
    if deps is not None:
        for module in deps:
            if module is None:
                continue
            if module.path == MODULE_PATH:
                return get_most_recent_tag(module)
    return UNKNOWN