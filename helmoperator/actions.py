"""Settings of the release actions and the results they produce."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any


class ReleaseNotFoundError(LookupError):
    """The named release is not recorded in the release store."""

    def __init__(self, name: str = ""):
        self.name = name
        super().__init__("release: not found")


@dataclass
class Get:
    """Settings for fetching a release; version 0 means the latest."""

    version: int = 0


@dataclass
class Install:
    """Settings for installing a release."""

    release_name: str = ""
    namespace: str = ""
    description: str = ""
    disable_hooks: bool = False
    wait: bool = False
    timeout: timedelta = timedelta(0)
    dry_run: bool = False
    replace: bool = False
    client_only: bool = False
    post_renderer: Any = None


@dataclass
class Upgrade:
    """Settings for upgrading a release."""

    namespace: str = ""
    description: str = ""
    disable_hooks: bool = False
    force: bool = False
    wait: bool = False
    timeout: timedelta = timedelta(0)
    max_history: int = 0
    post_renderer: Any = None


@dataclass
class Uninstall:
    """Settings for uninstalling a release."""

    description: str = ""
    disable_hooks: bool = False
    keep_history: bool = False
    timeout: timedelta = timedelta(0)


@dataclass
class Rollback:
    """Settings for rolling a release back to an earlier revision."""

    version: int = 0
    force: bool = False
    wait: bool = False
    timeout: timedelta = timedelta(0)
    max_history: int = 0


@dataclass
class Release:
    """A recorded revision of a release."""

    name: str
    namespace: str = ""
    version: int = 0
    manifest: str = ""
    description: str = ""


@dataclass
class UninstallResponse:
    """What an uninstall returns: the removed release and any extra info."""

    release: Release | None = None
    info: str = ""