"""Action clients that run release actions with layered default options."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from helmoperator.actions import (
    Get,
    Install,
    Release,
    ReleaseNotFoundError,
    Rollback,
    Uninstall,
    UninstallResponse,
    Upgrade,
)

_log = logging.getLogger(__name__)

GetOption = Callable[[Get], Any]
InstallOption = Callable[[Install], Any]
UpgradeOption = Callable[[Upgrade], Any]
UninstallOption = Callable[[Uninstall], Any]
RollbackOption = Callable[[Rollback], Any]


class ActionBackend(ABC):
    """Carries out release actions against a release store and cluster.

    A failed install or upgrade that still recorded a release should raise
    an exception carrying that release in a ``release`` attribute.
    """

    @abstractmethod
    def run_get(self, get: Get, name: str) -> Release:
        """Return the release ``name``."""

    @abstractmethod
    def run_install(self, install: Install, chart: Any, values: dict) -> Release:
        """Install ``chart`` with ``values`` and return the new release."""

    @abstractmethod
    def run_upgrade(self, upgrade: Upgrade, name: str, chart: Any, values: dict) -> Release:
        """Upgrade release ``name`` and return the new revision."""

    @abstractmethod
    def run_uninstall(self, uninstall: Uninstall, name: str) -> UninstallResponse:
        """Uninstall release ``name``."""

    @abstractmethod
    def run_rollback(self, rollback: Rollback, name: str) -> None:
        """Roll release ``name`` back."""

    def log(self, message: str) -> None:
        """Record a debug message."""
        _log.debug(message)


def _apply(options: Iterable[Callable[[Any], Any]], target: Any) -> Any:
    for option in options:
        option(target)
    return target


@dataclass
class ActionClient:
    """Runs release actions, applying default options before per-call ones."""

    backend: ActionBackend
    default_get_options: list = field(default_factory=list)
    default_install_options: list = field(default_factory=list)
    default_upgrade_options: list = field(default_factory=list)
    default_uninstall_options: list = field(default_factory=list)
    install_failure_uninstall_options: list = field(default_factory=list)
    upgrade_failure_rollback_options: list = field(default_factory=list)

    def get(self, name: str, *args: GetOption) -> Release:
        """Return the release ``name``."""
        get = _apply([*self.default_get_options, *args], Get())
        return self.backend.run_get(get, name)

    def install(self, name: str, namespace: str, chart: Any, values: dict,
                *args: InstallOption) -> Release:
        """Install a release; a failed install that left a release is uninstalled."""
        install = _apply([*self.default_install_options, *args], Install())
        install.release_name = name
        install.namespace = namespace
        self.backend.log("Starting install")
        try:
            return self.backend.run_install(install, chart, values)
        except Exception as err:
            self.backend.log("Install failed")
            if getattr(err, "release", None) is not None:
                try:
                    self._uninstall(name, self.install_failure_uninstall_options)
                except ReleaseNotFoundError:
                    pass
                except Exception as uninstall_err:
                    raise RuntimeError(
                        f"uninstall failed: {uninstall_err}: original install error: {err}"
                    ) from err
            raise

    def upgrade(self, name: str, namespace: str, chart: Any, values: dict,
                *args: UpgradeOption) -> Release:
        """Upgrade a release; a failed upgrade that left a release is rolled back."""
        upgrade = _apply([*self.default_upgrade_options, *args], Upgrade())
        upgrade.namespace = namespace
        try:
            return self.backend.run_upgrade(upgrade, name, chart, values)
        except Exception as err:
            if getattr(err, "release", None) is not None:
                def force(rollback: Rollback) -> None:
                    rollback.force = True
                    rollback.max_history = upgrade.max_history

                try:
                    self._rollback(name, [force, *self.upgrade_failure_rollback_options])
                except Exception as rollback_err:
                    raise RuntimeError(
                        f"rollback failed: {rollback_err}: original upgrade error: {err}"
                    ) from err
            raise

    def uninstall(self, name: str, *args: UninstallOption) -> UninstallResponse:
        """Uninstall the release ``name``."""
        return self._uninstall(name, [*self.default_uninstall_options, *args])

    def _uninstall(self, name: str, options: Iterable[UninstallOption]) -> UninstallResponse:
        uninstall = _apply(options, Uninstall())
        return self.backend.run_uninstall(uninstall, name)

    def _rollback(self, name: str, options: Iterable[RollbackOption]) -> None:
        rollback = _apply(options, Rollback())
        self.backend.run_rollback(rollback, name)


@dataclass
class ActionClientGetter:
    """Builds action clients for objects, sharing configured default options."""

    backend_for: Callable[[Any], ActionBackend]
    default_get_options: list = field(default_factory=list)
    default_install_options: list = field(default_factory=list)
    default_upgrade_options: list = field(default_factory=list)
    default_uninstall_options: list = field(default_factory=list)
    install_failure_uninstall_options: list = field(default_factory=list)
    upgrade_failure_rollback_options: list = field(default_factory=list)

    def action_client_for(self, obj: Any) -> ActionClient:
        """Return an action client for ``obj``."""
        backend = self.backend_for(obj)
        return ActionClient(
            backend=backend,
            default_get_options=list(self.default_get_options),
            default_install_options=list(self.default_install_options),
            default_upgrade_options=list(self.default_upgrade_options),
            default_uninstall_options=list(self.default_uninstall_options),
            install_failure_uninstall_options=list(self.install_failure_uninstall_options),
            upgrade_failure_rollback_options=list(self.upgrade_failure_rollback_options),
        )


@dataclass(frozen=True)
class ActionClientGetterFunc:
    """An action client getter backed by a plain callable."""

    func: Callable[[Any], Any]

    def action_client_for(self, obj: Any) -> Any:
        return self.func(obj)


GetterOption = Callable[[ActionClientGetter], Any]


def append_get_options(*args: GetOption) -> GetterOption:
    """Getter option adding default get options."""
    return lambda getter: getter.default_get_options.extend(args)


def append_install_options(*args: InstallOption) -> GetterOption:
    """Getter option adding default install options."""
    return lambda getter: getter.default_install_options.extend(args)


def append_upgrade_options(*args: UpgradeOption) -> GetterOption:
    """Getter option adding default upgrade options."""
    return lambda getter: getter.default_upgrade_options.extend(args)


def append_uninstall_options(*args: UninstallOption) -> GetterOption:
    """Getter option adding default uninstall options."""
    return lambda getter: getter.default_uninstall_options.extend(args)


def append_install_failure_uninstall_options(*args: UninstallOption) -> GetterOption:
    """Getter option adding options for the uninstall after a failed install."""
    return lambda getter: getter.install_failure_uninstall_options.extend(args)


def append_upgrade_failure_rollback_options(*args: RollbackOption) -> GetterOption:
    """Getter option adding options for the rollback after a failed upgrade."""
    return lambda getter: getter.upgrade_failure_rollback_options.extend(args)


def new_action_client_getter(backend_for: Callable[[Any], ActionBackend],
                             *args: GetterOption) -> ActionClientGetter:
    """Build an action client getter and apply ``args`` to it in order."""
    getter = ActionClientGetter(backend_for)
    for option in args:
        option(getter)
    return getter