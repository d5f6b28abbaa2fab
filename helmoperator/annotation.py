"""Custom-resource annotations that tune install, upgrade and uninstall actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from helmoperator.actions import Install, Uninstall, Upgrade

DEFAULT_DOMAIN = "helm.sdk.operatorframework.io"
DEFAULT_INSTALL_DISABLE_HOOKS_NAME = DEFAULT_DOMAIN + "/install-disable-hooks"
DEFAULT_UPGRADE_DISABLE_HOOKS_NAME = DEFAULT_DOMAIN + "/upgrade-disable-hooks"
DEFAULT_UNINSTALL_DISABLE_HOOKS_NAME = DEFAULT_DOMAIN + "/uninstall-disable-hooks"
DEFAULT_UPGRADE_FORCE_NAME = DEFAULT_DOMAIN + "/upgrade-force"
DEFAULT_INSTALL_DESCRIPTION_NAME = DEFAULT_DOMAIN + "/install-description"
DEFAULT_UPGRADE_DESCRIPTION_NAME = DEFAULT_DOMAIN + "/upgrade-description"
DEFAULT_UNINSTALL_DESCRIPTION_NAME = DEFAULT_DOMAIN + "/uninstall-description"

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

InstallOption = Callable[[Install], None]
UpgradeOption = Callable[[Upgrade], None]
UninstallOption = Callable[[Uninstall], None]


def parse_bool(value: str) -> bool:
    """Parse a boolean the way annotation values are written; raise ValueError otherwise."""
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"invalid boolean {value!r}")


def _flag(value: str) -> bool:
    try:
        return parse_bool(value)
    except ValueError:
        return False


@dataclass(frozen=True)
class InstallDisableHooks:
    """Disables install hooks when the annotation value is true."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_INSTALL_DISABLE_HOOKS_NAME

    def install_option(self, value: str) -> InstallOption:
        disable = _flag(value)

        def apply(install: Install) -> None:
            install.disable_hooks = disable

        return apply


@dataclass(frozen=True)
class UpgradeDisableHooks:
    """Disables upgrade hooks when the annotation value is true."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_UPGRADE_DISABLE_HOOKS_NAME

    def upgrade_option(self, value: str) -> UpgradeOption:
        disable = _flag(value)

        def apply(upgrade: Upgrade) -> None:
            upgrade.disable_hooks = disable

        return apply


@dataclass(frozen=True)
class UpgradeForce:
    """Forces resource updates on upgrade when the annotation value is true."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_UPGRADE_FORCE_NAME

    def upgrade_option(self, value: str) -> UpgradeOption:
        force = _flag(value)

        def apply(upgrade: Upgrade) -> None:
            upgrade.force = force

        return apply


@dataclass(frozen=True)
class UninstallDisableHooks:
    """Disables uninstall hooks when the annotation value is true."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_UNINSTALL_DISABLE_HOOKS_NAME

    def uninstall_option(self, value: str) -> UninstallOption:
        disable = _flag(value)

        def apply(uninstall: Uninstall) -> None:
            uninstall.disable_hooks = disable

        return apply


@dataclass(frozen=True)
class InstallDescription:
    """Sets the install description to the annotation value."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_INSTALL_DESCRIPTION_NAME

    def install_option(self, value: str) -> InstallOption:
        def apply(install: Install) -> None:
            install.description = value

        return apply


@dataclass(frozen=True)
class UpgradeDescription:
    """Sets the upgrade description to the annotation value."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_UPGRADE_DESCRIPTION_NAME

    def upgrade_option(self, value: str) -> UpgradeOption:
        def apply(upgrade: Upgrade) -> None:
            upgrade.description = value

        return apply


@dataclass(frozen=True)
class UninstallDescription:
    """Sets the uninstall description to the annotation value."""

    custom_name: str = ""

    def name(self) -> str:
        """The annotation key, the custom name if one is set."""
        return self.custom_name or DEFAULT_UNINSTALL_DESCRIPTION_NAME

    def uninstall_option(self, value: str) -> UninstallOption:
        def apply(uninstall: Uninstall) -> None:
            uninstall.description = value

        return apply


def default_install_annotations() -> list:
    """The install annotations honoured by default."""
    return [InstallDescription(), InstallDisableHooks()]


def default_upgrade_annotations() -> list:
    """The upgrade annotations honoured by default."""
    return [UpgradeDescription(), UpgradeDisableHooks(), UpgradeForce()]


def default_uninstall_annotations() -> list:
    """The uninstall annotations honoured by default."""
    return [UninstallDescription(), UninstallDisableHooks()]