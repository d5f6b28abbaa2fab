import pytest

from helmoperator.actions import Install, Uninstall, Upgrade
from helmoperator.annotation import (
    InstallDescription,
    InstallDisableHooks,
    UninstallDescription,
    UninstallDisableHooks,
    UpgradeDescription,
    UpgradeDisableHooks,
    UpgradeForce,
    default_install_annotations,
    default_uninstall_annotations,
    default_upgrade_annotations,
    parse_bool,
)

CUSTOM_NAME = "custom.domain/custom-name"

FLAG_CASES = [
    ("true", False, True),
    ("false", True, False),
    ("invalid", True, False),
]


@pytest.mark.parametrize(
    "cls, expected",
    [
        (InstallDisableHooks, "helm.sdk.operatorframework.io/install-disable-hooks"),
        (InstallDescription, "helm.sdk.operatorframework.io/install-description"),
        (UpgradeDisableHooks, "helm.sdk.operatorframework.io/upgrade-disable-hooks"),
        (UpgradeForce, "helm.sdk.operatorframework.io/upgrade-force"),
        (UpgradeDescription, "helm.sdk.operatorframework.io/upgrade-description"),
        (UninstallDisableHooks, "helm.sdk.operatorframework.io/uninstall-disable-hooks"),
        (UninstallDescription, "helm.sdk.operatorframework.io/uninstall-description"),
    ],
)
def test_default_and_custom_names(cls, expected):
    assert cls().name() == expected
    assert cls(custom_name=CUSTOM_NAME).name() == CUSTOM_NAME


@pytest.mark.parametrize("value, initial, expected", FLAG_CASES)
def test_install_disable_hooks(value, initial, expected):
    target = Install(disable_hooks=initial)
    InstallDisableHooks().install_option(value)(target)
    assert target.disable_hooks is expected


@pytest.mark.parametrize("value, initial, expected", FLAG_CASES)
def test_upgrade_disable_hooks(value, initial, expected):
    target = Upgrade(disable_hooks=initial)
    UpgradeDisableHooks().upgrade_option(value)(target)
    assert target.disable_hooks is expected


@pytest.mark.parametrize("value, initial, expected", FLAG_CASES)
def test_uninstall_disable_hooks(value, initial, expected):
    target = Uninstall(disable_hooks=initial)
    UninstallDisableHooks().uninstall_option(value)(target)
    assert target.disable_hooks is expected


@pytest.mark.parametrize("value, initial, expected", FLAG_CASES)
def test_upgrade_force(value, initial, expected):
    target = Upgrade(force=initial)
    UpgradeForce().upgrade_option(value)(target)
    assert target.force is expected


def test_install_description():
    install = Install()
    InstallDescription().install_option("test description")(install)
    assert install.description == "test description"


def test_upgrade_description():
    upgrade = Upgrade()
    UpgradeDescription().upgrade_option("test description")(upgrade)
    assert upgrade.description == "test description"


def test_uninstall_description():
    uninstall = Uninstall()
    UninstallDescription().uninstall_option("test description")(uninstall)
    assert uninstall.description == "test description"


def test_parse_bool():
    assert parse_bool("1") is True
    assert parse_bool("T") is True
    assert parse_bool("F") is False
    with pytest.raises(ValueError):
        parse_bool("yes")


def test_default_annotation_lists():
    assert [a.name() for a in default_install_annotations()] == [
        "helm.sdk.operatorframework.io/install-description",
        "helm.sdk.operatorframework.io/install-disable-hooks",
    ]
    assert [type(a) for a in default_upgrade_annotations()] == [
        UpgradeDescription,
        UpgradeDisableHooks,
        UpgradeForce,
    ]
    assert [type(a) for a in default_uninstall_annotations()] == [
        UninstallDescription,
        UninstallDisableHooks,
    ]