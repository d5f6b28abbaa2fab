from dataclasses import replace

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


def test_release_not_found_is_lookup_error():
    err = ReleaseNotFoundError("demo")
    assert isinstance(err, LookupError)
    assert err.name == "demo"
    assert str(err) == "release: not found"


def test_install_option_callable_mutates_settings():
    install = Install()

    def opt(i):
        i.description = "Test Description"

    opt(install)
    assert install.description == "Test Description"
    assert Install().description == ""


def test_instances_do_not_share_state():
    first, second = Upgrade(), Upgrade()
    first.force = True
    first.max_history = 7
    assert second.force is False
    assert second.max_history == 0


def test_rollback_copies_upgrade_history_limit():
    upgrade = Upgrade(max_history=12)
    rollback = Rollback(force=True, max_history=upgrade.max_history)
    assert rollback.max_history == 12
    assert rollback.force is True


def test_release_replace_keeps_other_fields():
    rel = Release(name="app", namespace="ns", version=1, manifest="kind: X", description="d")
    later = replace(rel, version=rel.version + 2)
    assert later.version == 3
    assert (later.name, later.namespace, later.manifest) == ("app", "ns", "kind: X")
    assert rel.version == 1


def test_uninstall_response_holds_release():
    rel = Release(name="app")
    resp = UninstallResponse(release=rel, info="removed")
    assert resp.release == Release(name="app")
    assert resp.info == "removed"


def test_get_and_uninstall_settings_compare_by_value():
    assert Get(version=3) == Get(version=3)
    assert Uninstall(description="x") != Uninstall(description="y")