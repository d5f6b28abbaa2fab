import pytest

from helmoperator.kube import (
    GroupVersionKind,
    KubeObject,
    NoKindMatchError,
    RESTMapper,
    Scope,
)

GVK = GroupVersionKind("example.com", "v1", "ClusterScoped")


def test_group_kind_and_api_version():
    gvk = GroupVersionKind("apps", "v1", "Deployment")
    assert gvk.group_kind() == ("apps", "Deployment")
    assert gvk.api_version() == "apps/v1"
    assert GroupVersionKind("", "v1", "Pod").api_version() == "v1"


def test_scope_values():
    assert Scope.ROOT.value == "root"
    assert Scope("namespace") is Scope.NAMESPACE


def test_rest_mapping_round_trip():
    rm = RESTMapper()
    rm.add(GVK, Scope.ROOT)
    mapping = rm.rest_mapping(GVK.group_kind(), GVK.version)
    assert mapping.group_version_kind == GVK
    assert mapping.scope is Scope.ROOT
    assert rm.rest_mapping(GVK.group_kind()) == mapping


def test_missing_version_raises():
    rm = RESTMapper()
    rm.add(GVK, Scope.ROOT)
    with pytest.raises(NoKindMatchError) as info:
        rm.rest_mapping(GVK.group_kind(), "v2")
    assert "ClusterScoped" in str(info.value)
    assert info.value.searched_versions == ("v2",)


def test_missing_kind_raises_lookup_error():
    rm = RESTMapper()
    with pytest.raises(LookupError):
        rm.rest_mapping(("example.com", "Nothing"))


def test_kube_object_defaults_are_independent():
    a = KubeObject(GVK, name="a")
    b = KubeObject(GVK, name="b")
    a.finalizers.append("x")
    assert b.finalizers == []
    assert a.gvk == b.gvk