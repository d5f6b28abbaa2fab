"""Minimal Kubernetes object and REST mapping model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class GroupVersionKind:
    """Identifies a kind of object in a versioned API group."""

    group: str
    version: str
    kind: str

    def group_kind(self) -> tuple[str, str]:
        """Return the ``(group, kind)`` pair."""
        return (self.group, self.kind)

    def api_version(self) -> str:
        """Return the ``apiVersion`` string, ``group/version`` or ``version``."""
        return f"{self.group}/{self.version}" if self.group else self.version


class Scope(Enum):
    """The scope of a resource."""

    ROOT = "root"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class RESTMapping:
    """How a kind is served by the API server."""

    group_version_kind: GroupVersionKind
    scope: Scope


class NoKindMatchError(LookupError):
    """No REST mapping is known for a kind."""

    def __init__(self, group_kind: tuple[str, str], searched_versions=()):
        self.group_kind = group_kind
        self.searched_versions = tuple(searched_versions)
        group, kind = group_kind
        versions = sorted(set(self.searched_versions))
        if not versions:
            message = f'no matches for kind "{kind}" in group "{group}"'
        elif len(versions) == 1:
            gv = f"{group}/{versions[0]}" if group else versions[0]
            message = f'no matches for kind "{kind}" in version "{gv}"'
        else:
            message = f'no matches for kind "{kind}" in versions {versions}'
        super().__init__(message)


class RESTMapper:
    """Maps kinds to their REST mappings."""

    def __init__(self) -> None:
        self._mappings: dict[tuple[str, str], dict[str, RESTMapping]] = {}

    def add(self, gvk: GroupVersionKind, scope: Scope) -> None:
        """Register ``gvk`` with the given scope."""
        self._mappings.setdefault(gvk.group_kind(), {})[gvk.version] = RESTMapping(gvk, scope)

    def rest_mapping(self, group_kind: tuple[str, str], version: str = "") -> RESTMapping:
        """Return the mapping for ``group_kind`` at ``version`` (any version if empty)."""
        versions = self._mappings.get(tuple(group_kind), {})
        if version:
            try:
                return versions[version]
            except KeyError:
                raise NoKindMatchError(tuple(group_kind), (version,)) from None
        if versions:
            return next(iter(versions.values()))
        raise NoKindMatchError(tuple(group_kind))


@dataclass
class KubeObject:
    """A Kubernetes object reduced to the metadata the operator works with."""

    gvk: GroupVersionKind
    name: str = ""
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    owner_references: list[dict] = field(default_factory=list)