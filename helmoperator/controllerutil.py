"""Helpers for finalizers, deletion waits and owner reference support."""

from __future__ import annotations

import threading
from typing import Any, Protocol

from helmoperator.kube import KubeObject, RESTMapper, Scope


class WaitTimeoutError(TimeoutError):
    """Waiting for a condition was cancelled before it held."""

    def __init__(self, message: str = "timed out waiting for the condition"):
        super().__init__(message)


class _Reader(Protocol):
    def get(self, namespace: str, name: str) -> Any: ...


def add_finalizer(obj: KubeObject, finalizer: str) -> bool:
    """Add ``finalizer`` to ``obj`` if absent; return whether it was added."""
    if finalizer in obj.finalizers:
        return False
    obj.finalizers.append(finalizer)
    return True


def remove_finalizer(obj: KubeObject, finalizer: str) -> bool:
    """Remove every occurrence of ``finalizer``; return whether any was removed."""
    kept = [f for f in obj.finalizers if f != finalizer]
    removed = len(kept) != len(obj.finalizers)
    obj.finalizers = kept
    return removed


def contains_finalizer(obj: KubeObject, finalizer: str) -> bool:
    """Return whether ``obj`` carries ``finalizer``."""
    return finalizer in obj.finalizers


def wait_for_deletion(
    reader: _Reader,
    obj: KubeObject,
    cancel: threading.Event | None = None,
    interval: float = 0.01,
) -> None:
    """Poll ``reader`` until ``obj`` is gone.

    A lookup raising ``LookupError`` means the object is deleted. Raises
    ``WaitTimeoutError`` once ``cancel`` is set; other errors propagate.
    """
    stop = cancel if cancel is not None else threading.Event()
    while True:
        try:
            reader.get(obj.namespace, obj.name)
        except LookupError:
            return
        if stop.wait(interval):
            raise WaitTimeoutError()


def supports_owner_reference(
    rest_mapper: RESTMapper, owner: KubeObject, dependent: KubeObject
) -> bool:
    """Return whether ``owner`` may be set as an owner reference on ``dependent``."""
    owner_mapping = rest_mapper.rest_mapping(owner.gvk.group_kind(), owner.gvk.version)
    dep_mapping = rest_mapper.rest_mapping(dependent.gvk.group_kind(), dependent.gvk.version)

    if owner_mapping.scope is Scope.ROOT:
        return True
    if dep_mapping.scope is Scope.ROOT:
        return False
    return owner.namespace == dependent.namespace