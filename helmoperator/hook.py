"""Hooks run before and after a release is reconciled."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class PreHook(ABC):
    """Runs before a release is installed or upgraded."""

    @abstractmethod
    def execute(self, obj: Any, values: Any, log: Any) -> None:
        """Run the hook; raise to signal failure."""


class PostHook(ABC):
    """Runs after a release has been reconciled."""

    @abstractmethod
    def execute(self, obj: Any, release: Any, log: Any) -> None:
        """Run the hook; raise to signal failure."""


@dataclass(frozen=True)
class PreHookFunc(PreHook):
    """A pre-hook backed by a plain callable."""

    func: Callable[[Any, Any, Any], Any]

    def execute(self, obj, values, log) -> None:
        self.func(obj, values, log)


@dataclass(frozen=True)
class PostHookFunc(PostHook):
    """A post-hook backed by a plain callable."""

    func: Callable[[Any, Any, Any], Any]

    def execute(self, obj, release, log) -> None:
        self.func(obj, release, log)