"""Build information metric and a small collector registry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from helmoperator import version

SUBSYSTEM = "helm_operator"


@dataclass(eq=False)
class Gauge:
    """A gauge metric holding a single value."""

    name: str
    help: str
    subsystem: str = ""
    namespace: str = ""
    const_labels: Mapping[str, str] = field(default_factory=dict)
    value: float = 0.0

    @property
    def fq_name(self) -> str:
        """The fully qualified metric name."""
        return "_".join(part for part in (self.namespace, self.subsystem, self.name) if part)

    def set(self, value: float) -> None:
        """Set the gauge to ``value``."""
        self.value = float(value)


class AlreadyRegisteredError(ValueError):
    """A collector with the same identity is already registered."""

    def __init__(self, existing: Gauge, new: Gauge):
        self.existing = existing
        self.new = new
        super().__init__(f"duplicate metrics collector registration attempted: {new.fq_name}")


class Registry:
    """Holds registered collectors."""

    def __init__(self) -> None:
        self._collectors: list[Gauge] = []

    def register(self, collector: Gauge) -> None:
        """Register ``collector``; raise ``AlreadyRegisteredError`` on duplicates."""
        key = (collector.fq_name, frozenset(collector.const_labels.items()))
        for existing in self._collectors:
            if existing is collector or (
                existing.fq_name,
                frozenset(existing.const_labels.items()),
            ) == key:
                raise AlreadyRegisteredError(existing, collector)
        self._collectors.append(collector)

    def collectors(self) -> tuple[Gauge, ...]:
        """Return the registered collectors in registration order."""
        return tuple(self._collectors)


BUILD_INFO = Gauge(
    subsystem=SUBSYSTEM,
    name="build_info",
    help="Build information for the helm-operator binary",
    const_labels={"commit": version.GIT_COMMIT, "version": version.GIT_VERSION},
)


def register_build_info(registry: Registry) -> None:
    """Set the build info gauge and register it with ``registry``."""
    BUILD_INFO.set(1)
    registry.register(BUILD_INFO)