"""Command-line flags of the operator and their mapping onto manager options."""

from __future__ import annotations

import argparse
import logging
import os
import re
from dataclasses import dataclass, field, replace
from datetime import timedelta

_log = logging.getLogger(__name__)

LEADER_ELECTION_RESOURCE_LOCK = "configmapsleases"

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean {text!r}")


def _parse_duration(text: str) -> timedelta:
    body = text
    sign = 1
    if body.startswith(("+", "-")):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {text!r}")
    seconds = 0.0
    pos = 0
    while pos < len(body):
        match = _DURATION_PART.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        seconds += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()
    return sign * timedelta(seconds=seconds)


_parse_bool.__name__ = "bool"
_parse_duration.__name__ = "duration"


@dataclass
class ManagerOptions:
    """The subset of controller manager options that flags can configure."""

    metrics_bind_address: str = ""
    health_probe_bind_address: str = ""
    leader_election: bool = False
    leader_election_id: str = ""
    leader_election_namespace: str = ""
    leader_election_resource_lock: str = ""


class _FlagAction(argparse.Action):
    def __init__(self, option_strings, dest, *, target, flag_name, deprecated=None, **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self._target = target
        self._flag_name = flag_name
        self._deprecated = deprecated

    def __call__(self, parser, namespace, values, option_string=None):
        if self._deprecated:
            _log.warning("Flag --%s has been deprecated, %s", self._flag_name, self._deprecated)
        setattr(self._target, self.dest, values)
        self._target._changed.add(self._flag_name)


@dataclass
class Flags:
    """Options used by a helm operator, filled from the command line."""

    reconcile_period: timedelta = timedelta(minutes=1)
    watches_file: str = "./watches.yaml"
    metrics_bind_address: str = ":8080"
    leader_election: bool = False
    leader_election_id: str = ""
    leader_election_namespace: str = ""
    max_concurrent_reconciles: int = field(default_factory=lambda: os.cpu_count() or 1)
    probe_addr: str = ":8081"
    manager_config_path: str = ""

    _parser: argparse.ArgumentParser | None = field(
        default=None, init=False, repr=False, compare=False
    )
    _changed: set = field(default_factory=set, init=False, repr=False, compare=False)

    def add_to(self, parser: argparse.ArgumentParser) -> None:
        """Register the operator flags on ``parser`` and reset fields to defaults."""
        self._parser = parser
        self._changed = set()

        self.watches_file = "./watches.yaml"
        self.reconcile_period = timedelta(minutes=1)
        self.max_concurrent_reconciles = os.cpu_count() or 1
        self.manager_config_path = ""
        self.metrics_bind_address = ":8080"
        self.probe_addr = ":8081"
        self.leader_election = False
        self.leader_election_id = ""
        self.leader_election_namespace = ""

        def add(name, dest, help_text, *, kind=str, deprecated=None):
            extra = {"nargs": "?", "const": True} if kind is _parse_bool else {}
            parser.add_argument(
                f"--{name}",
                dest=dest,
                action=_FlagAction,
                target=self,
                flag_name=name,
                deprecated=deprecated,
                type=kind,
                default=argparse.SUPPRESS,
                help=help_text,
                **extra,
            )

        leader_help = (
            "Enable leader election for controller manager. Enabling this will"
            " ensure there is only one active controller manager."
        )
        add("watches-file", "watches_file", "Path to the watches file to use")
        add("reconcile-period", "reconcile_period",
            "Default reconcile period for controllers", kind=_parse_duration)
        add("max-concurrent-reconciles", "max_concurrent_reconciles",
            "Maximum number of concurrent reconciles for controllers.", kind=int)
        add("config", "manager_config_path",
            "The controller will load its initial configuration from this file. "
            "Omit this flag to use the default configuration values. "
            "Command-line flags override configuration from this file.")
        add("metrics-addr", "metrics_bind_address",
            "The address the metric endpoint binds to",
            deprecated="use --metrics-bind-address instead")
        add("metrics-bind-address", "metrics_bind_address",
            "The address the metric endpoint binds to")
        add("health-probe-bind-address", "probe_addr",
            "The address the probe endpoint binds to.")
        add("enable-leader-election", "leader_election", leader_help,
            kind=_parse_bool, deprecated="use --leader-elect instead.")
        add("leader-elect", "leader_election", leader_help, kind=_parse_bool)
        add("leader-election-id", "leader_election_id",
            "Name of the configmap that is used for holding the leader lock.")
        add("leader-election-namespace", "leader_election_namespace",
            "Namespace in which to create the leader election configmap for"
            " holding the leader lock (required if running locally with leader"
            " election enabled).")

    def parse(self, args) -> Flags:
        """Parse ``args`` with the parser the flags were added to."""
        if self._parser is None:
            raise RuntimeError("flags have not been added to a parser")
        self._parser.parse_args(list(args))
        return self

    def changed(self, name: str) -> bool:
        """Return whether the flag ``name`` was set on the command line."""
        if self._parser is None:
            return False
        return name in self._changed

    def to_manager_options(self, options: ManagerOptions) -> ManagerOptions:
        """Return a copy of ``options`` completed from the flags.

        Non-empty option values win over flag defaults; flags set explicitly
        win over option values.
        """
        changed = self.changed
        result = replace(options)
        if changed("metrics-bind-address") or changed("metrics-addr") or not result.metrics_bind_address:
            result.metrics_bind_address = self.metrics_bind_address
        if changed("health-probe-bind-address") or not result.health_probe_bind_address:
            result.health_probe_bind_address = self.probe_addr
        if changed("leader-elect") or changed("enable-leader-election") or not result.leader_election:
            result.leader_election = self.leader_election
        if changed("leader-election-id") or not result.leader_election_id:
            result.leader_election_id = self.leader_election_id
        if changed("leader-election-namespace") or not result.leader_election_namespace:
            result.leader_election_namespace = self.leader_election_namespace
        if not result.leader_election_resource_lock:
            result.leader_election_resource_lock = LEADER_ELECTION_RESOURCE_LOCK
        return result