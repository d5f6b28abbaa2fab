"""REST client getters bound to a fixed configuration and namespace."""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlparse


class NamespaceClientConfig:
    """A minimal kube config loader that only knows its namespace."""

    __slots__ = ("_namespace", "_client_config", "_config_access")

    def __init__(self, namespace: str = ""):
        self._namespace = namespace
        # This loader never carries a client configuration or config access.
        self._client_config: Any = None
        self._config_access: Any = None

    def __repr__(self) -> str:
        return f"NamespaceClientConfig({self._namespace!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamespaceClientConfig):
            return NotImplemented
        return self._namespace == other._namespace

    def __hash__(self) -> int:
        return hash(self._namespace)

    def raw_config(self) -> dict:
        """An empty raw configuration."""
        return {}

    def client_config(self) -> Any:
        """The client configuration carried by this loader, which is none."""
        return self._client_config

    def namespace(self) -> tuple[str, bool]:
        """The namespace, and whether it was overridden (never)."""
        return self._namespace, False

    def config_access(self) -> Any:
        """The config access carried by this loader, which is none."""
        return self._config_access


def _server_url(config: Any) -> str:
    host = config.get("host", "") if isinstance(config, Mapping) else getattr(config, "host", "")
    host = host or ""
    parsed = urlparse(host)
    if not parsed.scheme or not parsed.netloc:
        parsed = urlparse("https://" + host)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"host must be a URL or a host:port pair: {host!r}")
    return parsed.geturl()


class RESTClientGetter:
    """Hands out the REST config, a cached discovery client and the REST mapper."""

    def __init__(
        self,
        config: Any,
        rest_mapper: Any,
        discovery_factory: Callable[[Any], Any] | None = None,
    ):
        self._config = config
        self._rest_mapper = rest_mapper
        self._discovery_factory = discovery_factory or _server_url
        self._lock = threading.Lock()
        self._discovery_ready = False
        self._discovery_client: Any = None
        self._discovery_error: Exception | None = None

    def to_rest_config(self) -> Any:
        """A copy of the REST configuration."""
        return copy.deepcopy(self._config)

    def to_discovery_client(self) -> Any:
        """The discovery client, built once from the configuration.

        Without a factory the client is the validated server URL.
        """
        with self._lock:
            if not self._discovery_ready:
                self._discovery_ready = True
                try:
                    self._discovery_client = self._discovery_factory(self._config)
                except Exception as exc:
                    self._discovery_error = exc
        if self._discovery_error is not None:
            raise self._discovery_error
        return self._discovery_client

    def to_rest_mapper(self) -> Any:
        """The configured REST mapper."""
        return self._rest_mapper

    def for_namespace(self, namespace: str) -> NamespacedRESTClientGetter:
        """A getter sharing this one's state, bound to ``namespace``."""
        return NamespacedRESTClientGetter(self, NamespaceClientConfig(namespace))


class NamespacedRESTClientGetter:
    """A REST client getter whose kube config loader reports a namespace."""

    def __init__(self, getter: RESTClientGetter, namespace_config: NamespaceClientConfig):
        self.rest_client_getter = getter
        self.namespace_config = namespace_config

    def to_rest_config(self) -> Any:
        return self.rest_client_getter.to_rest_config()

    def to_discovery_client(self) -> Any:
        return self.rest_client_getter.to_discovery_client()

    def to_rest_mapper(self) -> Any:
        return self.rest_client_getter.to_rest_mapper()

    def for_namespace(self, namespace: str) -> NamespacedRESTClientGetter:
        return self.rest_client_getter.for_namespace(namespace)

    def to_raw_kube_config_loader(self) -> NamespaceClientConfig:
        """The loader reporting this getter's namespace."""
        return self.namespace_config


def new_rest_client_getter(
    config: Any,
    rest_mapper: Any,
    namespace: str = "",
    discovery_factory: Callable[[Any], Any] | None = None,
) -> NamespacedRESTClientGetter:
    """Build a namespaced REST client getter."""
    return RESTClientGetter(config, rest_mapper, discovery_factory).for_namespace(namespace)