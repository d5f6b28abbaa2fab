"""Building blocks for Helm-based Kubernetes operators: flags, release action clients, post-renderers, annotations, patches and helpers."""

__version__ = "0.1.0"