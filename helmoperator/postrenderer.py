"""Post-renderers that transform a rendered release manifest."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from helmoperator.actions import Install, Upgrade


class PostRendererError(RuntimeError):
    """A post-renderer in a chain failed."""

    def __init__(self, index: int, renderer: object, cause: BaseException):
        self.index = index
        self.renderer = renderer
        self.cause = cause
        super().__init__(f"postrenderer[{index}] ({type(renderer).__name__}) failed: {cause}")


class PostRenderer(ABC):
    """Transforms a rendered manifest."""

    @abstractmethod
    def run(self, manifest: str) -> str:
        """Return the transformed manifest."""


@dataclass(frozen=True)
class PostRendererFunc(PostRenderer):
    """A post-renderer backed by a plain callable."""

    func: Callable[[str], str]

    def run(self, manifest: str) -> str:
        return self.func(manifest)


class ChainedPostRenderer(list, PostRenderer):
    """Runs post-renderers in order, each on the output of the previous."""

    def run(self, manifest: str) -> str:
        out = manifest
        for index, renderer in enumerate(self):
            try:
                out = renderer.run(out)
            except Exception as exc:
                raise PostRendererError(index, renderer, exc) from exc
        return out


def append_post_renderer(existing: PostRenderer | None, extra: PostRenderer) -> PostRenderer:
    """Return a renderer running ``existing`` and then ``extra``."""
    if existing is None:
        return extra
    if isinstance(existing, ChainedPostRenderer):
        return ChainedPostRenderer([*existing, extra])
    return ChainedPostRenderer([existing, extra])


def with_install_post_renderer(renderer: PostRenderer) -> Callable[[Install], None]:
    """Install option replacing any configured post-renderer."""

    def apply(install: Install) -> None:
        install.post_renderer = renderer

    return apply


def append_install_post_renderer(renderer: PostRenderer) -> Callable[[Install], None]:
    """Install option running ``renderer`` after those already configured."""

    def apply(install: Install) -> None:
        install.post_renderer = append_post_renderer(install.post_renderer, renderer)

    return apply


def with_upgrade_post_renderer(renderer: PostRenderer) -> Callable[[Upgrade], None]:
    """Upgrade option replacing any configured post-renderer."""

    def apply(upgrade: Upgrade) -> None:
        upgrade.post_renderer = renderer

    return apply


def append_upgrade_post_renderer(renderer: PostRenderer) -> Callable[[Upgrade], None]:
    """Upgrade option running ``renderer`` after those already configured."""

    def apply(upgrade: Upgrade) -> None:
        upgrade.post_renderer = append_post_renderer(upgrade.post_renderer, renderer)

    return apply