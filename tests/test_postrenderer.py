import pytest

from helmoperator.actions import Install, Upgrade
from helmoperator.postrenderer import (
    ChainedPostRenderer,
    PostRendererError,
    PostRendererFunc,
    append_install_post_renderer,
    append_post_renderer,
    append_upgrade_post_renderer,
    with_install_post_renderer,
    with_upgrade_post_renderer,
)


def _writer(text):
    return PostRendererFunc(lambda manifest: manifest + text)


def test_empty_chain_leaves_input_unmodified():
    assert ChainedPostRenderer().run("original") == "original"


def test_single_renderer_in_chain():
    assert ChainedPostRenderer([_writer("pr1\n")]).run("original\n") == "original\npr1\n"


def test_multiple_renderers_run_in_order():
    chain = ChainedPostRenderer([_writer("pr1\n"), _writer("pr2\n"), _writer("pr3\n")])
    assert chain.run("original\n") == "original\npr1\npr2\npr3\n"


def test_chain_failure_names_renderer():
    def boom(_):
        raise ValueError("boom")

    chain = ChainedPostRenderer([_writer("a"), PostRendererFunc(boom)])
    with pytest.raises(PostRendererError) as info:
        chain.run("")
    assert str(info.value) == "postrenderer[1] (PostRendererFunc) failed: boom"
    assert info.value.index == 1


def test_append_to_none_returns_extra():
    extra = _writer("x")
    assert append_post_renderer(None, extra) is extra


@pytest.fixture
def install():
    return Install(post_renderer=_writer("base\n"))


@pytest.fixture
def upgrade():
    return Upgrade(post_renderer=_writer("base\n"))


def test_with_install_post_renderer_overrides(install):
    with_install_post_renderer(_writer("add\n"))(install)
    assert install.post_renderer.run("") == "add\n"


def test_append_install_runs_after_default(install):
    append_install_post_renderer(_writer("add\n"))(install)
    assert install.post_renderer.run("") == "base\nadd\n"


def test_append_install_extends_chain(install):
    add = _writer("add\n")
    append_install_post_renderer(add)(install)
    append_install_post_renderer(add)(install)
    assert install.post_renderer.run("") == "base\nadd\nadd\n"
    assert isinstance(install.post_renderer, ChainedPostRenderer)
    assert len(install.post_renderer) == 3


def test_with_upgrade_post_renderer_overrides(upgrade):
    with_upgrade_post_renderer(_writer("add\n"))(upgrade)
    assert upgrade.post_renderer.run("") == "add\n"


def test_append_upgrade_runs_after_default(upgrade):
    append_upgrade_post_renderer(_writer("add\n"))(upgrade)
    assert upgrade.post_renderer.run("") == "base\nadd\n"


def test_append_upgrade_extends_chain(upgrade):
    add = _writer("add\n")
    append_upgrade_post_renderer(add)(upgrade)
    append_upgrade_post_renderer(add)(upgrade)
    assert upgrade.post_renderer.run("") == "base\nadd\nadd\n"
    assert isinstance(upgrade.post_renderer, ChainedPostRenderer)
    assert len(upgrade.post_renderer) == 3