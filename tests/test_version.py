from helmoperator.version import (
    MODULE_PATH,
    UNKNOWN,
    Module,
    get_most_recent_tag,
    get_scaffold_version,
)


def test_plain_tag_is_kept():
    assert get_most_recent_tag(Module(MODULE_PATH, "v1.2.3")) == "v1.2.3"


def test_pseudo_version_decrements_patch():
    module = Module(MODULE_PATH, "v1.2.4-0.20230306195046-28cadc6b6055")
    assert get_most_recent_tag(module) == "v1.2.3"


def test_pseudo_version_with_zero_patch_is_not_decremented():
    module = Module(MODULE_PATH, "v0.0.0-20230306195046-28cadc6b6055")
    assert get_most_recent_tag(module) == "v0.0.0"


def test_build_metadata_is_dropped():
    assert get_most_recent_tag(Module(MODULE_PATH, "v1.2.3+incompatible")) == "v1.2.3"


def test_invalid_version_is_unknown():
    assert get_most_recent_tag(Module(MODULE_PATH, "not-a-version")) == UNKNOWN
    assert get_most_recent_tag(Module(MODULE_PATH, "v01.2.3")) == UNKNOWN
    assert get_most_recent_tag(Module(MODULE_PATH, "")) == UNKNOWN


def test_replacements_are_unwound():
    final = Module("other/path", "v2.0.1")
    middle = Module("middle", "garbage", replace=final)
    module = Module(MODULE_PATH, "v9.9.9", replace=middle)
    assert get_most_recent_tag(module) == get_most_recent_tag(final)


def test_scaffold_version_finds_module():
    deps = [None, Module("unrelated", "v5.0.0"), Module(MODULE_PATH, "v1.2.3")]
    assert get_scaffold_version(deps) == "v1.2.3"


def test_scaffold_version_unknown_when_missing():
    assert get_scaffold_version([Module("unrelated", "v5.0.0")]) == UNKNOWN
    assert get_scaffold_version(None) == UNKNOWN
    assert get_scaffold_version([]) == UNKNOWN


def test_scaffold_version_handles_pseudo_version_dependency():
    deps = [Module(MODULE_PATH, "v0.0.12-0.20230306195046-28cadc6b6055")]
    assert get_scaffold_version(deps) == "v0.0.11"