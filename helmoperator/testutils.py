"""File editing helpers used when generating and testing sample projects."""

from __future__ import annotations

import os
import re


class ContentNotFoundError(ValueError):
    """The content to be changed was not found in the file."""


_TEMPLATE_REF = re.compile(r"\$(?:(\$)|\{(\w+)\}|(\w+))")


def make_image_name(project_name: str) -> str:
    """Return the sample operator image name for a project."""
    return f"quay.io/example/{project_name}:v0.0.1"


def make_bundle_image_name(project_name: str) -> str:
    """Return the sample bundle image name for a project."""
    return f"quay.io/example/{project_name}-bundle:v0.0.1"


def _read(path) -> str:
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def _write(path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def replace_in_file(path, old: str, new: str) -> None:
    """Replace every ``old`` with ``new`` in the file at ``path``."""
    os.stat(path)
    content = _read(path)
    if old not in content:
        raise ContentNotFoundError("unable to find the content to be replaced")
    _write(path, content.replace(old, new))


def _expand(template: str, match: re.Match) -> str:
    def substitute(ref: re.Match) -> str:
        if ref.group(1):
            return "$"
        name = ref.group(2) or ref.group(3)
        key = int(name) if name.isdigit() else name
        try:
            value = match.group(key)
        except IndexError:
            return ""
        return value or ""

    return _TEMPLATE_REF.sub(substitute, template)


def replace_regex_in_file(path, match: str, replace: str) -> None:
    """Replace every match of the pattern ``match`` in the file at ``path``.

    ``replace`` may refer to groups as ``$1``, ``${1}`` or ``${name}``;
    ``$$`` stands for a literal dollar sign.
    """
    matcher = re.compile(match)
    os.stat(path)
    content = _read(path)
    updated = matcher.sub(lambda m: _expand(replace, m), content)
    if updated == content:
        raise ContentNotFoundError("unable to find the content to be replaced")
    _write(path, updated)


def uncomment_code(filename, target: str, prefix: str) -> None:
    """Strip ``prefix`` from each line of ``target`` where it occurs in the file."""
    content = _read(filename)
    idx = content.find(target)
    if idx < 0:
        raise ContentNotFoundError(f"unable to find the code {target} to be uncomment")

    lines = target.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        return
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    uncommented = "\n".join(line.removeprefix(prefix) for line in lines)

    _write(filename, content[:idx] + uncommented + content[idx + len(target):])