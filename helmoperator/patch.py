"""JSON patches that bring live objects back in line with a release manifest."""

from __future__ import annotations

import json
from typing import Any

_BASIC_KINDS = ("string", "number", "bool")


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"unsupported JSON value of type {type(value).__name__}")


def _path(parent: str, key: Any) -> str:
    return f"{parent}/{str(key).replace('~', '~0').replace('/', '~1')}"


def _op(op: str, path: str, value: Any = None) -> dict:
    return {"op": op, "path": path, "value": value}


def _same(a: Any, b: Any) -> bool:
    return _kind(a) == _kind(b) and a == b


def _diff_objects(a: dict, b: dict, path: str, ops: list) -> None:
    for key, bv in b.items():
        p = _path(path, key)
        if key not in a:
            ops.append(_op("add", p, bv))
        else:
            _handle(a[key], bv, p, ops)
    for key in a:
        if key not in b:
            ops.append(_op("remove", _path(path, key)))


def _edit_distance(s: list, t: list, path: str) -> list:
    m, n = len(s), len(t)
    d = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        d[i][0] = i
    for j in range(n + 1):
        d[0][j] = j
    for j in range(1, n + 1):
        for i in range(1, m + 1):
            if _same(s[i - 1], t[j - 1]):
                d[i][j] = d[i - 1][j - 1]
            else:
                d[i][j] = min(d[i - 1][j - 1], d[i][j - 1], d[i - 1][j]) + 1

    ops: list = []
    i, j = m, n
    while True:
        if i > 0 and d[i - 1][j] + 1 == d[i][j]:
            ops.append(_op("remove", _path(path, i - 1)))
            i -= 1
        elif j > 0 and d[i][j - 1] + 1 == d[i][j]:
            ops.append(_op("add", _path(path, i), t[j - 1]))
            j -= 1
        elif i > 0 and j > 0 and d[i - 1][j - 1] + 1 == d[i][j]:
            ops.append(_op("replace", _path(path, i - 1), t[j - 1]))
            i -= 1
            j -= 1
        elif i > 0 and j > 0 and d[i - 1][j - 1] == d[i][j]:
            i -= 1
            j -= 1
        else:
            return ops


def _handle(a: Any, b: Any, path: str, ops: list) -> None:
    ka, kb = _kind(a), _kind(b)
    if ka == kb == "null":
        return
    if ka != kb:
        ops.append(_op("replace", path, b))
        return
    if ka == "object":
        _diff_objects(a, b, path, ops)
    elif ka == "array":
        if all(_kind(v) in _BASIC_KINDS for v in (*a, *b)):
            ops.extend(_edit_distance(a, b, path))
            return
        common = min(len(a), len(b))
        for i in range(len(a) - 1, common - 1, -1):
            ops.append(_op("remove", _path(path, i)))
        for i in range(common, len(b)):
            ops.append(_op("add", _path(path, i), b[i]))
        for i in range(common):
            _handle(a[i], b[i], _path(path, i), ops)
    elif a != b:
        ops.append(_op("replace", path, b))


def diff_operations(existing: Any, expected: Any) -> list[dict]:
    """Return the JSON patch operations turning ``existing`` into ``expected``.

    Each operation is a dict with ``op``, ``path`` and ``value`` keys;
    ``value`` is ``None`` for removals.
    """
    ops: list[dict] = []
    _handle(existing, expected, "", ops)
    return ops


def _marshal(ops: list[dict]) -> bytes:
    body = [
        {key: value for key, value in op.items() if not (key == "value" and value is None)}
        for op in ops
    ]
    text = json.dumps(body, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
    for char, escaped in (("&", "\\u0026"), ("<", "\\u003c"), (">", "\\u003e"),
                          ("\u2028", "\\u2028"), ("\u2029", "\\u2029")):
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def create_json_merge_patch(existing_json, expected_json) -> bytes | None:
    """Build a JSON patch applying the chart-managed fields of ``expected_json``.

    Removals, and additions of null values, are dropped: those fields were
    added by the cluster or by users. Returns ``None`` when nothing is left.
    """
    if isinstance(existing_json, str):
        existing_json = existing_json.encode("utf-8")
    if isinstance(expected_json, str):
        expected_json = expected_json.encode("utf-8")
    if existing_json == expected_json:
        return None
    ops = diff_operations(json.loads(existing_json), json.loads(expected_json))
    kept = [
        op for op in ops
        if op["op"] != "remove" and not (op["op"] == "add" and op["value"] is None)
    ]
    if not kept:
        return None
    return _marshal(kept)