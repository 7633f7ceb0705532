from __future__ import annotations

import copy
import json
from typing import Any, Callable, Dict, List, Optional, Set

from . import accessors
from .containers import is_accessible, iter_items
from .paths import SEPARATOR, path_prefixes


def dot(data: Any, prepend: str = '') -> Dict[str, Any]:
    """Flatten nested containers into a ``{'a.b.c': leaf}`` dict.

    Empty containers are leaves and are kept as values.
    """
    results: Dict[str, Any] = {}

    for key, value in iter_items(data):
        if is_accessible(value) and value:
            results.update(dot(value, f"{prepend}{key}{SEPARATOR}"))
        else:
            results[f"{prepend}{key}"] = value

    return results


def _listify(node: Dict[Any, Any], prefix: str, branches: Set[str]) -> Any:
    for key, value in list(node.items()):
        path = f"{prefix}{key}"
        if path in branches and isinstance(value, dict):
            node[key] = _listify(value, f"{path}{SEPARATOR}", branches)
    if node and all(str(k) == str(i) for i, k in enumerate(node)):
        return list(node.values())
    return node


def undot(data: Dict[Any, Any]) -> Any:
    """Rebuild nested containers from dotted keys.

    Branches whose keys come out as 0..n-1 in order become lists again, so
    ``undot(dot(['a', 'b'])) == ['a', 'b']``. Leaf values are left alone.
    """
    results: Dict[Any, Any] = {}
    branches: Set[str] = set()
    for key, value in data.items():
        accessors.set(results, key, copy.deepcopy(value))
        branches.update(path_prefixes(key))
    return _listify(results, '', branches)


def paths(data: Any) -> List[str]:
    """Every leaf path plus every ancestor of it, first occurrence order."""
    found: List[str] = []
    for key in dot(data):
        found.append(key)
        found.extend(path_prefixes(key))
    return list(dict.fromkeys(found))


def flatten_with_keys(data: Any, prepend: str = '', separator: str = SEPARATOR) -> Dict[Any, Any]:
    results: Dict[Any, Any] = {}

    for key, value in iter_items(data):
        new_key = f"{prepend}{separator}{key}" if prepend else key

        if is_accessible(value) and value:
            results.update(flatten_with_keys(value, str(new_key), separator))
        else:
            results[new_key] = value

    return results


def flatten(data: Any, depth: float = float('inf')) -> List[Any]:
    """Collect the leaf values of nested containers into one list."""
    result: List[Any] = []

    for _, item in iter_items(data):
        if not is_accessible(item):
            result.append(item)
        elif depth == 1:
            result.extend(v for _, v in iter_items(item))
        else:
            result.extend(flatten(item, depth - 1))

    return result


def collapse(data: Any) -> Any:
    """Merge a container of containers into one, skipping non-container items."""
    from .sequences import merge

    return merge(*[values for _, values in iter_items(data) if is_accessible(values)])


def depth(data: Any) -> int:
    max_depth = 1
    for _, value in iter_items(data):
        if is_accessible(value):
            max_depth = max(max_depth, depth(value) + 1)
    return max_depth


def divide(data: Any) -> List[List[Any]]:
    items = list(iter_items(data))
    return [[k for k, _ in items], [v for _, v in items]]


def walk_recursive(data: Any, callback: Callable[..., Any], userdata: Any = None) -> bool:
    """Call ``callback(value, dotted_key, userdata)`` on every leaf, in place.

    A non-``None`` return value replaces the leaf.
    """

    def walker(container: Any, key: Any, value: Any, prefix: str = '') -> None:
        full_key = f"{prefix}{SEPARATOR}{key}" if prefix else key
        if is_accessible(value):
            for k, v in iter_items(value):
                walker(value, k, v, str(full_key))
            return
        replacement = callback(value, full_key, userdata)
        if replacement is not None:
            container[key] = replacement

    for key, value in iter_items(data):
        walker(data, key, value)

    return True


def _export_cell(val: Any) -> Any:
    if isinstance(val, list):
        if all(isinstance(v, (str, int, float, bool)) or v is None for v in val):
            return ", ".join(["" if v is None else str(v) for v in val])
        try:
            return json.dumps(val, ensure_ascii=False)
        except TypeError:
            return str(val)
    if isinstance(val, dict):
        try:
            return json.dumps(val, ensure_ascii=False)
        except TypeError:
            return str(val)
    return val


def flatten_records_for_export(
    records: Any,
    fields: Optional[List[str]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Turn records into flat rows keyed by dotted path.

    Without ``fields`` every leaf path of every record becomes a column.
    Lists of scalars are joined with commas, other containers become JSON.
    """
    if isinstance(records, dict):
        records = [records]

    rows: List[Dict[str, Any]] = []
    for _, record in iter_items(records):
        if fields:
            row = {field: _export_cell(accessors.get(record, field)) for field in fields}
        elif is_accessible(record):
            row = {key: _export_cell(val) for key, val in dot(record).items()}
        else:
            row = {'value': record}
        rows.append(row)
        if limit is not None and len(rows) >= max(1, int(limit)):
            break
    return rows
