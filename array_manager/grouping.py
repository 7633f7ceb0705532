"""Grouping of records by a resolved path or callback.

Group keys go through :func:`containers.group_key`: hashable values are used
as-is, dicts and lists are keyed by their canonical JSON text. ``None`` is a
regular key, which is what :func:`tree` relies on to find its roots.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Union

from . import accessors
from .containers import call_with, group_key, iter_items
from .errors import InvalidArgumentError
from .logger import logger

KeyOrCallback = Union[str, int, Callable[..., Any], None]


def resolve(record: Any, key_or_fn: KeyOrCallback, index: Any = None) -> Any:
    """Resolve a record's grouping value from a path or ``fn(record, index)``."""
    if callable(key_or_fn):
        return call_with(key_or_fn, record, index)
    return accessors.get(record, key_or_fn)


def group_by(records: Any, key_or_fn: KeyOrCallback) -> Dict[Any, List[Any]]:
    result: Dict[Any, List[Any]] = {}
    for index, record in iter_items(records):
        result.setdefault(group_key(resolve(record, key_or_fn, index)), []).append(record)
    return result


def key_by(records: Any, key_or_fn: KeyOrCallback) -> Dict[Any, Any]:
    """Index records by key; later records overwrite earlier ones."""
    result: Dict[Any, Any] = {}
    for index, record in iter_items(records):
        result[group_key(resolve(record, key_or_fn, index))] = record
    return result


def count_by(records: Any, key_or_fn: KeyOrCallback = None) -> Dict[Any, int]:
    result: Dict[Any, int] = {}
    for index, record in iter_items(records):
        value = record if key_or_fn is None else resolve(record, key_or_fn, index)
        gk = group_key(value)
        result[gk] = result.get(gk, 0) + 1
    return result


def unique(records: Any, key: KeyOrCallback = None) -> Any:
    """Drop records whose value (or resolved key) was already seen."""
    seen = set()
    kept = []
    for index, record in iter_items(records):
        value = record if key is None else resolve(record, key, index)
        gk = group_key(value)
        if gk in seen:
            continue
        seen.add(gk)
        kept.append((index, record))

    if isinstance(records, dict):
        return dict(kept)
    return [record for _, record in kept]


def duplicates(records: Any, key: KeyOrCallback = None) -> Any:
    """Keep every record whose value (or resolved key) occurs more than once."""
    counts = count_by(records, key)
    kept = []
    for index, record in iter_items(records):
        value = record if key is None else resolve(record, key, index)
        if counts[group_key(value)] > 1:
            kept.append((index, record))

    if isinstance(records, dict):
        return dict(kept)
    return [record for _, record in kept]


def _node(record: Any) -> Dict[Any, Any]:
    if not isinstance(record, dict):
        raise InvalidArgumentError(f"Tree records must be mappings, got {type(record).__name__}")
    return dict(record)


def build_tree(
    parent_id: Any,
    grouped: Dict[Any, List[Any]],
    children_key: str = 'children',
    id_key: str = 'id',
) -> List[Dict[Any, Any]]:
    """Attach, recursively, every record grouped under ``parent_id``.

    A record without an id cannot have children. Cyclic parent references
    recurse until Python raises ``RecursionError``.
    """
    if parent_id is None:
        return []

    children = []
    for item in grouped.get(group_key(parent_id), []):
        node = _node(item)
        node[children_key] = build_tree(accessors.get(item, id_key), grouped, children_key, id_key)
        children.append(node)
    return children


def _count_nodes(nodes: List[Dict[Any, Any]], children_key: str) -> int:
    return sum(1 + _count_nodes(node[children_key], children_key) for node in nodes)


def tree(
    records: Any,
    parent_key: str = 'parent_id',
    children_key: str = 'children',
    id_key: str = 'id',
) -> List[Dict[Any, Any]]:
    """Nest flat records under their parents.

    Roots are records whose ``parent_key`` is ``None`` or missing. Input
    records are copied, never modified.
    """
    grouped = group_by(records, parent_key)

    roots = []
    for root in grouped.get(None, []):
        node = _node(root)
        node[children_key] = build_tree(accessors.get(root, id_key), grouped, children_key, id_key)
        roots.append(node)

    total = len(records)
    attached = _count_nodes(roots, children_key)
    if attached < total:
        logger.debug("tree: %d of %d records are not reachable from a root", total - attached, total)

    return roots
