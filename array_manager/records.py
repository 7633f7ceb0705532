from __future__ import annotations

import copy
import functools
from typing import Any, Callable, Dict, Iterable, List, Optional

from . import accessors
from .combinators import compare_values, loose_equals, strict_equals
from .containers import (
    MISSING,
    call_with,
    group_key,
    is_accessible,
    iter_items,
    rebuild,
    value_of,
    wrap,
)
from .errors import InvalidArgumentError
from .grouping import count_by
from .paths import join_path, normalize_key


def resolve_items_by_root(data: Any, root_path: str = '(root)') -> List[Any]:
    """Return the records found under ``root_path`` as a list."""
    if data is None:
        return []

    if root_path in (None, '', '(root)'):
        if isinstance(data, list):
            return data
        return [data]

    target = accessors.get(data, root_path)
    if isinstance(target, list):
        return target
    if target is not None:
        return [target]
    return []


def record_roots(data: Any, prefix: str = '') -> List[str]:
    """Paths that hold a list, i.e. candidates for ``resolve_items_by_root``.

    A list of records is searched through its first record only, the way the
    records are sampled for export. A list at the top level is ``(root)``.
    """
    if isinstance(data, list):
        found = [] if prefix else ['(root)']
        if not prefix and data and isinstance(data[0], dict):
            found.extend(record_roots(data[0]))
        return sorted(found)

    found = []
    for key, value in iter_items(data):
        path = join_path(prefix, key)
        if isinstance(value, list):
            found.append(path)
            if value and isinstance(value[0], dict):
                found.extend(record_roots(value[0], path))
        elif isinstance(value, dict):
            found.extend(record_roots(value, path))
    return sorted(found)


def value_retriever(value: Any) -> Callable[..., Any]:
    if callable(value):
        return value
    return lambda item, *_: accessors.get(item, value)


def _values(data: Any) -> List[Any]:
    return [v for _, v in iter_items(data)]


def first(data: Any, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
    if not data:
        return value_of(default)

    for key, value in iter_items(data):
        if callback is None or call_with(callback, value, key):
            return value

    return value_of(default)


def last(data: Any, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
    for key, value in reversed(list(iter_items(data))):
        if callback is None or call_with(callback, value, key):
            return value

    return value_of(default)


def take(data: Any, limit: int) -> Any:
    """First ``limit`` items, or the last ``-limit`` items when negative."""
    items = list(iter_items(data))
    picked = items[limit:] if limit < 0 else items[:limit]
    return rebuild(data, picked)


def _key_matcher(keys: Any):
    wanted = {str(normalize_key(k)) for k in wrap(keys)}
    return lambda key: str(key) in wanted


def only(data: Any, keys: Any) -> Any:
    matches = _key_matcher(keys)
    return rebuild(data, [(k, v) for k, v in iter_items(data) if matches(k)])


def except_keys(data: Any, keys: Any) -> Any:
    """Copy of ``data`` without the given (dotted) paths."""
    result = copy.deepcopy(data)
    accessors.forget(result, keys)
    return result


def where(data: Any, callback: Callable[..., Any]) -> Any:
    return rebuild(data, [(k, v) for k, v in iter_items(data) if call_with(callback, v, k)])


def reject(data: Any, callback: Callable[..., Any]) -> Any:
    return rebuild(data, [(k, v) for k, v in iter_items(data) if not call_with(callback, v, k)])


def where_equals(data: Any, key: Any, value: Any) -> Any:
    return where(data, lambda item: strict_equals(accessors.get(item, key), value))


def where_in(data: Any, key: Any, values: Iterable[Any]) -> Any:
    values = list(values)
    return where(data, lambda item: any(loose_equals(accessors.get(item, key), v) for v in values))


def where_not_in(data: Any, key: Any, values: Iterable[Any]) -> Any:
    values = list(values)
    return where(data, lambda item: not any(loose_equals(accessors.get(item, key), v) for v in values))


def where_between(data: Any, key: Any, minimum: Any, maximum: Any) -> Any:
    def between(item: Any) -> bool:
        value = accessors.get(item, key)
        return compare_values(value, minimum) >= 0 and compare_values(value, maximum) <= 0

    return where(data, between)


def where_not_null(data: Any, key: Any = None) -> Any:
    if key is None:
        return where(data, lambda value: value is not None)
    return where(data, lambda item: accessors.get(item, key) is not None)


def pluck(data: Any, value: Any, key: Any = None) -> Any:
    """Pull one path out of every record, optionally keyed by another path."""
    if key is None:
        return [accessors.get(item, value) for item in _values(data)]

    results: Dict[Any, Any] = {}
    for item in _values(data):
        results[group_key(accessors.get(item, key))] = accessors.get(item, value)
    return results


def map_values(data: Any, callback: Callable[..., Any]) -> Any:
    return rebuild(data, [(k, call_with(callback, v, k)) for k, v in iter_items(data)])


def map_with_keys(data: Any, callback: Callable[..., Any]) -> Dict[Any, Any]:
    result: Dict[Any, Any] = {}
    for key, value in iter_items(data):
        result.update(call_with(callback, value, key))
    return result


def partition(data: Any, callback: Callable[..., Any]) -> List[Any]:
    passed, failed = [], []
    for key, value in iter_items(data):
        (passed if call_with(callback, value, key) else failed).append((key, value))
    return [rebuild(data, passed), rebuild(data, failed)]


def columns(data: Any, names: Iterable[Any]) -> Any:
    names = list(names)
    return map_values(data, lambda item: {name: accessors.get(item, name) for name in names})


def rename_keys(data: Any, mapping: Dict[Any, Any]) -> Dict[Any, Any]:
    return {mapping.get(k, k): v for k, v in iter_items(data)}


def rename_keys_recursive(data: Any, mapping: Dict[Any, Any]) -> Any:
    renamed = [
        (mapping.get(k, k), rename_keys_recursive(v, mapping) if is_accessible(v) else v)
        for k, v in iter_items(data)
    ]
    if isinstance(data, list):
        return [v for _, v in renamed]
    return dict(renamed)


def keys_to_lower(data: Any) -> Dict[Any, Any]:
    return {k.lower() if isinstance(k, str) else k: v for k, v in iter_items(data)}


def keys_to_upper(data: Any) -> Dict[Any, Any]:
    return {k.upper() if isinstance(k, str) else k: v for k, v in iter_items(data)}


def every(data: Any, callback: Callable[..., Any]) -> bool:
    return all(call_with(callback, v, k) for k, v in iter_items(data))


def some(data: Any, callback: Callable[..., Any]) -> bool:
    return any(call_with(callback, v, k) for k, v in iter_items(data))


def each(data: Any, callback: Callable[..., Any]) -> None:
    """Call ``callback(value, key)`` for each item; returning False stops."""
    for key, value in iter_items(data):
        if call_with(callback, value, key) is False:
            break


def search(data: Any, value: Any, strict: bool = False) -> Any:
    """Key of the first item equal to ``value``, or None."""
    equal = strict_equals if strict else loose_equals
    for key, item in iter_items(data):
        if equal(item, value):
            return key
    return None


def contains(data: Any, value: Any, strict: bool = False) -> bool:
    equal = strict_equals if strict else loose_equals
    return any(equal(item, value) for item in _values(data))


def _string_form(value: Any) -> str:
    # Set-like operations compare the way values print, so 1 matches '1'.
    if value is None or value is False:
        return ''
    if value is True:
        return '1'
    return str(normalize_key(value))


def diff(data: Any, *others: Any) -> Any:
    excluded = {_string_form(v) for other in others for v in _values(other)}
    return rebuild(data, [(k, v) for k, v in iter_items(data) if _string_form(v) not in excluded])


def without(data: Any, *values: Any) -> Any:
    return diff(data, list(values))


def intersect(data: Any, *others: Any) -> Any:
    forms = [{_string_form(v) for v in _values(other)} for other in others]
    return rebuild(
        data,
        [(k, v) for k, v in iter_items(data) if all(_string_form(v) in f for f in forms)],
    )


def diff_using(data: Any, values: Any, callback: Callable[[Any, Any], int]) -> Any:
    others = _values(values)
    return rebuild(
        data,
        [(k, v) for k, v in iter_items(data) if all(callback(v, o) != 0 for o in others)],
    )


def intersect_using(data: Any, values: Any, callback: Callable[[Any, Any], int]) -> Any:
    others = _values(values)
    return rebuild(
        data,
        [(k, v) for k, v in iter_items(data) if any(callback(v, o) == 0 for o in others)],
    )


def clean(data: Any) -> Any:
    """Drop falsy values."""
    return rebuild(data, [(k, v) for k, v in iter_items(data) if v])


def normalize(data: Any) -> List[Any]:
    return [v for v in _values(data) if v is not None]


def values(data: Any) -> List[Any]:
    return _values(data)


def keys(data: Any, search_value: Any = MISSING, strict: bool = False) -> List[Any]:
    if search_value is MISSING:
        return [k for k, _ in iter_items(data)]
    equal = strict_equals if strict else loose_equals
    return [k for k, v in iter_items(data) if equal(v, search_value)]


def _retrieved(data: Any, callback: Any) -> List[Any]:
    if callback is None:
        return _values(data)
    retriever = value_retriever(callback)
    return [call_with(retriever, v, k) for k, v in iter_items(data)]


def sum_values(data: Any, callback: Any = None) -> Any:
    return sum(v for v in _retrieved(data, callback) if v is not None)


def avg(data: Any, callback: Any = None) -> Optional[float]:
    count = len(data)
    return sum_values(data, callback) / count if count > 0 else None


def min_value(data: Any, callback: Any = None) -> Any:
    found = _retrieved(data, callback)
    if not found:
        raise InvalidArgumentError('min() needs at least one value')
    return min(found, key=functools.cmp_to_key(compare_values))


def max_value(data: Any, callback: Any = None) -> Any:
    found = _retrieved(data, callback)
    if not found:
        raise InvalidArgumentError('max() needs at least one value')
    return max(found, key=functools.cmp_to_key(compare_values))


def count_values(data: Any) -> Dict[Any, int]:
    return count_by(data)


def pipe(data: Any, callbacks: Iterable[Callable[[Any], Any]]) -> Any:
    return functools.reduce(lambda carry, callback: callback(carry), callbacks, data)


def reduce(data: Any, callback: Callable[[Any, Any], Any], initial: Any = None) -> Any:
    return functools.reduce(callback, _values(data), initial)


def tap(data: Any, callback: Callable[[Any], Any]) -> Any:
    callback(data)
    return data
