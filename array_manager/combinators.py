from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Sequence

from .containers import (
    MISSING,
    accepts,
    assign,
    call_with,
    is_accessible,
    iter_items,
    keyed,
    lookup,
    rebuild,
    wrap,
)
from .grouping import resolve


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _numeric(value: str) -> Optional[float]:
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return None if math.isnan(number) else number


def compare_values(a: Any, b: Any) -> int:
    """Three-way comparison returning -1, 0 or 1.

    Rules, in order:
    - ``None`` or a bool on either side compares truthiness (``None`` first).
    - numbers compare numerically; numeric strings count as numbers.
    - other strings compare lexicographically.
    - containers are greater than scalars; two containers compare by size,
      then value by value in the left operand's key order.
    """
    if a is None or b is None or isinstance(a, bool) or isinstance(b, bool):
        return _sign(bool(a) - bool(b))

    a_container, b_container = is_accessible(a), is_accessible(b)
    if a_container or b_container:
        if not (a_container and b_container):
            return 1 if a_container else -1
        if len(a) != len(b):
            return _sign(len(a) - len(b))
        for key, value in iter_items(a):
            other = lookup(b, key)
            if other is MISSING:
                return 1
            result = compare_values(value, other)
            if result:
                return result
        return 0

    if isinstance(a, str) and _is_number(b):
        number = _numeric(a)
        return _sign(number - b) if number is not None else compare_values(a, str(b))
    if _is_number(a) and isinstance(b, str):
        number = _numeric(b)
        return _sign(a - number) if number is not None else compare_values(str(a), b)
    if isinstance(a, str) and isinstance(b, str):
        na, nb = _numeric(a), _numeric(b)
        if na is not None and nb is not None:
            return _sign(na - nb)

    try:
        return (a > b) - (a < b)
    except TypeError:
        return compare_values(str(a), str(b))


def loose_equals(a: Any, b: Any) -> bool:
    if is_accessible(a) and is_accessible(b):
        return equals(a, b, strict=False)
    return compare_values(a, b) == 0


def strict_equals(a: Any, b: Any) -> bool:
    """Equal value and identical type, so ``1`` and ``1.0`` differ."""
    if is_accessible(a) and is_accessible(b):
        return equals(a, b, strict=True)
    if type(a) is not type(b):
        return False
    return a == b


def equals(a: Any, b: Any, strict: bool = True) -> bool:
    """Structural equality: same size, same keys, recursively equal values."""
    if not (is_accessible(a) and is_accessible(b)):
        return strict_equals(a, b) if strict else loose_equals(a, b)
    if len(a) != len(b):
        return False

    for key, value in iter_items(a):
        other = lookup(b, key)
        if other is MISSING:
            return False

        if is_accessible(value) and is_accessible(other):
            if not equals(value, other, strict):
                return False
        elif strict and not strict_equals(value, other):
            return False
        elif not strict and not loose_equals(value, other):
            return False

    return True


def diff_recursive(first: Any, second: Any) -> Dict[Any, Any]:
    """Entries of ``first`` that are missing from, or differ in, ``second``.

    Keys present only in ``second`` are never reported.
    """
    diff: Dict[Any, Any] = {}

    for key, value in iter_items(first):
        other = lookup(second, key)
        if other is MISSING:
            diff[key] = value
        elif is_accessible(value) and is_accessible(other):
            nested = diff_recursive(value, other)
            if nested:
                diff[key] = nested
        elif not strict_equals(value, other):
            diff[key] = value

    return diff


def merge_recursive_with_callback(
    first: Any,
    second: Any,
    callback: Callable[..., Any],
) -> Any:
    """Merge ``second`` into a copy of ``first``.

    Containers on both sides merge recursively; a clash between other values
    is settled by ``callback(existing, incoming, key)``.
    A list that meets a key it cannot hold becomes an int-keyed dict.
    """
    merged = dict(first) if isinstance(first, dict) else list(first)

    for key, value in iter_items(second):
        if not accepts(merged, key):
            merged = keyed(merged)
        current = lookup(merged, key)
        if is_accessible(value) and is_accessible(current):
            assign(merged, key, merge_recursive_with_callback(current, value, callback))
        elif current is not MISSING:
            assign(merged, key, call_with(callback, current, value, key))
        else:
            assign(merged, key, value)

    return merged


def cartesian(data: Any) -> List[Dict[Any, Any]]:
    """Cross product of a mapping of key -> values.

    The last key varies fastest: ``{'x': [1, 2], 'y': [3, 4]}`` gives
    x=1,y=3 / x=1,y=4 / x=2,y=3 / x=2,y=4.
    """
    result: List[Dict[Any, Any]] = [{}]

    for key, values in iter_items(data):
        result = [
            {**product, key: value}
            for product in result
            for _, value in iter_items(wrap(values))
        ]

    return result


def cross_join(*arrays: Any) -> List[List[Any]]:
    results: List[List[Any]] = [[]]

    for array in arrays:
        results = [product + [item] for product in results for _, item in iter_items(array)]

    return results


def sort(data: Any, callback: Optional[Callable[[Any, Any], int]] = None) -> Any:
    """Sort by value; mappings keep their keys."""
    compare = callback or compare_values
    items = sorted(iter_items(data), key=cmp_to_key(lambda x, y: compare(x[1], y[1])))
    return rebuild(data, items)


def sort_by(data: Any, key: Any, descending: bool = False) -> Any:
    resolved = {index: resolve(value, key, index) for index, value in iter_items(data)}
    items = sorted(
        iter_items(data),
        key=cmp_to_key(lambda x, y: compare_values(resolved[x[0]], resolved[y[0]])),
        reverse=descending,
    )
    return rebuild(data, items)


def _comparison(comparison: Any):
    if isinstance(comparison, (list, tuple)):
        key = comparison[0]
        direction = comparison[1] if len(comparison) > 1 else 'asc'
    else:
        key, direction = comparison, 'asc'
    return key, str(direction).lower() == 'desc'


def sort_by_many(records: Any, comparisons: Sequence[Any]) -> List[Any]:
    """Stable sort on several keys.

    ``comparisons`` is a list of ``(path_or_callable, 'asc'|'desc')`` pairs
    (a bare key means ascending). The first non-tie decides.
    """
    parsed = [_comparison(c) for c in comparisons]

    def compare(a: Any, b: Any) -> int:
        for key, descending in parsed:
            result = compare_values(resolve(a, key), resolve(b, key))
            if result:
                return -result if descending else result
        return 0

    return sorted((value for _, value in iter_items(records)), key=cmp_to_key(compare))


def sort_recursive(data: Any, descending: bool = False) -> Any:
    """Sort mappings by key and lists by value, at every level."""
    items = [
        (k, sort_recursive(v, descending) if is_accessible(v) else v)
        for k, v in iter_items(data)
    ]

    if isinstance(data, dict):
        items.sort(key=cmp_to_key(lambda x, y: compare_values(x[0], y[0])), reverse=descending)
        return dict(items)

    values = [v for _, v in items]
    values.sort(key=cmp_to_key(compare_values), reverse=descending)
    return values
