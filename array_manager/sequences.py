"""Thin wrappers around list/dict primitives.

These mirror the everyday array helpers (merge, slice, chunk, ...) so the
chainable collection can expose them; none of them understand dot paths.
"""

from __future__ import annotations

import copy
import math
import random as _random
from itertools import zip_longest
from typing import Any, Dict, List, Optional

from .containers import assign, is_accessible, iter_items, lookup, rebuild, wrap
from .errors import InvalidArgumentError


def _is_index(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def merge(*arrays: Any) -> Any:
    """Merge containers left to right.

    Lists are concatenated. When a mapping is involved, integer keys are
    renumbered and appended while other keys overwrite earlier values.
    """
    containers = [a for a in arrays if is_accessible(a)]
    if all(isinstance(a, list) for a in containers):
        return [item for a in containers for item in a]

    result: Dict[Any, Any] = {}
    index = 0
    for array in containers:
        for key, value in iter_items(array):
            if _is_index(key):
                result[index] = value
                index += 1
            else:
                result[key] = value
    return result


def merge_recursive(*arrays: Any) -> Any:
    """Like :func:`merge`, but clashing string keys collect both values."""
    containers = [a for a in arrays if is_accessible(a)]
    if all(isinstance(a, list) for a in containers):
        return merge(*containers)

    result: Dict[Any, Any] = {}
    index = 0
    for array in containers:
        for key, value in iter_items(array):
            if _is_index(key):
                result[index] = value
                index += 1
            elif key in result:
                result[key] = merge_recursive(wrap(result[key]), wrap(value))
            else:
                result[key] = value
    return result


def replace(data: Any, *replacements: Any) -> Any:
    result = copy.copy(data)
    for replacement in replacements:
        for key, value in iter_items(replacement):
            assign(result, key, value)
    return result


def replace_recursive(data: Any, *replacements: Any) -> Any:
    result = copy.copy(data)
    for replacement in replacements:
        for key, value in iter_items(replacement):
            current = lookup(result, key, None)
            if is_accessible(current) and is_accessible(value):
                value = replace_recursive(current, value)
            assign(result, key, value)
    return result


def combine(keys: Any, values: Any) -> Dict[Any, Any]:
    keys = [k for _, k in iter_items(keys)]
    values = [v for _, v in iter_items(values)]
    if len(keys) != len(values):
        raise InvalidArgumentError('Arrays must have the same length')
    return dict(zip(keys, values))


def zip_values(*arrays: Any) -> List[Any]:
    """Zip containers into rows, padding the shorter ones with ``None``."""
    columns = [[v for _, v in iter_items(a)] for a in arrays]
    if len(columns) == 1:
        return columns[0]
    return [list(row) for row in zip_longest(*columns)]


def pad(data: Any, size: int, value: Any) -> List[Any]:
    values = [v for _, v in iter_items(data)]
    missing = abs(size) - len(values)
    if missing <= 0:
        return values
    filler = [value] * missing
    return values + filler if size > 0 else filler + values


def chunk(data: Any, size: int, preserve_keys: bool = False) -> List[Any]:
    if size < 1:
        raise InvalidArgumentError('Chunk size must be greater than 0')
    items = list(iter_items(data))
    chunks = [items[i:i + size] for i in range(0, len(items), size)]
    if preserve_keys:
        return [dict(c) for c in chunks]
    return [[v for _, v in c] for c in chunks]


def split(data: Any, number_of_groups: int) -> List[List[Any]]:
    """Split into ``number_of_groups`` lists of (at most) equal size."""
    if number_of_groups <= 0:
        return []
    values = [v for _, v in iter_items(data)]
    size = math.ceil(len(values) / number_of_groups)
    return [values[i * size:(i + 1) * size] for i in range(number_of_groups)]


def sliding(data: Any, size: int, step: int = 1) -> List[List[Any]]:
    if size < 1 or step < 1:
        raise InvalidArgumentError('Window size and step must be greater than 0')
    values = [v for _, v in iter_items(data)]
    return [values[i:i + size] for i in range(0, len(values) - size + 1, step)]


def _slice_bounds(count: int, offset: int, length: Optional[int]):
    start = max(count + offset, 0) if offset < 0 else min(offset, count)
    if length is None:
        stop = count
    elif length < 0:
        stop = max(count + length, start)
    else:
        stop = min(start + length, count)
    return start, stop


def slice_values(data: Any, offset: int, length: Optional[int] = None, preserve_keys: bool = False) -> Any:
    items = list(iter_items(data))
    start, stop = _slice_bounds(len(items), offset, length)
    selected = items[start:stop]
    if preserve_keys or isinstance(data, dict):
        return dict(selected)
    return [v for _, v in selected]


def splice(data: List[Any], offset: int, length: Optional[int] = None, replacement: Any = None) -> List[Any]:
    """Remove a slice of ``data`` in place, insert ``replacement``, return what was removed."""
    if not isinstance(data, list):
        raise InvalidArgumentError('splice needs a list')
    start, stop = _slice_bounds(len(data), offset, length)
    removed = data[start:stop]
    data[start:stop] = [v for _, v in iter_items(wrap(replacement))]
    return removed


def reverse(data: Any, preserve_keys: bool = False) -> Any:
    items = list(iter_items(data))[::-1]
    if preserve_keys:
        return dict(items)
    return rebuild(data, items)


def flip(data: Any) -> Dict[Any, Any]:
    """Swap keys and values; values that cannot be keys are skipped."""
    flipped: Dict[Any, Any] = {}
    for key, value in iter_items(data):
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            flipped[value] = key
    return flipped


def range_values(start: Any, end: Any, step: Any = 1) -> List[Any]:
    """Inclusive range over numbers or single characters, in either direction."""
    if step == 0:
        raise InvalidArgumentError('Step must not be 0')
    step = abs(step)

    if isinstance(start, str) and isinstance(end, str) and len(start) == 1 and len(end) == 1:
        codes = range_values(ord(start), ord(end), int(step))
        return [chr(c) for c in codes]

    values = []
    if start <= end:
        current = start
        while current <= end:
            values.append(current)
            current += step
    else:
        current = start
        while current >= end:
            values.append(current)
            current -= step
    return values


def repeat(value: Any, times: int) -> List[Any]:
    if times < 0:
        raise InvalidArgumentError('times must be greater than or equal to 0')
    return [copy.deepcopy(value) for _ in range(times)]


def shuffle(data: Any, seed: Any = None) -> List[Any]:
    values = [v for _, v in iter_items(data)]
    _random.Random(seed).shuffle(values)
    return values


def random(data: Any, number: Optional[int] = None, preserve_keys: bool = False) -> Any:
    """Pick ``number`` random items (one bare item when ``number`` is None).

    Picked items keep their original relative order.
    """
    items = list(iter_items(data))
    requested = 1 if number is None else number
    count = len(items)

    if requested > count:
        raise InvalidArgumentError(
            f"You requested {requested} items, but there are only {count} items available."
        )

    if number is None:
        return _random.choice(items)[1]

    if requested <= 0:
        return {} if preserve_keys else []

    positions = sorted(_random.sample(range(count), requested))
    picked = [items[p] for p in positions]
    if preserve_keys:
        return dict(picked)
    return [v for _, v in picked]
