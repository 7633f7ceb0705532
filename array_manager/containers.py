"""Low-level helpers shared by the path, grouping and combinator modules.

Only ``dict`` (mapping) and ``list`` (sequence) count as containers. Lists
are addressed by non-negative integer indices; a segment such as ``'2'``
also matches an ``int`` key in a dict (and vice versa), mirroring how
numeric keys are usually stringified in decoded JSON and config data.
"""

from __future__ import annotations

import inspect
import json
from typing import Any, Callable, Iterable, Iterator, Tuple

from .errors import InvalidArgumentError
from .paths import normalize_key


class _Missing:
    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def is_accessible(value: Any) -> bool:
    return isinstance(value, (dict, list))


def is_sequential(container: Any) -> bool:
    """True for lists and for dicts keyed exactly 0..n-1 in order."""
    if isinstance(container, list):
        return True
    if isinstance(container, dict):
        return all(k == i and type(k) is int for i, k in enumerate(container))
    return False


def is_associative(container: Any) -> bool:
    return isinstance(container, dict) and not is_sequential(container)


def is_multidimensional(container: Any) -> bool:
    return any(is_accessible(v) for _, v in iter_items(container))


def iter_items(container: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(container, dict):
        return iter(list(container.items()))
    if isinstance(container, list):
        return iter(list(enumerate(container)))
    return iter(())


def _as_index(key: Any):
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.isdigit() and (key == '0' or not key.startswith('0')):
        return int(key)
    if isinstance(key, str) and key.startswith('-') and key[1:].isdigit() and not key[1:].startswith('0'):
        return int(key)
    return None


def resolve_key(container: Any, key: Any) -> Any:
    """Return the concrete key/index under which ``key`` lives, or MISSING."""
    key = normalize_key(key)
    if isinstance(container, dict):
        try:
            if key in container:
                return key
        except TypeError:
            return MISSING
        index = _as_index(key)
        if index is not None and isinstance(key, str) and index in container:
            return index
        if isinstance(key, int) and not isinstance(key, bool) and str(key) in container:
            return str(key)
        return MISSING
    if isinstance(container, list):
        index = _as_index(key)
        if index is not None and 0 <= index < len(container):
            return index
    return MISSING


def accepts(container: Any, key: Any) -> bool:
    """True when ``assign`` can write ``key`` into ``container`` as it is.

    Lists only take an existing index or the next one.
    """
    if not isinstance(container, list):
        return True
    return resolve_key(container, key) is not MISSING or _as_index(normalize_key(key)) == len(container)


def keyed(items: list) -> dict:
    """Rebuild a list as an int-keyed dict so it can hold any key."""
    return dict(enumerate(items))


def lookup(container: Any, key: Any, default: Any = MISSING) -> Any:
    concrete = resolve_key(container, key)
    if concrete is MISSING:
        return default
    return container[concrete]


def assign(container: Any, key: Any, value: Any) -> None:
    """Write ``value`` under ``key``, reusing an existing equivalent key."""
    concrete = resolve_key(container, key)
    if concrete is not MISSING:
        container[concrete] = value
        return

    key = normalize_key(key)
    if isinstance(container, dict):
        container[key] = value
        return
    if isinstance(container, list):
        index = _as_index(key)
        if index == len(container):
            container.append(value)
            return
        raise InvalidArgumentError(
            f"Cannot assign key [{key}] in a sequence of length {len(container)}"
        )
    raise InvalidArgumentError(f"Cannot assign key [{key}] on a {type(container).__name__}")


def remove(container: Any, key: Any) -> bool:
    concrete = resolve_key(container, key)
    if concrete is MISSING:
        return False
    del container[concrete]
    return True


def value_of(value: Any) -> Any:
    """Resolve a lazy default: zero-argument callables are invoked."""
    return value() if callable(value) else value


def wrap(value: Any) -> Any:
    if value is None:
        return []
    return value if is_accessible(value) else [value]


def group_key(value: Any) -> Any:
    """Turn a resolved value into something usable as a dict key.

    Decimal-integer strings and integral floats become ints, so ``'1'``,
    ``1.0`` and ``1`` share a group the way path lookup treats them as one
    key. Dicts and lists are keyed by their canonical JSON text.
    """
    if isinstance(value, float):
        value = normalize_key(value)
    if isinstance(value, str):
        index = _as_index(value)
        if index is not None:
            return index
    if isinstance(value, (dict, list)):
        try:
            return json.dumps(value, sort_keys=True)
        except TypeError:
            return str(value)
    try:
        hash(value)
    except TypeError:
        return str(value)
    return value


def _positional_arity(fn: Callable[..., Any]):
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return 1
    if any(p.kind == inspect.Parameter.VAR_POSITIONAL for p in params):
        return None
    return sum(
        1 for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )


def call_with(fn: Callable[..., Any], *args: Any) -> Any:
    """Call ``fn`` with as many leading ``args`` as it accepts.

    Lets callbacks be written as ``lambda item: ...`` or
    ``lambda item, key: ...`` interchangeably.
    """
    arity = _positional_arity(fn)
    if arity is None:
        return fn(*args)
    return fn(*args[:arity])


def rebuild(source: Any, items: Iterable[Tuple[Any, Any]]) -> Any:
    """Collect ``(key, value)`` pairs in the shape of ``source``.

    Mappings keep their keys; anything else becomes a plain list of values.
    """
    if isinstance(source, dict):
        return dict(items)
    return [value for _, value in items]
