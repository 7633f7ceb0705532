from __future__ import annotations

from typing import Any, Callable, Dict, Iterable

from .containers import (
    MISSING,
    accepts,
    assign,
    is_accessible,
    keyed,
    lookup,
    remove,
    resolve_key,
    value_of,
)
from .errors import InvalidArgumentError, KeyNotFoundError
from .logger import logger
from .paths import split_path


def _as_path_list(paths: Any) -> list:
    if paths is None:
        return []
    if isinstance(paths, (list, tuple)):
        return list(paths)
    return [paths]


def exists(data: Any, key: Any) -> bool:
    """True when ``key`` is a literal key (or index) of ``data``; no path walking."""
    if not is_accessible(data):
        return False
    return resolve_key(data, key) is not MISSING


def get(data: Any, path: Any, default: Any = None) -> Any:
    """Retrieve a value from nested data using a dot-notation path.

    A literal top-level key equal to the whole path wins over traversal, so
    ``{'a.b': 1}`` answers ``1`` for ``'a.b'`` even if ``data['a']['b']``
    exists. Any failed step returns ``default``; a callable default is only
    invoked in that case.
    """
    if not is_accessible(data):
        return value_of(default)

    if path is None:
        return data

    found = lookup(data, path)
    if found is not MISSING:
        return found

    segments = split_path(path)
    if len(segments) == 1:
        return value_of(default)

    current = data
    for segment in segments:
        if not is_accessible(current):
            return value_of(default)
        current = lookup(current, segment)
        if current is MISSING:
            return value_of(default)

    return current


def _writable(parent: Any, key: Any, container: Any, segment: Any) -> Any:
    if parent is None or accepts(container, segment):
        return container
    container = keyed(container)
    assign(parent, key, container)
    return container


def set(data: Any, path: Any, value: Any) -> Any:
    """Set a value in nested data by dot path, creating dicts along the way.

    Mutates ``data`` and returns it. With ``path=None`` the value itself is
    returned and the caller rebinds; a ``None`` root is replaced by a new dict.
    A nested list that cannot take a segment (a name, or an index past the
    end) is rebuilt as an int-keyed dict; a list root still raises.
    """
    if path is None:
        return value

    if data is None:
        data = {}
    if not is_accessible(data):
        raise InvalidArgumentError(f"Cannot set [{path}] on a {type(data).__name__}")

    segments = split_path(path)
    parent, parent_key = None, None
    current = data
    for segment in segments[:-1]:
        current = _writable(parent, parent_key, current, segment)
        child = lookup(current, segment)
        if not is_accessible(child):
            if child is not MISSING:
                logger.debug("Replacing non-container value at segment %r of %r", segment, path)
            child = {}
            assign(current, segment, child)
        parent, parent_key = current, segment
        current = child

    current = _writable(parent, parent_key, current, segments[-1])
    assign(current, segments[-1], value)
    return data


def has(data: Any, paths: Any) -> bool:
    """Check that every given path is present.

    A key holding ``None`` is present; only absent keys make this false.
    """
    keys = _as_path_list(paths)
    if not data or not keys:
        return False

    for key in keys:
        if key is None:
            return False
        if exists(data, key):
            continue

        current = data
        for segment in split_path(key):
            if is_accessible(current) and resolve_key(current, segment) is not MISSING:
                current = lookup(current, segment)
            else:
                return False

    return True


def has_any(data: Any, paths: Any) -> bool:
    keys = _as_path_list(paths)
    if not data or not keys:
        return False
    return any(has(data, key) for key in keys)


def forget(data: Any, paths: Any) -> None:
    """Remove one or many paths in place.

    Paths whose parents are missing are skipped. Removing a list element
    shifts the following elements down, and later paths see that new layout.
    """
    for key in _as_path_list(paths):
        if exists(data, key):
            remove(data, key)
            continue

        parts = split_path(key)
        current = data
        reachable = True
        for part in parts[:-1]:
            child = lookup(current, part)
            if not is_accessible(child):
                reachable = False
                break
            current = child

        if reachable and parts:
            remove(current, parts[-1])


def pull(data: Any, path: Any, default: Any = None) -> Any:
    value = get(data, path, default)
    forget(data, path)
    return value


def add(data: Any, path: Any, value: Any) -> bool:
    """Set ``value`` only if ``path`` is absent. Returns whether it was set."""
    if has(data, path):
        return False
    set(data, path, value)
    return True


def _next_index(mapping: Dict[Any, Any]) -> int:
    ints = [k for k in mapping if isinstance(k, int) and not isinstance(k, bool)]
    return max(ints) + 1 if ints else 0


def _appended(current: Any, value: Any) -> Any:
    if current is None:
        return [value]
    if isinstance(current, list):
        return current + [value]
    if isinstance(current, dict):
        result = dict(current)
        result[_next_index(result)] = value
        return result
    raise InvalidArgumentError(f"Cannot push onto a {type(current).__name__}")


def _prepended(current: Any, value: Any) -> Any:
    if current is None:
        return [value]
    if isinstance(current, list):
        return [value] + current
    if isinstance(current, dict):
        # Integer keys are renumbered from zero; string keys keep their names.
        result: Dict[Any, Any] = {0: value}
        index = 1
        for k, v in current.items():
            if isinstance(k, int) and not isinstance(k, bool):
                result[index] = v
                index += 1
            else:
                result[k] = v
        return result
    raise InvalidArgumentError(f"Cannot prepend onto a {type(current).__name__}")


def _replace_contents(data: Any, new: Any) -> None:
    if isinstance(data, list):
        data[:] = new
    else:
        data.clear()
        data.update(new)


def push(data: Any, path: Any, value: Any) -> None:
    """Append ``value`` to the sequence at ``path`` (created when absent)."""
    if path is None:
        _replace_contents(data, _appended(data, value))
        return
    set(data, path, _appended(get(data, path, None), value))


def prepend(data: Any, path: Any, value: Any) -> None:
    """Insert ``value`` at the front of the sequence at ``path``."""
    if path is None:
        _replace_contents(data, _prepended(data, value))
        return
    set(data, path, _prepended(get(data, path, None), value))


def prepend_key(data: Dict[Any, Any], key: Any, value: Any) -> None:
    """Put ``key`` first in a mapping, replacing any existing entry."""
    if not isinstance(data, dict):
        raise InvalidArgumentError("prepend_key needs a mapping")
    items = [(k, v) for k, v in data.items() if k != key]
    data.clear()
    data[key] = value
    data.update(items)


def get_or_fail(data: Any, path: Any) -> Any:
    if not has(data, path):
        raise KeyNotFoundError(path)
    return get(data, path)


def set_many(data: Any, values: Dict[Any, Any]) -> None:
    for key, value in values.items():
        set(data, key, value)


def remember(data: Any, path: Any, callback: Callable[[], Any]) -> Any:
    """Store ``callback()`` under ``path`` unless something is already there."""
    if not has(data, path):
        set(data, path, callback())
    return get(data, path)


def ensure(data: Any, paths: Iterable[Any], default: Any = None) -> Any:
    for path in _as_path_list(paths):
        if not has(data, path):
            set(data, path, value_of(default))
    return data


def transform(data: Any, transformations: Dict[Any, Any]) -> Dict[Any, Any]:
    """Build a new dict whose paths are read from ``data``.

    ``{'user.name': 'profile.full_name'}`` copies one path to another; a
    callable source receives the whole of ``data`` and its result is stored
    under the literal key.
    """
    result: Dict[Any, Any] = {}
    for new_key, source in transformations.items():
        if callable(source):
            result[new_key] = source(data)
        else:
            set(result, new_key, get(data, source))
    return result


def validate(data: Any, rules: Any) -> bool:
    if isinstance(rules, (list, tuple)):
        rules = {path: None for path in rules}

    for path, rule in rules.items():
        if not has(data, path):
            return False
        if callable(rule) and not rule(get(data, path)):
            return False
    return True
