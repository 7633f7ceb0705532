from __future__ import annotations

from typing import Any, List

SEPARATOR = '.'


def normalize_key(key: Any) -> Any:
    """Coerce float keys to their string form ('2.0' -> '2', 1.5 -> '1.5').

    Every other key is returned unchanged.
    """
    if isinstance(key, float):
        if key.is_integer() and abs(key) < 1e15:
            return str(int(key))
        return repr(key)
    return key


def split_path(path: Any, sep: str = SEPARATOR) -> List[str]:
    """Split a path on the separator.

    Segments are kept as written, so 'a..b' yields an empty middle segment.
    Non-string paths (ints, floats) are stringified first.
    """
    if path is None:
        return []
    path = normalize_key(path)
    if not isinstance(path, str):
        path = str(path)
    return path.split(sep)


def join_path(*segments: Any, sep: str = SEPARATOR) -> str:
    return sep.join(str(s) for s in segments if s is not None and s != '')


def path_prefixes(path: str, sep: str = SEPARATOR) -> List[str]:
    """Return every proper, non-empty prefix of a path, shortest first."""
    parts = split_path(path, sep)
    return [sep.join(parts[:i]) for i in range(1, len(parts))]
