from __future__ import annotations

import json
from typing import Any, Iterator, Tuple
from urllib.parse import quote

from .containers import is_accessible, iter_items
from .errors import InvalidArgumentError
from .paths import normalize_key


def to_json(data: Any, indent: int | None = None, sort_keys: bool = False) -> str:
    return json.dumps(data, indent=indent, sort_keys=sort_keys, ensure_ascii=False)


def from_json(text: str) -> Any:
    """Decode a JSON document that must hold an object or an array."""
    data = json.loads(text)
    if not is_accessible(data):
        raise InvalidArgumentError(f"Expected a JSON object or array, got {type(data).__name__}")
    return data


def read_json_content(file_obj):
    """Decode an uploaded file, or a path to one, holding a JSON object or array."""
    if file_obj is None:
        raise InvalidArgumentError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
    else:
        with open(getattr(file_obj, 'name', file_obj), 'rb') as f:
            content = f.read()

    if isinstance(content, bytes):
        content = content.decode('utf-8-sig')
    return from_json(content)


def _query_pairs(data: Any, prefix: str = '') -> Iterator[Tuple[str, str]]:
    for key, value in iter_items(data):
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if is_accessible(value):
            yield from _query_pairs(value, name)
        elif isinstance(value, bool):
            yield name, '1' if value else '0'
        else:
            yield name, str(normalize_key(value))


def query(data: Any) -> str:
    """Build an RFC 3986 encoded query string; nested keys use ``a[b]=`` form."""
    return '&'.join(
        f"{quote(name, safe='')}={quote(value, safe='')}" for name, value in _query_pairs(data)
    )
