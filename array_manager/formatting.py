"""Human-readable rendering of nested containers.

Associative containers print one ``'key' => value`` entry per line, two
spaces deeper per level; sequential ones print inline::

    [
      'name' => 'Ada',
      'tags' => ['math', 'engines']
    ]
"""

from __future__ import annotations

from typing import Any

from .containers import is_accessible, is_sequential, iter_items


def export_literal(value: Any) -> str:
    return repr(value)


def to_string(data: Any, indent_level: int = 0) -> str:
    if not is_accessible(data):
        return export_literal(data)

    is_assoc = not is_sequential(data)
    indent = '  ' * indent_level

    items = []
    for key, value in iter_items(data):
        item = f"{indent}  {export_literal(key)} => " if is_assoc else ''
        if is_accessible(value):
            item += to_string(value, indent_level + 1)
        else:
            item += export_literal(value)
        items.append(item)

    if is_assoc:
        return "[\n" + ",\n".join(items) + "\n" + indent + "]"
    return "[" + ", ".join(items) + "]"
