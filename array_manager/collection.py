from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from . import accessors, combinators, flattening, grouping, io_utils, records, sequences
from .combinators import equals
from .containers import MISSING, accepts, keyed, value_of
from .formatting import to_string
from .logger import logger
from .paths import split_path


class ArrayCollection:
    """Chainable wrapper around one dict or list.

    The wrapper owns a deep copy of what it is given, and of every value
    written through it. A list root (an empty collection included) turns into
    an int-keyed dict when a keyed write needs it. Transforming methods
    return a new collection and leave this one untouched, including the
    path writers (``set``, ``forget``, ``push``, ``prepend``). Item access
    goes through dot paths: ``c['user.name']``, ``c['user.name'] = 'Ada'``,
    ``'user.name' in c`` and ``del c['user.name']`` (these four do act on
    this collection).
    """

    def __init__(self, items: Any = None) -> None:
        if items is None:
            items = []
        elif isinstance(items, ArrayCollection):
            items = items.all()
        self._items = copy.deepcopy(items)

    @classmethod
    def _owning(cls, items: Any) -> 'ArrayCollection':
        # ``items`` is already a private copy; skip the second deep copy.
        collection = cls.__new__(cls)
        collection._items = items
        return collection

    def _copy(self) -> Any:
        return copy.deepcopy(self._items)

    @staticmethod
    def _rooted(items: Any, key: Any) -> Any:
        # A list root that cannot take the first segment becomes an int-keyed dict.
        if key is None or not isinstance(items, list) or accepts(items, split_path(key)[0]):
            return items
        return keyed(items)

    # -- access ---------------------------------------------------------

    def all(self) -> Any:
        return self._items

    def to_array(self) -> Any:
        return self._copy()

    def get(self, key: Any, default: Any = None) -> Any:
        return accessors.get(self._items, key, default)

    def has(self, keys: Any) -> bool:
        return accessors.has(self._items, keys)

    def has_any(self, keys: Any) -> bool:
        return accessors.has_any(self._items, keys)

    def first(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        return records.first(self._items, callback, default)

    def last(self, callback: Optional[Callable[..., Any]] = None, default: Any = None) -> Any:
        return records.last(self._items, callback, default)

    # -- path writers (copy first) --------------------------------------

    def set(self, key: Any, value: Any) -> 'ArrayCollection':
        value = copy.deepcopy(value)
        return self._owning(accessors.set(self._rooted(self._copy(), key), key, value))

    def forget(self, keys: Any) -> 'ArrayCollection':
        items = self._copy()
        accessors.forget(items, keys)
        return self._owning(items)

    def push(self, value: Any, key: Any = None) -> 'ArrayCollection':
        items = self._rooted(self._copy(), key)
        accessors.push(items, key, copy.deepcopy(value))
        return self._owning(items)

    def prepend(self, value: Any, key: Any = None) -> 'ArrayCollection':
        items = self._rooted(self._copy(), key)
        accessors.prepend(items, key, copy.deepcopy(value))
        return self._owning(items)

    def ensure(self, keys: Sequence[Any], default: Any = None) -> 'ArrayCollection':
        items = self._copy()
        for key in [keys] if isinstance(keys, str) else keys:
            items = self._rooted(items, key)
        return self._owning(accessors.ensure(items, keys, lambda: copy.deepcopy(value_of(default))))

    # -- filtering ------------------------------------------------------

    def where(self, callback: Callable[..., Any]) -> 'ArrayCollection':
        return self.__class__(records.where(self._items, callback))

    filter = where

    def reject(self, callback: Callable[..., Any]) -> 'ArrayCollection':
        return self.__class__(records.reject(self._items, callback))

    def where_equals(self, key: Any, value: Any) -> 'ArrayCollection':
        return self.__class__(records.where_equals(self._items, key, value))

    def where_in(self, key: Any, values: Sequence[Any]) -> 'ArrayCollection':
        return self.__class__(records.where_in(self._items, key, values))

    def where_not_in(self, key: Any, values: Sequence[Any]) -> 'ArrayCollection':
        return self.__class__(records.where_not_in(self._items, key, values))

    def where_between(self, key: Any, minimum: Any, maximum: Any) -> 'ArrayCollection':
        return self.__class__(records.where_between(self._items, key, minimum, maximum))

    def where_not_null(self, key: Any = None) -> 'ArrayCollection':
        return self.__class__(records.where_not_null(self._items, key))

    def only(self, keys: Any) -> 'ArrayCollection':
        return self.__class__(records.only(self._items, keys))

    def except_keys(self, keys: Any) -> 'ArrayCollection':
        return self._owning(records.except_keys(self._items, keys))

    def unique(self, key: Any = None) -> 'ArrayCollection':
        return self.__class__(grouping.unique(self._items, key))

    def take(self, limit: int) -> 'ArrayCollection':
        return self.__class__(records.take(self._items, limit))

    def partition(self, callback: Callable[..., Any]) -> List[Any]:
        return records.partition(self._copy(), callback)

    # -- mapping --------------------------------------------------------

    def map(self, callback: Callable[..., Any]) -> 'ArrayCollection':
        return self.__class__(records.map_values(self._items, callback))

    def map_with_keys(self, callback: Callable[..., Any]) -> 'ArrayCollection':
        return self.__class__(records.map_with_keys(self._items, callback))

    def pluck(self, value: Any, key: Any = None) -> 'ArrayCollection':
        return self.__class__(records.pluck(self._items, value, key))

    def transform(self, transformations: Dict[Any, Any]) -> 'ArrayCollection':
        return self.__class__(accessors.transform(self._items, transformations))

    def values(self) -> 'ArrayCollection':
        return self.__class__(records.values(self._items))

    def keys(self, search_value: Any = MISSING, strict: bool = False) -> 'ArrayCollection':
        return self.__class__(records.keys(self._items, search_value, strict))

    def flip(self) -> 'ArrayCollection':
        return self.__class__(sequences.flip(self._items))

    # -- structure ------------------------------------------------------

    def dot(self) -> 'ArrayCollection':
        return self.__class__(flattening.dot(self._items))

    def undot(self) -> 'ArrayCollection':
        return self.__class__(flattening.undot(self._items))

    def paths(self) -> List[str]:
        return flattening.paths(self._items)

    def flatten(self, depth: float = float('inf')) -> 'ArrayCollection':
        return self.__class__(flattening.flatten(self._items, depth))

    def merge(self, *arrays: Any) -> 'ArrayCollection':
        arrays = [a.all() if isinstance(a, ArrayCollection) else a for a in arrays]
        return self.__class__(sequences.merge(self._items, *arrays))

    def chunk(self, size: int, preserve_keys: bool = False) -> 'ArrayCollection':
        return self.__class__(sequences.chunk(self._items, size, preserve_keys))

    def slice(self, offset: int, length: Optional[int] = None, preserve_keys: bool = False) -> 'ArrayCollection':
        return self.__class__(sequences.slice_values(self._items, offset, length, preserve_keys))

    def shuffle(self, seed: Any = None) -> 'ArrayCollection':
        return self.__class__(sequences.shuffle(self._items, seed))

    def reverse(self, preserve_keys: bool = False) -> 'ArrayCollection':
        return self.__class__(sequences.reverse(self._items, preserve_keys))

    # -- grouping and ordering ------------------------------------------

    def group_by(self, key: Any) -> 'ArrayCollection':
        return self.__class__(grouping.group_by(self._items, key))

    def key_by(self, key: Any) -> 'ArrayCollection':
        return self.__class__(grouping.key_by(self._items, key))

    def count_by(self, key: Any = None) -> 'ArrayCollection':
        return self.__class__(grouping.count_by(self._items, key))

    def tree(self, parent_key: str = 'parent_id', children_key: str = 'children', id_key: str = 'id') -> 'ArrayCollection':
        return self.__class__(grouping.tree(self._items, parent_key, children_key, id_key))

    def sort(self, callback: Optional[Callable[[Any, Any], int]] = None) -> 'ArrayCollection':
        return self.__class__(combinators.sort(self._items, callback))

    def sort_by(self, key: Any, descending: bool = False) -> 'ArrayCollection':
        return self.__class__(combinators.sort_by(self._items, key, descending))

    def sort_by_many(self, comparisons: Sequence[Any]) -> 'ArrayCollection':
        return self.__class__(combinators.sort_by_many(self._items, comparisons))

    def sort_recursive(self, descending: bool = False) -> 'ArrayCollection':
        return self.__class__(combinators.sort_recursive(self._items, descending))

    def diff_recursive(self, other: Any) -> 'ArrayCollection':
        other = other.all() if isinstance(other, ArrayCollection) else other
        return self.__class__(combinators.diff_recursive(self._items, other))

    # -- aggregates -----------------------------------------------------

    def sum(self, callback: Any = None) -> Any:
        return records.sum_values(self._items, callback)

    def avg(self, callback: Any = None) -> Any:
        return records.avg(self._items, callback)

    def min(self, callback: Any = None) -> Any:
        return records.min_value(self._items, callback)

    def max(self, callback: Any = None) -> Any:
        return records.max_value(self._items, callback)

    def count(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def contains(self, value: Any, strict: bool = False) -> bool:
        return records.contains(self._items, value, strict)

    def search(self, value: Any, strict: bool = False) -> Any:
        return records.search(self._items, value, strict)

    def reduce(self, callback: Callable[[Any, Any], Any], initial: Any = None) -> Any:
        return records.reduce(self._items, callback, initial)

    def pipe(self, callbacks: Sequence[Callable[[Any], Any]]) -> Any:
        return records.pipe(self._copy(), callbacks)

    def tap(self, callback: Callable[[Any], Any]) -> 'ArrayCollection':
        callback(self._copy())
        return self

    def equals(self, other: Any, strict: bool = True) -> bool:
        other = other.all() if isinstance(other, ArrayCollection) else other
        return equals(self._items, other, strict)

    # -- output ---------------------------------------------------------

    def to_json(self, indent: Optional[int] = None) -> str:
        return io_utils.to_json(self._items, indent=indent)

    def to_string(self, indent_level: int = 0) -> str:
        return to_string(self._items, indent_level)

    def dump(self) -> 'ArrayCollection':
        logger.info("%s", self.to_string())
        return self

    # -- python protocols -----------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        return accessors.get(self._items, key)

    def __setitem__(self, key: Any, value: Any) -> None:
        value = copy.deepcopy(value)
        if key is None:
            accessors.push(self._items, None, value)
        else:
            self._items = self._rooted(self._items, key)
            accessors.set(self._items, key, value)

    def __contains__(self, key: Any) -> bool:
        return accessors.has(self._items, key)

    def __delitem__(self, key: Any) -> None:
        accessors.forget(self._items, key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ArrayCollection):
            other = other.all()
        elif not isinstance(other, (dict, list)):
            return NotImplemented
        return equals(self._items, other)

    __hash__ = None

    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"


def collect(items: Any = None) -> ArrayCollection:
    return ArrayCollection(items)
