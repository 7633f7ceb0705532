"""Helpers for nested dicts and lists addressed by dot paths.

The Gradio playground lives in `app.py`. This package contains:
- path access: get/set/has/forget and friends (`accessors`)
- conversion between nested and dotted forms (`flattening`)
- grouping, keying and tree building over records (`grouping`)
- cross products, multi-key sorting, recursive diff/merge/equality (`combinators`)
- filtering and aggregation (`records`) and plain list/dict helpers (`sequences`)
- a chainable wrapper (`collection.ArrayCollection`)
"""

from .collection import ArrayCollection, collect
from .errors import ArrayManagerError, InvalidArgumentError, KeyNotFoundError

__all__ = [
    "ArrayCollection",
    "ArrayManagerError",
    "InvalidArgumentError",
    "KeyNotFoundError",
    "collect",
]
