"""Exceptions raised by array_manager.

Path lookups never raise: a missing path resolves to the caller's default.
Only caller bugs (mismatched lengths, required keys that are missing,
impossible sampling requests) raise.
"""

from __future__ import annotations


class ArrayManagerError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(ArrayManagerError, ValueError):
    pass


class KeyNotFoundError(InvalidArgumentError, KeyError):
    def __init__(self, key) -> None:
        super().__init__(f"Key [{key}] not found in array")
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.args[0]
