"""
Core utilities — clocks, id generators, path helpers, keyed cache.
"""

from __future__ import annotations

import inspect
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Generic, Hashable, Protocol, TypeVar

T = TypeVar("T")


class Clock(Protocol):
    def now(self) -> datetime: ...


class RealClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock that always returns the same instant."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


class UniqueIdGenerator(Protocol):
    def get_unique_id(self, prefix: str) -> str: ...


class RandomUniqueIdGenerator:
    def get_unique_id(self, prefix: str) -> str:
        return f"{prefix}_{str(uuid.uuid4())[:8]}"


class CountingUniqueIdGenerator:
    """Deterministic ids: prefix plus an incrementing counter."""

    def __init__(self) -> None:
        self._counter = 0

    def get_unique_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"


def to_absolute_path(file_or_folder: str) -> str:
    """Resolve against the current working directory and normalize."""
    return os.path.abspath(os.path.expanduser(file_or_folder))


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Engines and plugins may implement their operations sync or async."""
    if inspect.isawaitable(value):
        return await value
    return value


class KeyedCache(Generic[T]):
    """
    Holds one lazily computed value tied to a key.

    The value is rebuilt on the next ``get`` whose key differs from the key
    it was computed for.
    """

    _UNSET: Any = object()

    def __init__(self, factory: Callable[[Hashable], T]) -> None:
        self._factory = factory
        self._key: Any = self._UNSET
        self._value: T | None = None

    def get(self, key: Hashable) -> T:
        if self._key is self._UNSET or self._key != key:
            self._value = self._factory(key)
            self._key = key
        return self._value  # type: ignore[return-value]

    def clear(self) -> None:
        self._key = self._UNSET
        self._value = None
