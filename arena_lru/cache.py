"""Fixed-capacity LRU cache.

Entries live in an arena of slots addressed by integer handles. Each slot is
a position in four parallel lists (key, value, prev, next) that form a
circular doubly-linked recency list. Slot 0 is a sentinel: its ``next`` is the
most-recently-used slot and its ``prev`` the least-recently-used one. A dict
maps each resident key to its handle, and handles freed by eviction are
reused before the arena grows, so it never exceeds ``capacity + 1`` slots.

Both :meth:`LRUCache.get` and :meth:`LRUCache.put` run in O(1).
"""

from __future__ import annotations

import logging
from collections.abc import Hashable
from typing import (
    TYPE_CHECKING,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

if TYPE_CHECKING:
    from .config.models import CacheConfig, EnvSettings

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

_HEAD = 0


class LRUCache(Generic[K, V]):
    """Least-recently-used cache with a fixed number of slots.

    Parameters
    ----------
    capacity: int
        Maximum number of resident entries. Must be a positive integer.
        When the cache is full, inserting a new key discards the
        least-recently-used entry.

    Raises
    ------
    TypeError
        If ``capacity`` is not an integer.
    ValueError
        If ``capacity`` is less than 1.
    """

    def __init__(self, capacity: int) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(
                f"LRUCache capacity must be an int, got {type(capacity).__name__}"
            )
        if capacity < 1:
            raise ValueError(f"LRUCache capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        self._index: Dict[K, int] = {}
        # Bumped on every relink so live iterators can detect mutation.
        self._version = 0
        self._reset_arena()
        logger.debug("lru_cache.created", extra={"capacity": capacity})

    @classmethod
    def from_config(cls, config: CacheConfig) -> LRUCache[K, V]:
        """Build a cache from a validated :class:`CacheConfig`."""
        return cls(config.capacity)

    @classmethod
    def from_settings(
        cls, settings: Optional[EnvSettings] = None
    ) -> LRUCache[K, V]:
        """Build a cache sized from environment settings."""
        if settings is None:
            from .config.models import EnvSettings

            settings = EnvSettings()
        return cls(settings.capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the value for `key` and mark it most recently used.

        On a miss `default` is returned and nothing changes.
        """
        handle = self._index.get(key)
        if handle is None:
            return default
        self._move_to_front(handle)
        return self._values[handle]

    def put(self, key: K, value: V) -> None:
        """Insert or update `key`, evicting the LRU entry if a new key needs room."""
        handle = self._index.get(key)
        if handle is not None:
            self._values[handle] = value
            self._move_to_front(handle)
            return
        if len(self._index) >= self._capacity:
            self._evict()
        handle = self._allocate(key, value)
        self._link_front(handle)
        self._index[key] = handle

    def peek(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the value for `key` without touching recency."""
        handle = self._index.get(key)
        if handle is None:
            return default
        return self._values[handle]

    def keys(self) -> Iterator[K]:
        """Yield resident keys from most to least recently used.

        Promoting, inserting, evicting or clearing while iterating raises
        :class:`RuntimeError`, as with ``dict``.
        """
        for handle in self._walk():
            yield self._keys[handle]  # type: ignore[misc]

    def items(self) -> Iterator[Tuple[K, V]]:
        """Yield ``(key, value)`` pairs from most to least recently used."""
        for handle in self._walk():
            yield self._keys[handle], self._values[handle]  # type: ignore[misc]

    def clear(self) -> None:
        self._index.clear()
        self._version += 1
        self._reset_arena()

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        entries = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}(capacity={self._capacity}, {{{entries}}})"

    # Arena management

    def _reset_arena(self) -> None:
        self._keys: List[Optional[K]] = [None]
        self._values: List[Optional[V]] = [None]
        self._prev: List[int] = [_HEAD]
        self._next: List[int] = [_HEAD]
        self._free: List[int] = []

    def _allocate(self, key: K, value: V) -> int:
        if self._free:
            handle = self._free.pop()
            self._keys[handle] = key
            self._values[handle] = value
            return handle
        self._keys.append(key)
        self._values.append(value)
        self._prev.append(_HEAD)
        self._next.append(_HEAD)
        return len(self._keys) - 1

    def _evict(self) -> None:
        handle = self._prev[_HEAD]
        key = self._keys[handle]
        self._unlink(handle)
        del self._index[key]  # type: ignore[arg-type]
        # Drop references so evicted objects can be collected.
        self._keys[handle] = None
        self._values[handle] = None
        self._free.append(handle)
        logger.debug(
            "lru_cache.evicted",
            extra={"evicted_key": key, "capacity": self._capacity},
        )

    # Recency list

    def _unlink(self, handle: int) -> None:
        self._version += 1
        prev, nxt = self._prev[handle], self._next[handle]
        self._next[prev] = nxt
        self._prev[nxt] = prev

    def _link_front(self, handle: int) -> None:
        self._version += 1
        first = self._next[_HEAD]
        self._prev[handle] = _HEAD
        self._next[handle] = first
        self._prev[first] = handle
        self._next[_HEAD] = handle

    def _move_to_front(self, handle: int) -> None:
        if self._next[_HEAD] == handle:
            return
        self._unlink(handle)
        self._link_front(handle)

    def _walk(self) -> Iterator[int]:
        version = self._version
        handle = self._next[_HEAD]
        while handle != _HEAD:
            yield handle
            if self._version != version:
                raise RuntimeError("LRUCache mutated during iteration")
            handle = self._next[handle]
