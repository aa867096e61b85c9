"""A thread-safe insertion-ordered set."""

import threading
from typing import Any, Dict, Hashable, Iterator, List


class ConcurrentSet:
    """Set of hashable items guarded by a lock."""

    def __init__(self) -> None:
        self._items: Dict[Hashable, None] = {}
        self._lock = threading.Lock()

    def add(self, item: Hashable) -> None:
        with self._lock:
            self._items[item] = None

    def remove(self, item: Hashable) -> None:
        """Remove ``item`` if present."""
        with self._lock:
            self._items.pop(item, None)

    def __contains__(self, item: Any) -> bool:
        with self._lock:
            return item in self._items

    def __iter__(self) -> Iterator[Hashable]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)

    def to_string_list(self) -> List[str]:
        """Return the items as strings; every item must be a string."""
        with self._lock:
            snapshot = list(self._items)
        for item in snapshot:
            if not isinstance(item, str):
                raise TypeError(f"set holds a non-string item: {item!r}")
        return snapshot

    def to_int_list(self) -> List[int]:
        """Return the integer items, leaving out everything else."""
        with self._lock:
            return [
                item
                for item in self._items
                if isinstance(item, int) and not isinstance(item, bool)
            ]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)