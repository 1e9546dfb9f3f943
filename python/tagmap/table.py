"""OrderedTable -- insertion-ordered string-keyed table.

Re-inserting a key replaces its value but keeps the position the key was
first inserted at. Tables are never mutated: ``insert`` returns a new one.
"""

from __future__ import annotations

from typing import Any, Iterator


class OrderedTable:
    """Ordered associative container from ``str`` keys to values."""

    __slots__ = ("_keys", "_index", "_values")

    def __init__(
        self,
        keys: tuple[str, ...] = (),
        values: tuple[Any, ...] = (),
    ) -> None:
        self._keys = keys
        self._values = values
        self._index: dict[str, int] = {k: i for i, k in enumerate(keys)}

    @staticmethod
    def empty() -> OrderedTable:
        """Return a table with zero entries."""
        return OrderedTable()

    def insert(self, key: str, value: Any) -> OrderedTable:
        """Return a new table with ``key`` mapped to ``value``.

        An existing key keeps its position; a new key is appended.
        """
        pos = self._index.get(key)
        if pos is None:
            return OrderedTable(self._keys + (key,), self._values + (value,))
        values = self._values[:pos] + (value,) + self._values[pos + 1:]
        return OrderedTable(self._keys, values)

    def get(self, key: str) -> Any | None:
        """Exact-match lookup. Returns None for an absent key."""
        pos = self._index.get(key)
        if pos is None:
            return None
        return self._values[pos]

    def at(self, index: int) -> tuple[str, Any] | None:
        """Entry at ``index`` in insertion order, or None when out of range."""
        if index < 0 or index >= len(self._keys):
            return None
        return self._keys[index], self._values[index]

    def to_list(self) -> list[tuple[str, Any]]:
        return list(zip(self._keys, self._values))

    def keys(self) -> list[str]:
        return list(self._keys)

    def values(self) -> list[Any]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedTable):
            return NotImplemented
        return self._keys == other._keys and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._keys, self._values))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.to_list())
        return f"OrderedTable({{{items}}})"
