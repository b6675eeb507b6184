"""Entry views into an ordered map: occupied, vacant, or located by index.

An entry stays valid only until the map is changed by some other means.
"""

from __future__ import annotations

from typing import Any, Callable

from .core import IndexMapCore


class _Positioned:
    """Shared state and helpers of entries that point at an existing pair."""

    __slots__ = ("_core", "_index")

    def __init__(self, core: IndexMapCore, index: int):
        self._core = core
        self._index = index

    def _key(self) -> Any:
        return self._core.get_index(self._index)[0]

    def _get(self) -> Any:
        return self._core.get_index(self._index)[1]

    def _set(self, value: Any) -> None:
        self._core.as_slice()[self._index] = value

    def _replace(self, value: Any) -> Any:
        old = self._get()
        self._set(value)
        return old

    def _swap_remove_entry(self) -> tuple[Any, Any]:
        return self._core.swap_remove_index(self._index)

    def _shift_remove_entry(self) -> tuple[Any, Any]:
        return self._core.shift_remove_index(self._index)


class OccupiedEntry(_Positioned):
    """A view of a key that is present in the map."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"OccupiedEntry(key={self.key()!r}, value={self.get()!r})"

    def index(self) -> int:
        """Return the position of the pair."""
        return self._index

    def key(self) -> Any:
        """Return the key as stored in the map, not the key used for lookup."""
        return self._key()

    def get(self) -> Any:
        """Return the stored value."""
        return self._get()

    def insert(self, value: Any) -> Any:
        """Replace the value and return the old one."""
        return self._replace(value)

    def insert_entry(self, value: Any) -> OccupiedEntry:
        """Set the value and return this entry."""
        self._set(value)
        return self

    def or_insert(self, default: Any) -> Any:
        """Return the existing value; ``default`` is ignored."""
        return self._get()

    def or_insert_with(self, call: Callable[[], Any]) -> Any:
        """Return the existing value without calling ``call``."""
        return self._get()

    def or_insert_with_key(self, call: Callable[[Any], Any]) -> Any:
        """Return the existing value without calling ``call``."""
        return self._get()

    def and_modify(self, f: Callable[[Any], Any]) -> OccupiedEntry:
        """Replace the value with ``f(value)`` and return this entry."""
        self._set(f(self._get()))
        return self

    def swap_remove(self) -> Any:
        """Remove the pair by moving the last pair into its place; return its value."""
        return self._swap_remove_entry()[1]

    def shift_remove(self) -> Any:
        """Remove the pair by shifting all later pairs down; return its value."""
        return self._shift_remove_entry()[1]

    def swap_remove_entry(self) -> tuple[Any, Any]:
        """Remove the pair by moving the last pair into its place; return it."""
        return self._swap_remove_entry()

    def shift_remove_entry(self) -> tuple[Any, Any]:
        """Remove the pair by shifting all later pairs down; return it."""
        return self._shift_remove_entry()

    def move_index(self, to: int) -> None:
        """Move the pair to position ``to``; IndexError if ``to`` is out of bounds."""
        self._core.move_index(self._index, to)

    def swap_indices(self, other: int) -> None:
        """Swap the pair with the one at ``other``; IndexError if out of bounds."""
        self._core.swap_indices(self._index, other)

    def into_indexed(self) -> IndexedEntry:
        """Return the same position as an IndexedEntry."""
        return IndexedEntry(self._core, self._index)


class VacantEntry:
    """A view of a key that is absent, with the place where it would go."""

    __slots__ = ("_core", "_hash_value", "_key")

    def __init__(self, core: IndexMapCore, hash_value: int, key: Any):
        self._core = core
        self._hash_value = hash_value
        self._key = key

    def __repr__(self) -> str:
        return f"VacantEntry({self._key!r})"

    def index(self) -> int:
        """Return the position a plain insert would give the pair."""
        return len(self._core)

    def key(self) -> Any:
        """Return the key used to find this entry."""
        return self._key

    def insert_entry(self, value: Any) -> OccupiedEntry:
        """Append the key with ``value`` and return the now occupied entry."""
        index = self._core.insert_unique(self._hash_value, self._key, value)
        return OccupiedEntry(self._core, index)

    def insert(self, value: Any) -> Any:
        """Append the key with ``value`` and return the value."""
        return self.insert_entry(value).get()

    def insert_sorted(self, value: Any) -> tuple[int, Any]:
        """Insert at the key's sorted position; return the index and the value.

        If the keys are not sorted the position is whatever the binary
        search yields, and the pair goes there regardless.
        """
        index = self._core.as_slice().binary_search_keys(self._key).index
        return index, self.shift_insert(index, value)

    def shift_insert(self, index: int, value: Any) -> Any:
        """Insert at ``index``, shifting later pairs up; return the value.

        Raises IndexError if ``index`` is greater than the map's length.
        """
        self._core.shift_insert_unique(index, self._hash_value, self._key, value)
        return value

    def or_insert(self, default: Any) -> Any:
        """Insert ``default`` and return it."""
        return self.insert(default)

    def or_insert_with(self, call: Callable[[], Any]) -> Any:
        """Insert ``call()`` and return it."""
        return self.insert(call())

    def or_insert_with_key(self, call: Callable[[Any], Any]) -> Any:
        """Insert ``call(key)`` and return it."""
        return self.insert(call(self._key))

    def and_modify(self, f: Callable[[Any], Any]) -> VacantEntry:
        """Do nothing, as there is no value to modify; return this entry."""
        return self


class IndexedEntry(_Positioned):
    """A view of the pair at a known position."""

    __slots__ = ()

    def __repr__(self) -> str:
        return (
            f"IndexedEntry(index={self._index!r}, key={self.key()!r}, "
            f"value={self.get()!r})"
        )

    def index(self) -> int:
        """Return the position of the pair."""
        return self._index

    def key(self) -> Any:
        """Return the key stored at this position."""
        return self._key()

    def get(self) -> Any:
        """Return the value stored at this position."""
        return self._get()

    def insert(self, value: Any) -> Any:
        """Replace the value and return the old one."""
        return self._replace(value)

    def swap_remove(self) -> Any:
        """Remove the pair by moving the last pair into its place; return its value."""
        return self._swap_remove_entry()[1]

    def shift_remove(self) -> Any:
        """Remove the pair by shifting all later pairs down; return its value."""
        return self._shift_remove_entry()[1]

    def swap_remove_entry(self) -> tuple[Any, Any]:
        """Remove the pair by moving the last pair into its place; return it."""
        return self._swap_remove_entry()

    def shift_remove_entry(self) -> tuple[Any, Any]:
        """Remove the pair by shifting all later pairs down; return it."""
        return self._shift_remove_entry()

    def move_index(self, to: int) -> None:
        """Move the pair to position ``to``; IndexError if ``to`` is out of bounds."""
        self._core.move_index(self._index, to)

    def swap_indices(self, other: int) -> None:
        """Swap the pair with the one at ``other``; IndexError if out of bounds."""
        self._core.swap_indices(self._index, other)

    def into_occupied(self) -> OccupiedEntry:
        """Return the same position as an OccupiedEntry."""
        return OccupiedEntry(self._core, self._index)


Entry = OccupiedEntry | VacantEntry


def entry(core: IndexMapCore, key: Any) -> Entry:
    """Return the entry for ``key``: occupied if present, vacant otherwise."""
    index = core.get_index_of(key)
    if index is None:
        return VacantEntry(core, hash(key), key)
    return OccupiedEntry(core, index)


def get_index_entry(core: IndexMapCore, index: int) -> IndexedEntry | None:
    """Return the entry at ``index``, or None when it is out of range."""
    if not 0 <= index < len(core):
        return None
    return IndexedEntry(core, index)


def first_entry(core: IndexMapCore) -> IndexedEntry | None:
    """Return the entry of the first pair, or None when the map is empty."""
    return get_index_entry(core, 0)


def last_entry(core: IndexMapCore) -> IndexedEntry | None:
    """Return the entry of the last pair, or None when the map is empty."""
    if not len(core):
        return None
    return get_index_entry(core, len(core) - 1)