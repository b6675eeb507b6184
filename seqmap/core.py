"""Insertion-ordered key-value storage with hashed lookup by key."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, Iterator

from .slice import Bucket, MapSlice
from .table import IndexTable

_MISSING = object()
_SENTINEL = -1


def _out_of_bounds(length: int, index: int) -> IndexError:
    return IndexError(f"index out of bounds: the len is {length} but the index is {index}")


class IndexMapCore:
    """Entries kept in a dense ordered list, found by key through a hash table.

    Equality ignores order: two maps are equal when they hold the same keys
    mapped to equal values.
    """

    __slots__ = ("_entries", "_indices")

    def __init__(self, items: Iterable[tuple[Any, Any]] | Mapping | None = None):
        self._entries: list[Bucket] = []
        self._indices = IndexTable()
        if items is not None:
            if isinstance(items, Mapping):
                items = items.items()
            for key, value in items:
                self.insert_full(key, value)

    @classmethod
    def _from_buckets(cls, buckets: list[Bucket]) -> IndexMapCore:
        core = cls()
        core._entries = buckets
        core._indices.rebuild(buckets)
        return core

    # -- internal helpers ----------------------------------------------------

    def _matcher(self, key: Any) -> Callable[[int], bool]:
        entries = self._entries

        def is_match(position: int) -> bool:
            stored = entries[position].key
            return stored is key or stored == key

        return is_match

    def _find(self, key: Any) -> int | None:
        return self._indices.find(hash(key), self._matcher(key))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise _out_of_bounds(len(self._entries), index)

    def _resolve_range(self, start: int | None, stop: int | None) -> tuple[int, int]:
        length = len(self._entries)
        lo = 0 if start is None else start
        hi = length if stop is None else stop
        if not 0 <= lo <= hi <= length:
            raise IndexError(f"range {start}..{stop} out of bounds for length {length}")
        return lo, hi

    def _decrement(self, start: int, end: int) -> None:
        """Shift stored positions ``start..end`` down by one; ``start - 1`` must be free."""
        if end - start > len(self._indices) // 2:
            self._indices.shift_range(start, end, -1)
        else:
            for position in range(start, end):
                self._indices.update(self._entries[position].hash_value, position, position - 1)

    def _increment(self, start: int, end: int) -> None:
        """Shift stored positions ``start..end`` up by one; ``end`` must be free."""
        if end - start > len(self._indices) // 2:
            self._indices.shift_range(start, end, 1)
        else:
            for position in reversed(range(start, end)):
                self._indices.update(self._entries[position].hash_value, position, position + 1)

    def _shift_remove_finish(self, index: int) -> tuple[Any, Any]:
        self._decrement(index + 1, len(self._entries))
        return self._entries.pop(index).pair

    def _swap_remove_finish(self, index: int) -> tuple[Any, Any]:
        removed = self._entries[index]
        moved = self._entries.pop()
        if index < len(self._entries):
            self._entries[index] = moved
            self._indices.update(moved.hash_value, len(self._entries), index)
        return removed.pair

    # -- container protocol --------------------------------------------------

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return (bucket.key for bucket in self._entries)

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexMapCore):
            return NotImplemented
        if len(self) != len(other):
            return False
        for bucket in self._entries:
            found = other.get(bucket.key, _MISSING)
            if found is _MISSING or not found == bucket.value:
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{b.key!r}: {b.value!r}" for b in self._entries)
        return f"IndexMapCore({{{body}}})"

    # -- whole-map operations ------------------------------------------------

    def copy(self) -> IndexMapCore:
        return self._from_buckets(
            [Bucket(b.hash_value, b.key, b.value) for b in self._entries]
        )

    def clear(self) -> None:
        self._indices.clear()
        self._entries.clear()

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` entries."""
        if length < len(self._entries):
            self._indices.erase_range(self._entries, length, len(self._entries))
            del self._entries[length:]

    def drain(self, start: int | None = None, stop: int | None = None) -> MapSlice:
        """Remove the entries in ``start..stop`` and return them as a slice."""
        lo, hi = self._resolve_range(start, stop)
        self._indices.erase_range(self._entries, lo, hi)
        removed = self._entries[lo:hi]
        del self._entries[lo:hi]
        return MapSlice(removed)

    def split_off(self, at: int) -> IndexMapCore:
        """Move the entries from ``at`` onwards into a new map."""
        length = len(self._entries)
        if not 0 <= at <= length:
            raise IndexError(
                f"index out of bounds: the len is {length} but the index is {at}. "
                "Expected index <= len"
            )
        self._indices.erase_range(self._entries, at, length)
        tail = self._entries[at:]
        del self._entries[at:]
        return self._from_buckets(tail)

    def split_splice(
        self, start: int | None = None, stop: int | None = None
    ) -> tuple[IndexMapCore, MapSlice]:
        """Cut the map at ``start``: return the tail after ``stop`` and the drained middle."""
        lo, hi = self._resolve_range(start, stop)
        self._indices.erase_range(self._entries, lo, len(self._entries))
        tail = self._entries[hi:]
        drained = self._entries[lo:hi]
        del self._entries[lo:]
        return self._from_buckets(tail), MapSlice(drained)

    def append_unchecked(self, other: IndexMapCore) -> None:
        """Move all of ``other``'s entries to the end without checking for duplicates."""
        for bucket in other._entries:
            self._indices.insert(bucket.hash_value, len(self._entries))
            self._entries.append(bucket)
        other.clear()

    def pop(self) -> tuple[Any, Any] | None:
        """Remove and return the last pair, or None when empty."""
        if not self._entries:
            return None
        bucket = self._entries.pop()
        self._indices.erase(bucket.hash_value, len(self._entries))
        return bucket.pair

    # -- lookup --------------------------------------------------------------

    def get_index_of(self, key: Any) -> int | None:
        return self._find(key)

    def find_index(self, hash_value: int, is_match: Callable[[Any], bool]) -> int | None:
        """Return the position of the first key under ``hash_value`` accepted by ``is_match``."""
        entries = self._entries
        return self._indices.find(hash_value, lambda position: is_match(entries[position].key))

    def get(self, key: Any, default: Any = None) -> Any:
        index = self._find(key)
        return default if index is None else self._entries[index].value

    def get_index(self, index: int) -> tuple[Any, Any] | None:
        if not 0 <= index < len(self._entries):
            return None
        return self._entries[index].pair

    def as_slice(self) -> MapSlice:
        return MapSlice(self._entries)

    def keys(self) -> list[Any]:
        return [bucket.key for bucket in self._entries]

    def values(self) -> list[Any]:
        return [bucket.value for bucket in self._entries]

    def items(self) -> list[tuple[Any, Any]]:
        return [bucket.pair for bucket in self._entries]

    # -- insertion -----------------------------------------------------------

    def insert_full(self, key: Any, value: Any) -> tuple[int, Any]:
        """Insert or update; return the index and the old value (None if new)."""
        index = self._find(key)
        if index is not None:
            bucket = self._entries[index]
            old, bucket.value = bucket.value, value
            return index, old
        return self.insert_unique(hash(key), key, value), None

    def replace_full(self, key: Any, value: Any) -> tuple[int, tuple[Any, Any] | None]:
        """Like insert_full, but also replace the stored key; return the old pair."""
        index = self._find(key)
        if index is not None:
            bucket = self._entries[index]
            old = bucket.pair
            bucket.key, bucket.value = key, value
            return index, old
        return self.insert_unique(hash(key), key, value), None

    def insert_unique(self, hash_value: int, key: Any, value: Any) -> int:
        """Append a pair without checking whether the key is present; return its index."""
        index = len(self._entries)
        self._indices.insert(hash_value, index)
        self._entries.append(Bucket(hash_value, key, value))
        return index

    def shift_insert_unique(self, index: int, hash_value: int, key: Any, value: Any) -> None:
        """Insert a pair at ``index`` without checking for the key, shifting later ones."""
        end = len(self._entries)
        if not 0 <= index <= end:
            raise IndexError(
                f"index out of bounds: the len is {end} but the index is {index}. "
                "Expected index <= len"
            )
        self._increment(index, end)
        self._indices.insert(hash_value, index)
        self._entries.insert(index, Bucket(hash_value, key, value))

    # -- removal -------------------------------------------------------------

    def shift_remove_full(self, key: Any) -> tuple[int, Any, Any] | None:
        index = self._find(key)
        if index is None:
            return None
        self._indices.erase(self._entries[index].hash_value, index)
        k, v = self._shift_remove_finish(index)
        return index, k, v

    def shift_remove_index(self, index: int) -> tuple[Any, Any] | None:
        if not 0 <= index < len(self._entries):
            return None
        self._indices.erase(self._entries[index].hash_value, index)
        return self._shift_remove_finish(index)

    def swap_remove_full(self, key: Any) -> tuple[int, Any, Any] | None:
        index = self._find(key)
        if index is None:
            return None
        self._indices.erase(self._entries[index].hash_value, index)
        k, v = self._swap_remove_finish(index)
        return index, k, v

    def swap_remove_index(self, index: int) -> tuple[Any, Any] | None:
        if not 0 <= index < len(self._entries):
            return None
        self._indices.erase(self._entries[index].hash_value, index)
        return self._swap_remove_finish(index)

    # -- reordering ----------------------------------------------------------

    def move_index(self, src: int, dst: int) -> None:
        """Move the entry at ``src`` to ``dst``, shifting the ones in between."""
        self._check_index(src)
        self._check_index(dst)
        if src == dst:
            return
        moving_hash = self._entries[src].hash_value
        self._indices.update(moving_hash, src, _SENTINEL)
        if src < dst:
            self._decrement(src + 1, dst + 1)
        else:
            self._increment(dst, src)
        self._entries.insert(dst, self._entries.pop(src))
        self._indices.update(moving_hash, _SENTINEL, dst)

    def swap_indices(self, a: int, b: int) -> None:
        """Swap the positions of the entries at ``a`` and ``b``."""
        self._check_index(a)
        self._check_index(b)
        if a == b:
            return
        hash_a = self._entries[a].hash_value
        hash_b = self._entries[b].hash_value
        self._indices.update(hash_a, a, _SENTINEL)
        self._indices.update(hash_b, b, a)
        self._indices.update(hash_a, _SENTINEL, b)
        self._entries[a], self._entries[b] = self._entries[b], self._entries[a]

    def retain_in_order(self, keep: Callable[[Any, Any], bool]) -> None:
        """Keep only the pairs for which ``keep(key, value)`` is true, in order."""
        self._entries[:] = [b for b in self._entries if keep(b.key, b.value)]
        if len(self._entries) < len(self._indices):
            self._indices.rebuild(self._entries)

    def reverse(self) -> None:
        self._entries.reverse()
        self._indices.reverse(len(self._entries))

    def with_entries(self, f: Callable[[list[Bucket]], Any]) -> None:
        """Let ``f`` reorder the bucket list in place, then rebuild the lookup table."""
        f(self._entries)
        self._indices.rebuild(self._entries)