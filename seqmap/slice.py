"""Ordered views over a run of key-value buckets."""

from __future__ import annotations

import functools
import operator
from dataclasses import dataclass
from itertools import islice
from typing import Any, Callable, Iterator, NamedTuple


@dataclass(slots=True)
class Bucket:
    """One stored entry: the key's hash, the key and its value."""

    hash_value: int
    key: Any
    value: Any

    @property
    def pair(self) -> tuple[Any, Any]:
        return (self.key, self.value)


class SearchResult(NamedTuple):
    """Outcome of a binary search: where the item is, or where it would go."""

    found: bool
    index: int


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


@functools.total_ordering
class MapSlice:
    """A view of consecutive key-value pairs, indexed by position.

    Unlike the map itself, a slice compares its pairs in order and is
    hashable and orderable.
    """

    __slots__ = ("_buckets", "_start", "_stop")

    def __init__(self, buckets: list[Bucket], start: int = 0, stop: int | None = None):
        if stop is None:
            stop = len(buckets)
        if not 0 <= start <= stop <= len(buckets):
            raise IndexError(
                f"range {start}..{stop} out of bounds for length {len(buckets)}"
            )
        self._buckets = buckets
        self._start = start
        self._stop = stop

    # -- helpers -----------------------------------------------------------

    def _bucket_at(self, index: int) -> Bucket:
        position = operator.index(index)
        length = len(self)
        resolved = position + length if position < 0 else position
        if not 0 <= resolved < length:
            raise IndexError(
                f"index out of bounds: the len is {length} but the index is {position}"
            )
        return self._buckets[self._start + resolved]

    def _range(self, start: int | None, stop: int | None) -> tuple[int, int] | None:
        length = len(self)
        lo = 0 if start is None else operator.index(start)
        hi = length if stop is None else operator.index(stop)
        if lo < 0 or hi < 0 or lo > hi or hi > length:
            return None
        return lo, hi

    def _sub(self, lo: int, hi: int) -> MapSlice:
        return MapSlice(self._buckets, self._start + lo, self._start + hi)

    def _bucket_iter(self) -> Iterator[Bucket]:
        return islice(self._buckets, self._start, self._stop)

    # -- container protocol -----------------------------------------------

    def __len__(self) -> int:
        return self._stop - self._start

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        for bucket in self._bucket_iter():
            yield bucket.pair

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            if index.step not in (None, 1):
                raise ValueError("slices of a map do not support a step")
            length = len(self)
            start, stop = index.start, index.stop
            if start is not None and start < 0:
                start += length
            if stop is not None and stop < 0:
                stop += length
            bounds = self._range(start, stop)
            if bounds is None:
                raise IndexError(
                    f"range {index.start}..{index.stop} out of bounds for length {length}"
                )
            return self._sub(*bounds)
        return self._bucket_at(index).value

    def __setitem__(self, index: int, value: Any) -> None:
        self._bucket_at(index).value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapSlice):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, MapSlice):
            return NotImplemented
        return list(self) < list(other)

    def __hash__(self) -> int:
        return hash((len(self), tuple(self)))

    def __repr__(self) -> str:
        return f"MapSlice({list(self)!r})"

    # -- positional access --------------------------------------------------

    def get_index(self, index: int) -> tuple[Any, Any] | None:
        """Return the pair at ``index``, or None when it is out of range."""
        if not 0 <= index < len(self):
            return None
        return self._buckets[self._start + index].pair

    def get_range(self, start: int | None, stop: int | None) -> MapSlice | None:
        """Return the sub-slice ``start..stop`` (None means unbounded), or None if invalid."""
        bounds = self._range(start, stop)
        return None if bounds is None else self._sub(*bounds)

    def first(self) -> tuple[Any, Any] | None:
        return self.get_index(0)

    def last(self) -> tuple[Any, Any] | None:
        return self.get_index(len(self) - 1) if len(self) else None

    def split_at(self, index: int) -> tuple[MapSlice, MapSlice]:
        """Divide into ``[0, index)`` and ``[index, len)``; raises IndexError if index > len."""
        if not 0 <= index <= len(self):
            raise IndexError(
                f"split index {index} out of bounds for length {len(self)}"
            )
        return self._sub(0, index), self._sub(index, len(self))

    def split_first(self) -> tuple[tuple[Any, Any], MapSlice] | None:
        if not len(self):
            return None
        return self._buckets[self._start].pair, self._sub(1, len(self))

    def split_last(self) -> tuple[tuple[Any, Any], MapSlice] | None:
        if not len(self):
            return None
        return self._buckets[self._stop - 1].pair, self._sub(0, len(self) - 1)

    def keys(self) -> list[Any]:
        return [bucket.key for bucket in self._bucket_iter()]

    def values(self) -> list[Any]:
        return [bucket.value for bucket in self._bucket_iter()]

    def items(self) -> list[tuple[Any, Any]]:
        return list(self)

    # -- searching -----------------------------------------------------------

    def binary_search_keys(self, x: Any) -> SearchResult:
        """Search a slice sorted by key for ``x``."""
        return self.binary_search_by(lambda key, _value: _sign(key, x))

    def binary_search_by(self, f: Callable[[Any, Any], int]) -> SearchResult:
        """Search with ``f(key, value)`` returning negative, zero or positive."""
        left, right = 0, len(self)
        while left < right:
            mid = (left + right) // 2
            bucket = self._buckets[self._start + mid]
            order = f(bucket.key, bucket.value)
            if order < 0:
                left = mid + 1
            elif order > 0:
                right = mid
            else:
                return SearchResult(True, mid)
        return SearchResult(False, left)

    def binary_search_by_key(self, b: Any, f: Callable[[Any, Any], Any]) -> SearchResult:
        """Search a slice sorted by ``f(key, value)`` for ``b``."""
        return self.binary_search_by(lambda key, value: _sign(f(key, value), b))

    def partition_point(self, pred: Callable[[Any, Any], bool]) -> int:
        """Return the index of the first pair for which ``pred`` is false."""
        left, right = 0, len(self)
        while left < right:
            mid = (left + right) // 2
            bucket = self._buckets[self._start + mid]
            if pred(bucket.key, bucket.value):
                left = mid + 1
            else:
                right = mid
        return left