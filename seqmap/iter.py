"""Double-ended iterators over the pairs, keys or values of an ordered map."""

from __future__ import annotations

from typing import Any, Iterable

from .core import IndexMapCore
from .slice import Bucket, MapSlice


def _as_slice(source: MapSlice | IndexMapCore | Iterable[Bucket] | None) -> MapSlice:
    if source is None:
        return MapSlice([])
    if isinstance(source, MapSlice):
        return source
    if isinstance(source, IndexMapCore):
        return source.as_slice()
    return MapSlice(list(source))


class _Cursor:
    """A window over a slice that can be consumed from either end."""

    __slots__ = ("_slice", "_front", "_back")

    def __init__(self, source: MapSlice | IndexMapCore | Iterable[Bucket] | None = None):
        self._slice = _as_slice(source)
        self._front = 0
        self._back = len(self._slice)

    def __iter__(self):
        return self

    def __len__(self) -> int:
        return self._back - self._front

    def _pop_front(self) -> tuple[Any, Any]:
        if self._front >= self._back:
            raise StopIteration
        pair = self._slice.get_index(self._front)
        self._front += 1
        return pair

    def _pop_back(self) -> tuple[Any, Any]:
        if self._front >= self._back:
            raise StopIteration
        self._back -= 1
        return self._slice.get_index(self._back)

    def _remaining(self) -> MapSlice:
        return self._slice.get_range(self._front, self._back)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._render()!r})"

    def _render(self) -> list[Any]:
        return self._remaining().items()


class Iter(_Cursor):
    """Iterator over ``(key, value)`` pairs."""

    __slots__ = ()

    def __init__(self, buckets: MapSlice | IndexMapCore | Iterable[Bucket] | None = None):
        super().__init__(buckets)

    def __iter__(self) -> Iter:
        return self

    def __next__(self) -> tuple[Any, Any]:
        return self._pop_front()

    def __len__(self) -> int:
        return super().__len__()

    def next_back(self) -> tuple[Any, Any]:
        """Take the last remaining pair; StopIteration when exhausted."""
        return self._pop_back()

    def as_slice(self) -> MapSlice:
        """Return the pairs not yet taken."""
        return self._remaining()


class Keys(_Cursor):
    """Iterator over keys; indexing is relative to the keys not yet taken."""

    __slots__ = ()

    def __init__(self, buckets: MapSlice | IndexMapCore | Iterable[Bucket] | None = None):
        super().__init__(buckets)

    def __iter__(self) -> Keys:
        return self

    def __next__(self) -> Any:
        return self._pop_front()[0]

    def __len__(self) -> int:
        return super().__len__()

    def __getitem__(self, index: int) -> Any:
        length = len(self)
        position = index + length if index < 0 else index
        if not 0 <= position < length:
            raise IndexError(
                f"index out of bounds: the len is {length} but the index is {index}"
            )
        return self._slice.get_index(self._front + position)[0]

    def next_back(self) -> Any:
        """Take the last remaining key; StopIteration when exhausted."""
        return self._pop_back()[0]

    def _render(self) -> list[Any]:
        return self._remaining().keys()


class Values(_Cursor):
    """Iterator over values."""

    __slots__ = ()

    def __init__(self, buckets: MapSlice | IndexMapCore | Iterable[Bucket] | None = None):
        super().__init__(buckets)

    def __iter__(self) -> Values:
        return self

    def __next__(self) -> Any:
        return self._pop_front()[1]

    def __len__(self) -> int:
        return super().__len__()

    def next_back(self) -> Any:
        """Take the last remaining value; StopIteration when exhausted."""
        return self._pop_back()[1]

    def _render(self) -> list[Any]:
        return self._remaining().values()


class Drain(_Cursor):
    """Removes ``start..stop`` from a map at once and yields the removed pairs."""

    __slots__ = ()

    def __init__(self, core: IndexMapCore, start: int | None = None, stop: int | None = None):
        super().__init__(core.drain(start, stop))

    def __iter__(self) -> Drain:
        return self

    def __next__(self) -> tuple[Any, Any]:
        return self._pop_front()

    def __len__(self) -> int:
        return super().__len__()

    def next_back(self) -> tuple[Any, Any]:
        """Take the last remaining removed pair; StopIteration when exhausted."""
        return self._pop_back()

    def as_slice(self) -> MapSlice:
        """Return the removed pairs not yet taken."""
        return self._remaining()


class Splice(_Cursor):
    """Replaces ``start..stop`` of a map with new pairs.

    Iterating yields the removed pairs. The new pairs are put in when the
    splice is closed, explicitly or on leaving a ``with`` block: a key that
    already exists keeps its position and only takes the new value, other
    keys are added where the removed range was.
    """

    __slots__ = ("_core", "_tail", "_replace_with", "_closed")

    def __init__(
        self,
        core: IndexMapCore,
        start: int | None,
        stop: int | None,
        replace_with: Iterable[tuple[Any, Any]],
    ):
        tail, drained = core.split_splice(start, stop)
        super().__init__(drained)
        self._core = core
        self._tail = tail
        self._replace_with = iter(replace_with)
        self._closed = False

    def __iter__(self) -> Splice:
        return self

    def __next__(self) -> tuple[Any, Any]:
        return self._pop_front()

    def __len__(self) -> int:
        return super().__len__()

    def next_back(self) -> tuple[Any, Any]:
        """Take the last remaining removed pair; StopIteration when exhausted."""
        return self._pop_back()

    def __enter__(self) -> Splice:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Insert the replacement pairs and reattach the tail; idempotent."""
        if self._closed:
            return
        self._closed = True
        self._front = self._back
        try:
            for key, value in self._replace_with:
                index = self._tail.get_index_of(key)
                if index is not None:
                    self._tail.as_slice()[index] = value
                else:
                    self._core.insert_full(key, value)
        finally:
            self._core.append_unchecked(self._tail)

    def __del__(self) -> None:
        if getattr(self, "_closed", True) is False:
            self.close()