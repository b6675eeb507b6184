"""Hash-keyed lookup from a key's hash to its position in the entry list."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Protocol


class _Hashed(Protocol):
    hash_value: int


class IndexTable:
    """A multimap from hash values to entry positions.

    The table stores only positions; callers decide which position matches
    a key by inspecting their own entry list. Several positions may share
    one hash value.
    """

    __slots__ = ("_slots", "_count")

    def __init__(self) -> None:
        self._slots: dict[int, list[int]] = {}
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[int]:
        for positions in self._slots.values():
            yield from positions

    def __repr__(self) -> str:
        return f"IndexTable({sorted(self)!r})"

    def clear(self) -> None:
        self._slots.clear()
        self._count = 0

    def find(self, hash_value: int, is_match: Callable[[int], bool]) -> int | None:
        """Return the first position under ``hash_value`` accepted by ``is_match``."""
        for position in self._slots.get(hash_value, ()):
            if is_match(position):
                return position
        return None

    def insert(self, hash_value: int, index: int) -> None:
        """Record ``index`` under ``hash_value`` without checking for duplicates."""
        self._slots.setdefault(hash_value, []).append(index)
        self._count += 1

    def erase(self, hash_value: int, index: int) -> None:
        """Remove ``index`` from under ``hash_value``; KeyError if it is absent."""
        positions = self._slots.get(hash_value)
        if positions is None or index not in positions:
            raise KeyError("index not found")
        positions.remove(index)
        if not positions:
            del self._slots[hash_value]
        self._count -= 1

    def update(self, hash_value: int, old: int, new: int) -> None:
        """Replace position ``old`` with ``new`` under ``hash_value``; KeyError if absent."""
        positions = self._slots.get(hash_value)
        if positions is None:
            raise KeyError("index not found")
        try:
            slot = positions.index(old)
        except ValueError:
            raise KeyError("index not found") from None
        positions[slot] = new

    def rebuild(self, buckets: Iterable[_Hashed]) -> None:
        """Clear the table and record every bucket at its position."""
        self.clear()
        for position, bucket in enumerate(buckets):
            self.insert(bucket.hash_value, position)

    def erase_range(self, buckets: list[_Hashed], start: int, end: int) -> None:
        """Erase positions ``start..end`` and shift ``end..`` down to ``start..``.

        ``buckets`` must still hold every entry at its original position.
        """
        if not 0 <= start <= end <= len(buckets):
            raise IndexError(
                f"range {start}..{end} out of bounds for length {len(buckets)}"
            )
        erased = end - start
        shifted = len(buckets) - end
        half = self._count // 2

        if erased == 0:
            return
        if start + shifted < half and start < erased:
            # Few positions survive: rebuild from the kept entries.
            self.clear()
            for position, bucket in enumerate(buckets[:start]):
                self.insert(bucket.hash_value, position)
            for position, bucket in enumerate(buckets[end:], start):
                self.insert(bucket.hash_value, position)
        elif erased + shifted < half:
            # Few positions are affected: adjust each one.
            for position in range(start, end):
                self.erase(buckets[position].hash_value, position)
            for old in range(end, len(buckets)):
                self.update(buckets[old].hash_value, old, old - erased)
        else:
            # Sweep the whole table.
            kept: dict[int, list[int]] = {}
            for hash_value, positions in self._slots.items():
                adjusted = [
                    p - erased if p >= end else p
                    for p in positions
                    if p < start or p >= end
                ]
                if adjusted:
                    kept[hash_value] = adjusted
            self._slots = kept
            self._count = sum(len(p) for p in kept.values())

    def shift_range(self, start: int, end: int, delta: int) -> None:
        """Add ``delta`` to every stored position in ``start..end``."""
        for positions in self._slots.values():
            for slot, position in enumerate(positions):
                if start <= position < end:
                    positions[slot] = position + delta

    def reverse(self, length: int) -> None:
        """Map every position ``i`` to ``length - i - 1``."""
        for positions in self._slots.values():
            positions[:] = [length - position - 1 for position in positions]