"""Convert maps to and from ordered sequences of ``(key, value)`` pairs.

Plain mappings may lose their order in some formats; a sequence of pairs
keeps it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from .core import IndexMapCore
from .slice import MapSlice


def serialize(core: IndexMapCore) -> list[tuple[Any, Any]]:
    """Return the map's pairs as a list, in order."""
    return core.items()


def serialize_slice(slice_: MapSlice) -> list[tuple[Any, Any]]:
    """Return a slice's pairs as a list, in order."""
    return list(slice_)


def deserialize(seq: Iterable[Any]) -> IndexMapCore:
    """Build a map from a sequence of pairs; a repeated key keeps its first position."""
    if isinstance(seq, (str, bytes, bytearray, Mapping)):
        raise TypeError("expected a sequenced map")
    try:
        elements = iter(seq)
    except TypeError:
        raise TypeError("expected a sequenced map") from None
    core = IndexMapCore()
    for position, element in enumerate(elements):
        if isinstance(element, (str, bytes, bytearray)):
            raise ValueError(
                f"invalid element at position {position}: expected a (key, value) pair"
            )
        try:
            key, value = element
        except (TypeError, ValueError):
            raise ValueError(
                f"invalid element at position {position}: expected a (key, value) pair"
            ) from None
        core.insert_full(key, value)
    return core