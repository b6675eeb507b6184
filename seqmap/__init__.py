"""Insertion-ordered hash map with positional access, slices, iterators and entry views."""

__version__ = "0.1.0"
__all__ = ["core", "entry", "iter", "serde_seq", "slice", "table"]