# seqmap

`seqmap` is a hash map that keeps insertion order and lets you reach each
entry by position as well as by key. A key lookup goes through a hash table
to the entry's position. Every entry has an index in `0..len`.

## Installing

```
pip install seqmap
```

## Modules

### `seqmap.core`

`IndexMapCore` is the map. You can build it from an iterable of
`(key, value)` pairs or from a mapping.

- Inserting: `insert_full(key, value)` returns `(index, old_value)`, where
  `old_value` is `None` for a new key. `replace_full` does the same, but
  also replaces the stored key and returns the old pair.
  `insert_unique` and `shift_insert_unique` add a pair without checking
  whether the key is already there.
- Reading: `get(key, default)`, `get_index(index)`, `get_index_of(key)`,
  `find_index(hash_value, is_match)`, `keys()`, `values()`, `items()`,
  `as_slice()`, `len()`, `in` and iteration over the keys.
- Removing: `swap_remove_full` and `swap_remove_index` fill the gap with
  the last entry. `shift_remove_full` and `shift_remove_index` move every
  later entry down and so keep the order. `pop()` removes the last pair.
  `clear`, `truncate`, `drain(start, stop)`, `split_off(at)`,
  `split_splice(start, stop)` and `retain_in_order(keep)` remove several
  pairs at once.
- Reordering: `move_index(src, dst)`, `swap_indices(a, b)` and
  `reverse()`. `with_entries(f)` lets `f` rearrange the bucket list in
  place and then rebuilds the lookup table.
- Other: `copy()` and `append_unchecked(other)`.

An index out of range raises `IndexError`. Two maps are equal when they
hold the same keys with equal values, whatever their order.

### `seqmap.slice`

`Bucket` holds one entry: `hash_value`, `key` and `value`. `MapSlice` is
a view over a run of consecutive buckets.

- Access: `slice[i]` gives the value and `slice[i] = v` sets it.
  `slice[a:b]` gives a sub-slice; a step is not allowed.
- Positions: `get_index`, `get_range`, `first`, `last`, `split_at`,
  `split_first` and `split_last`.
- Contents: `keys()`, `values()` and `items()`.
- Searching: `binary_search_keys`, `binary_search_by` and
  `binary_search_by_key` return a `SearchResult(found, index)`.
  `partition_point` returns the index of the first pair for which the
  predicate is false.

Slices compare pair by pair in order, and they can be hashed and sorted.

### `seqmap.table`

`IndexTable` maps hash values to entry positions. `IndexMapCore` uses it
for lookups, and you will not usually need it directly.

### `seqmap.entry`

- `entry(core, key)` returns an `OccupiedEntry` or a `VacantEntry`. Both
  have `index`, `key`, `insert_entry`, `or_insert`, `or_insert_with`,
  `or_insert_with_key` and `and_modify`.
- `VacantEntry` also has `insert_sorted` and `shift_insert`.
- `OccupiedEntry` also has `get`, `insert`, `swap_remove`, `shift_remove`,
  their `_entry` forms, `move_index` and `swap_indices`.
- `get_index_entry(core, index)`, `first_entry(core)` and
  `last_entry(core)` return an `IndexedEntry`, or `None` when there is no
  such entry.
- `OccupiedEntry.into_indexed()` and `IndexedEntry.into_occupied()`
  convert one kind of entry into the other.

An entry stays valid only until the map is changed by some other means.

### `seqmap.iter`

- `Iter`, `Keys` and `Values` iterate over a slice, a map or a list of
  buckets. You can consume them from both ends with `next` and
  `next_back`. `len()` gives the number of items left.
- Indexing `Keys` is relative to the keys not yet taken.
- `Drain(core, start, stop)` removes a range straight away and yields the
  removed pairs.
- `Splice(core, start, stop, replace_with)` yields the removed pairs. The
  replacement pairs go in on `close()` or when a `with` block ends. A key
  that already exists keeps its position and only takes the new value.

### `seqmap.serde_seq`

- `serialize(core)` and `serialize_slice(slice_)` return the pairs as an
  ordered list.
- `deserialize(seq)` builds a map from a sequence of pairs. A repeated key
  keeps its first position and takes the last value.
- A string, bytes or mapping passed as `seq` raises `TypeError`. An element
  that is not a pair raises `ValueError`.

## Example

```python
from seqmap.core import IndexMapCore
from seqmap.entry import entry

m = IndexMapCore([("lorem", 1), ("ipsum", 2), ("dolor", 3)])
m.insert_full("sit", 4)        # (3, None)
m.get_index(1)                 # ("ipsum", 2)
m.swap_remove_full("lorem")    # (0, "lorem", 1); "sit" moves to index 0
m.move_index(0, 2)             # keys are now ipsum, dolor, sit

entry(m, "amet").or_insert(5)  # 5
m.keys()                       # ["ipsum", "dolor", "sit", "amet"]
```

## What it does not do

- `IndexMapCore` has no `m[key]` subscripting and does not implement the
  `dict` or `MutableMapping` interface. Use `get`, `insert_full` and the
  removal methods instead.
- `serde_seq` only converts to and from Python lists of pairs. It does not
  read or write any file format.

## Running the tests

```
pip install -e ".[test]"
pytest
```