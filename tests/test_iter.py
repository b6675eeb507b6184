import pytest

from seqmap.core import IndexMapCore
from seqmap.iter import Drain, Iter, Keys, Splice, Values


def _numbers(n):
    return IndexMapCore((i, i * i) for i in range(n))


def test_iter_default_is_empty():
    for cls in (Iter, Keys, Values):
        it = cls()
        assert len(it) == 0
        with pytest.raises(StopIteration):
            next(it)
        with pytest.raises(StopIteration):
            it.next_back()


def test_insert_order():
    insert = [0, 4, 2, 12, 8, 7, 11, 5, 3, 17, 19, 22, 23]
    core = IndexMapCore((k, None) for k in insert)
    keys = list(Keys(core.as_slice()))
    assert len(keys) == len(core) == len(insert)
    assert keys == insert
    for i, k in enumerate(Keys(core)):
        assert core.get_index(i)[0] == k


def test_keys_contains_all():
    core = IndexMapCore([(1, "a"), (2, "b"), (3, "c")])
    keys = list(Keys(core))
    assert len(keys) == 3
    assert set(keys) == {1, 2, 3}


def test_values_contains_all():
    core = IndexMapCore([(1, "a"), (2, "b"), (3, "c")])
    values = list(Values(core))
    assert len(values) == 3
    assert set(values) == {"a", "b", "c"}


def test_iter_both_ends_and_len():
    it = Iter(_numbers(5))
    assert len(it) == 5
    assert next(it) == (0, 0)
    assert it.next_back() == (4, 16)
    assert len(it) == 3
    assert it.as_slice().items() == [(1, 1), (2, 4), (3, 9)]
    assert list(it) == [(1, 1), (2, 4), (3, 9)]
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        it.next_back()


def test_values_next_back():
    vals = Values(_numbers(3))
    assert vals.next_back() == 4
    assert next(vals) == 0
    assert list(vals) == [1]


def test_keys_indexing_follows_iteration():
    core = IndexMapCore()
    for word in "Lorem ipsum dolor sit amet".split():
        core.insert_full(word.lower(), word.upper())
    assert core.get_index(0)[1] == "LOREM"
    assert Keys(core)[0] == "lorem"
    assert core.get_index(1)[1] == "IPSUM"
    assert Keys(core)[1] == "ipsum"

    core.reverse()
    assert Keys(core)[0] == "amet"
    assert Keys(core)[1] == "sit"

    core.with_entries(lambda buckets: buckets.sort(key=lambda b: b.key))
    assert Keys(core)[0] == "amet"
    assert Keys(core)[1] == "dolor"

    keys = Keys(core)
    assert keys[0] == "amet"
    assert next(keys) == "amet"
    assert keys[0] == "dolor"
    assert keys[1] == "ipsum"

    sub = core.as_slice()[2:]
    assert sub[0] == "IPSUM"
    assert Keys(sub)[0] == "ipsum"


def test_keys_index_out_of_bounds():
    core = IndexMapCore([("foo", 1)])
    with pytest.raises(IndexError):
        Keys(core)[10]


@pytest.mark.parametrize("start,stop", [(0, 0), (10, 90), (80, 90), (20, 30)])
def test_drain_range(start, stop):
    expected = list(range(100))
    removed = expected[start:stop]
    del expected[start:stop]
    core = IndexMapCore((i, None) for i in range(100))
    drained = Drain(core, start, stop)
    assert len(drained) == len(removed)
    assert [k for k, _ in drained] == removed
    assert core.keys() == expected
    for i, x in enumerate(expected):
        assert core.get_index_of(x) == i


def test_drain_removes_even_when_not_consumed():
    core = _numbers(6)
    drained = Drain(core, 1, 4)
    assert core.keys() == [0, 4, 5]
    assert drained.next_back() == (3, 9)
    assert drained.as_slice().items() == [(1, 1), (2, 4)]


def test_drain_out_of_range():
    core = _numbers(3)
    with pytest.raises(IndexError):
        Drain(core, 2, 5)


def test_splice_replaces_range():
    core = IndexMapCore((i, str(i)) for i in range(5))
    with Splice(core, 1, 3, [(10, "a"), (4, "b"), (0, "c")]) as splice:
        assert len(splice) == 2
        assert list(splice) == [(1, "1"), (2, "2")]
    assert core.items() == [(0, "c"), (10, "a"), (3, "3"), (4, "b")]
    for i, k in enumerate(core.keys()):
        assert core.get_index_of(k) == i


def test_splice_close_without_iterating():
    core = IndexMapCore((i, i) for i in range(4))
    splice = Splice(core, 2, None, [(7, 70), (8, 80)])
    assert splice.next_back() == (3, 3)
    splice.close()
    splice.close()
    assert core.items() == [(0, 0), (1, 1), (7, 70), (8, 80)]
    with pytest.raises(StopIteration):
        next(splice)


def test_splice_reinserts_removed_key_at_end_of_head():
    core = IndexMapCore((i, i) for i in range(4))
    with Splice(core, 0, 2, [(1, "one")]):
        pass
    assert core.items() == [(1, "one"), (2, 2), (3, 3)]
    assert core.get_index_of(3) == 2