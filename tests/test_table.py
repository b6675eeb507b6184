import pytest

from seqmap.slice import Bucket
from seqmap.table import IndexTable


def _buckets(keys):
    return [Bucket(hash(k), k, None) for k in keys]


def _assert_consistent(table, buckets):
    assert len(table) == len(buckets)
    assert sorted(table) == list(range(len(buckets)))
    for position, bucket in enumerate(buckets):
        found = table.find(bucket.hash_value, lambda j, k=bucket.key: buckets[j].key == k)
        assert found == position


def test_new_table_is_empty():
    table = IndexTable()
    assert len(table) == 0
    assert list(table) == []
    assert table.find(1, lambda j: True) is None


def test_insert_and_find():
    table = IndexTable()
    table.insert(7, 0)
    table.insert(9, 1)
    assert len(table) == 2
    assert table.find(7, lambda j: True) == 0
    assert table.find(9, lambda j: True) == 1
    assert table.find(8, lambda j: True) is None


def test_find_uses_match_on_collisions():
    buckets = [Bucket(5, "a", 1), Bucket(5, "b", 2), Bucket(5, "c", 3)]
    table = IndexTable()
    table.rebuild(buckets)
    assert table.find(5, lambda j: buckets[j].key == "b") == 1
    assert table.find(5, lambda j: buckets[j].key == "c") == 2
    assert table.find(5, lambda j: buckets[j].key == "z") is None


def test_erase():
    table = IndexTable()
    table.insert(3, 0)
    table.insert(3, 1)
    table.erase(3, 0)
    assert len(table) == 1
    assert list(table) == [1]


def test_erase_missing_raises():
    table = IndexTable()
    table.insert(3, 0)
    with pytest.raises(KeyError):
        table.erase(3, 1)
    with pytest.raises(KeyError):
        table.erase(4, 0)
    assert len(table) == 1


def test_update():
    table = IndexTable()
    table.insert(11, 4)
    table.update(11, 4, 2)
    assert table.find(11, lambda j: j == 2) == 2
    assert table.find(11, lambda j: j == 4) is None


def test_update_missing_raises():
    table = IndexTable()
    table.insert(11, 4)
    with pytest.raises(KeyError):
        table.update(11, 5, 0)
    with pytest.raises(KeyError):
        table.update(12, 4, 0)


def test_clear():
    table = IndexTable()
    table.rebuild(_buckets(range(10)))
    table.clear()
    assert len(table) == 0
    assert list(table) == []


def test_rebuild_matches_buckets():
    buckets = _buckets([0, 4, 2, 12, 8, 7, 11])
    table = IndexTable()
    table.insert(99, 50)
    table.rebuild(buckets)
    _assert_consistent(table, buckets)


@pytest.mark.parametrize("start,end", [(0, 0), (10, 90), (80, 90), (20, 30)])
def test_erase_range_heuristics(start, end):
    buckets = _buckets(range(100))
    table = IndexTable()
    table.rebuild(buckets)
    table.erase_range(buckets, start, end)
    remaining = buckets[:start] + buckets[end:]
    _assert_consistent(table, remaining)


def test_erase_range_everything():
    buckets = _buckets(range(20))
    table = IndexTable()
    table.rebuild(buckets)
    table.erase_range(buckets, 0, 20)
    assert len(table) == 0


def test_erase_range_out_of_bounds():
    buckets = _buckets(range(5))
    table = IndexTable()
    table.rebuild(buckets)
    with pytest.raises(IndexError):
        table.erase_range(buckets, 3, 6)
    with pytest.raises(IndexError):
        table.erase_range(buckets, 4, 2)
    _assert_consistent(table, buckets)


def test_shift_range_down_after_removal():
    buckets = _buckets(range(10))
    table = IndexTable()
    table.rebuild(buckets)
    table.erase(buckets[3].hash_value, 3)
    table.shift_range(4, 10, -1)
    del buckets[3]
    _assert_consistent(table, buckets)


def test_shift_range_up_before_insert():
    buckets = _buckets(range(10))
    table = IndexTable()
    table.rebuild(buckets)
    table.shift_range(2, 10, 1)
    new = Bucket(hash("new"), "new", None)
    table.insert(new.hash_value, 2)
    buckets.insert(2, new)
    _assert_consistent(table, buckets)


def test_reverse():
    buckets = _buckets(range(13))
    table = IndexTable()
    table.rebuild(buckets)
    table.reverse(len(buckets))
    _assert_consistent(table, buckets[::-1])


def test_reverse_twice_is_identity():
    buckets = _buckets(["a", "b", "c", "d"])
    table = IndexTable()
    table.rebuild(buckets)
    table.reverse(4)
    table.reverse(4)
    _assert_consistent(table, buckets)