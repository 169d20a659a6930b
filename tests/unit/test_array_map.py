"""
Unit tests for ArrayMap: insertion order, hint-based removal and the
iterable operations seen through (key, value) callbacks.
"""

import logging

import pytest

from functional_collections import (
    ABSENT,
    NOT_MAPPED,
    ArrayMap,
    ConstructionError,
    EmptyCollectionError,
    List,
    Map,
)
from functional_collections import array_map as array_map_module


def entry_pairs(result):
    return [(entry.key, entry.value) for entry in result.items]


class TestOrdering:
    """Tests for insertion order."""

    def test_keys_and_values_are_ordered(self):
        """Test that replacement keeps positions and new keys go last."""
        result = ArrayMap(1, 10, 2, 20, 3, 30, 4, 40, 5, 50)
        result.put(0, 100)
        result.put(-5, -50)
        result.put(7, 70)
        result.remove(3)

        assert result.keys().items == [1, 2, 4, 5, 0, -5, 7]
        assert result.values().items == [10, 20, 40, 50, 100, -50, 70]

    def test_replacement_keeps_position(self):
        """Test that putting an existing key does not reorder."""
        result = ArrayMap("a", 1, "b", 2)
        assert result.put("a", 3) == 1
        assert entry_pairs(result) == [("a", 3), ("b", 2)]

    def test_reinserted_key_goes_last(self):
        """Test that a removed then re-added key is appended."""
        result = ArrayMap("a", 1, "b", 2, "c", 3)
        result.remove("a")
        assert not result.contains_key("a")
        result.put("a", 1)
        assert result.keys().items == ["b", "c", "a"]

    def test_entries_are_shared_with_the_index(self):
        """Test that the ordered list and the index hold the same entries."""
        result = ArrayMap("a", 1, "b", 2)
        result.put("a", 5)
        indexed = sorted(result._map._entries.values(), key=lambda entry: entry.key)
        assert all(x is y for x, y in zip(indexed, result.items, strict=True))

    def test_get_or_put_appends_on_miss(self):
        """Test that get_or_put records new keys in order."""
        result = ArrayMap("a", 1)
        assert result.get_or_put("a", 9) == 1
        assert result.get_or_put("b", lambda: 2) == 2
        assert result.keys().items == ["a", "b"]
        assert result.size() == 2

    def test_absent_marker_as_value(self):
        """Test that storing the ABSENT marker does not duplicate the key."""
        result = ArrayMap()
        result.put("a", ABSENT)
        result.put("a", ABSENT)
        assert result.keys().items == ["a"]


class TestRemoval:
    """Tests for the entry search behind remove()."""

    def test_linear_search_removal(self):
        """Test removal in short maps."""
        result = ArrayMap(1, 10, 2, 20, 3, 30)
        assert result.remove(2) == 20
        assert result.keys().items == [1, 3]
        assert result.remove(3) == 30
        assert result.remove(1) == 10
        assert result.size() == 0
        assert result.items == []

    def test_binary_search_removal(self):
        """Test removal in long maps with stale hints."""
        result = ArrayMap()
        for i in range(100):
            result.put(i, i * 2)
        for i in range(90):
            result.remove(i)

        assert result.keys().items == list(range(90, 100))
        assert result.size() == 10

        result.remove(92)
        assert result.keys().items == [90, 91, 93, 94, 95, 96, 97, 98, 99]
        assert result.size() == 9

        result.remove(98)
        assert entry_pairs(result) == [
            (90, 180),
            (91, 182),
            (93, 186),
            (94, 188),
            (95, 190),
            (96, 192),
            (97, 194),
            (99, 198),
        ]

    def test_removal_after_appending_smaller_hints(self, caplog):
        """Test removal once hints no longer grow along the list."""
        result = ArrayMap()
        for i in range(100):
            result.put(i, i)
        for i in range(90):
            result.remove(i)
        result.put("late", 1)

        with caplog.at_level(logging.DEBUG, logger=array_map_module.__name__):
            assert result.remove("late") == 1

        assert result.keys().items == list(range(90, 100))
        assert "Stale insertion hint" in caplog.text

    def test_removal_from_the_middle(self):
        """Test removing every other key of a long map."""
        result = ArrayMap()
        for i in range(50):
            result.put(i, str(i))
        for i in range(0, 50, 2):
            assert result.remove(i) == str(i)
        assert result.keys().items == list(range(1, 50, 2))
        for i in range(49, 0, -2):
            result.remove(i)
        assert result.size() == 0
        assert result.items == []

    def test_remove_if_keeps_order(self):
        """Test removing by predicate in a long map."""
        result = ArrayMap()
        for i in range(30):
            result.put(i, i)
        result.remove_if(lambda key, value: value % 3 == 0)
        assert result.keys().items == [i for i in range(30) if i % 3]

    def test_remove_all(self):
        """Test clearing both storages."""
        result = ArrayMap(1, 2, 3, 4)
        result.remove_all()
        assert result.items == []
        result.put(5, 6)
        assert result.keys().items == [5]


class TestWithKey:
    """Tests for the equality policy of derived maps."""

    def test_create_new_keeps_key_function(self, people_by_email):
        """Test that derived maps keep the key function."""
        result = people_by_email(ArrayMap)
        copy = result._create_new(result.to_array())
        probe = type("Probe", (), {"email": ""})()
        assert copy.get(probe) == 3

    def test_filter_keeps_key_function(self, people_by_email):
        """Test that filter results keep the key function."""
        result = people_by_email(ArrayMap).filter(lambda person, value: value > 1)
        probe = type("Probe", (), {"email": "delpaso@titi.com"})()
        assert result.get(probe) == 2
        assert result.size() == 2


class TestIterable:
    """Tests for the iterable operations on keyed elements."""

    def test_size(self, number_map):
        """Test size."""
        assert number_map.size() == 3

    def test_first_and_last(self, number_map):
        """Test that first and last are pairs."""
        assert number_map.first() == (1, 10)
        assert number_map.last().key == 3
        assert number_map.last().value == 30

    def test_first_on_empty(self):
        """Test first() on an empty map."""
        with pytest.raises(EmptyCollectionError, match="first"):
            ArrayMap().first()

    def test_each(self, number_map):
        """Test that each passes key, value and index."""
        seen = []
        number_map.each(lambda key, value, index: seen.append((key, value, index)))
        assert seen == [(1, 10, 0), (2, 20, 1), (3, 30, 2)]

    def test_map_to_pairs(self, number_map):
        """Test that mapping to pairs keeps an ArrayMap."""
        mapped = number_map.map(lambda key, value: (-key, value * 10))
        assert isinstance(mapped, ArrayMap)
        assert entry_pairs(mapped) == [(-1, 100), (-2, 200), (-3, 300)]

    def test_map_to_values(self, number_map):
        """Test that mapping to anything else builds a List."""
        mapped = number_map.map(lambda key, value: key + value)
        assert type(mapped) is List
        assert mapped.items == [11, 22, 33]

    def test_map_nothing_keeps_kind(self, number_map):
        """Test that mapping every pair away yields an empty ArrayMap."""
        mapped = number_map.map(lambda key, value: NOT_MAPPED)
        assert isinstance(mapped, ArrayMap)
        assert mapped.size() == 0

    def test_pluck(self):
        """Test plucking through pair fields."""
        result = ArrayMap(
            1, {"name": "coco", "address": {"code": "SW4"}},
            2, {"name": "titi", "address": {"code": None}},
            {"keyName": "roseKey"}, {"name": "rose", "address": {"code": "NW7"}},
        )
        assert result.pluck("value.name").items == ["coco", "titi", "rose"]
        assert result.pluck("value.address.code").items == ["SW4", None, "NW7"]
        assert result.pluck("key.keyName").items == [None, None, "roseKey"]

    def test_filter(self, number_map):
        """Test filtering on key and value."""
        filtered = number_map.filter(lambda key, value: key < 3 and value > 10)
        assert entry_pairs(filtered) == [(2, 20)]

    def test_partition(self, number_map):
        """Test partitioning pairs."""
        big, small = number_map.partition(lambda key, value: value > 10)
        assert entry_pairs(big) == [(2, 20), (3, 30)]
        assert entry_pairs(small) == [(1, 10)]

    def test_count_some_every(self, number_map):
        """Test the predicate operations."""
        assert number_map.count(lambda key, value: value < 30) == 2
        assert number_map.some(lambda key, value: value == 20)
        assert not number_map.some(lambda key, value: value == 40)
        assert number_map.every(lambda key, value: isinstance(key, int))
        assert not number_map.every(lambda key, value: value < 20)

    def test_fold(self, number_map):
        """Test accumulating keys and values."""
        assert number_map.fold(100, lambda acc, key, value: acc + key + value) == 166

    def test_find(self, number_map):
        """Test finding a pair."""
        assert number_map.find(lambda key, value: key == 2 and value == 20) == (2, 20)
        assert number_map.find(lambda key, value: key == 4) is ABSENT

    def test_grouped(self, number_map):
        """Test grouping pairs in ArrayMaps."""
        result = number_map.grouped(2)
        assert isinstance(result, List)
        assert isinstance(result.element_at(0), ArrayMap)
        assert entry_pairs(result.element_at(0)) == [(1, 10), (2, 20)]
        assert entry_pairs(result.element_at(1)) == [(3, 30)]

    def test_group_by(self, number_map):
        """Test grouping pairs into a Map of Lists."""
        groups = number_map.group_by(lambda key, value: "big" if value >= 20 else "small")
        assert isinstance(groups, Map)
        assert groups.get("small").items == [(1, 10)]
        assert groups.get("big").items == [(2, 20), (3, 30)]

    def test_slicing(self, number_map):
        """Test the slicing operations."""
        assert entry_pairs(number_map.drop(2)) == [(3, 30)]
        assert entry_pairs(number_map.drop_right(2)) == [(1, 10)]
        assert entry_pairs(number_map.drop_while(lambda key, value: value <= 20)) == [(3, 30)]
        assert entry_pairs(number_map.take(2)) == [(1, 10), (2, 20)]
        assert entry_pairs(number_map.take_right(2)) == [(2, 20), (3, 30)]
        assert entry_pairs(number_map.take_while(lambda key, value: value < 30)) == [
            (1, 10),
            (2, 20),
        ]
        assert entry_pairs(number_map.slice(1, 3)) == [(2, 20), (3, 30)]

    def test_reverse(self, number_map):
        """Test reversing into a new map."""
        reversed_map = number_map.reverse()
        assert entry_pairs(reversed_map) == [(3, 30), (2, 20), (1, 10)]
        assert reversed_map is not number_map
        assert reversed_map.items is not number_map.items

    def test_mk_string_and_str(self, number_map, sarah):
        """Test rendering pairs."""
        assert number_map.mk_string("[", ", ", "]") == "[1 -> 10, 2 -> 20, 3 -> 30]"
        assert str(ArrayMap(1, sarah, 3, 4)) == "ArrayMap(1 -> sarah, 3 -> 4)"

    def test_to_array(self, number_map):
        """Test conversion to a fresh list of pairs."""
        array = number_map.to_array()
        assert array == [(1, 10), (2, 20), (3, 30)]
        assert array is not number_map.items

    def test_clone(self, number_map):
        """Test that a clone has its own entries."""
        clone = number_map.clone()
        assert clone.to_array() == number_map.to_array()
        clone.put(1, 99)
        assert number_map.get(1) == 10


class TestSorting:
    """Tests for key_sorted and value_sorted."""

    def test_key_sorted(self):
        """Test ordering by key."""
        result = ArrayMap(3, "c", 1, "a", 2, "b").key_sorted()
        assert result.keys().items == [1, 2, 3]

    def test_value_sorted(self):
        """Test ordering by value, descending and through a key function."""
        result = ArrayMap("x", 3, "y", 1, "z", 2)
        assert result.value_sorted().keys().items == ["y", "z", "x"]
        assert result.value_sorted(reverse=True).keys().items == ["x", "z", "y"]
        assert result.value_sorted(key=lambda value: -value).keys().items == ["x", "z", "y"]


class TestFromArray:
    """Tests for bulk construction."""

    def test_from_pairs(self):
        """Test construction from a list of tuples."""
        result = ArrayMap.from_array([("a", 1), ("b", 2)])
        assert result.keys().items == ["a", "b"]

    def test_from_entries(self):
        """Test construction from another map's entries."""
        source = ArrayMap("a", 1)
        copy = ArrayMap.from_array(source.items)
        assert copy.get("a") == 1
        assert copy.items[0] is not source.items[0]

    def test_rejects_other_elements(self):
        """Test that non-pairs are rejected."""
        with pytest.raises(ConstructionError, match="pairs or entries"):
            ArrayMap.from_array([1, 2])
