import math
import pytest
from collections import OrderedDict

from underbar import (
    ABSENT,
    IndexedEntries,
    KeyedEntries,
    each,
    entries,
    identity,
    index_of,
    strict_equal,
)


class ArrayLike:
    """Indexable with a length but not registered as a Sequence"""

    def __len__(self):
        return 3

    def __getitem__(self, index):
        if not 0 <= index < 3:
            raise IndexError(index)
        return index * 10


class TestEach:
    """Test the iteration kernel"""

    def test_each_visits_sequence_in_index_order(self):
        """Test that sequences are visited 0..len-1 with value, index and collection"""
        data = ["a", "b", "c"]
        seen = []
        each(data, lambda value, key, coll: seen.append((value, key, coll)))

        expected = [("a", 0, data), ("b", 1, data), ("c", 2, data)]
        assert seen == expected, f"Expected {expected}, got {seen}"

    def test_each_visits_mapping_in_insertion_order(self):
        """Test that mappings are visited once per key, in insertion order"""
        data = {"z": 1, "a": 2, "m": 3}
        seen = []
        each(data, lambda value, key, coll: seen.append((key, value)))

        assert seen == [("z", 1), ("a", 2), ("m", 3)], f"Expected insertion order, got {seen}"

    def test_each_passes_original_collection(self):
        """Test that the third callback argument is the collection itself"""
        data = OrderedDict(one=1)
        received = []
        each(data, lambda value, key, coll: received.append(coll))
        assert received[0] is data

    def test_each_returns_none_and_does_not_mutate(self):
        """Test that each has no return value and leaves the input untouched"""
        data = [3, 1, 2]
        assert each(data, lambda *args: None) is None
        assert data == [3, 1, 2]

    def test_each_on_empty_collections(self):
        """Test that empty collections never invoke the iterator"""
        calls = []
        each([], lambda *args: calls.append(args))
        each({}, lambda *args: calls.append(args))
        assert calls == []

    def test_each_accepts_strings_and_generators(self):
        """Test that other iterables are treated as indexed collections"""
        chars = []
        each("abc", lambda value, key, coll: chars.append((key, value)))
        assert chars == [(0, "a"), (1, "b"), (2, "c")]

        squares = []
        each((x * x for x in range(3)), lambda value, key, coll: squares.append(value))
        assert squares == [0, 1, 4]

    def test_each_rejects_non_collections(self):
        """Test that a non-iterable raises TypeError"""
        with pytest.raises(TypeError):
            each(42, lambda *args: None)

    def test_each_tolerates_keys_removed_by_callback(self):
        """Test that a key deleted by an earlier callback is skipped, not looked up"""
        data = {"a": 1, "b": 2, "c": 3}
        seen = []

        def visit(value, key, coll):
            seen.append(key)
            coll.pop("b", None)

        each(data, visit)
        assert seen == ["a", "c"], f"Expected ['a', 'c'], got {seen}"

    def test_iterator_errors_propagate(self):
        """Test that errors raised by the iterator reach the caller unchanged"""
        def boom(value, key, coll):
            raise ValueError(f"bad {value}")

        with pytest.raises(ValueError, match="bad 1"):
            each([1, 2], boom)


class TestEntries:
    """Test the key/value view that hides the sequence-vs-mapping decision"""

    def test_sequence_entries(self):
        """Test that lists produce IndexedEntries"""
        view = entries([10, 20])
        assert isinstance(view, IndexedEntries)
        assert list(view) == [(0, 10), (1, 20)]

    def test_mapping_entries(self):
        """Test that dicts produce KeyedEntries"""
        view = entries({"a": 1})
        assert isinstance(view, KeyedEntries)
        assert list(view) == [("a", 1)]

    def test_array_like_entries(self):
        """Test that objects with only __len__ and __getitem__ are indexed"""
        view = entries(ArrayLike())
        assert isinstance(view, IndexedEntries)
        assert list(view) == [(0, 0), (1, 10), (2, 20)], f"Expected indexed pairs, got {list(view)}"

    def test_each_over_array_like(self):
        """Test that the kernel visits array-like objects by index"""
        seen = []
        each(ArrayLike(), lambda value, key, coll: seen.append((key, value)))
        assert seen == [(0, 0), (1, 10), (2, 20)], f"Expected indexed pairs, got {seen}"


class TestIndexOf:
    """Test index_of and strict equality"""

    def test_index_of_finds_first_match(self):
        """Test that the lowest matching index is returned"""
        assert index_of([1, 2, 3, 2], 2) == 1

    def test_index_of_missing(self):
        """Test that -1 is returned when the target is absent"""
        assert index_of([1, 2, 3], 4) == -1
        assert index_of([], 1) == -1

    def test_index_of_uses_strict_equality(self):
        """Test that values of different types never match"""
        assert index_of([1, 2, 3], "2") == -1
        result = index_of([1.0, True, 1], 1)
        assert result == 2, f"Expected 2, got {result}"
        assert index_of([0, False], False) == 1

    def test_index_of_mapping_returns_key(self):
        """Test that mappings report the first key holding the value"""
        assert index_of({"a": 1, "b": 2}, 2) == "b"

    def test_strict_equal(self):
        """Test identity and same-type equality"""
        marker = object()
        assert strict_equal(marker, marker)
        assert strict_equal("x", "x")
        assert not strict_equal(1, True)
        assert not strict_equal(1, 1.0)
        assert not strict_equal(object(), object())

    def test_nan_never_matches(self):
        """Test that NaN is not strictly equal to itself"""
        nan = float("nan")
        assert not strict_equal(nan, nan)
        result = index_of([nan], nan)
        assert result == -1, f"Expected -1, got {result}"
        assert index_of([math.nan, 1.0], 1.0) == 1


class TestHelpers:
    """Test identity and the absent marker"""

    def test_identity(self):
        """Test that identity returns its argument"""
        value = {"a": 1}
        assert identity(value) is value

    def test_absent_marker(self):
        """Test that ABSENT is a falsy singleton with a readable repr"""
        assert not ABSENT
        assert repr(ABSENT) == "<absent>"
        assert type(ABSENT)() is ABSENT
