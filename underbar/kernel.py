"""
Iteration kernel for underbar.

Every collection operation in this package is built on ``each``. The
sequence-vs-mapping decision lives in exactly one place: ``entries``, which
turns a collection into an ordered stream of (key, value) pairs.
"""

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from functools import singledispatch
from typing import Any, Callable, Iterator, Tuple


class _Absent:
    """Placeholder for a value that does not exist (e.g. past the end of a sequence)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<absent>"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def identity(value):
    """Return the argument unchanged. Default iterator/predicate everywhere."""
    return value


def strict_equal(a: Any, b: Any) -> bool:
    """Equality without coercion: same object, or equal values of the same type.

    NaN is never equal to anything, itself included.
    """
    if isinstance(a, float) and math.isnan(a):
        return False
    if a is b:
        return True
    return type(a) is type(b) and a == b


def is_array_like(value: Any) -> bool:
    """Numeric-indexed with a length, whether or not it is a registered Sequence."""
    return hasattr(value, "__len__") and hasattr(value, "__getitem__")


def is_sequence(value: Any) -> bool:
    """True for nested containers that ``flatten`` should descend into."""
    return isinstance(value, (list, tuple))


# ---------- Entries: ordered key/value view of a collection ----------

class Entries(ABC):
    """Ordered (key, value) pairs of a collection."""

    def __init__(self, collection):
        self.collection = collection

    @abstractmethod
    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        ...


class IndexedEntries(Entries):
    """Pairs for sequences: (index, element), ascending index order."""

    def __iter__(self):
        items = self.collection
        if not isinstance(items, Sequence) and not is_array_like(items):
            # one-shot iterables (generators, sets) are materialized first
            items = tuple(items)
        for index in range(len(items)):
            yield index, items[index]


class KeyedEntries(Entries):
    """Pairs for mappings: (key, value), in the mapping's own key order."""

    def __iter__(self):
        mapping = self.collection
        for key in list(mapping.keys()):
            # keys removed by an earlier callback are skipped
            if key in mapping:
                yield key, mapping[key]


@singledispatch
def entries(collection) -> Entries:
    if is_array_like(collection):
        return IndexedEntries(collection)
    raise TypeError(f"{type(collection).__name__!r} object is not a collection")


@entries.register(Iterable)
def _iterable_entries(collection) -> Entries:
    return IndexedEntries(collection)


@entries.register(Sequence)
def _sequence_entries(collection) -> Entries:
    return IndexedEntries(collection)


@entries.register(Mapping)
def _mapping_entries(collection) -> Entries:
    return KeyedEntries(collection)


# ---------- the kernel ----------

def each(collection, iterator: Callable[[Any, Any, Any], Any]) -> None:
    """Call ``iterator(value, key, collection)`` for every entry of ``collection``.

    Sequences are visited in ascending index order; mappings in insertion
    order. Nothing is returned and the collection is never modified here.
    """
    for key, value in entries(collection):
        iterator(value, key, collection)


def find_key(collection, target):
    """First index/key whose value is strictly equal to ``target``, else ABSENT."""
    found = [ABSENT]

    def visit(item, key, _collection):
        # only the first match counts
        if found[0] is ABSENT and strict_equal(item, target):
            found[0] = key

    each(collection, visit)
    return found[0]


def index_of(collection, target):
    """Lowest index (or first key, for mappings) holding ``target``; -1 if none."""
    key = find_key(collection, target)
    return -1 if key is ABSENT else key
