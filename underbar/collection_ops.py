"""
Collection operations built on the iteration kernel.

Everything here goes through ``each`` (or helpers derived from it); none of
these functions look at whether a collection is a sequence or a mapping.
Returned containers are new lists unless a docstring says otherwise.
``extend``, ``defaults`` and ``sort_by`` are the only functions that mutate
their argument.
"""

import logging
import random
from numbers import Number
from typing import Any, Callable, Dict, List, Optional

from .kernel import ABSENT, each, find_key, identity, is_sequence

logger = logging.getLogger(__name__)


def _property(item, key):
    """Look up ``key`` on an element: subscript when possible, attribute otherwise."""
    if hasattr(item, "__getitem__"):
        return item[key]
    return getattr(item, key)


# ---------- slicing helpers ----------

def first(array, n: Optional[int] = None):
    """First element, or a list of the first ``n`` elements."""
    if n is None:
        return array[0]
    return list(array[:n])


def last(array, n: Optional[int] = None):
    """Last element, or a list of the last ``n`` elements (all of them when ``n`` > len)."""
    if n is None:
        return array[-1]
    if n <= 0:
        return []
    return list(array[-n:])


# ---------- filtering & mapping ----------

def filter_(collection, test: Callable[[Any], Any]) -> List[Any]:
    """Elements passing ``test``, in their original order."""
    results = []

    def visit(item, _key, _collection):
        if test(item):
            results.append(item)

    each(collection, visit)
    return results


def reject(collection, test: Callable[[Any], Any]) -> List[Any]:
    """Elements failing ``test``; the complement of ``filter_``."""
    return filter_(collection, lambda item: not test(item))


def uniq(array) -> List[Any]:
    """Drop duplicates (strict equality), keeping first occurrences in order."""
    results = []

    def visit(item, _key, _collection):
        if contains(results, item):
            return
        results.append(item)

    each(array, visit)
    return results


def map_(collection, iterator: Callable[[Any], Any]) -> List[Any]:
    """``iterator(element)`` for every element, order preserved."""
    results = []
    each(collection, lambda item, _key, _collection: results.append(iterator(item)))
    return results


def pluck(collection, key) -> List[Any]:
    """Extract ``element[key]`` (or the attribute ``key``) from each element."""
    return map_(collection, lambda item: _property(item, key))


def reduce(collection, iterator: Callable[[Any, Any], Any], accumulator=ABSENT):
    """Left fold of ``iterator(accumulator, item)`` over the collection.

    Without ``accumulator`` the first element seeds the fold and folding
    starts from the second. Calling this on an empty collection without a
    seed is a caller error; the result is ABSENT.
    """
    state = {"result": accumulator, "seeded": accumulator is not ABSENT}

    def visit(item, _key, _collection):
        if not state["seeded"]:
            state["result"] = item
            state["seeded"] = True
            return
        state["result"] = iterator(state["result"], item)

    each(collection, visit)
    return state["result"]


# ---------- membership & truth tests ----------

def contains(collection, target) -> bool:
    """True if any element is strictly equal to ``target``."""
    return find_key(collection, target) is not ABSENT


def every(collection, iterator: Optional[Callable[[Any], Any]] = None) -> bool:
    """True if ``iterator`` (default: truthiness) holds for all elements. Vacuously true."""
    test = iterator or identity
    return reduce(collection, lambda passed, item: passed and bool(test(item)), True)


def some(collection, iterator: Optional[Callable[[Any], Any]] = None) -> bool:
    """True if at least one element satisfies ``iterator`` (default: truthiness)."""
    test = iterator or identity
    return not every(collection, lambda item: not test(item))


# ---------- object helpers (mutating) ----------

def extend(obj: Dict[Any, Any], *sources) -> Dict[Any, Any]:
    """Copy every key of each source onto ``obj``; later sources win. Mutates and returns ``obj``."""
    def copy_into(value, key, _source):
        obj[key] = value

    for source in sources:
        each(source, copy_into)
    return obj


def defaults(obj: Dict[Any, Any], *sources) -> Dict[Any, Any]:
    """Fill keys missing from ``obj``; the first source defining a key wins. Mutates and returns ``obj``."""
    def fill_missing(value, key, _source):
        if key not in obj:
            obj[key] = value

    for source in sources:
        each(source, fill_missing)
    return obj


# ---------- invocation & ordering ----------

def invoke(collection, function_or_key, args=()) -> List[Any]:
    """Call a method (by name) or a function on each element and collect the results.

    With a name, ``element.<name>(*args)`` is called. With a callable, the
    element is passed as the receiver: ``fn(element, *args)``.
    """
    if isinstance(function_or_key, str):
        return map_(collection, lambda item: getattr(item, function_or_key)(*args))
    return map_(collection, lambda item: function_or_key(item, *args))


def _is_numeric(value) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def sort_by(collection: List[Any], iterator) -> List[Any]:
    """Sort ``collection`` in place and return it.

    The comparison is picked from the criterion and the contents:

    - ``"length"`` sorts by ``len(element)``;
    - otherwise, if any element is a number, elements are sorted numerically
      ascending and ``iterator`` is ignored;
    - otherwise ``iterator`` is used as the sort key (a callable, or a
      property name looked up on each element).

    The numeric rule inspects the data rather than the criterion, so a
    collection mixing numbers and other values is ordered by whatever that
    branch makes of it; incomparable values raise ``TypeError``.
    """
    if iterator == "length":
        collection.sort(key=len)
    elif some(collection, _is_numeric):
        logger.debug(f"sort_by: numeric elements found, ignoring criterion {iterator!r}")
        collection.sort()
    elif callable(iterator):
        collection.sort(key=iterator)
    else:
        collection.sort(key=lambda item: _property(item, iterator))
    return collection


# ---------- combining sequences ----------

def zip_(*arrays, fillvalue=ABSENT) -> List[List[Any]]:
    """Group elements by position; shorter inputs are padded with ``fillvalue``.

    >>> zip_(['a', 'b', 'c'], [1, 2])
    [['a', 1], ['b', 2], ['c', <absent>]]
    """
    longest = reduce(arrays, lambda size, array: max(size, len(array)), 0)
    rows = [[] for _ in range(longest)]

    def add_column(array, _index, _arrays):
        def place(row, position, _rows):
            row.append(array[position] if position < len(array) else fillvalue)

        each(rows, place)

    each(arrays, add_column)
    return rows


def flatten(nested_array) -> List[Any]:
    """Collapse nested lists/tuples of any depth into one list, depth first.

    Nested sequences go on an explicit stack instead of the call stack, so
    nesting depth is bounded only by memory.
    """
    result = []
    pending = []

    def push_children(sequence):
        children = []
        each(sequence, lambda child, _key, _sequence: children.append(child))
        # reversed so the leftmost child is popped first
        pending.extend(reversed(children))

    push_children(nested_array)
    while pending:
        item = pending.pop()
        if is_sequence(item):
            push_children(item)
        else:
            result.append(item)
    return result


def intersection(array, *others) -> List[Any]:
    """Elements of ``array`` found in every other sequence, in ``array`` order.

    Duplicates in ``array`` are kept as they are.
    """
    return filter_(array, lambda item: every(others, lambda other: contains(other, item)))


def difference(array, *others) -> List[Any]:
    """Elements of ``array`` that appear in none of ``others``."""
    excluded = reduce(others, lambda union, other: union + list(other), [])
    return reject(array, lambda item: contains(excluded, item))


def shuffle(array, rng: Optional[random.Random] = None) -> List[Any]:
    """Return a new list holding ``array``'s elements in a uniformly random order.

    Inside-out Fisher-Yates: element ``i`` lands on a random slot ``j <= i``
    and whatever was at ``j`` moves up to ``i``. The input is not modified.
    """
    rng = rng or random
    shuffled = []

    def place(item, _index, _array):
        j = rng.randint(0, len(shuffled))
        if j == len(shuffled):
            shuffled.append(item)
        else:
            shuffled.append(shuffled[j])
            shuffled[j] = item

    each(array, place)
    return shuffled
