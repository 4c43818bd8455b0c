"""
underbar - functional collection helpers and function decorators.

Use the package as the namespace::

    import underbar as _

    _.map([1, 2, 3], lambda x: x * 2)        # [2, 4, 6]
    _.reduce([1, 2, 3, 4], lambda a, b: a + b)  # 10
    greet = _.once(lambda name: f"hi {name}")
"""

from .kernel import (
    ABSENT,
    Entries,
    IndexedEntries,
    KeyedEntries,
    each,
    entries,
    identity,
    index_of,
    is_sequence,
    strict_equal,
)
from .collection_ops import (
    contains,
    defaults,
    difference,
    every,
    extend,
    filter_,
    first,
    flatten,
    intersection,
    invoke,
    last,
    map_,
    pluck,
    reduce,
    reject,
    shuffle,
    some,
    sort_by,
    uniq,
    zip_,
)
from .decorators import (
    call_later,
    delay,
    memoize,
    once,
    string_key,
    structural_key,
    throttle,
)

# names as the rest of the family spells them; these shadow builtins only
# inside this namespace
map = map_
filter = filter_
zip = zip_
indexOf = index_of
sortBy = sort_by

__all__ = [
    "ABSENT",
    "Entries",
    "IndexedEntries",
    "KeyedEntries",
    "call_later",
    "contains",
    "defaults",
    "delay",
    "difference",
    "each",
    "entries",
    "every",
    "extend",
    "filter",
    "filter_",
    "first",
    "flatten",
    "identity",
    "index_of",
    "indexOf",
    "intersection",
    "invoke",
    "is_sequence",
    "last",
    "map",
    "map_",
    "memoize",
    "once",
    "pluck",
    "reduce",
    "reject",
    "shuffle",
    "some",
    "sortBy",
    "sort_by",
    "strict_equal",
    "string_key",
    "structural_key",
    "throttle",
    "uniq",
    "zip",
    "zip_",
]

__version__ = "0.1.0"
