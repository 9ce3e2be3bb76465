# core/indexing/range_search.py
"""
Range Query Engine
==================
Binary search over a sorted index permutation. Each probe dereferences the
permutation into the record store, so the search runs in O(log N) key
comparisons without touching the records' order.

All bounds are half-open: records index[left:right] satisfy the predicate.
"""
from typing import Any, Callable, Dict, List, Sequence, Tuple
from core.archive.comic_record import ComicRecord
from core.indexing.index_format import (
    SORT_KEYS, InvalidQueryError, check_field, parse_query_value
)

OPERATORS = (">=", "<=", "=")


def _first_true(n: int, predicate: Callable[[int], bool]) -> int:
    """
    Smallest i in [0, n) for which predicate(i) is true, or n if none.
    predicate must be false...false, true...true over [0, n).
    """
    left = 0
    right = n
    while left < right:
        mid = (left + right) // 2
        if predicate(mid):
            right = mid
        else:
            left = mid + 1
    return left


class RangeQueryEngine:
    """Resolves (field, operator, value) predicates against index permutations."""

    def __init__(self, store: Sequence[ComicRecord]):
        self.store = store
        # Sort keys per store position, computed once per session
        self._keys: Dict[str, List[Any]] = {
            field: [key_of(record) for record in store]
            for field, key_of in SORT_KEYS.items()
        }

    def lower_bound(self, index: Sequence[int], field: str, value: Any) -> int:
        """First position in index whose key is >= value."""
        keys = self._keys[field]
        return _first_true(len(index), lambda i: keys[index[i]] >= value)

    def upper_bound(self, index: Sequence[int], field: str, value: Any) -> int:
        """First position in index whose key is > value."""
        keys = self._keys[field]
        return _first_true(len(index), lambda i: keys[index[i]] > value)

    def resolve_range(self, index: Sequence[int], field: str,
                      operator: str, value: str) -> Tuple[int, int]:
        """
        Bounds [left, right) of the slice of index matching field <operator> value.

        index must already be sorted for field; no check is made.
        left >= right means nothing matched.

        Raises:
            InvalidQueryError: Unknown field or operator
            ValueParseError: value isn't valid for the field's type
        """
        check_field(field)
        if operator not in OPERATORS:
            raise InvalidQueryError(
                f"Invalid operand '{operator}'. Choose from: {', '.join(OPERATORS)}"
            )
        key = parse_query_value(field, value)

        left = 0
        right = len(index)
        if operator == ">=":
            left = self.lower_bound(index, field, key)
        elif operator == "<=":
            right = self.upper_bound(index, field, key)
        else:
            left = self.lower_bound(index, field, key)
            right = self.upper_bound(index, field, key)
        return left, right

    def query(self, index: Sequence[int], field: str,
              operator: str, value: str) -> List[ComicRecord]:
        """Records matching the predicate, in index order."""
        left, right = self.resolve_range(index, field, operator, value)
        if left >= right:
            return []
        return [self.store[int(position)] for position in index[left:right]]
