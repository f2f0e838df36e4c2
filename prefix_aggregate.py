import logging
import numbers

import numpy as np

logger = logging.getLogger(__name__)


class RangeError(IndexError):
    """Closed interval [left, right] does not satisfy 0 <= left <= right < n."""

    def __init__(self, left, right, length: int):
        self.left = left
        self.right = right
        self.length = length
        super().__init__(
            f"invalid range [{left}, {right}] for sequence of length {length}"
        )


#------------------------------------------------------------------------------
# Contribution functions:  contribution(index, value) -> amount added
#------------------------------------------------------------------------------
def identity(index: int, value):
    return value

def even_index(index: int, value):
    return value if index % 2 == 0 else 0

def odd_index(index: int, value):
    return value if index % 2 == 1 else 0

def matching(predicate):
    """
    Contribution of 1 for every element satisfying `predicate`, 0 otherwise.
    A prefix aggregate built with it counts matches in [0 .. i].
    """
    def contribution(index: int, value) -> int:
        return 1 if predicate(value) else 0
    return contribution


def as_python(value):
    """numpy scalars become the equivalent Python object (int, float, str)."""
    return value.item() if isinstance(value, np.generic) else value

def snapshot(sequence) -> tuple:
    """
    Immutable copy of `sequence` holding Python objects only, so sums use
    unbounded ints and never wrap the way fixed-width numpy integers do.
    """
    if isinstance(sequence, np.ndarray):
        return tuple(sequence.tolist())
    return tuple(as_python(x) for x in sequence)


def unpack_range(query):
    """(left, right) out of a 2-tuple query; anything else is a TypeError."""
    if not (isinstance(query, tuple) and len(query) == 2):
        raise TypeError(f"unsupported range query: {query!r}")
    return query

def check_range(left, right, length: int):
    if not (isinstance(left, numbers.Integral) and isinstance(right, numbers.Integral)):
        raise RangeError(left, right, length)
    if not 0 <= left <= right < length:
        raise RangeError(left, right, length)


#------------------------------------------------------------------------------
# Prefix aggregate
#------------------------------------------------------------------------------
class PrefixAggregate:
    """
    Running totals of a sequence under a contribution function.

        P[0] = c(0, s[0])
        P[i] = P[i-1] + c(i, s[i])

    Built in one pass and never modified afterwards, so any number of
    readers can share it.  Range sums are O(1).
    """
    __slots__ = ("_totals",)

    def __init__(self, totals=()):
        self._totals = tuple(totals)

    def __len__(self) -> int:
        return len(self._totals)

    def __getitem__(self, i):
        return self._totals[i]

    def __iter__(self):
        return iter(self._totals)

    def __eq__(self, other):
        if isinstance(other, PrefixAggregate):
            return self._totals == other._totals
        return NotImplemented

    def __hash__(self):
        return hash(self._totals)

    def __repr__(self):
        return f"PrefixAggregate({list(self._totals)!r})"

    @property
    def total(self):
        """Aggregate of the whole sequence (0 when empty)."""
        return self._totals[-1] if self._totals else 0

    def before(self, i: int):
        """Aggregate of [0 .. i-1]; the empty prefix (i == 0) is 0."""
        return 0 if i == 0 else self._totals[i - 1]

    def range_sum(self, left: int, right: int):
        check_range(left, right, len(self._totals))
        return self._totals[right] - self.before(left)

    def range_sums(self, queries):
        return [self.range_sum(*unpack_range(q)) for q in queries]


def build(sequence, contribution=identity) -> PrefixAggregate:
    """
    Single linear pass over `sequence`.  An empty sequence gives an empty
    aggregate.
    """
    sequence = snapshot(sequence)
    totals = []
    acc = 0
    for i, value in enumerate(sequence):
        acc += as_python(contribution(i, value))
        totals.append(acc)
    logger.debug("built prefix aggregate: n=%d contribution=%s",
                 len(totals), getattr(contribution, "__name__", contribution))
    return PrefixAggregate(totals)


#------------------------------------------------------------------------------
# Range queries
#------------------------------------------------------------------------------
def range_sum(aggregate: PrefixAggregate, left: int, right: int):
    return aggregate.range_sum(left, right)

def range_sums(aggregate: PrefixAggregate, queries):
    return aggregate.range_sums(queries)

def range_sum_brute(sequence, left: int, right: int, contribution=identity):
    """Direct summation over [left .. right], O(n) per query."""
    sequence = snapshot(sequence)
    check_range(left, right, len(sequence))
    total = 0
    for i in range(left, right + 1):
        total += as_python(contribution(i, sequence[i]))
    return total
