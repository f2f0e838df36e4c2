import enum
import logging
from typing import Callable, Dict, NamedTuple

import array_algorithms as algo
import prefix_aggregate
from prefix_aggregate import PrefixAggregate, RangeError, snapshot, unpack_range

logger = logging.getLogger(__name__)

__all__ = [
    "ArrayQueryToolkit", "StrategyMode", "ConfigurationError", "RangeError",
    "RangeQuery", "EvenRangeQuery", "PairQuery", "PairSumQuery",
    "dispatch", "strategies", "FAMILIES",
]


class ConfigurationError(ValueError):
    """Unknown strategy mode, or a mode the query family does not implement."""


class StrategyMode(enum.Enum):
    BRUTE_FORCE = "brute_force"
    OPTIMIZED_1 = "optimized_1"
    OPTIMIZED_2 = "optimized_2"

    @classmethod
    def parse(cls, value) -> "StrategyMode":
        """Accept a member, its name (any case, '-' for '_') or its value."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            for mode in cls:
                if key == mode.value:
                    return mode
        raise ConfigurationError(f"unknown strategy mode: {value!r}")


#------------------------------------------------------------------------------
# Query values
#------------------------------------------------------------------------------
class RangeQuery(NamedTuple):
    left: int
    right: int

class EvenRangeQuery(NamedTuple):
    left: int
    right: int

class PairQuery(NamedTuple):
    first: object
    second: object

class PairSumQuery(NamedTuple):
    target: object


#------------------------------------------------------------------------------
# Strategy tables:  family -> {mode -> fn(toolkit, *args)}
#------------------------------------------------------------------------------
BF, O1, O2 = StrategyMode.BRUTE_FORCE, StrategyMode.OPTIMIZED_1, StrategyMode.OPTIMIZED_2

_STRATEGIES: Dict[str, Dict[StrategyMode, Callable]] = {
    "range_sum": {
        BF: lambda tk, l, r: prefix_aggregate.range_sum_brute(tk.values, l, r),
        O1: lambda tk, l, r: tk.prefix_sums.range_sum(l, r),
    },
    "even_range_sum": {
        BF: lambda tk, l, r: prefix_aggregate.range_sum_brute(
            tk.values, l, r, prefix_aggregate.even_index),
        O1: lambda tk, l, r: tk.even_prefix_sums.range_sum(l, r),
    },
    "equilibrium": {
        BF: lambda tk: algo.equilibrium_indices_brute(tk.values),
        O1: lambda tk: algo.equilibrium_indices_prefix(tk.values),
        O2: lambda tk: algo.equilibrium_indices_running(tk.values),
    },
    "pair_count": {
        BF: lambda tk, a, b: algo.count_pairs_brute(tk.values, a, b),
        O1: lambda tk, a, b: algo.count_pairs_prefix(tk.values, a, b),
        O2: lambda tk, a, b: algo.count_pairs_suffix(tk.values, a, b),
    },
    "pair_sum": {
        BF: lambda tk, t: algo.has_pair_with_sum_brute(tk.values, t),
        O1: lambda tk, t: algo.has_pair_with_sum_hash(tk.values, t),
        O2: lambda tk, t: algo.has_pair_with_sum_two_pointer(tk.values, t),
    },
    "pair_sum_count": {
        BF: lambda tk, t: algo.count_pairs_with_sum_brute(tk.values, t),
        O1: lambda tk, t: algo.count_pairs_with_sum_hash(tk.values, t),
    },
    "rotate": {
        BF: lambda tk, k: algo.rotate_right_brute(tk.values, k),
        O1: lambda tk, k: algo.rotate_right(tk.values, k),
    },
}

FAMILIES = tuple(_STRATEGIES)


def strategies(family: str):
    """Modes implemented for `family`, brute force first."""
    try:
        return tuple(_STRATEGIES[family])
    except KeyError:
        raise ConfigurationError(f"unknown query family: {family!r}") from None

def dispatch(family: str, mode) -> Callable:
    mode = StrategyMode.parse(mode)
    table = _STRATEGIES.get(family)
    if table is None:
        raise ConfigurationError(f"unknown query family: {family!r}")
    fn = table.get(mode)
    if fn is None:
        raise ConfigurationError(
            f"{family} has no {mode.name} strategy "
            f"(available: {', '.join(m.name for m in table)})"
        )
    return fn


#------------------------------------------------------------------------------
# Toolkit
#------------------------------------------------------------------------------
class ArrayQueryToolkit:
    """
    Read-only query surface over one immutable sequence.

    Prefix aggregates are built lazily on first use and cached for the life
    of the instance; queries never modify them.  Transformations such as
    rotation return a new toolkit with its own (unbuilt) aggregates.
    """
    def __init__(self, sequence=()):
        self._values = snapshot(sequence)
        self._aggregates: Dict[str, PrefixAggregate] = {}

    @property
    def values(self) -> tuple:
        """The snapshotted sequence; read-only so cached aggregates stay valid."""
        return self._values

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self):
        return f"ArrayQueryToolkit(n={len(self.values)})"

    # ------------------------------------------------------------
    # derived aggregates
    # ------------------------------------------------------------
    def _aggregate(self, name: str, contribution) -> PrefixAggregate:
        agg = self._aggregates.get(name)
        if agg is None:
            agg = prefix_aggregate.build(self.values, contribution)
            self._aggregates[name] = agg
        return agg

    @property
    def prefix_sums(self) -> PrefixAggregate:
        return self._aggregate("sum", prefix_aggregate.identity)

    @property
    def even_prefix_sums(self) -> PrefixAggregate:
        return self._aggregate("even", prefix_aggregate.even_index)

    def _run(self, family: str, mode, *args):
        mode = StrategyMode.parse(mode)
        fn = dispatch(family, mode)
        logger.debug("%s via %s args=%r", family, mode.name, args)
        return fn(self, *args)

    # ------------------------------------------------------------
    # single queries
    # ------------------------------------------------------------
    def range_sum(self, left: int, right: int, mode=StrategyMode.OPTIMIZED_1):
        return self._run("range_sum", mode, left, right)

    def even_range_sum(self, left: int, right: int, mode=StrategyMode.OPTIMIZED_1):
        return self._run("even_range_sum", mode, left, right)

    def equilibrium_indices(self, mode=StrategyMode.OPTIMIZED_2):
        return self._run("equilibrium", mode)

    def count_equilibrium_indices(self, mode=StrategyMode.OPTIMIZED_2) -> int:
        return len(self.equilibrium_indices(mode))

    def count_pairs(self, first, second, mode=StrategyMode.OPTIMIZED_2) -> int:
        """Ordered pairs i < j with `first` matching s[i] and `second` s[j]."""
        return self._run("pair_count", mode, first, second)

    def has_pair_with_sum(self, target, mode=StrategyMode.OPTIMIZED_1) -> bool:
        return self._run("pair_sum", mode, target)

    def count_pairs_with_sum(self, target, mode=StrategyMode.OPTIMIZED_1) -> int:
        return self._run("pair_sum_count", mode, target)

    def rotated(self, k: int, mode=StrategyMode.OPTIMIZED_1) -> "ArrayQueryToolkit":
        return ArrayQueryToolkit(self._run("rotate", mode, k))

    # ------------------------------------------------------------
    # batches
    # ------------------------------------------------------------
    def range_sums(self, queries, mode=StrategyMode.OPTIMIZED_1):
        fn = dispatch("range_sum", mode)
        return [fn(self, *unpack_range(q)) for q in queries]

    def run_batch(self, queries, mode=StrategyMode.OPTIMIZED_1):
        """
        Answer a mixed list of queries in order.  A bare (L, R) tuple is a
        RangeQuery.  The same mode applies to every query in the batch.
        """
        mode = StrategyMode.parse(mode)
        results = []
        for q in queries:
            if isinstance(q, EvenRangeQuery):
                results.append(self.even_range_sum(q.left, q.right, mode))
            elif isinstance(q, PairQuery):
                results.append(self.count_pairs(q.first, q.second, mode))
            elif isinstance(q, PairSumQuery):
                results.append(self.has_pair_with_sum(q.target, mode))
            elif isinstance(q, tuple) and len(q) == 2:
                results.append(self.range_sum(q[0], q[1], mode))
            else:
                raise TypeError(f"unsupported query: {q!r}")
        return results
