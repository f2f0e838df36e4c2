import unittest
import random
import numpy as np
import numpy.testing as npt
import os, sys

sys.path.insert(
    0,
    os.path.abspath(
        os.path.join(os.path.dirname(__file__), os.pardir)
    )
)

from array_toolkit import (
    ArrayQueryToolkit, StrategyMode, ConfigurationError, RangeError,
    RangeQuery, EvenRangeQuery, PairQuery, PairSumQuery,
    dispatch, strategies, FAMILIES,
)

BF = StrategyMode.BRUTE_FORCE
O1 = StrategyMode.OPTIMIZED_1
O2 = StrategyMode.OPTIMIZED_2


class StrategyModeTests(unittest.TestCase):
    def test_parse(self):
        self.assertIs(StrategyMode.parse(O2), O2)
        self.assertIs(StrategyMode.parse("brute_force"), BF)
        self.assertIs(StrategyMode.parse("BRUTE_FORCE"), BF)
        self.assertIs(StrategyMode.parse("optimized-1"), O1)
        self.assertIs(StrategyMode.parse(" Optimized_2 "), O2)

    def test_parse_unknown(self):
        for bad in ("fastest", "", None, 1, "optimized_3"):
            with self.assertRaises(ConfigurationError):
                StrategyMode.parse(bad)

    def test_configuration_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class DispatcherTests(unittest.TestCase):
    def test_tables(self):
        exp = {
            "range_sum":      (BF, O1),
            "even_range_sum": (BF, O1),
            "equilibrium":    (BF, O1, O2),
            "pair_count":     (BF, O1, O2),
            "pair_sum":       (BF, O1, O2),
            "pair_sum_count": (BF, O1),
            "rotate":         (BF, O1),
        }
        self.assertEqual(set(FAMILIES), set(exp))
        for family, modes in exp.items():
            self.assertEqual(strategies(family), modes)

    def test_unsupported_mode(self):
        with self.assertRaises(ConfigurationError):
            dispatch("range_sum", O2)
        with self.assertRaises(ConfigurationError):
            dispatch("rotate", "optimized_2")

    def test_unknown_family(self):
        with self.assertRaises(ConfigurationError):
            dispatch("median", BF)
        with self.assertRaises(ConfigurationError):
            strategies("median")

    def test_unknown_mode_through_toolkit(self):
        tk = ArrayQueryToolkit([1, 2, 3])
        with self.assertRaises(ConfigurationError):
            tk.range_sum(0, 1, mode="quick")
        with self.assertRaises(ConfigurationError):
            tk.range_sum(0, 1, mode=O2)


class ToolkitTests(unittest.TestCase):
    def setUp(self):
        self.tk = ArrayQueryToolkit([1, 2, 3, 4, 5])

    def test_snapshot(self):
        src = [1, 2, 3]
        tk = ArrayQueryToolkit(src)
        src.append(4)
        self.assertEqual(tk.values, (1, 2, 3))
        self.assertEqual(len(tk), 3)

    def test_values_read_only(self):
        agg = self.tk.prefix_sums
        with self.assertRaises(AttributeError):
            self.tk.values = (9, 9, 9, 9, 9)
        self.assertEqual(self.tk.values, (1, 2, 3, 4, 5))
        self.assertIs(self.tk.prefix_sums, agg)
        self.assertEqual(self.tk.range_sum(0, 4), 15)

    def test_numpy_input(self):
        arr = np.array([2 ** 62, 2 ** 62, 2 ** 62], dtype=np.int64)
        tk = ArrayQueryToolkit(arr)
        self.assertEqual(tk.range_sum(0, 2), 3 * 2 ** 62)
        self.assertEqual(tk.range_sum(0, 2, BF), 3 * 2 ** 62)
        self.assertIs(type(tk.values[0]), int)
        tk = ArrayQueryToolkit(list(arr))
        self.assertIs(type(tk.values[0]), int)

    def test_range_sum_scenario(self):
        for mode in (BF, O1):
            self.assertEqual(self.tk.range_sum(0, 2, mode), 6)
            self.assertEqual(self.tk.range_sum(1, 3, mode), 9)
            self.assertEqual(self.tk.range_sum(2, 4, mode), 12)

    def test_even_range_sum(self):
        for mode in (BF, O1):
            self.assertEqual(self.tk.even_range_sum(0, 4, mode), 9)
            self.assertEqual(self.tk.even_range_sum(1, 3, mode), 3)
            self.assertEqual(self.tk.even_range_sum(1, 1, mode), 0)

    def test_aggregates_cached(self):
        self.assertIs(self.tk.prefix_sums, self.tk.prefix_sums)
        self.assertIsNot(self.tk.prefix_sums, self.tk.even_prefix_sums)
        npt.assert_equal(list(self.tk.prefix_sums), [1, 3, 6, 10, 15])

    def test_range_sums_batch(self):
        qs = [(0, 2), (1, 3), (2, 4), (0, 2)]
        self.assertEqual(self.tk.range_sums(qs), [6, 9, 12, 6])
        self.assertEqual(self.tk.range_sums(qs, BF), [6, 9, 12, 6])
        self.assertEqual(self.tk.range_sums([]), [])

    def test_malformed_range_query_same_error_in_both_batches(self):
        for bad in ((0, 1, 2), [0, 1], "01"):
            with self.assertRaises(TypeError):
                self.tk.range_sums([bad])
            with self.assertRaises(TypeError):
                self.tk.range_sums([bad], BF)
            with self.assertRaises(TypeError):
                self.tk.run_batch([bad])

    def test_range_sums_parity_random(self):
        rnd = random.Random(17)
        for n in (1, 2, 7, 40):
            tk = ArrayQueryToolkit([rnd.randint(-100, 100) for _ in range(n)])
            qs = [tuple(sorted((rnd.randrange(n), rnd.randrange(n)))) for _ in range(50)]
            self.assertEqual(tk.range_sums(qs, O1), tk.range_sums(qs, BF))

    def test_range_error(self):
        for mode in (BF, O1):
            with self.assertRaises(RangeError):
                self.tk.range_sum(2, 1, mode)
            with self.assertRaises(RangeError):
                self.tk.range_sum(0, 5, mode)
            with self.assertRaises(RangeError):
                self.tk.even_range_sum(-1, 0, mode)
        with self.assertRaises(RangeError):
            ArrayQueryToolkit([]).range_sum(0, 0)

    def test_failed_query_keeps_aggregates(self):
        agg = self.tk.prefix_sums
        with self.assertRaises(RangeError):
            self.tk.range_sums([(0, 1), (3, 7)])
        self.assertIs(self.tk.prefix_sums, agg)
        self.assertEqual(self.tk.range_sum(0, 1), 3)

    def test_equilibrium(self):
        tk = ArrayQueryToolkit([-7, 1, 5, 2, -4, 3, 0])
        for mode in (BF, O1, O2):
            self.assertEqual(tk.equilibrium_indices(mode), [3, 6])
            self.assertEqual(tk.count_equilibrium_indices(mode), 2)
        self.assertEqual(ArrayQueryToolkit([42]).count_equilibrium_indices(), 1)
        self.assertEqual(ArrayQueryToolkit([]).count_equilibrium_indices(), 0)

    def test_count_pairs(self):
        tk = ArrayQueryToolkit("baagxdcag")
        self.assertEqual(tk.values[:3], ('b', 'a', 'a'))
        for mode in (BF, O1, O2):
            self.assertEqual(tk.count_pairs('a', 'g', mode), 5)

    def test_pair_sum(self):
        tk = ArrayQueryToolkit([3, -2, 5, 7, 2, -1])
        for mode in (BF, O1, O2):
            self.assertTrue(tk.has_pair_with_sum(12, mode))
            self.assertFalse(tk.has_pair_with_sum(13, mode))
        for mode in (BF, O1):
            self.assertEqual(tk.count_pairs_with_sum(1, mode), 2)

    def test_rotated_returns_new_toolkit(self):
        tk = ArrayQueryToolkit([2, 3, 4, 5, 6])
        tk.prefix_sums
        for mode in (BF, O1):
            rot = tk.rotated(2, mode)
            self.assertIsNot(rot, tk)
            self.assertEqual(rot.values, (5, 6, 2, 3, 4))
            npt.assert_equal(list(rot.prefix_sums), [5, 11, 13, 16, 20])
        self.assertEqual(tk.values, (2, 3, 4, 5, 6))
        npt.assert_equal(list(tk.prefix_sums), [2, 5, 9, 14, 20])

    def test_rotated_round_trip(self):
        tk = ArrayQueryToolkit([9, -3, 0, 4])
        for k in range(len(tk)):
            self.assertEqual(tk.rotated(k).rotated(len(tk) - k).values, tk.values)
        self.assertEqual(tk.rotated(0).values, tk.values)
        self.assertEqual(ArrayQueryToolkit([]).rotated(5).values, ())

    def test_parity_on_edge_inputs(self):
        seqs = [[], [7], [3, 3, 3, 3], [-5, -1, -3], [0, 1, -1, 0, 2, -2]]
        for seq in seqs:
            tk = ArrayQueryToolkit(seq)
            self.assertEqual(tk.equilibrium_indices(BF), tk.equilibrium_indices(O1))
            self.assertEqual(tk.equilibrium_indices(BF), tk.equilibrium_indices(O2))
            for target in (-6, -4, 0, 1, 6):
                exp = tk.has_pair_with_sum(target, BF)
                self.assertEqual(tk.has_pair_with_sum(target, O1), exp)
                self.assertEqual(tk.has_pair_with_sum(target, O2), exp)
                self.assertEqual(tk.count_pairs_with_sum(target, O1),
                                 tk.count_pairs_with_sum(target, BF))
            pos, neg = (lambda v: v > 0), (lambda v: v < 0)
            exp = tk.count_pairs(pos, neg, BF)
            self.assertEqual(tk.count_pairs(pos, neg, O1), exp)
            self.assertEqual(tk.count_pairs(pos, neg, O2), exp)


class RunBatchTests(unittest.TestCase):
    def test_mixed_batch_order(self):
        tk = ArrayQueryToolkit([1, 2, 3, 4, 5])
        qs = [
            (0, 2),
            RangeQuery(1, 3),
            EvenRangeQuery(0, 4),
            PairQuery(lambda v: v < 3, lambda v: v > 3),
            PairSumQuery(9),
            PairSumQuery(10),
        ]
        exp = [6, 9, 9, 4, True, False]
        self.assertEqual(tk.run_batch(qs), exp)
        self.assertEqual(tk.run_batch(qs, "brute_force"), exp)

    def test_character_batch(self):
        tk = ArrayQueryToolkit("baagxdcag")
        qs = [PairQuery('a', 'g'), PairQuery('g', 'a'), PairQuery('b', 'x')]
        for mode in (BF, O1, O2):
            self.assertEqual(tk.run_batch(qs, mode), [5, 1, 1])

    def test_unsupported_query(self):
        tk = ArrayQueryToolkit([1, 2, 3])
        with self.assertRaises(TypeError):
            tk.run_batch([(0, 1, 2)])
        with self.assertRaises(TypeError):
            tk.run_batch(["0:1"])

    def test_mode_without_range_strategy(self):
        tk = ArrayQueryToolkit([1, 2, 3])
        self.assertEqual(tk.run_batch([PairSumQuery(5)], O2), [True])
        with self.assertRaises(ConfigurationError):
            tk.run_batch([RangeQuery(0, 1)], O2)

    def test_empty_batch(self):
        self.assertEqual(ArrayQueryToolkit([]).run_batch([]), [])
        with self.assertRaises(ConfigurationError):
            ArrayQueryToolkit([]).run_batch([], "nope")


if __name__ == '__main__':
    unittest.main()
