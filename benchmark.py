#!/usr/bin/env python3
import time
import random
import logging
import argparse
import resource
import numpy as np
import pandas as pd

from array_toolkit import ArrayQueryToolkit, strategies, dispatch

logger = logging.getLogger("benchmark")

ALPHABET = "abcdefg"

def make_random_ints(rng: np.random.Generator, n: int, bound: int = 1000) -> np.ndarray:
    """n integers drawn uniformly from [-bound, bound]."""
    return rng.integers(-bound, bound + 1, size=n)

def make_random_chars(rng: np.random.Generator, n: int) -> str:
    return ''.join(rng.choice(list(ALPHABET), size=n))


def benchmark(n: int, num_ops: int, rng: np.random.Generator,
              max_brute: int, brute_ops: int):
    ints  = make_random_ints(rng, n)
    chars = make_random_chars(rng, n)

    # measure build (snapshot + both prefix aggregates)
    mem0 = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    t0_wall = time.perf_counter()
    t0_cpu  = time.process_time()
    tk = ArrayQueryToolkit(ints)
    tk.prefix_sums
    tk.even_prefix_sums
    build_wall = time.perf_counter() - t0_wall
    build_cpu  = time.process_time() - t0_cpu
    mem1 = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    tk_chars = ArrayQueryToolkit(chars)
    logger.info("n=%d built in %.4fs", n, build_wall)

    # prepare queries
    ranges = []
    for _ in range(num_ops):
        l, r = sorted((random.randrange(n), random.randrange(n)))
        ranges.append((l, r))
    targets = [random.randint(-2000, 2000) for _ in range(num_ops)]
    shifts  = [random.randrange(n) for _ in range(num_ops)]
    pairs   = [tuple(random.sample(ALPHABET, 2)) for _ in range(num_ops)]

    tasks = {
        "range_sum":      (tk,       ranges),
        "even_range_sum": (tk,       ranges),
        "equilibrium":    (tk,       [()] * num_ops),
        "pair_count":     (tk_chars, pairs),
        "pair_sum":       (tk,       [(t,) for t in targets]),
        "pair_sum_count": (tk,       [(t,) for t in targets]),
        "rotate":         (tk,       [(k,) for k in shifts]),
    }

    results = {
        "n":            n,
        "build_wall_s": build_wall,
        "build_cpu_s":  build_cpu,
        "build_rss_kb": mem1 - mem0,
    }

    def measure(fn, target, qs):
        times, answers = [], []
        for q in qs:
            start = time.perf_counter()
            answers.append(fn(target, *q))
            times.append(time.perf_counter() - start)
        return sum(times) / len(times), answers

    rows = []
    for family, (target, qs) in tasks.items():
        reference, ref_mode = None, None
        for mode in strategies(family):
            brute = mode.name == "BRUTE_FORCE"
            # quadratic strategies only on small inputs
            if brute and family not in ("range_sum", "even_range_sum") and n > max_brute:
                continue
            # brute force answers a prefix of the queries only
            mode_qs = qs[:brute_ops] if brute else qs
            fn = dispatch(family, mode)
            for _ in range(5):
                fn(target, *mode_qs[0])             # warmup
            avg, answers = measure(fn, target, mode_qs)
            if reference is None:
                reference, ref_mode, parity = answers, mode, True
            else:
                parity = all(a == b for a, b in zip(answers, reference))
                if not parity:
                    logger.error("%s: %s disagrees with %s at n=%d",
                                 family, mode.name, ref_mode.name, n)
            rows.append({**results, "family": family, "mode": mode.name,
                         "queries": len(mode_qs), "avg_s": avg, "parity": parity})
    return rows


def main():
    parser = argparse.ArgumentParser(description="Benchmark ArrayQueryToolkit strategies")
    parser.add_argument(
        "--sizes", "-n", type=int, nargs="+", required=True,
        help="Sequence lengths to test"
    )
    parser.add_argument(
        "--queries", "-q", type=int, default=200,
        help="Number of random queries per strategy"
    )
    parser.add_argument(
        "--max-brute", type=int, default=500,
        help="Skip quadratic strategies above this length"
    )
    parser.add_argument(
        "--brute-queries", type=int, default=10,
        help="Number of queries answered by brute-force strategies"
    )
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--verbose", "-v", action="store_true")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.queries <= 0 or args.brute_queries <= 0:
        parser.error("--queries and --brute-queries must be positive")

    random.seed(args.seed)
    rng = np.random.default_rng(args.seed)
    all_rows = []
    for n in args.sizes:
        if n <= 0:
            parser.error("sizes must be positive")
        all_rows.extend(benchmark(n, args.queries, rng,
                                  args.max_brute, args.brute_queries))

    df = pd.DataFrame(all_rows)
    print(df.to_string(index=False))


if __name__ == "__main__":
    main()


# ./benchmark.py --sizes 100 1000 10000 100000 --queries 200
