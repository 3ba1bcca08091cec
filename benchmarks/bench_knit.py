"""Benchmarks for composition, currying, memoization and Maybe.

Run with: pytest benchmarks/bench_knit.py --benchmark-only -v
"""

from knit_core import Absent, Present, compose, curry, make_key, memoize, partial, pipe


def inc(n):
    return n + 1


def double(n):
    return n * 2


# =============================================================================
# Composition benchmarks
# =============================================================================


class TestComposition:
    """Benchmark pipeline construction and calls."""

    def test_pipe_creation(self, benchmark):
        """Benchmark building a three-stage pipeline."""
        benchmark(pipe, inc, double, str)

    def test_pipe_call(self, benchmark):
        """Benchmark calling a three-stage pipeline."""
        pipeline = pipe(inc, double, str)
        benchmark(pipeline, 5)

    def test_compose_call(self, benchmark):
        """Benchmark calling a composed function."""
        composed = compose(str, double, inc)
        benchmark(composed, 5)

    def test_direct_call_baseline(self, benchmark):
        """Baseline: the same work as nested calls."""
        benchmark(lambda n: str(double(inc(n))), 5)


# =============================================================================
# Currying benchmarks
# =============================================================================


class TestCurrying:
    """Benchmark curried and partial application."""

    def test_curried_one_at_a_time(self, benchmark):
        """Benchmark add3(1)(2)(3)."""
        add3 = curry(lambda a, b, c: a + b + c)
        benchmark(lambda: add3(1)(2)(3))

    def test_curried_all_at_once(self, benchmark):
        """Benchmark add3(1, 2, 3)."""
        add3 = curry(lambda a, b, c: a + b + c)
        benchmark(add3, 1, 2, 3)

    def test_partial_call(self, benchmark):
        """Benchmark a Partial call."""
        add_one = partial(lambda a, b: a + b, 1)
        benchmark(add_one, 2)


# =============================================================================
# Memoization benchmarks
# =============================================================================


class TestMemoization:
    """Benchmark memoize hits and key construction."""

    def test_memo_hit_scalar(self, benchmark):
        """Benchmark a cache hit with a scalar argument."""
        cached = memoize(double)
        cached(21)
        benchmark(cached, 21)

    def test_memo_hit_structured(self, benchmark):
        """Benchmark a cache hit with a nested argument."""
        cached = memoize(len)
        payload = {'ids': list(range(50)), 'tags': {'a': 1, 'b': 2}}
        cached(payload)
        benchmark(cached, payload)

    def test_make_key(self, benchmark):
        """Benchmark canonical key construction."""
        benchmark(make_key, ([1, 2, 3], {'b': 2, 'a': 1}), {'flag': True})


# =============================================================================
# Maybe benchmarks
# =============================================================================


class TestMaybe:
    """Benchmark Maybe method calls."""

    def test_present_map(self, benchmark):
        """Benchmark Present.map."""
        benchmark(Present(5).map, double)

    def test_absent_map(self, benchmark):
        """Benchmark Absent.map."""
        benchmark(Absent.map, double)

    def test_present_get_or_else(self, benchmark):
        """Benchmark Present.get_or_else."""
        benchmark(Present(5).get_or_else, 0)
