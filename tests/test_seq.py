"""Tests for map, filter, reduce, and Seq."""

import operator

import pytest
from hypothesis import given
from knit_core import Seq, filter_seq, map_seq, reduce_seq, seq

from tests.strategies import int_lists, int_predicates, integers, unary_int_fns


class TestMap:
    """Tests for seq.map."""

    def test_transforms_each_element(self):
        """Element i of the result is transform(sequence[i])."""
        assert seq.map([1, 2, 3], lambda n: n * 2) == (2, 4, 6)

    def test_empty(self):
        """Mapping an empty sequence gives an empty tuple."""
        assert seq.map([], lambda n: n * 2) == ()

    def test_accepts_any_iterable(self):
        """Generators and ranges work as input."""
        assert seq.map(range(3), str) == ('0', '1', '2')

    def test_does_not_mutate_input(self):
        """The input list is left untouched."""
        items = [1, 2, 3]
        seq.map(items, lambda n: n + 1)
        assert items == [1, 2, 3]

    def test_result_is_fresh(self):
        """The result is a new tuple, never the input object."""
        items = (1, 2, 3)
        assert seq.map(items, lambda n: n) is not items

    @given(int_lists, unary_int_fns)
    def test_preserves_length(self, items, f):
        """len(map(s, f)) == len(s) and s is unchanged."""
        snapshot = list(items)
        result = seq.map(items, f)
        assert len(result) == len(items)
        assert items == snapshot
        assert list(result) == [f(x) for x in items]


class TestFilter:
    """Tests for seq.filter."""

    def test_keeps_matching_elements(self):
        """Only elements satisfying the predicate remain, in order."""
        assert seq.filter([5, 2, 8, 1, 4], lambda n: n % 2 == 0) == (2, 8, 4)

    def test_nothing_matches(self):
        """A predicate that never holds gives an empty tuple."""
        assert seq.filter([1, 3, 5], lambda n: n % 2 == 0) == ()

    def test_does_not_mutate_input(self):
        """The input list is left untouched."""
        items = [1, 2, 3, 4]
        seq.filter(items, lambda n: n > 2)
        assert items == [1, 2, 3, 4]

    @given(int_lists, int_predicates)
    def test_subsequence_property(self, items, p):
        """Every kept element satisfies p and relative order is preserved."""
        result = seq.filter(items, p)
        assert len(result) <= len(items)
        assert all(p(x) for x in result)

        it = iter(items)
        assert all(any(x == y for y in it) for x in result)


class TestReduce:
    """Tests for seq.reduce."""

    def test_sum(self):
        """reduce([1..5], +, 0) == 15."""
        assert seq.reduce([1, 2, 3, 4, 5], lambda acc, n: acc + n, 0) == 15

    def test_empty_returns_initial(self):
        """An empty sequence returns initial without calling combine."""
        calls = []

        def combine(acc, n):
            calls.append(n)
            return acc + n

        assert seq.reduce([], combine, 'initial') == 'initial'
        assert calls == []

    def test_folds_left_to_right(self):
        """The fold is left-associative."""
        assert seq.reduce(['a', 'b', 'c'], lambda acc, s: f'({acc}{s})', '') == '(((a)b)c)'

    def test_accumulator_type_may_differ(self):
        """The accumulator can be a different type from the elements."""
        counts = seq.reduce('abca', lambda acc, ch: {**acc, ch: acc.get(ch, 0) + 1}, {})
        assert counts == {'a': 2, 'b': 1, 'c': 1}

    @given(int_lists, integers)
    def test_matches_builtin_sum(self, items, start):
        """Folding with + matches sum()."""
        assert seq.reduce(items, operator.add, start) == start + sum(items)


class TestIdempotence:
    """Re-running a pure combinator yields an equal result."""

    @given(int_lists, unary_int_fns, int_predicates)
    def test_rerun_equal(self, items, f, p):
        """map, filter and reduce are repeatable."""
        assert seq.map(items, f) == seq.map(items, f)
        assert seq.filter(items, p) == seq.filter(items, p)
        assert seq.reduce(items, operator.add, 0) == seq.reduce(items, operator.add, 0)


class TestFlatAliases:
    """The flat aliases are the same functions."""

    def test_aliases(self):
        """map_seq, filter_seq and reduce_seq point at knit_core.seq."""
        assert map_seq is seq.map
        assert filter_seq is seq.filter
        assert reduce_seq is seq.reduce


class TestSeq:
    """Tests for the fluent Seq wrapper."""

    def test_chain(self):
        """map, filter and reduce chain fluently."""
        result = Seq.of([1, 2, 3]).map(lambda n: n * 2).filter(lambda n: n > 3)
        assert result.to_list() == [4, 6]
        assert Seq.of([1, 2, 3]).map(lambda n: n * 2).reduce(operator.add, 0) == 12

    def test_steps_do_not_modify_receiver(self):
        """Every step returns a new Seq."""
        base = Seq.of([1, 2, 3])
        base.map(lambda n: n * 10)
        assert base.to_tuple() == (1, 2, 3)

    def test_reusable(self):
        """Unlike an iterator, a Seq can be consumed more than once."""
        doubled = Seq.of(range(3)).map(lambda n: n * 2)
        assert list(doubled) == [0, 2, 4]
        assert list(doubled) == [0, 2, 4]

    def test_take_and_skip(self):
        """take and skip slice the sequence."""
        items = Seq.of(range(10))
        assert items.take(3).to_list() == [0, 1, 2]
        assert items.skip(8).to_list() == [8, 9]

    def test_len_and_equality(self):
        """Seq supports len() and compares by contents."""
        assert len(Seq.of('abc')) == 3
        assert Seq.of([1, 2]) == Seq(items=(1, 2))

    def test_is_frozen(self):
        """Seq items cannot be reassigned."""
        with pytest.raises(AttributeError):
            Seq.of([1]).items = (2,)  # type: ignore[misc]

    def test_constructor_copies_list(self):
        """Seq([...]) snapshots the list into a tuple."""
        source = [1, 2, 3]
        items = Seq(source)
        source.append(4)
        assert items.to_tuple() == (1, 2, 3)
        assert isinstance(items.to_tuple(), tuple)
        assert items == Seq.of([1, 2, 3])
        assert hash(items) == hash(Seq.of((1, 2, 3)))
