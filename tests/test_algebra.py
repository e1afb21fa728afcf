"""Tests for Pair and the algebra law checkers."""

import pytest
from hypothesis import given, strategies as st
from segtree import Pair, laws

from algebras import Affine, Assign, IntSum, Min, Offset, SumLen

sumlens = st.builds(SumLen, st.integers(-100, 100), st.integers(0, 20))
mins = st.builds(Min, st.integers(-100, 100))
affines = st.builds(Affine, st.integers(-3, 3), st.integers(-10, 10))
assigns = st.builds(Assign, st.one_of(st.none(), st.integers(-10, 10)))
offsets = st.builds(Offset, st.integers(-10, 10))

SumMin = Pair.of(SumLen, Min)
AffineOffset = Pair.of(Affine, Offset)
pairs = st.builds(SumMin, sumlens, mins)
pair_mods = st.builds(AffineOffset, affines, offsets)


class TestPair:
    """Tests for Pair - two algebra values that merge and apply component-wise."""

    def test_merge(self):
        """Test merging merges each component."""
        merged = SumMin(SumLen(3, 1), Min(3)).merge(SumMin(SumLen(5, 2), Min(1)))
        assert merged == Pair(SumLen(8, 3), Min(1))
        assert type(merged) is SumMin

    def test_apply(self):
        """Test a Pair of modifiers applies each component."""
        mod = AffineOffset(Affine(2, 1), Offset(4))
        result = mod.apply(SumMin(SumLen(3, 2), Min(-1)))
        assert result == Pair(SumLen(8, 2), Min(3))
        assert type(result) is SumMin

    def test_empty(self):
        """Test a bound Pair knows its identity."""
        assert SumMin.empty() == Pair(SumLen.empty(), Min.empty())
        assert AffineOffset.empty() == Pair(Affine.empty(), Offset.empty())

    def test_empty_unbound(self):
        """Test an unbound Pair has no identity."""
        with pytest.raises(TypeError):
            Pair.empty()

    def test_of_is_cached(self):
        """Test binding the same types twice gives the same class."""
        assert Pair.of(SumLen, Min) is SumMin
        assert Pair.of(Min, SumLen) is not SumMin
        assert issubclass(SumMin, Pair)
        assert SumMin.__name__ == "Pair[SumLen, Min]"

    def test_getitem(self):
        """Test accessing components by index."""
        pair = Pair(IntSum(1), IntSum(2))
        assert pair[0] == IntSum(1)
        assert pair[1] == IntSum(2)
        assert pair[-1] == IntSum(2)
        with pytest.raises(IndexError):
            pair[2]

    def test_unpack(self):
        """Test a Pair unpacks like a 2-tuple."""
        first, second = Pair(IntSum(1), IntSum(2))
        assert first == IntSum(1)
        assert second == IntSum(2)
        assert len(Pair(IntSum(1), IntSum(2))) == 2

    def test_eq_and_hash(self):
        """Test equality and hashing only look at the components."""
        assert Pair(IntSum(1), Min(2)) == SumMin(IntSum(1), Min(2))
        assert Pair(IntSum(1), Min(2)) != Pair(IntSum(1), Min(3))
        assert Pair(IntSum(1), Min(2)) != (IntSum(1), Min(2))
        assert hash(Pair(IntSum(1), Min(2))) == hash(SumMin(IntSum(1), Min(2)))

    def test_nested(self):
        """Test pairs of pairs."""
        inner = Pair.of(IntSum, IntSum)
        outer = Pair.of(inner, Min)
        assert outer.empty() == Pair(Pair(IntSum(0), IntSum(0)), Min.empty())
        merged = outer(inner(IntSum(1), IntSum(2)), Min(5)).merge(
            outer(inner(IntSum(3), IntSum(4)), Min(2))
        )
        assert merged == Pair(Pair(IntSum(4), IntSum(6)), Min(2))


class TestLaws:
    """Test the law checkers against lawful and broken algebras."""

    @given(sumlens, sumlens, sumlens)
    def test_sumlen_associative(self, a, b, c):
        assert laws.check_associative(a, b, c)

    @given(sumlens)
    def test_sumlen_identity(self, a):
        assert laws.check_identity(a)

    @given(pairs, pairs, pairs)
    def test_pair_associative(self, a, b, c):
        assert laws.check_associative(a, b, c)

    @given(pairs)
    def test_pair_identity(self, a):
        assert laws.check_identity(a)

    @given(affines, sumlens, sumlens)
    def test_affine_distributive(self, m, a, b):
        assert laws.check_distributive(m, a, b)

    @given(affines, affines, sumlens)
    def test_affine_composition(self, new, old, a):
        assert laws.check_composition(new, old, a)

    @given(affines, affines, affines)
    def test_affine_associative(self, a, b, c):
        assert laws.check_associative(a, b, c)

    @given(assigns, assigns, sumlens)
    def test_assign_composition(self, new, old, a):
        assert laws.check_composition(new, old, a)

    @given(assigns, sumlens, sumlens)
    def test_assign_distributive(self, m, a, b):
        assert laws.check_distributive(m, a, b)

    @given(offsets, mins, mins)
    def test_offset_min_distributive(self, m, a, b):
        assert laws.check_distributive(m, a, b)

    @given(pair_mods, pair_mods, pairs)
    def test_pair_composition(self, new, old, a):
        assert laws.check_composition(new, old, a)

    @given(pair_mods, pairs, pairs)
    def test_pair_distributive(self, m, a, b):
        assert laws.check_distributive(m, a, b)

    def test_identity_needs_bound_pair(self):
        """Test a bare Pair has no identity to check against."""
        assert laws.check_identity(SumMin(SumLen(2, 1), Min(2)))
        with pytest.raises(TypeError):
            laws.check_identity(Pair(SumLen(2, 1), Min(2)))

    @given(sumlens)
    def test_modifier_identity(self, a):
        assert laws.check_modifier_identity(a, Affine.empty())
        assert laws.check_modifier_identity(a, Assign.empty())

    def test_offset_on_sum_is_not_distributive(self):
        """Test a plain offset does not distribute over a sum."""
        assert not laws.check_distributive(Offset(1), IntSum(1), IntSum(2))

    def test_backwards_composition_is_caught(self):
        """Test composing oldest first breaks the composition law."""

        class BackwardsAssign(Assign):
            def merge(self, other):
                return other if other.value is not None else self

        assert not laws.check_composition(
            BackwardsAssign(1), BackwardsAssign(2), SumLen(0, 1)
        )
