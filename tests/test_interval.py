"""Tests for the interval container."""

from fractions import Fraction

import numpy as np
import pytest

from ivfp.arithmetic.evalctx import binary16, binary32, binary64, rational
from ivfp.arithmetic.interval import Interval
from ivfp.arithmetic.numeric import float_to_bits
from ivfp.titanic.utils import BoundsError


class TestConstruction:

    def test_default_is_entire(self):
        a = Interval()
        assert a.isentire()
        assert a.lo == -np.inf
        assert a.hi == np.inf
        assert a.ctx == binary64

    def test_bounds_take_the_format_type(self, ctx):
        a = Interval(lo=1, hi=2, ctx=ctx)
        assert isinstance(a.lo, ctx.dtype)
        assert isinstance(a.hi, ctx.dtype)
        assert a.lo == 1 and a.hi == 2

    def test_outward_rounding(self):
        a = Interval(x='0.1', ctx=binary32)
        assert Fraction(float(a.lo)) < Fraction(1, 10) < Fraction(float(a.hi))
        assert a.hi == np.nextafter(a.lo, np.float32(1))

    def test_point(self):
        a = Interval(x=0.5, ctx=binary16)
        assert a.is_point()
        assert a.lo == 0.5

    def test_clone_into_narrower_format(self):
        a = Interval(lo='0.1', hi='0.2')
        b = Interval(x=a, ctx=binary16)
        assert b.ctx == binary16
        assert b.lo <= a.lo and a.hi <= b.hi

    def test_refine_clone(self):
        a = Interval(lo=1, hi=4)
        b = Interval(x=a, hi=2)
        assert (b.lo, b.hi) == (1, 2)

    def test_signed_zero_is_stored(self):
        a = Interval(lo=-0.0, hi=1.0)
        assert float_to_bits(a.lo) == 0x8000000000000000
        b = Interval(lo=0.0, hi=1.0)
        assert float_to_bits(b.lo) == 0

    def test_half_bounded(self):
        a = Interval(lo=float('-inf'), hi=5)
        assert not a.isentire()
        assert not a.isempty()

    def test_rational(self):
        a = Interval(lo=Fraction(1, 3), hi=1, ctx=rational)
        assert a.lo == Fraction(1, 3)
        assert isinstance(a.hi, Fraction)

    @pytest.mark.parametrize('lo, hi', [
        (2, 1),
        (float('nan'), 1),
        (0, float('nan')),
        (float('inf'), float('inf')),
        (float('-inf'), float('-inf')),
    ])
    def test_invalid_bounds(self, lo, hi):
        with pytest.raises(BoundsError):
            Interval(lo=lo, hi=hi)

    def test_x_with_bounds(self):
        with pytest.raises(BoundsError):
            Interval(x=1.0, lo=0.0)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Interval(lo=3, hi=-3)


class TestSpecialIntervals:

    def test_empty(self, ctx):
        a = Interval.empty(ctx=ctx)
        assert a.isempty()
        assert not a.isentire()
        assert not a.contains_zero()
        assert not a.is_point()
        assert a.lo == np.inf and a.hi == -np.inf
        assert str(a) == '[empty]'

    def test_clone_empty(self):
        a = Interval(x=Interval.empty(), ctx=binary32)
        assert a.isempty()
        assert a.ctx == binary32
        with pytest.raises(BoundsError):
            Interval(x=Interval.empty(), lo=0)

    def test_entire(self, ctx):
        a = Interval.entire(ctx=ctx)
        assert a.isentire()
        assert a.contains_zero()
        assert a.contains(ctx.fmax)

    def test_rational_is_never_empty_or_unbounded(self):
        with pytest.raises(BoundsError):
            Interval.empty(ctx=rational)
        with pytest.raises(BoundsError):
            Interval.entire(ctx=rational)
        with pytest.raises(BoundsError):
            Interval(ctx=rational)
        with pytest.raises(BoundsError):
            Interval(lo=0, hi=float('inf'), ctx=rational)


class TestPredicates:

    @pytest.mark.parametrize('lo, hi, expected', [
        (-2.0, 3.0, True),
        (0.0, 0.0, True),
        (-0.0, 1.0, True),
        (-1.0, -0.0, True),
        (1.0, 3.0, False),
        (-3.0, -1.0, False),
    ])
    def test_contains_zero(self, lo, hi, expected):
        assert Interval(lo=lo, hi=hi).contains_zero() == expected

    def test_contains(self):
        a = Interval(lo=1, hi=2)
        assert a.contains(1) and a.contains(1.5) and a.contains(2)
        assert not a.contains(2.5)


class TestNegation:

    def test_neg(self, ctx):
        a = -Interval(lo=1, hi=2, ctx=ctx)
        assert (a.lo, a.hi) == (-2, -1)
        assert a.ctx == ctx

    def test_neg_half_bounded(self):
        a = Interval(lo=float('-inf'), hi=5).neg()
        assert (a.lo, a.hi) == (-5, np.inf)

    def test_neg_empty(self):
        assert (-Interval.empty(ctx=binary16)).isempty()


def test_repr_and_str():
    a = Interval(lo=1, hi=2)
    assert str(a) == '[1.0, 2.0]'
    assert repr(a).startswith('Interval(lo=')
