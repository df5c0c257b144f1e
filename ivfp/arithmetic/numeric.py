"""Numeric functions of intervals: inf, sup, mid, wid, rad, mag and mig
from the IEEE Std 1788-2015 (Table 9.2), with the set-based flavor behavior
of sections 10.5.9 and 12.12.8.

Every function accepts either an `Interval` or a plain real number; a plain
real behaves like the single point interval [x, x]. None of them raise on a
well-formed interval: the quantities of the empty interval are nan, and
overflow while computing a midpoint is recovered from locally.
"""

import fractions
import logging

import numpy as np

from ..titanic.ops import RM
from .interval import Interval


logger = logging.getLogger(__name__)


#
#   Helpers
#

def _zero(x):
    """Positive zero of the same type as `x`."""
    return type(x)(0)

def _normalize_zero(x):
    """Collapse -0 to +0; any other value is returned unchanged."""
    if x == 0:
        return _zero(x)
    else:
        return x

def _clamped_bounds(a):
    """The bounds of a non-empty floating-point interval, with infinite ends
    pulled in to the largest finite values of the format."""
    ctx = a.ctx
    lo, hi = inf(a), sup(a)
    if not ctx.isfinite(lo):
        lo = ctx.nextup(lo)
    if not ctx.isfinite(hi):
        hi = ctx.nextdown(hi)
    return lo, hi

def signbit(x) -> bool:
    """Is the sign bit of `x` set? Exact numbers only have a sign bit when
    they are strictly negative."""
    if isinstance(x, (fractions.Fraction, int, np.integer)):
        return x < 0
    return bool(np.signbit(x))

def is_identical(x, y) -> bool:
    """Bit-level equality of two scalars: unlike `==`, nan is identical to
    nan and -0.0 is not identical to 0.0."""
    xnan = x != x
    ynan = y != y
    if xnan or ynan:
        return bool(xnan and ynan)
    return bool(x == y) and signbit(x) == signbit(y)

_bit_views = {
    np.dtype(np.float16): np.uint16,
    np.dtype(np.float32): np.uint32,
    np.dtype(np.float64): np.uint64,
}

def float_to_bits(x) -> int:
    """The IEEE 754 bit pattern of a binary16, binary32 or binary64 scalar,
    as an unsigned integer. Python floats are treated as binary64."""
    a = np.asarray(x)
    try:
        view = _bit_views[a.dtype]
    except KeyError:
        raise ValueError('expected a binary16, binary32 or binary64 scalar, got {}'.format(repr(x)))
    return int(a.view(view))


#
#   Bounds
#

def inf(a):
    """Infimum of an interval.

    Implements the `inf` function of the IEEE Std 1788-2015 (Table 9.2 and
    section 12.12.8): a zero lower bound is always returned as -0, whatever
    sign it is stored with.
    """
    if not isinstance(a, Interval):
        return a
    lo = a.lo
    if lo == 0:
        return -abs(lo)
    else:
        return lo

def sup(a):
    """Supremum of an interval.

    Implements the `sup` function of the IEEE Std 1788-2015 (Table 9.2).
    """
    if not isinstance(a, Interval):
        return a
    return a.hi

def bounds(a):
    """Bounds of an interval as a tuple `(lo, hi)`.

    The lower bound is returned as stored: unlike `inf`, the sign of a zero
    lower bound is left alone.
    """
    if not isinstance(a, Interval):
        return a, a
    return a.lo, sup(a)


#
#   Midpoint
#

def mid(a):
    """Midpoint of an interval.

    Implements the `mid` function of the IEEE Std 1788-2015 (Table 9.2).
    The midpoint of the entire interval is 0, and an interval with one
    infinite end has the finite end of the format closest to that infinity
    as its midpoint (section 12.12.8).
    """
    if not isinstance(a, Interval):
        return a

    ctx = a.ctx
    if ctx.exact:
        return fractions.Fraction(1, 2) * (inf(a) + sup(a))

    if a.isempty():
        return ctx.nan
    if a.isentire():
        return ctx.zero

    lo, hi = inf(a), sup(a)
    if not ctx.isfinite(lo):
        return ctx.nextup(lo)
    if not ctx.isfinite(hi):
        return ctx.nextdown(hi)

    with np.errstate(over='ignore'):
        midpoint = (lo + hi) / 2
    if ctx.isfinite(midpoint):
        return _normalize_zero(midpoint)

    # The sum overflowed, as for [M, M] with M the largest finite value.
    # Halving first avoids that, but it would lose the last bit of small
    # subnormal midpoints, so it is only ever the fallback.
    logger.debug('mid: (lo + hi) overflowed for %s, halving the bounds first', a)
    return _normalize_zero(lo / 2 + hi / 2)

def scaled_mid(a, alpha):
    """An intermediate point at the relative position `alpha` in the
    interval `a`, between inf(a) at 0 and sup(a) at 1.

    `alpha` is assumed to lie in [0, 1] and is not checked; other values
    give points outside of `a`. Infinite ends are clamped to the largest
    finite values first, so `scaled_mid(a, 0.5)` is not `mid(a)` for
    unbounded intervals.
    """
    if not isinstance(a, Interval):
        return a

    ctx = a.ctx
    if ctx.exact:
        beta = ctx.convert(alpha)
        return beta * (sup(a) - inf(a)) + inf(a)

    if a.isempty():
        return ctx.nan

    lo, hi = _clamped_bounds(a)
    beta = ctx.convert(alpha)

    with np.errstate(over='ignore', invalid='ignore'):
        midpoint = beta * (hi - lo) + lo
        if ctx.isfinite(midpoint):
            return midpoint

        # hi - lo overflowed
        logger.debug('scaled_mid: (hi - lo) overflowed for %s, interpolating the bounds', a)
        return (1 - beta) * lo + beta * hi

def midpoint_radius(a):
    """Return the midpoint of an interval `a` together with its radius.

    Required by the IEEE Std 1788-2015 in section 10.5.9 for the set-based
    flavor. The radius is rounded up, so `a` is always contained in
    `[m - r, m + r]`.
    """
    if not isinstance(a, Interval):
        return a, _zero(a)

    ctx = a.ctx
    if a.isempty():
        return ctx.nan, ctx.nan

    m = mid(a)
    return m, max(ctx.sub(m, inf(a), RM.RTP), ctx.sub(sup(a), m, RM.RTP))


#
#   Width and radius
#

def diam(a):
    """Diameter (width) of the interval `a`.

    Implements the `wid` function of the IEEE Std 1788-2015 (Table 9.2),
    rounded toward positive infinity so it never underestimates the true
    width (section 12.12.8).
    """
    if not isinstance(a, Interval):
        return _zero(a)

    ctx = a.ctx
    if a.isempty():
        return ctx.nan
    return ctx.sub(sup(a), inf(a), RM.RTP)

def radius(a):
    """Radius of the interval `a`, such that `a` is contained in `m ± r` for
    the midpoint `m = mid(a)`.

    Implements the `rad` function of the IEEE Std 1788-2015 (Table 9.2).
    """
    if not isinstance(a, Interval):
        return _zero(a)
    _, r = midpoint_radius(a)
    return r


#
#   Magnitude and mignitude
#

def mag(a):
    """Magnitude of an interval, the largest |x| for x in `a`.
    Returns nan for empty intervals.

    Implements the `mag` function of the IEEE Std 1788-2015 (Table 9.2).
    """
    if not isinstance(a, Interval):
        return abs(a)
    if a.isempty():
        return a.ctx.nan
    return max(abs(inf(a)), abs(sup(a)))

def mig(a):
    """Mignitude of an interval, the smallest |x| for x in `a`.
    Returns nan for empty intervals.

    Implements the `mig` function of the IEEE Std 1788-2015 (Table 9.2).
    """
    if not isinstance(a, Interval):
        return abs(a)
    if a.isempty():
        return a.ctx.nan
    if a.contains_zero():
        return a.ctx.zero
    return min(abs(inf(a)), abs(sup(a)))


# IEEE 1788 names
wid = diam
rad = radius
midrad = midpoint_radius
