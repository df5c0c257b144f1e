"""Set-based intervals with bounds in a fixed number format.

This is just the container: construction with outward rounding, validation,
and the few predicates the numeric functions in `numeric` rely on.
"""

from ..titanic import utils
from ..titanic.ops import RM
from . import evalctx


class Interval(object):
    """A closed interval of real numbers [lo, hi] whose bounds are elements of
    the format given by `ctx`, in the sense of the IEEE 1788 set-based flavor.

    Two intervals are special. The entire interval [-inf, inf] represents the
    whole real line, and the empty interval represents the empty set; the
    latter is stored as the sentinel [inf, -inf] and is a perfectly valid
    value, not an error. Rational intervals have no infinite bounds, so they
    can be neither.
    """

    # represents the real number interval [_lo, _hi]
    _lo = None
    _hi = None

    # empty set sentinel, [inf, -inf] for floating-point formats
    _empty: bool = False

    # number format of the bounds
    _ctx: evalctx.EvalCtx = evalctx.binary64

    # the internal state is not directly visible: expose it with properties

    @property
    def lo(self):
        """The lower bound, exactly as stored (including the sign of zero).
        """
        return self._lo

    @property
    def hi(self):
        """The upper bound.
        """
        return self._hi

    @property
    def ctx(self):
        """The number format of both bounds."""
        return self._ctx

    def __init__(self, x=None, lo=None, hi=None, ctx=None):
        """Creates a new interval. The first argument `x` is either an interval
        to clone into the format specified by `ctx`, or a real number to
        construct the smallest interval containing it. The arguments `lo` and
        `hi` construct the interval `[lo, hi]`, and may refine `x` if it is an
        interval. If none of these arguments are provided, the interval is
        initialized to the real number line `[-inf, inf]`.
        Lower bounds are rounded down and upper bounds up, so the result
        always contains the requested set.
        """

        # _ctx
        if ctx is not None:
            self._ctx = ctx
        elif isinstance(x, Interval):
            self._ctx = x._ctx
        else:
            self._ctx = type(self)._ctx

        if isinstance(x, Interval) and x._empty:
            if lo is not None or hi is not None:
                raise utils.BoundsError('cannot refine the bounds of an empty interval')
            self._set_empty()
            return

        if x is not None and not isinstance(x, Interval) and (lo is not None or hi is not None):
            raise utils.BoundsError('cannot specify both x={} and [lo={}, hi={}] when x is not an Interval'
                                    .format(repr(x), repr(lo), repr(hi)))

        # _lo
        if lo is not None:
            self._lo = self._ctx.convert(lo, rm=RM.RTN)
        elif isinstance(x, Interval):
            self._lo = self._ctx.convert(x._lo, rm=RM.RTN)
        elif x is not None:
            self._lo = self._ctx.convert(x, rm=RM.RTN)
        else:
            self._lo = self._ctx.convert(float('-inf'), rm=RM.RTN)

        # _hi
        if hi is not None:
            self._hi = self._ctx.convert(hi, rm=RM.RTP)
        elif isinstance(x, Interval):
            self._hi = self._ctx.convert(x._hi, rm=RM.RTP)
        elif x is not None:
            self._hi = self._ctx.convert(x, rm=RM.RTP)
        else:
            self._hi = self._ctx.convert(float('inf'), rm=RM.RTP)

        # check bounds
        if self._lo != self._lo or self._hi != self._hi:
            raise utils.BoundsError('invalid interval: nan bound in [{}, {}]'.format(self._lo, self._hi))
        if self._lo > self._hi:
            raise utils.BoundsError('invalid interval: lo={}, hi={}'.format(self._lo, self._hi))
        if not self._ctx.isfinite(self._lo) and self._lo > 0:
            raise utils.BoundsError('invalid interval: lower bound cannot be {}'.format(self._lo))
        if not self._ctx.isfinite(self._hi) and self._hi < 0:
            raise utils.BoundsError('invalid interval: upper bound cannot be {}'.format(self._hi))

    def _set_empty(self):
        if self._ctx.exact:
            raise utils.BoundsError('{} intervals cannot be empty'.format(self._ctx))
        self._empty = True
        self._lo = self._ctx.infinity
        self._hi = -self._ctx.infinity

    @classmethod
    def empty(cls, ctx=None):
        """The empty interval."""
        ival = cls.__new__(cls)
        ival._ctx = type(ival)._ctx if ctx is None else ctx
        ival._set_empty()
        return ival

    @classmethod
    def entire(cls, ctx=None):
        """The entire real line [-inf, inf]."""
        if ctx is not None and ctx.exact:
            raise utils.BoundsError('{} intervals cannot be unbounded'.format(ctx))
        return cls(ctx=ctx)

    def __repr__(self):
        return '{}(lo={}, hi={}, ctx={})'.format(
            type(self).__name__, repr(self._lo), repr(self._hi), repr(self._ctx)
        )

    def __str__(self):
        if self._empty:
            return '[empty]'
        else:
            return '[{}, {}]'.format(str(self._lo), str(self._hi))

    # (visible) utility functions

    def isempty(self) -> bool:
        """Is this the empty interval?"""
        return self._empty

    def isentire(self) -> bool:
        """Is this the whole real line [-inf, inf]?"""
        return (not self._empty
                and not self._ctx.isfinite(self._lo)
                and not self._ctx.isfinite(self._hi))

    def is_point(self) -> bool:
        """Is the interval a "singleton" interval, e.g. [a, a]?"""
        return not self._empty and self._lo == self._hi

    def contains(self, x) -> bool:
        """Does the interval contain the real number `x`?"""
        return not self._empty and self._lo <= x and x <= self._hi

    def contains_zero(self) -> bool:
        """Does the interval contain 0?"""
        return self.contains(0)

    def neg(self):
        """Returns the interval {-x | x in self}."""
        if self._empty:
            return Interval.empty(ctx=self._ctx)
        return Interval(lo=-self._hi, hi=-self._lo, ctx=self._ctx)

    def __neg__(self):
        return self.neg()
