"""Correctly rounded arithmetic inside emulated IEEE 754 formats,
implemented with GMP/MPFR as a backend.

Every function here rounds exactly once, into the precision and exponent
range of a format context, in an explicitly requested direction. The MPFR
rounding state lives in a scoped gmpy2 context, so it is restored on exit
from each call even when an exception is raised inside it.
"""


import fractions
import logging

import gmpy2 as gmp
import numpy as np

from .ops import RM, OP
from .utils import RoundingError


logger = logging.getLogger(__name__)

# MPFR has no round-to-nearest-away mode, so RNA is missing on purpose
gmp_rms = {
    RM.RNE: gmp.RoundToNearest,
    RM.RTP: gmp.RoundUp,
    RM.RTN: gmp.RoundDown,
    RM.RTZ: gmp.RoundToZero,
    RM.RAZ: gmp.RoundAwayZero,
}

gmp_ops = [
    gmp.add,
    gmp.sub,
    gmp.mul,
    gmp.div,
]


def format_context(ctx, rm=RM.RNE):
    """Build a gmpy2 context that rounds like the IEEE 754 format described
    by `ctx`, in direction `rm`.

    MPFR normalizes significands to [0.5, 1), so its exponent range is shifted
    up by one from IEEE 754: the largest finite binary64 value has MPFR
    exponent emax + 1 = 1024, and the smallest subnormal 2**(emin - p + 1)
    has MPFR exponent emin - p + 2 = -1073.
    """
    try:
        gmp_rm = gmp_rms[rm]
    except KeyError:
        raise RoundingError('unsupported rounding mode {} for MPFR'.format(repr(rm)))

    return gmp.context(
        precision=ctx.p,
        emin=ctx.emin - ctx.p + 2,
        emax=ctx.emax + 1,
        subnormalize=True,
        # overflow and underflow are part of the answer, not errors
        trap_underflow=False,
        trap_overflow=False,
        trap_inexact=False,
        trap_invalid=False,
        trap_erange=False,
        trap_divzero=False,
        round=gmp_rm,
    )


def _to_gmp(x):
    """Convert a real input into something gmpy2 will round correctly.
    Binary floats and integers convert exactly; rationals and decimal
    strings are turned into exact mpq values where possible.
    """
    if isinstance(x, fractions.Fraction):
        return gmp.mpq(x.numerator, x.denominator)
    elif isinstance(x, str):
        try:
            return gmp.mpq(fractions.Fraction(x.strip()))
        except ValueError:
            # inf, -inf, nan and friends
            return float(x)
    elif isinstance(x, (bool, np.bool_)):
        raise ValueError('expected a real number, got {}'.format(repr(x)))
    elif isinstance(x, np.integer):
        return int(x)
    elif isinstance(x, np.floating):
        return float(x)
    else:
        return x


def mpfr_to_native(x, ctx):
    """Convert an MPFR result that is already representable in `ctx`
    back to the context's native element type."""
    return ctx.dtype(float(x))


def round_to_format(x, ctx, rm=RM.RNE):
    """Round the real value `x` once into the format described by `ctx`,
    in direction `rm`, and return it as the context's native type.
    """
    value = _to_gmp(x)
    with format_context(ctx, rm=rm):
        f = gmp.mpfr(value)
    return mpfr_to_native(f, ctx)


def compute(opcode, *args, ctx, rm=RM.RNE):
    """Compute op(*args) rounded once into the format of `ctx` in direction `rm`.
    Arguments must be values of the format (for instance numpy.float32 for
    binary32); they are converted to MPFR exactly.
    NOTE: like IEEE 754 this does not trap on invalid operations, so inf - inf
    gives nan and overflow gives either infinity or the largest finite value
    depending on `rm`.
    """
    try:
        op = gmp_ops[opcode]
    except (IndexError, TypeError):
        raise ValueError('unsupported operation {}'.format(repr(opcode)))

    with format_context(ctx, rm=rm) as gmpctx:
        inputs = [gmp.mpfr(float(arg)) for arg in args]
        # gmpy2 really doesn't like it when you pass nan as an argument
        for f in inputs:
            if gmp.is_nan(f):
                return mpfr_to_native(f, ctx)
        result = op(*inputs)
        if gmpctx.overflow and gmp.is_infinite(result):
            logger.debug('%s overflowed to %s in %s', OP(opcode).name, result, ctx)

    return mpfr_to_native(result, ctx)


def ieee_fmax(ctx):
    """Compute the largest finite IEEE 754 floating-point value
    for the format described by `ctx`.
    """
    with gmp.context(
            precision=ctx.p + 1,
            emin=gmp.get_emin_min(),
            emax=gmp.get_emax_max(),
            trap_underflow=True,
            trap_overflow=True,
            trap_inexact=True,
            trap_invalid=True,
            trap_erange=True,
            trap_divzero=True,
    ):
        fmax_scale = gmp.mpfr(2) - gmp.exp2(1 - ctx.p)
        fmax = gmp.exp2(ctx.emax) * fmax_scale

    return mpfr_to_native(fmax, ctx)
