"""Number format contexts, shared by the interval type and the numeric functions.

A context says what the elements of an interval are and how to do the little
bit of arithmetic on them that the derived quantities need. Formats are
named with the same precision and rounding properties FPCores use:

    >>> ctx_from_props({'precision': 'binary32'})
    IEEECtx(props={'precision': 'binary32'})
"""

import fractions

import numpy as np

from ..titanic import gmpmath
from ..titanic import utils
from ..titanic.ops import RM, OP


binary16_synonyms = {'binary16', 'float16', 'float16_t', 'half'}
binary32_synonyms = {'binary32', 'float32', 'float32_t', 'single', 'float'}
binary64_synonyms = {'binary64', 'float64', 'float64_t', 'double'}
rational_synonyms = {'rational', 'exact', 'real'}

RNE_synonyms = {'rne', 'nearesteven', 'roundnearesteven', 'nearesttiestoeven', 'roundnearesttiestoeven'}
RNA_synonyms = {'rna', 'nearestaway', 'roundnearestaway', 'nearesttiestoaway', 'roundnearesttiestoaway'}
RTP_synonyms = {'rtp', 'topositive', 'roundtopositive', 'towardpositive', 'roundtowardpositive'}
RTN_synonyms = {'rtn', 'tonegative', 'roundtonegative', 'towardnegative', 'roundtowardnegative'}
RTZ_synonyms = {'rtz', 'tozero', 'roundtozero', 'towardzero', 'roundtowardzero'}
RAZ_synonyms = {'raz', 'awayzero', 'roundawayzero'}


IEEE_esnbits = {}
IEEE_esnbits.update((k, (5, 16)) for k in binary16_synonyms)
IEEE_esnbits.update((k, (8, 32)) for k in binary32_synonyms)
IEEE_esnbits.update((k, (11, 64)) for k in binary64_synonyms)

IEEE_rm = {}
IEEE_rm.update((k, RM.RNE) for k in RNE_synonyms)
IEEE_rm.update((k, RM.RNA) for k in RNA_synonyms)
IEEE_rm.update((k, RM.RTP) for k in RTP_synonyms)
IEEE_rm.update((k, RM.RTN) for k in RTN_synonyms)
IEEE_rm.update((k, RM.RTZ) for k in RTZ_synonyms)
IEEE_rm.update((k, RM.RAZ) for k in RAZ_synonyms)

# only formats with a native numpy scalar can hold interval bounds
IEEE_dtypes = {
    (5, 16): np.float16,
    (8, 32): np.float32,
    (11, 64): np.float64,
}


class EvalCtx(object):
    """Generic context for holding format properties."""

    # this placeholder should never have anything put in it
    props = utils.ImmutableDict()

    # exact contexts have no infinities, nans, or rounding
    exact = False

    def __init__(self, props=None):
        self.props = {}
        if props:
            self._update_props(props)

    def _update_props(self, props):
        self.props.update(props)

    def __repr__(self):
        args = []
        if len(self.props) > 0:
            args.append('props=' + repr(self.props))
        return '{}({})'.format(type(self).__name__, ', '.join(args))

    def __str__(self):
        return type(self).__name__

    def let(self, props=None):
        """Create a new context, updated with any provided properties."""
        newprops = dict(self.props)
        if props:
            newprops.update(props)
        return type(self)(props=newprops)


def _parse_rm(rounding):
    try:
        return IEEE_rm[str(rounding).lower()]
    except KeyError:
        raise utils.RoundingError('unsupported IEEE 754 rounding mode {}'.format(repr(rounding)))

def _parse_precision(prec):
    try:
        return IEEE_esnbits[str(prec).lower()]
    except KeyError:
        raise utils.FormatError('unsupported IEEE 754 precision {}'.format(repr(prec)))


class IEEECtx(EvalCtx):
    """Context for IEEE 754 binary16, binary32 and binary64 elements,
    backed by the matching numpy scalar types."""

    es = 11
    nbits = 64
    rm = RM.RNE

    p = nbits - es
    emax = (1 << (es - 1)) - 1
    emin = 1 - emax
    dtype = np.float64

    def __init__(self, props=None, es=None, nbits=None, rm=None):
        init_es = type(self).es
        init_nbits = type(self).nbits
        init_rm = type(self).rm

        self.props = {}
        if props:
            if 'round' in props:
                init_rm = _parse_rm(props['round'])
            if 'precision' in props:
                init_es, init_nbits = _parse_precision(props['precision'])
            self.props.update(props)

        # arguments are allowed to override properties
        if es is not None:
            init_es = es
        if nbits is not None:
            init_nbits = nbits
        if rm is not None:
            init_rm = rm

        try:
            self.dtype = IEEE_dtypes[(init_es, init_nbits)]
        except KeyError:
            raise utils.FormatError('no native type for IEEE 754 format es={}, nbits={}'
                                    .format(repr(init_es), repr(init_nbits)))

        self.rm = RM(init_rm)
        self.es = init_es
        self.nbits = init_nbits
        self.p = self.nbits - self.es
        self.emax = (1 << (self.es - 1)) - 1
        self.emin = 1 - self.emax

    def let(self, props=None):
        newprops = dict(self.props)
        if props:
            newprops.update(props)
        # fields not named by any property carry over from this context
        if 'precision' in newprops:
            es, nbits = None, None
        else:
            es, nbits = self.es, self.nbits
        rm = None if 'round' in newprops else self.rm
        return type(self)(props=newprops, es=es, nbits=nbits, rm=rm)

    def __repr__(self):
        if self.props:
            return '{}(props={})'.format(type(self).__name__, repr(self.props))
        return '{}(es={}, nbits={}, rm={})'.format(
            type(self).__name__, repr(self.es), repr(self.nbits), str(self.rm))

    def __str__(self):
        return 'float({:d},{:d})'.format(self.es, self.nbits)

    def __eq__(self, other):
        if isinstance(other, IEEECtx):
            return self.es == other.es and self.nbits == other.nbits and self.rm == other.rm
        return NotImplemented

    def __hash__(self):
        return hash((type(self), self.es, self.nbits, self.rm))

    # element values

    @property
    def nan(self):
        return self.dtype(np.nan)

    @property
    def zero(self):
        return self.dtype(0)

    @property
    def infinity(self):
        return self.dtype(np.inf)

    @property
    def fmax(self):
        """The largest finite value of the format."""
        return gmpmath.ieee_fmax(self)

    def convert(self, x, rm=None):
        """Round a real into the format, by default in the context's rounding mode."""
        if rm is None:
            rm = self.rm
        if isinstance(x, self.dtype):
            return x
        return gmpmath.round_to_format(x, self, rm=rm)

    # element arithmetic

    def isfinite(self, x):
        return bool(np.isfinite(x))

    def nextup(self, x):
        """The next value of the format above `x`."""
        return np.nextafter(x, self.infinity)

    def nextdown(self, x):
        """The next value of the format below `x`."""
        return np.nextafter(x, -self.infinity)

    def sub(self, x, y, rm=None):
        """`x - y` rounded once in direction `rm`."""
        if rm is None:
            rm = self.rm
        return gmpmath.compute(OP.sub, x, y, ctx=self, rm=rm)


class RationalCtx(EvalCtx):
    """Context for exact rational elements, as fractions.Fraction.
    Nothing is ever rounded, so rounding modes are accepted and ignored."""

    exact = True
    dtype = fractions.Fraction

    def __eq__(self, other):
        return isinstance(other, RationalCtx)

    def __hash__(self):
        return hash(type(self))

    def __str__(self):
        return 'rational'

    @property
    def zero(self):
        return fractions.Fraction(0)

    def convert(self, x, rm=None):
        if isinstance(x, fractions.Fraction):
            return x
        elif isinstance(x, (bool, np.bool_)):
            raise ValueError('expected a real number, got {}'.format(repr(x)))
        elif isinstance(x, np.integer):
            x = int(x)
        elif isinstance(x, np.floating):
            x = float(x)
        try:
            return fractions.Fraction(x)
        except (OverflowError, ValueError) as exn:
            raise utils.BoundsError('{} has no exact rational value: {}'.format(repr(x), str(exn)))

    def isfinite(self, x):
        return True

    def sub(self, x, y, rm=None):
        return x - y


used_ctxs = {}
def ieee_ctx(es, nbits, rm=RM.RNE):
    try:
        return used_ctxs[(es, nbits, rm)]
    except KeyError:
        ctx = IEEECtx(es=es, nbits=nbits, rm=rm)
        used_ctxs[(es, nbits, rm)] = ctx
        return ctx

binary16 = ieee_ctx(5, 16)
binary32 = ieee_ctx(8, 32)
binary64 = ieee_ctx(11, 64)
rational = RationalCtx()


def ctx_from_props(props):
    """Pick a context from FPCore-style properties such as
    {'precision': 'binary32', 'round': 'toPositive'}."""
    prec = props.get('precision', 'binary64')
    if str(prec).lower() in rational_synonyms:
        return RationalCtx(props=props)
    else:
        return IEEECtx(props=props)
