"""General utilities, such as exception classes."""

# ivfp-specific exceptions

class IntervalError(ValueError):
    """Base ivfp error. Malformed input to the package raises a subclass."""

class RoundingError(IntervalError):
    """Unsupported rounding request, such as round-nearest-away in MPFR."""

class FormatError(IntervalError):
    """Unknown or unsupported number format."""

class BoundsError(IntervalError):
    """Interval bounds that do not describe a set of reals, like [2, 1]."""


# some common data structures

class ImmutableDict(dict):
    def __delitem__(self, key):
        raise ValueError('ImmutableDict cannot be modified: attempt to delete {}'
                         .format(repr(key)))

    def __setitem__(self, key, value):
        raise ValueError('ImmutableDict cannot be modified: attempt to assign [{}] = {}'
                         .format(repr(key), repr(value)))

    def clear(self):
        raise ValueError('ImmutableDict cannot be modified: attempt to clear')

    def update(self, *args, **kwargs):
        raise ValueError('ImmutableDict cannot be modified: attempt to update')
