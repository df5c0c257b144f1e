"""Rounding modes and operation codes shared by the numeric backends."""

from enum import IntEnum, unique

class RM(IntEnum):
    ROUND_NEAREST_EVEN = 0
    RNE = 0
    ROUND_NEAREST_AWAY = 1
    RNA = 1
    ROUND_UP = 2
    RTP = 2
    ROUND_DOWN = 3
    RTN = 3
    ROUND_TO_ZERO = 4
    RTZ = 4
    ROUND_AWAY_ZERO = 5
    RAZ = 5

@unique
class OP(IntEnum):
    add = 0
    sub = 1
    mul = 2
    div = 3
