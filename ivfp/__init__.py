from .titanic import utils, ops, gmpmath
from .arithmetic import evalctx, interval, numeric

Interval = interval.Interval
IEEECtx = evalctx.IEEECtx
RationalCtx = evalctx.RationalCtx
RM = ops.RM

binary16 = evalctx.binary16
binary32 = evalctx.binary32
binary64 = evalctx.binary64
rational = evalctx.rational

inf = numeric.inf
sup = numeric.sup
bounds = numeric.bounds
mid = numeric.mid
scaled_mid = numeric.scaled_mid
midpoint_radius = numeric.midpoint_radius
diam = numeric.diam
radius = numeric.radius
mag = numeric.mag
mig = numeric.mig
wid = numeric.wid
rad = numeric.rad
midrad = numeric.midrad
is_identical = numeric.is_identical
float_to_bits = numeric.float_to_bits
