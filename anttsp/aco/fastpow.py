import numpy as np

# upper word of 1.0 minus the bias correction used by the high-word trick
_MAGIC = 1072632447


def exact_pow(base, exponent):
    return np.power(base, exponent)


def fast_pow(base, exponent):
    """
    Approximate base ** exponent by rescaling the upper 32 bits of the
    IEEE-754 double and zeroing the lower word.

    Only meaningful for positive bases. The relative error reaches tens of
    percent, so selection probabilities differ from exact_pow; enable it
    with `power: fast` only when that trade is acceptable.
    """
    a = np.asarray(base, dtype=np.float64)
    bits = np.ascontiguousarray(np.atleast_1d(a)).view(np.int64)
    hi = (bits >> 32).astype(np.float64)
    y = np.trunc(exponent * (hi - _MAGIC) + _MAGIC)
    y = np.clip(y, -(2 ** 31), 2 ** 31 - 1).astype(np.int64)
    out = (y << 32).view(np.float64)
    if a.ndim == 0:
        return float(out[0])
    return out.reshape(a.shape)


def get_power(mode):
    if mode == "exact":
        return exact_pow
    if mode == "fast":
        return fast_pow
    raise ValueError(f"unknown power mode: {mode!r}")
