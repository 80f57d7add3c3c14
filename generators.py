import numpy as np

from .core import FPS
from .field import DEFAULT_FIELD


def random_series(n, field=DEFAULT_FIELD, valuation=0, constant=None, rng=None):
    """
    Random series of stored length n.

    Coefficients below `valuation` are zero and the one at `valuation` is
    nonzero. If `constant` is given it overrides the constant term, e.g.
    constant=1 gives a valid log input and constant=0 a valid exp input.
    """
    if rng is None:
        rng = np.random.default_rng()
    p = field.modulus
    if p <= 2**63:
        coeffs = [int(x) for x in rng.integers(0, p, size=n, dtype=np.uint64)]
    else:
        # too wide for numpy integers, draw raw bytes instead
        width = p.bit_length() // 8 + 2
        coeffs = [int.from_bytes(rng.bytes(width), "little") % p for _ in range(n)]
    for i in range(min(valuation, n)):
        coeffs[i] = 0
    if valuation < n and coeffs[valuation] == 0:
        coeffs[valuation] = 1
    if constant is not None and n > 0:
        coeffs[0] = constant
    return FPS(coeffs, field)

