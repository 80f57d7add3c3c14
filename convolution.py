"""
Polynomial multiplication over Z/pZ.

convolve(a, b, p) returns the exact product coefficients reduced mod p.
Long inputs go through a number-theoretic transform: directly when p is
NTT-friendly, otherwise through three NTT primes and CRT recombination.
"""
import numpy as np
from sympy.ntheory import primitive_root

# Below this length (of the shorter input) schoolbook multiplication wins.
NAIVE_THRESHOLD = 32

# (prime, primitive root), each of the form c * 2^k + 1 with k >= 23
NTT_PRIMES = (
    (998244353, 3),
    (167772161, 3),
    (469762049, 3),
)

_ROOTS = {p: g for p, g in NTT_PRIMES}


def next_power_of_two(n):
    return 1 if n <= 1 else 1 << (n - 1).bit_length()


def two_adicity(p):
    """Largest k with 2^k dividing p - 1."""
    m = p - 1
    return (m & -m).bit_length() - 1


def _primitive_root(p):
    if p not in _ROOTS:
        _ROOTS[p] = primitive_root(p)
    return _ROOTS[p]


def _bit_reverse_indices(n):
    bits = n.bit_length() - 1
    idx = np.arange(n)
    rev = np.zeros(n, dtype=np.int64)
    for b in range(bits):
        rev |= ((idx >> b) & 1) << (bits - 1 - b)
    return rev


def _powers(w, count, p):
    """[1, w, w^2, ..., w^(count-1)] mod p, built by doubling."""
    out = np.ones(1, dtype=np.int64)
    while len(out) < count:
        step = pow(w, len(out), p)
        out = np.concatenate((out, out * step % p))
    return out[:count]


def ntt(a, p, invert=False):
    """
    In-order iterative radix-2 NTT of a (length a power of two) mod p.

    Requires p < 2^31 so that products of residues fit in int64.
    """
    n = len(a)
    g = _primitive_root(p)
    a = np.asarray(a, dtype=np.int64)[_bit_reverse_indices(n)]
    length = 2
    while length <= n:
        w = pow(g, (p - 1) // length, p)
        if invert:
            w = pow(w, p - 2, p)
        half = length // 2
        tw = _powers(w, half, p)
        blocks = a.reshape(-1, length)
        u = blocks[:, :half]
        v = blocks[:, half:] * tw % p
        a = np.concatenate(((u + v) % p, (u - v) % p), axis=1).reshape(-1)
        length *= 2
    if invert:
        a = a * pow(n, p - 2, p) % p
    return a


def _ntt_convolve(a, b, p):
    size = next_power_of_two(len(a) + len(b) - 1)
    fa = np.zeros(size, dtype=np.int64)
    fb = np.zeros(size, dtype=np.int64)
    fa[:len(a)] = np.asarray(a, dtype=np.int64) % p
    fb[:len(b)] = np.asarray(b, dtype=np.int64) % p
    c = ntt(ntt(fa, p) * ntt(fb, p) % p, p, invert=True)
    return c[:len(a) + len(b) - 1]


def _crt_convolve(a, b, p):
    """
    Product mod an arbitrary p < 2^31.

    The true coefficients are below len * p^2, which is smaller than the
    product of the three NTT primes, so Garner's algorithm recovers them.
    """
    (m1, _), (m2, _), (m3, _) = NTT_PRIMES
    r1 = _ntt_convolve(a, b, m1)
    r2 = _ntt_convolve(a, b, m2)
    r3 = _ntt_convolve(a, b, m3)

    m1_inv_m2 = pow(m1, m2 - 2, m2)
    m12_inv_m3 = pow(m1 * m2 % m3, m3 - 2, m3)

    t1 = r1
    t2 = (r2 - t1) % m2 * m1_inv_m2 % m2
    t3 = (r3 - t1 % m3 - (m1 % m3) * t2 % m3) % m3 * m12_inv_m3 % m3

    # x = t1 + m1*t2 + m1*m2*t3, reduced mod p
    return (t1 % p + (m1 % p) * t2 % p + (m1 * m2 % p) * t3 % p) % p


def naive_convolve(a, b, p):
    """Schoolbook product over Python ints, so nothing overflows."""
    conv = np.convolve(np.asarray(a, dtype=object), np.asarray(b, dtype=object))
    return conv % p


def convolve(a, b, p):
    """
    Coefficients of a(x) * b(x) mod p.

    The result has length len(a) + len(b) - 1, or 0 if either input is empty.
    Inputs are residue arrays; the output uses int64 for p < 2^31 and
    Python ints otherwise.
    """
    dtype = np.int64 if p < 2**31 else object
    if len(a) == 0 or len(b) == 0:
        return np.zeros(0, dtype=dtype)

    size = next_power_of_two(len(a) + len(b) - 1)
    if min(len(a), len(b)) <= NAIVE_THRESHOLD or p >= 2**31:
        return naive_convolve(a, b, p).astype(dtype)
    if size <= 1 << two_adicity(p):
        return _ntt_convolve(a, b, p)
    if size <= 1 << min(two_adicity(m) for m, _ in NTT_PRIMES):
        return _crt_convolve(a, b, p)
    return naive_convolve(a, b, p).astype(dtype)
