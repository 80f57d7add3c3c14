"""
Quadratic-time reference implementations.

Each routine works on plain lists of ints and solves the defining
coefficient recurrence directly, with no Newton iteration. They are slow
but obviously correct, and are what the fast FPS routines are checked
against.
"""


def _coeff(a, i):
    return a[i] if i < len(a) else 0


def naive_mul(a, b, p):
    """Full product of two coefficient lists mod p."""
    if not a or not b:
        return []
    out = [0] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        if x == 0:
            continue
        for j, y in enumerate(b):
            out[i + j] = (out[i + j] + x * y) % p
    return out


def naive_inverse(a, n, p):
    """
    First n coefficients of 1/a.

    From a * b = 1: b_0 = 1/a_0 and b_k = -1/a_0 * sum_{i=1}^k a_i b_{k-i}.
    """
    a0 = _coeff(a, 0) % p
    if a0 == 0:
        raise ValueError("Series not invertible (constant term is 0).")
    a0_inv = pow(a0, p - 2, p)
    b = [0] * n
    if n:
        b[0] = a0_inv
    for k in range(1, n):
        term = sum(_coeff(a, i) * b[k - i] for i in range(1, k + 1))
        b[k] = -term * a0_inv % p
    return b


def naive_log(a, n, p):
    """
    First n coefficients of log(a), a_0 = 1.

    g = log(a) satisfies a * g' = a', which gives
    k g_k = k a_k - sum_{i=1}^{k-1} i g_i a_{k-i}.
    """
    if _coeff(a, 0) % p != 1:
        raise ValueError("log requires constant term 1")
    g = [0] * n
    for k in range(1, n):
        acc = k * _coeff(a, k) - sum(i * g[i] * _coeff(a, k - i) for i in range(1, k))
        g[k] = acc * pow(k, p - 2, p) % p
    return g


def naive_exp(a, n, p):
    """
    First n coefficients of exp(a), a_0 = 0.

    g = exp(a) satisfies g' = a' g, which gives
    k g_k = sum_{i=1}^k i a_i g_{k-i}.
    """
    if _coeff(a, 0) % p != 0:
        raise ValueError("exp requires constant term 0")
    g = [0] * n
    if n:
        g[0] = 1
    for k in range(1, n):
        acc = sum(i * _coeff(a, i) * g[k - i] for i in range(1, k + 1))
        g[k] = acc * pow(k, p - 2, p) % p
    return g


def naive_pow(a, n, e, p):
    """First n coefficients of a^e by repeated multiplication."""
    res = [1 % p] + [0] * (n - 1) if n else []
    base = [x % p for x in a[:n]]
    for _ in range(e):
        res = naive_mul(res, base, p)[:n]
        res += [0] * (n - len(res))
    return res
