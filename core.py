import numpy as np

from .convolution import convolve
from .field import DEFAULT_FIELD, DomainError, ModInt


class FPS:
    """
    A truncated formal power series over a prime field.

    coeffs[i] is the coefficient of x^i. Every index past the stored length
    reads as zero, and writing past the end grows the storage. Operators
    that take a precision n return the result modulo x^n.
    """
    # numpy must defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, coeffs=None, field=None):
        if field is None:
            field = coeffs.field if isinstance(coeffs, FPS) else DEFAULT_FIELD
        self.field = field
        if coeffs is None:
            self.coeffs = np.zeros(0, dtype=field.dtype)
        elif isinstance(coeffs, FPS):
            self._check_field(coeffs)
            self.coeffs = coeffs.coeffs.copy()
        else:
            self.coeffs = field.reduce(coeffs)

    @classmethod
    def _wrap(cls, coeffs, field):
        # coeffs must already be reduced residues in field.dtype
        out = cls.__new__(cls)
        out.field = field
        out.coeffs = coeffs
        return out

    @property
    def modulus(self):
        return self.field.modulus

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        head = [int(c) for c in self.coeffs[:8]]
        tail = ", ..." if len(self) > 8 else ""
        return f"FPS(mod={self.modulus}, coeffs={head}{tail})"

    def to_list(self):
        return [int(c) for c in self.coeffs]

    def copy(self):
        return FPS._wrap(self.coeffs.copy(), self.field)

    def _check_field(self, other):
        if other.field != self.field:
            raise ValueError(f"Cannot combine series over {self.field} and {other.field}")

    def _scalar(self, value):
        return self.field.residue(value)

    # ------------------------------------------------------------------
    # storage
    # ------------------------------------------------------------------

    def _reserve(self, n):
        if len(self.coeffs) < n:
            grown = np.zeros(n, dtype=self.field.dtype)
            grown[:len(self.coeffs)] = self.coeffs
            self.coeffs = grown

    def at(self, i):
        """Coefficient of x^i, zero past the stored length."""
        if i < 0:
            raise IndexError(f"Negative coefficient index {i}")
        if i < len(self.coeffs):
            return ModInt(int(self.coeffs[i]), self.field)
        return self.field.zero

    def set_at(self, i, value):
        """Set the coefficient of x^i, growing the storage to i + 1 if needed."""
        if i < 0:
            raise IndexError(f"Negative coefficient index {i}")
        self._reserve(i + 1)
        self.coeffs[i] = self._scalar(value)

    def __getitem__(self, i):
        return self.at(i)

    def __setitem__(self, i, value):
        self.set_at(i, value)

    def pre(self, n):
        """First n coefficients, zero padded."""
        out = np.zeros(n, dtype=self.field.dtype)
        m = min(n, len(self.coeffs))
        out[:m] = self.coeffs[:m]
        return FPS._wrap(out, self.field)

    def _trimmed_length(self):
        nz = np.flatnonzero(self.coeffs)
        if len(nz) == 0:
            return min(1, len(self.coeffs))
        return int(nz[-1]) + 1

    def shrink(self):
        """Drop trailing zero coefficients, keeping one zero for a zero series."""
        self.coeffs = self.coeffs[:self._trimmed_length()]

    def valuation(self):
        """Index of the first nonzero coefficient, or None for the zero series."""
        nz = np.flatnonzero(self.coeffs)
        return int(nz[0]) if len(nz) else None

    def is_zero(self):
        return self.valuation() is None

    def __eq__(self, other):
        if isinstance(other, FPS):
            if other.field != self.field:
                return False
        elif isinstance(other, (list, tuple, np.ndarray)):
            other = FPS(other, self.field)
        else:
            return NotImplemented
        n = max(len(self), len(other))
        return bool(np.array_equal(self.pre(n).coeffs, other.pre(n).coeffs))

    __hash__ = None

    # ------------------------------------------------------------------
    # ring operators
    # ------------------------------------------------------------------

    def __iadd__(self, other):
        p = self.modulus
        if isinstance(other, FPS):
            self._check_field(other)
            self._reserve(len(other))
            self.coeffs[:len(other)] = (self.coeffs[:len(other)] + other.coeffs) % p
        else:
            self._reserve(1)
            self.coeffs[0] = (int(self.coeffs[0]) + self._scalar(other)) % p
        return self

    def __isub__(self, other):
        p = self.modulus
        if isinstance(other, FPS):
            self._check_field(other)
            self._reserve(len(other))
            self.coeffs[:len(other)] = (self.coeffs[:len(other)] - other.coeffs) % p
        else:
            self._reserve(1)
            self.coeffs[0] = (int(self.coeffs[0]) - self._scalar(other)) % p
        return self

    def __imul__(self, other):
        if not isinstance(other, FPS):
            self.coeffs = self.coeffs * self._scalar(other) % self.modulus
            return self
        self._check_field(other)
        # Shrinking both sides keeps convolution cost tied to the real degrees.
        self.shrink()
        rhs = other.coeffs[:other._trimmed_length()]
        self.coeffs = convolve(self.coeffs, rhs, self.modulus).astype(self.field.dtype)
        return self

    def __itruediv__(self, other):
        if not isinstance(other, FPS):
            self *= self.field(other).inv()
            return self
        self._check_field(other)
        if other.at(0) == 0:
            raise DomainError("Division by a series with zero constant term")
        self *= other.inv(max(len(self), len(other)))
        return self

    def __ilshift__(self, k):
        """Multiply by x^k."""
        if k < 0:
            raise ValueError(f"Shift must be nonnegative. Got {k}")
        self.coeffs = np.concatenate((np.zeros(k, dtype=self.field.dtype), self.coeffs))
        return self

    def __irshift__(self, k):
        """Floor-divide by x^k, dropping the first k coefficients."""
        if k < 0:
            raise ValueError(f"Shift must be nonnegative. Got {k}")
        self.coeffs = self.coeffs[k:].copy()
        return self

    def __add__(self, other):
        out = self.copy()
        out += other
        return out

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        out = self.copy()
        out -= other
        return out

    def __rsub__(self, other):
        out = -self
        out += other
        return out

    def __neg__(self):
        return FPS._wrap(-self.coeffs % self.modulus, self.field)

    def __mul__(self, other):
        out = self.copy()
        out *= other
        return out

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        out = self.copy()
        out /= other
        return out

    def __lshift__(self, k):
        out = self.copy()
        out <<= k
        return out

    def __rshift__(self, k):
        out = self.copy()
        out >>= k
        return out

    def shl(self, k):
        return self << k

    def shr(self, k):
        return self >> k

    def __pow__(self, e):
        if isinstance(e, (np.integer, int)):
            e = int(e)
        else:
            raise ValueError(f"Only integer powers supported. Got {type(e)}")
        return self.pow(e)

    # ------------------------------------------------------------------
    # analytic operators
    # ------------------------------------------------------------------

    def inv(self, n=None):
        """
        First n coefficients of 1/f, by Newton iteration.

        With g correct mod x^m, g' = 2g - g^2 f is correct mod x^2m, so
        the precision doubles every round.
        """
        if n is None:
            n = len(self)
        c0 = self.at(0)
        if c0 == 0:
            raise DomainError("Series not invertible (constant term is 0).")
        ret = FPS([c0.inv()], self.field)
        m = 1
        while m < n:
            m = min(2 * m, n)
            ret = (ret + ret - (ret * ret).pre(m) * self.pre(m)).pre(m)
        return ret.pre(n)

    def differential(self):
        """Formal derivative; one coefficient shorter than f."""
        if len(self) <= 1:
            return FPS(None, self.field)
        p = self.modulus
        idx = np.arange(1, len(self)) % p
        return FPS._wrap(self.coeffs[1:] * idx.astype(self.field.dtype) % p, self.field)

    def integral(self):
        """Antiderivative with zero constant term; one coefficient longer than f."""
        n = len(self)
        inverses = self.field.inverses(n)
        out = np.zeros(n + 1, dtype=self.field.dtype)
        out[1:] = self.coeffs * inverses[1:] % self.modulus
        return FPS._wrap(out, self.field)

    def log(self, n=None):
        """
        First n coefficients of log(f) for f with constant term 1.

        log(f) is the antiderivative of f'/f with zero constant term.
        """
        if n is None:
            n = len(self)
        if self.at(0) != 1:
            raise DomainError("log requires constant term 1")
        if n == 0:
            return FPS(None, self.field)
        f = self.pre(n)
        quotient = (f.differential() * f.inv(n - 1)).pre(n - 1)
        return quotient.integral().pre(n)

    def exp(self, n=None):
        """
        First n coefficients of exp(f) for f with constant term 0.

        Newton step on log(g) = f: with g correct mod x^m,
        g * (1 + f - log(g)) is correct mod x^2m.
        """
        if n is None:
            n = len(self)
        if self.at(0) != 0:
            raise DomainError("exp requires constant term 0")
        ret = FPS([1], self.field)
        m = 1
        while m < n:
            m = min(2 * m, n)
            ret = (ret * (self.pre(m) + 1 - ret.log(m))).pre(m)
        return ret.pre(n)

    def pow(self, e, n=None):
        """
        First n coefficients of f^e for an integer e >= 0.

        Writing f = c x^k u with u(0) = 1, f^e = c^e x^(ke) exp(e log u).
        When n - ke exceeds p the log is undefined, and u^e is built by
        repeated squaring instead.
        """
        if n is None:
            n = len(self)
        e = int(e)
        if e < 0:
            raise ValueError(f"Exponent must be nonnegative. Got {e}")
        if e == 0:
            return FPS([1], self.field).pre(n)
        k = self.valuation()
        if k is None or k * e >= n:
            return FPS(None, self.field).pre(n)

        c = self.at(k)
        u = (self >> k) * c.inv()
        m = n - k * e
        if m <= self.modulus:
            ret = (u.log(m) * e).exp(m)
        else:
            # log(u, m) needs 1/i for i < m, so square and multiply instead
            ret = FPS([1], self.field)
            base = u.pre(m)
            r = e
            while r > 0:
                if r % 2 == 1:
                    ret = (ret * base).pre(m)
                base = (base * base).pre(m)
                r //= 2
        return (ret * c ** e << k * e).pre(n)
