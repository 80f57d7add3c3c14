"""
Prime fields Z/pZ and their elements.
"""
import numpy as np
import sympy


class DomainError(ValueError):
    """
    Raised when an operation is applied outside its mathematical domain,
    e.g. inverting a series whose constant term is zero.
    """


class PrimeField:
    """
    The field Z/pZ.

    Elements are created by calling the field: ``F = PrimeField(7); F(10) == 3``.
    Coefficient arrays use int64 while products of two residues fit in it,
    and Python ints (object dtype) otherwise.
    """
    def __init__(self, modulus):
        modulus = int(modulus)
        if not sympy.isprime(modulus):
            raise ValueError(f"Modulus must be prime. Got {modulus}")
        self.modulus = modulus
        self.dtype = np.int64 if modulus < 2**31 else object
        self._inverses = [0, 1]

    def __repr__(self):
        return f"PrimeField({self.modulus})"

    def __eq__(self, other):
        return isinstance(other, PrimeField) and self.modulus == other.modulus

    def __hash__(self):
        return hash(("PrimeField", self.modulus))

    def __call__(self, value):
        if isinstance(value, ModInt):
            if value.field != self:
                raise ValueError(f"Element of {value.field} used in {self}")
            return value
        return ModInt(int(value) % self.modulus, self)

    @property
    def zero(self):
        return ModInt(0, self)

    @property
    def one(self):
        return ModInt(1 % self.modulus, self)

    def residue(self, value):
        """Plain int in [0, p) for an int or an element of this field."""
        return self(value).value

    def reduce(self, values):
        """Array of residues of ``values`` in this field's dtype."""
        if isinstance(values, np.ndarray):
            if values.dtype.kind not in "biuO":
                raise ValueError(f"Coefficients must be integers. Got dtype {values.dtype}")
            # unsigned values may not fit int64, so they go through Python ints
            if values.dtype.kind in "bi" and self.dtype != object:
                return (values.astype(np.int64) % self.modulus).astype(self.dtype)
        return np.array([self.residue(v) for v in values], dtype=self.dtype)

    def inverses(self, n):
        """
        Array [0, 1^-1, 2^-1, ..., n^-1].

        The table is grown with inv[i] = -(p // i) * inv[p % i] and kept
        for later calls.
        """
        p = self.modulus
        if n >= p:
            raise DomainError(f"{p} divides an integer in 1..{n}; no inverse in {self}")
        table = self._inverses
        for i in range(len(table), n + 1):
            table.append((p - p // i) * table[p % i] % p)
        return np.array(table[:n + 1], dtype=self.dtype)


class ModInt:
    """An element of a PrimeField."""
    __slots__ = ("value", "field")

    def __init__(self, value, field):
        self.value = value
        self.field = field

    def _coerce(self, other):
        if isinstance(other, ModInt):
            if other.field != self.field:
                raise ValueError(f"Cannot mix elements of {self.field} and {other.field}")
            return other.value
        if isinstance(other, (int, np.integer)):
            return int(other) % self.field.modulus
        return None

    def __repr__(self):
        return f"ModInt({self.value}, mod={self.field.modulus})"

    def __str__(self):
        return str(self.value)

    def __int__(self):
        return self.value

    def __index__(self):
        return self.value

    def __bool__(self):
        return self.value != 0

    def __eq__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return self.value == v

    def __hash__(self):
        return hash((self.value, self.field.modulus))

    def __neg__(self):
        return ModInt(-self.value % self.field.modulus, self.field)

    def __add__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return ModInt((self.value + v) % self.field.modulus, self.field)

    __radd__ = __add__

    def __sub__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return ModInt((self.value - v) % self.field.modulus, self.field)

    def __rsub__(self, other):
        return -(self - other)

    def __mul__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return ModInt(self.value * v % self.field.modulus, self.field)

    __rmul__ = __mul__

    def __truediv__(self, other):
        v = self._coerce(other)
        if v is None:
            return NotImplemented
        return self * ModInt(v, self.field).inv()

    def __rtruediv__(self, other):
        return self.inv() * other

    def __pow__(self, e):
        e = int(e)
        if e < 0:
            return self.inv() ** (-e)
        return ModInt(pow(self.value, e, self.field.modulus), self.field)

    def inv(self):
        if self.value == 0:
            raise DomainError(f"Zero has no inverse in {self.field}")
        p = self.field.modulus
        return ModInt(pow(self.value, p - 2, p), self.field)


MOD998244353 = PrimeField(998244353)
MOD1000000007 = PrimeField(1000000007)
DEFAULT_FIELD = MOD998244353
