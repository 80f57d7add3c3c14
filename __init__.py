"""
Truncated Formal Power Series over Prime Fields
"""
from .field import PrimeField, ModInt, DomainError, MOD998244353, MOD1000000007, DEFAULT_FIELD
from .convolution import convolve
from .core import FPS
