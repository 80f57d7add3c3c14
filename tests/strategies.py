"""Hypothesis strategies for coefficient lists.

Strategies produce plain lists; tests wrap them in FPS so the same data
can be fed to the reference routines.
"""

from __future__ import annotations

from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from formal_series.field import MOD998244353

P = MOD998244353.modulus

# ===================================================================
# COEFFICIENT STRATEGIES
# ===================================================================

residues: SearchStrategy[int] = st.integers(min_value=0, max_value=P - 1)
nonzero_residues: SearchStrategy[int] = st.integers(min_value=1, max_value=P - 1)
precisions: SearchStrategy[int] = st.integers(min_value=1, max_value=40)


def coeff_lists(max_size: int = 24) -> SearchStrategy[list[int]]:
    """Arbitrary coefficient lists, the empty (zero) series included."""
    return st.lists(residues, max_size=max_size)


def unit_lists(max_size: int = 24) -> SearchStrategy[list[int]]:
    """Lists with a nonzero constant term."""
    return st.builds(lambda c, rest: [c, *rest], nonzero_residues, coeff_lists(max_size - 1))


def log_inputs(max_size: int = 24) -> SearchStrategy[list[int]]:
    """Lists with constant term 1."""
    return st.builds(lambda rest: [1, *rest], coeff_lists(max_size - 1))


def exp_inputs(max_size: int = 24) -> SearchStrategy[list[int]]:
    """Lists with constant term 0."""
    return st.builds(lambda rest: [0, *rest], coeff_lists(max_size - 1))
