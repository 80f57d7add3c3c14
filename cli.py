"""
Formal power series calculator

Reads N and then N integer coefficients from stdin, applies one operator
to the series, and prints the N resulting coefficients on one line.

CLI Usage:
    python -m formal_series.cli < input.txt                    # 1/f mod x^N
    python -m formal_series.cli --op exp < input.txt           # exp(f) mod x^N
    python -m formal_series.cli --op pow --exponent 3          # f^3 mod x^N
    python -m formal_series.cli --modulus 1000000007 --verify  # check against brute force
    python -m formal_series.cli --selfcheck 200                # random validation run
"""

import argparse
import sys

import numpy as np

from .core import FPS
from .field import DomainError, PrimeField
from .generators import random_series
from . import reference

OPERATORS = ("inv", "log", "exp", "pow", "diff", "integral")


def apply_operator(f, op, exponent=0):
    """Apply one named operator at precision len(f)."""
    n = len(f)
    if op == "inv":
        return f.inv(n)
    if op == "log":
        return f.log(n)
    if op == "exp":
        return f.exp(n)
    if op == "pow":
        return f.pow(exponent, n)
    if op == "diff":
        return f.differential()
    if op == "integral":
        return f.integral().pre(n)
    raise ValueError(f"Unknown operator {op!r}")


def reference_operator(coeffs, op, p, exponent=0):
    """Same as apply_operator, computed with the quadratic references."""
    n = len(coeffs)
    if op == "inv":
        return reference.naive_inverse(coeffs, n, p)
    if op == "log":
        return reference.naive_log(coeffs, n, p)
    if op == "exp":
        return reference.naive_exp(coeffs, n, p)
    if op == "pow":
        return reference.naive_pow(coeffs, n, exponent, p)
    if op == "diff":
        return [coeffs[i] * i % p for i in range(1, n)]
    if op == "integral":
        return [0] + [coeffs[i - 1] * pow(i, p - 2, p) % p for i in range(1, n)]
    raise ValueError(f"Unknown operator {op!r}")


def parse_input(text, field):
    """Parse 'N c_0 ... c_{N-1}' into a series of length N."""
    words = text.split()
    if not words:
        raise ValueError("Empty input")
    n = int(words[0])
    if n < 0:
        raise ValueError(f"Coefficient count must be nonnegative. Got {n}")
    if len(words) - 1 < n:
        raise ValueError(f"Expected {n} coefficients, got {len(words) - 1}")
    return FPS([int(w) for w in words[1:n + 1]], field)


def format_output(g):
    return " ".join(str(c) for c in g.to_list())


def _operator_input(op, length, field, rng):
    if op == "inv":
        return random_series(length, field, constant=int(rng.integers(1, min(field.modulus, 100))), rng=rng)
    if op == "log":
        return random_series(length, field, constant=1, rng=rng)
    if op == "exp":
        return random_series(length, field, constant=0, rng=rng)
    if op == "pow":
        return random_series(length, field, valuation=int(rng.integers(0, 4)), rng=rng)
    return random_series(length, field, rng=rng)


def selfcheck(count=100, max_len=40, field=None, seed=None, verbose=True):
    """
    Check every operator against the references on random inputs.

    Returns:
        dict: operator -> number of mismatches
    """
    if field is None:
        field = PrimeField(998244353)
    rng = np.random.default_rng(seed)
    # log, exp and integral divide by 1 .. n-1
    max_len = max(1, min(max_len, field.modulus - 1))
    failures = {op: 0 for op in OPERATORS}

    for op in OPERATORS:
        if verbose:
            print(f"Checking {op}...", file=sys.stderr)
        for _ in range(count):
            length = int(rng.integers(1, max_len + 1))
            f = _operator_input(op, length, field, rng)
            exponent = int(rng.integers(0, 6))
            got = apply_operator(f, op, exponent)
            want = reference_operator(f.to_list(), op, field.modulus, exponent)
            if got != want:
                failures[op] += 1
                if verbose:
                    print(f"  mismatch: f={f.to_list()} e={exponent}", file=sys.stderr)
        if verbose:
            print(f"  {count - failures[op]}/{count} passed.", file=sys.stderr)

    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Truncated formal power series operators over Z/pZ",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  echo "5 1 998244352 0 0 0" | python -m formal_series.cli       # 1 1 1 1 1
  echo "3 0 1 0" | python -m formal_series.cli --op exp
  python -m formal_series.cli --selfcheck 200
        """
    )

    parser.add_argument("--op", choices=OPERATORS, default="inv",
                        help="Operator to apply (default: inv)")
    parser.add_argument("--exponent", type=int, default=2,
                        help="Exponent for --op pow (default: 2)")
    parser.add_argument("--modulus", type=int, default=998244353,
                        help="Prime modulus (default: 998244353)")

    parser.add_argument("--verify", action="store_true",
                        help="Cross-check the result against the brute-force reference")
    parser.add_argument("--selfcheck", type=int, default=None, metavar="K",
                        help="Run K random checks per operator instead of reading stdin")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for --selfcheck")

    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Suppress progress output")

    args = parser.parse_args(argv)

    if args.exponent < 0:
        parser.error("--exponent must be nonnegative")

    try:
        field = PrimeField(args.modulus)
    except ValueError as e:
        parser.error(str(e))

    if args.selfcheck is not None:
        failures = selfcheck(args.selfcheck, field=field, seed=args.seed, verbose=not args.quiet)
        total = sum(failures.values())
        if not args.quiet:
            print(f"Selfcheck finished with {total} mismatches.", file=sys.stderr)
        return 1 if total else 0

    try:
        f = parse_input(sys.stdin.read(), field)
    except ValueError as e:
        parser.error(str(e))

    try:
        g = apply_operator(f, args.op, args.exponent)
    except DomainError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.verify:
        want = reference_operator(f.to_list(), args.op, field.modulus, args.exponent)
        if g != want:
            print("error: result disagrees with the reference", file=sys.stderr)
            return 1
        if not args.quiet:
            print("Verified against reference.", file=sys.stderr)

    print(format_output(g))
    return 0


if __name__ == "__main__":
    sys.exit(main())
