# -----------------------------------------------------------------------------
#  factorize.py
#  Stateless factorization and primality, independent of any PrimeSet
# -----------------------------------------------------------------------------

from __future__ import annotations

from primeset.trial import smallest_factor
from primeset.utility import check_u64


def factors(x: int) -> list[int]:
    """
    All prime factors of x with multiplicity, in non-decreasing order.
    0 and 1 have none.
    """
    check_u64(x, "x")
    if x <= 1:
        return []
    out: list[int] = []
    while True:
        d = smallest_factor(x)
        out.append(d)
        if d == x:
            break
        x //= d
    return out


def factors_unique(x: int) -> list[int]:
    """Distinct prime factors of x, increasing. 0 and 1 have none."""
    check_u64(x, "x")
    if x <= 1:
        return []
    out: list[int] = []
    while True:
        d = smallest_factor(x)
        out.append(d)
        if d == x:
            break
        while x % d == 0:
            x //= d
        if x == 1:
            break
    return out


def is_prime(n: int) -> bool:
    """Trial division by every odd number up to sqrt(n)."""
    check_u64(n, "n")
    return n > 1 and smallest_factor(n) == n
