# -----------------------------------------------------------------------------
#  trial.py
#  Trial division primitive shared by factorize.py
# -----------------------------------------------------------------------------

from __future__ import annotations


def smallest_factor(x: int) -> int:
    """
    Smallest divisor d > 1 of x, or x itself when x is prime.

    Tests 2, then odd d while d*d <= x. Only meaningful for x >= 2;
    callers guard smaller values.
    """
    if x % 2 == 0:
        return 2
    d = 3
    while d * d <= x:
        if x % d == 0:
            return d
        d += 2
    # No factor found, it must be prime.
    return x
