# tests/test_primeset.py
"""
Tests for the lazily grown prime cache and its query layer.

Run: pytest -v
"""

from __future__ import annotations

import copy
from itertools import islice

import pytest
from sympy import isprime, nextprime, prime, primepi

from primeset import (
    OutOfRangeError,
    PrimeList,
    PrimeSet,
    PrimeSetBasics,
    TrialDivision,
    factors,
    is_prime,
)

FIRST_FEW = [2, 3, 5, 7, 11, 13, 17, 19, 23]


# ---------- expand / list -----------------------------------------------------


def test_fresh_cache_is_seeded():
    ps = TrialDivision()
    assert ps.list() == [2, 3]
    assert len(ps) == 2
    assert not ps.is_empty()


def test_expand_adds_exactly_one_larger_prime():
    ps = TrialDivision()
    for _ in range(200):
        ln = len(ps)
        last = ps[ln - 1]
        ps.expand()
        assert len(ps) == ln + 1
        new = ps[ln]
        assert new > last
        assert isprime(new)
        # nothing prime was skipped
        assert nextprime(last) == new


def test_first_expansion_finds_five():
    ps = TrialDivision()
    ps.expand()
    assert ps.list() == [2, 3, 5]


def test_list_is_stable_without_mutation():
    ps = TrialDivision()
    ps.get(50)
    a = list(ps.list())
    ps.find_vec(100)
    list(ps.iter_vec())
    assert ps.list() == a
    assert ps.list() == ps.list()


def test_list_is_read_only_view():
    ps = TrialDivision()
    view = ps.list()
    assert isinstance(view, PrimeList)
    with pytest.raises(TypeError):
        view[0] = 4  # type: ignore[index]
    assert not hasattr(view, "append")


def test_unseeded_cache_finds_two_and_three():
    ps = TrialDivision.unseeded()
    assert ps.is_empty()
    assert len(ps) == 0
    ps.expand()
    assert ps.list() == [2]
    ps.expand()
    ps.expand()
    assert ps.list() == [2, 3, 5]


# ---------- indexing ------------------------------------------------------------


def test_indexing_cached_primes():
    ps = TrialDivision()
    assert ps[0] == 2
    assert ps[1] == 3


@pytest.mark.parametrize("bad", [2, 100, -1])
def test_indexing_past_cache_raises(bad):
    ps = TrialDivision()
    with pytest.raises(IndexError):
        ps[bad]


def test_indexing_does_not_expand():
    ps = TrialDivision()
    with pytest.raises(IndexError):
        ps[5]
    assert len(ps) == 2


# ---------- get -----------------------------------------------------------------


@pytest.mark.parametrize("index", [0, 1, 2, 9, 24, 99, 999])
def test_get_matches_sympy(index):
    ps = TrialDivision()
    assert ps.get(index) == prime(index + 1)
    assert len(ps) == max(2, index + 1)


def test_get_does_not_over_expand():
    ps = TrialDivision()
    ps.get(10)
    assert len(ps) == 11
    ps.get(3)
    assert len(ps) == 11


def test_get_negative_index_raises():
    ps = TrialDivision()
    with pytest.raises(IndexError):
        ps.get(-1)
    assert len(ps) == 2


# ---------- find / find_vec -----------------------------------------------------


def test_next_prime_from_number():
    ps = TrialDivision()
    assert ps.find(10) == (4, 11)


def test_find_primes():
    ps = TrialDivision()

    # nothing up to 1000 is cached yet
    assert ps.find_vec(1000) is None

    idx, n = 168, 1009
    assert ps.find(1000) == (idx, n)
    assert ps.find(n) == (idx, n)

    # no expansion beyond 1009
    plst = ps.list()
    plen = len(ps)
    assert plen == idx + 1
    assert plst[plen - 1] == n

    assert ps.find_vec(1000) == (idx, n)


@pytest.mark.parametrize("n", [0, 1, 2])
def test_find_small_values_give_index_zero(n):
    ps = TrialDivision()
    assert ps.find(n) == (0, 2)
    assert ps.find_vec(n) == (0, 2)


@pytest.mark.parametrize("n", [3, 4, 24, 90, 97, 98, 7919, 7920])
def test_find_agrees_with_sympy(n):
    ps = TrialDivision()
    idx, p = ps.find(n)
    expected = n if isprime(n) else nextprime(n)
    assert p == expected
    assert idx == primepi(p) - 1
    assert ps[idx] == p


def test_find_vec_is_read_only():
    ps = TrialDivision()
    ps.get(20)
    before = list(ps.list())
    for n in range(0, 200):
        ps.find_vec(n)
    assert ps.list() == before


def test_find_vec_on_empty_cache():
    ps = TrialDivision.unseeded()
    assert ps.find_vec(0) is None
    assert ps.find(0) == (0, 2)


def test_find_rejects_out_of_range():
    ps = TrialDivision()
    with pytest.raises(OutOfRangeError):
        ps.find(-1)
    with pytest.raises(OutOfRangeError):
        ps.find_vec(2**64)


# ---------- iterators -----------------------------------------------------------


def test_iterator():
    ps = TrialDivision()
    assert list(islice(ps.iter(), 9)) == FIRST_FEW


def test_iter_replays_cache_first():
    ps = TrialDivision()
    ps.get(30)
    assert list(islice(ps.iter(), 40)) == [prime(k) for k in range(1, 41)]


def test_generator_yields_only_new_primes():
    ps = TrialDivision()
    ps.get(4)  # [2, 3, 5, 7, 11]
    assert list(islice(ps.generator(), 3)) == [13, 17, 19]
    assert len(ps) == 8


def test_iter_vec_is_finite_and_does_not_expand():
    ps = TrialDivision()
    ps.get(8)
    assert list(ps.iter_vec()) == FIRST_FEW
    assert len(ps) == 9
    assert list(ps) == FIRST_FEW


def test_iter_vec_sees_growth_before_exhaustion():
    ps = TrialDivision()
    it = ps.iter_vec()
    assert next(it) == 2
    ps.expand()
    assert list(it) == [3, 5]
    # exhausted cursors stay exhausted
    ps.expand()
    assert list(it) == []


def test_iterators_are_not_restartable():
    ps = TrialDivision()
    it = ps.iter()
    assert next(it) == 2
    assert next(it) == 3
    assert iter(it) is it
    assert next(it) == 5


def test_is_prime_matches_lazy_sequence():
    seq = set(islice(TrialDivision().iter(), 500))
    top = max(seq)
    for n in range(top + 1):
        assert is_prime(n) == (n in seq)


# ---------- prime_factors -------------------------------------------------------


@pytest.mark.parametrize(
    "x, expected",
    [
        (0, []),
        (1, []),
        (2, [2]),
        (12, [2, 2, 3]),
        (121, [11, 11]),
        (144, [2, 2, 2, 2, 3, 3]),
        (10_000_000, [2] * 7 + [5] * 7),
        (1009, [1009]),
        (2 * 1000003, [2, 1000003]),
    ],
)
def test_prime_factors(x, expected):
    ps = TrialDivision()
    assert ps.prime_factors(x) == expected


def test_prime_factors_agrees_with_free_function():
    ps = TrialDivision()
    for x in range(0, 3000):
        assert ps.prime_factors(x) == factors(x)


def test_prime_factors_grows_cache_to_sqrt_only():
    ps = TrialDivision()
    ps.prime_factors(1009 * 1013)
    assert ps.list()[len(ps) - 1] <= 1013


# ---------- copies / abstract base ----------------------------------------------


def test_copy_is_independent():
    ps = TrialDivision()
    ps.get(10)
    other = ps.copy()
    assert other.list() == ps.list()
    other.expand()
    assert len(other) == len(ps) + 1
    shallow = copy.copy(ps)
    ps.expand()
    assert len(shallow) == 11


def test_query_layer_over_custom_basics():
    """PrimeSet works on top of any expand/list implementation."""

    class TablePrimes(PrimeSet):
        TABLE = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29)

        def __init__(self):
            self.n = 1

        def expand(self):
            self.n += 1

        def list(self):
            return self.TABLE[: self.n]

    ps = TablePrimes()
    assert ps.find(12) == (5, 13)
    assert ps.get(7) == 19
    assert list(islice(ps.iter(), 4)) == [2, 3, 5, 7]
    assert ps.find_vec(25) is None


def test_basics_are_abstract():
    with pytest.raises(TypeError):
        PrimeSetBasics()  # type: ignore[abstract]
    with pytest.raises(TypeError):
        PrimeSet()  # type: ignore[abstract]


def test_repr():
    assert repr(TrialDivision()) == "TrialDivision(len=2, last=3)"
