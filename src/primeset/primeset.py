# -----------------------------------------------------------------------------
#  primeset.py
#  Lazily grown prime caches and the query layer built on top of them
# -----------------------------------------------------------------------------

"""
A prime cache only has to know two things: how to find one more prime
(expand) and how to show the primes found so far (list). Everything else,
binary search, indexing and lazy iteration, lives in PrimeSet and works for
any PrimeSetBasics implementation.

Usage:

    ps = TrialDivision()
    ps.find(1000)        # (168, 1009), grows the cache as needed
    ps.get(10)           # 31
    for p in ps.iter():  # 2, 3, 5, ... forever
        ...

A PrimeSet is not thread-safe. Mutating queries (expand, find, get, the
expanding iterators, prime_factors) need exclusive access; read-only ones
(list, find_vec, iter_vec, indexing) may be shared between readers only.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_left
from collections.abc import Iterator, Sequence
from time import perf_counter
from typing import overload

from primeset.runtime import current as _rt_current
from primeset.utility import U64_MAX, OutOfRangeError, check_u64, print_debug

_SEED = (2, 3)


class PrimeList(Sequence[int]):
    """
    Read-only live view of a cache list.

    Negative subscripts raise IndexError instead of counting from the end:
    an index into the cache is a position in the prime sequence.
    """

    __slots__ = ("_data",)

    def __init__(self, data: list[int]):
        self._data = data

    @overload
    def __getitem__(self, i: int) -> int: ...
    @overload
    def __getitem__(self, i: slice) -> list[int]: ...

    def __getitem__(self, i):
        if isinstance(i, slice):
            return self._data[i]
        if i < 0:
            raise IndexError(f"prime index {i} is negative")
        return self._data[i]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PrimeList):
            return self._data == other._data
        if isinstance(other, (list, tuple)):
            return self._data == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PrimeList({self._data!r})"


class PrimeSetBasics(ABC):
    @abstractmethod
    def expand(self) -> None:
        """Find one more prime and add it to the list."""

    @abstractmethod
    def list(self) -> Sequence[int]:
        """All primes found so far, increasing."""


class PrimeSet(PrimeSetBasics):
    """Queries shared by every PrimeSetBasics implementation."""

    def __len__(self) -> int:
        return len(self.list())

    def is_empty(self) -> bool:
        return len(self.list()) == 0

    def __getitem__(self, index: int) -> int:
        # Already cached primes only; use get() to grow the cache.
        return self.list()[index]

    def __iter__(self) -> Iterator[int]:
        return self.iter_vec()

    def generator(self) -> PrimeSetIter:
        """Iterator over all primes not yet found."""
        return PrimeSetIter(self, len(self), expand=True)

    def iter(self) -> PrimeSetIter:
        """
        Iterator over all primes, starting with 2. If you don't care about
        the state of the cache, this is what you want.
        """
        return PrimeSetIter(self, 0, expand=True)

    def iter_vec(self) -> PrimeSetIter:
        """Iterator over just the primes found so far."""
        return PrimeSetIter(self, 0, expand=False)

    def find(self, n: int) -> tuple[int, int]:
        """
        Smallest prime >= n as (index, prime), growing the cache as needed.
        If n is prime the result is (index, n).
        """
        check_u64(n, "n")
        t0 = perf_counter()
        before = len(self)
        while self.is_empty() or n > self._last():
            self.expand()
        res = self.find_vec(n)
        assert res is not None
        _trace(f"find({n}) -> {res}", t0, before, len(self))
        return res

    def find_vec(self, n: int) -> tuple[int, int] | None:
        """
        Like find(), but only searches primes already in the cache.
        Returns None when n is past the largest cached prime.
        """
        check_u64(n, "n")
        lst = self.list()
        if not lst or n > lst[len(lst) - 1]:
            return None
        idx = bisect_left(lst, n)
        return idx, lst[idx]

    def get(self, index: int) -> int:
        """The index-th prime (0-based), even if it is not found yet."""
        if index < 0:
            raise IndexError(f"prime index {index} is negative")
        t0 = perf_counter()
        before = len(self)
        self._fill(index)
        p = self.list()[index]
        if before <= index:
            _trace(f"get({index}) -> {p}", t0, before, len(self))
        return p

    def prime_factors(self, x: int) -> list[int]:
        """
        Prime factors of x with multiplicity, dividing by cached primes only
        and growing the cache up to sqrt of the unfactored part. Same result
        as factorize.factors(), but the work is kept in the cache.
        """
        check_u64(x, "x")
        if x <= 1:
            return []
        t0 = perf_counter()
        before = len(self)
        out: list[int] = []
        rest = x
        i = 0
        while True:
            self._fill(i)
            p = self.list()[i]
            if p * p > rest:
                break
            while rest % p == 0:
                out.append(p)
                rest //= p
            i += 1
        if rest > 1:
            out.append(rest)
        _trace(f"prime_factors({x}) -> {len(out)} factors", t0, before, len(self))
        return out

    def _fill(self, index: int) -> None:
        for _ in range(index + 1 - len(self)):
            self.expand()

    def _last(self) -> int:
        lst = self.list()
        return lst[len(lst) - 1] if lst else 0


class PrimeSetIter:
    """
    Cursor over a PrimeSet. With expand=True it grows the cache whenever it
    catches up with it and never stops; with expand=False it stops at the end
    of the cache as it is when the cursor gets there, and stays stopped.
    """

    __slots__ = ("_pset", "_n", "_expand", "_done")

    def __init__(self, pset: PrimeSet, n: int, *, expand: bool):
        self._pset = pset
        self._n = n
        self._expand = expand
        self._done = False

    def __iter__(self) -> PrimeSetIter:
        return self

    def __next__(self) -> int:
        if self._done:
            raise StopIteration
        while self._n >= len(self._pset.list()):
            if not self._expand:
                self._done = True
                raise StopIteration
            self._pset.expand()
        self._n += 1
        return self._pset.list()[self._n - 1]


class TrialDivision(PrimeSet):
    """
    Prime generator using trial division by the primes already found.

    Starts with [2, 3]; TrialDivision.unseeded() starts empty and finds 2 and
    3 on the first two expansions.
    """

    def __init__(self) -> None:
        self._primes: list[int] = list(_SEED)

    @classmethod
    def unseeded(cls) -> TrialDivision:
        ts = cls()
        ts._primes = []
        return ts

    def expand(self) -> None:
        lst = self._primes
        if len(lst) < len(_SEED):
            lst.append(_SEED[len(lst)])
            return
        strict = _rt_current().strict_u64
        cand = lst[-1] + 2
        while True:
            if strict and cand > U64_MAX:
                raise OutOfRangeError(cand, "next prime candidate")
            rem = 0
            for n in lst:
                rem = cand % n
                if rem == 0 or n * n > cand:
                    break
            if rem != 0:
                lst.append(cand)
                return
            cand += 2

    def list(self) -> PrimeList:
        return PrimeList(self._primes)

    def copy(self) -> TrialDivision:
        """Independent generator with the same primes found so far."""
        ts = type(self).unseeded()
        ts._primes = list(self._primes)
        return ts

    __copy__ = copy

    def __repr__(self) -> str:
        last = self._primes[-1] if self._primes else None
        return f"TrialDivision(len={len(self._primes)}, last={last})"


def _trace(label: str, t0: float, before: int, after: int) -> None:
    print_debug(label, (perf_counter() - t0) * 1000.0, f"expanded {after - before}, cached {after}")
