from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("primeset")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import Settings, load_settings
from .factorize import factors, factors_unique, is_prime
from .primeset import PrimeList, PrimeSet, PrimeSetBasics, PrimeSetIter, TrialDivision
from .runtime import APPLY, CFG
from .trial import smallest_factor
from .utility import U64_MAX, OutOfRangeError, UserInputError

__all__ = [
    "APPLY",
    "CFG",
    "U64_MAX",
    "OutOfRangeError",
    "PrimeList",
    "PrimeSet",
    "PrimeSetBasics",
    "PrimeSetIter",
    "Settings",
    "TrialDivision",
    "UserInputError",
    "__version__",
    "factors",
    "factors_unique",
    "is_prime",
    "load_settings",
    "smallest_factor",
]
