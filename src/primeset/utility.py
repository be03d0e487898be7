# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys

from colorama import Fore, Style

from primeset.runtime import current as _rt_current

U64_MAX = 2**64 - 1


class UserInputError(Exception):
    pass


class OutOfRangeError(ValueError):
    """Value outside the unsigned 64-bit domain."""

    def __init__(self, value: object, what: str = "value"):
        self.value = value
        super().__init__(f"{what} {value!r} is outside 0..{U64_MAX}")


def check_u64(x: int, what: str = "value") -> int:
    """
    Return x unchanged if it is a valid unsigned 64-bit integer.

    With LIMITS.STRICT_U64 disabled only the type is checked (bool is
    rejected too, True is not a number here).
    """
    if isinstance(x, bool) or not isinstance(x, int):
        raise OutOfRangeError(x, what)
    if _rt_current().strict_u64 and not 0 <= x <= U64_MAX:
        raise OutOfRangeError(x, what)
    return x


def _fmt_ms(ms: float) -> str:
    return f"{ms:6.2f} ms"


def print_debug(label: str, dt_ms: float, detail: str | None = None) -> None:
    """Emit a single debug line with timing (to STDERR). No-op unless debug."""
    if not _rt_current().debug:
        return
    tm = f"{Style.DIM}[{_fmt_ms(dt_ms)}]{Style.RESET_ALL}"
    line = f"{tm} {Fore.CYAN}{Style.BRIGHT}primeset{Style.RESET_ALL}  {label}"
    if detail:
        line += f" - {Style.DIM}{detail}{Style.RESET_ALL}"
    sys.stderr.write(line + "\n")
    sys.stderr.flush()
