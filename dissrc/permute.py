"""Argument ordering modes and the permutation that moves options ahead of operands."""

from __future__ import annotations

import enum
from typing import MutableSequence


class Ordering(enum.Enum):
    """How options that follow non-option arguments are handled."""

    REQUIRE_ORDER = "require_order"
    """Stop scanning for options at the first non-option argument."""

    PERMUTE = "permute"
    """Keep scanning, moving all non-options to the end as options are found."""

    RETURN_IN_ORDER = "return_in_order"
    """Report each non-option as if it were the argument of option code 1."""


def choose_ordering(
    optstring: str, posixly_correct: str | None = None
) -> tuple[Ordering, str]:
    """Pick the ordering that ``optstring`` and the environment ask for.

    A leading ``-`` selects :attr:`Ordering.RETURN_IN_ORDER` and a leading ``+``
    selects :attr:`Ordering.REQUIRE_ORDER`; that character is then dropped from
    the returned option string. Otherwise a set ``posixly_correct`` value means
    :attr:`Ordering.REQUIRE_ORDER` and its absence :attr:`Ordering.PERMUTE`.
    """
    if optstring.startswith("-"):
        return Ordering.RETURN_IN_ORDER, optstring[1:]
    if optstring.startswith("+"):
        return Ordering.REQUIRE_ORDER, optstring[1:]
    if posixly_correct is not None:
        return Ordering.REQUIRE_ORDER, optstring
    return Ordering.PERMUTE, optstring


def is_nonoption(arg: str) -> bool:
    """Tell whether ``arg`` lacks option syntax (including a lone ``-``)."""
    return not arg.startswith("-") or arg == "-"


def exchange(
    argv: MutableSequence[str], first_nonopt: int, last_nonopt: int, optind: int
) -> tuple[int, int]:
    """Swap the skipped non-options with the options that followed them.

    ``argv[first_nonopt:last_nonopt]`` holds non-options already passed over and
    ``argv[last_nonopt:optind]`` the options processed since. The two runs are
    exchanged in place, each keeping its own order. Returns the new
    ``(first_nonopt, last_nonopt)`` that mark where the non-options now lie.
    """
    if not 0 <= first_nonopt <= last_nonopt <= optind <= len(argv):
        raise IndexError(
            f"invalid ranges: first={first_nonopt} last={last_nonopt} "
            f"optind={optind} len={len(argv)}"
        )
    nonoptions = list(argv[first_nonopt:last_nonopt])
    options = list(argv[last_nonopt:optind])
    argv[first_nonopt:optind] = options + nonoptions
    return first_nonopt + (optind - last_nonopt), optind