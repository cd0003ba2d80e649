"""Long option descriptions and the lookup that matches a name or abbreviation."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Sequence


class HasArg(enum.IntEnum):
    """Whether a long option takes an argument."""

    NO = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long-named option.

    When ``flag`` is set, finding the option stores ``val`` under that key
    instead of reporting ``val`` to the caller.
    """

    name: str
    has_arg: HasArg = HasArg.NO
    flag: str | None = None
    val: int | str = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("a long option needs a non-empty name")
        object.__setattr__(self, "has_arg", HasArg(self.has_arg))


class AmbiguousOptionError(ValueError):
    """An abbreviation matches several long options that behave differently."""

    def __init__(self, name: str, candidates: Sequence[LongOption]) -> None:
        self.name = name
        self.candidates = tuple(candidates)
        names = ", ".join(option.name for option in self.candidates)
        super().__init__(f"option '{name}' is ambiguous ({names})")


def _same_behaviour(first: LongOption, other: LongOption) -> bool:
    return (
        first.has_arg == other.has_arg
        and first.flag == other.flag
        and first.val == other.val
    )


def find_long_option(
    longopts: Sequence[LongOption], name: str, long_only: bool = False
) -> tuple[int, LongOption] | None:
    """Find the long option that ``name`` spells or abbreviates.

    Anything from the first ``=`` on is ignored. An exact match wins at once.
    Otherwise the first option that ``name`` abbreviates is chosen, unless a
    later one also matches and either ``long_only`` is set or the two options
    differ in argument, flag or value; then :class:`AmbiguousOptionError` is
    raised. Returns ``(index, option)``, or ``None`` when nothing matches.
    """
    name = name.partition("=")[0]
    found: tuple[int, LongOption] | None = None
    candidates: list[LongOption] = []
    ambiguous = False

    for index, option in enumerate(longopts):
        if not option.name.startswith(name):
            continue
        if option.name == name:
            return index, option
        candidates.append(option)
        if found is None:
            found = (index, option)
        elif long_only or not _same_behaviour(found[1], option):
            ambiguous = True

    if ambiguous:
        raise AmbiguousOptionError(name, candidates)
    return found