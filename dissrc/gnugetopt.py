"""Command-line option scanner with GNU-style permutation and long options."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Iterator, Sequence

from dissrc.longopts import AmbiguousOptionError, HasArg, LongOption, find_long_option
from dissrc.permute import Ordering, choose_ordering, exchange, is_nonoption

_FROM_ENVIRONMENT = object()


@dataclass(frozen=True)
class OptionEvent:
    """One result of scanning.

    ``option`` is the option character, the ``val`` of a long option, ``0``
    for a long option that set a flag, ``1`` for an operand reported in
    return-in-order mode, or ``'?'`` / ``':'`` for an error.
    """

    option: str | int
    arg: str | None = None
    long_index: int | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class Getopt:
    """Scan an argument vector one option at a time.

    The vector is copied; operands are moved behind the options as scanning
    proceeds unless the ordering forbids it.
    """

    def __init__(
        self,
        argv: Sequence[str],
        optstring: str,
        longopts: Sequence[LongOption] | None = None,
        long_only: bool = False,
        opterr: bool = True,
        posixly_correct: object = _FROM_ENVIRONMENT,
    ) -> None:
        if posixly_correct is _FROM_ENVIRONMENT:
            posixly_correct = os.environ.get("POSIXLY_CORRECT")
        self.argv = list(argv)
        self.posixly_correct = posixly_correct
        self.ordering, self.optstring = choose_ordering(optstring, posixly_correct)
        self.longopts = None if longopts is None else tuple(longopts)
        self.long_only = long_only
        self.opterr = opterr
        self.optind = 1
        self.optarg: str | None = None
        self.optopt: str | int = "?"
        self.flags: dict[str, int | str] = {}
        self._nextchar = ""
        self._first_nonopt = self.optind
        self._last_nonopt = self.optind

    # -- helpers -----------------------------------------------------------

    @property
    def _colon_mode(self) -> bool:
        return self.optstring.startswith(":")

    def _missing_code(self) -> str:
        return ":" if self._colon_mode else "?"

    def _error(self, message: str, code: str = "?") -> OptionEvent:
        text = f"{self.argv[0]}: {message}"
        if self.opterr and not self._colon_mode:
            print(text, file=sys.stderr)
        return OptionEvent(code, None, None, text)

    def _exchange(self) -> None:
        self._first_nonopt, self._last_nonopt = exchange(
            self.argv, self._first_nonopt, self._last_nonopt, self.optind
        )

    def _found(self, index: int, option: LongOption) -> OptionEvent:
        self._nextchar = ""
        if option.flag is not None:
            self.flags[option.flag] = option.val
            return OptionEvent(0, self.optarg, index)
        return OptionEvent(option.val, self.optarg, index)

    # -- scanning ------------------------------------------------------------

    def _advance(self) -> OptionEvent | None | bool:
        """Move to the next argument element; ``True`` means an option was reached."""
        argv = self.argv
        argc = len(argv)
        if self._last_nonopt > self.optind:
            self._last_nonopt = self.optind
        if self._first_nonopt > self.optind:
            self._first_nonopt = self.optind

        if self.ordering is Ordering.PERMUTE:
            if self._first_nonopt != self._last_nonopt and self._last_nonopt != self.optind:
                self._exchange()
            elif self._last_nonopt != self.optind:
                self._first_nonopt = self.optind
            while self.optind < argc and is_nonoption(argv[self.optind]):
                self.optind += 1
            self._last_nonopt = self.optind

        if self.optind < argc and argv[self.optind] == "--":
            self.optind += 1
            if self._first_nonopt != self._last_nonopt and self._last_nonopt != self.optind:
                self._exchange()
            elif self._first_nonopt == self._last_nonopt:
                self._first_nonopt = self.optind
            self._last_nonopt = argc
            self.optind = argc

        if self.optind >= argc:
            if self._first_nonopt != self._last_nonopt:
                self.optind = self._first_nonopt
            return None

        current = argv[self.optind]
        if is_nonoption(current):
            if self.ordering is Ordering.REQUIRE_ORDER:
                return None
            self.optind += 1
            self.optarg = current
            return OptionEvent(1, current)

        skip = 2 if self.longopts is not None and current[1] == "-" else 1
        self._nextchar = current[skip:]
        return True

    def next(self) -> OptionEvent | None:
        """Return the next option, or ``None`` when options are exhausted."""
        if not self.argv:
            return None
        self.optarg = None

        if not self._nextchar:
            step = self._advance()
            if step is not True:
                return step

        current = self.argv[self.optind]
        if self.longopts is not None and (
            current[1] == "-"
            or (self.long_only and (len(current) > 2 or current[1] not in self.optstring))
        ):
            event = self._long_option(current)
            if event is not None:
                return event
        return self._short_option()

    def _long_option(self, current: str) -> OptionEvent | None:
        nextchar = self._nextchar
        name, eq, value = nextchar.partition("=")
        try:
            found = find_long_option(self.longopts or (), name, self.long_only)
        except AmbiguousOptionError:
            self._nextchar = ""
            self.optind += 1
            self.optopt = 0
            return self._error(f"option `{current}' is ambiguous")

        if found is not None:
            index, option = found
            self.optind += 1
            if eq:
                if option.has_arg:
                    self.optarg = value
                else:
                    self._nextchar = ""
                    self.optopt = option.val
                    if current[1] == "-":
                        spelled = f"--{option.name}"
                    else:
                        spelled = f"{current[0]}{option.name}"
                    return self._error(f"option `{spelled}' doesn't allow an argument")
            elif option.has_arg == HasArg.REQUIRED:
                if self.optind < len(self.argv):
                    self.optarg = self.argv[self.optind]
                    self.optind += 1
                else:
                    self._nextchar = ""
                    self.optopt = option.val
                    return self._error(
                        f"option `{current}' requires an argument", self._missing_code()
                    )
            return self._found(index, option)

        if (
            not self.long_only
            or current[1] == "-"
            or not nextchar
            or nextchar[0] not in self.optstring
        ):
            if current[1] == "-":
                message = f"unrecognized option `--{nextchar}'"
            else:
                message = f"unrecognized option `{current[0]}{nextchar}'"
            self._nextchar = ""
            self.optind += 1
            self.optopt = 0
            return self._error(message)
        return None

    def _short_option(self) -> OptionEvent:
        c = self._nextchar[0]
        self._nextchar = self._nextchar[1:]
        position = self.optstring.find(c)

        if not self._nextchar:
            self.optind += 1

        if position < 0 or c == ":":
            self.optopt = c
            word = "illegal" if self.posixly_correct is not None else "invalid"
            return self._error(f"{word} option -- {c}")

        spec = self.optstring[position + 1 : position + 3]
        if c == "W" and spec.startswith(";"):
            return self._w_option(c)

        if spec.startswith(":"):
            if spec == "::":
                if self._nextchar:
                    self.optarg = self._nextchar
                    self.optind += 1
                else:
                    self.optarg = None
            elif self._nextchar:
                self.optarg = self._nextchar
                self.optind += 1
            elif self.optind == len(self.argv):
                self.optopt = c
                self._nextchar = ""
                return self._error(
                    f"option requires an argument -- {c}", self._missing_code()
                )
            else:
                self.optarg = self.argv[self.optind]
                self.optind += 1
            self._nextchar = ""
        return OptionEvent(c, self.optarg)

    def _w_option(self, c: str) -> OptionEvent:
        """Treat ``-W foo`` as the long option ``--foo``."""
        argv = self.argv
        if self._nextchar:
            self.optarg = self._nextchar
            self.optind += 1
        elif self.optind == len(argv):
            self.optopt = c
            return self._error(f"option requires an argument -- {c}", self._missing_code())
        else:
            self.optarg = argv[self.optind]
            self.optind += 1

        word = self.optarg
        name, eq, value = word.partition("=")
        try:
            found = find_long_option(self.longopts or (), name, long_only=True)
        except AmbiguousOptionError:
            self._nextchar = ""
            self.optind += 1
            return self._error(f"option `-W {word}' is ambiguous")

        if found is None:
            self._nextchar = ""
            return OptionEvent("W", self.optarg)

        index, option = found
        if eq:
            if option.has_arg:
                self.optarg = value
            else:
                self._nextchar = ""
                return self._error(f"option `-W {option.name}' doesn't allow an argument")
        elif option.has_arg == HasArg.REQUIRED:
            if self.optind < len(argv):
                self.optarg = argv[self.optind]
                self.optind += 1
            else:
                self._nextchar = ""
                return self._error(
                    f"option `{argv[self.optind - 1]}' requires an argument",
                    self._missing_code(),
                )
        return self._found(index, option)

    def __iter__(self) -> Iterator[OptionEvent]:
        while (event := self.next()) is not None:
            yield event

    def remaining(self) -> list[str]:
        """The arguments not consumed as options, in their current order."""
        return self.argv[self.optind :]


def getopt(argv: Sequence[str], optstring: str) -> tuple[list[OptionEvent], list[str]]:
    """Scan all short options of ``argv``; return the events and the operands."""
    parser = Getopt(argv, optstring)
    events = list(parser)
    return events, parser.remaining()