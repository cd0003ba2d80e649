"""Table description files: data layouts declared at given addresses."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from dissrc.xfile import OpeSize

TIMES_AUTOMATIC = 0
"""Repeat the table until the next label."""
TIMES_DECIDE_BY_BREAK = -1
"""Repeat the table until a break entry ends it."""

_HEX = re.compile(r"[0-9A-Fa-f]+")
_DIGITS = re.compile(r"\d+")


class TableFormatError(ValueError):
    """A table description file is malformed."""

    def __init__(self, message: str, line: int) -> None:
        self.line = line
        super().__init__(f"{message} (line {line})")


@dataclass
class Formula:
    """One member expression of a table."""

    line: int
    expr: str
    id: OpeSize | None = None
    hidden: bool = False


@dataclass
class Table:
    """A table starting at ``address`` whose members repeat ``loop`` times."""

    address: int
    loop: int = 1
    formulas: list[Formula] = field(default_factory=list)

    @property
    def lines(self) -> int:
        return len(self.formulas)


class TableSet:
    """All tables read from description files, in the order they were read."""

    def __init__(self) -> None:
        self._tables: list[Table] = []
        self._line = 0

    def __iter__(self) -> Iterator[Table]:
        return iter(list(self._tables))

    def __len__(self) -> int:
        return len(self._tables)

    def read(self, stream: Iterable[str]) -> list[Table]:
        """Read table descriptions from ``stream``; return the tables added.

        A line starting with a hexadecimal digit opens a table at that
        address; its member lines run up to a line starting with ``end``,
        which may give the repeat count as ``[n]``, ``[breakonly]`` or ``[]``.
        """
        self._line = 0
        lines = iter(stream)
        added: list[Table] = []
        for raw in lines:
            self._line += 1
            first = raw[:1]
            if first in ("#", "*", ";"):
                continue
            if first and first in string.hexdigits:
                address = int(_HEX.match(raw).group(), 16)
                table = self._read_table(address, lines)
                self._tables.append(table)
                added.append(table)
        return added

    def read_file(self, path: str | Path) -> list[Table]:
        """Read table descriptions from the file at ``path``."""
        try:
            stream = open(path, encoding="utf-8")
        except OSError as exc:
            raise OSError(f"Could not open {path}.") from exc
        with stream:
            return self.read(stream)

    def _read_table(self, address: int, lines: Iterator[str]) -> Table:
        table = Table(address)
        for raw in lines:
            line = raw.removesuffix("\n")
            self._line += 1
            if line[:1] in ("#", "*") and line:
                continue
            if line[:3].lower() == "end":
                table.loop = self._parse_end(line[3:])
                return table
            table.formulas.append(Formula(self._line, line))
        raise TableFormatError("end of file reached inside a table", self._line)

    def _parse_end(self, rest: str) -> int:
        rest = rest.lstrip(" \t")
        if not rest.startswith("["):
            return 1
        rest = rest[1:].lstrip(" \t")
        digits = _DIGITS.match(rest)
        if digits and rest[0] in string.digits:
            return int(digits.group())
        if rest[:9].lower() == "breakonly":
            return TIMES_DECIDE_BY_BREAK
        if rest.startswith("]"):
            return TIMES_AUTOMATIC
        raise TableFormatError("syntax error at end", self._line)

    def search(self, address: int) -> Table | None:
        """The first table starting at ``address``, or ``None``."""
        return next((table for table in self._tables if table.address == address), None)

    @classmethod
    def from_text(cls, text: str) -> TableSet:
        """Build a set from the text of a description file."""
        tables = cls()
        tables.read(text.splitlines(keepends=True))
        return tables


def read_stream(stream: TextIO) -> TableSet:
    """Read a whole description file from an open text stream."""
    tables = TableSet()
    tables.read(stream)
    return tables