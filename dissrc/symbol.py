"""Symbol names attached to program addresses, and the executable's symbol table."""

from __future__ import annotations

import bisect
import enum
import struct
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

_RECORD_HEADER = struct.Struct(">HI")
_RECORD_MINIMUM = _RECORD_HEADER.size + 2


class SymbolType(enum.IntEnum):
    """Kinds of symbol found in an executable's symbol table."""

    LABEL_FILE = 0x0000
    """Defined by a label file rather than by the executable."""
    COMMON = 0x0003
    ABS = 0x0200
    TEXT = 0x0201
    DATA = 0x0202
    BSS = 0x0203
    STACK = 0x0204


_SECTION_TYPES = frozenset(
    {SymbolType.COMMON, SymbolType.TEXT, SymbolType.DATA, SymbolType.BSS, SymbolType.STACK}
)


@dataclass
class SymbolName:
    """One name given to an address, with the kind of symbol it is."""

    type: int
    name: str


@dataclass
class Symbol:
    """An address and every name registered for it, oldest first."""

    address: int
    names: list[SymbolName] = field(default_factory=list)

    @property
    def first(self) -> SymbolName:
        return self.names[0]


@dataclass(frozen=True)
class SymbolRecord:
    """One entry read from an executable's symbol table."""

    type: int
    address: int
    name: str


def _decode(raw: bytes) -> str:
    return raw.decode("cp932", errors="replace")


def iter_symbol_records(data: bytes) -> Iterator[SymbolRecord]:
    """Yield the entries of a symbol table section.

    Each entry is a big-endian 16-bit type, a 32-bit address and a
    NUL-terminated name, padded to an even length.
    """
    data = bytes(data)
    limit = len(data) - _RECORD_MINIMUM
    pos = 0
    while pos <= limit:
        type_, address = _RECORD_HEADER.unpack_from(data, pos)
        pos += _RECORD_HEADER.size
        end = data.find(b"\0", pos)
        if end < 0:
            end = len(data)
        raw = data[pos:end]
        pos = end + 1
        pos += pos & 1
        yield SymbolRecord(type_, address, _decode(raw))


def _format_value(value: int) -> str:
    if value < 10:
        return str(value)
    return f"${value:x}"


def format_symbol_table(
    data: bytes, op_equ: str, op_xdef: str, colon: str, mode: int = 1
) -> list[str]:
    """Render symbol definitions as source lines (without line ends).

    ``mode`` 0 renders nothing, 1 renders absolute constants as
    ``name:: .equ value`` and 2 also declares every section symbol with
    ``op_xdef``.
    """
    lines: list[str] = []
    if not mode:
        return lines
    for record in iter_symbol_records(data):
        name = record.name
        if not name or name.startswith("*"):
            continue
        if record.type == SymbolType.ABS:
            tab = "\t" if len(name) < 8 - 2 else ""
            lines.append(f"{name}{colon}{tab}{op_equ}{_format_value(record.address)}")
        elif record.type in _SECTION_TYPES and mode == 2:
            lines.append(f"{op_xdef}{name}")
    return lines


def _print_warning(message: str) -> None:
    print(message, file=sys.stderr)


class SymbolTable:
    """Names registered per address, kept in address order."""

    def __init__(self) -> None:
        self._addresses: list[int] = []
        self._symbols: list[Symbol] = []

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(list(self._symbols))

    def add(self, address: int, type: int, name: str) -> Symbol:
        """Register ``name`` for ``address``; extra names are appended."""
        symbol = self.search(address)
        if symbol is not None:
            symbol.names.append(SymbolName(type, name))
            return symbol
        index = bisect.bisect_right(self._addresses, address)
        symbol = Symbol(address, [SymbolName(type, name)])
        self._addresses.insert(index, address)
        self._symbols.insert(index, symbol)
        return symbol

    def search(self, address: int) -> Symbol | None:
        """The symbol registered at ``address``, or ``None``."""
        index = bisect.bisect_left(self._addresses, address)
        if index < len(self._addresses) and self._addresses[index] == address:
            return self._symbols[index]
        return None

    def search_by_type(self, address: int, type: int) -> SymbolName | None:
        """The first name at ``address`` of the given kind, or ``None``."""
        symbol = self.search(address)
        if symbol is None:
            return None
        return next((entry for entry in symbol.names if entry.type == type), None)

    def load(
        self,
        data: bytes,
        begin_bss: int,
        begin_stack: int,
        use_symbols: bool = True,
        register_label: Callable[[int], object] | None = None,
        warn: Callable[[str], object] | None = None,
    ) -> int:
        """Register the symbols of an executable's symbol table section.

        Section symbols at addresses with no symbol yet are passed to
        ``register_label``. When ``use_symbols`` is false the names are not
        added, but names already registered (from a label file) take over the
        symbol's kind. A stack symbol between ``begin_bss`` and
        ``begin_stack`` lowers the start of the stack; the resulting stack
        start is returned.
        """
        warn = warn or _print_warning
        for record in iter_symbol_records(data):
            type_, address, name = record.type, record.address, record.name
            if not name:
                continue
            if name.startswith("*"):
                warn(
                    "symbol carries address alignment information "
                    f"(0x{type_:06x} 0x{address:06x} {name})"
                )
                continue

            if type_ == SymbolType.STACK and begin_bss <= address < begin_stack:
                begin_stack = address

            if type_ == SymbolType.ABS:
                continue
            if type_ not in _SECTION_TYPES:
                warn(f"unsupported symbol information (0x{type_:06x} 0x{address:06x} {name})")
                continue
            if type_ == SymbolType.COMMON:
                type_ = SymbolType.BSS

            existing = self.search(address)
            if existing is None and register_label is not None:
                register_label(address)
            if use_symbols:
                self.add(address, int(type_), name)
            elif existing is not None:
                self._change_type(existing, int(type_), name)
        return begin_stack

    @staticmethod
    def _change_type(symbol: Symbol, type_: int, name: str) -> None:
        for entry in symbol.names:
            if entry.name == name:
                entry.type = type_
                return

    @classmethod
    def from_records(cls, records: Iterable[SymbolRecord]) -> SymbolTable:
        """Build a table holding every record, whatever its kind."""
        table = cls()
        for record in records:
            table.add(record.address, record.type, record.name)
        return table