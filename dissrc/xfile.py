"""Executable headers, operand sizes and program-wide constants."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import ClassVar

VERSION = "3.16"
DATE = "2010-05-25"

ENV_OPTIONS_NAME = "dis_opt"
"""Environment variable that holds default command-line options."""


class OpeSize(enum.IntEnum):
    """Operand sizes, data kinds and table identifiers."""

    BYTESIZE = 0
    WORDSIZE = 1
    LONGSIZE = 2
    QUADSIZE = 3
    SHORTSIZE = 4
    SINGLESIZE = 5
    DOUBLESIZE = 6
    EXTENDSIZE = 7
    PACKEDSIZE = 8
    NOTHING = 9
    STRING = 10
    RELTABLE = 11
    RELLONGTABLE = 12
    ZTABLE = 13
    EVENID = 14
    CRID = 15
    WORDID = 16
    LONGID = 17
    BYTEID = 18
    ASCIIID = 19
    ASCIIZID = 20
    LASCIIID = 21
    BREAKID = 22
    ENDTABLEID = 23
    UNKNOWN = 128


class AbsoluteMode(enum.IntEnum):
    """Whether the program is loaded at a fixed address, and why."""

    NOT_ABSOLUTE = 0
    ZFILE = 1
    ZOPTION = 2


class DebugFlag(enum.IntFlag):
    """Debug output categories."""

    DEBUG = 1
    TRACE = 2
    REASON = 4
    LABEL = 8


def _unpack(layout: struct.Struct, data: bytes, kind: str) -> tuple:
    if len(data) < layout.size:
        raise ValueError(
            f"{kind} header needs {layout.size} bytes, got {len(data)}"
        )
    return layout.unpack_from(data)


@dataclass
class XHeader:
    """Header of a relocatable ``.x`` executable (big-endian, packed)."""

    head: int = 0x4855
    reserve2: int = 0
    mode: int = 0
    base: int = 0
    exec: int = 0
    text: int = 0
    data: int = 0
    bss: int = 0
    offset: int = 0
    symbol: int = 0
    reserve: bytes = bytes(0x1C)
    bindinfo: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct(">HBBIIIIIII28sI")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def parse(cls, data: bytes) -> XHeader:
        """Read a header from the start of ``data``."""
        return cls(*_unpack(cls._LAYOUT, bytes(data), ".x"))

    def pack(self) -> bytes:
        """Encode the header as it is stored in the file."""
        if len(self.reserve) != 0x1C:
            raise ValueError("reserve field must be 28 bytes")
        return self._LAYOUT.pack(
            self.head,
            self.reserve2,
            self.mode,
            self.base,
            self.exec,
            self.text,
            self.data,
            self.bss,
            self.offset,
            self.symbol,
            bytes(self.reserve),
            self.bindinfo,
        )

    @property
    def begin_text(self) -> int:
        return self.base

    @property
    def begin_data(self) -> int:
        return self.base + self.text

    @property
    def begin_bss(self) -> int:
        return self.base + self.text + self.data

    @property
    def end(self) -> int:
        return self.base + self.text + self.data + self.bss


@dataclass
class ZHeader:
    """Header of an absolute ``.z`` executable (big-endian, packed)."""

    header: int = 0x601A
    text: int = 0
    data: int = 0
    bss: int = 0
    reserve: bytes = bytes(8)
    base: int = 0
    pudding: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct(">HIII8sIH")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def parse(cls, data: bytes) -> ZHeader:
        """Read a header from the start of ``data``."""
        return cls(*_unpack(cls._LAYOUT, bytes(data), ".z"))

    def pack(self) -> bytes:
        """Encode the header as it is stored in the file."""
        if len(self.reserve) != 8:
            raise ValueError("reserve field must be 8 bytes")
        return self._LAYOUT.pack(
            self.header,
            self.text,
            self.data,
            self.bss,
            bytes(self.reserve),
            self.base,
            self.pudding,
        )