"""Line-oriented writer for generated assembler source."""

from __future__ import annotations

import os
import sys
import unicodedata
from pathlib import Path
from typing import IO


def _column(text: str) -> int:
    """Display column reached after ``text``, with tab stops every eight."""
    column = 0
    for ch in text:
        if ch == "\t":
            column = (column | 7) + 1
        elif ch == "\n":
            column = 0
        elif unicodedata.east_asian_width(ch) in ("W", "F"):
            column += 2
        else:
            column += 1
    return column


class OutputWriter:
    """Collects a source line piece by piece and writes finished lines.

    With ``split`` the text section is spread over ``name.000``, ``name.001``,
    ... each holding about ``split_bytes`` bytes of program, while data and
    bss go to ``name.dat`` and ``name.bss``. A file name of ``-`` writes to
    standard output. When ``address_comment_lines`` is positive, every that
    many lines end with a comment giving the line's address.
    """

    def __init__(
        self,
        filename: str | os.PathLike[str] | None,
        split: bool = False,
        split_bytes: int = 0,
        address_comment_lines: int = 0,
        comment_char: str = ";",
        tab_column: int = 7,
        text_start: int = 0,
    ) -> None:
        self.filename = None if filename is None else os.fspath(filename)
        self.split = split
        self.split_bytes = split_bytes
        self.address_comment_lines = address_comment_lines
        self.comment_char = comment_char
        self.tab_column = tab_column
        self.text_start = text_start
        self._stream: IO[str] | None = None
        self._owns_stream = False
        self._line: list[str] = []
        self._split_mode = False
        self._split_block = 0
        self._line_count = 1

    def open(self, block: int = 0) -> None:
        """Open the output; ``block`` picks the split file (-1 data, -2 bss)."""
        if self.filename is None:
            raise ValueError("no output file name has been given")
        self.close()

        if self.filename == "-":
            self._stream = sys.stdout
            self._owns_stream = False
            return

        path = self.filename
        if self.split:
            if block == -1:
                path += ".dat"
                self._split_mode = False
            elif block == -2:
                path += ".bss"
                self._split_mode = False
            elif block >= 0:
                if block == 0:
                    self._split_mode = True
                path += f".{block:03x}"
            else:
                raise ValueError(f"invalid output block number {block}")

        try:
            self._stream = Path(path).open("w", encoding="utf-8", newline="")
        except OSError as exc:
            raise OSError(f"{path} cannot be opened.") from exc
        self._owns_stream = True

    def close(self) -> None:
        """Flush and close the current output file."""
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        stream.flush()
        if self._owns_stream:
            stream.close()

    def __enter__(self) -> OutputWriter:
        if self._stream is None:
            self.open(0)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _emit(self, text: str) -> None:
        if self._stream is None:
            raise ValueError("output is not open")
        try:
            self._stream.write(text)
        except OSError as exc:
            self.close()
            raise OSError("disk is full") from exc

    def write(self, text: str) -> None:
        """Write ``text`` straight to the output, bypassing the line."""
        self._emit(text)

    def append(self, text: str) -> None:
        """Add ``text`` to the line being built."""
        self._line.append(text)

    def append_hex2(self, value: int) -> None:
        self._line.append(f"${value & 0xFF:02x}")

    def append_hex4(self, value: int) -> None:
        self._line.append(f"${value & 0xFFFF:04x}")

    def append_hex8(self, value: int) -> None:
        self._line.append(f"${value & 0xFFFFFFFF:08x}")

    def newline(self, address: int) -> None:
        """Finish the current line, which belongs to program ``address``."""
        pending = "".join(self._line)

        if self.split and self._split_mode:
            used = address - self.text_start - self.split_bytes * self._split_block
            if self.split_bytes <= used and pending.startswith("\n"):
                self.close()
                self._split_block += 1
                self.open(self._split_block)

        if self.address_comment_lines > 0:
            if self._line_count >= self.address_comment_lines:
                tabs = max(self.tab_column - _column(pending) // 8 - 1, 0)
                self._line.append(
                    "\t" * tabs + "\t" + self.comment_char + f"{address:06x}"
                )
                self._line_count = 1
            else:
                self._line_count += 1

        self._line.append("\n")
        text = "".join(self._line)
        self._line.clear()
        self._emit(text)

    def shares_stderr(self) -> bool:
        """Tell whether the output and standard error end up in the same place."""
        if self._stream is None:
            raise ValueError("output is not open")
        try:
            out_fd = self._stream.fileno()
            err_fd = sys.stderr.fileno()
        except (AttributeError, OSError, ValueError):
            return False
        if os.isatty(out_fd) and os.isatty(err_fd):
            return True
        try:
            out_st = os.fstat(out_fd)
            err_st = os.fstat(err_fd)
        except OSError:
            return False
        return (out_st.st_dev, out_st.st_ino) == (err_st.st_dev, err_st.st_ino)