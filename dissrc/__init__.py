"""Executable headers, symbol tables, table files, listing output and option parsing for a 68000 source code generator."""

__version__ = "3.16.0"