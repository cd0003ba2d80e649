# dissrc

Components of a source code generator for 68000 executables in the
Human68k `.x` and `.z` formats. The package reads executable headers and
the symbol section of `.x` files. It reads table description files that
mark data areas, and it writes assembler listing lines. It also parses
command lines the GNU way.

The package needs only the standard library.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Modules

### `dissrc.xfile`

- `XHeader.parse(data)` and `XHeader.pack()` read and write the 64-byte
  big-endian `.x` header.
- `XHeader` also has the properties `begin_text`, `begin_data`,
  `begin_bss` and `end`, which give the section boundaries.
- `ZHeader.parse(data)` and `ZHeader.pack()` do the same for the `.z`
  header.
- `parse` raises `ValueError` when the data is too short. `pack` raises
  `ValueError` when a reserve field has the wrong length.
- `OpeSize` lists operand sizes, data kinds and table identifiers.
  `AbsoluteMode` and `DebugFlag` name the load modes and the debug
  categories.
- `VERSION`, `DATE` and `ENV_OPTIONS_NAME` (`"dis_opt"`) are
  module-level constants.

### `dissrc.symbol`

- `iter_symbol_records(data)` yields a `SymbolRecord` (`type`, `address`,
  `name`) for each entry of a symbol section.
- `format_symbol_table(data, op_equ, op_xdef, colon, mode=1)` renders the
  section as source lines:
  - mode 0 renders nothing;
  - mode 1 renders `name:: .equ value` lines for absolute symbols;
  - mode 2 also renders `op_xdef` lines for section symbols.
- `SymbolTable` keeps one `Symbol` per address, in address order. Each
  `Symbol` holds its `SymbolName` entries, oldest first. The table has
  these methods:
  - `add(address, type, name)`;
  - `search(address)`;
  - `search_by_type(address, type)`;
  - `load(data, begin_bss, begin_stack, use_symbols=True, register_label=None, warn=None)`,
    which registers an executable's symbols and returns the start of the
    stack;
  - `from_records(records)`.
- `SymbolType` names the record types.

### `dissrc.table`

- `TableSet.read(stream)` and `TableSet.read_file(path)` read table
  description files and return the `Table` objects they added.
- A line that starts with a hex digit opens a table at that address. The
  table's member lines (`Formula`) run up to an `end` line. That line may
  give the repeat count in one of these forms:
  - `end` alone means one pass;
  - `end [n]` means `n` passes;
  - `end [breakonly]` gives `TIMES_DECIDE_BY_BREAK`;
  - `end []` gives `TIMES_AUTOMATIC`.
- `TableSet.search(address)` finds a table by its start address.
- `TableSet.from_text(text)` and `read_stream(stream)` are shortcuts.
- A malformed file raises `TableFormatError`, which carries the line
  number.

### `dissrc.output`

`OutputWriter` builds a listing line piece by piece:

- `append` adds text to the line;
- `append_hex2`, `append_hex4` and `append_hex8` add `$`-prefixed hex;
- `newline(address)` writes the finished line;
- `write` sends text straight to the output;
- `shares_stderr()` reports whether the output and standard error are
  the same terminal or file.

A file name of `-` writes to standard output. The writer can add an
address comment every `address_comment_lines` lines.

With `split=True`, the text section goes to `name.000`, `name.001`, and
so on. `open(-1)` and `open(-2)` open `name.dat` and `name.bss`.

The writer is a context manager. Entering it opens block 0, and leaving
it closes the output.

### `dissrc.gnugetopt`

- `Getopt(argv, optstring, longopts=None, long_only=False, opterr=True, ...)`
  scans options one at a time with `next()`, or by iteration.
- Each result is an `OptionEvent`.
- Operands are moved behind the options unless `optstring` starts with
  `+` or `POSIXLY_CORRECT` is set.
- `remaining()` returns the operands that were not consumed.
- Long options that set a flag store their value in `Getopt.flags`.
- `getopt(argv, optstring)` scans short options only. It returns the
  events and the remaining operands.

### `dissrc.longopts` and `dissrc.permute`

- `dissrc.longopts` holds `LongOption` and `HasArg`, and
  `find_long_option`, which matches names and abbreviations. It raises
  `AmbiguousOptionError` when an abbreviation matches more than one
  option.
- `dissrc.permute` holds `Ordering`, `choose_ordering`, `is_nonoption`
  and `exchange`, which swaps operand and option runs in place.

## Examples

```python
from dissrc.gnugetopt import getopt

events, operands = getopt(["prog", "-a", "file.x", "-c", "value"], "ac:")
for event in events:
    print(event.option, event.arg)   # a None / c value
print(operands)                      # ['file.x']
```

```python
from dissrc.output import OutputWriter

with OutputWriter("-") as out:
    out.append("\tmove.l\td0,d1")
    out.newline(0)
```

## What the package does not do

There is no command-line program, and nothing here decodes 68000
instructions. The package does not track labels or search data areas for
strings.

`TableSet` records each table's member expressions as text. It does not
evaluate them to work out the sizes of table entries or how many times a
table repeats.