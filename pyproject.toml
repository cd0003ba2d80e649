[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dissrc"
version = "3.16.0"
description = "Building blocks of a 68000 source code generator: X/Z file headers, symbol tables, table description files, listing output and GNU-style option parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["disassembler", "m68k", "x68000", "human68k", "getopt", "symbol table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Disassemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dissrc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
