# sudoku_io.py
# Text formats for a 9x9 candidate grid:
#   numeric   - 81 digits on one line, 0 = blank
#   ASCII box - 13 lines, e.g.
#       +-------+-------+-------+
#       | 5 3 . | . 7 . | . . . |
#       ...
#   '.' or '0' is a blank cell, '!' a cell with no candidates.

import sys
from typing import List, Optional, TextIO

from bitset import ALL_CANDIDATES, NO_CANDIDATES, is_unique, single, value_of
from sudoku import Grid, LoadError

SEPARATOR = "+-------+-------+-------+"
DIGITS = "0123456789"


# --- numeric format
def load_numeric(text: str) -> Grid:
    body, rest = text[:81], text[81:]
    if len(body) != 81 or rest not in ("", "\n"):
        raise LoadError("Numeric format needs exactly 81 digits and an optional newline")
    grid: Grid = []
    for r in range(9):
        row = []
        for ch in body[9 * r:9 * r + 9]:
            if ch not in DIGITS:
                raise LoadError(f"Unexpected character {ch!r} in numeric format")
            row.append(ALL_CANDIDATES if ch == "0" else single(int(ch)))
        grid.append(row)
    return grid


def dumps_numeric(grid: Grid) -> str:
    return "".join(str(value_of(cell) or 0) for row in grid for cell in row) + "\n"


# --- ASCII box format
def _parse_cell(ch: str) -> int:
    if ch in ".0":
        return ALL_CANDIDATES
    if ch == "!":
        return NO_CANDIDATES
    if ch in DIGITS:
        return single(int(ch))
    raise LoadError(f"Unexpected cell character {ch!r}")


def _parse_row(line: str) -> List[int]:
    if len(line) != 25:
        raise LoadError(f"Row line must be 25 characters: {line!r}")
    row = []
    for i, ch in enumerate(line):
        if i % 8 == 0:
            if ch != "|":
                raise LoadError(f"Expected '|' at column {i}: {line!r}")
        elif i % 2 == 0:
            row.append(_parse_cell(ch))
        elif ch != " ":
            raise LoadError(f"Expected a space at column {i}: {line!r}")
    return row


def load_ascii(text: str) -> Grid:
    lines = text.splitlines(keepends=True)
    if len(lines) != 13:
        raise LoadError(f"ASCII format needs 13 lines (got {len(lines)})")
    grid: Grid = []
    for n, raw in enumerate(lines):
        if not raw.endswith("\n"):
            raise LoadError(f"Line {n + 1} is not newline-terminated")
        line = raw[:-1]
        if n % 4 == 0:
            if line != SEPARATOR:
                raise LoadError(f"Bad separator on line {n + 1}: {line!r}")
        else:
            grid.append(_parse_row(line))
    return grid


def dumps(grid: Grid) -> str:
    out = []
    for r, row in enumerate(grid):
        if r % 3 == 0:
            out.append(SEPARATOR)
        parts = []
        for c, cell in enumerate(row):
            if c % 3 == 0:
                parts.append("|")
            if cell == NO_CANDIDATES:
                parts.append("!")
            elif is_unique(cell):
                parts.append(str(value_of(cell)))
            else:
                parts.append(".")
        parts.append("|")
        out.append(" ".join(parts))
    out.append(SEPARATOR)
    return "\n".join(out) + "\n"


# --- dispatch
def load(text: str) -> Grid:
    """Parse either format, picked by the first character."""
    if not text:
        raise LoadError("Empty input")
    if text[0] in DIGITS:
        return load_numeric(text)
    if text[0] == "+":
        return load_ascii(text)
    raise LoadError(f"Unrecognised format starting with {text[0]!r}")


def load_stream(stream: TextIO) -> Grid:
    try:
        text = stream.read()
    except UnicodeDecodeError as exc:
        raise LoadError(f"Input is not valid text: {exc}") from exc
    return load(text)


def print_grid(grid: Grid, file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(dumps(grid))
