# bitset.py
# Candidate sets for a single Sudoku cell, stored as a 9-bit int.
# Bit k (0-based) set means value k+1 is still possible.

from typing import List, Optional

ALL_CANDIDATES = 0x1FF
NO_CANDIDATES = 0x000


def _bit(value: int) -> int:
    if not 1 <= value <= 9:
        raise ValueError(f"Cell value must be 1..9 (got {value})")
    return 1 << (value - 1)


# --- membership / construction
def contains(cell: int, value: int) -> bool:
    return cell & _bit(value) != 0


def add(cell: int, value: int) -> int:
    """Return a new mask with `value` included."""
    return cell | _bit(value)


def single(value: int) -> int:
    return _bit(value)


# --- inspection
def count(cell: int) -> int:
    return bin(cell & ALL_CANDIDATES).count("1")


def is_unique(cell: int) -> bool:
    # exactly one bit set
    return cell != 0 and cell & (cell - 1) == 0 and cell <= ALL_CANDIDATES


def next_value(cell: int, previous: int) -> Optional[int]:
    """
    Smallest value > previous present in the cell, or None.
    `previous` does not have to be in the set; 0 starts from the beginning.
    """
    if not 0 <= previous <= 9:
        raise ValueError(f"previous must be 0..9 (got {previous})")
    for v in range(previous + 1, 10):
        if cell & (1 << (v - 1)):
            return v
    return None


def values(cell: int) -> List[int]:
    out = []
    v = next_value(cell, 0)
    while v is not None:
        out.append(v)
        v = next_value(cell, v)
    return out


def value_of(cell: int) -> Optional[int]:
    """The value of a fixed cell, None for open or contradictory cells."""
    if not is_unique(cell):
        return None
    return next_value(cell, 0)
