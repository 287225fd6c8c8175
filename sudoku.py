# sudoku.py
# Solve a 9x9 Sudoku by candidate elimination over rows, columns and boxes,
# falling back to backtracking (guess + re-eliminate) when elimination stalls.
# Every cell is a 9-bit candidate mask, see bitset.py.

import enum
import logging
from typing import List, Optional, Tuple

from bitset import ALL_CANDIDATES, NO_CANDIDATES, count, is_unique, single, value_of, values

log = logging.getLogger(__name__)

Grid = List[List[int]]
Region = List[Tuple[int, int]]

ERROR_MESSAGE = "ERROR has occurred!"


# --- Errors
class SudokuError(Exception):
    """Anything that makes a load or a solve fail."""


class LoadError(SudokuError, ValueError):
    """Input text is not in the numeric or the ASCII box format."""


class InvalidGrid(SudokuError):
    """A region repeats a fixed value or a cell has no candidates left."""


class Unsolvable(SudokuError):
    """Valid grid, but the solver ran out of options."""


# --- Regions: lists of (row, col), 0-based
def row_cells(r: int) -> Region:
    return [(r, c) for c in range(9)]


def col_cells(c: int) -> Region:
    return [(r, c) for r in range(9)]


def box_cells(r: int, c: int) -> Region:
    # (r, c) is the top-left corner of the box
    return [(r + i, c + j) for i in range(3) for j in range(3)]


ROWS = [row_cells(r) for r in range(9)]
COLS = [col_cells(c) for c in range(9)]
BOXES = [box_cells(r, c) for r in range(0, 9, 3) for c in range(0, 9, 3)]
REGIONS = ROWS + COLS + BOXES


# --- Grid helpers
def empty_grid() -> Grid:
    return [[ALL_CANDIDATES] * 9 for _ in range(9)]


def from_values(rows: List[List[int]]) -> Grid:
    """Build a grid from 9x9 ints, 0=blank, 1..9=clue."""
    if len(rows) != 9 or any(len(row) != 9 for row in rows):
        raise ValueError("Expected 9 rows of 9 values")
    grid = []
    for row in rows:
        cells = []
        for v in row:
            if v == 0:
                cells.append(ALL_CANDIDATES)
            else:
                cells.append(single(v))
        grid.append(cells)
    return grid


def to_values(grid: Grid) -> List[List[int]]:
    """Inverse of from_values; every cell that is not fixed becomes 0."""
    return [[value_of(cell) or 0 for cell in row] for row in grid]


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def restore_grid(grid: Grid, snapshot: Grid) -> None:
    """Write `snapshot` back into `grid` in place."""
    for row, saved in zip(grid, snapshot):
        row[:] = saved


# --- Region elimination
def fixed_mask(grid: Grid, region: Region) -> int:
    """OR of the fixed cells of a region."""
    mask = NO_CANDIDATES
    for r, c in region:
        if is_unique(grid[r][c]):
            mask |= grid[r][c]
    return mask


def eliminate_region(grid: Grid, region: Region) -> bool:
    """
    Strip the values fixed in `region` from its open cells.
    Fixed cells are never touched: the allowed mask excludes their own bit.
    Returns True if any cell changed.
    """
    allowed = ALL_CANDIDATES ^ fixed_mask(grid, region)
    changed = False
    for r, c in region:
        cell = grid[r][c]
        if is_unique(cell):
            continue
        narrowed = cell & allowed
        if narrowed != cell:
            grid[r][c] = narrowed
            changed = True
    return changed


def eliminate_row(grid: Grid, r: int) -> bool:
    return eliminate_region(grid, ROWS[r])


def eliminate_col(grid: Grid, c: int) -> bool:
    return eliminate_region(grid, COLS[c])


def eliminate_box(grid: Grid, r: int, c: int) -> bool:
    return eliminate_region(grid, box_cells(r, c))


# --- Validation
def _region_valid(grid: Grid, region: Region) -> bool:
    seen = NO_CANDIDATES
    for r, c in region:
        cell = grid[r][c]
        if cell == NO_CANDIDATES:
            return False
        if is_unique(cell):
            if seen & cell:
                return False
            seen |= cell
    return True


def is_valid_row(grid: Grid, r: int) -> bool:
    return _region_valid(grid, ROWS[r])


def is_valid_col(grid: Grid, c: int) -> bool:
    return _region_valid(grid, COLS[c])


def is_valid_box(grid: Grid, r: int, c: int) -> bool:
    return _region_valid(grid, box_cells(r, c))


def is_valid(grid: Grid) -> bool:
    return all(_region_valid(grid, region) for region in REGIONS)


def require_valid(grid: Grid) -> None:
    """Raise InvalidGrid naming the first broken region."""
    for kind, regions in (("row", ROWS), ("column", COLS), ("box", BOXES)):
        for i, region in enumerate(regions):
            if not _region_valid(grid, region):
                raise InvalidGrid(f"{kind} {i + 1} repeats a value or has an empty cell")


def needs_solving(grid: Grid) -> bool:
    return any(not is_unique(cell) for row in grid for cell in row)


# --- Elimination solver
class Outcome(enum.Enum):
    SOLVED = "solved"
    STUCK = "stuck"
    INVALID = "invalid"


def propagate(grid: Grid) -> Outcome:
    """Eliminate over all 27 regions until solved, stuck or contradictory."""
    if not is_valid(grid):
        return Outcome.INVALID
    passes = 0
    while True:
        passes += 1
        changed = False
        for region in REGIONS:
            changed = eliminate_region(grid, region) or changed
        if not is_valid(grid):
            log.debug("Contradiction after %d elimination pass(es)", passes)
            return Outcome.INVALID
        if not needs_solving(grid):
            log.debug("Solved by elimination in %d pass(es)", passes)
            return Outcome.SOLVED
        if not changed:
            return Outcome.STUCK


def solve(grid: Grid) -> bool:
    return propagate(grid) is Outcome.SOLVED


# --- Backtracking solver
def _fewest_candidates(grid: Grid) -> Optional[Tuple[int, int]]:
    """Open cell with the fewest candidates; row-major order breaks ties."""
    best = None
    best_count = 10
    for r in range(9):
        for c in range(9):
            cell = grid[r][c]
            if is_unique(cell):
                continue
            n = count(cell)
            if n < best_count:
                best, best_count = (r, c), n
                if n == 2:
                    return best
    return best


def generic_solve(grid: Grid) -> bool:
    """
    Elimination plus backtracking.
    On success `grid` holds a full solution. On failure `grid` is left
    exactly as it was passed in.
    """
    if not is_valid(grid):
        return False
    if not needs_solving(grid):
        return True
    snapshot = copy_grid(grid)

    outcome = propagate(grid)
    if outcome is Outcome.SOLVED:
        return True
    if outcome is Outcome.INVALID:
        # elimination only drops impossible values, so no guess can help
        restore_grid(grid, snapshot)
        return False

    # stuck: guess on the narrowest cell, from its eliminated candidates
    r, c = _fewest_candidates(grid)
    narrowed = copy_grid(grid)
    for value in values(narrowed[r][c]):
        restore_grid(grid, narrowed)
        grid[r][c] = single(value)
        log.debug("Guessing %d at r%dc%d", value, r + 1, c + 1)
        if generic_solve(grid):
            return True
    restore_grid(grid, snapshot)
    return False


def solve_or_raise(grid: Grid, *, generic: bool = False) -> None:
    """Solve in place; raise InvalidGrid or Unsolvable instead of returning False."""
    require_valid(grid)
    if generic:
        solved = generic_solve(grid)
    else:
        solved = solve(grid)
    if solved:
        return
    if not is_valid(grid):
        raise InvalidGrid("elimination reached a contradiction")
    if generic:
        raise Unsolvable("no solution reachable by backtracking")
    raise Unsolvable("elimination got stuck; try backtracking")


if __name__ == "__main__":
    from sudoku_io import load, print_grid

    PUZZLE = [
        "530070000",
        "600195000",
        "098000060",
        "800060003",
        "400803001",
        "700020006",
        "060000280",
        "000419005",
        "000080079",
    ]
    grid = load("".join(PUZZLE) + "\n")
    if not generic_solve(grid):
        print("No solution.")
    else:
        print("Solved:")
        print_grid(grid)
