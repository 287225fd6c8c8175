# sudoku_z3.py
# Count the completions of a candidate grid with Z3, stopping at `limit`.
# Requires: pip install z3-solver

from typing import List

from z3 import Int, Or, Distinct, Solver, ModelRef, sat

from bitset import values
from sudoku import Grid


def _block_model_on_grid(slv: Solver, X, model: ModelRef) -> None:
    """Add a blocking clause to forbid the current solution."""
    diffs = []
    for r in range(9):
        for c in range(9):
            v = model.eval(X[r][c], model_completion=True)
            diffs.append(X[r][c] != v)
    slv.add(Or(diffs))


def grid_solver(grid: Grid):
    """Z3 solver over x_r_c in 1..9 restricted to each cell's candidates."""
    X: List[List] = [[Int(f"x_{r}_{c}") for c in range(9)] for r in range(9)]
    s = Solver()

    # Domain: only the values still in the candidate mask
    for r in range(9):
        for c in range(9):
            s.add(Or([X[r][c] == v for v in values(grid[r][c])]))

    for r in range(9):
        s.add(Distinct(X[r]))
    for c in range(9):
        s.add(Distinct([X[r][c] for r in range(9)]))
    for br in range(3):
        for bc in range(3):
            cells = [X[r][c]
                     for r in range(br * 3, br * 3 + 3)
                     for c in range(bc * 3, bc * 3 + 3)]
            s.add(Distinct(cells))
    return s, X


def count_solutions(grid: Grid, *, limit: int = 2) -> int:
    """Number of solutions consistent with the candidates, capped at `limit`."""
    if limit < 1:
        raise ValueError("limit must be >= 1")
    # a cell with no candidates has no completion
    if any(cell == 0 for row in grid for cell in row):
        return 0
    s, X = grid_solver(grid)
    found = 0
    while found < limit and s.check() == sat:
        found += 1
        _block_model_on_grid(s, X, s.model())
    return found
