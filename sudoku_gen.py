# sudoku_gen.py
# Puzzle generator: start from a solved grid and keep clearing random clues
# while the grid is still solvable, until no clue can go.

import logging
import random
from typing import Callable, Dict, List, Optional

import sudoku_pysat
import sudoku_z3
from bitset import ALL_CANDIDATES, is_unique, single
from sudoku import Grid, Unsolvable, copy_grid, empty_grid, generic_solve, require_valid, solve

log = logging.getLogger(__name__)

SOLVERS: Dict[str, Callable[[Grid], bool]] = {
    "generic": generic_solve,      # elimination + backtracking
    "elimination": solve,          # elimination only; success implies a unique solution
}

BACKENDS = ("pysat", "z3")


def _rng(rng: Optional[random.Random], seed: Optional[int]) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(seed)


# --- uniqueness
def count_solutions(grid: Grid, *, limit: int = 2, backend: str = "pysat") -> int:
    if backend == "pysat":
        return sudoku_pysat.count_solutions(grid, limit=limit)
    if backend == "z3":
        return sudoku_z3.count_solutions(grid, limit=limit)
    raise ValueError(f"Unknown backend {backend!r}; expected one of {BACKENDS}")


def has_unique_solution(grid: Grid, *, backend: str = "pysat") -> bool:
    return count_solutions(grid, limit=2, backend=backend) == 1


# --- removal mask
def removable_cells(grid: Grid, *, solver: str = "generic") -> List[int]:
    """
    Row-major indices (0..80) of fixed cells that can be cleared while the
    grid stays solvable by `solver`. Works on scratch copies only.
    """
    try:
        solve_fn = SOLVERS[solver]
    except KeyError:
        raise ValueError(f"Unknown solver {solver!r}; expected one of {sorted(SOLVERS)}") from None
    eligible = []
    for index in range(81):
        r, c = divmod(index, 9)
        if not is_unique(grid[r][c]):
            continue
        scratch = copy_grid(grid)
        scratch[r][c] = ALL_CANDIDATES
        if solve_fn(scratch):
            eligible.append(index)
    return eligible


def _cleared(grid: Grid, index: int) -> Grid:
    r, c = divmod(index, 9)
    out = copy_grid(grid)
    out[r][c] = ALL_CANDIDATES
    return out


def _pick(
    grid: Grid,
    eligible: List[int],
    rng: random.Random,
    unique: bool,
    backend: str,
) -> Optional[int]:
    """Uniform choice among `eligible`; with `unique`, among those keeping one solution."""
    pool = list(eligible)
    while pool:
        index = pool.pop(rng.randrange(len(pool)))
        if not unique or has_unique_solution(_cleared(grid, index), backend=backend):
            return index
    return None


def generate(
    grid: Grid,
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    solver: str = "generic",
    unique: bool = False,
    backend: str = "pysat",
) -> int:
    """
    Turn a solved grid into a puzzle in place; returns the number of clues removed.

    - solver: "generic" (elimination + backtracking) or "elimination".
    - unique: also require exactly one solution after each removal, checked
      with the `backend` counter ("pysat" | "z3").

    The generic solver alone finds *a* solution whenever one exists, so
    without `unique` every clue ends up removable and the result is blank.
    """
    require_valid(grid)
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}; expected one of {BACKENDS}")
    rng = _rng(rng, seed)
    removed = 0
    while True:
        eligible = removable_cells(grid, solver=solver)
        index = _pick(grid, eligible, rng, unique, backend)
        if index is None:
            break
        r, c = divmod(index, 9)
        grid[r][c] = ALL_CANDIDATES
        removed += 1
        log.debug("Cleared r%dc%d (%d removable before)", r + 1, c + 1, len(eligible))
    log.debug("Generation finished after %d removal(s)", removed)
    return removed


def random_solution(*, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> Grid:
    """A full valid grid: shuffled first row, completed by backtracking."""
    rng = _rng(rng, seed)
    digits = list(range(1, 10))
    rng.shuffle(digits)
    grid = empty_grid()
    for c, v in enumerate(digits):
        grid[0][c] = single(v)
    if not generic_solve(grid):
        # any permutation of the first row can be completed
        raise Unsolvable("Backtracking failed on a one-row grid")
    return grid


if __name__ == "__main__":
    from sudoku_io import print_grid

    grid = random_solution(seed=7)
    print_grid(grid)
    n = generate(grid, seed=7, solver="elimination")
    print(f"Removed {n} clues:")
    print_grid(grid)
