# tests/test_gen.py
import random

import pytest

from bitset import ALL_CANDIDATES, is_unique, single
from sudoku import InvalidGrid, Unsolvable, copy_grid, empty_grid, generic_solve, is_valid, needs_solving, solve
import sudoku_gen
from sudoku_gen import generate, has_unique_solution, random_solution, removable_cells


def _clues(grid):
    return [r * 9 + c for r in range(9) for c in range(9) if is_unique(grid[r][c])]


def test_random_solution_is_full_and_valid():
    grid = random_solution(seed=3)
    assert not needs_solving(grid)
    assert is_valid(grid)
    assert random_solution(seed=3) == grid


def test_removable_cells_on_solved_grid(solution):
    assert removable_cells(solution, solver="elimination") == list(range(81))
    assert removable_cells(solution, solver="generic") == list(range(81))


def test_removable_cells_skips_open_cells_and_uses_scratch(solution):
    grid = copy_grid(solution)
    grid[0][0] = ALL_CANDIDATES
    before = copy_grid(grid)
    eligible = removable_cells(grid, solver="elimination")
    assert 0 not in eligible
    assert grid == before


def test_removable_cells_unknown_solver(solution):
    with pytest.raises(ValueError):
        removable_cells(solution, solver="magic")


def test_generate_leaves_solvable_minimal_puzzle(solution):
    grid = copy_grid(solution)
    removed = generate(grid, seed=11, solver="elimination")
    assert removed > 0
    assert needs_solving(grid)
    assert len(_clues(grid)) == 81 - removed
    # clues are a subset of the solution
    for i in _clues(grid):
        r, c = divmod(i, 9)
        assert grid[r][c] == solution[r][c]
    # still solvable, and nothing else can go
    scratch = copy_grid(grid)
    assert solve(scratch)
    assert scratch == solution
    assert generic_solve(copy_grid(grid))
    assert removable_cells(grid, solver="elimination") == []


def test_generate_is_reproducible_with_seed(solution):
    a, b = copy_grid(solution), copy_grid(solution)
    generate(a, seed=5, solver="elimination")
    generate(b, rng=random.Random(5), solver="elimination")
    assert a == b


def test_generic_solver_without_uniqueness_clears_everything():
    grid = empty_grid()
    grid[0][0] = single(1)
    grid[4][4] = single(2)
    grid[8][8] = single(3)
    assert generate(grid, seed=0) == 3
    assert grid == empty_grid()


def test_generate_with_uniqueness_keeps_one_solution(puzzle, solution):
    grid = copy_grid(puzzle)
    generate(grid, seed=2, unique=True)
    assert has_unique_solution(grid, backend="pysat")
    assert has_unique_solution(grid, backend="z3")
    solved = copy_grid(grid)
    assert generic_solve(solved)
    assert solved == solution
    # no single clue can be dropped without losing uniqueness
    for i in _clues(grid):
        r, c = divmod(i, 9)
        trial = copy_grid(grid)
        trial[r][c] = ALL_CANDIDATES
        assert not has_unique_solution(trial)


def test_generate_rejects_invalid_grid():
    grid = empty_grid()
    grid[0][0] = grid[0][1] = single(4)
    with pytest.raises(InvalidGrid):
        generate(grid, seed=0)


def test_generate_rejects_unknown_backend(solution):
    with pytest.raises(ValueError):
        generate(copy_grid(solution), seed=0, unique=True, backend="nope")


def test_generate_default_pipeline_on_full_grid(solution):
    grid = copy_grid(solution)
    removed = generate(grid, seed=0)
    assert removed == 81
    assert needs_solving(grid)
    assert generic_solve(copy_grid(grid))


def test_random_solution_reports_backtracking_failure(monkeypatch):
    monkeypatch.setattr(sudoku_gen, "generic_solve", lambda grid: False)
    with pytest.raises(Unsolvable):
        random_solution(seed=1)
