# tests/test_generic_solve.py
from bitset import is_unique, single
from sudoku import _fewest_candidates, copy_grid, empty_grid, from_values, generic_solve, is_valid, needs_solving, solve

# Needs guessing: elimination alone gets stuck on it
HARD = "800000000003600000070090200050007000000045700000100030001000068008500010090000400"
HARD_SOLUTION = [
    "812753649",
    "943682175",
    "675491283",
    "154237896",
    "369845721",
    "287169534",
    "521974368",
    "438526917",
    "796318452",
]


def _grid(text):
    return from_values([[int(ch) for ch in text[9 * r:9 * r + 9]] for r in range(9)])


def _hard_grid():
    return _grid(HARD)


def test_solves_easy_puzzle(puzzle, solution):
    assert generic_solve(puzzle)
    assert puzzle == solution


def test_elimination_alone_is_not_enough_for_hard_puzzle():
    grid = _hard_grid()
    assert not solve(grid)
    assert is_valid(grid)


def test_solves_hard_puzzle_to_its_unique_solution():
    grid = _hard_grid()
    clues = copy_grid(grid)
    assert generic_solve(grid)
    assert not needs_solving(grid)
    assert is_valid(grid)
    assert grid == _grid("".join(HARD_SOLUTION))
    for r in range(9):
        for c in range(9):
            if is_unique(clues[r][c]):
                assert grid[r][c] == clues[r][c]


def test_already_solved_grid_is_identity(solution):
    grid = copy_grid(solution)
    assert generic_solve(grid)
    assert grid == solution


def test_empty_grid_gets_some_valid_solution():
    grid = empty_grid()
    assert generic_solve(grid)
    assert not needs_solving(grid)
    assert is_valid(grid)


def test_failed_search_leaves_grid_untouched(dead_end_grid):
    grid = copy_grid(dead_end_grid)
    rows = list(grid)
    assert not generic_solve(grid)
    assert grid == dead_end_grid
    assert all(a is b for a, b in zip(grid, rows))


def test_invalid_grid_is_rejected_untouched():
    grid = empty_grid()
    grid[4][0] = single(7)
    grid[4][8] = single(7)
    before = copy_grid(grid)
    assert not generic_solve(grid)
    assert grid == before



def test_guess_cell_has_fewest_candidates():
    grid = empty_grid()
    assert _fewest_candidates(grid) == (0, 0)
    grid[5][2] = single(1) | single(2) | single(3)
    grid[7][7] = single(4) | single(6)
    grid[8][0] = single(5) | single(9)
    assert _fewest_candidates(grid) == (7, 7)
    assert _fewest_candidates(from_values([[int(ch) for ch in row] for row in HARD_SOLUTION])) is None
