# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so the flat modules import without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku import from_values  # noqa: E402

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

SOLUTION = [
    "534678912",
    "672195348",
    "198342567",
    "859761423",
    "426853791",
    "713924856",
    "961537284",
    "287419635",
    "345286179",
]


def rows_to_grid(rows):
    return from_values([[int(ch) for ch in row] for row in rows])


@pytest.fixture
def puzzle():
    return rows_to_grid(PUZZLE)


@pytest.fixture
def solution():
    return rows_to_grid(SOLUTION)


@pytest.fixture
def puzzle_text():
    return "".join(PUZZLE) + "\n"


@pytest.fixture
def shifted_grid():
    # 123456789 shifted by 0,3,6,1,4,7,2,5,8 - a valid full Sudoku
    base = "123456789"
    rows = []
    for r in range(9):
        k = (r % 3) * 3 + r // 3
        rows.append(base[k:] + base[:k])
    return rows_to_grid(rows)


@pytest.fixture
def dead_end_grid():
    """Valid, stuck under elimination, and without any solution:
    r1c1..r1c3 can only hold {1, 2}."""
    values = [[0] * 9 for _ in range(9)]
    values[0][3:9] = [3, 4, 5, 6, 7, 8]
    values[1][0] = 9
    return from_values(values)
