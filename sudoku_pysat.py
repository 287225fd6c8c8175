# sudoku_pysat.py
# Count the completions of a candidate grid by encoding it to CNF and using PySAT.
# Requires: pip install python-sat

from typing import List
from pysat.card import CardEnc, EncType
from pysat.formula import CNF, IDPool
from pysat.solvers import Solver

from bitset import contains
from sudoku import Grid

# ----- Variable mapping: x_{r,c,d} -> 1..729
N_PRIMARY = 9 * 9 * 9

_ENC_MAP = {
    "pairwise": EncType.pairwise,     # O(n^2) binary AMO, no aux vars
    "seq": EncType.seqcounter,        # sequential/ladder AMO, linear size + aux vars
    "cardnet": EncType.cardnetwrk,    # cardinality/sorting networks, strong + aux vars
}


def vid(r: int, c: int, d: int) -> int:
    # r,c,d in 1..9
    return (r - 1) * 81 + (c - 1) * 9 + d


def _exactly_one(cnf: CNF, lits: List[int], enc: EncType, pool: IDPool) -> None:
    """ALO as one clause, AMO via the chosen encoding."""
    cnf.append(lits[:])
    if enc == EncType.pairwise:
        for i in range(len(lits)):
            for j in range(i + 1, len(lits)):
                cnf.append([-lits[i], -lits[j]])
    else:
        cnf.extend(CardEnc.atmost(lits=lits, bound=1, vpool=pool, encoding=enc).clauses)


def grid_cnf(grid: Grid, encoding: str = "pairwise") -> CNF:
    """Sudoku rules plus one negative unit per value a cell can no longer take."""
    enc = _ENC_MAP.get(encoding)
    if enc is None:
        raise ValueError(f"Unknown encoding {encoding!r}; expected one of {sorted(_ENC_MAP)}")
    cnf = CNF()
    # aux vars of non-pairwise encodings are numbered after x_{r,c,d}
    pool = IDPool(start_from=N_PRIMARY + 1)

    for r in range(1, 10):
        for c in range(1, 10):
            _exactly_one(cnf, [vid(r, c, d) for d in range(1, 10)], enc, pool)

    for r in range(1, 10):
        for d in range(1, 10):
            _exactly_one(cnf, [vid(r, c, d) for c in range(1, 10)], enc, pool)

    for c in range(1, 10):
        for d in range(1, 10):
            _exactly_one(cnf, [vid(r, c, d) for r in range(1, 10)], enc, pool)

    for br in range(3):
        for bc in range(3):
            rows = range(3 * br + 1, 3 * br + 4)
            cols = range(3 * bc + 1, 3 * bc + 4)
            for d in range(1, 10):
                _exactly_one(cnf, [vid(r, c, d) for r in rows for c in cols], enc, pool)

    for r in range(9):
        for c in range(9):
            for d in range(1, 10):
                if not contains(grid[r][c], d):
                    cnf.append([-vid(r + 1, c + 1, d)])
    return cnf


def count_solutions(
    grid: Grid,
    *,
    limit: int = 2,
    encoding: str = "pairwise",
    solver: str = "g3",
) -> int:
    """
    Number of full solutions consistent with every cell's candidates,
    capped at `limit` (limit=2 is enough to tell unique from ambiguous).
    """
    if limit < 1:
        raise ValueError("limit must be >= 1")
    cnf = grid_cnf(grid, encoding)
    found = 0
    with Solver(name=solver, bootstrap_with=cnf.clauses) as s:
        while found < limit and s.solve():
            found += 1
            model_pos = [l for l in s.get_model() if 0 < l <= N_PRIMARY]
            # block only the primary true literals
            s.add_clause([-l for l in model_pos])
    return found
