import random

import pytest

from picross.engine import make_solution
from picross.geometry import column_indices, row_indices
from picross.hints import compute_hints, line_hints

EXAMPLE_TRUE = {1, 2, 3, 5, 6, 7, 8, 9, 12, 17, 18, 22}


@pytest.fixture
def example():
    return make_solution([i in EXAMPLE_TRUE for i in range(25)], 5, 5)


def test_example_columns(example):
    hints = compute_hints(example)
    assert hints.columns == ((1,), (2,), (5,), (2, 1), (1,))


def test_example_rows(example):
    hints = compute_hints(example)
    assert hints.rows == ((3,), (5,), (1,), (2,), (1,))


@pytest.mark.parametrize(
    "line, expected",
    [
        ([False, False, False], (0,)),
        ([True, True, True], (3,)),
        ([True, False, True], (1, 1)),
        ([False, True, True], (2,)),
        ([True, False, False], (1,)),
        ([True, True, False, True, False, False, True, True, True], (2, 1, 3)),
        ([], (0,)),
    ],
)
def test_line_hints(line, expected):
    assert line_hints(line) == expected


def test_empty_grid_gets_single_zero_per_line():
    hints = compute_hints(make_solution([False] * 12, 4, 3))
    assert hints.columns == ((0,),) * 4
    assert hints.rows == ((0,),) * 3


def test_non_square_grid_shapes():
    # 3 wide, 2 high; row 0 = "#.#", row 1 = "###"
    grid = make_solution([True, False, True, True, True, True], 3, 2)
    hints = compute_hints(grid)
    assert len(hints.columns) == 3
    assert len(hints.rows) == 2
    assert hints.rows == ((1, 1), (3,))
    assert hints.columns == ((2,), (1,), (2,))


def test_run_sums_match_filled_counts():
    rng = random.Random(1234)
    for _ in range(50):
        w, h = rng.randint(1, 8), rng.randint(1, 8)
        grid = make_solution([rng.random() < 0.5 for _ in range(w * h)], w, h)
        hints = compute_hints(grid)
        spec = grid.spec
        lines = [(hints.columns[c], column_indices(spec, c)) for c in range(w)]
        lines += [(hints.rows[r], row_indices(spec, r)) for r in range(h)]
        for line_hint, idx in lines:
            assert line_hint
            filled = sum(grid.cells[i] for i in idx)
            assert sum(line_hint) == filled
            assert sum(line_hint) <= len(idx)


def test_compute_hints_is_idempotent(example):
    assert compute_hints(example) == compute_hints(example)
