from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple, TYPE_CHECKING

from .geometry import GridSpec, column_indices, row_indices

if TYPE_CHECKING:
    from .engine import SolutionGrid

logger = logging.getLogger(__name__)

Hints = Tuple[int, ...]


@dataclass(frozen=True)
class HintSet:
    columns: Tuple[Hints, ...]     # one per column, scanned row 0 upward
    rows: Tuple[Hints, ...]        # one per row, scanned column 0 rightward


def line_hints(line: Iterable[bool]) -> Hints:
    """
    Run lengths of filled cells in scan order.

    A line without any filled cell still yields a single 0 so that every line
    shows at least one hint.
    """
    hints: List[int] = []
    chain = 0
    for filled in line:
        if filled:
            chain += 1
        elif chain:
            hints.append(chain)
            chain = 0
    if chain or not hints:
        hints.append(chain)
    return tuple(hints)


def compute_hints(solution: SolutionGrid) -> HintSet:
    grid = GridSpec(solution.width, solution.height)
    cells = solution.cells

    columns = []
    for c in range(grid.width):
        hints = line_hints(cells[i] for i in column_indices(grid, c))
        logger.debug("Hints for column %d: %s", c, list(hints))
        columns.append(hints)

    rows = []
    for r in range(grid.height):
        hints = line_hints(cells[i] for i in row_indices(grid, r))
        logger.debug("Hints for row %d: %s", r, list(hints))
        rows.append(hints)

    return HintSet(columns=tuple(columns), rows=tuple(rows))
