from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

Cell = Tuple[int, int]          # (row, column)
Point = Tuple[float, float]     # world coordinates, y grows upward

# World units; with a default 2D camera these map 1:1 onto screen pixels.
TILE_SIZE: Tuple[float, float] = (50.0, 50.0)
TILE_GAP = 5.0
BOTTOM_OFFSET = -200.0
BOARD_CENTER_X = 0.0


class CellIndexError(IndexError):
    pass


@dataclass(frozen=True)
class GridSpec:
    width: int
    height: int

    @property
    def cell_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class CellGeometry:
    cx: float
    cy: float
    w: float
    h: float


def check_index(grid: GridSpec, index: int) -> int:
    if index < 0 or index >= grid.cell_count:
        raise CellIndexError(
            f"Cell index {index} out of range for {grid.width}x{grid.height} grid."
        )
    return index


def cell_index(grid: GridSpec, cell: Cell) -> int:
    r, c = cell
    if r < 0 or c < 0 or r >= grid.height or c >= grid.width:
        raise CellIndexError(f"Cell {cell} outside {grid.width}x{grid.height} grid.")
    return r * grid.width + c


def cell_of(grid: GridSpec, index: int) -> Cell:
    check_index(grid, index)
    return divmod(index, grid.width)


def column_indices(grid: GridSpec, column: int) -> List[int]:
    return [r * grid.width + column for r in range(grid.height)]


def row_indices(grid: GridSpec, row: int) -> List[int]:
    return [row * grid.width + c for c in range(grid.width)]


def _origin(
    grid: GridSpec,
    tile_size: Tuple[float, float],
    gap: float,
    bottom: float,
    center_x: float,
) -> Tuple[float, float]:
    tw, th = tile_size
    left = center_x - grid.width / 2.0 * tw - (grid.width - 1) / 2.0 * gap
    # positions describe the tile center, not its bottom-left corner
    return left + tw / 2.0, bottom + th / 2.0


def _place(origin: Point, tile_size: Tuple[float, float], gap: float, row: int, column: int) -> Point:
    ox, oy = origin
    tw, th = tile_size
    return ox + column * (tw + gap), oy + row * (th + gap)


def build_layout(
    grid: GridSpec,
    tile_size: Tuple[float, float] = TILE_SIZE,
    gap: float = TILE_GAP,
    bottom: float = BOTTOM_OFFSET,
    center_x: float = BOARD_CENTER_X,
) -> Tuple[CellGeometry, ...]:
    """
    Board geometry in storage order (row-major, row 0 at the bottom).

    The board is centered horizontally on ``center_x``; its bottom edge sits
    at ``bottom``. Adjacent tiles are separated by ``gap``.
    """
    origin = _origin(grid, tile_size, gap, bottom, center_x)
    out: List[CellGeometry] = []
    for r in range(grid.height):
        for c in range(grid.width):
            x, y = _place(origin, tile_size, gap, r, c)
            out.append(CellGeometry(cx=x, cy=y, w=tile_size[0], h=tile_size[1]))
    return tuple(out)


def hint_positions(
    grid: GridSpec,
    column_hints: Sequence[Sequence[int]],
    row_hints: Sequence[Sequence[int]],
    tile_size: Tuple[float, float] = TILE_SIZE,
    gap: float = TILE_GAP,
    bottom: float = BOTTOM_OFFSET,
    center_x: float = BOARD_CENTER_X,
) -> Tuple[List[List[Point]], List[List[Point]]]:
    """
    Centers for hint glyphs: column hints stack upward from the row above the
    board, row hints stack leftward from the column left of the board.
    """
    origin = _origin(grid, tile_size, gap, bottom, center_x)
    col_pos = [
        [_place(origin, tile_size, gap, grid.height + i, c) for i in range(len(hints))]
        for c, hints in enumerate(column_hints)
    ]
    row_pos = [
        [_place(origin, tile_size, gap, r, -1 - i) for i in range(len(hints))]
        for r, hints in enumerate(row_hints)
    ]
    return col_pos, row_pos


def contains_point(cell: CellGeometry, point: Point) -> bool:
    # Strict on both axes: a point on a shared edge belongs to neither tile.
    px, py = point
    half_w = cell.w / 2.0
    half_h = cell.h / 2.0
    return (cell.cx - half_w < px < cell.cx + half_w) and (cell.cy - half_h < py < cell.cy + half_h)


def hit_test(point: Point, cells: Sequence[CellGeometry]) -> Optional[int]:
    for i, cell in enumerate(cells):
        if contains_point(cell, point):
            return i
    return None
