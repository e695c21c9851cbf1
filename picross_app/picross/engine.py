from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Literal, Optional, Sequence, Tuple

from .geometry import GridSpec, CellGeometry, Point, build_layout, check_index, hit_test
from .hints import HintSet, compute_hints
from .puzzle_io import ConstructionError, Puzzle

logger = logging.getLogger(__name__)

TileState = Literal["empty", "filled", "blocked"]
ActionKind = Literal["primary", "secondary"]

EMPTY: TileState = "empty"
FILLED: TileState = "filled"
BLOCKED: TileState = "blocked"

ACTIONS: Tuple[ActionKind, ...] = ("primary", "secondary")

# (state, action) -> next state. Missing pairs are rejected as no-ops:
# blocked tiles ignore primary, filled tiles ignore secondary.
TRANSITIONS: Dict[Tuple[TileState, ActionKind], TileState] = {
    (EMPTY, "primary"): FILLED,
    (FILLED, "primary"): EMPTY,
    (EMPTY, "secondary"): BLOCKED,
    (BLOCKED, "secondary"): EMPTY,
}

_ACTION_TAGS: Dict[Tuple[TileState, TileState], str] = {
    (EMPTY, FILLED): "fill",
    (FILLED, EMPTY): "clear",
    (EMPTY, BLOCKED): "block",
    (BLOCKED, EMPTY): "unblock",
}


# --- grids ---

def _check_shape(width: int, height: int, cells: Sequence) -> None:
    if width <= 0 or height <= 0:
        raise ConstructionError(f"Grid dimensions must be positive, got {width}x{height}.")
    if len(cells) != width * height:
        raise ConstructionError(
            f"Grid has {len(cells)} cells, expected {width * height} for a {width}x{height} grid."
        )


@dataclass(frozen=True)
class SolutionGrid:
    width: int
    height: int
    cells: Tuple[bool, ...]

    def __post_init__(self) -> None:
        _check_shape(self.width, self.height, self.cells)

    @property
    def spec(self) -> GridSpec:
        return GridSpec(self.width, self.height)

    def __getitem__(self, index: int) -> bool:
        return self.cells[check_index(self.spec, index)]


@dataclass(frozen=True)
class TileGrid:
    width: int
    height: int
    cells: Tuple[TileState, ...]
    last_action: str = ""

    def __post_init__(self) -> None:
        _check_shape(self.width, self.height, self.cells)
        bad = set(self.cells) - {EMPTY, FILLED, BLOCKED}
        if bad:
            raise ConstructionError(f"Invalid tile states: {sorted(map(repr, bad))}")

    @property
    def spec(self) -> GridSpec:
        return GridSpec(self.width, self.height)

    def __getitem__(self, index: int) -> TileState:
        return self.cells[check_index(self.spec, index)]


def make_solution(solution: Sequence[bool], width: int, height: int) -> SolutionGrid:
    return SolutionGrid(width=width, height=height, cells=tuple(bool(v) for v in solution))


def empty_tiles(width: int, height: int) -> TileGrid:
    return TileGrid(width=width, height=height, cells=(EMPTY,) * (width * height), last_action="init")


# --- state machine / input ---

def transition(state: TileState, action: ActionKind) -> TileState:
    if action not in ACTIONS:
        raise ValueError(f"Unknown action kind: {action!r}")
    return TRANSITIONS.get((state, action), state)


def apply_input(tiles: TileGrid, cell_index: int, action: ActionKind) -> TileGrid:
    check_index(tiles.spec, cell_index)
    current = tiles.cells[cell_index]
    nxt = transition(current, action)
    if nxt == current:
        return replace(tiles, last_action=f"{action}:{current}_ignored")

    cells = list(tiles.cells)
    cells[cell_index] = nxt
    logger.debug("Tile %d: %s -> %s (%s)", cell_index, current, nxt, action)
    return replace(tiles, cells=tuple(cells), last_action=_ACTION_TAGS[(current, nxt)])


def pick_action(primary_pressed: bool, secondary_pressed: bool) -> Optional[ActionKind]:
    """One action per input tick; primary wins when both are pressed."""
    if primary_pressed:
        return "primary"
    if secondary_pressed:
        return "secondary"
    return None


def resolve(point: Point, action: ActionKind, cells: Sequence[CellGeometry]) -> Optional[int]:
    if action not in ACTIONS:
        raise ValueError(f"Unknown action kind: {action!r}")
    return hit_test(point, cells)


# --- win check ---

def is_solved(tiles: TileGrid, solution: SolutionGrid) -> bool:
    if (tiles.width, tiles.height) != (solution.width, solution.height):
        raise ConstructionError(
            f"Tile grid {tiles.width}x{tiles.height} does not match solution "
            f"{solution.width}x{solution.height}."
        )
    for i, state in enumerate(tiles.cells):
        if solution[i] != (state == FILLED):
            return False
    return True


# --- session ---

@dataclass(frozen=True)
class PuzzleSession:
    solution: SolutionGrid
    tiles: TileGrid
    hints: HintSet
    layout: Tuple[CellGeometry, ...] = ()
    puzzle_id: str = ""

    def __iter__(self) -> Iterator:
        return iter((self.solution, self.tiles, self.hints))

    @property
    def solved(self) -> bool:
        return is_solved(self.tiles, self.solution)


def new_puzzle(solution: Sequence[bool], width: int, height: int, puzzle_id: str = "") -> PuzzleSession:
    grid = make_solution(solution, width, height)
    session = PuzzleSession(
        solution=grid,
        tiles=empty_tiles(width, height),
        hints=compute_hints(grid),
        layout=build_layout(grid.spec),
        puzzle_id=puzzle_id,
    )
    logger.info("New %dx%d puzzle %r", width, height, puzzle_id)
    return session


def session_from_puzzle(puzzle: Puzzle) -> PuzzleSession:
    puzzle_id = str(puzzle.meta.get("id", puzzle.filename))
    return new_puzzle(puzzle.solution, puzzle.width, puzzle.height, puzzle_id=puzzle_id)


# --- event contracts ---

EventType = Literal["CLICK_CELL", "CLICK_POINT", "POINTER", "RESET"]


@dataclass(frozen=True)
class PuzzleEvent:
    type: EventType
    payload: dict


def reduce(session: PuzzleSession, event: PuzzleEvent) -> PuzzleSession:
    """
    Apply one host event and return the new session.

    Malformed payloads and unknown event types are ignored and tagged in
    ``tiles.last_action``. Cell indices outside the grid are host bugs and
    raise CellIndexError.
    """
    payload = event.payload or {}
    t = event.type
    if t == "CLICK_CELL":
        return _on_click_cell(session, payload)
    if t == "CLICK_POINT":
        return _on_click_point(session, payload)
    if t == "POINTER":
        return _on_pointer(session, payload)
    if t == "RESET":
        tiles = replace(empty_tiles(session.tiles.width, session.tiles.height), last_action="reset")
        return replace(session, tiles=tiles)
    return _ignored(session, t)


def _ignored(session: PuzzleSession, tag: str) -> PuzzleSession:
    return replace(session, tiles=replace(session.tiles, last_action=f"ignored:{tag}"))


def _point_from(payload: dict) -> Optional[Point]:
    try:
        return float(payload["x"]), float(payload["y"])
    except (KeyError, TypeError, ValueError):
        return None


def _on_click_cell(session: PuzzleSession, payload: dict) -> PuzzleSession:
    action = payload.get("action", "")
    if action not in ACTIONS:
        return _ignored(session, "bad_action")
    try:
        index = int(payload["cell_index"])
    except (KeyError, TypeError, ValueError):
        return _ignored(session, "bad_cell_index")
    return replace(session, tiles=apply_input(session.tiles, index, action))


def _click_at(session: PuzzleSession, point: Point, action: ActionKind) -> PuzzleSession:
    index = resolve(point, action, session.layout)
    if index is None:
        return replace(session, tiles=replace(session.tiles, last_action="click:miss"))
    return replace(session, tiles=apply_input(session.tiles, index, action))


def _on_click_point(session: PuzzleSession, payload: dict) -> PuzzleSession:
    action = payload.get("action", "")
    if action not in ACTIONS:
        return _ignored(session, "bad_action")
    point = _point_from(payload)
    if point is None:
        return _ignored(session, "bad_point")
    return _click_at(session, point, action)


def _on_pointer(session: PuzzleSession, payload: dict) -> PuzzleSession:
    action = pick_action(payload.get("primary") is True, payload.get("secondary") is True)
    if action is None:
        return _ignored(session, "no_button")
    point = _point_from(payload)
    if point is None:
        return _ignored(session, "bad_point")
    return _click_at(session, point, action)
