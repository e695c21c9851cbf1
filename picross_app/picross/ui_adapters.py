from __future__ import annotations

from typing import Any, Dict, List

from .engine import PuzzleSession, EMPTY, FILLED, BLOCKED
from .geometry import cell_of, hint_positions

TILE_GLYPHS = {
    EMPTY: "·",
    FILLED: "■",
    BLOCKED: "✕",
}


def hint_label(value: int) -> str:
    return str(value)


def make_board_props(session: PuzzleSession) -> Dict[str, Any]:
    tiles = session.tiles
    spec = tiles.spec
    hints = session.hints

    cells_payload: List[Dict[str, Any]] = []
    for i, state in enumerate(tiles.cells):
        r, c = cell_of(spec, i)
        cell: Dict[str, Any] = {
            "index": i,
            "r": r,
            "c": c,
            "state": state,
            "glyph": TILE_GLYPHS[state],
        }
        if session.layout:
            g = session.layout[i]
            cell["geometry"] = {"cx": g.cx, "cy": g.cy, "w": g.w, "h": g.h}
        cells_payload.append(cell)

    col_pos, row_pos = hint_positions(spec, hints.columns, hints.rows)

    return {
        "schema_version": "picrossboardprops.v1",
        "grid": {
            "width": spec.width,
            "height": spec.height,
            "cells": cells_payload,
        },
        "hints": {
            "columns": [
                [{"value": v, "label": hint_label(v), "pos": list(p)} for v, p in zip(hs, ps)]
                for hs, ps in zip(hints.columns, col_pos)
            ],
            "rows": [
                [{"value": v, "label": hint_label(v), "pos": list(p)} for v, p in zip(hs, ps)]
                for hs, ps in zip(hints.rows, row_pos)
            ],
        },
        "status": {
            "solved": session.solved,
            "last_action": tiles.last_action,
            "puzzle_id": session.puzzle_id,
        },
    }
