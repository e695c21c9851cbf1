from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

SCHEMA_VERSION = "picrossfile.v1"

FILLED_CHARS = frozenset("#X1")
EMPTY_CHARS = frozenset(".-0 ")

# Row 0 is the bottom row of the board.
DEFAULT_ROWS: Tuple[str, ...] = (
    ".###.",
    "#####",
    "..#..",
    "..##.",
    "..#..",
)


class ConstructionError(ValueError):
    pass


@dataclass(frozen=True)
class Puzzle:
    width: int
    height: int
    solution: Tuple[bool, ...]
    meta: dict = field(default_factory=dict)
    filename: str = ""


def parse_rows(rows: Sequence[str]) -> Tuple[int, int, Tuple[bool, ...]]:
    """
    Turn text-art rows into ``(width, height, solution)``.

    Rows are listed row 0 first; ``#``, ``X`` and ``1`` mark filled cells,
    ``.``, ``-``, ``0`` and space mark empty ones.
    """
    if not rows:
        raise ConstructionError("Puzzle has no rows.")

    width = len(rows[0])
    if width == 0:
        raise ConstructionError("Puzzle rows must not be empty.")

    cells: List[bool] = []
    for r, row in enumerate(rows):
        if len(row) != width:
            raise ConstructionError(f"Row {r} has length {len(row)}, expected {width}.")
        for ch in row.upper():
            if ch in FILLED_CHARS:
                cells.append(True)
            elif ch in EMPTY_CHARS:
                cells.append(False)
            else:
                raise ConstructionError(f"Invalid character {ch!r} in row {r}: {row!r}.")
    return width, len(rows), tuple(cells)


def default_puzzle() -> Puzzle:
    width, height, solution = parse_rows(DEFAULT_ROWS)
    return Puzzle(width=width, height=height, solution=solution, meta={"id": "default", "title": "Picross"})


def load_puzzle(path: str) -> Puzzle:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConstructionError(f"Puzzle file {path!r} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ConstructionError(f"Puzzle file {path!r} is not valid UTF-8: {e}") from e

    if not isinstance(raw, dict):
        raise ConstructionError("Puzzle file must contain a JSON object.")

    schema_version = str(raw.get("schema_version", "")).strip()
    if schema_version != SCHEMA_VERSION:
        raise ConstructionError(
            f"Unsupported or missing schema_version: {schema_version!r}. Expected {SCHEMA_VERSION!r}."
        )

    rows = raw.get("rows", None)
    if not isinstance(rows, list) or not all(isinstance(r, str) for r in rows):
        raise ConstructionError("Puzzle 'rows' must be a list of strings.")

    width, height, solution = parse_rows(rows)
    meta = raw.get("meta", {}) or {}
    if not isinstance(meta, dict):
        raise ConstructionError("Puzzle 'meta' must be a JSON object.")
    return Puzzle(
        width=width,
        height=height,
        solution=solution,
        meta=meta,
        filename=os.path.basename(path),
    )
