from __future__ import annotations

import logging
import os, sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import streamlit as st

from picross.puzzle_io import ConstructionError, default_puzzle, load_puzzle
from picross.engine import PuzzleEvent, reduce, session_from_puzzle
from picross.geometry import GridSpec, cell_index
from picross.ui_adapters import make_board_props

logger = logging.getLogger("picross.app")

APP_TITLE = "Picross"

PUZZLE_PATH = os.environ.get(
    "PICROSS_PUZZLE",
    os.path.join(PROJECT_ROOT, "puzzles", "default.json"),
)

DEFAULT_INSTRUCTIONS = """**How to Play**

The numbers beside each row and above each column give the lengths of the
runs of filled squares in that line, in order.

- In **Fill** mode, click a square to fill it; click again to clear it.
- In **Block** mode, click a square to mark it as definitely empty; click again to unmark it.
- Blocked squares cannot be filled and filled squares cannot be blocked: clear them first.
"""

ACTION_LABELS = {
    "Fill": "primary",
    "Block": "secondary",
}


def _load():
    if os.path.isfile(PUZZLE_PATH):
        return load_puzzle(PUZZLE_PATH)
    logger.info("No puzzle file at %s, using built-in puzzle", PUZZLE_PATH)
    return default_puzzle()


def _ensure_state():
    if "puzzle" not in st.session_state:
        st.session_state.puzzle = None
    if "session" not in st.session_state:
        st.session_state.session = None
    if "announced" not in st.session_state:
        st.session_state.announced = False
    if "show_instructions" not in st.session_state:
        st.session_state.show_instructions = False


def _start(puzzle):
    st.session_state.puzzle = puzzle
    st.session_state.session = session_from_puzzle(puzzle)
    st.session_state.announced = False


def _dispatch(event: PuzzleEvent):
    st.session_state.session = reduce(st.session_state.session, event)


def _render_board(props: dict, action: str):
    grid = props["grid"]
    width, height = grid["width"], grid["height"]
    spec = GridSpec(width, height)
    hints = props["hints"]
    max_col_hints = max(len(h) for h in hints["columns"])
    cells = grid["cells"]

    weights = [2] + [1] * width

    # Column hints: the first run sits nearest the board.
    for level in reversed(range(max_col_hints)):
        cols = st.columns(weights)
        for c in range(width):
            col_hints = hints["columns"][c]
            if level < len(col_hints):
                cols[c + 1].markdown(f"**{col_hints[level]['label']}**")

    # Row 0 is the bottom row.
    for r in reversed(range(height)):
        cols = st.columns(weights)
        row_labels = " ".join(h["label"] for h in hints["rows"][r])
        cols[0].markdown(f"**{row_labels}**")
        for c in range(width):
            cell = cells[cell_index(spec, (r, c))]
            if cols[c + 1].button(cell["glyph"], key=f"tile_{cell['index']}", use_container_width=True):
                _dispatch(PuzzleEvent(type="CLICK_CELL", payload={"cell_index": cell["index"], "action": action}))
                st.rerun()


def main():
    logging.basicConfig(level=logging.INFO)
    st.set_page_config(page_title=APP_TITLE, page_icon="🧩", layout="centered")
    _ensure_state()

    if st.session_state.session is None:
        try:
            _start(_load())
        except ConstructionError as e:
            st.error(f"Puzzle invalid: {e}")
            st.stop()

    puzzle = st.session_state.puzzle

    with st.sidebar:
        st.header("Puzzle")
        mode = st.radio("Click mode", list(ACTION_LABELS.keys()), horizontal=True)
        reset_clicked = st.button("Reset grid", use_container_width=True)
        if st.button("Instructions", use_container_width=True):
            st.session_state.show_instructions = not st.session_state.show_instructions

    if reset_clicked:
        _dispatch(PuzzleEvent(type="RESET", payload={}))
        st.session_state.announced = False

    title = str((puzzle.meta or {}).get("title", APP_TITLE)).strip() or APP_TITLE
    st.title(title)
    subtitle = str((puzzle.meta or {}).get("subtitle", "")).strip()
    if subtitle:
        st.caption(subtitle)

    if st.session_state.show_instructions:
        with st.expander("Instructions", expanded=True):
            st.markdown((puzzle.meta or {}).get("instructions", DEFAULT_INSTRUCTIONS))

    props = make_board_props(st.session_state.session)
    _render_board(props, ACTION_LABELS[mode])

    if props["status"]["solved"]:
        st.success("Solution found!")
        if not st.session_state.announced:
            logger.info("Puzzle %s solved", props["status"]["puzzle_id"])
            st.balloons()
            st.session_state.announced = True

    st.caption(f"Last: {props['status']['last_action']}")


if __name__ == "__main__":
    main()
