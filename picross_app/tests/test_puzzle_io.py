import json
from pathlib import Path

import pytest

from picross.engine import session_from_puzzle
from picross.puzzle_io import ConstructionError, default_puzzle, load_puzzle, parse_rows

PUZZLES_DIR = Path(__file__).resolve().parents[1] / "puzzles"


def _write(tmp_path, data) -> str:
    path = tmp_path / "puzzle.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_parse_rows():
    width, height, solution = parse_rows(["#.", "X-", "1 "])
    assert (width, height) == (2, 3)
    assert solution == (True, False, True, False, True, False)


@pytest.mark.parametrize("rows", [[], [""], ["##", "#"], ["#?"]])
def test_parse_rows_rejects_malformed(rows):
    with pytest.raises(ConstructionError):
        parse_rows(rows)


def test_default_puzzle_layout():
    puzzle = default_puzzle()
    true_indices = {i for i, v in enumerate(puzzle.solution) if v}
    assert true_indices == {1, 2, 3, 5, 6, 7, 8, 9, 12, 17, 18, 22}


def test_shipped_puzzle_matches_default():
    puzzle = load_puzzle(str(PUZZLES_DIR / "default.json"))
    assert puzzle.solution == default_puzzle().solution
    assert puzzle.filename == "default.json"
    assert session_from_puzzle(puzzle).puzzle_id == "tree-001"


def test_load_puzzle_requires_schema(tmp_path):
    path = _write(tmp_path, {"rows": ["#"]})
    with pytest.raises(ConstructionError, match="schema_version"):
        load_puzzle(path)


def test_load_puzzle_requires_rows(tmp_path):
    path = _write(tmp_path, {"schema_version": "picrossfile.v1", "rows": "###"})
    with pytest.raises(ConstructionError):
        load_puzzle(path)


def test_load_puzzle_rejects_bad_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConstructionError):
        load_puzzle(str(path))


def test_load_puzzle_rejects_non_utf8(tmp_path):
    path = tmp_path / "latin.json"
    path.write_bytes(b"\xff\xfe{")
    with pytest.raises(ConstructionError, match="UTF-8"):
        load_puzzle(str(path))


def test_load_puzzle_rejects_non_object_meta(tmp_path):
    path = _write(tmp_path, {"schema_version": "picrossfile.v1", "meta": ["x"], "rows": ["#."]})
    with pytest.raises(ConstructionError, match="meta"):
        load_puzzle(path)
