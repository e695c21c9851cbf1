from picross.engine import PuzzleEvent, new_puzzle, reduce
from picross.ui_adapters import make_board_props


def test_board_props_shape():
    session = new_puzzle([True, False, False, True], 2, 2, puzzle_id="tiny")
    props = make_board_props(session)

    assert props["schema_version"] == "picrossboardprops.v1"
    assert props["grid"]["width"] == 2
    cells = props["grid"]["cells"]
    assert [c["index"] for c in cells] == [0, 1, 2, 3]
    assert cells[3]["r"] == 1 and cells[3]["c"] == 1
    assert set(cells[0]["geometry"]) == {"cx", "cy", "w", "h"}

    assert [h["label"] for h in props["hints"]["rows"][0]] == ["1"]
    assert [h["value"] for h in props["hints"]["columns"][1]] == [1]
    assert props["status"] == {"solved": False, "last_action": "init", "puzzle_id": "tiny"}


def test_board_props_reflect_moves():
    session = new_puzzle([True, False, False, True], 2, 2)
    session = reduce(session, PuzzleEvent(type="CLICK_CELL", payload={"cell_index": 0, "action": "primary"}))
    session = reduce(session, PuzzleEvent(type="CLICK_CELL", payload={"cell_index": 1, "action": "secondary"}))
    session = reduce(session, PuzzleEvent(type="CLICK_CELL", payload={"cell_index": 3, "action": "primary"}))

    props = make_board_props(session)
    states = [c["state"] for c in props["grid"]["cells"]]
    assert states == ["filled", "blocked", "empty", "filled"]
    assert props["grid"]["cells"][1]["glyph"] == "✕"
    assert props["status"]["solved"] is True
