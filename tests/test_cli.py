import json
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_solver import cli
from rummy_solver.rules import MAX_TILES_ENV


def reg(shape, number):
    return {"kind": "regular", "shape": shape, "number": number}


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


STATE = {
    "board": [[reg("spade", 3), reg("spade", 4), reg("spade", 5)]],
    "hand": [reg("spade", 6), reg("spade", 7), reg("heart", 10)],
}


def test_solve_prints_ranked_plays(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv(MAX_TILES_ENV, raising=False)
    path = _write(tmp_path, "state.json", STATE)
    assert cli.main(["solve", path]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["6♠ 7♠: 1 move", "6♠: 1 move"]


def test_solve_json_output(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv(MAX_TILES_ENV, raising=False)
    path = _write(tmp_path, "state.json", STATE)
    assert cli.main(["solve", path, "--json", "--max-tiles", "1"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [s["tiles"] for s in payload["solutions"]] == [[reg("spade", 6)]]
    assert payload["solutions"][0]["moves"] == 1


def test_solve_reads_cap_from_env(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv(MAX_TILES_ENV, "1")
    path = _write(tmp_path, "state.json", STATE)
    assert cli.main(["solve", path]) == 0
    assert capsys.readouterr().out.splitlines() == ["6♠: 1 move"]


def test_solve_without_plays(tmp_path, capsys):
    path = _write(tmp_path, "state.json", {"board": [], "hand": [reg("heart", 10)]})
    assert cli.main(["solve", path]) == 0
    assert "No playable tiles." in capsys.readouterr().out


def test_invalid_input_exits_with_error(tmp_path, capsys):
    path = _write(tmp_path, "state.json", {"board": [], "hand": [reg("heart", 14)]})
    assert cli.main(["solve", path]) == 2
    assert "error:" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert cli.main(["solve", str(tmp_path / "missing.json")]) == 2
    assert "error:" in capsys.readouterr().err


def test_partition_command(tmp_path, capsys):
    tiles = [reg("heart", 7), reg("spade", 3), reg("diamond", 7), reg("spade", 4), reg("club", 7), reg("spade", 5)]
    path = _write(tmp_path, "tiles.json", tiles)
    assert cli.main(["partition", path, "--json"]) == 0
    board = json.loads(capsys.readouterr().out)["board"]
    assert sorted(len(meld) for meld in board) == [3, 3]


def test_check_command(tmp_path, capsys):
    good = _write(tmp_path, "good.json", STATE["board"])
    assert cli.main(["check", good]) == 0
    assert "Board is valid." in capsys.readouterr().out

    bad = _write(tmp_path, "bad.json", [[reg("heart", 7), reg("heart", 8)]])
    assert cli.main(["check", bad]) == 1
    out = capsys.readouterr().out
    assert "invalid" in out
    assert "Board is invalid." in out
