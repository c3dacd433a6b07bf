import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummy_solver.engine import solve
from rummy_solver.rules import MAX_TILES_ENV, Ruleset
from rummy_solver.state import (
    GameState,
    InvalidStateError,
    board_from_data,
    solutions_to_dict,
    tile_from_dict,
    tile_to_dict,
)
from rummy_solver.tiles import InvalidTileError, RegularTile, Suit, Wildcard


def reg(shape, number):
    return {"kind": "regular", "shape": shape, "number": number}


JOKER = {"kind": "joker", "shape": None, "number": None}


def test_tile_codec():
    assert tile_from_dict(reg("heart", 12)) == RegularTile(Suit.HEART, 12)
    assert tile_from_dict({"kind": "joker"}) == Wildcard()
    assert tile_to_dict(RegularTile(Suit.CLUB, 1)) == reg("club", 1)
    assert tile_to_dict(Wildcard()) == JOKER


@pytest.mark.parametrize(
    "data",
    [
        reg("star", 3),
        reg("spade", 14),
        reg("spade", 0),
        reg("spade", None),
        {"kind": "wild"},
        {"shape": "spade", "number": 3},
        ["spade", 3],
    ],
)
def test_malformed_tiles_rejected(data):
    with pytest.raises(InvalidTileError):
        tile_from_dict(data)


def test_game_state_from_dict():
    state = GameState.from_dict(
        {
            "board": [[reg("spade", 3), reg("spade", 4), reg("spade", 5)]],
            "hand": [reg("spade", 6), JOKER],
        }
    )
    assert len(state.board) == 1
    assert state.hand == (RegularTile(Suit.SPADE, 6), Wildcard())
    assert GameState.from_dict(state.to_dict()) == state


@pytest.mark.parametrize(
    "data",
    [
        {"board": []},
        {"hand": []},
        {"board": {}, "hand": []},
        {"board": [reg("spade", 3)], "hand": []},
        {"board": [], "hand": reg("spade", 3)},
        [],
    ],
)
def test_malformed_state_rejected(data):
    with pytest.raises(InvalidStateError):
        GameState.from_dict(data)


def test_board_from_data_keeps_duplicates():
    board = board_from_data([[reg("spade", 3), reg("spade", 3), reg("heart", 3)]])
    tiles = list(board.all_tiles())
    assert tiles[0] == tiles[1]
    assert tiles[0] is not tiles[1]


def test_solutions_payload():
    state = GameState.from_dict(
        {"board": [[reg("spade", 3), reg("spade", 4), reg("spade", 5)]], "hand": [reg("spade", 6)]}
    )
    payload = solutions_to_dict(solve(state.board, state.hand))
    assert payload["solutions"][0]["tiles"] == [reg("spade", 6)]
    assert payload["solutions"][0]["moves"] == 1
    assert len(payload["solutions"][0]["board"][0]) == 4


def test_ruleset_from_env(monkeypatch):
    monkeypatch.delenv(MAX_TILES_ENV, raising=False)
    assert Ruleset.from_env().max_tiles is None
    monkeypatch.setenv(MAX_TILES_ENV, "3")
    assert Ruleset.from_env().max_tiles == 3
    assert Ruleset.from_env({MAX_TILES_ENV: " 2 "}).max_tiles == 2
    with pytest.raises(ValueError):
        Ruleset.from_env({MAX_TILES_ENV: "many"})
    with pytest.raises(ValueError):
        Ruleset.from_env({MAX_TILES_ENV: "-1"})
