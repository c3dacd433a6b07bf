from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .engine import Play
from .table import Board
from .tiles import InvalidTileError, RegularTile, Suit, Tile, Wildcard


class InvalidStateError(ValueError):
    """Raised when board or hand data does not have the expected shape."""


def tile_from_dict(data: Mapping[str, Any]) -> Tile:
    if not isinstance(data, Mapping):
        raise InvalidTileError(f"tile must be an object, got {data!r}")
    kind = data.get("kind")
    if kind == "joker":
        return Wildcard()
    if kind != "regular":
        raise InvalidTileError(f"unknown tile kind {kind!r}")
    try:
        suit = Suit(data.get("shape"))
    except ValueError:
        raise InvalidTileError(f"unknown suit {data.get('shape')!r}") from None
    return RegularTile(suit, data.get("number"))


def tile_to_dict(tile: Tile) -> Dict[str, Any]:
    if isinstance(tile, Wildcard):
        return {"kind": "joker", "shape": None, "number": None}
    if isinstance(tile, RegularTile):
        return {"kind": "regular", "shape": tile.suit.value, "number": tile.rank}
    raise InvalidTileError(f"not a tile: {tile!r}")


def tiles_from_data(data: Any, what: str = "tiles") -> List[Tile]:
    if not isinstance(data, list):
        raise InvalidStateError(f"{what} must be a list")
    return [tile_from_dict(item) for item in data]


def board_from_data(data: Any) -> Board:
    if not isinstance(data, list):
        raise InvalidStateError("board must be a list of melds")
    return Board.of(tiles_from_data(meld, "meld") for meld in data)


def board_to_data(board: Board) -> List[List[Dict[str, Any]]]:
    return [[tile_to_dict(tile) for tile in meld] for meld in board]


def play_to_dict(play: Play) -> Dict[str, Any]:
    return {
        "tiles": [tile_to_dict(tile) for tile in play.tiles],
        "moves": play.moves,
        "board": board_to_data(play.board),
    }


def solutions_to_dict(plays: Sequence[Play]) -> Dict[str, Any]:
    return {"solutions": [play_to_dict(play) for play in plays]}


@dataclass(frozen=True)
class GameState:
    board: Board = field(default_factory=Board)
    hand: Tuple[Tile, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "GameState":
        if not isinstance(data, Mapping):
            raise InvalidStateError("game state must be an object")
        if "board" not in data or "hand" not in data:
            raise InvalidStateError("board and hand are required")
        return cls(
            board=board_from_data(data["board"]),
            hand=tuple(tiles_from_data(data["hand"], "hand")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": board_to_data(self.board),
            "hand": [tile_to_dict(tile) for tile in self.hand],
        }
