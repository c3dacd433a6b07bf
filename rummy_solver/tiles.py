from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple, Union

JOKER_ID = 52
MULTISET_SIZE = 53
MIN_RANK = 1
MAX_RANK = 13


class InvalidTileError(ValueError):
    """Raised when a value is not a well-formed tile."""


class Suit(str, Enum):
    SPADE = "spade"
    HEART = "heart"
    DIAMOND = "diamond"
    CLUB = "club"

    @property
    def order(self) -> int:
        return _SUIT_ORDER.index(self)

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


_SUIT_ORDER: Tuple[Suit, ...] = tuple(Suit)
_SUIT_SYMBOLS = {Suit.SPADE: "♠", Suit.HEART: "♥", Suit.DIAMOND: "♦", Suit.CLUB: "♣"}
_FACE_LABELS = {1: "A", 11: "J", 12: "Q", 13: "K"}


def tile_id_of(suit: Suit, rank: int) -> int:
    return suit.order * 13 + (rank - 1)


def suit_of(tile_id: int) -> Suit:
    if tile_id == JOKER_ID:
        raise ValueError("Wildcard has no inherent suit")
    return _SUIT_ORDER[tile_id // 13]


def rank_of(tile_id: int) -> int:
    if tile_id == JOKER_ID:
        raise ValueError("Wildcard has no inherent rank")
    return (tile_id % 13) + 1


@dataclass(frozen=True)
class RegularTile:
    suit: Suit
    rank: int

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise InvalidTileError(f"unknown suit {self.suit!r}")
        if isinstance(self.rank, bool) or not isinstance(self.rank, int):
            raise InvalidTileError(f"rank must be an integer, got {self.rank!r}")
        if not MIN_RANK <= self.rank <= MAX_RANK:
            raise InvalidTileError(f"rank {self.rank} outside {MIN_RANK}..{MAX_RANK}")

    @property
    def tile_id(self) -> int:
        return tile_id_of(self.suit, self.rank)

    def label(self) -> str:
        return f"{_FACE_LABELS.get(self.rank, str(self.rank))}{self.suit.symbol}"


@dataclass(frozen=True)
class Wildcard:
    @property
    def tile_id(self) -> int:
        return JOKER_ID

    def label(self) -> str:
        return "🃏"


Tile = Union[RegularTile, Wildcard]


def ensure_tile(tile: object) -> Tile:
    if isinstance(tile, (RegularTile, Wildcard)):
        return tile
    raise InvalidTileError(f"not a tile: {tile!r}")


def ensure_tiles(tiles: Iterable[object]) -> List[Tile]:
    return [ensure_tile(tile) for tile in tiles]


def sort_key(tile: Tile) -> int:
    return ensure_tile(tile).tile_id


def split_kinds(tiles: Iterable[Tile]) -> Tuple[List[RegularTile], List[Wildcard]]:
    regulars: List[RegularTile] = []
    wildcards: List[Wildcard] = []
    for tile in tiles:
        if isinstance(tile, RegularTile):
            regulars.append(tile)
        elif isinstance(tile, Wildcard):
            wildcards.append(tile)
        else:
            raise InvalidTileError(f"not a tile: {tile!r}")
    return regulars, wildcards


def format_tiles(tiles: Iterable[Tile]) -> str:
    return " ".join(tile.label() for tile in tiles)
