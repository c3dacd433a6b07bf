"""Rummy play solver: meld validation, board partitioning and move counting."""

from .rules import Ruleset
from .tiles import InvalidTileError, RegularTile, Suit, Tile, Wildcard
from .meld import Meld, MeldKind, is_valid_meld
from .table import Board, is_valid_board
from .candidates import find_valid_partitions
from .move import MoveCount, count_moves, tally_moves
from .engine import Play, rank_plays, reconstruct_board, solve
from .state import GameState, InvalidStateError

__all__ = [
    "Ruleset",
    "InvalidTileError",
    "InvalidStateError",
    "RegularTile",
    "Suit",
    "Tile",
    "Wildcard",
    "Meld",
    "MeldKind",
    "Board",
    "GameState",
    "MoveCount",
    "Play",
    "is_valid_meld",
    "is_valid_board",
    "find_valid_partitions",
    "count_moves",
    "tally_moves",
    "solve",
    "rank_plays",
    "reconstruct_board",
]
