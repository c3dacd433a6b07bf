from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .candidates import PartitionCache, find_valid_partitions
from .meld import Meld
from .move import count_moves
from .rules import DEFAULT_RULES, Ruleset
from .table import Board
from .tiles import Tile, ensure_tiles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Play:
    positions: Tuple[int, ...]
    tiles: Tuple[Tile, ...]
    moves: int
    board: Board


def rank_plays(plays: Iterable[Play]) -> List[Play]:
    return sorted(plays, key=lambda play: (play.moves, -len(play.tiles)))


def _resolve_limit(hand_size: int, max_tiles: Optional[int], rules: Ruleset) -> int:
    limit = max_tiles if max_tiles is not None else rules.max_tiles
    if limit is None:
        return hand_size
    if limit < 0:
        raise ValueError(f"max_tiles must be non-negative, got {limit}")
    return min(limit, hand_size)


def best_play(
    board: Board, hand: Sequence[Tile], positions: Tuple[int, ...],
    cache: PartitionCache, rules: Ruleset = DEFAULT_RULES,
) -> Optional[Play]:
    placed = tuple(hand[i] for i in positions)
    best: Optional[Play] = None
    for target in find_valid_partitions(list(board.all_tiles()) + list(placed), cache, rules):
        moves = count_moves(board, target, placed)
        if best is None or moves < best.moves:
            best = Play(positions=positions, tiles=placed, moves=moves, board=target)
    return best


def solve(
    board: Iterable[Iterable[Tile]],
    hand: Iterable[Tile],
    max_tiles: Optional[int] = None,
    rules: Ruleset = DEFAULT_RULES,
) -> List[Play]:
    """Every subset of the hand that can be laid on the board, ranked.

    Subsets of 1..``max_tiles`` tiles are tried; a subset with no valid
    layout of board plus subset is left out.
    """
    source = Board.of(board)
    hand = ensure_tiles(hand)
    limit = _resolve_limit(len(hand), max_tiles, rules)
    cache: PartitionCache = {}
    results: Dict[Tuple[int, ...], Play] = {}

    for size in range(1, limit + 1):
        tried = 0
        for positions in combinations(range(len(hand)), size):
            tried += 1
            play = best_play(source, hand, positions, cache, rules)
            if play is not None:
                results[positions] = play
        logger.debug("tried %d subsets of size %d", tried, size)

    logger.info(
        "solved board of %d melds with hand of %d tiles: %d playable subsets",
        len(source), len(hand), len(results),
    )
    return rank_plays(results.values())


def reconstruct_board(tiles: Iterable[Tile], rules: Ruleset = DEFAULT_RULES) -> Board:
    tiles = ensure_tiles(tiles)
    partitions = find_valid_partitions(tiles, rules=rules)
    if partitions:
        return partitions[0]
    logger.warning("no valid grouping for %d board tiles; keeping them as singletons", len(tiles))
    return Board(tuple(Meld((tile,)) for tile in tiles))
