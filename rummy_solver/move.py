from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Set

from .table import Board
from .tiles import Tile, ensure_tiles


class MoveKind(str, Enum):
    PLACE = "PLACE"
    SPLIT = "SPLIT"
    MERGE = "MERGE"


@dataclass(frozen=True)
class MoveCount:
    place: int = 0
    split: int = 0
    merge: int = 0

    @property
    def rearrange(self) -> int:
        # splitting and merging the same tiles is done in one pass
        return max(self.split, self.merge)

    @property
    def total(self) -> int:
        return self.place + self.rearrange

    def as_dict(self) -> Dict[str, int]:
        return {
            MoveKind.PLACE.value: self.place,
            MoveKind.SPLIT.value: self.split,
            MoveKind.MERGE.value: self.merge,
        }


def count_place_moves(target: Board, placed: Iterable[Tile]) -> int:
    touched = {target.index_of(tile) for tile in placed}
    touched.discard(-1)
    return len(touched)


def count_split_merge(source: Board, target: Board) -> MoveCount:
    source_to_target: Dict[int, Set[int]] = {i: set() for i in range(len(source))}
    target_to_source: Dict[int, Set[int]] = {i: set() for i in range(len(target))}
    for tile in source.all_tiles():
        source_idx = source.index_of(tile)
        target_idx = target.index_of(tile)
        if source_idx != -1 and target_idx != -1:
            source_to_target[source_idx].add(target_idx)
            target_to_source[target_idx].add(source_idx)

    splits = sum(len(targets) - 1 for targets in source_to_target.values() if len(targets) > 1)
    merges = sum(len(sources) - 1 for sources in target_to_source.values() if len(sources) > 1)
    return MoveCount(split=splits, merge=merges)


def tally_moves(source: Iterable[Iterable[Tile]], target: Iterable[Iterable[Tile]], placed: Iterable[Tile]) -> MoveCount:
    source_board = Board.of(source)
    target_board = Board.of(target)
    placed = ensure_tiles(placed)
    if not placed and source_board == target_board:
        return MoveCount()
    rearranged = count_split_merge(source_board, target_board)
    return MoveCount(
        place=count_place_moves(target_board, placed),
        split=rearranged.split,
        merge=rearranged.merge,
    )


def count_moves(source: Iterable[Iterable[Tile]], target: Iterable[Iterable[Tile]], placed: Iterable[Tile]) -> int:
    """Minimum number of board actions to turn ``source`` into ``target``.

    Placing any number of tiles into one meld is one action; each extra meld a
    source meld is spread over is a split and each extra source meld a target
    meld draws from is a merge. Splits and merges are not summed: the larger
    of the two is charged.
    """
    return tally_moves(source, target, placed).total
