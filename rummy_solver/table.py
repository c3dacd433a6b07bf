from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .meld import Meld, check_meld
from .rules import DEFAULT_RULES, Ruleset
from .tiles import Tile


@dataclass(frozen=True, eq=False)
class Board:
    melds: Tuple[Meld, ...] = ()

    @classmethod
    def of(cls, melds: Iterable[Iterable[object]]) -> "Board":
        if isinstance(melds, Board):
            return melds
        return cls(tuple(Meld.of(meld) for meld in melds))

    def __iter__(self) -> Iterator[Meld]:
        return iter(self.melds)

    def __len__(self) -> int:
        return len(self.melds)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Board) and self.canonical_key() == other.canonical_key()

    def __hash__(self) -> int:
        return hash(self.canonical_key())

    def __repr__(self) -> str:
        return f"Board({list(self.melds)!r})"

    def canonicalize(self) -> "Board":
        canon = sorted((m.canonicalize() for m in self.melds), key=lambda m: m.signature())
        return Board(tuple(canon))

    def canonical_key(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(sorted(meld.signature() for meld in self.melds))

    def all_tiles(self) -> Iterator[Tile]:
        for meld in self.melds:
            for tile in meld.tiles:
                yield tile

    def index_of(self, tile: Tile) -> int:
        for idx, meld in enumerate(self.melds):
            if meld.contains_value(tile):
                return idx
        return -1

    def problems(self, rules: Ruleset = DEFAULT_RULES) -> List[Tuple[int, str]]:
        found = []
        for idx, meld in enumerate(self.melds):
            ok, reason = check_meld(meld, rules)
            if not ok:
                found.append((idx, reason))
        return found

    def is_valid(self, rules: Ruleset = DEFAULT_RULES) -> bool:
        return not self.problems(rules)


def is_valid_board(board: Iterable[Iterable[Tile]], rules: Ruleset = DEFAULT_RULES) -> bool:
    return Board.of(board).is_valid(rules)
