from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .rules import DEFAULT_RULES, Ruleset
from .tiles import RegularTile, Suit, Tile, Wildcard, ensure_tiles, format_tiles, sort_key, split_kinds


class MeldKind(str, Enum):
    RUN = "RUN"
    GROUP = "GROUP"


def _check_group(
    size: int, regulars: Sequence[RegularTile], wildcards: Sequence[Wildcard], rules: Ruleset
) -> Tuple[bool, str]:
    if size not in rules.group_sizes:
        return False, "group must have length " + " or ".join(str(s) for s in rules.group_sizes)
    if len({t.rank for t in regulars}) != 1:
        return False, "group must share rank"
    suits = [t.suit for t in regulars]
    if len(set(suits)) != len(suits):
        return False, "group suits must be distinct"
    if len(wildcards) > len(Suit) - len(suits):
        return False, "group has more wildcards than free suits"
    return True, ""


def _check_run(
    size: int, regulars: Sequence[RegularTile], wildcards: Sequence[Wildcard], rules: Ruleset
) -> Tuple[bool, str]:
    if size < rules.min_run_length:
        return False, "run too short"
    if len({t.suit for t in regulars}) != 1:
        return False, "run must have same suit"
    ranks = sorted(t.rank for t in regulars)
    if len(set(ranks)) != len(ranks):
        return False, "run must not duplicate rank"
    lo, hi = ranks[0], ranks[-1]
    gaps = hi - lo + 1 - len(ranks)
    if len(wildcards) < gaps:
        return False, "run must be consecutive"
    # some window [start, start + size - 1] inside 1..values must hold every rank
    first_start = max(1, hi - size + 1)
    last_start = min(rules.values + 1 - size, lo)
    if first_start > last_start:
        return False, "run does not fit between 1 and 13"
    return True, ""


def classify(tiles: Iterable[Tile], rules: Ruleset = DEFAULT_RULES) -> Tuple[Optional[MeldKind], str]:
    tiles = list(tiles)
    if not tiles:
        return None, "meld is empty"
    regulars, wildcards = split_kinds(tiles)
    if not regulars:
        return None, "meld needs at least one regular tile"
    ok, group_reason = _check_group(len(tiles), regulars, wildcards, rules)
    if ok:
        return MeldKind.GROUP, ""
    ok, run_reason = _check_run(len(tiles), regulars, wildcards, rules)
    if ok:
        return MeldKind.RUN, ""
    return None, f"{group_reason}; {run_reason}"


def check_meld(tiles: Iterable[Tile], rules: Ruleset = DEFAULT_RULES) -> Tuple[bool, str]:
    kind, reason = classify(tiles, rules)
    return kind is not None, reason


def is_valid_meld(tiles: Iterable[Tile], rules: Ruleset = DEFAULT_RULES) -> bool:
    return check_meld(tiles, rules)[0]


def meld_kind(tiles: Iterable[Tile], rules: Ruleset = DEFAULT_RULES) -> Optional[MeldKind]:
    return classify(tiles, rules)[0]


@dataclass(frozen=True, eq=False)
class Meld:
    tiles: Tuple[Tile, ...]

    @classmethod
    def of(cls, tiles: Iterable[object]) -> "Meld":
        if isinstance(tiles, Meld):
            return tiles
        return cls(tuple(ensure_tiles(tiles)))

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    def __len__(self) -> int:
        return len(self.tiles)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Meld) and self.signature() == other.signature()

    def __hash__(self) -> int:
        return hash(self.signature())

    def __repr__(self) -> str:
        return f"Meld([{format_tiles(self.tiles)}])"

    def canonicalize(self) -> "Meld":
        return Meld(tuple(sorted(self.tiles, key=sort_key)))

    def signature(self) -> Tuple[int, ...]:
        return tuple(sorted(sort_key(tile) for tile in self.tiles))

    def contains_value(self, tile: Tile) -> bool:
        return any(member == tile for member in self.tiles)

    def kind(self, rules: Ruleset = DEFAULT_RULES) -> Optional[MeldKind]:
        return meld_kind(self.tiles, rules)

    def is_valid(self, rules: Ruleset = DEFAULT_RULES) -> Tuple[bool, str]:
        return check_meld(self.tiles, rules)

    @classmethod
    def run(cls, suit: Suit, start: int, length: int) -> "Meld":
        return cls(tuple(RegularTile(suit, start + i) for i in range(length)))

    @classmethod
    def group(cls, rank: int, suits: Iterable[Suit]) -> "Meld":
        return cls(tuple(RegularTile(suit, rank) for suit in suits))
