from __future__ import annotations

import logging
from collections import defaultdict
from itertools import combinations
from typing import Dict, Iterable, Iterator, List, MutableMapping, Optional, Sequence, Set, Tuple

from .meld import Meld, is_valid_meld
from .multiset import TileMultiset
from .rules import DEFAULT_RULES, Ruleset
from .table import Board
from .tiles import (
    JOKER_ID,
    RegularTile,
    Suit,
    Tile,
    Wildcard,
    ensure_tiles,
    rank_of,
    sort_key,
    suit_of,
    tile_id_of,
)

logger = logging.getLogger(__name__)

# A partition as positions into the canonically ordered input.
Layout = Tuple[Tuple[int, ...], ...]
CacheKey = Tuple[Tuple[int, int], ...]
PartitionCache = MutableMapping[CacheKey, List[Layout]]


def canonical_order(tiles: Iterable[Tile]) -> List[Tile]:
    return sorted(tiles, key=sort_key)


def partition_key(tiles: Iterable[Tile]) -> CacheKey:
    return TileMultiset.from_tiles(tiles).key()


def _index_remaining(tiles: Sequence[Tile], remaining: Sequence[int]) -> Dict[int, List[int]]:
    by_id: Dict[int, List[int]] = defaultdict(list)
    for idx in remaining:
        by_id[tiles[idx].tile_id].append(idx)
    return by_id


def _build_run(
    suit: Suit, start: int, end: int, by_id: Dict[int, List[int]], wildcards: Sequence[int]
) -> Optional[Tuple[int, ...]]:
    members: List[int] = []
    spare = iter(wildcards)
    for rank in range(start, end + 1):
        exact = by_id.get(tile_id_of(suit, rank))
        if exact:
            members.append(exact[0])
            continue
        wildcard = next(spare, None)
        if wildcard is None:
            return None
        members.append(wildcard)
    return tuple(members)


def _runs_through(
    anchor: int, suit: Suit, rank: Optional[int], by_id: Dict[int, List[int]],
    wildcards: Sequence[int], rules: Ruleset,
) -> Iterator[Tuple[int, ...]]:
    lowest = rank if rank is not None else rules.values
    for start in range(1, lowest + 1):
        first_end = start + rules.min_run_length - 1
        if rank is not None:
            first_end = max(first_end, rank)
        for end in range(first_end, rules.values + 1):
            members = _build_run(suit, start, end, by_id, wildcards)
            if members is not None and anchor in members:
                yield members


def _groups_through(
    anchor: int, rank: int, anchor_suit: Optional[Suit], by_id: Dict[int, List[int]],
    wildcards: Sequence[int], rules: Ruleset,
) -> Iterator[Tuple[int, ...]]:
    suits = [suit for suit in Suit if by_id.get(tile_id_of(suit, rank))]
    for size in rules.group_sizes:
        for regular_count in range(1, size + 1):
            wildcard_count = size - regular_count
            if wildcard_count > len(wildcards):
                continue
            for combo in combinations(suits, regular_count):
                if anchor_suit is not None and anchor_suit not in combo:
                    continue
                members = tuple(by_id[tile_id_of(suit, rank)][0] for suit in combo)
                members += tuple(wildcards[:wildcard_count])
                if anchor in members:
                    yield members


def candidate_melds(
    tiles: Sequence[Tile], remaining: Sequence[int], rules: Ruleset = DEFAULT_RULES
) -> List[Tuple[int, ...]]:
    anchor = remaining[0]
    by_id = _index_remaining(tiles, remaining)
    wildcards = by_id.get(JOKER_ID, [])
    anchor_tile = tiles[anchor]

    if isinstance(anchor_tile, RegularTile):
        found = list(_runs_through(anchor, anchor_tile.suit, anchor_tile.rank, by_id, wildcards, rules))
        found.extend(_groups_through(anchor, anchor_tile.rank, anchor_tile.suit, by_id, wildcards, rules))
    elif isinstance(anchor_tile, Wildcard):
        # the anchor goes first so it is always the first wildcard spent
        wildcards = [anchor] + [w for w in wildcards if w != anchor]
        regular_ids = [tile_id for tile_id in by_id if tile_id != JOKER_ID]
        found = []
        for suit in sorted({suit_of(tile_id) for tile_id in regular_ids}, key=lambda s: s.order):
            found.extend(_runs_through(anchor, suit, None, by_id, wildcards, rules))
        for rank in sorted({rank_of(tile_id) for tile_id in regular_ids}):
            found.extend(_groups_through(anchor, rank, None, by_id, wildcards, rules))
    else:
        raise TypeError(f"not a tile: {anchor_tile!r}")

    melds: List[Tuple[int, ...]] = []
    seen: Set[Tuple[int, ...]] = set()
    for members in found:
        key = tuple(sorted(members))
        if key in seen:
            continue
        seen.add(key)
        if is_valid_meld((tiles[i] for i in members), rules):
            melds.append(members)
    return melds


def _partition(
    tiles: Sequence[Tile], remaining: Tuple[int, ...], chosen: Layout,
    results: List[Layout], rules: Ruleset,
) -> None:
    if not remaining:
        results.append(chosen)
        return
    for members in candidate_melds(tiles, remaining, rules):
        used = set(members)
        rest = tuple(idx for idx in remaining if idx not in used)
        _partition(tiles, rest, chosen + (members,), results, rules)


def enumerate_layouts(ordered: Sequence[Tile], rules: Ruleset = DEFAULT_RULES) -> List[Layout]:
    results: List[Layout] = []
    _partition(ordered, tuple(range(len(ordered))), (), results, rules)
    return results


def bind_layout(ordered: Sequence[Tile], layout: Layout) -> Board:
    return Board(tuple(Meld(tuple(ordered[i] for i in members)) for members in layout))


def find_valid_partitions(
    tiles: Iterable[object],
    cache: Optional[PartitionCache] = None,
    rules: Ruleset = DEFAULT_RULES,
) -> List[Board]:
    """Every way to split ``tiles`` into valid melds, using each tile exactly once.

    ``cache`` maps a tile multiset to its layouts and is only valid for one
    ruleset. Returned boards hold the caller's own tile objects.
    """
    ordered = canonical_order(ensure_tiles(tiles))
    if not ordered:
        return [Board()]

    key = partition_key(ordered)
    layouts = cache.get(key) if cache is not None else None
    if layouts is None:
        layouts = enumerate_layouts(ordered, rules)
        logger.debug("partitioned %d tiles into %d layouts", len(ordered), len(layouts))
        if cache is not None:
            cache[key] = layouts
    else:
        logger.debug("partition cache hit for %d tiles", len(ordered))
    return [bind_layout(ordered, layout) for layout in layouts]
