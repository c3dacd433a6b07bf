from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .tiles import MAX_RANK

MAX_TILES_ENV = "RUMMY_SOLVER_MAX_TILES"


@dataclass(frozen=True)
class Ruleset:
    values: int = MAX_RANK
    min_run_length: int = 3
    group_sizes: Tuple[int, ...] = (3, 4)
    max_tiles: Optional[int] = None

    def __post_init__(self) -> None:
        if not 1 <= self.values <= MAX_RANK:
            raise ValueError(f"values must be in 1..{MAX_RANK}")
        if self.min_run_length < 1:
            raise ValueError("min_run_length must be positive")
        if self.max_tiles is not None and self.max_tiles < 0:
            raise ValueError("max_tiles must be non-negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Ruleset":
        env = os.environ if environ is None else environ
        raw = env.get(MAX_TILES_ENV, "").strip()
        if not raw:
            return cls()
        try:
            max_tiles = int(raw)
        except ValueError:
            raise ValueError(f"{MAX_TILES_ENV} must be an integer, got {raw!r}") from None
        return cls(max_tiles=max_tiles)


DEFAULT_RULES = Ruleset()
