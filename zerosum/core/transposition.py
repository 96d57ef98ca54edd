"""Depth-bounded transposition table for a single top-level search.

Entries are keyed by the game's position key and the remaining search depth
at the time of insertion. Each entry stores the best move found at that node,
its evaluation, and a flag telling whether the evaluation is exact or only a
bound (the node's value fell outside the window it was searched with).

Two depth-comparison policies decide whether a stored entry may answer a
query at another depth:

- ``"deeper"``: the entry must have been searched at least as deep as the
  query (``stored_depth >= depth``).
- ``"shallower"``: the query must be at least as deep as the entry
  (``depth >= stored_depth``). A result computed with fewer plies of
  lookahead then answers a query asking for more, which changes search
  results compared to ``"deeper"``.

When several stored depths qualify, the deepest one is returned.

Usage (example):

    from zerosum.core.transposition import TranspositionTable, TT_EXACT

    tt = TranspositionTable(policy="deeper")
    tt.store(game.position_key(), depth=3, value=0.5, flag=TT_EXACT, best_move=2)
    entry = tt.get(game.position_key(), depth=2)
    if entry is not None:
        print(entry.depth, entry.value, entry.flag, entry.best_move)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional

from zerosum.config import CACHE_POLICIES

TT_EXACT = 0
TT_LOWER = 1  # failed high (value >= beta): true value >= value
TT_UPPER = 2  # failed low (value <= alpha): true value <= value


@dataclass
class TTEntry:
    depth: int
    value: float
    flag: int
    best_move: Optional[Any]

    def __iter__(self):
        return iter((self.depth, self.value, self.flag, self.best_move))

    def usable(self, alpha: float, beta: float) -> bool:
        """Whether this entry settles a node searched with window (alpha, beta)."""
        if self.flag == TT_EXACT:
            return True
        if self.flag == TT_LOWER:
            return self.value >= beta
        return self.value <= alpha


class TranspositionTable:
    """Transposition table keyed by (position key, depth).

    Methods:
      - get(key, depth) -> Optional[TTEntry]
      - store(key, depth, value, flag, best_move)
      - clear()
      - get_stats() -> dict
    """

    def __init__(self, policy: str = "deeper"):
        if policy not in CACHE_POLICIES:
            raise ValueError(f"unknown cache policy {policy!r}, expected one of {CACHE_POLICIES}")
        self.policy = policy
        self._table: Dict[Hashable, Dict[int, TTEntry]] = {}
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def _accepts(self, stored_depth: int, depth: int) -> bool:
        if self.policy == "deeper":
            return stored_depth >= depth
        return depth >= stored_depth

    def get(self, key: Hashable, depth: int) -> Optional[TTEntry]:
        by_depth = self._table.get(key)
        if by_depth:
            qualifying = [d for d in by_depth if self._accepts(d, depth)]
            if qualifying:
                self.hits += 1
                return by_depth[max(qualifying)]
        self.misses += 1
        return None

    def store(self, key: Hashable, depth: int, value: float, flag: int, best_move: Optional[Any]):
        self._table.setdefault(key, {})[depth] = TTEntry(depth, value, flag, best_move)
        self.stores += 1

    def clear(self):
        self._table.clear()
        self.hits = 0
        self.misses = 0
        self.stores = 0

    def __len__(self) -> int:
        return sum(len(by_depth) for by_depth in self._table.values())

    def get_stats(self) -> dict:
        return {
            "entries": len(self),
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
        }
