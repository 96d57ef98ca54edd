"""Game contract searched by the engine.

Any two-player, zero-sum, perfect-information game can be searched once its
state object exposes the six methods of :class:`Game`. The engine mutates the
state in place (apply, recurse, undo) and relies on two guarantees:

- ``undo(m)`` exactly reverses ``apply(m)``, whose-turn-it-is included;
- ``position_key()`` returns a new hashable token each call, equal for equal
  positions and different otherwise.

A key that collides for different positions is treated as the same position
by the transposition cache and silently corrupts results. The engine does not
try to detect it.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Hashable, Iterator, Protocol, Sequence, TypeVar, runtime_checkable

Move = TypeVar("Move")

PLAYER_ONE_WIN = float("inf")
PLAYER_TWO_WIN = float("-inf")


@runtime_checkable
class Game(Protocol[Move]):
    """Mutable game state. Positive evaluations favour player one."""

    def legal_moves(self) -> Sequence[Move]:
        """Ordered legal moves from the current position, empty when terminal."""
        ...

    def apply(self, move: Move) -> None:
        ...

    def undo(self, move: Move) -> None:
        ...

    def evaluate(self) -> float:
        """Score of the current position.

        ``PLAYER_ONE_WIN`` / ``PLAYER_TWO_WIN`` mark a confirmed win; any finite
        value is a heuristic estimate, zero being an even game.
        """
        ...

    def position_key(self) -> Hashable:
        ...

    def is_player_one_turn(self) -> bool:
        ...


@contextmanager
def applied(game: Game[Move], move: Move) -> Iterator[Game[Move]]:
    """Apply ``move`` for the duration of the block, undoing it on every exit path."""
    game.apply(move)
    try:
        yield game
    finally:
        game.undo(move)
