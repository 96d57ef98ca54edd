"""Subtraction game: players alternately take 1..max_take items from one pile."""

from typing import List, Tuple

from zerosum.config import CONFIG
from zerosum.core.game import PLAYER_ONE_WIN, PLAYER_TWO_WIN


class SubtractionGame:
    """Single-pile subtraction game, player one moves first.

    Under normal play the player left without a move (empty pile) loses; with
    ``misere=True`` the player who takes the last item loses instead. Positions
    that are not over score 0.0, so only exact wins are ever reported.
    """

    def __init__(self, items: int = None, max_take: int = None, misere: bool = None):
        self.items = CONFIG.nim.items if items is None else items
        self.max_take = CONFIG.nim.max_take if max_take is None else max_take
        self.misere = CONFIG.nim.misere if misere is None else misere
        if self.items < 0:
            raise ValueError(f"items must be >= 0, got {self.items}")
        if self.max_take < 1:
            raise ValueError(f"max_take must be >= 1, got {self.max_take}")
        self.player_one_turn = True

    def legal_moves(self) -> List[int]:
        return list(range(1, min(self.max_take, self.items) + 1))

    def apply(self, move: int) -> None:
        if not 1 <= move <= min(self.max_take, self.items):
            raise ValueError(f"cannot take {move} from {self.items} items")
        self.items -= move
        self.player_one_turn = not self.player_one_turn

    def undo(self, move: int) -> None:
        self.items += move
        self.player_one_turn = not self.player_one_turn

    def evaluate(self) -> float:
        if self.items > 0:
            return 0.0
        # The player to move faces an empty pile.
        mover_wins = self.misere
        if mover_wins == self.player_one_turn:
            return PLAYER_ONE_WIN
        return PLAYER_TWO_WIN

    def position_key(self) -> Tuple[bool, int]:
        return (self.player_one_turn, self.items)

    def is_player_one_turn(self) -> bool:
        return self.player_one_turn

    def __repr__(self):
        turn = "P1" if self.player_one_turn else "P2"
        return f"SubtractionGame(items={self.items}, max_take={self.max_take}, to_move={turn})"
