from typing import List, Optional, Tuple

from zerosum.config import CONFIG
from zerosum.core.game import Game
from zerosum.core.search import SearchEngine


class Engine:
    """One game paired with one search engine."""

    def __init__(self, game: Game, depth: Optional[int] = None, cache_policy: Optional[str] = None):
        self.game = game
        self.search = SearchEngine(depth, cache_policy)

    def evaluate(self) -> float:
        return self.search.evaluate(self.game)

    def get_best_move(self) -> Tuple[object, float]:
        """Return (best move, evaluation). Raises NoMoveError on a finished game."""
        move = self.search.get_best_move(self.game)
        return move, self.search.last_result.evaluation

    def get_best_line(self, length: Optional[int] = None) -> List[object]:
        return self.search.get_best_line(self.game, CONFIG.search.line_length if length is None else length)

    def make_move(self, move) -> bool:
        """Play ``move`` if it is legal. Returns True if it was played."""
        if move not in self.game.legal_moves():
            return False
        self.game.apply(move)
        return True

    def is_game_over(self) -> bool:
        return not self.game.legal_moves()
