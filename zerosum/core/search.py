import logging
import math
import time
from dataclasses import dataclass
from typing import Generic, List, Optional

from zerosum.config import CONFIG, MAX_LINE_LENGTH, MAX_SEARCH_DEPTH
from zerosum.core.game import Game, Move, applied
from zerosum.core.transposition import TranspositionTable, TT_EXACT, TT_LOWER, TT_UPPER
from zerosum.core.utils import format_info

logger = logging.getLogger(__name__)

INF = math.inf


class NoMoveError(LookupError):
    """No best move exists: the root is terminal or was searched to depth 0."""


@dataclass(frozen=True)
class SearchResult(Generic[Move]):
    evaluation: float
    best_move: Optional[Move] = None


class SearchEngine:
    """Minimax search with alpha-beta pruning and a per-search transposition table.

    Player one maximizes, player two minimizes. The game is searched in place
    and restored before every public method returns. An instance holds
    per-search state and must not be shared between concurrent searches.
    """

    def __init__(self, depth: Optional[int] = None, cache_policy: Optional[str] = None):
        self.max_depth = self._check_depth(CONFIG.search.depth if depth is None else depth)
        self.tt = TranspositionTable(cache_policy or CONFIG.search.cache_policy)
        self.nodes = 0
        self.last_result: Optional[SearchResult] = None
        self.last_stats: Optional[dict] = None
        logger.debug("search engine ready: depth %d, cache policy %s", self.max_depth, self.tt.policy)

    @staticmethod
    def _check_depth(depth: int) -> int:
        if isinstance(depth, bool) or not isinstance(depth, int):
            raise TypeError(f"search depth must be an int, got {type(depth).__name__}")
        if not 0 <= depth <= MAX_SEARCH_DEPTH:
            raise ValueError(f"search depth must be in [0, {MAX_SEARCH_DEPTH}], got {depth}")
        return depth

    @staticmethod
    def _check_length(length: int) -> int:
        if isinstance(length, bool) or not isinstance(length, int):
            raise TypeError(f"line length must be an int, got {type(length).__name__}")
        if not 0 < length <= MAX_LINE_LENGTH:
            raise ValueError(f"line length must be in [1, {MAX_LINE_LENGTH}], got {length}")
        return length

    @staticmethod
    def _check_game(game) -> None:
        if not isinstance(game, Game):
            raise TypeError(f"{type(game).__name__} does not implement the Game contract")

    def search(self, game: Game[Move], depth: Optional[int] = None) -> SearchResult[Move]:
        """Search the current position and return the root evaluation and best move."""
        depth = self.max_depth if depth is None else self._check_depth(depth)
        self._check_game(game)

        self.tt.clear()
        self.nodes = 0
        self.last_result = None
        start_time = time.perf_counter()

        try:
            result = self._minimax(game, depth, -INF, INF)
        finally:
            # The cache lives for one top-level search only.
            self.last_stats = self.tt.get_stats()
            self.tt.clear()

        elapsed = time.perf_counter() - start_time
        self.last_result = result
        logger.info(format_info(depth, result.evaluation, self.nodes, elapsed, result.best_move))
        logger.debug("cache stats: %s", self.last_stats)
        return result

    def evaluate(self, game: Game[Move], depth: Optional[int] = None) -> float:
        return self.search(game, depth).evaluation

    def get_best_move(self, game: Game[Move], depth: Optional[int] = None) -> Move:
        result = self.search(game, depth)
        if result.best_move is None:
            raise NoMoveError("no move available: the position is terminal or depth is 0")
        return result.best_move

    def get_best_line(self, game: Game[Move], length: int, depth: Optional[int] = None) -> List[Move]:
        """Walk the game forward along the engine's choices, up to ``length`` moves.

        The line ends early at a position where no move is chosen. Every move
        played is undone before returning, so the game is left where it started.
        """
        self._check_length(length)
        line: List[Move] = []
        try:
            for _ in range(length):
                move = self.search(game, depth).best_move
                if move is None:
                    break
                game.apply(move)
                line.append(move)
        finally:
            for move in reversed(line):
                game.undo(move)
        return line

    def _minimax(self, game: Game[Move], depth: int, alpha: float, beta: float) -> SearchResult[Move]:
        self.nodes += 1
        key = game.position_key()

        entry = self.tt.get(key, depth)
        if entry is not None and entry.usable(alpha, beta):
            return SearchResult(entry.value, entry.best_move)

        if depth == 0:
            return SearchResult(game.evaluate())
        moves = list(game.legal_moves())
        if not moves:
            return SearchResult(game.evaluate())

        alpha_orig, beta_orig = alpha, beta
        maximizing = game.is_player_one_turn()
        best_score = -INF if maximizing else INF
        best_move = moves[0]

        for move in moves:
            with applied(game, move):
                score = self._minimax(game, depth - 1, alpha, beta).evaluation

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, best_score)
                if best_score >= beta:
                    break
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, best_score)
                if best_score <= alpha:
                    break

        if best_score <= alpha_orig:
            flag = TT_UPPER
        elif best_score >= beta_orig:
            flag = TT_LOWER
        else:
            flag = TT_EXACT

        self.tt.store(key, depth, best_score, flag, best_move)
        return SearchResult(best_score, best_move)
