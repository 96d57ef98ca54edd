"""Chess over python-chess, exposed through the search contract."""

from typing import List

import chess

from zerosum.config import CONFIG
from zerosum.core.game import PLAYER_ONE_WIN, PLAYER_TWO_WIN


class ChessGame:
    """White is player one. Scores are material balance in pawns, from White's side."""

    def __init__(self, fen: str = None, piece_values=None):
        """Initialize from FEN or the standard starting position."""
        self.board = chess.Board(fen) if fen else chess.Board()
        values = piece_values or CONFIG.eval.piece_values
        self.piece_values = {pt: float(values.get(chess.piece_name(pt).upper(), 0.0))
                             for pt in chess.PIECE_TYPES}

    def is_over(self) -> bool:
        b = self.board
        return b.is_checkmate() or b.is_stalemate() or b.is_insufficient_material()

    def legal_moves(self) -> List[chess.Move]:
        if self.is_over():
            return []
        return list(self.board.legal_moves)

    def apply(self, move: chess.Move) -> None:
        self.board.push(move)

    def undo(self, move: chess.Move) -> None:
        if not self.board.move_stack or self.board.peek() != move:
            raise ValueError(f"{move} is not the last move played")
        self.board.pop()

    def evaluate(self) -> float:
        b = self.board
        if b.is_checkmate():
            return PLAYER_TWO_WIN if b.turn == chess.WHITE else PLAYER_ONE_WIN
        if b.is_stalemate() or b.is_insufficient_material():
            return 0.0

        score = 0.0
        for piece in b.piece_map().values():
            value = self.piece_values[piece.piece_type]
            score += value if piece.color == chess.WHITE else -value
        return score

    def position_key(self) -> str:
        # EPD: placement, side to move, castling and en passant, no move counters.
        return self.board.epd()

    def is_player_one_turn(self) -> bool:
        return self.board.turn == chess.WHITE

    def get_fen(self) -> str:
        return self.board.fen()

    def __repr__(self):
        return f"ChessGame({self.board.fen()!r})"
