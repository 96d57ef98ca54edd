"""Games implementing the search contract."""

from .chess_game import ChessGame
from .nim import SubtractionGame
