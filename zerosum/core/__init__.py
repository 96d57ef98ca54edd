"""Core engine components: game contract, search, and transposition table."""

from .game import Game, applied
from .search import NoMoveError, SearchEngine, SearchResult
from .transposition import TranspositionTable
