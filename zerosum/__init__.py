"""Minimax search with alpha-beta pruning for two-player zero-sum games."""

__version__ = "0.1.0"
