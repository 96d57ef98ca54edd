"""FastAPI REST interface for the engine."""

import math
from dataclasses import asdict
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from zerosum import __version__
from zerosum.config import CONFIG, MAX_LINE_LENGTH, MAX_SEARCH_DEPTH
from zerosum.core.search import SearchEngine
from zerosum.games.chess_game import ChessGame
from zerosum.games.nim import SubtractionGame

app = FastAPI(title=CONFIG.ui.engine_name, version=__version__)


class NimRequest(BaseModel):
    items: int = Field(ge=0)
    depth: Optional[int] = Field(default=None, ge=0, le=MAX_SEARCH_DEPTH)
    length: Optional[int] = Field(default=None, ge=1, le=MAX_LINE_LENGTH)
    max_take: Optional[int] = Field(default=None, ge=1)
    misere: Optional[bool] = None


class ChessRequest(BaseModel):
    fen: Optional[str] = None
    depth: Optional[int] = Field(default=None, ge=0, le=CONFIG.ui.api_max_chess_depth)
    length: Optional[int] = Field(default=None, ge=1, le=MAX_LINE_LENGTH)


class SearchResponse(BaseModel):
    evaluation: Optional[float]  # null for a confirmed win, see winner
    winner: Optional[str]
    best_move: Optional[str]
    best_line: List[str]
    nodes: int


def _search(game, depth: Optional[int], length: Optional[int], fmt=str) -> SearchResponse:
    # Fresh engine per request: engines hold per-search state.
    engine = SearchEngine(depth)
    result = engine.search(game)
    nodes = engine.nodes

    line = []
    if result.best_move is not None:
        line = engine.get_best_line(game, CONFIG.search.line_length if length is None else length)

    winner = None
    if result.evaluation == math.inf:
        winner = "player_one"
    elif result.evaluation == -math.inf:
        winner = "player_two"
    return SearchResponse(
        evaluation=None if winner else result.evaluation,
        winner=winner,
        best_move=None if result.best_move is None else fmt(result.best_move),
        best_line=[fmt(m) for m in line],
        nodes=nodes,
    )


@app.get("/config")
def get_config():
    return {"search": asdict(CONFIG.search), "nim": asdict(CONFIG.nim)}


@app.post("/nim/search", response_model=SearchResponse)
def search_nim(req: NimRequest):
    game = SubtractionGame(req.items, req.max_take, req.misere)
    return _search(game, req.depth, req.length)


@app.post("/chess/search", response_model=SearchResponse)
def search_chess(req: ChessRequest):
    try:
        game = ChessGame(req.fen)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid FEN: {e}")
    return _search(game, req.depth, req.length, fmt=lambda m: m.uci())
