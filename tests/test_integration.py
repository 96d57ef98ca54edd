"""
Integration test suite for ZeroSum.

Tests components working together end-to-end:
- Engine facade playing complete games
- Command-line driver output and exit codes
- FastAPI REST API integration
"""

import math

import chess
import pytest

from zerosum.config import CONFIG, MAX_SEARCH_DEPTH
from zerosum.core.search import NoMoveError
from zerosum.games.chess_game import ChessGame
from zerosum.games.nim import SubtractionGame
from zerosum.main import Engine
from interface import cli

BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/8/R3K3 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 0 1"
STALEMATE = "5k2/5P2/5K2/8/8/8/8/8 b - - 0 1"


# ════════════════════════════════════════════════════════════════════════════
#  ENGINE FACADE: FULL GAMES
# ════════════════════════════════════════════════════════════════════════════


class TestEngineFacade:
    @pytest.mark.parametrize("items", [4, 5, 7, 8, 10])
    def test_winner_plays_out_the_win(self, items):
        """From a winning start, perfect play by both sides ends with player one winning."""
        engine = Engine(SubtractionGame(items), depth=items)
        plies = 0
        while not engine.is_game_over():
            move, evaluation = engine.get_best_move()
            assert evaluation == math.inf
            assert engine.make_move(move)
            plies += 1
        assert plies <= items
        assert engine.game.evaluate() == math.inf

    def test_loser_cannot_escape(self):
        engine = Engine(SubtractionGame(9), depth=9)
        while not engine.is_game_over():
            move, evaluation = engine.get_best_move()
            assert evaluation == -math.inf
            engine.make_move(move)
        assert engine.game.evaluate() == -math.inf

    def test_make_illegal_move(self):
        engine = Engine(SubtractionGame(1), depth=1)
        assert engine.make_move(2) is False
        assert engine.game.items == 1

    def test_best_move_on_finished_game(self):
        engine = Engine(SubtractionGame(0), depth=3)
        assert engine.is_game_over()
        with pytest.raises(NoMoveError):
            engine.get_best_move()

    def test_best_line_default_length(self, monkeypatch):
        monkeypatch.setattr(CONFIG.search, "line_length", 2)
        engine = Engine(SubtractionGame(10), depth=10)
        assert len(engine.get_best_line()) == 2
        assert engine.game.position_key() == (True, 10)

    @pytest.mark.parametrize("length", [0, -1])
    def test_best_line_explicit_non_positive_length(self, length):
        engine = Engine(SubtractionGame(4), depth=4)
        with pytest.raises(ValueError):
            engine.get_best_line(length)

    def test_chess_engine_vs_engine(self):
        """Both sides use the same engine; every move is legal and turns alternate."""
        engine = Engine(ChessGame(), depth=1)
        for i in range(8):
            board = engine.game.board
            assert board.turn == (chess.WHITE if i % 2 == 0 else chess.BLACK)
            fen = board.fen()
            move, _ = engine.get_best_move()
            assert board.fen() == fen
            assert move in board.legal_moves
            assert engine.make_move(move)
        assert len(engine.game.board.move_stack) == 8

    def test_chess_line_walks_forward_and_back(self):
        engine = Engine(ChessGame(BACK_RANK_MATE), depth=1)
        line = engine.get_best_line(3)
        # Mate ends the line after one move.
        assert line == [chess.Move.from_uci("a1a8")]
        assert engine.game.get_fen() == BACK_RANK_MATE


# ════════════════════════════════════════════════════════════════════════════
#  CLI INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestCLI:
    def run(self, capsys, *argv):
        code = cli.main(list(argv))
        return code, capsys.readouterr().out.splitlines()

    def test_nim_player_one_wins(self, capsys):
        code, out = self.run(capsys, "nim", "4")
        assert code == 0
        assert out == ["Player 1 wins", "Best line: 1 1 2"]

    def test_nim_player_two_wins(self, capsys):
        code, out = self.run(capsys, "nim", "3")
        assert code == 0
        assert out == ["Player 2 wins", "Best line: 1 2"]

    def test_nim_misere(self, capsys):
        _, out = self.run(capsys, "nim", "4", "--misere")
        assert out[0] == "Player 2 wins"

    def test_nim_max_take(self, capsys):
        _, out = self.run(capsys, "nim", "8", "--max-take", "3")
        assert out[0] == "Player 2 wins"

    def test_nim_empty_pile(self, capsys):
        code, out = self.run(capsys, "nim", "0")
        assert code == 0
        assert out == ["Player 2 wins", "Best line: (none)"]

    def test_nim_shallow_depth_is_heuristic(self, capsys):
        _, out = self.run(capsys, "nim", "10", "--depth", "1", "--length", "2")
        assert out == ["Evaluation: +0", "Best line: 1 1"]

    def test_chess_mate_in_one(self, capsys):
        code, out = self.run(capsys, "chess", "--fen", BACK_RANK_MATE, "--depth", "1", "--length", "2")
        assert code == 0
        assert out == ["White wins", "Best move: a1a8", "Best line: a1a8"]

    def test_chess_checkmated_position(self, capsys):
        code, out = self.run(capsys, "chess", "--fen", FOOLS_MATE, "--depth", "2")
        assert code == 1
        assert out[0] == "Black wins"
        assert out[1].startswith("No best move")

    def test_chess_invalid_fen(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["chess", "--fen", "not a fen"])
        assert exc.value.code == 2

    def test_nim_large_pile_needs_explicit_depth(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["nim", "1500"])
        assert exc.value.code == 2
        assert "--depth" in capsys.readouterr().err

    def test_nim_large_pile_with_depth(self, capsys):
        code, out = self.run(capsys, "nim", "1500", "--depth", "3", "--length", "1")
        assert code == 0
        assert out == ["Evaluation: +0", "Best line: 1"]

    @pytest.mark.parametrize("argv", [
        ["nim", "4", "--depth", "-1"],
        ["nim", "4", "--length", "0"],
        ["nim", "4", "--depth", str(MAX_SEARCH_DEPTH + 1)],
        ["nim", "4", "--length", "257"],
        ["chess", "--depth", "65"],
        ["nim", "four"],
        [],
    ])
    def test_invalid_arguments(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(argv)
        assert exc.value.code == 2


# ════════════════════════════════════════════════════════════════════════════
#  API INTEGRATION
# ════════════════════════════════════════════════════════════════════════════


class TestAPIIntegration:
    """Tests FastAPI REST API endpoints."""

    @pytest.fixture(autouse=True)
    def setup_client(self):
        from fastapi.testclient import TestClient
        from interface.api import app

        self.client = TestClient(app)

    def test_get_config(self):
        response = self.client.get("/config")
        assert response.status_code == 200
        data = response.json()
        assert data["search"]["depth"] == CONFIG.search.depth
        assert data["search"]["cache_policy"] in ("deeper", "shallower")

    def test_nim_win(self):
        response = self.client.post("/nim/search", json={"items": 4, "depth": 4, "length": 4})
        assert response.status_code == 200
        data = response.json()
        assert data["evaluation"] is None
        assert data["winner"] == "player_one"
        assert data["best_move"] == "1"
        assert data["best_line"] == ["1", "1", "2"]
        assert data["nodes"] > 0

    def test_nim_heuristic(self):
        response = self.client.post("/nim/search", json={"items": 10, "depth": 2, "length": 2})
        data = response.json()
        assert data["evaluation"] == 0.0
        assert data["winner"] is None
        assert data["best_line"] == ["1", "1"]

    def test_nim_empty_pile(self):
        data = self.client.post("/nim/search", json={"items": 0, "depth": 3}).json()
        assert data["winner"] == "player_two"
        assert data["best_move"] is None
        assert data["best_line"] == []

    def test_nim_misere(self):
        data = self.client.post("/nim/search", json={"items": 4, "depth": 4, "misere": True}).json()
        assert data["winner"] == "player_two"

    @pytest.mark.parametrize("body", [
        {"items": -1},
        {"items": 4, "depth": -1},
        {"items": 4, "length": 0},
        {"items": 4, "max_take": 0},
        {"items": 4, "depth": 1.5},
        {"items": 1500, "depth": 1500, "length": 1},
        {"items": 4, "length": 257},
        {"depth": 3},
    ])
    def test_nim_invalid_request(self, body):
        response = self.client.post("/nim/search", json=body)
        assert response.status_code == 422

    def test_chess_mate(self):
        response = self.client.post("/chess/search",
                                    json={"fen": BACK_RANK_MATE, "depth": 1, "length": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["winner"] == "player_one"
        assert data["best_move"] == "a1a8"
        assert data["best_line"] == ["a1a8"]

    def test_chess_start_position(self):
        data = self.client.post("/chess/search", json={"depth": 1, "length": 1}).json()
        move = chess.Move.from_uci(data["best_move"])
        assert move in chess.Board().legal_moves
        assert data["evaluation"] == 0.0

    def test_chess_stalemate(self):
        data = self.client.post("/chess/search", json={"fen": STALEMATE, "depth": 2}).json()
        assert data["evaluation"] == 0.0
        assert data["best_move"] is None

    def test_nim_large_pile(self):
        response = self.client.post("/nim/search", json={"items": 1500, "depth": 3, "length": 1})
        assert response.status_code == 200
        assert response.json()["best_line"] == ["1"]

    def test_chess_depth_limit(self):
        depth = CONFIG.ui.api_max_chess_depth + 1
        response = self.client.post("/chess/search", json={"depth": depth})
        assert response.status_code == 422

    def test_chess_invalid_fen(self):
        response = self.client.post("/chess/search", json={"fen": "invalid"})
        assert response.status_code == 400
