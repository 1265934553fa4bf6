"""
Tests for the players, the game loop and the line-oriented bot protocol.
"""
import io

import pytest

from quoridor.ai.board import Board
from quoridor.ai.bot_protocol import stdin_bot
from quoridor.ai.game_simulation import play
from quoridor.ai.moves import pawn
from quoridor.ai.notation import parse
from quoridor.ai.players import CLIPlayer, HeuristicPlayer, MinimaxPlayer, Player, RandomPlayer

from test_board import make_board


class ScriptedPlayer(Player):
    """Plays a fixed list of moves and records what it receives."""

    def __init__(self, moves):
        self.moves = list(moves)
        self.received = []

    def mv(self, last_move):
        self.received.append(last_move)
        return self.moves.pop(0)


def win_in_one():
    return make_board(p0=(5, 2), p1=(1, 5), walls_left=(0, 0))


def test_random_players_follow_the_rules():
    result = play(RandomPlayer(seed=1), RandomPlayer(seed=2), max_moves=30)
    assert not result.by_foul
    assert len(result.moves) <= 30

    replay = Board()
    for move in result.moves:
        replay.integrate(move)
    assert replay == result.board


def test_move_limit_ends_in_a_draw():
    p1 = ScriptedPlayer([pawn(5, 8), pawn(5, 9)])
    p2 = ScriptedPlayer([pawn(5, 2), pawn(5, 1)])
    result = play(p1, p2, max_moves=4)
    assert result.winner is None
    assert not result.by_foul
    assert result.moves == [pawn(5, 8), pawn(5, 2), pawn(5, 9), pawn(5, 1)]
    assert p1.received == [None, pawn(5, 2)]
    assert p2.received == [pawn(5, 8), pawn(5, 9)]


def test_illegal_move_loses_by_foul():
    result = play(ScriptedPlayer([pawn(5, 5)]), RandomPlayer(seed=0))
    assert result.winner == 1
    assert result.by_foul
    assert result.moves == []
    assert result.board == Board()


def test_second_player_foul():
    result = play(ScriptedPlayer([pawn(5, 8)]), ScriptedPlayer([pawn(5, 3)]))
    assert result.winner == 0
    assert result.by_foul
    assert result.moves == [pawn(5, 8)]


def test_minimax_player_wins_in_one():
    board = win_in_one()
    result = play(MinimaxPlayer(depth=2, board=board), RandomPlayer(seed=0, board=board), board=board)
    assert result.winner == 0
    assert not result.by_foul
    assert result.moves == [pawn(5, 1)]


def test_heuristic_player_wins_in_one():
    player = HeuristicPlayer(board=win_in_one())
    assert player.mv(None) == pawn(5, 1)
    assert player.board.winner() == 0


def test_minimax_player_reset_keeps_table():
    player = MinimaxPlayer(depth=2, board=win_in_one())
    player.mv(None)
    assert len(player.table) > 0
    player.reset()
    assert player.board == Board()
    assert len(player.table) > 0


def test_engine_player_tracks_opponent_moves():
    player = RandomPlayer(seed=5)
    reply = player.mv(pawn(5, 8))
    board = Board()
    board.integrate(pawn(5, 8))
    board.integrate(reply)
    assert player.board == board


def test_cli_player():
    out = io.StringIO()
    player = CLIPlayer("human", stream=io.StringIO("e8\n"), out=out)
    assert player.mv(None) == pawn(5, 8)
    assert "human: received None" in out.getvalue()

    with pytest.raises(EOFError):
        player.mv(pawn(5, 2))
    assert "received e2" in out.getvalue()


def test_stdin_bot_opens_the_game():
    stdout = io.StringIO()
    stdin_bot(RandomPlayer(seed=3), io.StringIO("start\n"), stdout)
    lines = stdout.getvalue().splitlines()
    assert len(lines) == 1
    Board().integrate(parse(lines[0]))


def test_stdin_bot_answers_every_move():
    player = ScriptedPlayer([pawn(5, 2), pawn(5, 3)])
    stdout = io.StringIO()
    stdin_bot(player, io.StringIO("e8\n\n e7 \n"), stdout)
    assert stdout.getvalue() == "e2\ne3\n"
    assert player.received == [pawn(5, 8), pawn(5, 7)]
