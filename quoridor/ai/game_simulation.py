#!/usr/bin/env python
# -*- coding: utf-8 -*-
import argparse
import logging
import time
from typing import List, NamedTuple, Optional

from quoridor.config import configure_logging, get_settings

from .board import Board
from .errors import IllegalMove
from .heuristics import HEURISTICS, get_heuristic
from .moves import Move
from .notation import printer
from .players import HeuristicPlayer, MinimaxPlayer, Player, RandomPlayer

logger = logging.getLogger(__name__)

DEFAULT_MAX_MOVES = 200


class GameResult(NamedTuple):
    winner: Optional[int]  # None when the move limit ran out
    by_foul: bool
    moves: List[Move]
    board: Board


def play(p1: Player, p2: Player, board: Optional[Board] = None,
         max_moves: int = DEFAULT_MAX_MOVES) -> GameResult:
    """Play two players against each other.

    Each player is handed the opponent's previous move and its answer is
    applied to the referee board. A player whose move is rejected loses by
    foul.

    Args:
        p1: Player 0, who moves first
        p2: Player 1
        board: Starting position (default: initial board)
        max_moves: Total number of moves before the game is called a draw

    Returns:
        GameResult with the winner, whether it was a foul, and the move list
    """
    board = board.copy() if board is not None else Board()
    players = (p1, p2)
    history: List[Move] = []
    last_move: Optional[Move] = None

    while len(history) < max_moves:
        mover = board.player
        move = players[mover].mv(last_move)
        try:
            board.integrate(move)
        except IllegalMove as e:
            logger.warning("Player %d loses by foul: %s", mover, e)
            return GameResult(1 - mover, True, history, board)

        history.append(move)
        logger.info("Move %d: player %d plays %s", len(history), mover, printer(move))
        winner = board.winner()
        if winner is not None:
            return GameResult(winner, False, history, board)
        last_move = move

    logger.info("Move limit of %d reached", max_moves)
    return GameResult(None, False, history, board)


def make_player(algorithm: str, depth: int, heuristic_name: str, seed: Optional[int] = None) -> Player:
    settings = get_settings()
    heuristic = get_heuristic(heuristic_name, settings.wall_weight)
    if algorithm == "minimax":
        return MinimaxPlayer(depth=depth, table_size=settings.table_size, heuristic=heuristic)
    if algorithm == "heuristic":
        return HeuristicPlayer(heuristic=heuristic)
    if algorithm == "random":
        return RandomPlayer(seed=seed)
    raise ValueError(f"Unknown algorithm: {algorithm}")


def main(first="minimax", second="heuristic", number_games=2, depth=2, heuristic="flow",
         max_moves=DEFAULT_MAX_MOVES, show_board=False):
    """Run a series of games between two engine players.

    Args:
        first: Algorithm of the first contender
        second: Algorithm of the second contender
        number_games: Number of games to play, colors swap every game
        depth: Depth for minimax search
        heuristic: Evaluator name for the engine players
        max_moves: Move limit per game
        show_board: Print the final board of every game
    """
    print("\n=== Quoridor Game Simulation ===")
    print(f"- {first} vs {second}")
    print(f"- Number of games: {number_games}")
    print(f"- Minimax depth: {depth}\n")

    names = (first, second)
    wins = [0, 0]
    draws = 0
    first_is_player_one = True

    for i in range(number_games):
        contenders = (0, 1) if first_is_player_one else (1, 0)
        p1 = make_player(names[contenders[0]], depth, heuristic, seed=i)
        p2 = make_player(names[contenders[1]], depth, heuristic, seed=i + 1)

        print(f"Game {i + 1}/{number_games}: {names[contenders[0]]} (player 0) vs {names[contenders[1]]} (player 1)")
        begin = time.time()
        result = play(p1, p2, max_moves=max_moves)
        elapsed = time.time() - begin

        if result.winner is None:
            draws += 1
            outcome = "draw (move limit)"
        else:
            wins[contenders[result.winner]] += 1
            outcome = f"{names[contenders[result.winner]]} wins"
        if result.by_foul:
            outcome += " by foul"
        print(f"  {outcome} after {len(result.moves)} moves in {elapsed:.2f}s")
        print(f"  moves: {' '.join(printer(m) for m in result.moves)}")
        if show_board:
            print(result.board.render())

        first_is_player_one = not first_is_player_one

    print("\n=== Final Results ===")
    print(f"{first} (first) wins: {wins[0]}")
    print(f"{second} (second) wins: {wins[1]}")
    print(f"Draws: {draws}")
    return wins, draws


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Run Quoridor game simulation')
    parser.add_argument('--first', choices=['minimax', 'heuristic', 'random'], default='minimax')
    parser.add_argument('--second', choices=['minimax', 'heuristic', 'random'], default='heuristic')
    parser.add_argument('--number-games', type=int, default=2,
                        help='Number of games to play')
    parser.add_argument('--depth', type=int, default=get_settings().search_depth,
                        help='Depth for minimax search')
    parser.add_argument('--heuristic', choices=sorted(HEURISTICS), default='flow')
    parser.add_argument('--max-moves', type=int, default=DEFAULT_MAX_MOVES,
                        help='Move limit per game')
    parser.add_argument('--show-board', action='store_true')
    parser.add_argument('--log-file', default=None)

    args = parser.parse_args()
    configure_logging(get_settings().log_level, args.log_file)
    main(args.first, args.second, args.number_games, args.depth,
         args.heuristic, args.max_moves, args.show_board)
