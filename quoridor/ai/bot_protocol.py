#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Line-oriented bot protocol.

A bot reads one line per turn. ``start`` asks it to open the game; any other
line is the opponent's move in notation. The bot answers every line with its
own move in notation. ``PipedPlayer`` speaks the same protocol to a bot
running as a subprocess.
"""
import argparse
import logging
import subprocess
import sys
from typing import List, Optional

from quoridor.config import configure_logging, get_settings

from .heuristics import HEURISTICS, get_heuristic
from .moves import Move
from .notation import parse, printer
from .players import HeuristicPlayer, MinimaxPlayer, Player

logger = logging.getLogger(__name__)

START_COMMAND = "start"


def stdin_bot(player: Player, stdin=None, stdout=None) -> None:
    """Serve ``player`` over the line protocol until the input ends."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    for line in stdin:
        line = line.strip()
        if not line:
            continue
        if line == START_COMMAND:
            move_out = player.mv(None)
        else:
            move_out = player.mv(parse(line))
        print(printer(move_out), file=stdout, flush=True)


class PipedPlayer(Player):
    """Player backed by a bot subprocess that speaks the line protocol."""

    def __init__(self, command: List[str]):
        self.command = command
        self.process: Optional[subprocess.Popen] = None

    def _ensure_started(self) -> subprocess.Popen:
        if self.process is None:
            logger.info("Starting bot process: %s", " ".join(self.command))
            self.process = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                bufsize=1,
            )
        return self.process

    def mv(self, last_move: Optional[Move]) -> Move:
        process = self._ensure_started()
        request = START_COMMAND if last_move is None else printer(last_move)
        process.stdin.write(request + "\n")
        process.stdin.flush()
        reply = process.stdout.readline()
        if not reply:
            raise EOFError(f"Bot process {self.command} closed its output")
        return parse(reply)

    def reset(self) -> None:
        self.close()

    def close(self) -> None:
        if self.process is not None:
            self.process.stdin.close()
            self.process.terminate()
            self.process.wait()
            self.process = None


def main(argv=None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description='Run a Quoridor bot over stdin/stdout')
    parser.add_argument('--algorithm', choices=['minimax', 'heuristic'], default='minimax')
    parser.add_argument('--depth', type=int, default=settings.search_depth,
                        help='Search depth for the minimax bot')
    parser.add_argument('--heuristic', choices=sorted(HEURISTICS), default='flow')
    args = parser.parse_args(argv)

    # Logs go to stderr, stdout belongs to the protocol
    configure_logging(settings.log_level)
    heuristic = get_heuristic(args.heuristic, settings.wall_weight)
    if args.algorithm == 'minimax':
        player = MinimaxPlayer(depth=args.depth, table_size=settings.table_size, heuristic=heuristic)
    else:
        player = HeuristicPlayer(heuristic=heuristic)
    stdin_bot(player)


if __name__ == "__main__":
    main()
