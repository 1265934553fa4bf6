import logging
from typing import Dict

from fastapi import APIRouter, HTTPException

from quoridor.ai.board import Board
from quoridor.ai.errors import IllegalMove, InvalidSnapshot, NotationError
from quoridor.ai.heuristics import get_heuristic
from quoridor.ai.minimax import negamax_root
from quoridor.ai.notation import parse, printer
from quoridor.ai.players import HeuristicPlayer, RandomPlayer
from quoridor.ai.transposition import TranspositionTable
from quoridor.config import get_settings
from quoridor.models.game import BoardSnapshot, BotMoveRequest, MoveRequest, MoveResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# One search table per evaluator, shared by every request
SEARCH_TABLES: Dict[str, TranspositionTable] = {}


def load_board(snapshot: BoardSnapshot) -> Board:
    try:
        return Board.from_snapshot(snapshot.model_dump())
    except InvalidSnapshot as e:
        raise HTTPException(status_code=400, detail=str(e))


def move_response(move, board: Board) -> MoveResponse:
    return MoveResponse(move=printer(move), board=BoardSnapshot(**board.snapshot()), winner=board.winner())


@router.get("/board/initial", response_model=BoardSnapshot)
async def initial_board():
    return BoardSnapshot(**Board().snapshot())


@router.post("/moves/", response_model=MoveResponse)
async def apply_move(request: MoveRequest):
    board = load_board(request.board)
    if board.winner() is not None:
        raise HTTPException(status_code=400, detail="Game is already over")
    try:
        move = parse(request.move)
        board.integrate(move)
    except NotationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IllegalMove as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "reason": e.reason.value})
    return move_response(move, board)


@router.post("/bot-move/", response_model=MoveResponse)
async def get_bot_move(request: BotMoveRequest):
    board = load_board(request.board)
    if board.winner() is not None:
        raise HTTPException(status_code=400, detail="Game is already over")

    settings = get_settings()
    heuristic = get_heuristic(request.heuristic, settings.wall_weight)
    if request.algorithm == "minimax":
        table = SEARCH_TABLES.setdefault(request.heuristic, TranspositionTable(settings.table_size))
        move = negamax_root(table, board, request.depth or settings.search_depth, heuristic)
    elif request.algorithm == "heuristic":
        move = HeuristicPlayer(heuristic=heuristic, board=board).choose(board)
    else:
        move = RandomPlayer(seed=request.seed, board=board).choose(board)

    logger.info("bot-move %s: %s", request.algorithm, printer(move))
    board.integrate(move)
    return move_response(move, board)
