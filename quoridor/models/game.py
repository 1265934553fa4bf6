# quoridor/models/game.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Tuple


class Wall(BaseModel):
    orientation: Literal["horizontal", "vertical"]
    x: int = Field(ge=1, le=8)
    y: int = Field(ge=1, le=8)


class BoardSnapshot(BaseModel):
    player: int = Field(ge=0, le=1)
    positions: List[Tuple[int, int]] = Field(min_length=2, max_length=2)
    walls_left: List[int] = Field(min_length=2, max_length=2)
    walls: List[Wall] = []


class MoveRequest(BaseModel):
    board: BoardSnapshot
    move: str


class BotMoveRequest(BaseModel):
    board: BoardSnapshot
    algorithm: Literal["minimax", "heuristic", "random"] = "minimax"
    depth: Optional[int] = Field(default=None, ge=1, le=4)
    heuristic: Literal["flow", "resistance"] = "flow"
    seed: Optional[int] = None


class MoveResponse(BaseModel):
    move: str
    board: BoardSnapshot
    winner: Optional[int] = None
