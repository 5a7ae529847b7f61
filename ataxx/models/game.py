# ataxx/models/game.py
from pydantic import BaseModel
from typing import List, Optional


class MoveRecord(BaseModel):
    color: str
    move: str


class GameRecord(BaseModel):
    blocks: List[str] = []
    moves: List[MoveRecord] = []
    winner: Optional[str] = None
    red_pieces: int = 0
    blue_pieces: int = 0
    finished: bool = False
