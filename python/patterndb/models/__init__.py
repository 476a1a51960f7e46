from patterndb.models.board import Board, Direction
from patterndb.models.database import Fingerprint, PatternDatabase, TileGroup

__all__ = ["Board", "Direction", "Fingerprint", "PatternDatabase", "TileGroup"]
