from patterndb.engine.puzzlestate.state import PuzzleState

__all__ = ["PuzzleState"]
