from patterndb.engine.gamesolver.solver import (
    SolveResult,
    SolveStatus,
    Solver,
    solve_board,
)

__all__ = ["SolveResult", "SolveStatus", "Solver", "solve_board"]
