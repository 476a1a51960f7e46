from patterndb.engine.heuristic.evaluator import HeuristicEvaluator, manhattan

__all__ = ["HeuristicEvaluator", "manhattan"]
