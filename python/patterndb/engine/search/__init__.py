from patterndb.engine.search.ida_star import IDAStarSearcher, SearchResult, SearchStats

__all__ = ["IDAStarSearcher", "SearchResult", "SearchStats"]
