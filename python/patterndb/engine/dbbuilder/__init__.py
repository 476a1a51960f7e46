from patterndb.engine.dbbuilder.builder import build_pattern_database, default_groups

__all__ = ["build_pattern_database", "default_groups"]
