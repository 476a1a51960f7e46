from patterndb.engine.pathreplay.reconstructor import reconstruct_path

__all__ = ["reconstruct_path"]
