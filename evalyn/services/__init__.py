from .backend import AnalysisBackend, HttpAnalysisBackend

__all__ = ["AnalysisBackend", "HttpAnalysisBackend"]
