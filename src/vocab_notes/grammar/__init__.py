"""Remote grammar analysis: HTTP client, request queue and result formatting."""

from .client import EndpointRotation, GrammarAnalysisClient
from .formatter import complete_analysis, format_grammar_result
from .queue import AnalysisQueue

__all__ = [
    "AnalysisQueue",
    "EndpointRotation",
    "GrammarAnalysisClient",
    "complete_analysis",
    "format_grammar_result",
]
