"""High level services that orchestrate the application workflow."""

from .client import FetchError, IchiMoeClient
from .pipeline import AnalysisPipeline, AnalysisResult, EmptyInputError, PipelineDependencies

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "EmptyInputError",
    "FetchError",
    "IchiMoeClient",
    "PipelineDependencies",
]
