"""Annotate Japanese sentences with ichi.moe glosses and furigana.

The usual entry point is :class:`AnalysisPipeline`::

    pipeline = AnalysisPipeline(AppConfig())
    print(pipeline.analyze("日本語の勉強").markdown)
"""

from importlib import metadata

from .config import AppConfig
from .services.client import FetchError
from .services.pipeline import AnalysisPipeline, AnalysisResult, EmptyInputError

DISTRIBUTION = "ichi-annotate"


def _installed_version() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:  # pragma: no cover - source checkout
        return "0.0.0"


__version__ = _installed_version()

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "AppConfig",
    "EmptyInputError",
    "FetchError",
    "__version__",
]
