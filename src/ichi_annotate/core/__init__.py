"""Core domain services for parsing, annotating and rendering analyses."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "Alternative",
    "DictionaryLoadError",
    "FuriganaDictionary",
    "FuriganaIndex",
    "FuriganaSegment",
    "MarkdownRenderer",
    "ResponseParser",
    "Romanizer",
    "RubyAnnotator",
    "SentenceAnalysis",
    "WordAnalysis",
]


def __getattr__(name: str) -> Any:  # pragma: no cover - thin lazy import layer
    if name in __all__:
        module_map = {
            "DictionaryLoadError": "dictionary",
            "FuriganaDictionary": "dictionary",
            "FuriganaIndex": "dictionary",
            "MarkdownRenderer": "markdown",
            "ResponseParser": "parser",
            "Romanizer": "transliteration",
            "RubyAnnotator": "ruby",
            "Alternative": "models",
            "FuriganaSegment": "models",
            "SentenceAnalysis": "models",
            "WordAnalysis": "models",
        }
        module_name = module_map[name]
        module = import_module(f"{__name__}.{module_name}")
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:  # pragma: no cover - aids interactive use
    return sorted(__all__ + list(globals().keys()))
