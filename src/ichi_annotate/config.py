"""Application level configuration objects."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .core.markdown import DEFAULT_CALLOUT, DEFAULT_PLACEHOLDER

DICTIONARY_ENV_VAR = "ICHI_ANNOTATE_DICTIONARY"


def _dictionary_path_from_env() -> Optional[Path]:
    value = os.environ.get(DICTIONARY_ENV_VAR, "").strip()
    return Path(value).expanduser() if value else None


@dataclass(slots=True)
class ServiceConfig:
    """Where and how the analysis service is queried."""

    base_url: str = "https://ichi.moe"
    path: str = "/cl/qr/"
    timeout: float = 30.0
    """Request timeout in seconds, applied by the HTTP client only."""

    user_agent: str = "ichi-annotate"


@dataclass(slots=True)
class DictionaryConfig:
    """Configuration related to the furigana dataset."""

    path: Optional[Path] = field(default_factory=_dictionary_path_from_env)
    """JmdictFurigana JSON file, plain or gzip compressed."""


@dataclass(slots=True)
class ParserConfig:
    broad_fallback: bool = True
    """Scan every word block in the page when the first row yields nothing."""


@dataclass(slots=True)
class RenderConfig:
    """Visual configuration for the generated markdown."""

    callout: str = DEFAULT_CALLOUT
    ruby_style: str = "html"
    """``"html"`` for ``<ruby>`` tags or ``"braces"`` for ``{漢字|かんじ}``."""

    placeholder: str = DEFAULT_PLACEHOLDER


@dataclass(slots=True)
class AnalysisConfig:
    romanize_fallback: bool = True


@dataclass(slots=True)
class AppConfig:
    """Top level configuration container that can be expanded later."""

    service: ServiceConfig = field(default_factory=ServiceConfig)
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)


__all__ = [
    "AppConfig",
    "AnalysisConfig",
    "DictionaryConfig",
    "ParserConfig",
    "RenderConfig",
    "ServiceConfig",
]
