"""Data models shared across the application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


@dataclass(slots=True, frozen=True)
class FuriganaSegment:
    """A run of headword characters and the reading printed above it."""

    text: str
    reading: Optional[str] = None


FuriganaEntry = Tuple[FuriganaSegment, ...]
"""Segments whose concatenated ``text`` equals the dictionary headword."""


def entry_text(entry: Sequence[FuriganaSegment]) -> str:
    return "".join(segment.text for segment in entry)


@dataclass(slots=True)
class Alternative:
    """One homograph reading of a word together with its own definitions."""

    label: str
    """Display string such as ``"中 【ちゅう】"``."""

    definitions: List[str]
    word: str = ""
    reading: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "word": self.word,
            "reading": self.reading,
            "definitions": list(self.definitions),
        }


@dataclass(slots=True)
class WordAnalysis:
    """A single segmented unit of the analysed sentence.

    Either ``reading``/``definitions`` (single reading) or ``alternatives``
    (homographs) is populated, never both.
    """

    word: str
    reading: Optional[str] = None
    definitions: List[str] = field(default_factory=list)
    alternatives: Optional[List[Alternative]] = None

    def __post_init__(self) -> None:
        if not self.word:
            raise ValueError("word must not be empty")
        if self.alternatives is not None:
            if not self.alternatives:
                raise ValueError("alternatives must hold at least one entry")
            if self.reading is not None or self.definitions:
                raise ValueError("alternatives cannot be combined with reading/definitions")
            if any(not alternative.definitions for alternative in self.alternatives):
                raise ValueError("every alternative needs at least one definition")

    @property
    def is_multi(self) -> bool:
        return self.alternatives is not None

    def to_dict(self) -> Dict[str, Any]:
        if self.alternatives is not None:
            return {
                "word": self.word,
                "alternatives": [alt.to_dict() for alt in self.alternatives],
            }
        return {
            "word": self.word,
            "reading": self.reading,
            "definitions": list(self.definitions),
        }


@dataclass(slots=True)
class SentenceAnalysis:
    """The parsed result for one analysis request."""

    original: str
    romanization: Optional[str] = None
    words: List[WordAnalysis] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "romanization": self.romanization,
            "words": [word.to_dict() for word in self.words],
        }


@dataclass(slots=True, frozen=True)
class LiteralPiece:
    text: str


@dataclass(slots=True, frozen=True)
class AnnotatedPiece:
    entry: FuriganaEntry


Piece = Union[LiteralPiece, AnnotatedPiece]


__all__ = [
    "Alternative",
    "AnnotatedPiece",
    "FuriganaEntry",
    "FuriganaSegment",
    "LiteralPiece",
    "Piece",
    "SentenceAnalysis",
    "WordAnalysis",
    "entry_text",
]
