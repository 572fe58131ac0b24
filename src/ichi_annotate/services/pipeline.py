"""High level orchestration of the fetch -> parse -> annotate -> render pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..config import AppConfig
from ..core.dictionary import FuriganaDictionary
from ..core.markdown import MarkdownRenderer
from ..core.models import FuriganaEntry, SentenceAnalysis, WordAnalysis
from ..core.parser import ResponseParser
from ..core.ruby import RubyAnnotator
from ..core.transliteration import Romanizer
from .client import IchiMoeClient

logger = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    """Raised when there is no text to analyse."""


@dataclass
class PipelineDependencies:
    """Convenience container for the collaborating services."""

    client: IchiMoeClient
    parser: ResponseParser
    dictionary: FuriganaDictionary
    annotator: RubyAnnotator
    renderer: MarkdownRenderer
    romanizer: Romanizer | None = None


@dataclass
class AnalysisResult:
    analysis: SentenceAnalysis
    annotated_sentence: str
    markdown: str


class AnalysisPipeline:
    """Coordinates the individual processing components."""

    def __init__(self, config: AppConfig, deps: PipelineDependencies | None = None) -> None:
        self.config = config
        self.client = deps.client if deps else IchiMoeClient(config.service)
        self.parser = deps.parser if deps else ResponseParser(
            broad_fallback=config.parser.broad_fallback
        )
        self.dictionary = deps.dictionary if deps else self._load_dictionary()
        self.annotator = deps.annotator if deps else RubyAnnotator(config.render.ruby_style)
        self.renderer = deps.renderer if deps else MarkdownRenderer(
            callout=config.render.callout,
            placeholder=config.render.placeholder,
        )
        if deps:
            self.romanizer = deps.romanizer
        else:
            self.romanizer = Romanizer() if config.analysis.romanize_fallback else None

    def _load_dictionary(self) -> FuriganaDictionary:
        dictionary = FuriganaDictionary(self.config.dictionary.path)
        if dictionary.path is not None:
            dictionary.reload()
        return dictionary

    def dictionary_status(self) -> str:
        """Short human readable description of the furigana dataset state."""

        if self.dictionary.available:
            return f"Furigana dictionary loaded: {len(self.dictionary)} entries"
        if self.dictionary.load_error is not None:
            return f"Furigana dictionary unavailable: {self.dictionary.load_error}"
        return "Furigana dictionary not configured"

    def analyze(self, text: str) -> AnalysisResult:
        text = (text or "").strip()
        if not text:
            raise EmptyInputError("No text to analyze")

        logger.info("Analyzing %r", text)
        html = self.client.fetch(text)
        analysis = self.parser.parse(html, text)
        if analysis.romanization is None and self.romanizer is not None:
            analysis.romanization = self.romanizer.romanize(text)
        return self.render(analysis)

    def render(self, analysis: SentenceAnalysis) -> AnalysisResult:
        entries = self._sentence_entries(analysis.words)
        annotated_sentence = self.annotator.annotate(analysis.original, entries)
        annotated_words = [self._annotate_word(word) for word in analysis.words]
        markdown = self.renderer.render(analysis, annotated_sentence, annotated_words)
        return AnalysisResult(
            analysis=analysis,
            annotated_sentence=annotated_sentence,
            markdown=markdown,
        )

    def _sentence_entries(self, words: List[WordAnalysis]) -> List[FuriganaEntry]:
        entries: List[FuriganaEntry] = []
        for word in words:
            if word.alternatives is not None:
                first = word.alternatives[0]
                entry = self.dictionary.lookup(first.word or word.word, first.reading)
            else:
                entry = self.dictionary.lookup(word.word, word.reading)
            if entry is not None:
                entries.append(entry)
        return entries

    def _annotate_word(self, word: WordAnalysis) -> Optional[str]:
        if word.alternatives is not None or not word.reading:
            return None
        entry = self.dictionary.lookup(word.word, word.reading)
        if entry is None:
            return None
        return self.annotator.annotate(word.word, [entry])


__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "EmptyInputError",
    "PipelineDependencies",
]
