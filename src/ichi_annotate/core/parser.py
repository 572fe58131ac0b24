"""Turn ichi.moe result pages into :class:`SentenceAnalysis` objects."""

from __future__ import annotations

import logging
import re
import warnings
from typing import Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, FeatureNotFound, Tag, XMLParsedAsHTMLWarning

from .models import Alternative, SentenceAnalysis, WordAnalysis

logger = logging.getLogger(__name__)

_ORDINAL_RE = re.compile(r"^\s*\d+\.\s*")
_LABEL_RE = re.compile(r"^([^【]+)(?:【([^】]+)】)?")
NOTE_MARKER = "☝️"


def _soup_from_html(html: str) -> BeautifulSoup:
    for parser in ("lxml", "html.parser"):
        try:
            with warnings.catch_warnings():
                warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
                return BeautifulSoup(html, parser)
        except FeatureNotFound:
            continue
    return BeautifulSoup(html, "html.parser")


def _text(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    return " ".join(node.get_text().split())


def strip_ordinal(label: str) -> str:
    """Remove a leading ``"1. "`` style counter from a headword label."""

    return _ORDINAL_RE.sub("", label.strip(), count=1)


def parse_label(label: str) -> Tuple[str, Optional[str]]:
    """Split ``"語 【ご】"`` into ``("語", "ご")``.

    Labels without a bracketed reading return ``None`` for the reading. A label
    the pattern cannot split at all is returned whole as the word.
    """

    text = strip_ordinal(label)
    match = _LABEL_RE.match(text)
    if match is None:
        return text, None
    word = match.group(1).strip()
    reading = match.group(2).strip() if match.group(2) else None
    return word, reading or None


class ResponseParser:
    """Extract words, readings and glosses from the service's HTML."""

    def __init__(self, broad_fallback: bool = True) -> None:
        self.broad_fallback = broad_fallback

    def parse(self, html: str, original_text: str) -> SentenceAnalysis:
        soup = _soup_from_html(html or "")
        analysis = SentenceAnalysis(
            original=original_text,
            romanization=self._extract_romanization(soup),
        )

        row = self._first_visible_row(soup)
        if row is not None:
            analysis.words = self._parse_blocks(row.select(".gloss"), dedupe=False)
        else:
            logger.debug("No visible gloss row in response for %r", original_text)

        if not analysis.words and self.broad_fallback:
            analysis.words = self._parse_blocks(soup.select(".gloss"), dedupe=True)
            if analysis.words:
                logger.debug("Recovered %d words from fallback scan", len(analysis.words))
        if not analysis.words:
            logger.debug("Response for %r yielded no words", original_text)
        return analysis

    @staticmethod
    def _extract_romanization(soup: BeautifulSoup) -> Optional[str]:
        parts = [_text(node) for node in soup.select(".ds-text .ds-word")]
        parts = [part for part in parts if part]
        return " ".join(parts) if parts else None

    @staticmethod
    def _first_visible_row(soup: BeautifulSoup) -> Optional[Tag]:
        for row in soup.select(".gloss-row"):
            if "hidden" not in (row.get("class") or []):
                return row
        return None

    def _parse_blocks(self, blocks: Iterable[Tag], dedupe: bool) -> List[WordAnalysis]:
        words: List[WordAnalysis] = []
        for block in blocks:
            word = self._parse_block(block, dedupe)
            if word is not None:
                words.append(word)
        return words

    def _parse_block(self, block: Tag, dedupe: bool) -> Optional[WordAnalysis]:
        romanized = _text(block.select_one(".gloss-rtext em"))

        alternative_labels = self._alternative_labels(block)
        if len(alternative_labels) > 1:
            return self._parse_alternatives(alternative_labels, romanized, dedupe)

        label = (
            block.select_one("dl.alternatives > dt")
            or block.select_one(".gloss-content dt")
            or block.find("dt")
        )
        label_text = _text(label)
        if label_text:
            word, reading = parse_label(label_text)
        else:
            word, reading = romanized, None
        if not word:
            return None

        definitions = self._collect_definitions(block, dedupe)
        if not definitions:
            logger.debug("Dropping %r: no definitions", word)
            return None
        return WordAnalysis(word=word, reading=reading, definitions=definitions)

    @staticmethod
    def _alternative_labels(block: Tag) -> List[Tag]:
        container = block.select_one("dl.alternatives") or block.find("dl")
        if container is None:
            return []
        return container.find_all("dt", recursive=False)

    def _parse_alternatives(
        self, labels: Iterable[Tag], romanized: str, dedupe: bool
    ) -> Optional[WordAnalysis]:
        alternatives: List[Alternative] = []
        for label in labels:
            label_text = strip_ordinal(_text(label))
            if not label_text:
                continue
            body = label.find_next_sibling(["dt", "dd"])
            if body is None or body.name != "dd":
                continue
            definitions = self._collect_definitions(body, dedupe)
            if not definitions:
                continue
            word, reading = parse_label(label_text)
            alternatives.append(
                Alternative(label=label_text, definitions=definitions, word=word, reading=reading)
            )
        if not alternatives:
            return None
        word = alternatives[0].word or romanized
        if not word:
            return None
        return WordAnalysis(word=word, alternatives=alternatives)

    def _collect_definitions(self, scope: Tag, dedupe: bool) -> List[str]:
        definitions: List[str] = []
        for item in scope.find_all("li"):
            definition = self._definition_from_item(item)
            if not definition:
                continue
            if dedupe and definition in definitions:
                continue
            definitions.append(definition)
        return definitions

    @staticmethod
    def _definition_from_item(item: Tag) -> Optional[str]:
        gloss = _text(item.find(class_="gloss-desc", recursive=False))
        if not gloss:
            return None
        pos = _text(item.find(class_="pos-desc", recursive=False)).strip("[]").strip()
        definition = f"({pos}) {gloss}" if pos else gloss
        note = item.find(class_="sense-info-note", recursive=False)
        if note is not None:
            note_text = (note.get("title") or note.get("data-tooltip") or "").strip()
            if note_text:
                definition += f" ({NOTE_MARKER} {note_text})"
        return definition


def parse_response(html: str, original_text: str, broad_fallback: bool = True) -> SentenceAnalysis:
    return ResponseParser(broad_fallback=broad_fallback).parse(html, original_text)


__all__ = ["ResponseParser", "parse_label", "parse_response", "strip_ordinal"]
