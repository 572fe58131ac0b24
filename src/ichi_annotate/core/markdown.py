"""Markdown rendering of a sentence analysis as a foldable callout."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import SentenceAnalysis, WordAnalysis

DEFAULT_CALLOUT = "IchiMoe"
DEFAULT_PLACEHOLDER = (
    "*No word definitions found. The text might be too complex or "
    "ichi.moe might be having issues.*"
)
_INDENT = "  "


def bracket_form(word: str, reading: Optional[str]) -> str:
    return f"{word} 【{reading}】" if reading else word


def _line(depth: int, text: str) -> str:
    return f"> {_INDENT * depth}- {text}"


class MarkdownRenderer:
    """Format a :class:`SentenceAnalysis` as block-quoted nested bullets."""

    def __init__(self, callout: str = DEFAULT_CALLOUT, placeholder: str = DEFAULT_PLACEHOLDER) -> None:
        self.callout = callout
        self.placeholder = placeholder

    def render(
        self,
        analysis: SentenceAnalysis,
        annotated_sentence: str,
        annotated_words: Sequence[Optional[str]] = (),
    ) -> str:
        """Return the callout block, ending with a blank line.

        ``annotated_words`` runs parallel to ``analysis.words``; a missing or
        ``None`` item falls back to the ``word 【reading】`` notation.
        """

        lines = [f"> [!{self.callout}]- {annotated_sentence}"]
        if analysis.words:
            for index, word in enumerate(analysis.words):
                annotated = annotated_words[index] if index < len(annotated_words) else None
                lines.extend(self._word_lines(word, annotated))
        else:
            lines.append(f"> {self.placeholder}")
        return "\n".join(lines) + "\n\n"

    @staticmethod
    def _word_lines(word: WordAnalysis, annotated: Optional[str]) -> List[str]:
        if word.alternatives is not None:
            lines = [_line(0, word.word)]
            for alternative in word.alternatives:
                lines.append(_line(1, alternative.label))
                lines.extend(_line(2, definition) for definition in alternative.definitions)
            return lines
        lines = [_line(0, annotated or bracket_form(word.word, word.reading))]
        lines.extend(_line(1, definition) for definition in word.definitions)
        return lines


def render(
    analysis: SentenceAnalysis,
    annotated_sentence: str,
    annotated_words: Sequence[Optional[str]] = (),
) -> str:
    return MarkdownRenderer().render(analysis, annotated_sentence, annotated_words)


__all__ = ["MarkdownRenderer", "bracket_form", "render"]
