"""Splice furigana readings onto the matching spans of a sentence."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .models import AnnotatedPiece, FuriganaEntry, FuriganaSegment, LiteralPiece, Piece, entry_text

RUBY_STYLES = ("html", "braces")


def trim_entry(entry: Sequence[FuriganaSegment]) -> Optional[FuriganaEntry]:
    """Drop kana-only segments before the first and after the last reading.

    Returns ``None`` when no segment carries a reading, or when the kept core
    spells nothing to match.
    """

    indexes = [index for index, segment in enumerate(entry) if segment.reading]
    if not indexes:
        return None
    core = tuple(entry[indexes[0] : indexes[-1] + 1])
    if not entry_text(core):
        return None
    return core


def _append_literal(pieces: List[Piece], text: str) -> None:
    if not text:
        return
    if pieces and isinstance(pieces[-1], LiteralPiece):
        pieces[-1] = LiteralPiece(pieces[-1].text + text)
    else:
        pieces.append(LiteralPiece(text))


def _splice(pieces: Sequence[Piece], entry: FuriganaEntry) -> List[Piece]:
    base = entry_text(entry)
    result: List[Piece] = []
    for piece in pieces:
        if not isinstance(piece, LiteralPiece):
            result.append(piece)
            continue
        text = piece.text
        start = 0
        index = text.find(base)
        while index != -1:
            _append_literal(result, text[start:index])
            result.append(AnnotatedPiece(entry))
            start = index + len(base)
            index = text.find(base, start)
        _append_literal(result, text[start:])
    return result


def split_sentence(sentence: str, entries: Iterable[Sequence[FuriganaSegment]]) -> List[Piece]:
    """Break ``sentence`` into literal text and furigana-annotated pieces.

    Entries are trimmed to their reading-bearing core and applied longest
    first, so a compound is never fragmented by a shorter word it contains.
    Every occurrence of a headword receives the same reading.
    """

    cores = [core for core in (trim_entry(entry) for entry in entries) if core]
    cores.sort(key=lambda core: len(entry_text(core)), reverse=True)

    pieces: List[Piece] = []
    _append_literal(pieces, sentence)
    for core in cores:
        pieces = _splice(pieces, core)
    return pieces


def render_segment(segment: FuriganaSegment, style: str = "html") -> str:
    if not segment.reading:
        return segment.text
    if style == "braces":
        return f"{{{segment.text}|{segment.reading}}}"
    return f"<ruby>{segment.text}<rt>{segment.reading}</rt></ruby>"


def render_pieces(pieces: Iterable[Piece], style: str = "html") -> str:
    parts: List[str] = []
    for piece in pieces:
        if isinstance(piece, LiteralPiece):
            parts.append(piece.text)
        else:
            parts.extend(render_segment(segment, style) for segment in piece.entry)
    return "".join(parts)


def plain_text(pieces: Iterable[Piece]) -> str:
    """Concatenate pieces with every reading removed."""

    return "".join(
        piece.text if isinstance(piece, LiteralPiece) else entry_text(piece.entry)
        for piece in pieces
    )


class RubyAnnotator:
    """Render sentences with inline ruby markup."""

    def __init__(self, style: str = "html") -> None:
        if style not in RUBY_STYLES:
            raise ValueError(f"Unknown ruby style {style!r}; expected one of {RUBY_STYLES}")
        self.style = style

    def annotate(self, sentence: str, entries: Iterable[Sequence[FuriganaSegment]]) -> str:
        return render_pieces(split_sentence(sentence, entries), self.style)


def annotate(sentence: str, entries: Iterable[Sequence[FuriganaSegment]], style: str = "html") -> str:
    return RubyAnnotator(style).annotate(sentence, entries)


__all__ = [
    "RUBY_STYLES",
    "RubyAnnotator",
    "annotate",
    "plain_text",
    "render_pieces",
    "render_segment",
    "split_sentence",
    "trim_entry",
]
