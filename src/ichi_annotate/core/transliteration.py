"""Romanization helpers built on :mod:`pykakasi`."""

from __future__ import annotations

from typing import List, Optional

from pykakasi import kakasi


class Romanizer:
    """Produce a Hepburn transliteration of Japanese text."""

    def __init__(self) -> None:
        self._kakasi = kakasi()

    def tokens(self, text: str) -> List[str]:
        return [part["hepburn"] for part in self._kakasi.convert(text) if part.get("hepburn")]

    def romanize(self, text: str) -> Optional[str]:
        if not text or not text.strip():
            return None
        words = [token.strip() for token in self.tokens(text)]
        words = [word for word in words if word]
        if not words:
            return None
        return " ".join(words)


__all__ = ["Romanizer"]
