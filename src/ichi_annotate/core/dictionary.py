"""Furigana dictionary built from the JmdictFurigana dataset."""

from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .models import FuriganaEntry, FuriganaSegment, entry_text

logger = logging.getLogger(__name__)

IndexKey = Tuple[str, str]


class DictionaryLoadError(RuntimeError):
    """Raised when the furigana dataset is missing, unreadable or malformed."""


class FuriganaIndex(Mapping[IndexKey, FuriganaEntry]):
    """Read-only mapping of ``(headword, reading)`` to furigana segments."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[IndexKey, FuriganaEntry] | None = None) -> None:
        self._entries: Mapping[IndexKey, FuriganaEntry] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, key: IndexKey) -> FuriganaEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[IndexKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, word: str, reading: Optional[str]) -> Optional[FuriganaEntry]:
        if not word or not reading:
            return None
        return self._entries.get((word.strip(), reading.strip()))

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "FuriganaIndex":
        entries: Dict[IndexKey, FuriganaEntry] = {}
        skipped = 0
        for record in records:
            parsed = _parse_record(record)
            if parsed is None:
                skipped += 1
                continue
            key, entry = parsed
            entries.setdefault(key, entry)
        if skipped:
            logger.debug("Skipped %d malformed furigana records", skipped)
        return cls(entries)


def _parse_record(record: Any) -> Optional[Tuple[IndexKey, FuriganaEntry]]:
    if not isinstance(record, dict):
        return None
    text = record.get("text")
    reading = record.get("reading")
    segments = record.get("furigana")
    if not isinstance(text, str) or not isinstance(reading, str) or not isinstance(segments, list):
        return None
    entry = []
    for segment in segments:
        if not isinstance(segment, dict) or not isinstance(segment.get("ruby"), str):
            return None
        if not segment["ruby"]:
            return None
        rt = segment.get("rt")
        reading_text = rt if isinstance(rt, str) and rt else None
        entry.append(FuriganaSegment(text=segment["ruby"], reading=reading_text))
    furigana = tuple(entry)
    if not text or entry_text(furigana) != text:
        return None
    return (text, reading), furigana


def load_furigana_index(path: Path) -> FuriganaIndex:
    """Read a JmdictFurigana JSON file (``.gz`` compressed or plain)."""

    path = Path(path)
    opener = gzip.open if path.suffix == ".gz" else open
    try:
        with opener(path, "rt", encoding="utf-8-sig") as handle:
            records = json.load(handle)
    except (OSError, EOFError, UnicodeDecodeError, ValueError) as exc:
        raise DictionaryLoadError(f"Failed to load furigana dictionary {path}: {exc}") from exc
    if not isinstance(records, list):
        raise DictionaryLoadError(f"Unexpected furigana dataset layout in {path}")
    return FuriganaIndex.from_records(records)


class FuriganaDictionary:
    """Owns the current :class:`FuriganaIndex` and swaps it on reload."""

    def __init__(self, path: Path | None = None, index: FuriganaIndex | None = None) -> None:
        self.path = Path(path) if path else None
        self._index = index if index is not None else FuriganaIndex()
        self.load_error: DictionaryLoadError | None = None
        self._warned = False

    @property
    def index(self) -> FuriganaIndex:
        return self._index

    @property
    def available(self) -> bool:
        return len(self._index) > 0

    def __len__(self) -> int:
        return len(self._index)

    def reload(self) -> bool:
        """Rebuild the index from ``path``; keep the old one if that fails."""

        if self.path is None:
            self.load_error = DictionaryLoadError("No furigana dictionary configured")
            return False
        try:
            index = load_furigana_index(self.path)
        except DictionaryLoadError as exc:
            self.load_error = exc
            if not self._warned:
                logger.warning("%s; readings will use bracket notation", exc)
                self._warned = True
            return False
        self._index = index
        self.load_error = None
        self._warned = False
        logger.info("Loaded %d furigana entries from %s", len(index), self.path)
        return True

    def lookup(self, word: str, reading: Optional[str]) -> Optional[FuriganaEntry]:
        return self._index.lookup(word, reading)


__all__ = [
    "DictionaryLoadError",
    "FuriganaDictionary",
    "FuriganaIndex",
    "load_furigana_index",
]
