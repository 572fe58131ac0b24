import ichi_annotate.core.transliteration as transliteration


class DummyKakasi:
    def __init__(self, parts):
        self._parts = parts
        self.calls = []

    def convert(self, text):
        self.calls.append(text)
        return list(self._parts)


def test_romanize_joins_hepburn_tokens(monkeypatch):
    parts = [
        {"orig": "日本語", "hepburn": "nihongo"},
        {"orig": "の", "hepburn": "no"},
        {"orig": "。", "hepburn": ""},
        {"orig": "勉強", "hepburn": " benkyou "},
    ]
    monkeypatch.setattr(transliteration, "kakasi", lambda: DummyKakasi(parts))

    romanizer = transliteration.Romanizer()

    assert romanizer.romanize("日本語の。勉強") == "nihongo no benkyou"


def test_romanize_blank_text_returns_none(monkeypatch):
    dummy = DummyKakasi([])
    monkeypatch.setattr(transliteration, "kakasi", lambda: dummy)

    romanizer = transliteration.Romanizer()

    assert romanizer.romanize("   ") is None
    assert romanizer.romanize("？") is None
    assert dummy.calls == ["？"]
