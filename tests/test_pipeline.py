"""Tests for the analysis pipeline orchestration layer."""

from __future__ import annotations

from typing import List

import pytest

from ichi_annotate.config import AppConfig
from ichi_annotate.core.dictionary import FuriganaDictionary, FuriganaIndex
from ichi_annotate.core.markdown import MarkdownRenderer
from ichi_annotate.core.parser import ResponseParser
from ichi_annotate.core.ruby import RubyAnnotator
from ichi_annotate.services.client import FetchError
from ichi_annotate.services.pipeline import (
    AnalysisPipeline,
    EmptyInputError,
    PipelineDependencies,
)

PAGE = """
<html><body>
<div class="ds-text"><span class="ds-word">nihongo</span> <span class="ds-word">no</span>
<span class="ds-word">benkyō</span></div>
<div class="gloss-row"><ul class="gloss-all">
<li><div class="gloss"><div class="gloss-rtext"><em>nihongo</em></div>
<div class="gloss-content"><dl class="alternatives"><dt>日本語 【にほんご】</dt>
<dd><ol><li><span class="pos-desc">n</span> <span class="gloss-desc">Japanese (language)</span></li></ol></dd>
</dl></div></div></li>
<li><div class="gloss"><div class="gloss-rtext"><em>no</em></div>
<div class="gloss-content"><dl class="alternatives"><dt>の</dt>
<dd><ol><li><span class="pos-desc">prt</span> <span class="gloss-desc">possessive</span></li></ol></dd>
</dl></div></div></li>
<li><div class="gloss"><div class="gloss-rtext"><em>benkyō</em></div>
<div class="gloss-content"><dl class="alternatives"><dt>勉強 【べんきょう】</dt>
<dd><ol><li><span class="pos-desc">n</span> <span class="gloss-desc">study</span></li></ol></dd>
</dl></div></div></li>
</ul></div>
</body></html>
"""

MULTI_PAGE = """
<div class="gloss-row"><div class="gloss"><div class="gloss-content"><dl class="alternatives">
<dt>1. 中 【ちゅう】</dt><dd><ol><li><span class="gloss-desc">medium</span></li></ol></dd>
<dt>2. 中 【じゅう】</dt><dd><ol><li><span class="gloss-desc">throughout</span></li></ol></dd>
</dl></div></div></div>
"""

RECORDS = [
    {
        "text": "日本語",
        "reading": "にほんご",
        "furigana": [{"ruby": "日本", "rt": "にほん"}, {"ruby": "語", "rt": "ご"}],
    },
    {"text": "中", "reading": "じゅう", "furigana": [{"ruby": "中", "rt": "じゅう"}]},
]


class _FakeClient:
    def __init__(self, html: str = PAGE, error: Exception | None = None) -> None:
        self.html = html
        self.error = error
        self.calls: List[str] = []

    def fetch(self, text: str) -> str:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.html


class _FakeRomanizer:
    def romanize(self, text: str):
        return f"roman({text})"


def _build_pipeline(
    client: _FakeClient | None = None,
    records=RECORDS,
    style: str = "braces",
    romanizer=None,
) -> AnalysisPipeline:
    deps = PipelineDependencies(
        client=client or _FakeClient(),
        parser=ResponseParser(),
        dictionary=FuriganaDictionary(index=FuriganaIndex.from_records(records)),
        annotator=RubyAnnotator(style),
        renderer=MarkdownRenderer(),
        romanizer=romanizer,
    )
    return AnalysisPipeline(AppConfig(), deps=deps)


def test_analyze_produces_annotated_callout() -> None:
    pipeline = _build_pipeline()

    result = pipeline.analyze("日本語の勉強")

    assert result.analysis.romanization == "nihongo no benkyō"
    assert result.annotated_sentence == "{日本|にほん}{語|ご}の勉強"
    assert result.markdown.splitlines() == [
        "> [!IchiMoe]- {日本|にほん}{語|ご}の勉強",
        "> - {日本|にほん}{語|ご}",
        ">   - (n) Japanese (language)",
        "> - の",
        ">   - (prt) possessive",
        "> - 勉強 【べんきょう】",
        ">   - (n) study",
        "",
    ]


def test_missing_dictionary_entries_fall_back_to_brackets() -> None:
    pipeline = _build_pipeline(records=[])

    result = pipeline.analyze("日本語の勉強")

    assert result.annotated_sentence == "日本語の勉強"
    assert "> - 日本語 【にほんご】" in result.markdown.splitlines()


def test_first_alternative_reading_is_used_for_sentence() -> None:
    records = RECORDS + [
        {"text": "中", "reading": "ちゅう", "furigana": [{"ruby": "中", "rt": "ちゅう"}]}
    ]
    pipeline = _build_pipeline(client=_FakeClient(MULTI_PAGE), records=records)

    result = pipeline.analyze("中")

    assert result.annotated_sentence == "{中|ちゅう}"
    assert result.markdown.splitlines()[1:3] == ["> - 中", ">   - 中 【ちゅう】"]


def test_input_is_trimmed_before_fetch() -> None:
    client = _FakeClient()
    pipeline = _build_pipeline(client=client)

    result = pipeline.analyze("  日本語の勉強\n")

    assert client.calls == ["日本語の勉強"]
    assert result.analysis.original == "日本語の勉強"


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_input_is_rejected_before_fetch(text: str) -> None:
    client = _FakeClient()
    pipeline = _build_pipeline(client=client)

    with pytest.raises(EmptyInputError):
        pipeline.analyze(text)
    assert client.calls == []


def test_fetch_failure_propagates() -> None:
    pipeline = _build_pipeline(client=_FakeClient(error=FetchError("boom", status=500)))

    with pytest.raises(FetchError) as excinfo:
        pipeline.analyze("日本語")
    assert excinfo.value.status == 500


def test_unparseable_page_renders_placeholder() -> None:
    pipeline = _build_pipeline(client=_FakeClient("<html><body>maintenance</body></html>"))

    result = pipeline.analyze("日本語")

    assert result.analysis.words == []
    lines = result.markdown.splitlines()
    assert len(lines) == 3
    assert lines[2] == ""
    assert lines[1].startswith("> *No word definitions found")


def test_romanization_fallback_only_when_service_has_none() -> None:
    pipeline = _build_pipeline(client=_FakeClient(MULTI_PAGE), romanizer=_FakeRomanizer())
    assert pipeline.analyze("中").analysis.romanization == "roman(中)"

    pipeline = _build_pipeline(romanizer=_FakeRomanizer())
    assert pipeline.analyze("日本語の勉強").analysis.romanization == "nihongo no benkyō"


def test_dictionary_status_reports_entry_count() -> None:
    pipeline = _build_pipeline()

    assert pipeline.dictionary_status() == "Furigana dictionary loaded: 2 entries"


def test_default_pipeline_degrades_when_dictionary_is_missing(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr("ichi_annotate.services.pipeline.Romanizer", _FakeRomanizer)
    config = AppConfig()
    config.dictionary.path = tmp_path / "missing.json.gz"

    pipeline = AnalysisPipeline(config)
    pipeline.client = _FakeClient()

    assert not pipeline.dictionary.available
    assert pipeline.dictionary_status().startswith("Furigana dictionary unavailable")
    result = pipeline.analyze("日本語の勉強")
    assert "> - 日本語 【にほんご】" in result.markdown.splitlines()
    assert "<ruby>" not in result.markdown
