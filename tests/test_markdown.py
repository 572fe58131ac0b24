from __future__ import annotations

from ichi_annotate.core.markdown import DEFAULT_PLACEHOLDER, MarkdownRenderer, bracket_form, render
from ichi_annotate.core.models import Alternative, SentenceAnalysis, WordAnalysis


def test_empty_words_render_placeholder_only() -> None:
    analysis = SentenceAnalysis(original="テスト")

    output = render(analysis, "テスト")

    assert output == f"> [!IchiMoe]- テスト\n> {DEFAULT_PLACEHOLDER}\n\n"
    assert "> - " not in output


def test_single_reading_words_use_bracket_form_without_annotation() -> None:
    analysis = SentenceAnalysis(
        original="日本語の勉強",
        words=[
            WordAnalysis("日本語", "にほんご", ["(n) Japanese (language)"]),
            WordAnalysis("の", None, ["(prt) possessive", "(prt) nominaliser"]),
        ],
    )

    output = render(analysis, "日本語の勉強")

    assert output.splitlines() == [
        "> [!IchiMoe]- 日本語の勉強",
        "> - 日本語 【にほんご】",
        ">   - (n) Japanese (language)",
        "> - の",
        ">   - (prt) possessive",
        ">   - (prt) nominaliser",
        "",
    ]
    assert output.endswith("\n\n")


def test_annotated_word_replaces_bracket_form() -> None:
    analysis = SentenceAnalysis(
        original="日本語",
        words=[WordAnalysis("日本語", "にほんご", ["Japanese"])],
    )

    output = render(analysis, "{日本|にほん}{語|ご}", ["{日本|にほん}{語|ご}"])

    assert output.splitlines()[:2] == [
        "> [!IchiMoe]- {日本|にほん}{語|ご}",
        "> - {日本|にほん}{語|ご}",
    ]


def test_multi_alternative_word_nests_labels_and_definitions() -> None:
    word = WordAnalysis(
        "中",
        alternatives=[
            Alternative("中 【ちゅう】", ["(n) medium", "(n) middle"], "中", "ちゅう"),
            Alternative("中 【じゅう】", ["(suf) throughout"], "中", "じゅう"),
        ],
    )
    analysis = SentenceAnalysis(original="中", words=[word])

    output = MarkdownRenderer(callout="Ichi").render(analysis, "中", [None])

    assert output.splitlines() == [
        "> [!Ichi]- 中",
        "> - 中",
        ">   - 中 【ちゅう】",
        ">     - (n) medium",
        ">     - (n) middle",
        ">   - 中 【じゅう】",
        ">     - (suf) throughout",
        "",
    ]


def test_bracket_form_without_reading_is_bare_word() -> None:
    assert bracket_form("です", None) == "です"
    assert bracket_form("猫", "ねこ") == "猫 【ねこ】"
