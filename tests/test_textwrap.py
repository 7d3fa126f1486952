from __future__ import annotations

from dlgvn.scene.model import DialogueType
from dlgvn.ui.textwrap import MAX_WIDTH, wrap_lines, wrap_text_generic


def fake_measure_factory(char_widths: dict[str, int], default: int = 10):
    def measure(s: str) -> int:
        w = 0
        for ch in s:
            w += char_widths.get(ch, default)
        return w
    return measure


def test_wrap_cjk_char_based():
    # Each Chinese char = 12px, max_width 36 -> 3 chars per line
    measure = fake_measure_factory({}, default=12)
    text = "你好世界再见"
    lines = wrap_text_generic(text, measure, 36)
    assert lines == ["你好世", "界再见"]


def test_wrap_word_based():
    # "hello" (25px) exceeds 15 -> each word alone in a line
    measure = fake_measure_factory({" ": 5}, default=5)
    lines = wrap_text_generic("hello world test", measure, 15)
    assert lines == ["hello", "world", "test"]


def test_wrap_mixed_newlines():
    measure = fake_measure_factory({}, default=10)
    lines = wrap_text_generic("第一行\n\nthird line", measure, 100)
    assert lines == ["第一行", "", "third line"]


def test_wrap_forced_char_mode_splits_latin_words():
    measure = fake_measure_factory({}, default=10)
    assert wrap_text_generic("abcdef", measure, 30, by_char=True) == ["abc", "def"]


def test_wrap_lines_segments_join_to_display_text():
    # 10px per char, dialogue box 420px -> 42 chars per line
    measure = fake_measure_factory({}, default=10)
    text = "Guys, guys, so um yesterday I learned that it is possible to like put a game in the player."
    segments = wrap_lines(text, DialogueType.DIALOGUE, "en", measure=measure)
    assert len(segments) > 1
    assert all(seg.endswith("\n") for seg in segments[:-1])
    assert not segments[-1].endswith("\n")
    joined = "".join(segments)
    assert joined.replace("\n", " ") == text
    assert all(measure(line) <= MAX_WIDTH[DialogueType.DIALOGUE] for line in joined.split("\n"))


def test_wrap_lines_single_segment():
    measure = fake_measure_factory({}, default=10)
    assert wrap_lines("Hi", DialogueType.DIALOGUE, "en", measure=measure) == ["Hi"]


def test_wrap_lines_ja_tag_wraps_per_character():
    measure = fake_measure_factory({}, default=100)
    # 400px book width -> 4 chars per line
    segments = wrap_lines("abcdefgh", DialogueType.BOOK, "ja", measure=measure)
    assert segments == ["abcd\n", "efgh"]


def test_wrap_lines_empty_text():
    assert wrap_lines("", DialogueType.NARRATION, "en", measure=len) == []


def test_wrap_lines_is_deterministic():
    measure = fake_measure_factory({}, default=9)
    text = "the same input always gives the same segments back to the caller"
    a = wrap_lines(text, DialogueType.NARRATION, "en", measure=measure)
    b = wrap_lines(text, DialogueType.NARRATION, "en", measure=measure)
    assert a == b
