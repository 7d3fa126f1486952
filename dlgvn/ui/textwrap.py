from __future__ import annotations

from typing import Callable, List, Optional

from dlgvn.scene.model import DialogueType

# Text area width per box type, in logical pixels.
MAX_WIDTH = {
    DialogueType.DIALOGUE: 420,
    DialogueType.NARRATION: 440,
    DialogueType.BOOK: 400,
}

# Font tags whose text wraps per character instead of per word.
CHAR_WRAP_FONTS = {"ja", "zh", "zh_tw", "zh_cn"}


def _has_cjk(s: str) -> bool:
    return any("\u3040" <= ch <= "\u30ff" or "\u4e00" <= ch <= "\u9fff" for ch in s)


def wrap_text_generic(text: str, measure: Callable[[str], int], max_width: int,
                      by_char: Optional[bool] = None) -> List[str]:
    """Wrap text into lines that fit within max_width using a width measure.

    - by_char=True wraps per character, False per space-separated word.
    - by_char=None decides per paragraph: CJK text by character, else by word.

    Explicit newlines are kept; empty paragraphs become empty lines.
    """
    paragraphs = text.split("\n")
    out: List[str] = []
    for para in paragraphs:
        if para == "":
            out.append("")
            continue
        char_mode = _has_cjk(para) if by_char is None else by_char
        if char_mode:
            cur = ""
            for ch in para:
                test = cur + ch
                if measure(test) <= max_width:
                    cur = test
                else:
                    if cur:
                        out.append(cur)
                    cur = ch
            if cur:
                out.append(cur)
        else:
            words = para.split()
            cur = ""
            for w in words:
                test = (cur + " " + w).strip()
                if measure(test) <= max_width:
                    cur = test
                else:
                    if cur:
                        out.append(cur)
                    cur = w
            if cur:
                out.append(cur)
    return out


def _font_measure(font: str, dialogue_type: DialogueType) -> Callable[[str], int]:
    from dlgvn.engine.font_utils import get_font  # local import to avoid test deps

    pg_font = get_font(font, dialogue_type)

    def measure(s: str) -> int:
        return pg_font.size(s)[0]
    return measure


def wrap_lines(text: str, dialogue_type: DialogueType, font: str,
               measure: Optional[Callable[[str], int]] = None) -> List[str]:
    """Split a raw line into displayable segments.

    Every segment but the last ends with a newline, so joining the segments
    gives the text as it appears in the box.
    """
    if not text:
        return []
    if measure is None:
        measure = _font_measure(font, dialogue_type)
    by_char = True if font.lower() in CHAR_WRAP_FONTS else None
    lines = wrap_text_generic(text, measure, MAX_WIDTH.get(dialogue_type, 420), by_char=by_char)
    return [line + "\n" for line in lines[:-1]] + lines[-1:]
