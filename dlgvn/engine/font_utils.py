from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pygame

from dlgvn.scene.model import DialogueType

FONT_SIZES = {
    DialogueType.DIALOGUE: 22,
    DialogueType.NARRATION: 22,
    DialogueType.BOOK: 20,
}
NAME_FONT_SIZE = 24

# bundled font files tried first, per locale tag
FONT_FILES: Dict[str, List[str]] = {
    "en": ["fonts/FOT-Skip Std B.otf", "fonts/NotoSans-Regular.ttf"],
    "ja": ["fonts/NotoSansJP-Regular.otf", "fonts/NotoSansCJK-Regular.ttc"],
    "zh": ["fonts/NotoSansSC-Regular.otf", "fonts/NotoSansCJK-Regular.ttc"],
}

SYSTEM_FAMILIES: Dict[str, List[str]] = {
    "en": ["Noto Sans", "DejaVu Sans", "Arial"],
    "ja": ["Noto Sans CJK JP", "Noto Sans JP", "Yu Gothic", "MS Gothic"],
    "zh": ["Noto Sans CJK SC", "Noto Sans SC", "Microsoft YaHei", "SimHei", "WenQuanYi Zen Hei"],
}

_fonts: Dict[Tuple[str, int], pygame.font.Font] = {}


def init_font(tag: str, size: int, font_path: Optional[str] = None) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    # 1) Explicit path
    if font_path:
        p = Path(font_path)
        if p.exists():
            return pygame.font.Font(str(p), size)
    # 2) Bundled fonts for the tag
    for rel in FONT_FILES.get(tag, FONT_FILES["en"]):
        p = Path(rel)
        if p.exists():
            try:
                return pygame.font.Font(str(p), size)
            except (OSError, pygame.error):
                continue
    # 3) System fonts, then pygame's default
    try:
        return pygame.font.SysFont(SYSTEM_FAMILIES.get(tag, SYSTEM_FAMILIES["en"]), size)
    except Exception:
        return pygame.font.Font(None, size)


def get_font(tag: str, dialogue_type: DialogueType = DialogueType.DIALOGUE, size: Optional[int] = None) -> pygame.font.Font:
    """Font for a locale tag, loaded once per (tag, size)."""
    key = ((tag or "en").lower().split("_")[0], size or FONT_SIZES.get(dialogue_type, 22))
    font = _fonts.get(key)
    if font is None:
        font = init_font(key[0], key[1])
        _fonts[key] = font
    return font
