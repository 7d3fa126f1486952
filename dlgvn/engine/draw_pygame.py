"""
pygame drawing of one dialogue screen frame.

draw_dialogue_screen(settings, layers, surface) paints the layer stack
bottom to top, then the text box for the current dialogue type and the
emotion badge. With no surface it paints an off-screen canvas instead, so
callers may redraw before their window exists.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Set, Tuple

import pygame
from pygame import Surface

from dlgvn.engine.font_utils import NAME_FONT_SIZE, get_font
from dlgvn.engine.placeholders import make_image_placeholder
from dlgvn.scene.model import DialogueType, Emotion, Layer, Settings

logger = logging.getLogger(__name__)

LOGICAL_SIZE: Tuple[int, int] = (500, 890)

BOX_RECTS = {
    DialogueType.DIALOGUE: pygame.Rect(20, 660, 460, 190),
    DialogueType.NARRATION: pygame.Rect(0, 610, 500, 230),
    DialogueType.BOOK: pygame.Rect(40, 560, 420, 290),
}
TEXT_COLORS = {
    DialogueType.DIALOGUE: (255, 255, 255),
    DialogueType.NARRATION: (240, 240, 240),
    DialogueType.BOOK: (70, 45, 20),
}

EMOTION_GLYPHS = {
    Emotion.SURPRISE: ("!", (230, 70, 60)),
    Emotion.QUESTION: ("?", (70, 120, 230)),
    Emotion.ANGER: ("#", (220, 40, 40)),
    Emotion.SWEAT: ("~", (90, 170, 230)),
    Emotion.IDEA: ("*", (240, 200, 40)),
    Emotion.MUSIC: ("d", (120, 200, 120)),
    Emotion.HEART: ("<3", (240, 100, 150)),
}

_FILTER_RE = re.compile(r"([a-z-]+)(?:\(([^)]*)\))?")

_offscreen: Optional[Surface] = None
_images: Dict[str, Surface] = {}
_warned_filters: Set[str] = set()


def get_offscreen() -> Surface:
    """Canvas used when no target surface is available yet."""
    global _offscreen
    if _offscreen is None:
        _offscreen = pygame.Surface(LOGICAL_SIZE, pygame.SRCALPHA)
    return _offscreen


def load_image(ref: str) -> Surface:
    """Resolve an image reference to a surface, or a placeholder if it fails."""
    img = _images.get(ref)
    if img is not None:
        return img
    try:
        img = pygame.image.load(ref)
        if pygame.display.get_surface() is not None:
            img = img.convert_alpha()
    except (pygame.error, FileNotFoundError, OSError) as e:
        logger.warning(f"Failed to load image {ref!r}: {e}")
        img = make_image_placeholder(f"missing: {ref}", get_font("en", size=18), LOGICAL_SIZE)
    _images[ref] = img
    return img


def clear_image_cache() -> None:
    _images.clear()


def apply_filter(img: Surface, spec: str) -> Surface:
    """Apply a space separated filter list such as ``grayscale brightness(0.6)``."""
    for m in _FILTER_RE.finditer((spec or "").strip().lower()):
        name, arg = m.group(1), m.group(2)
        if name == "grayscale":
            img = pygame.transform.grayscale(img)
        elif name == "brightness":
            try:
                level = float(arg) if arg else 1.0
            except ValueError:
                level = 1.0
            img = _brightness(img, level)
        elif name not in _warned_filters:
            _warned_filters.add(name)
            logger.warning(f"Unsupported layer filter {name!r} ignored")
    return img


def _brightness(img: Surface, level: float) -> Surface:
    out = img.copy()
    if level < 1.0:
        v = max(0, int(255 * level))
        out.fill((v, v, v), special_flags=pygame.BLEND_RGB_MULT)
    elif level > 1.0:
        v = min(255, int(255 * (level - 1.0)))
        out.fill((v, v, v), special_flags=pygame.BLEND_RGB_ADD)
    return out


def transform_layer(layer: Layer) -> Surface:
    img = load_image(layer.image_ref)
    if layer.flip_x:
        img = pygame.transform.flip(img, True, False)
    if layer.rotation or layer.scale != 1:
        # pygame rotates counter-clockwise; layer rotation is clockwise
        img = pygame.transform.rotozoom(img, -float(layer.rotation), float(layer.scale))
    if layer.filter:
        img = apply_filter(img, layer.filter)
    opacity = max(0.0, min(1.0, float(layer.opacity)))
    if opacity < 1.0:
        img = img.copy()
        img.set_alpha(int(255 * opacity))
    return img


def draw_layers(surface: Surface, layers: List[Layer]) -> None:
    w, h = surface.get_size()
    for layer in layers:
        if layer.opacity <= 0:
            continue
        img = transform_layer(layer)
        rect = img.get_rect(center=(int(w / 2 + layer.offset_x), int(h / 2 + layer.offset_y)))
        surface.blit(img, rect)


def draw_text_box(surface: Surface, settings: Settings) -> None:
    dtype = settings.dialogue_type
    box = BOX_RECTS.get(dtype, BOX_RECTS[DialogueType.DIALOGUE])
    font = get_font(settings.font, dtype)
    panel = pygame.Surface(box.size, pygame.SRCALPHA)
    if dtype == DialogueType.BOOK:
        panel.fill((232, 220, 190, 240))
        pygame.draw.rect(panel, (120, 90, 50, 255), panel.get_rect(), 3)
    elif dtype == DialogueType.NARRATION:
        panel.fill((0, 0, 0, 170))
    else:
        panel.fill((20, 20, 40, 200))
        pygame.draw.rect(panel, (200, 200, 230, 255), panel.get_rect(), 2, border_radius=8)
    surface.blit(panel, box.topleft)

    if dtype == DialogueType.DIALOGUE and settings.speaker:
        name_font = get_font(settings.font, dtype, size=NAME_FONT_SIZE)
        name = name_font.render(settings.speaker, True, (255, 255, 255))
        plate = pygame.Rect(box.x + 10, box.y - name.get_height() - 16, name.get_width() + 32, name.get_height() + 12)
        pygame.draw.rect(surface, (60, 50, 110), plate, border_radius=6)
        surface.blit(name, (plate.x + 16, plate.y + 6))

    color = TEXT_COLORS.get(dtype, (255, 255, 255))
    line_h = font.get_linesize()
    y = box.y + 20
    for line in settings.dialogue_text.split("\n"):
        txt = font.render(line, True, color)
        if dtype == DialogueType.NARRATION:
            surface.blit(txt, txt.get_rect(midtop=(box.centerx, y)))
        else:
            surface.blit(txt, (box.x + 20, y))
        y += line_h


def draw_emotion(surface: Surface, settings: Settings) -> None:
    glyph = EMOTION_GLYPHS.get(settings.emotion)
    if glyph is None:
        return
    label, color = glyph
    w, _ = surface.get_size()
    x = (w * 0.22 if settings.emotion_is_left else w * 0.78) + settings.emotion_offset_x
    y = 300 + settings.emotion_offset_y
    center = (int(x), int(y))
    pygame.draw.circle(surface, (255, 255, 255), center, 28)
    pygame.draw.circle(surface, color, center, 28, 4)
    txt = get_font("en", size=30).render(label, True, color)
    surface.blit(txt, txt.get_rect(center=center))


def draw_dialogue_screen(settings: Settings, layers: List[Layer], surface: Optional[Surface] = None) -> None:
    target = surface if surface is not None else get_offscreen()
    target.fill((0, 0, 0))
    draw_layers(target, layers)
    draw_text_box(target, settings)
    draw_emotion(target, settings)
