from __future__ import annotations

import logging

import pygame
import pytest

from dlgvn.engine import draw_pygame
from dlgvn.engine.draw_pygame import (
    LOGICAL_SIZE,
    apply_filter,
    draw_dialogue_screen,
    get_offscreen,
    transform_layer,
)
from dlgvn.scene.model import DialogueType, Emotion, Layer, Settings


@pytest.fixture(autouse=True)
def _fonts():
    pygame.font.init()
    draw_pygame.clear_image_cache()
    yield
    draw_pygame.clear_image_cache()


@pytest.fixture
def red_square(tmp_path):
    surf = pygame.Surface((100, 100))
    surf.fill((200, 100, 50))
    p = tmp_path / "square.bmp"
    pygame.image.save(surf, str(p))
    return str(p)


def test_draw_without_surface_uses_offscreen():
    settings = Settings(speaker="Rita", dialogue_text="Hello\nthere")
    layers = [Layer(id=1, name="background", image_ref="missing/bg.png")]
    draw_dialogue_screen(settings, layers)
    assert get_offscreen().get_size() == LOGICAL_SIZE


@pytest.mark.parametrize("dtype", list(DialogueType))
def test_draw_each_box_type(dtype, red_square):
    surface = pygame.Surface(LOGICAL_SIZE)
    settings = Settings(speaker="Rita", dialogue_text="Line one\nLine two", dialogue_type=dtype,
                        emotion=Emotion.SURPRISE, emotion_is_left=False, emotion_offset_x=5)
    draw_dialogue_screen(settings, [Layer(id=1, name="bg", image_ref=red_square)], surface)
    # background layer is centred and covers the middle of the canvas
    assert surface.get_at((250, 445))[:3] == (200, 100, 50)


def test_missing_image_becomes_placeholder(caplog):
    layer = Layer(id=1, name="bg", image_ref="does/not/exist.png")
    with caplog.at_level(logging.WARNING):
        img = transform_layer(layer)
    assert img.get_size() == LOGICAL_SIZE
    assert "does/not/exist.png" in caplog.text


def test_layer_scale_flip_and_opacity(red_square):
    img = transform_layer(Layer(id=1, name="pt", image_ref=red_square, scale=0.5, flip_x=True, opacity=0.5))
    assert img.get_size() == (50, 50)
    assert img.get_alpha() == 127


def test_layer_offset_moves_image(red_square):
    surface = pygame.Surface(LOGICAL_SIZE)
    layer = Layer(id=1, name="pt", image_ref=red_square, offset_x=-200, offset_y=-400)
    draw_dialogue_screen(Settings(), [layer], surface)
    assert surface.get_at((50, 45))[:3] == (200, 100, 50)
    assert surface.get_at((250, 445))[:3] == (0, 0, 0)


def test_zero_opacity_layer_skipped(red_square):
    surface = pygame.Surface(LOGICAL_SIZE)
    draw_dialogue_screen(Settings(), [Layer(id=1, name="bg", image_ref=red_square, opacity=0)], surface)
    assert surface.get_at((250, 445))[:3] == (0, 0, 0)


def test_brightness_filter_darkens():
    surf = pygame.Surface((4, 4))
    surf.fill((200, 100, 50))
    out = apply_filter(surf, "brightness(0.5)")
    r, g, b = out.get_at((0, 0))[:3]
    assert 90 <= r <= 110
    assert g < 100 and b < 50
    assert surf.get_at((0, 0))[:3] == (200, 100, 50)


def test_grayscale_filter_equalises_channels():
    surf = pygame.Surface((4, 4))
    surf.fill((200, 100, 50))
    r, g, b = apply_filter(surf, "grayscale").get_at((0, 0))[:3]
    assert r == g == b


def test_unknown_filter_ignored(caplog):
    surf = pygame.Surface((4, 4))
    surf.fill((10, 20, 30))
    with caplog.at_level(logging.WARNING):
        out = apply_filter(surf, "sepia(1)")
    assert out.get_at((0, 0))[:3] == (10, 20, 30)
