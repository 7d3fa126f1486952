from __future__ import annotations

from typing import Dict, Optional

import pygame

_sounds: Dict[str, pygame.mixer.Sound] = {}


def init_mixer() -> bool:
    """Start the mixer if possible; machines without audio just stay silent."""
    if pygame.mixer.get_init():
        return True
    try:
        pygame.mixer.init()
        return True
    except pygame.error:
        return False


def play_se(path: Optional[str], volume: float | None = None) -> None:
    """Play a short sound effect from the start."""
    if not path or not init_mixer():
        return
    try:
        se = _sounds.get(path)
        if se is None:
            se = pygame.mixer.Sound(path)
            _sounds[path] = se
        if volume is not None:
            se.set_volume(max(0.0, min(1.0, float(volume))))
        se.stop()
        se.play()
    except (pygame.error, FileNotFoundError):
        pass


def play_bgm(path: Optional[str], volume: float | None = None) -> None:
    """Loop background music unless it is already playing."""
    if not path or not init_mixer():
        return
    try:
        if pygame.mixer.music.get_busy():
            return
        pygame.mixer.music.load(path)
        if volume is not None:
            pygame.mixer.music.set_volume(max(0.0, min(1.0, float(volume))))
        pygame.mixer.music.play(-1)
    except (pygame.error, FileNotFoundError):
        pass
