from __future__ import annotations

from typing import Tuple

import pygame


def make_image_placeholder(label: str, font: pygame.font.Font,
                           size: Tuple[int, int] = (500, 890)) -> pygame.Surface:
    """Translucent grid with a label, drawn where an image could not be loaded."""
    w, h = size
    surf = pygame.Surface((w, h), pygame.SRCALPHA)
    surf.fill((80, 80, 120, 160))
    step = 64
    for x in range(0, w, step):
        pygame.draw.line(surf, (180, 180, 200, 200), (x, 0), (x, h), 1)
    for y in range(0, h, step):
        pygame.draw.line(surf, (180, 180, 200, 200), (0, y), (w, y), 1)
    pygame.draw.rect(surf, (200, 200, 240, 255), surf.get_rect(), 4)
    try:
        txt = font.render(label, True, (255, 255, 255))
        surf.blit(txt, txt.get_rect(center=(w // 2, 40)))
    except pygame.error:
        pass
    return surf
