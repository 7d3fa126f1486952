from __future__ import annotations

import logging

import pygame

from dlgvn.config_io import SessionConfig
from dlgvn.engine.audio_utils import play_bgm, play_se
from dlgvn.engine.draw_pygame import LOGICAL_SIZE, draw_dialogue_screen
from dlgvn.engine.session import DialogueScreen

logger = logging.getLogger(__name__)

ADVANCE_KEYS = (pygame.K_RETURN, pygame.K_SPACE)


def run_app(cfg: SessionConfig, title: str = "Dialogue", fps: int = 60) -> int:
    """Open the window and run the click-to-advance loop until it is closed."""
    pygame.init()
    screen = pygame.display.set_mode(LOGICAL_SIZE)
    pygame.display.set_caption(title)
    clock = pygame.time.Clock()

    canvas = pygame.Surface(LOGICAL_SIZE).convert()
    session = DialogueScreen.from_config(
        cfg,
        render=draw_dialogue_screen,
        surface=canvas,
        clock=pygame.time.get_ticks,
    )
    session.redraw()

    def on_advance() -> None:
        play_se(cfg.click_sound)
        play_bgm(cfg.bgm)
        session.advance()

    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", None) == 1:
                    on_advance()
                elif event.type == pygame.KEYDOWN and event.key in ADVANCE_KEYS:
                    on_advance()
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            session.tick()
            screen.blit(canvas, (0, 0))
            pygame.display.flip()
            clock.tick(fps)
    finally:
        logger.debug(f"Closing after {session.redraw_count} redraws")
        pygame.quit()
    return 0
