"""
Dialogue playback - the typewriter state machine.

A line is revealed one character per pacing tick. A second advance request
during a reveal does not start another line; it flags an interrupt, and the
next tick after the pacing delay shows the whole line at once.

The controller never sleeps. The caller drives it from its frame loop:

    controller.advance()      # on click / Enter
    controller.tick()         # once per frame

Both accept an explicit ``now_ms`` so tests and headless runs can use a
manual clock.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

from dlgvn.engine.settings_store import SettingsStore
from dlgvn.scene.model import DialogueType

logger = logging.getLogger(__name__)

# Pacing between two revealed characters, in clock units (ms).
CHARACTER_DELAY_MS = 0.2

WrapFn = Callable[[str, DialogueType, str], Sequence[str]]


def _pygame_ticks() -> int:
    import pygame
    return pygame.time.get_ticks()


class PlaybackState(Enum):
    IDLE = 0
    REVEALING = 1
    INTERRUPTED = 2


@dataclass
class RevealState:
    """Progress of the line currently being revealed."""
    target: str = ""
    revealed: int = 0
    next_due: float = 0.0

    @property
    def done(self) -> bool:
        return self.revealed >= len(self.target)


class PlaybackController:
    def __init__(
        self,
        script: Sequence[str],
        settings: SettingsStore,
        wrap: WrapFn,
        speaker: str = "",
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.script: List[str] = list(script)
        self.settings = settings
        self.speaker = speaker
        self.index = 0
        self.state = PlaybackState.IDLE
        self._wrap = wrap
        self._clock = clock or _pygame_ticks
        self._reveal: Optional[RevealState] = None

    @property
    def revealing(self) -> bool:
        """True while a reveal holds the playback (interrupted or not)."""
        return self.state is not PlaybackState.IDLE

    @property
    def interrupt_requested(self) -> bool:
        return self.state is PlaybackState.INTERRUPTED

    @property
    def target_text(self) -> Optional[str]:
        return self._reveal.target if self._reveal else None

    def _now(self, now_ms: Optional[float]) -> float:
        return self._clock() if now_ms is None else now_ms

    def advance(self, now_ms: Optional[float] = None) -> None:
        """Start the next line, or interrupt the one being revealed."""
        if self.state is PlaybackState.REVEALING:
            self.state = PlaybackState.INTERRUPTED
            logger.debug(f"Interrupt requested for line {self.index}")
            return
        if self.state is PlaybackState.INTERRUPTED:
            # one interrupt at a time; extra requests are dropped
            return
        if not self.script:
            logger.debug("Advance ignored: script is empty")
            return

        settings = self.settings.current
        line = self.script[self.index]
        target = "".join(self._wrap(line, settings.dialogue_type, settings.font))
        reveal = RevealState(target=target)
        self._reveal = reveal
        self.state = PlaybackState.REVEALING
        logger.debug(f"Revealing line {self.index} ({len(target)} chars)")

        if not target:
            self._emit("")
            self._finish()
            return
        self._emit_next(reveal, self._now(now_ms))

    def tick(self, now_ms: Optional[float] = None) -> bool:
        """Advance the reveal if its pacing delay has passed.

        Returns True when the tick changed anything.
        """
        reveal = self._reveal
        if self.state is PlaybackState.IDLE or reveal is None:
            return False
        now = self._now(now_ms)
        if now < reveal.next_due:
            return False
        if self.state is PlaybackState.INTERRUPTED:
            self._emit(reveal.target)
            self._finish()
            return True
        if not reveal.done:
            self._emit_next(reveal, now)
            return True
        self._finish()
        return True

    def play_line(self, start_ms: float = 0.0, step_ms: float = 16.0) -> float:
        """Advance once and tick a manual clock until the line is complete.

        Returns the clock value at which playback went idle.
        """
        now = start_ms
        self.advance(now)
        while self.revealing:
            now += step_ms
            self.tick(now)
        return now

    def _emit_next(self, reveal: RevealState, now: float) -> None:
        reveal.revealed += 1
        reveal.next_due = now + CHARACTER_DELAY_MS
        self._emit(reveal.target[:reveal.revealed])

    def _emit(self, text: str) -> None:
        self.settings.update({"speaker": self.speaker, "dialogue_text": text})

    def _finish(self) -> None:
        logger.debug(f"Line {self.index} complete")
        self.index = (self.index + 1) % len(self.script)
        self.state = PlaybackState.IDLE
        self._reveal = None
