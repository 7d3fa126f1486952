from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from dlgvn.config_io import DEFAULTS, SessionConfig
from dlgvn.engine.event_bus import EventBus, LAYERS_CHANGED, SETTINGS_CHANGED
from dlgvn.engine.layer_store import LayerStore
from dlgvn.engine.playback import PlaybackController, WrapFn
from dlgvn.engine.renderer import RenderFn
from dlgvn.engine.settings_store import SettingsStore
from dlgvn.scene.model import Layer, LayerPatch, Settings, SettingsPatch

logger = logging.getLogger(__name__)


class DialogueScreen:
    """One dialogue screen session.

    Owns the layer store, the settings record and the playback controller,
    and repaints through ``render`` after every change to either store.
    Several sessions can coexist; nothing here is module-global.
    """

    def __init__(
        self,
        script: Sequence[str],
        speaker: str = "",
        background: str = DEFAULTS["background"],
        portrait: Optional[str] = None,
        render: Optional[RenderFn] = None,
        wrap: Optional[WrapFn] = None,
        surface: Optional[Any] = None,
        clock: Optional[Callable[[], float]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        if render is None:
            from dlgvn.engine.draw_pygame import draw_dialogue_screen  # local import to avoid test deps
            render = draw_dialogue_screen
        if wrap is None:
            from dlgvn.ui.textwrap import wrap_lines
            wrap = wrap_lines
        self.render = render
        self.surface = surface
        self.redraw_count = 0
        self.events = EventBus()
        self.layer_store = LayerStore(events=self.events)
        self.settings_store = SettingsStore(settings, events=self.events)
        self.playback = PlaybackController(script, self.settings_store, wrap, speaker=speaker, clock=clock)
        self.events.subscribe(LAYERS_CHANGED, self._on_changed)
        self.events.subscribe(SETTINGS_CHANGED, self._on_changed)
        # the background is always the bottom layer, so the store is never empty
        self.layer_store.add_layer("background", background)
        if portrait is not None:
            self.layer_store.add_layer("portrait", portrait)

    @classmethod
    def from_config(cls, cfg: SessionConfig, **kwargs: Any) -> "DialogueScreen":
        settings = Settings(dialogue_type=cfg.dialogue_type, font=cfg.font)
        return cls(
            cfg.script,
            speaker=cfg.speaker,
            background=cfg.background,
            portrait=cfg.portrait,
            settings=settings,
            **kwargs,
        )

    # --- read access for the render call ---
    @property
    def settings(self) -> Settings:
        return self.settings_store.current

    @property
    def layers(self) -> List[Layer]:
        return self.layer_store.layers

    # --- layer operations ---
    def add_layer(self, name: str, image_ref: str) -> Layer:
        return self.layer_store.add_layer(name, image_ref)

    def update_layer(self, layer_id: Optional[int], patch: LayerPatch) -> None:
        self.layer_store.update_layer(layer_id, patch)

    def remove_layer(self, layer_id: int) -> None:
        self.layer_store.remove_layer(layer_id)

    def update_settings(self, patch: SettingsPatch) -> None:
        self.settings_store.update(patch)

    # --- playback ---
    def advance(self, now_ms: Optional[float] = None) -> None:
        self.playback.advance(now_ms)

    def tick(self, now_ms: Optional[float] = None) -> bool:
        return self.playback.tick(now_ms)

    def set_surface(self, surface: Optional[Any]) -> None:
        self.surface = surface
        self.redraw()

    def redraw(self) -> None:
        self.redraw_count += 1
        self.render(self.settings, self.layers, self.surface)

    def _on_changed(self, _data: Dict[str, Any]) -> None:
        self.redraw()
