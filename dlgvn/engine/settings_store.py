from __future__ import annotations

from typing import Optional

from dlgvn.engine.event_bus import EventBus, SETTINGS_CHANGED
from dlgvn.scene.model import Settings, SettingsPatch, merge_settings


class SettingsStore:
    """Holds the single current Settings record.

    ``update`` shallow-merges a patch; fields absent from the patch keep their
    previous value. Each update emits ``settings_changed``.
    """

    def __init__(self, initial: Optional[Settings] = None, events: Optional[EventBus] = None) -> None:
        self.events = events or EventBus()
        self._settings = initial if initial is not None else Settings()

    @property
    def current(self) -> Settings:
        return self._settings

    def update(self, patch: SettingsPatch) -> None:
        self._settings = merge_settings(self._settings, patch)
        self.events.emit(SETTINGS_CHANGED, settings=self._settings)
