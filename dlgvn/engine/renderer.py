from __future__ import annotations

from typing import Any, List, Optional, Protocol

from dlgvn.scene.model import Layer, Settings


class RenderFn(Protocol):
    """Paints one frame. Must accept ``surface=None`` without raising."""

    def __call__(self, settings: Settings, layers: List[Layer], surface: Optional[Any] = None) -> None:
        ...


class DummyRenderer:
    """Headless renderer that only records what it was asked to draw."""

    def __init__(self) -> None:
        self.frames = 0
        self.last_settings: Optional[Settings] = None
        self.last_layers: List[Layer] = []
        self.last_surface: Optional[Any] = None

    def __call__(self, settings: Settings, layers: List[Layer], surface: Optional[Any] = None) -> None:
        self.frames += 1
        self.last_settings = settings
        self.last_layers = list(layers)
        self.last_surface = surface
