from __future__ import annotations

import logging
from typing import List, Optional

from dlgvn.engine.event_bus import EventBus, LAYERS_CHANGED
from dlgvn.scene.model import Layer, LayerPatch, merge_layer

logger = logging.getLogger(__name__)


class IdCounter:
    """Monotonic layer id source. First id is 1; ids are never reused."""

    def __init__(self) -> None:
        self._last = 0

    def next(self) -> int:
        self._last += 1
        return self._last

    @property
    def last(self) -> int:
        return self._last


class LayerStore:
    """Ordered image layers; index 0 is drawn first (bottom-most).

    Every mutation emits ``layers_changed`` on the bus. The store refuses to
    drop its last layer, so once initialised it is never empty.
    """

    def __init__(self, events: Optional[EventBus] = None, ids: Optional[IdCounter] = None) -> None:
        self.events = events or EventBus()
        self.ids = ids or IdCounter()
        self._layers: List[Layer] = []

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def get(self, layer_id: int) -> Optional[Layer]:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def new_layer(self, name: str, image_ref: str) -> Layer:
        """Mint a Layer with default attributes without inserting it."""
        return Layer(id=self.ids.next(), name=name, image_ref=image_ref)

    def add_layer(self, name: str, image_ref: str) -> Layer:
        layer = self.new_layer(name, image_ref)
        self._layers.append(layer)
        logger.debug(f"Added layer {layer.id} ({name!r} -> {image_ref!r})")
        self._changed()
        return layer

    def update_layer(self, layer_id: Optional[int], patch: LayerPatch) -> None:
        # stale or unknown ids are tolerated
        for i, layer in enumerate(self._layers):
            if layer.id == layer_id:
                self._layers[i] = merge_layer(layer, patch)
                self._changed()
                return

    def remove_layer(self, layer_id: int) -> None:
        if len(self._layers) <= 1:
            return
        kept = [layer for layer in self._layers if layer.id != layer_id]
        if len(kept) == len(self._layers):
            return
        self._layers = kept
        logger.debug(f"Removed layer {layer_id}")
        self._changed()

    def _changed(self) -> None:
        self.events.emit(LAYERS_CHANGED, layers=self.layers)
