from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

LAYERS_CHANGED = "layers_changed"
SETTINGS_CHANGED = "settings_changed"

Listener = Callable[[Dict[str, Any]], None]


class EventBus:
    """Change notifications from the stores, delivered in subscription order.

    A listener that raises is logged and the remaining listeners still run,
    so a failed redraw never leaves a store half-updated.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {}

    def subscribe(self, name: str, fn: Listener) -> None:
        self._listeners.setdefault(name, []).append(fn)

    def emit(self, name: str, /, **data: Any) -> None:
        for fn in list(self._listeners.get(name, ())):
            try:
                fn(data)
            except Exception:
                logger.exception(f"Listener for {name} failed")
