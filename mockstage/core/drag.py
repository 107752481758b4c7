# mockstage/core/drag.py
from __future__ import annotations
from enum import Enum
from typing import Optional

from .logging import get_logger


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


class DragSlot:
    """
    The one "active drag" slot shared by the canvas and timeline controllers.
    Whoever holds it owns pointer-move/up until it releases; a second
    controller asking while it is held is refused.
    """
    def __init__(self) -> None:
        self._owner: Optional[object] = None
        self._log = get_logger(__name__)

    @property
    def owner(self) -> Optional[object]:
        return self._owner

    @property
    def busy(self) -> bool:
        return self._owner is not None

    def acquire(self, owner: object) -> bool:
        if self._owner is not None and self._owner is not owner:
            self._log.debug("drag refused for %s: slot held by %s", type(owner).__name__, type(self._owner).__name__)
            return False
        self._owner = owner
        return True

    def release(self, owner: object) -> None:
        if self._owner is owner:
            self._owner = None
