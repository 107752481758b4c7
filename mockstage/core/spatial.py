# mockstage/core/spatial.py
"""
Canvas pointer gestures: move, scale (corner handles) and rotate.

A drag captures the layer's displayed transform at pointer-down and every
pointer move is expressed as a delta from that baseline, converted to
canvas units by the current zoom. Writes go through the property-update
dispatcher, so in video mode a drag keys the playhead instead of editing
the static values.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from app_config import GUIDE_THRESHOLD_PX, MIN_SCALE, SCALE_SENSITIVITY
from mockstage.qt import QtCore
from .dispatcher import apply_property_update
from .drag import DragState
from .logging import get_logger
from .render_state import resolve_transform

Point = Tuple[float, float]


class SpatialMode(str, Enum):
    MOVE = "move"
    SCALE = "scale"
    ROTATE = "rotate"


class Corner(str, Enum):
    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"

    @property
    def factors(self) -> Tuple[int, int]:
        x = 1 if self in (Corner.TOP_RIGHT, Corner.BOTTOM_RIGHT) else -1
        y = 1 if self in (Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT) else -1
        return x, y


@dataclass(frozen=True)
class TransformBaseline:
    x: float
    y: float
    scale: float
    rotation: float


@dataclass(frozen=True)
class SpatialDrag:
    layer_id: str
    mode: SpatialMode
    corner: Optional[Corner]
    pointer_start: Point
    baseline: TransformBaseline


@dataclass(frozen=True)
class SnapGuide:
    orientation: str  # "vertical" (constant x) | "horizontal" (constant y)
    position: float


def compute_guides(store, layer_id: str, x: float, y: float, threshold: float) -> List[SnapGuide]:
    """Alignment hints for a layer sitting at (x, y).

    Canvas centre lines come first, then the other layers' displayed x/y.
    Duplicate guides are dropped.
    """
    guides: List[SnapGuide] = []
    if abs(x) < threshold:
        guides.append(SnapGuide("vertical", 0.0))
    if abs(y) < threshold:
        guides.append(SnapGuide("horizontal", 0.0))

    for other in store.layers():
        if other.id == layer_id:
            continue
        tf = resolve_transform(other, store.current_time, store.mode)
        if abs(x - tf.x) < threshold:
            guides.append(SnapGuide("vertical", tf.x))
        if abs(y - tf.y) < threshold:
            guides.append(SnapGuide("horizontal", tf.y))

    seen = set()
    unique = []
    for g in guides:
        key = (g.orientation, g.position)
        if key not in seen:
            seen.add(key)
            unique.append(g)
    return unique


class SpatialTransformController(QtCore.QObject):
    guidesChanged = QtCore.Signal(list)   # List[SnapGuide]
    dragStarted = QtCore.Signal(str)
    dragFinished = QtCore.Signal(str)

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self._store = store
        self._log = get_logger(__name__)
        self._drag: Optional[SpatialDrag] = None
        self._guides: List[SnapGuide] = []

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._drag is not None else DragState.IDLE

    @property
    def drag(self) -> Optional[SpatialDrag]:
        return self._drag

    @property
    def guides(self) -> List[SnapGuide]:
        return list(self._guides)

    def begin(self, layer_id: str, mode: Union[SpatialMode, str], pointer: Point,
              corner: Union[Corner, str, None] = None) -> bool:
        """Pointer-down on a layer body, corner handle or rotate handle."""
        if self._drag is not None:
            return False
        layer = self._store.layer(layer_id)
        if layer is None:
            self._log.debug("spatial drag on unknown layer %s", layer_id)
            return False
        if not self._store.drag_slot.acquire(self):
            return False

        tf = resolve_transform(layer, self._store.current_time, self._store.mode)
        self._drag = SpatialDrag(
            layer_id=layer_id,
            mode=SpatialMode(mode),
            corner=Corner(corner) if corner else None,
            pointer_start=(float(pointer[0]), float(pointer[1])),
            baseline=TransformBaseline(tf.x, tf.y, tf.scale, tf.rotation),
        )
        self._store.select(layer_id)
        self._log.debug("spatial %s drag start on %s", self._drag.mode.value, layer.name)
        self.dragStarted.emit(layer_id)
        return True

    def move(self, pointer: Point) -> None:
        d = self._drag
        if d is None:
            return
        zoom = self._store.canvas.zoom
        dx = (pointer[0] - d.pointer_start[0]) / zoom
        dy = (pointer[1] - d.pointer_start[1]) / zoom
        base = d.baseline

        if d.mode is SpatialMode.MOVE:
            x, y = base.x + dx, base.y + dy
            self._set_guides(compute_guides(self._store, d.layer_id, x, y, GUIDE_THRESHOLD_PX / zoom))
            apply_property_update(self._store, d.layer_id, {"position": (x, y)})
        elif d.mode is SpatialMode.SCALE:
            fx, fy = d.corner.factors if d.corner else (1, 1)
            change = dx * fx + dy * fy
            scale = max(MIN_SCALE, base.scale + change * SCALE_SENSITIVITY)
            apply_property_update(self._store, d.layer_id, {"scale": scale})
        else:
            apply_property_update(self._store, d.layer_id, {"rotation": base.rotation + dx})

    def end(self) -> None:
        """Pointer-up. Safe to call when idle."""
        d = self._drag
        self._drag = None
        self._store.drag_slot.release(self)
        self._set_guides([])
        if d is not None:
            self._log.debug("spatial %s drag end on %s", d.mode.value, d.layer_id)
            self.dragFinished.emit(d.layer_id)

    def _set_guides(self, guides: List[SnapGuide]) -> None:
        if guides != self._guides:
            self._guides = guides
            self.guidesChanged.emit(list(guides))
