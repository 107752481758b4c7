# mockstage/core/store.py
from __future__ import annotations
import copy
import math
from typing import Any, Dict, List, Mapping, Optional, Union

from app_config import DEFAULT_CANVAS, DUPLICATE_OFFSET, MIN_ZOOM, STEP_SECONDS, TIME_ROUND_DIGITS
from mockstage.qt import QtCore
from .drag import DragSlot
from .easing import Easing, coerce_easing
from .interpolation import find_active_keyframe, upsert_keyframe
from .logging import get_logger
from .model import (
    LAYER_FIELDS, CanvasState, EditorMode, FramePayload, Keyframe, Layer,
    OverlayKind, OverlayPayload, Position, TimelineState, new_id,
)
from .presets import (
    default_overlay_content, default_overlay_scale, default_overlay_style, device_name,
)
from . import zorder


class ProjectStore(QtCore.QObject):
    """
    Owns the composition: every layer (one id-keyed collection for frames and
    overlays), canvas, timeline/transport state, selection and clipboard.
    Controllers and views hold a reference to the store and mutate it only
    through these methods; each mutation is announced by a signal.
    """
    layersChanged = QtCore.Signal()                # membership or stacking changed
    layerChanged = QtCore.Signal(str)              # one layer's fields changed
    selectionChanged = QtCore.Signal(object)       # Optional[str]
    timeChanged = QtCore.Signal(float)
    durationChanged = QtCore.Signal(float)
    playStateChanged = QtCore.Signal(bool)
    modeChanged = QtCore.Signal(str)
    canvasChanged = QtCore.Signal()

    def __init__(self, canvas: Optional[CanvasState] = None,
                 timeline: Optional[TimelineState] = None, parent=None) -> None:
        super().__init__(parent)
        self._log = get_logger(__name__)
        self._layers: Dict[str, Layer] = {}
        self.canvas = canvas or CanvasState(**DEFAULT_CANVAS)
        self.timeline = timeline or TimelineState()
        self.selected_id: Optional[str] = None
        self.clipboard_id: Optional[str] = None
        self.drag_slot = DragSlot()

    # ──────────────────────────────────────────────────────────────────────────
    # Read access
    # ──────────────────────────────────────────────────────────────────────────
    @property
    def current_time(self) -> float:
        return self.timeline.current_time

    @property
    def duration(self) -> float:
        return self.timeline.duration

    @property
    def is_playing(self) -> bool:
        return self.timeline.is_playing

    @property
    def mode(self) -> EditorMode:
        return self.timeline.mode

    def layer(self, layer_id: Optional[str]) -> Optional[Layer]:
        if layer_id is None:
            return None
        return self._layers.get(layer_id)

    def layers(self) -> List[Layer]:
        return list(self._layers.values())

    def layers_by_z(self, descending: bool = False) -> List[Layer]:
        return zorder.descending(self._layers.values()) if descending else zorder.ascending(self._layers.values())

    def selected_layer(self) -> Optional[Layer]:
        return self.layer(self.selected_id)

    def next_z_index(self) -> int:
        return zorder.next_z_index(self._layers.values())

    def __len__(self) -> int:
        return len(self._layers)

    def __contains__(self, layer_id: object) -> bool:
        return layer_id in self._layers

    # ──────────────────────────────────────────────────────────────────────────
    # Layer lifecycle
    # ──────────────────────────────────────────────────────────────────────────
    def add_layer(self, layer: Layer, select: bool = True) -> Layer:
        """Insert *layer* as-is (its z_index is kept)."""
        self._layers[layer.id] = layer
        self._log.info("add layer %s (%s) z=%d", layer.name, layer.kind.value, layer.z_index)
        self.layersChanged.emit()
        if select:
            self.select(layer.id)
        return layer

    def add_frame(self, device: str = "iphone-15") -> Layer:
        layer = Layer(
            payload=FramePayload(device=device),
            name=device_name(device),
            position=Position(50, 50),
            z_index=self.next_z_index(),
        )
        return self.add_layer(layer)

    def add_overlay(self, kind: Union[OverlayKind, str] = OverlayKind.TEXT, content: Optional[str] = None) -> Layer:
        kind = OverlayKind(kind)
        layer = Layer(
            payload=OverlayPayload(
                kind=kind,
                content=content or default_overlay_content(kind),
                style=default_overlay_style(kind),
            ),
            name=f"{kind.value.capitalize()} Layer",
            scale=default_overlay_scale(kind),
            z_index=self.next_z_index(),
        )
        return self.add_layer(layer)

    def update_layer(self, layer_id: str, **changes: Any) -> bool:
        """Shallow-merge *changes* into the layer (or its payload).

        Unknown ids are ignored; unknown field names raise AttributeError.
        """
        layer = self._layers.get(layer_id)
        if layer is None:
            self._log.debug("update_layer: unknown id %s", layer_id)
            return False
        for key, value in changes.items():
            if key == "position":
                layer.position = Position.coerce(value)
            elif key in LAYER_FIELDS:
                setattr(layer, key, value)
            elif hasattr(layer.payload, key):
                setattr(layer.payload, key, value)
            else:
                raise AttributeError(f"Layer has no field '{key}'")
        self.layerChanged.emit(layer_id)
        return True

    def delete_layer(self, layer_id: str) -> bool:
        layer = self._layers.pop(layer_id, None)
        if layer is None:
            self._log.debug("delete_layer: unknown id %s", layer_id)
            return False
        self._log.info("delete layer %s", layer.name)
        if self.clipboard_id == layer_id:
            self.clipboard_id = None
        self.layersChanged.emit()
        if self.selected_id == layer_id:
            self.select(None)
        return True

    def duplicate_layer(self, layer_id: str) -> Optional[Layer]:
        src = self._layers.get(layer_id)
        if src is None:
            self._log.debug("duplicate_layer: unknown id %s", layer_id)
            return None
        dup = copy.deepcopy(src)
        dup.id = new_id()
        dup.name = f"{src.name} (Copy)"
        dup.position = Position(src.position.x + DUPLICATE_OFFSET, src.position.y + DUPLICATE_OFFSET)
        dup.z_index = self.next_z_index()
        for kf in dup.keyframes:
            kf.id = new_id()
        return self.add_layer(dup)

    def select(self, layer_id: Optional[str]) -> None:
        if layer_id is not None and layer_id not in self._layers:
            return
        if layer_id != self.selected_id:
            self.selected_id = layer_id
            self.selectionChanged.emit(layer_id)

    def copy_selection(self) -> None:
        if self.selected_id is not None:
            self.clipboard_id = self.selected_id

    def paste(self) -> Optional[Layer]:
        if self.clipboard_id is None:
            return None
        return self.duplicate_layer(self.clipboard_id)

    # ──────────────────────────────────────────────────────────────────────────
    # Stacking
    # ──────────────────────────────────────────────────────────────────────────
    def reorder_layer(self, layer_id: str, direction: Union[zorder.ZDirection, str]) -> bool:
        changed = zorder.reorder(self.layers(), layer_id, direction)
        if changed:
            self._log.info("reorder %s %s", layer_id, zorder.ZDirection(direction).value)
            self.layersChanged.emit()
        return changed

    def move_layer(self, dragged_id: str, target_id: str) -> bool:
        changed = zorder.move_to(self.layers(), dragged_id, target_id)
        if changed:
            self._log.info("move layer %s onto %s", dragged_id, target_id)
            self.layersChanged.emit()
        return changed

    # ──────────────────────────────────────────────────────────────────────────
    # Keyframes & timing
    # ──────────────────────────────────────────────────────────────────────────
    def upsert_keyframes(self, layer_id: str, values: Mapping[str, float]) -> List[Keyframe]:
        """Key each property in *values* at the current time."""
        layer = self._layers.get(layer_id)
        if layer is None:
            return []
        written = [upsert_keyframe(layer.keyframes, prop, value, self.current_time) for prop, value in values.items()]
        self.layerChanged.emit(layer_id)
        return written

    def active_keyframe(self, layer_id: str) -> Optional[Keyframe]:
        layer = self._layers.get(layer_id)
        if layer is None:
            return None
        return find_active_keyframe(layer.keyframes, self.current_time)

    def set_keyframe_easing(self, layer_id: str, easing: Union[Easing, str]) -> bool:
        kf = self.active_keyframe(layer_id)
        if kf is None:
            return False
        kf.easing = coerce_easing(easing)
        self.layerChanged.emit(layer_id)
        return True

    def clear_keyframes(self, layer_id: str) -> None:
        layer = self._layers.get(layer_id)
        if layer is not None and layer.keyframes:
            layer.keyframes.clear()
            self.layerChanged.emit(layer_id)

    def set_timing(self, layer_id: str, start_time: float, duration: float) -> bool:
        return self.update_layer(layer_id, start_time=float(start_time), duration=float(duration))

    def attach_media(self, layer_id: str, media) -> bool:
        """Point a layer at probed media; a long video grows the timeline."""
        layer = self._layers.get(layer_id)
        if layer is None:
            return False
        if isinstance(layer.payload, FramePayload):
            changes: Dict[str, Any] = {"content_url": media.url, "is_video": media.is_video}
        else:
            changes = {"content": media.url}
        if media.is_video and media.duration:
            changes["duration"] = float(media.duration)
        self.update_layer(layer_id, **changes)
        self._log.info("attached %s to %s", media.url, layer.name)

        end = layer.start_time + layer.duration
        if media.is_video and end > self.duration:
            self.set_duration(float(math.ceil(end)))
        return True

    # ──────────────────────────────────────────────────────────────────────────
    # Transport
    # ──────────────────────────────────────────────────────────────────────────
    def set_current_time(self, t: float) -> None:
        t = round(max(0.0, float(t)), TIME_ROUND_DIGITS)
        if t != self.timeline.current_time:
            self.timeline.current_time = t
            self.timeChanged.emit(t)

    def seek(self, t: float) -> None:
        self.set_current_time(min(max(0.0, float(t)), self.duration))

    def step(self, delta: float = STEP_SECONDS) -> None:
        self.set_playing(False)
        self.seek(self.current_time + delta)

    def go_to_start(self) -> None:
        self.seek(0.0)

    def go_to_end(self) -> None:
        self.seek(self.duration)

    def set_playing(self, playing: bool) -> None:
        playing = bool(playing)
        if playing != self.timeline.is_playing:
            self.timeline.is_playing = playing
            self.playStateChanged.emit(playing)

    def toggle_playing(self) -> None:
        self.set_playing(not self.is_playing)

    def set_duration(self, duration: float) -> None:
        if duration <= 0:
            raise ValueError(f"Timeline duration must be positive, got {duration}")
        duration = float(duration)
        if duration != self.timeline.duration:
            self.timeline.duration = duration
            self.durationChanged.emit(duration)

    def set_mode(self, mode: Union[EditorMode, str]) -> None:
        mode = EditorMode(mode)
        if mode is not self.timeline.mode:
            self.timeline.mode = mode
            self._log.info("mode -> %s", mode.value)
            self.modeChanged.emit(mode.value)

    # ──────────────────────────────────────────────────────────────────────────
    # Canvas
    # ──────────────────────────────────────────────────────────────────────────
    def update_canvas(self, **changes: Any) -> None:
        for key, value in changes.items():
            if not hasattr(self.canvas, key):
                raise AttributeError(f"Canvas has no field '{key}'")
            setattr(self.canvas, key, value)
        self.canvas.zoom = max(MIN_ZOOM, float(self.canvas.zoom))
        self.canvasChanged.emit()

    def zoom_by(self, factor: float) -> None:
        self.update_canvas(zoom=self.canvas.zoom * factor)
