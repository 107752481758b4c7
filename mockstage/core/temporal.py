# mockstage/core/temporal.py
"""
Timeline clip gestures: move a clip, or drag its left/right edge.

Pixel positions map linearly onto the global duration. While dragging,
clip edges snap to the timeline bounds, to other clips' edges and (when
resizing) to lengths matching other clips. Results are written straight to
the layer's timing; timing is never keyframed.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from app_config import CLIP_SNAP_THRESHOLD_PX, MIN_CLIP_DURATION_S
from mockstage.qt import QtCore
from .drag import DragState
from .logging import get_logger


class TimelineGeometryError(ValueError):
    """Pixel/time mapping requested for a zero-length timeline or track."""


class TimelineScale:
    def __init__(self, track_width_px: float, duration: float):
        if duration <= 0:
            raise TimelineGeometryError(f"timeline duration must be positive, got {duration}")
        if track_width_px <= 0:
            raise TimelineGeometryError(f"track width must be positive, got {track_width_px}")
        self.track_width_px = float(track_width_px)
        self.duration = float(duration)

    @property
    def pixels_per_second(self) -> float:
        return self.track_width_px / self.duration

    def to_seconds(self, px: float) -> float:
        return px / self.pixels_per_second

    def to_pixels(self, t: float) -> float:
        return t * self.pixels_per_second

    def time_at(self, x: float) -> float:
        """Click-to-seek: clamp x into the track, then map to seconds."""
        frac = min(max(x / self.track_width_px, 0.0), 1.0)
        return frac * self.duration


class ClipDragMode(str, Enum):
    MOVE = "move"
    RESIZE_LEFT = "resize-left"
    RESIZE_RIGHT = "resize-right"


@dataclass(frozen=True)
class ClipDrag:
    layer_id: str
    mode: ClipDragMode
    pointer_start_x: float
    start_time: float
    duration: float


def find_closest_snap(target: float, points: Iterable[float], threshold: float) -> Optional[float]:
    """Nearest point strictly closer than *threshold*; the first one wins ties."""
    closest = None
    best = float("inf")
    for p in points:
        diff = abs(target - p)
        if diff < threshold and diff < best:
            best = diff
            closest = p
    return closest


class TemporalTransformController(QtCore.QObject):
    timingChanged = QtCore.Signal(str, float, float)  # layer_id, start, duration
    dragStarted = QtCore.Signal(str)
    dragFinished = QtCore.Signal(str)

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self._store = store
        self._log = get_logger(__name__)
        self._drag: Optional[ClipDrag] = None
        self._track_width_px = 0.0

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._drag is not None else DragState.IDLE

    @property
    def drag(self) -> Optional[ClipDrag]:
        return self._drag

    def scale(self, track_width_px: Optional[float] = None) -> TimelineScale:
        return TimelineScale(track_width_px or self._track_width_px, self._store.duration)

    def begin(self, layer_id: str, mode: Union[ClipDragMode, str], pointer_x: float,
              track_width_px: float) -> bool:
        if self._drag is not None:
            return False
        layer = self._store.layer(layer_id)
        if layer is None:
            self._log.debug("clip drag on unknown layer %s", layer_id)
            return False
        # Validates geometry before the slot is taken.
        TimelineScale(track_width_px, self._store.duration)
        if not self._store.drag_slot.acquire(self):
            return False

        self._track_width_px = float(track_width_px)
        self._drag = ClipDrag(layer_id, ClipDragMode(mode), float(pointer_x),
                              layer.start_time, layer.duration)
        self._store.select(layer_id)
        self._log.debug("clip %s drag start on %s", self._drag.mode.value, layer.name)
        self.dragStarted.emit(layer_id)
        return True

    def snap_points(self) -> List[float]:
        """Candidate times for the active drag."""
        d = self._drag
        if d is None:
            return []
        points = [0.0, self._store.duration]
        for other in self._store.layers():
            if other.id == d.layer_id:
                continue
            points.append(other.start_time)
            points.append(other.start_time + other.duration)
            if d.mode is ClipDragMode.RESIZE_RIGHT:
                points.append(d.start_time + other.duration)
            elif d.mode is ClipDragMode.RESIZE_LEFT:
                points.append(d.start_time + d.duration - other.duration)
        return points

    def move(self, pointer_x: float, track_width_px: Optional[float] = None) -> None:
        d = self._drag
        if d is None:
            return
        if track_width_px:
            self._track_width_px = float(track_width_px)
        scale = self.scale()
        delta = scale.to_seconds(pointer_x - d.pointer_start_x)
        threshold = scale.to_seconds(CLIP_SNAP_THRESHOLD_PX)
        points = self.snap_points()
        total = self._store.duration

        if d.mode is ClipDragMode.MOVE:
            start = d.start_time + delta
            snapped = find_closest_snap(start, points, threshold)
            if snapped is not None:
                start = snapped
            else:
                snapped = find_closest_snap(start + d.duration, points, threshold)
                if snapped is not None:
                    start = snapped - d.duration
            start = max(0.0, start)
            if start + d.duration > total:
                start = max(0.0, total - d.duration)
            self._write(d.layer_id, start, d.duration)

        elif d.mode is ClipDragMode.RESIZE_RIGHT:
            end = d.start_time + d.duration + delta
            snapped = find_closest_snap(end, points, threshold)
            if snapped is not None:
                end = snapped
            duration = max(MIN_CLIP_DURATION_S, end - d.start_time)
            duration = max(MIN_CLIP_DURATION_S, min(duration, total - d.start_time))
            self._write(d.layer_id, d.start_time, duration)

        else:
            start = d.start_time + delta
            snapped = find_closest_snap(start, points, threshold)
            if snapped is not None:
                start = snapped
            start = max(0.0, start)
            shift = start - d.start_time
            if d.duration - shift > MIN_CLIP_DURATION_S:
                self._write(d.layer_id, start, d.duration - shift)

    def end(self) -> None:
        """Pointer-up. Safe to call when idle."""
        d = self._drag
        self._drag = None
        self._store.drag_slot.release(self)
        if d is not None:
            self._log.debug("clip %s drag end on %s", d.mode.value, d.layer_id)
            self.dragFinished.emit(d.layer_id)

    def _write(self, layer_id: str, start: float, duration: float) -> None:
        if self._store.set_timing(layer_id, start, duration):
            self.timingChanged.emit(layer_id, start, duration)
