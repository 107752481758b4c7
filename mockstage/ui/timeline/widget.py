# mockstage/ui/timeline/widget.py
from __future__ import annotations
from typing import List, Optional, Tuple

from mockstage.qt import QtCore, QtGui, QtWidgets
from mockstage.core.logging import get_logger
from mockstage.core.model import Layer, LayerKind
from mockstage.core.temporal import (
    ClipDragMode, TemporalTransformController, TimelineGeometryError, TimelineScale,
)
from mockstage.ui.theme import GRIP_WIDTH_PX, HEADER_WIDTH_PX, RULER_HEIGHT_PX, TRACK_HEIGHT_PX, Theme
from .ruler import paint_ruler
from .transport import TransportBar


class TrackArea(QtWidgets.QWidget):
    """
    Ruler, one track per layer (topmost first) and the playhead.

    Left column: layer headers; drag one header onto another to restack.
    Right column: clips. Clip body drags move, edge grips resize, and a
    press anywhere else scrubs the playhead.
    """
    def __init__(self, store, controller: TemporalTransformController, parent=None):
        super().__init__(parent)
        self._log = get_logger(__name__)
        self.store = store
        self.controller = controller
        self._scrubbing = False
        self._header_drag: Optional[str] = None
        self._header_hover: Optional[str] = None

        self.setMouseTracking(True)
        self.setMinimumHeight(RULER_HEIGHT_PX + TRACK_HEIGHT_PX * 3)

        for sig in (store.layersChanged, store.layerChanged, store.timeChanged,
                    store.durationChanged, store.selectionChanged, store.modeChanged):
            sig.connect(lambda *_: self._refresh())

    def _refresh(self) -> None:
        self.setMinimumHeight(RULER_HEIGHT_PX + TRACK_HEIGHT_PX * max(3, len(self.store)))
        self.update()

    # ──────────────────────────────────────────────────────────────────────────
    # Geometry
    # ──────────────────────────────────────────────────────────────────────────
    def track_width(self) -> float:
        return float(self.width() - HEADER_WIDTH_PX - 8)

    def _scale(self) -> Optional[TimelineScale]:
        try:
            return TimelineScale(self.track_width(), self.store.duration)
        except TimelineGeometryError as ex:
            self._log.debug("timeline geometry unavailable: %s", ex)
            return None

    def _rows(self) -> List[Layer]:
        return self.store.layers_by_z(descending=True)

    def _row_at(self, y: float) -> Optional[Layer]:
        if y < RULER_HEIGHT_PX:
            return None
        idx = int((y - RULER_HEIGHT_PX) // TRACK_HEIGHT_PX)
        rows = self._rows()
        return rows[idx] if 0 <= idx < len(rows) else None

    def _clip_rect(self, row: int, layer: Layer, scale: TimelineScale) -> QtCore.QRectF:
        x0 = HEADER_WIDTH_PX + scale.to_pixels(layer.start_time)
        w = max(4.0, scale.to_pixels(layer.duration))
        y = RULER_HEIGHT_PX + row * TRACK_HEIGHT_PX + 3
        return QtCore.QRectF(x0, y, w, TRACK_HEIGHT_PX - 6)

    def _hit_clip(self, pos: QtCore.QPointF) -> Tuple[Optional[str], Optional[ClipDragMode]]:
        scale = self._scale()
        if scale is None:
            return None, None
        for row, layer in enumerate(self._rows()):
            r = self._clip_rect(row, layer, scale)
            if not r.contains(pos):
                continue
            if pos.x() <= r.left() + GRIP_WIDTH_PX:
                return layer.id, ClipDragMode.RESIZE_LEFT
            if pos.x() >= r.right() - GRIP_WIDTH_PX:
                return layer.id, ClipDragMode.RESIZE_RIGHT
            return layer.id, ClipDragMode.MOVE
        return None, None

    def _seek_to(self, x: float) -> None:
        scale = self._scale()
        if scale is not None:
            self.store.seek(scale.time_at(x - HEADER_WIDTH_PX))

    # ──────────────────────────────────────────────────────────────────────────
    # Pointer
    # ──────────────────────────────────────────────────────────────────────────
    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.LeftButton:
            return super().mousePressEvent(e)
        pos = e.position()

        if pos.x() < HEADER_WIDTH_PX:
            layer = self._row_at(pos.y())
            if layer is not None:
                self.store.select(layer.id)
                self._header_drag = layer.id
            e.accept()
            return

        layer_id, mode = self._hit_clip(pos)
        if layer_id is not None:
            if self.controller.begin(layer_id, mode, pos.x(), self.track_width()):
                self.grabMouse()
            e.accept()
            return

        self._scrubbing = True
        self._seek_to(pos.x())
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        pos = e.position()
        if self.controller.drag is not None:
            self.controller.move(pos.x(), self.track_width())
            e.accept()
            return
        if self._scrubbing:
            self._seek_to(pos.x())
            e.accept()
            return
        if self._header_drag is not None:
            hover = self._row_at(pos.y())
            self._header_hover = hover.id if hover is not None else None
            self.update()
            return

        _, mode = self._hit_clip(pos)
        if mode in (ClipDragMode.RESIZE_LEFT, ClipDragMode.RESIZE_RIGHT):
            self.setCursor(QtCore.Qt.SizeHorCursor)
        elif mode is ClipDragMode.MOVE:
            self.setCursor(QtCore.Qt.OpenHandCursor)
        else:
            self.setCursor(QtCore.Qt.ArrowCursor)

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if self.controller.drag is not None:
            self._end_drag()
        elif self._header_drag is not None:
            target = self._row_at(e.position().y())
            if target is not None and target.id != self._header_drag:
                self.store.move_layer(self._header_drag, target.id)
        self._scrubbing = False
        self._header_drag = None
        self._header_hover = None
        self.update()
        e.accept()

    def hideEvent(self, e: QtGui.QHideEvent) -> None:
        self._end_drag()
        super().hideEvent(e)

    def _end_drag(self) -> None:
        self.releaseMouse()
        self.controller.end()

    # ──────────────────────────────────────────────────────────────────────────
    # Painting
    # ──────────────────────────────────────────────────────────────────────────
    def paintEvent(self, ev: QtGui.QPaintEvent) -> None:
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.Antialiasing, True)
        p.fillRect(self.rect(), Theme.bg)
        scale = self._scale()
        if scale is None:
            p.end()
            return

        ruler = QtCore.QRectF(HEADER_WIDTH_PX, 0, scale.track_width_px, RULER_HEIGHT_PX)
        paint_ruler(p, ruler, scale.pixels_per_second, self.store.duration)

        sel = self.store.selected_id
        for row, layer in enumerate(self._rows()):
            y = RULER_HEIGHT_PX + row * TRACK_HEIGHT_PX
            header = QtCore.QRectF(0, y, HEADER_WIDTH_PX, TRACK_HEIGHT_PX)
            bg = Theme.panel_alt if layer.id in (sel, self._header_hover) else Theme.panel
            p.fillRect(header, bg)
            p.setPen(Theme.stroke)
            p.drawLine(QtCore.QPointF(0, y + TRACK_HEIGHT_PX), QtCore.QPointF(self.width(), y + TRACK_HEIGHT_PX))
            p.setPen(Theme.text if layer.id == sel else Theme.text_dim)
            p.drawText(header.adjusted(8, 0, -4, 0), QtCore.Qt.AlignVCenter | QtCore.Qt.AlignLeft,
                       p.fontMetrics().elidedText(layer.name, QtCore.Qt.ElideRight, HEADER_WIDTH_PX - 12))
            self._paint_clip(p, row, layer, scale, layer.id == sel)

        x = HEADER_WIDTH_PX + scale.to_pixels(self.store.current_time)
        p.setPen(QtGui.QPen(Theme.playhead, 1.5))
        p.drawLine(QtCore.QPointF(x, 0), QtCore.QPointF(x, self.height()))
        p.end()

    def _paint_clip(self, p: QtGui.QPainter, row: int, layer: Layer, scale: TimelineScale, selected: bool) -> None:
        r = self._clip_rect(row, layer, scale)
        col = QtGui.QColor(Theme.clip_frame if layer.kind is LayerKind.FRAME else Theme.clip_overlay)
        if not selected:
            col.setAlpha(170)
        p.setPen(QtGui.QPen(Theme.accent, 1.5) if selected else QtCore.Qt.NoPen)
        p.setBrush(col)
        p.drawRoundedRect(r, 4, 4)

        p.setPen(QtCore.Qt.NoPen)
        p.setBrush(QtGui.QColor(255, 255, 255, 60))
        p.drawRect(QtCore.QRectF(r.left(), r.top(), GRIP_WIDTH_PX / 2, r.height()))
        p.drawRect(QtCore.QRectF(r.right() - GRIP_WIDTH_PX / 2, r.top(), GRIP_WIDTH_PX / 2, r.height()))

        p.setBrush(Theme.keyframe)
        cy = r.center().y()
        for kf in layer.keyframes:
            kx = HEADER_WIDTH_PX + scale.to_pixels(kf.timestamp)
            diamond = QtGui.QPolygonF([
                QtCore.QPointF(kx, cy - 4), QtCore.QPointF(kx + 4, cy),
                QtCore.QPointF(kx, cy + 4), QtCore.QPointF(kx - 4, cy),
            ])
            p.drawPolygon(diamond)


class TimelineWidget(QtWidgets.QWidget):
    def __init__(self, store, controller: TemporalTransformController, parent=None):
        super().__init__(parent)
        self.transport = TransportBar(store, self)
        self.tracks = TrackArea(store, controller, self)

        scroll = QtWidgets.QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QtWidgets.QFrame.NoFrame)
        scroll.setWidget(self.tracks)

        lay = QtWidgets.QVBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.setSpacing(0)
        lay.addWidget(self.transport)
        lay.addWidget(scroll, 1)
