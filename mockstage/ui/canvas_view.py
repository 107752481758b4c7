# mockstage/ui/canvas_view.py
from __future__ import annotations
from typing import Dict, Optional, Tuple

from mockstage.qt import QtCore, QtGui, QtWidgets
from mockstage.core.logging import get_logger
from mockstage.core.model import EditorMode, FramePayload, Layer, OverlayKind
from mockstage.core.presets import DEVICE_DEFINITIONS, SHAPE_SIZE
from mockstage.core.render_state import (
    animation_phase, is_visible, resolve_transform, sample_motion_path,
)
from mockstage.core.spatial import Corner, SpatialMode, SpatialTransformController
from mockstage.ui.theme import Theme

HANDLE_PX = 10
ROTATE_OFFSET_PX = 28
MEDIA_SIZE = (400, 300)


def layer_size(layer: Layer, metrics: Optional[QtGui.QFontMetricsF] = None) -> Tuple[float, float]:
    """Unscaled size of a layer's box in canvas units."""
    p = layer.payload
    if isinstance(p, FramePayload):
        return DEVICE_DEFINITIONS.get(p.device, DEVICE_DEFINITIONS["iphone-15"])["size"]
    if p.kind is OverlayKind.SHAPE:
        return SHAPE_SIZE
    if p.kind in (OverlayKind.IMAGE, OverlayKind.VIDEO):
        return MEDIA_SIZE
    size = float(p.style.get("fontSize", 32))
    if metrics is None:
        return max(size, len(p.content) * size * 0.6), size * 1.4
    return max(size, metrics.horizontalAdvance(p.content)), size * 1.4


class CanvasView(QtWidgets.QWidget):
    """
    Paints the artboard and its layers at the store's current time, and
    turns pointer presses on a layer body, corner handle or rotate handle
    into spatial drags.
    """
    def __init__(self, store, controller: SpatialTransformController, parent=None):
        super().__init__(parent)
        self._log = get_logger(__name__)
        self.store = store
        self.controller = controller
        self.show_motion_path = True
        self._pixmaps: Dict[str, QtGui.QPixmap] = {}

        self.setMinimumSize(480, 320)
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.StrongFocus)

        for sig in (store.layersChanged, store.canvasChanged, store.modeChanged,
                    store.selectionChanged, store.layerChanged, store.timeChanged):
            sig.connect(lambda *_: self.update())
        controller.guidesChanged.connect(lambda *_: self.update())

    # ──────────────────────────────────────────────────────────────────────────
    # Geometry
    # ──────────────────────────────────────────────────────────────────────────
    def _origin(self) -> QtCore.QPointF:
        return QtCore.QPointF(self.width() / 2.0, self.height() / 2.0)

    def _layer_transform(self, layer: Layer) -> QtGui.QTransform:
        tf = resolve_transform(layer, self.store.current_time, self.store.mode)
        zoom = self.store.canvas.zoom
        o = self._origin()
        t = QtGui.QTransform()
        t.translate(o.x() + tf.x * zoom, o.y() + tf.y * zoom)
        t.rotate(tf.rotation)
        t.scale(tf.scale * zoom, tf.scale * zoom)
        return t

    def _local_rect(self, layer: Layer) -> QtCore.QRectF:
        w, h = layer_size(layer, QtGui.QFontMetricsF(self._overlay_font(layer)))
        return QtCore.QRectF(-w / 2.0, -h / 2.0, w, h)

    def fit_to_view(self) -> None:
        c = self.store.canvas
        self.store.update_canvas(zoom=c.fit_zoom(self.width() - 2 * c.padding, self.height() - 2 * c.padding))

    def _hit(self, pos: QtCore.QPointF) -> Tuple[Optional[str], Optional[SpatialMode], Optional[Corner]]:
        order = self.store.layers_by_z(descending=True)
        sel = self.store.selected_layer()
        if sel is not None:
            order = [sel] + [l for l in order if l.id != sel.id]

        for layer in order:
            if not is_visible(layer, self.store.current_time, self.store.mode):
                continue
            t = self._layer_transform(layer)
            inv, ok = t.inverted()
            if not ok:
                continue
            local = inv.map(pos)
            rect = self._local_rect(layer)
            px = 1.0 / max(1e-6, t.m11() ** 2 + t.m12() ** 2) ** 0.5

            if sel is not None and layer.id == sel.id:
                tol = HANDLE_PX * px
                rot = QtCore.QPointF(rect.center().x(), rect.top() - ROTATE_OFFSET_PX * px)
                if QtCore.QLineF(local, rot).length() <= tol:
                    return layer.id, SpatialMode.ROTATE, None
                corners = {
                    Corner.TOP_LEFT: rect.topLeft(), Corner.TOP_RIGHT: rect.topRight(),
                    Corner.BOTTOM_LEFT: rect.bottomLeft(), Corner.BOTTOM_RIGHT: rect.bottomRight(),
                }
                for corner, pt in corners.items():
                    if QtCore.QLineF(local, pt).length() <= tol:
                        return layer.id, SpatialMode.SCALE, corner
            if rect.contains(local):
                return layer.id, SpatialMode.MOVE, None
        return None, None, None

    # ──────────────────────────────────────────────────────────────────────────
    # Pointer
    # ──────────────────────────────────────────────────────────────────────────
    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.LeftButton:
            return super().mousePressEvent(e)
        pos = e.position()
        layer_id, mode, corner = self._hit(pos)
        if layer_id is None:
            self.store.select(None)
            return
        if self.controller.begin(layer_id, mode, (pos.x(), pos.y()), corner):
            self.grabMouse()
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        pos = e.position()
        if self.controller.drag is not None:
            self.controller.move((pos.x(), pos.y()))
            e.accept()
            return
        _, mode, corner = self._hit(pos)
        if mode is SpatialMode.SCALE:
            diag = corner in (Corner.TOP_LEFT, Corner.BOTTOM_RIGHT)
            self.setCursor(QtCore.Qt.SizeFDiagCursor if diag else QtCore.Qt.SizeBDiagCursor)
        elif mode is SpatialMode.ROTATE:
            self.setCursor(QtCore.Qt.CrossCursor)
        elif mode is SpatialMode.MOVE:
            self.setCursor(QtCore.Qt.OpenHandCursor)
        else:
            self.setCursor(QtCore.Qt.ArrowCursor)

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if self.controller.drag is not None:
            self._end_drag()
            e.accept()
            return
        super().mouseReleaseEvent(e)

    def mouseDoubleClickEvent(self, e: QtGui.QMouseEvent) -> None:
        layer_id, _, _ = self._hit(e.position())
        layer = self.store.layer(layer_id)
        if layer is None or isinstance(layer.payload, FramePayload):
            return
        if layer.payload.kind not in (OverlayKind.TEXT, OverlayKind.EMOJI):
            return
        text, ok = QtWidgets.QInputDialog.getText(self, "Edit text", "Content:", text=layer.payload.content)
        if ok:
            self.store.update_layer(layer.id, content=text)

    def wheelEvent(self, e: QtGui.QWheelEvent) -> None:
        if e.modifiers() & QtCore.Qt.ControlModifier:
            self.store.zoom_by(1.1 if e.angleDelta().y() > 0 else 1 / 1.1)
            e.accept()
            return
        super().wheelEvent(e)

    def hideEvent(self, e: QtGui.QHideEvent) -> None:
        self._end_drag()
        super().hideEvent(e)

    def _end_drag(self) -> None:
        self.releaseMouse()
        self.controller.end()

    # ──────────────────────────────────────────────────────────────────────────
    # Painting
    # ──────────────────────────────────────────────────────────────────────────
    def _overlay_font(self, layer: Layer) -> QtGui.QFont:
        f = QtGui.QFont(self.font())
        if not isinstance(layer.payload, FramePayload):
            f.setPixelSize(int(layer.payload.style.get("fontSize", 32)))
        return f

    def _pixmap(self, url: Optional[str]) -> Optional[QtGui.QPixmap]:
        if not url:
            return None
        if url not in self._pixmaps:
            path = QtCore.QUrl(url).toLocalFile() or url
            pm = QtGui.QPixmap(path)
            if pm.isNull():
                self._log.debug("no preview for %s", url)
            self._pixmaps[url] = pm
        pm = self._pixmaps[url]
        return None if pm.isNull() else pm

    def paintEvent(self, ev: QtGui.QPaintEvent) -> None:
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.Antialiasing, True)
        p.fillRect(self.rect(), Theme.stage)

        c = self.store.canvas
        o = self._origin()
        board = QtCore.QRectF(o.x() - c.width * c.zoom / 2, o.y() - c.height * c.zoom / 2,
                              c.width * c.zoom, c.height * c.zoom)
        p.fillRect(board, Theme.artboard)
        p.save()
        p.setClipRect(board)

        t = self.store.current_time
        mode = self.store.mode
        for layer in self.store.layers_by_z():
            if is_visible(layer, t, mode):
                self._paint_layer(p, layer)
        p.restore()

        sel = self.store.selected_layer()
        if sel is not None and is_visible(sel, t, mode):
            if self.show_motion_path and mode is EditorMode.VIDEO:
                self._paint_motion_path(p, sel)
            self._paint_selection(p, sel)
        self._paint_guides(p, board)
        p.end()

    def _paint_layer(self, p: QtGui.QPainter, layer: Layer) -> None:
        tf = resolve_transform(layer, self.store.current_time, self.store.mode)
        opacity = tf.opacity
        xform = self._layer_transform(layer)
        phase = animation_phase(layer, self.store.current_time, self.store.mode)
        if phase is not None and phase.preset.startswith("fade"):
            span = layer.anim_in_duration if phase.phase == "enter" else layer.anim_out_duration
            edge = (self.store.current_time - layer.start_time) if phase.phase == "enter" \
                else (layer.end_time - self.store.current_time)
            opacity *= max(0.0, min(1.0, edge / max(1e-6, span)))

        p.save()
        p.setTransform(xform, True)
        p.setOpacity(max(0.0, min(1.0, opacity)))
        rect = self._local_rect(layer)
        payload = layer.payload

        if isinstance(payload, FramePayload):
            spec = DEVICE_DEFINITIONS.get(payload.device, DEVICE_DEFINITIONS["iphone-15"])
            p.setPen(QtCore.Qt.NoPen)
            p.setBrush(QtGui.QColor(spec["frame_color"]))
            p.drawRoundedRect(rect, 24, 24)
            screen = rect.adjusted(10, 10, -10, -10)
            pm = self._pixmap(payload.content_url)
            if pm is not None:
                p.drawPixmap(screen, pm, QtCore.QRectF(pm.rect()))
            else:
                p.setBrush(QtGui.QColor("#0b0b0c"))
                p.drawRoundedRect(screen, 16, 16)
        elif payload.kind is OverlayKind.SHAPE:
            p.setPen(QtCore.Qt.NoPen)
            p.setBrush(QtGui.QColor(payload.style.get("backgroundColor", "#3b82f6")))
            if payload.content == "circle":
                p.drawEllipse(rect)
            else:
                radius = float(payload.style.get("borderRadius", 0)) if payload.content == "rounded" else 0.0
                p.drawRoundedRect(rect, radius, radius)
        elif payload.kind in (OverlayKind.IMAGE, OverlayKind.VIDEO):
            pm = self._pixmap(payload.content)
            if pm is not None:
                p.drawPixmap(rect, pm, QtCore.QRectF(pm.rect()))
            else:
                p.setPen(QtGui.QPen(Theme.stroke, 2, QtCore.Qt.DashLine))
                p.setBrush(QtCore.Qt.NoBrush)
                p.drawRect(rect)
        else:
            p.setFont(self._overlay_font(layer))
            p.setPen(QtGui.QColor(payload.style.get("color", "#ffffff")))
            p.drawText(rect, QtCore.Qt.AlignCenter, payload.content)
        p.restore()

    def _paint_selection(self, p: QtGui.QPainter, layer: Layer) -> None:
        xform = self._layer_transform(layer)
        rect = self._local_rect(layer)
        poly = xform.map(QtGui.QPolygonF(rect))
        p.save()
        p.setPen(QtGui.QPen(Theme.accent, 1.5))
        p.setBrush(QtCore.Qt.NoBrush)
        p.drawPolygon(poly)

        p.setBrush(Theme.panel)
        half = HANDLE_PX / 2.0
        for i in range(4):
            pt = poly[i]
            p.drawRect(QtCore.QRectF(pt.x() - half, pt.y() - half, HANDLE_PX, HANDLE_PX))

        top_mid = xform.map(QtCore.QPointF(rect.center().x(), rect.top()))
        px = 1.0 / max(1e-6, (xform.m11() ** 2 + xform.m12() ** 2) ** 0.5)
        rot = xform.map(QtCore.QPointF(rect.center().x(), rect.top() - ROTATE_OFFSET_PX * px))
        p.drawLine(top_mid, rot)
        p.drawEllipse(rot, half, half)
        p.restore()

    def _paint_guides(self, p: QtGui.QPainter, board: QtCore.QRectF) -> None:
        guides = self.controller.guides
        if not guides:
            return
        zoom = self.store.canvas.zoom
        o = self._origin()
        p.save()
        p.setPen(QtGui.QPen(Theme.guide, 1, QtCore.Qt.DashLine))
        for g in guides:
            if g.orientation == "vertical":
                x = o.x() + g.position * zoom
                p.drawLine(QtCore.QPointF(x, board.top()), QtCore.QPointF(x, board.bottom()))
            else:
                y = o.y() + g.position * zoom
                p.drawLine(QtCore.QPointF(board.left(), y), QtCore.QPointF(board.right(), y))
        p.restore()

    def _paint_motion_path(self, p: QtGui.QPainter, layer: Layer) -> None:
        path, dots = sample_motion_path(layer)
        if not path:
            return
        zoom = self.store.canvas.zoom
        o = self._origin()
        to_screen = lambda xy: QtCore.QPointF(o.x() + xy[0] * zoom, o.y() + xy[1] * zoom)
        p.save()
        p.setPen(QtGui.QPen(Theme.motion_path, 1.5, QtCore.Qt.DashLine))
        p.drawPolyline(QtGui.QPolygonF([to_screen(pt) for pt in path]))
        p.setPen(QtCore.Qt.NoPen)
        p.setBrush(Theme.motion_path)
        for d in dots:
            p.drawEllipse(to_screen(d), 4, 4)
        p.restore()
