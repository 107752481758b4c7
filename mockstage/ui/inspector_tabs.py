# mockstage/ui/inspector_tabs.py
from __future__ import annotations
from typing import Callable, Optional

import qtawesome as qta

from mockstage.qt import QtCore, QtWidgets
from mockstage.core.dispatcher import apply_property_update
from mockstage.core.easing import EASING_LABELS, Easing
from mockstage.core.model import FramePayload, Layer, OverlayKind
from mockstage.core.presets import ANIMATION_PRESETS_IN, ANIMATION_PRESETS_OUT, DEVICE_DEFINITIONS, SHAPE_PRESETS
from mockstage.core.render_state import resolve_transform
from mockstage.core.zorder import ZDirection
from mockstage.ui.theme import Theme


def _icon_button(icon: str, fallback: str, tip: str) -> QtWidgets.QToolButton:
    b = QtWidgets.QToolButton()
    b.setAutoRaise(True)
    b.setToolTip(tip)
    try:
        b.setIcon(qta.icon(icon, color=Theme.icon_idle.name()))
    except Exception:
        b.setText(fallback)
    return b


class LayersTab(QtWidgets.QWidget):
    """Every layer, topmost first, with add / duplicate / delete / restack."""
    mediaRequested = QtCore.Signal(str)   # layer_id

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self.store = store

        self.list = QtWidgets.QListWidget()
        self.list.currentItemChanged.connect(self._on_current_changed)

        add_btn = _icon_button("fa5s.plus", "＋", "Add layer")
        add_btn.setPopupMode(QtWidgets.QToolButton.InstantPopup)
        menu = QtWidgets.QMenu(add_btn)
        frames = menu.addMenu("Device frame")
        for key, spec in DEVICE_DEFINITIONS.items():
            frames.addAction(spec["name"], lambda k=key: store.add_frame(k))
        menu.addAction("Text", lambda: store.add_overlay(OverlayKind.TEXT))
        menu.addAction("Emoji", lambda: store.add_overlay(OverlayKind.EMOJI))
        shapes = menu.addMenu("Shape")
        for value, label in SHAPE_PRESETS:
            shapes.addAction(label, lambda v=value: store.add_overlay(OverlayKind.SHAPE, v))
        menu.addAction("Image…", lambda: self._add_media(OverlayKind.IMAGE))
        menu.addAction("Video…", lambda: self._add_media(OverlayKind.VIDEO))
        add_btn.setMenu(menu)

        dup_btn = _icon_button("fa5s.clone", "⧉", "Duplicate (Ctrl+D)")
        del_btn = _icon_button("fa5s.trash", "🗑", "Delete (Del)")
        front_btn = _icon_button("fa5s.angle-double-up", "⤒", "Bring to front")
        fwd_btn = _icon_button("fa5s.angle-up", "↑", "Bring forward (])")
        bwd_btn = _icon_button("fa5s.angle-down", "↓", "Send backward ([)")
        back_btn = _icon_button("fa5s.angle-double-down", "⤓", "Send to back")
        media_btn = _icon_button("fa5s.photo-video", "🖼", "Set media…")

        dup_btn.clicked.connect(lambda: self._with_selection(store.duplicate_layer))
        del_btn.clicked.connect(lambda: self._with_selection(store.delete_layer))
        media_btn.clicked.connect(lambda: self._with_selection(self.mediaRequested.emit))
        for btn, direction in ((front_btn, ZDirection.FRONT), (fwd_btn, ZDirection.FORWARD),
                               (bwd_btn, ZDirection.BACKWARD), (back_btn, ZDirection.BACK)):
            btn.clicked.connect(lambda _=False, d=direction: self._with_selection(
                lambda lid: store.reorder_layer(lid, d)))

        bar = QtWidgets.QHBoxLayout()
        for b in (add_btn, dup_btn, del_btn, front_btn, fwd_btn, bwd_btn, back_btn, media_btn):
            bar.addWidget(b)
        bar.addStretch(1)

        lay = QtWidgets.QVBoxLayout(self)
        lay.setContentsMargins(6, 6, 6, 6)
        lay.addLayout(bar)
        lay.addWidget(self.list, 1)

        store.layersChanged.connect(self.rebuild)
        store.layerChanged.connect(lambda *_: self.rebuild())
        store.selectionChanged.connect(lambda *_: self._sync_selection())
        self.rebuild()

    def _add_media(self, kind: OverlayKind) -> None:
        layer = self.store.add_overlay(kind)
        self.mediaRequested.emit(layer.id)

    def _with_selection(self, fn: Callable[[str], object]) -> None:
        if self.store.selected_id is not None:
            fn(self.store.selected_id)

    def rebuild(self) -> None:
        self.list.blockSignals(True)
        self.list.clear()
        for layer in self.store.layers_by_z(descending=True):
            kind = "▣" if isinstance(layer.payload, FramePayload) else "◆"
            item = QtWidgets.QListWidgetItem(f"{kind}  {layer.name}")
            item.setData(QtCore.Qt.UserRole, layer.id)
            self.list.addItem(item)
        self.list.blockSignals(False)
        self._sync_selection()

    def _sync_selection(self) -> None:
        self.list.blockSignals(True)
        self.list.setCurrentRow(-1)
        for i in range(self.list.count()):
            if self.list.item(i).data(QtCore.Qt.UserRole) == self.store.selected_id:
                self.list.setCurrentRow(i)
                break
        self.list.blockSignals(False)

    def _on_current_changed(self, cur: Optional[QtWidgets.QListWidgetItem], _prev) -> None:
        self.store.select(cur.data(QtCore.Qt.UserRole) if cur is not None else None)


class PropertiesTab(QtWidgets.QWidget):
    """Name, transform and timing of the selected layer."""

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self.store = store
        self._syncing = False

        self.name_edit = QtWidgets.QLineEdit()
        self.content_edit = QtWidgets.QLineEdit()
        self.x_spin = self._spin(-10000, 10000, 1, 0)
        self.y_spin = self._spin(-10000, 10000, 1, 0)
        self.scale_spin = self._spin(0.1, 20, 0.05, 2)
        self.rot_spin = self._spin(-3600, 3600, 1, 1)
        self.opacity_spin = self._spin(0, 1, 0.05, 2)
        self.start_spin = self._spin(0, 3600, 0.1, 2)
        self.dur_spin = self._spin(0.2, 3600, 0.1, 2)

        form = QtWidgets.QFormLayout(self)
        form.addRow("Name", self.name_edit)
        form.addRow("Content", self.content_edit)
        form.addRow("X", self.x_spin)
        form.addRow("Y", self.y_spin)
        form.addRow("Scale", self.scale_spin)
        form.addRow("Rotation", self.rot_spin)
        form.addRow("Opacity", self.opacity_spin)
        form.addRow("Start", self.start_spin)
        form.addRow("Duration", self.dur_spin)

        self.name_edit.editingFinished.connect(lambda: self._static(name=self.name_edit.text()))
        self.content_edit.editingFinished.connect(lambda: self._static(content=self.content_edit.text()))
        self.x_spin.valueChanged.connect(lambda v: self._dispatch(x=v))
        self.y_spin.valueChanged.connect(lambda v: self._dispatch(y=v))
        self.scale_spin.valueChanged.connect(lambda v: self._dispatch(scale=v))
        self.rot_spin.valueChanged.connect(lambda v: self._dispatch(rotation=v))
        self.opacity_spin.valueChanged.connect(lambda v: self._dispatch(opacity=v))
        self.start_spin.valueChanged.connect(lambda _v: self._timing())
        self.dur_spin.valueChanged.connect(lambda _v: self._timing())

        for sig in (store.selectionChanged, store.layerChanged, store.timeChanged, store.modeChanged):
            sig.connect(lambda *_: self.sync())
        self.sync()

    @staticmethod
    def _spin(lo: float, hi: float, step: float, decimals: int) -> QtWidgets.QDoubleSpinBox:
        s = QtWidgets.QDoubleSpinBox()
        s.setRange(lo, hi)
        s.setSingleStep(step)
        s.setDecimals(decimals)
        s.setKeyboardTracking(False)
        return s

    def _dispatch(self, **updates) -> None:
        if not self._syncing and self.store.selected_id is not None:
            apply_property_update(self.store, self.store.selected_id, updates)

    def _static(self, **changes) -> None:
        layer = self.store.selected_layer()
        if self._syncing or layer is None:
            return
        if "content" in changes and isinstance(layer.payload, FramePayload):
            return
        self.store.update_layer(layer.id, **changes)

    def _timing(self) -> None:
        if not self._syncing and self.store.selected_id is not None:
            self.store.set_timing(self.store.selected_id, self.start_spin.value(), self.dur_spin.value())

    def sync(self) -> None:
        layer: Optional[Layer] = self.store.selected_layer()
        self.setEnabled(layer is not None)
        if layer is None:
            return
        self._syncing = True
        try:
            tf = resolve_transform(layer, self.store.current_time, self.store.mode)
            if not self.name_edit.hasFocus():
                self.name_edit.setText(layer.name)
            is_frame = isinstance(layer.payload, FramePayload)
            self.content_edit.setEnabled(not is_frame)
            if not self.content_edit.hasFocus():
                self.content_edit.setText("" if is_frame else layer.payload.content)
            self.x_spin.setValue(tf.x)
            self.y_spin.setValue(tf.y)
            self.scale_spin.setValue(tf.scale)
            self.rot_spin.setValue(tf.rotation)
            self.opacity_spin.setValue(tf.opacity)
            self.start_spin.setValue(layer.start_time)
            self.dur_spin.setValue(layer.duration)
        finally:
            self._syncing = False


class AnimationTab(QtWidgets.QWidget):
    """Active keyframe easing, clearing keyframes, and enter/exit presets."""

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self.store = store
        self._syncing = False

        self.kf_label = QtWidgets.QLabel()
        self.kf_label.setStyleSheet(f"color: {Theme.text_dim.name()};")
        self.easing_combo = QtWidgets.QComboBox()
        for kind in Easing:
            self.easing_combo.addItem(EASING_LABELS[kind], kind.value)
        self.clear_btn = QtWidgets.QPushButton("Clear keyframes")

        self.in_combo = QtWidgets.QComboBox()
        for value, label in ANIMATION_PRESETS_IN:
            self.in_combo.addItem(label, value)
        self.out_combo = QtWidgets.QComboBox()
        for value, label in ANIMATION_PRESETS_OUT:
            self.out_combo.addItem(label, value)
        self.in_dur = PropertiesTab._spin(0.1, 10, 0.1, 1)
        self.out_dur = PropertiesTab._spin(0.1, 10, 0.1, 1)

        form = QtWidgets.QFormLayout(self)
        form.addRow(self.kf_label)
        form.addRow("Easing", self.easing_combo)
        form.addRow(self.clear_btn)
        form.addRow("Enter", self.in_combo)
        form.addRow("Enter length", self.in_dur)
        form.addRow("Exit", self.out_combo)
        form.addRow("Exit length", self.out_dur)

        self.easing_combo.currentIndexChanged.connect(lambda _i: self._set_easing())
        self.clear_btn.clicked.connect(self._clear)
        self.in_combo.currentIndexChanged.connect(lambda _i: self._static(anim_in=self.in_combo.currentData()))
        self.out_combo.currentIndexChanged.connect(lambda _i: self._static(anim_out=self.out_combo.currentData()))
        self.in_dur.valueChanged.connect(lambda v: self._static(anim_in_duration=v))
        self.out_dur.valueChanged.connect(lambda v: self._static(anim_out_duration=v))

        for sig in (store.selectionChanged, store.layerChanged, store.timeChanged):
            sig.connect(lambda *_: self.sync())
        self.sync()

    def _static(self, **changes) -> None:
        if not self._syncing and self.store.selected_id is not None:
            self.store.update_layer(self.store.selected_id, **changes)

    def _set_easing(self) -> None:
        if not self._syncing and self.store.selected_id is not None:
            self.store.set_keyframe_easing(self.store.selected_id, self.easing_combo.currentData())

    def _clear(self) -> None:
        if self.store.selected_id is not None:
            self.store.clear_keyframes(self.store.selected_id)

    def sync(self) -> None:
        layer = self.store.selected_layer()
        self.setEnabled(layer is not None)
        if layer is None:
            return
        self._syncing = True
        try:
            kf = self.store.active_keyframe(layer.id)
            self.easing_combo.setEnabled(kf is not None)
            if kf is None:
                self.kf_label.setText(f"{len(layer.keyframes)} keyframe(s); none at playhead")
            else:
                self.kf_label.setText(f"{kf.property.value} = {kf.value:.2f} @ {kf.timestamp:.2f}s")
                self.easing_combo.setCurrentIndex(self.easing_combo.findData(kf.easing.value))
            self.clear_btn.setEnabled(bool(layer.keyframes))
            self.in_combo.setCurrentIndex(max(0, self.in_combo.findData(layer.anim_in)))
            self.out_combo.setCurrentIndex(max(0, self.out_combo.findData(layer.anim_out)))
            self.in_dur.setValue(layer.anim_in_duration)
            self.out_dur.setValue(layer.anim_out_duration)
        finally:
            self._syncing = False


class InspectorTabs(QtWidgets.QTabWidget):
    def __init__(self, store, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumWidth(300)
        self.setTabPosition(QtWidgets.QTabWidget.TabPosition.North)
        self.layers_tab = LayersTab(store, self)
        self.properties_tab = PropertiesTab(store, self)
        self.animation_tab = AnimationTab(store, self)
        self.addTab(self.layers_tab, "Layers")
        self.addTab(self.properties_tab, "Properties")
        self.addTab(self.animation_tab, "Animation")
