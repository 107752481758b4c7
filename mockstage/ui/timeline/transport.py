# mockstage/ui/timeline/transport.py
from __future__ import annotations

import qtawesome as qta

from mockstage.qt import QtGui, QtWidgets
from mockstage.core.model import EditorMode
from mockstage.core.timecode import format_display_time
from mockstage.ui.theme import Theme


class TransportBar(QtWidgets.QWidget):
    """Go-to-start / play-pause / go-to-end, timecode readout and mode switch."""

    def __init__(self, store, parent=None):
        super().__init__(parent)
        self.store = store

        self.start_btn = QtWidgets.QToolButton()
        self.start_btn.setToolTip("Go to start (Up)")
        self.play_btn = QtWidgets.QToolButton()
        self.play_btn.setToolTip("Play / pause (Space)")
        self.end_btn = QtWidgets.QToolButton()
        self.end_btn.setToolTip("Go to end (Down)")
        for b in (self.start_btn, self.play_btn, self.end_btn):
            b.setAutoRaise(True)

        self.time_label = QtWidgets.QLabel()
        self.time_label.setStyleSheet(f"color: {Theme.text_dim.name()}; font-family: monospace;")

        self.mode_combo = QtWidgets.QComboBox()
        self.mode_combo.addItem("Design", EditorMode.DESIGN.value)
        self.mode_combo.addItem("Video", EditorMode.VIDEO.value)

        self.duration_spin = QtWidgets.QDoubleSpinBox()
        self.duration_spin.setRange(1.0, 600.0)
        self.duration_spin.setSuffix(" s")
        self.duration_spin.setDecimals(1)
        self.duration_spin.setToolTip("Timeline length")

        lay = QtWidgets.QHBoxLayout(self)
        lay.setContentsMargins(6, 2, 6, 2)
        lay.addWidget(self.start_btn)
        lay.addWidget(self.play_btn)
        lay.addWidget(self.end_btn)
        lay.addSpacing(8)
        lay.addWidget(self.time_label)
        lay.addStretch(1)
        lay.addWidget(QtWidgets.QLabel("Length"))
        lay.addWidget(self.duration_spin)
        lay.addWidget(self.mode_combo)

        self.start_btn.clicked.connect(store.go_to_start)
        self.end_btn.clicked.connect(store.go_to_end)
        self.play_btn.clicked.connect(store.toggle_playing)
        self.mode_combo.currentIndexChanged.connect(
            lambda _i: store.set_mode(self.mode_combo.currentData()))
        self.duration_spin.editingFinished.connect(
            lambda: store.set_duration(self.duration_spin.value()))

        store.timeChanged.connect(lambda *_: self._sync_time())
        store.durationChanged.connect(lambda *_: self._sync_time())
        store.playStateChanged.connect(lambda *_: self._update_icons())
        store.modeChanged.connect(lambda *_: self._sync_mode())

        self._update_icons()
        self._sync_time()
        self._sync_mode()

    def _update_icons(self) -> None:
        """Font Awesome 5 (solid) icons; falls back to text on error."""
        col = Theme.icon_idle.name()
        playing = self.store.is_playing
        try:
            self.start_btn.setIcon(qta.icon("fa5s.step-backward", color=col))
            self.end_btn.setIcon(qta.icon("fa5s.step-forward", color=col))
            self.play_btn.setIcon(qta.icon("fa5s.pause" if playing else "fa5s.play", color=col))
            for b in (self.start_btn, self.play_btn, self.end_btn):
                b.setText("")
        except Exception:
            self.start_btn.setIcon(QtGui.QIcon()); self.start_btn.setText("⏮")
            self.end_btn.setIcon(QtGui.QIcon());   self.end_btn.setText("⏭")
            self.play_btn.setIcon(QtGui.QIcon());  self.play_btn.setText("⏸" if playing else "▶")

    def _sync_time(self) -> None:
        self.time_label.setText(
            f"{format_display_time(self.store.current_time)} / {format_display_time(self.store.duration)}")
        self.duration_spin.blockSignals(True)
        self.duration_spin.setValue(self.store.duration)
        self.duration_spin.blockSignals(False)

    def _sync_mode(self) -> None:
        idx = self.mode_combo.findData(self.store.mode.value)
        self.mode_combo.blockSignals(True)
        self.mode_combo.setCurrentIndex(idx)
        self.mode_combo.blockSignals(False)
