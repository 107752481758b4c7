# mockstage/ui/main_window.py
from __future__ import annotations
from typing import Optional

from mockstage.qt import QtCore, QtGui, QtWidgets
from app_config import APP_NAME, STEP_SECONDS, TAGLINE, version_string
from mockstage.core.config import get_settings
from mockstage.core.logging import get_logger
from mockstage.core.media import probe_media
from mockstage.core.model import (
    EditorMode, FramePayload, Layer, OverlayKind, OverlayPayload, Position, coerce_mode,
)
from mockstage.core.playback import PlaybackClock
from mockstage.core.presets import default_overlay_scale, default_overlay_style, device_name
from mockstage.core.spatial import SpatialTransformController
from mockstage.core.store import ProjectStore
from mockstage.core.temporal import TemporalTransformController
from mockstage.core.zorder import ZDirection
from mockstage.ui.canvas_view import CanvasView
from mockstage.ui.inspector_tabs import InspectorTabs
from mockstage.ui.timeline import TimelineWidget

MEDIA_FILTER = "Media Files (*.mp4 *.mov *.m4v *.webm *.mkv *.avi *.png *.jpg *.jpeg *.gif *.webp *.bmp)"


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, store: Optional[ProjectStore] = None):
        super().__init__()
        self._log = get_logger(__name__)
        self.setWindowTitle(f"{APP_NAME} {version_string()}")
        self.resize(1400, 860)
        self.settings = get_settings()

        self.store = store or ProjectStore(parent=self)
        self.clock = PlaybackClock(self.store, self)
        self.spatial = SpatialTransformController(self.store, self)
        self.temporal = TemporalTransformController(self.store, self)

        self.canvas = CanvasView(self.store, self.spatial, self)
        self.canvas.show_motion_path = self.settings.get_bool("editor/show_motion_path", True)
        self.timeline = TimelineWidget(self.store, self.temporal, self)
        self.inspector = InspectorTabs(self.store, self)
        self.inspector.layers_tab.mediaRequested.connect(self._pick_media)

        left = QtWidgets.QSplitter(QtCore.Qt.Vertical)
        left.addWidget(self.canvas)
        left.addWidget(self.timeline)
        left.setStretchFactor(0, 3)
        left.setStretchFactor(1, 1)

        splitter = QtWidgets.QSplitter()
        splitter.addWidget(left)
        splitter.addWidget(self.inspector)
        splitter.setStretchFactor(0, 1)
        self.setCentralWidget(splitter)

        start_mode = self.settings.get("editor/start_mode", EditorMode.DESIGN.value)
        mode = coerce_mode(start_mode)
        if mode.value != start_mode:
            self._log.warning("Ignoring unknown start mode %r", start_mode)
        self.store.set_mode(mode)
        self._build_menu()
        self._restore_state()
        self._dev_seed_from_config()
        QtCore.QTimer.singleShot(0, self.canvas.fit_to_view)

    # ──────────────────────────────────────────────────────────────────────────
    # Menus & shortcuts
    # ──────────────────────────────────────────────────────────────────────────
    def _action(self, menu: QtWidgets.QMenu, text: str, slot, shortcut: Optional[str] = None) -> QtGui.QAction:
        act = QtGui.QAction(text, self)
        if shortcut:
            act.setShortcut(QtGui.QKeySequence(shortcut))
        act.triggered.connect(slot)
        menu.addAction(act)
        return act

    def _hotkey(self, name: str) -> str:
        return str(self.settings.get(f"hotkeys/{name}", ""))

    def _on_selection(self, fn) -> None:
        if self.store.selected_id is not None:
            fn(self.store.selected_id)

    def _build_menu(self):
        bar = self.menuBar()
        s = self.store

        file_menu = bar.addMenu("&File")
        self._action(file_menu, "Add &Device Frame", lambda: s.add_frame())
        self._action(file_menu, "Add &Text", lambda: s.add_overlay(OverlayKind.TEXT))
        self._action(file_menu, "Set &Media…", lambda: self._on_selection(self._pick_media), "Ctrl+O")
        file_menu.addSeparator()
        self._action(file_menu, "E&xit", self.close)

        edit_menu = bar.addMenu("&Edit")
        self._action(edit_menu, "&Delete", lambda: self._on_selection(s.delete_layer), self._hotkey("delete"))
        edit_menu.actions()[-1].setShortcuts([QtGui.QKeySequence(self._hotkey("delete")),
                                              QtGui.QKeySequence("Backspace")])
        self._action(edit_menu, "D&uplicate", lambda: self._on_selection(s.duplicate_layer), self._hotkey("duplicate"))
        self._action(edit_menu, "&Copy", s.copy_selection, self._hotkey("copy"))
        self._action(edit_menu, "&Paste", s.paste, self._hotkey("paste"))
        edit_menu.addSeparator()
        self._action(edit_menu, "Bring &Forward",
                     lambda: self._on_selection(lambda lid: s.reorder_layer(lid, ZDirection.FORWARD)),
                     self._hotkey("forward"))
        self._action(edit_menu, "Send &Backward",
                     lambda: self._on_selection(lambda lid: s.reorder_layer(lid, ZDirection.BACKWARD)),
                     self._hotkey("backward"))
        self._action(edit_menu, "Bring to Front",
                     lambda: self._on_selection(lambda lid: s.reorder_layer(lid, ZDirection.FRONT)))
        self._action(edit_menu, "Send to Back",
                     lambda: self._on_selection(lambda lid: s.reorder_layer(lid, ZDirection.BACK)))
        edit_menu.addSeparator()
        self._action(edit_menu, "Clear &Keyframes", lambda: self._on_selection(s.clear_keyframes))

        view_menu = bar.addMenu("&View")
        self._action(view_menu, "&Fit Canvas", self.canvas.fit_to_view, "Ctrl+0")
        self._action(view_menu, "Zoom &In", lambda: s.zoom_by(1.1), "Ctrl+=")
        self._action(view_menu, "Zoom &Out", lambda: s.zoom_by(1 / 1.1), "Ctrl+-")
        view_menu.addSeparator()
        mp = self._action(view_menu, "Show &Motion Path", self._toggle_motion_path)
        mp.setCheckable(True)
        mp.setChecked(self.canvas.show_motion_path)
        self._action(view_menu, "&Design Mode", lambda: s.set_mode(EditorMode.DESIGN), "Ctrl+1")
        self._action(view_menu, "&Video Mode", lambda: s.set_mode(EditorMode.VIDEO), "Ctrl+2")

        help_menu = bar.addMenu("&Help")
        self._action(help_menu, "&About", lambda: QtWidgets.QMessageBox.about(
            self, APP_NAME, f"{APP_NAME} {version_string()}\n{TAGLINE}"))

    def _toggle_motion_path(self, checked: bool) -> None:
        self.canvas.show_motion_path = bool(checked)
        self.settings.set("editor/show_motion_path", bool(checked))
        self.canvas.update()

    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        # Reaches here only when the focused widget did not consume the key.
        key = e.key()
        s = self.store
        if key == QtCore.Qt.Key_Space:
            s.toggle_playing()
        elif key == QtCore.Qt.Key_Left:
            s.step(-STEP_SECONDS)
        elif key == QtCore.Qt.Key_Right:
            s.step(STEP_SECONDS)
        elif key == QtCore.Qt.Key_Up:
            s.go_to_start()
        elif key == QtCore.Qt.Key_Down:
            s.go_to_end()
        else:
            super().keyPressEvent(e)
            return
        e.accept()

    # ──────────────────────────────────────────────────────────────────────────
    # Media
    # ──────────────────────────────────────────────────────────────────────────
    def _pick_media(self, layer_id: str) -> None:
        layer = self.store.layer(layer_id)
        if layer is None:
            return
        path, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, f"Media for {layer.name}", self.settings.get("paths/last_media_dir", ""), MEDIA_FILTER)
        if not path:
            return
        self.settings.set("paths/last_media_dir", QtCore.QFileInfo(path).absolutePath())
        try:
            info = probe_media(path)
        except (OSError, ValueError) as ex:
            self._log.warning("Could not load %s: %s", path, ex)
            QtWidgets.QMessageBox.warning(self, APP_NAME, f"Could not load media:\n{ex}")
            return
        self.store.attach_media(layer_id, info)

    # ──────────────────────────────────────────────────────────────────────────
    # State
    # ──────────────────────────────────────────────────────────────────────────
    def _restore_state(self):
        g = self.settings.get("ui/main_geometry")
        if isinstance(g, QtCore.QByteArray):
            self.restoreGeometry(g)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self.store.set_playing(False)
        self.settings.set("ui/main_geometry", self.saveGeometry())
        return super().closeEvent(e)

    def _dev_seed_from_config(self) -> None:
        """
        Dev seeding controlled by app_config:
          - DEV_MODE: enable when True
          - DEV_LAYERS: list of layer dicts ("kind": "frame" | "overlay")
        """
        from app_config import DEV_MODE, DEV_LAYERS
        if not DEV_MODE or not DEV_LAYERS or len(self.store):
            return

        for spec in DEV_LAYERS:
            try:
                if spec.get("kind") == "frame":
                    device = str(spec.get("device") or "iphone-15")
                    payload = FramePayload(device=device)
                    name = str(spec.get("name") or device_name(device))
                    scale = 1.0
                else:
                    kind = OverlayKind(spec.get("overlay") or "text")
                    payload = OverlayPayload(kind=kind, content=str(spec.get("content") or ""),
                                             style=default_overlay_style(kind))
                    name = str(spec.get("name") or f"{kind.value.capitalize()} Layer")
                    scale = default_overlay_scale(kind)
                layer = Layer(
                    payload=payload,
                    name=name,
                    position=Position.coerce(spec.get("position") or (0, 0)),
                    scale=scale,
                    start_time=float(spec.get("start_time") or 0.0),
                    duration=float(spec.get("duration") or 5.0),
                    z_index=self.store.next_z_index(),
                )
            except (TypeError, ValueError) as ex:
                self._log.warning("Skipping dev layer %r: %s", spec, ex)
                continue
            self.store.add_layer(layer, select=False)
        self._log.info("Seeded %d dev layer(s)", len(self.store))
