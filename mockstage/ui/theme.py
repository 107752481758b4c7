# mockstage/ui/theme.py
from mockstage.qt import QtGui, QtWidgets

GRIP_WIDTH_PX = 8
TRACK_HEIGHT_PX = 28
HEADER_WIDTH_PX = 150
RULER_HEIGHT_PX = 22


class Theme:
    bg          = QtGui.QColor("#1f2124")
    panel       = QtGui.QColor("#26292e")
    panel_alt   = QtGui.QColor("#2c3036")
    stroke      = QtGui.QColor("#3a3f46")
    text        = QtGui.QColor("#d6d7d9")
    text_dim    = QtGui.QColor("#aab0b7")
    accent      = QtGui.QColor("#3fb6ff")
    accent_dim  = QtGui.QColor("#2a90cc")
    icon_idle   = QtGui.QColor("#bfc5cc")
    icon_hover  = QtGui.QColor("#e3e6ea")
    danger      = QtGui.QColor("#e57373")

    stage       = QtGui.QColor("#111214")
    artboard    = QtGui.QColor("#f4f4f5")
    guide       = QtGui.QColor("#ec4899")
    motion_path = QtGui.QColor("#facc15")
    playhead    = QtGui.QColor("#ef4444")
    keyframe    = QtGui.QColor("#fde047")

    clip_frame   = QtGui.QColor("#3b82f6")
    clip_overlay = QtGui.QColor("#a855f7")


def qcolor_hex(c: QtGui.QColor) -> str:
    return c.name(QtGui.QColor.HexRgb)


def apply_fusion_theme(app: QtWidgets.QApplication) -> None:
    app.setStyle("Fusion")
    pal = QtGui.QPalette()
    pal.setColor(QtGui.QPalette.Window, Theme.bg)
    pal.setColor(QtGui.QPalette.Base, Theme.panel)
    pal.setColor(QtGui.QPalette.AlternateBase, Theme.panel_alt)
    pal.setColor(QtGui.QPalette.Text, Theme.text)
    pal.setColor(QtGui.QPalette.WindowText, Theme.text)
    pal.setColor(QtGui.QPalette.ButtonText, Theme.text)
    pal.setColor(QtGui.QPalette.Button, Theme.panel)
    pal.setColor(QtGui.QPalette.ToolTipBase, Theme.panel)
    pal.setColor(QtGui.QPalette.ToolTipText, Theme.text)
    pal.setColor(QtGui.QPalette.Highlight, Theme.accent)
    pal.setColor(QtGui.QPalette.HighlightedText, QtGui.QColor("#0c0d0e"))
    app.setPalette(pal)

    app.setStyleSheet(f"""
        QToolTip {{
            color: {qcolor_hex(Theme.text)};
            background-color: {qcolor_hex(Theme.panel)};
            border: 1px solid {qcolor_hex(Theme.stroke)};
        }}
        QSplitter::handle {{
            background-color: {qcolor_hex(Theme.stroke)};
        }}
        QMenu::item:selected {{
            background-color: {qcolor_hex(Theme.accent_dim)};
        }}
    """)
