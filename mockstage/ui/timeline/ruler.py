# mockstage/ui/timeline/ruler.py
from __future__ import annotations

from mockstage.qt import QtCore, QtGui
from mockstage.core.timecode import format_ruler_time
from mockstage.ui.theme import Theme


def major_step(px_per_sec: float) -> float:
    """Seconds between labelled ticks, widened as the track gets denser."""
    if px_per_sec < 20:
        return 5.0
    if px_per_sec < 40:
        return 2.0
    return 1.0


def paint_ruler(p: QtGui.QPainter, rect: QtCore.QRectF, px_per_sec: float, duration: float) -> None:
    """Ticks and M:SS labels along *rect*, with t=0 at rect.left()."""
    p.save()
    p.fillRect(rect, Theme.panel_alt)
    px_per_sec = max(1e-6, px_per_sec)
    s_major = major_step(px_per_sec)
    s_minor = s_major / 10.0

    p.setPen(QtGui.QPen(Theme.stroke))
    n_minor = int(duration / s_minor) + 1
    for i in range(n_minor + 1):
        x = rect.left() + i * s_minor * px_per_sec
        if x > rect.right():
            break
        p.drawLine(QtCore.QPointF(x, rect.top() + rect.height() * 0.65), QtCore.QPointF(x, rect.bottom()))

    p.setPen(QtGui.QPen(Theme.text_dim))
    font = p.font()
    font.setPointSizeF(8.0)
    p.setFont(font)
    n_major = int(duration / s_major) + 1
    for i in range(n_major + 1):
        t = i * s_major
        x = rect.left() + t * px_per_sec
        if x > rect.right():
            break
        p.drawLine(QtCore.QPointF(x, rect.top() + rect.height() * 0.35), QtCore.QPointF(x, rect.bottom()))
        p.drawText(QtCore.QPointF(x + 3, rect.top() + 11), format_ruler_time(t))
    p.restore()
